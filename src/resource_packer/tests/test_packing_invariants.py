import random
from collections import Counter

import pytest

from resource_packer.metrics import compute_metrics, container_fill_rates
from resource_packer.packing.first_fit import pack_multi


def random_items(seed, n, compute_capacity, storage_capacity):
    rng = random.Random(seed)
    return [(rng.randint(0, compute_capacity), rng.randint(0, storage_capacity)) for _ in range(n)]


def assert_within_capacity(containers, compute_capacity, storage_capacity):
    for c in containers:
        assert c.used_compute() <= compute_capacity
        assert c.used_storage() <= storage_capacity
        assert 0 <= c.remaining_compute() <= compute_capacity
        assert 0 <= c.remaining_storage() <= storage_capacity


@pytest.mark.parametrize("seed", range(20))
def test_random_unweighted_runs(seed):
    items = random_items(seed, 60, 10, 200)

    containers = pack_multi(items, 10, 200)

    # Every item placed exactly once
    placed = Counter(item.as_pair() for c in containers for item in c.placed_items)
    assert placed == Counter(items)
    assert_within_capacity(containers, 10, 200)
    assert all(c.placed_items for c in containers)

    metrics = compute_metrics(containers)
    assert metrics["containers"] >= metrics["lower_bound"]

    again = pack_multi(items, 10, 200)
    assert [c.placed_items for c in again] == [c.placed_items for c in containers]


def test_fill_rates():
    containers = pack_multi([(5, 50), (5, 150)], 10, 200)

    assert container_fill_rates(containers[0]) == (1.0, 1.0)


def test_metrics_for_no_containers():
    metrics = compute_metrics([])

    assert metrics["containers"] == 0
    assert metrics["lower_bound"] == 0

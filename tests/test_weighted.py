"""Weighted First-Fit-Decreasing: score ordering and effective capacity."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from resource_packer.errors import InvalidConfigurationError, UnplaceableItemError
from resource_packer.models import Weights
from resource_packer.packing.first_fit import make_weights, pack, pack_weighted, plan, sort_items

ORDERS = [(4, 100), (2, 50), (6, 150), (1, 30), (3, 80), (5, 120), (2, 60), (4, 90)]


def pairs(container):
    return [item.as_pair() for item in container.placed_items]


def assert_effective_capacity(containers, compute_capacity, storage_capacity, cw, sw):
    """Raw sums stay within capacity / weight; remaining never goes negative."""
    for c in containers:
        if cw > 0:
            assert c.used_compute() <= compute_capacity / cw + 1e-9
        if sw > 0:
            assert c.used_storage() <= storage_capacity / sw + 1e-9
        assert c.remaining_compute() >= 0
        assert c.remaining_storage() >= 0


def test_compute_leaning_weights() -> None:
    containers = pack_weighted(ORDERS, 10, 200, 0.6, 0.4)

    assert [pairs(c) for c in containers] == [
        [(6, 150), (5, 120)],
        [(4, 100), (4, 90)],
        [(3, 80), (2, 60), (2, 50)],
        [(1, 30)],
    ]
    # First container holds (11, 270) raw: over nominal capacity, clamped remaining
    assert containers[0].used_compute() == 11
    assert containers[0].remaining_compute() == 0
    assert containers[0].remaining_storage() == 0
    assert_effective_capacity(containers, 10, 200, 0.6, 0.4)


def test_different_weights_give_different_assignments() -> None:
    compute_heavy = pack_weighted(ORDERS, 10, 200, 0.6, 0.4)
    storage_heavy = pack_weighted(ORDERS, 10, 200, 0.2, 0.8)

    assert [pairs(c) for c in compute_heavy] != [pairs(c) for c in storage_heavy]
    assert pairs(storage_heavy[0]) == [(6, 150), (2, 60)]
    assert_effective_capacity(storage_heavy, 10, 200, 0.2, 0.8)

    for containers in (compute_heavy, storage_heavy):
        placed = Counter(item.as_pair() for c in containers for item in c.placed_items)
        assert placed == Counter(ORDERS)


def test_weights_change_sort_order() -> None:
    items = [(9, 10), (2, 60)]

    assert [i.as_pair() for i in sort_items(items, (0.9, 0.1))] == [(9, 10), (2, 60)]
    assert [i.as_pair() for i in sort_items(items, (0.1, 0.9))] == [(2, 60), (9, 10)]


def test_equal_scores_keep_input_order() -> None:
    items = [(2, 4), (4, 2), (3, 3)]

    assert [i.as_pair() for i in sort_items(items, (0.5, 0.5))] == [(2, 4), (4, 2), (3, 3)]
    assert [i.as_pair() for i in sort_items(items[::-1], (0.5, 0.5))] == [(3, 3), (4, 2), (2, 4)]


def test_weights_must_sum_to_one() -> None:
    with pytest.raises(InvalidConfigurationError, match="sum to 0.9"):
        pack_weighted(ORDERS, 10, 200, 0.5, 0.4)


def test_weights_checked_before_placement() -> None:
    # The oversized item would raise UnplaceableItemError if packing had started
    with pytest.raises(InvalidConfigurationError):
        pack_weighted([(500, 5000)], 10, 200, 0.5, 0.4)


@pytest.mark.parametrize("weights", [(1.2, -0.2), (-0.5, 1.5), (float("nan"), 0.5)])
def test_weights_out_of_range(weights) -> None:
    with pytest.raises(InvalidConfigurationError):
        pack(ORDERS, 10, 200, weights=weights)


@pytest.mark.parametrize("weights", [0.5, (0.5,), "ab"])
def test_weights_must_be_a_pair(weights) -> None:
    with pytest.raises(InvalidConfigurationError):
        pack(ORDERS, 10, 200, weights=weights)


def test_weight_sum_tolerance() -> None:
    w = make_weights(0.7, 0.3000001)
    assert w.compute_weight == 0.7

    with pytest.raises(InvalidConfigurationError):
        make_weights(0.7, 0.31)


def test_effective_capacity_admits_item_over_nominal() -> None:
    containers = pack_weighted([(18, 10)], 10, 200, 0.5, 0.5)

    assert len(containers) == 1
    assert containers[0].used_compute() == 18
    assert containers[0].remaining_compute() == 0


def test_item_over_effective_capacity_is_unplaceable() -> None:
    with pytest.raises(UnplaceableItemError) as excinfo:
        pack_weighted([(4, 100), (30, 10)], 10, 200, 0.5, 0.5)

    assert excinfo.value.index == 1
    assert "at weights (0.5, 0.5)" in excinfo.value.reason


def test_zero_weight_ignores_dimension() -> None:
    items = [(100, 50)] * 4 + [(100, 60)]
    containers = pack_weighted(items, 10, 200, 0.0, 1.0)

    assert [pairs(c) for c in containers] == [
        [(100, 60), (100, 50), (100, 50)],
        [(100, 50), (100, 50)],
    ]


def test_pack_accepts_weights_model_and_tuple() -> None:
    by_tuple = pack(ORDERS, 10, 200, weights=(0.6, 0.4))
    by_model = pack(ORDERS, 10, 200, weights=Weights(compute_weight=0.6, storage_weight=0.4))

    assert [pairs(c) for c in by_tuple] == [pairs(c) for c in by_model]


def test_weighted_plan_records_weights() -> None:
    result = plan(ORDERS, 10, 200, weights=(0.6, 0.4))

    assert result.strategy == "weighted"
    assert result.weights == Weights(compute_weight=0.6, storage_weight=0.4)
    assert result.container_count == 4
    # The raw-sum bound does not hold once containers can overfill
    assert result.metrics["lower_bound"] is None


@pytest.mark.parametrize("seed", range(10))
@pytest.mark.parametrize("weights", [(0.6, 0.4), (0.2, 0.8), (0.5, 0.5), (1.0, 0.0)])
def test_random_weighted_runs_respect_effective_capacity(seed, weights) -> None:
    rng = random.Random(seed)
    items = [(rng.randint(0, 10), rng.randint(0, 200)) for _ in range(40)]

    containers = pack_weighted(items, 10, 200, *weights)

    assert_effective_capacity(containers, 10, 200, *weights)
    placed = Counter(item.as_pair() for c in containers for item in c.placed_items)
    assert placed == Counter(items)


def test_item_on_effective_capacity_boundary_is_placed() -> None:
    # 51 / 0.17 == 300, but 300 * 0.17 rounds to just above 51
    containers = pack_weighted([(300, 0)], 51, 200, 0.17, 0.83)

    assert len(containers) == 1
    assert pairs(containers[0]) == [(300, 0)]
    assert containers[0].remaining_compute() == 0
    assert containers[0].remaining_storage() == 200


def test_bad_capacity_reported_before_bad_weights() -> None:
    with pytest.raises(InvalidConfigurationError, match="compute_capacity"):
        pack_weighted(ORDERS, 0, 200, 0.5, 0.4)

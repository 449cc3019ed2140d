from __future__ import annotations

import math

from resource_packer.models import Container


def container_fill_rates(container: Container) -> tuple[float, float]:
    """Raw used / capacity per dimension. Can exceed 1.0 under weighted fits."""
    compute_fill = container.used_compute() / container.compute_capacity
    storage_fill = container.used_storage() / container.storage_capacity
    return compute_fill, storage_fill


def lower_bound(total_compute: int, total_storage: int, compute_capacity: int, storage_capacity: int) -> int:
    """Trivial bin-count lower bound. Only holds for unweighted plans."""
    return max(
        math.ceil(total_compute / compute_capacity),
        math.ceil(total_storage / storage_capacity),
    )


def compute_metrics(containers: list[Container], weighted: bool = False) -> dict[str, int | float | None]:
    """Aggregate plan metrics. lower_bound is None for weighted plans, where it does not hold."""
    if not containers:
        return {
            "containers": 0,
            "items": 0,
            "total_compute": 0,
            "total_storage": 0,
            "mean_compute_fill": 0.0,
            "mean_storage_fill": 0.0,
            "lower_bound": None if weighted else 0,
        }

    total_compute = sum(c.used_compute() for c in containers)
    total_storage = sum(c.used_storage() for c in containers)
    rates = [container_fill_rates(c) for c in containers]
    first = containers[0]
    bound = None
    if not weighted:
        bound = lower_bound(total_compute, total_storage, first.compute_capacity, first.storage_capacity)

    return {
        "containers": len(containers),
        "items": sum(len(c.placed_items) for c in containers),
        "total_compute": total_compute,
        "total_storage": total_storage,
        "mean_compute_fill": sum(r[0] for r in rates) / len(rates),
        "mean_storage_fill": sum(r[1] for r in rates) / len(rates),
        "lower_bound": bound,
    }

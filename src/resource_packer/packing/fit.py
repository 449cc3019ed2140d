"""Fit tests deciding whether an item goes into a container."""

from __future__ import annotations

from resource_packer.config import Config
from resource_packer.models import DemandItem, FitTest, Weights


def fits_unweighted(remaining_compute: int, remaining_storage: int, item: DemandItem) -> bool:
    return remaining_compute >= item.compute and remaining_storage >= item.storage


def weighted_fit(weights: Weights) -> FitTest:
    """
    Build a fit test that compares remaining capacity with weighted demand.

    With a weight below 1.0 a container accepts more raw demand than its
    nominal capacity in that dimension ("effective capacity"). This is the
    intended heuristic: the placed sum stays within capacity / weight, and
    remaining capacity is reported clamped at zero.
    """
    cw = weights.compute_weight
    sw = weights.storage_weight
    # Absorbs float rounding so demand exactly at capacity / weight still fits
    tol = Config.WEIGHT_TOLERANCE

    def fits(remaining_compute: int, remaining_storage: int, item: DemandItem) -> bool:
        return (
            remaining_compute + tol >= item.compute * cw
            and remaining_storage + tol >= item.storage * sw
        )

    return fits

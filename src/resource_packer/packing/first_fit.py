# src/resource_packer/packing/first_fit.py

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from resource_packer.config import Config
from resource_packer.errors import InvalidConfigurationError, UnplaceableItemError
from resource_packer.metrics import compute_metrics
from resource_packer.models import Container, DemandItem, FitTest, PackingPlan, Weights
from resource_packer.packing.fit import fits_unweighted, weighted_fit

logger = logging.getLogger(__name__)

ItemLike = Union[DemandItem, Sequence[int]]
WeightsLike = Union[Weights, Tuple[float, float]]


def _check_capacity(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidConfigurationError(f"{name} must be a positive integer, got {value!r}")


def normalize_items(items: Iterable[ItemLike]) -> list[DemandItem]:
    """Coerce (compute, storage) pairs into DemandItem, keeping input order."""
    out: list[DemandItem] = []
    for i, raw in enumerate(items):
        try:
            out.append(DemandItem.from_pair(raw))
        except (TypeError, ValueError) as e:
            raise InvalidConfigurationError(
                f"item #{i} {raw!r} is not a valid (compute, storage) pair of non-negative integers"
            ) from e
    return out


def make_weights(compute_weight: float, storage_weight: float) -> Weights:
    """
    Build a Weights pair, failing fast on bad configuration.

    Each weight must lie in [0, 1] and the pair must sum to 1.0 within
    Config.WEIGHT_TOLERANCE.
    """
    try:
        weights = Weights(compute_weight=compute_weight, storage_weight=storage_weight)
    except ValidationError as e:
        raise InvalidConfigurationError(
            f"weights ({compute_weight!r}, {storage_weight!r}) must each be in [0, 1]"
        ) from e

    total = weights.compute_weight + weights.storage_weight
    # Written as "not <=" so a NaN weight fails too
    if not abs(total - 1.0) <= Config.WEIGHT_TOLERANCE:
        raise InvalidConfigurationError(
            f"weights ({compute_weight}, {storage_weight}) sum to {total:g}, expected 1.0"
        )
    return weights


def _coerce_weights(weights: Optional[WeightsLike]) -> Optional[Weights]:
    if weights is None:
        return None
    if isinstance(weights, Weights):
        return make_weights(weights.compute_weight, weights.storage_weight)
    try:
        compute_weight, storage_weight = weights
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationError(f"weights must be a (compute, storage) pair, got {weights!r}") from e
    return make_weights(compute_weight, storage_weight)


def sort_items(items: Iterable[ItemLike], weights: Optional[WeightsLike] = None) -> list[DemandItem]:
    """
    Order items for First-Fit-Decreasing.

    Unweighted: by (compute, storage) descending.
    Weighted: by weighted score descending; equal scores keep input order.
    """
    demand = normalize_items(items)
    return [item for _, item in _sorted_indexed(demand, _coerce_weights(weights))]


def _sorted_indexed(items: list[DemandItem], weights: Optional[Weights]) -> list[tuple[int, DemandItem]]:
    indexed = list(enumerate(items))
    if weights is None:
        return sorted(indexed, key=lambda p: p[1].as_pair(), reverse=True)
    # sorted() is stable under reverse=True, so ties stay in input order
    return sorted(indexed, key=lambda p: weights.score(p[1]), reverse=True)


def _unplaceable_reason(item: DemandItem, compute_capacity: int, storage_capacity: int,
                        weights: Optional[Weights]) -> str:
    cw = weights.compute_weight if weights else 1.0
    sw = weights.storage_weight if weights else 1.0
    tol = Config.WEIGHT_TOLERANCE if weights else 0.0
    parts = []
    if item.compute * cw > compute_capacity + tol:
        parts.append(f"compute demand {item.compute} exceeds capacity {compute_capacity}")
    if item.storage * sw > storage_capacity + tol:
        parts.append(f"storage demand {item.storage} exceeds capacity {storage_capacity}")
    if weights is not None and parts:
        parts.append(f"at weights ({cw}, {sw})")
    return ", ".join(parts)


def find_unplaceable(
    items: Sequence[DemandItem],
    compute_capacity: int,
    storage_capacity: int,
    fit_test: FitTest,
) -> list[tuple[int, DemandItem]]:
    """Items that the fit test rejects even against an empty container."""
    return [
        (i, item)
        for i, item in enumerate(items)
        if not fit_test(compute_capacity, storage_capacity, item)
    ]


def _first_fit(
    ordered: list[tuple[int, DemandItem]],
    compute_capacity: int,
    storage_capacity: int,
    fit_test: FitTest,
) -> list[Container]:
    containers: list[Container] = []

    for index, item in ordered:
        placed = False

        # Scan in creation order and take the first container that accepts
        for n, container in enumerate(containers):
            if container.try_place(item, fit_test):
                placed = True
                if Config.DEBUG:
                    logger.debug(f"item #{index} {item.as_pair()} -> container {n + 1}")
                break

        if not placed:
            container = Container(compute_capacity=compute_capacity, storage_capacity=storage_capacity)
            if not container.try_place(item, fit_test):
                # find_unplaceable runs first, so this only trips on a caller bypassing it
                raise UnplaceableItemError(item, index, compute_capacity, storage_capacity)
            containers.append(container)
            if Config.DEBUG:
                logger.debug(f"item #{index} {item.as_pair()} -> new container {len(containers)}")

    return containers


def plan(
    items: Iterable[ItemLike],
    compute_capacity: int,
    storage_capacity: int,
    weights: Optional[WeightsLike] = None,
    strict: bool = True,
) -> PackingPlan:
    """
    Run First-Fit-Decreasing over `items` and return a PackingPlan.

    - Configuration is validated before anything is placed.
    - strict=True raises UnplaceableItemError for the first item that can
      never fit; strict=False lists such items in `plan.unplaced` and packs
      the rest.
    - Deterministic: same inputs give the same containers in the same order.
    """
    _check_capacity("compute_capacity", compute_capacity)
    _check_capacity("storage_capacity", storage_capacity)
    demand = normalize_items(items)
    w = _coerce_weights(weights)
    fit_test = fits_unweighted if w is None else weighted_fit(w)

    rejected = find_unplaceable(demand, compute_capacity, storage_capacity, fit_test)
    if rejected:
        index, item = rejected[0]
        if strict:
            raise UnplaceableItemError(
                item, index, compute_capacity, storage_capacity,
                reason=_unplaceable_reason(item, compute_capacity, storage_capacity, w),
            )
        for index, item in rejected:
            logger.warning(
                f"Skipping unplaceable item #{index} {item.as_pair()}: "
                f"{_unplaceable_reason(item, compute_capacity, storage_capacity, w)}"
            )

    rejected_idx = {i for i, _ in rejected}
    ordered = [(i, item) for i, item in _sorted_indexed(demand, w) if i not in rejected_idx]

    containers = _first_fit(ordered, compute_capacity, storage_capacity, fit_test)

    strategy = "unweighted" if w is None else "weighted"
    logger.info(
        f"strategy={strategy}, items={len(demand)}, containers={len(containers)}, "
        f"unplaced={len(rejected)}"
    )

    return PackingPlan(
        strategy=strategy,
        compute_capacity=compute_capacity,
        storage_capacity=storage_capacity,
        weights=w,
        containers=containers,
        unplaced=[item for _, item in rejected],
        metrics=compute_metrics(containers, weighted=w is not None),
    )


def pack_multi(
    items: Iterable[ItemLike],
    compute_capacity: int,
    storage_capacity: int,
) -> list[Container]:
    """Unweighted multi-dimensional FFD. Raises on unplaceable items."""
    return plan(items, compute_capacity, storage_capacity).containers


def pack_weighted(
    items: Iterable[ItemLike],
    compute_capacity: int,
    storage_capacity: int,
    compute_weight: float,
    storage_weight: float,
) -> list[Container]:
    """Weighted FFD: sort by weighted score, fit against weighted demand."""
    return plan(
        items, compute_capacity, storage_capacity, weights=(compute_weight, storage_weight)
    ).containers


def pack(
    items: Iterable[ItemLike],
    compute_capacity: int,
    storage_capacity: int,
    weights: Optional[WeightsLike] = None,
) -> list[Container]:
    if weights is None:
        return pack_multi(items, compute_capacity, storage_capacity)
    return plan(items, compute_capacity, storage_capacity, weights=weights).containers

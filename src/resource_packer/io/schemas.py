"""Data schemas for input/output operations."""

from __future__ import annotations

from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, Field

from resource_packer.config import Config
from resource_packer.containers import get_container_capacity
from resource_packer.models import PackingPlan


class DemandItemSchema(BaseModel):
    """Schema for a demand item."""
    compute: int = Field(ge=0, description="Compute units demanded")
    storage: int = Field(ge=0, description="Storage units demanded")


class ContainerSchema(BaseModel):
    """Schema for container capacities."""
    compute_capacity: int = Field(gt=0, description="Compute units per container")
    storage_capacity: int = Field(gt=0, description="Storage units per container")


class WeightsSchema(BaseModel):
    """Schema for the weighted strategy. Range and sum are checked by the packer."""
    compute_weight: float = Field(description="Weight of the compute demand")
    storage_weight: float = Field(description="Weight of the storage demand")


class PackRequestSchema(BaseModel):
    """Schema for a packing request."""
    items: List[Union[DemandItemSchema, Tuple[int, int]]] = Field(
        description="Items as objects or [compute, storage] pairs"
    )
    container: Optional[ContainerSchema] = None
    container_preset: Optional[str] = None
    weights: Optional[WeightsSchema] = None
    strict: bool = Field(default=True, description="Fail on unplaceable items instead of listing them")

    def item_pairs(self) -> list[tuple[int, int]]:
        """Items as (compute, storage) pairs; the packer validates them."""
        return [
            (item.compute, item.storage) if isinstance(item, DemandItemSchema) else tuple(item)
            for item in self.items
        ]

    def capacity(self) -> tuple[int, int]:
        """Explicit container wins over container_preset, which wins over the default preset."""
        if self.container is not None:
            return (self.container.compute_capacity, self.container.storage_capacity)
        return get_container_capacity(self.container_preset or Config.DEFAULT_PRESET)

    def weight_pair(self) -> Optional[tuple[float, float]]:
        if self.weights is None:
            return None
        return (self.weights.compute_weight, self.weights.storage_weight)


class ContainerResultSchema(BaseModel):
    """Schema for one packed container."""
    index: int = Field(ge=1)
    items: List[Tuple[int, int]]
    used_compute: int
    used_storage: int
    remaining_compute: int = Field(ge=0)
    remaining_storage: int = Field(ge=0)


class PackResponseSchema(BaseModel):
    """Schema for a packing result."""
    strategy: str
    compute_capacity: int
    storage_capacity: int
    weights: Optional[WeightsSchema] = None
    container_count: int = Field(ge=0)
    containers: List[ContainerResultSchema]
    unplaced: List[Tuple[int, int]] = Field(default_factory=list)
    metrics: dict[str, Optional[Union[int, float]]] = Field(default_factory=dict)


def plan_to_response(plan: PackingPlan) -> PackResponseSchema:
    weights = None
    if plan.weights is not None:
        weights = WeightsSchema(
            compute_weight=plan.weights.compute_weight,
            storage_weight=plan.weights.storage_weight,
        )
    return PackResponseSchema(
        strategy=plan.strategy,
        compute_capacity=plan.compute_capacity,
        storage_capacity=plan.storage_capacity,
        weights=weights,
        container_count=plan.container_count,
        containers=[
            ContainerResultSchema(
                index=i + 1,
                items=[item.as_pair() for item in c.placed_items],
                used_compute=c.used_compute(),
                used_storage=c.used_storage(),
                remaining_compute=c.remaining_compute(),
                remaining_storage=c.remaining_storage(),
            )
            for i, c in enumerate(plan.containers)
        ],
        unplaced=[item.as_pair() for item in plan.unplaced],
        metrics=plan.metrics,
    )

from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class DemandItem(BaseModel):
    """A request for compute units and storage units."""

    # strict: no bools, numeric strings or floats sneaking in as demand
    model_config = ConfigDict(frozen=True, strict=True)

    compute: int = Field(ge=0, description="Compute units demanded")
    storage: int = Field(ge=0, description="Storage units demanded")

    @classmethod
    def from_pair(cls, pair: Union["DemandItem", Sequence[int]]) -> "DemandItem":
        if isinstance(pair, DemandItem):
            return pair
        compute, storage = pair
        return cls(compute=compute, storage=storage)

    def as_pair(self) -> Tuple[int, int]:
        return (self.compute, self.storage)


class Weights(BaseModel):
    """Relative priority of the compute and storage dimensions."""

    model_config = ConfigDict(frozen=True)

    compute_weight: float = Field(ge=0, le=1, description="Weight of the compute demand")
    storage_weight: float = Field(ge=0, le=1, description="Weight of the storage demand")

    def score(self, item: DemandItem) -> float:
        return item.compute * self.compute_weight + item.storage * self.storage_weight


# (remaining_compute, remaining_storage, item) -> accept?
FitTest = Callable[[int, int, DemandItem], bool]


class Container(BaseModel):
    """Fixed-capacity holder for demand items."""

    compute_capacity: int = Field(gt=0, description="Compute units per container")
    storage_capacity: int = Field(gt=0, description="Storage units per container")
    placed_items: list[DemandItem] = Field(default_factory=list)

    def used_compute(self) -> int:
        return sum(item.compute for item in self.placed_items)

    def used_storage(self) -> int:
        return sum(item.storage for item in self.placed_items)

    def remaining_compute(self) -> int:
        # Weighted fits can push the raw sum past capacity; never go negative.
        return max(0, self.compute_capacity - self.used_compute())

    def remaining_storage(self) -> int:
        return max(0, self.storage_capacity - self.used_storage())

    def try_place(self, item: DemandItem, fit_test: FitTest) -> bool:
        """Append `item` if `fit_test` accepts it against the remaining capacity."""
        if not fit_test(self.remaining_compute(), self.remaining_storage(), item):
            return False
        self.placed_items.append(item)
        return True


class PackingPlan(BaseModel):
    """Result of a packing run, including items rejected as unplaceable."""

    strategy: str = Field(description="'unweighted' or 'weighted'")
    compute_capacity: int = Field(gt=0)
    storage_capacity: int = Field(gt=0)
    weights: Optional[Weights] = None
    containers: list[Container] = Field(default_factory=list)
    unplaced: list[DemandItem] = Field(default_factory=list)
    metrics: dict[str, Optional[Union[int, float]]] = Field(default_factory=dict)

    @property
    def container_count(self) -> int:
        return len(self.containers)

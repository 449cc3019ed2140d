from __future__ import annotations

from typing import Optional

from resource_packer.cli import print_plan
from resource_packer.logger import get_logger
from resource_packer.models import DemandItem
from resource_packer.packing.first_fit import plan

# Sample orders: (compute units, storage units)
SAMPLE_ITEMS = [
    (4, 100),
    (2, 50),
    (6, 150),
    (1, 30),
    (3, 80),
    (5, 120),
    (2, 60),
    (4, 90),
]
COMPUTE_CAPACITY = 10
STORAGE_CAPACITY = 200


def run_case(items: list[DemandItem], weights: Optional[tuple[float, float]] = None) -> int:
    print("\n" + "=" * 60)
    label = "unweighted" if weights is None else f"weights {weights}"
    print(f"📦 CAPACITY: ({COMPUTE_CAPACITY}, {STORAGE_CAPACITY}), {label}")

    result = plan(items, COMPUTE_CAPACITY, STORAGE_CAPACITY, weights=weights)
    print_plan(result)
    return result.container_count


def main() -> None:
    get_logger()
    items = [DemandItem.from_pair(p) for p in SAMPLE_ITEMS]

    for weights in (None, (0.6, 0.4), (0.2, 0.8)):
        run_case(items, weights)


if __name__ == "__main__":
    main()

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from resource_packer.containers import get_container_capacity
from resource_packer.errors import InvalidConfigurationError, PackingError
from resource_packer.io.schemas import PackRequestSchema, plan_to_response
from resource_packer.logger import get_logger
from resource_packer.models import Container, PackingPlan
from resource_packer.packing.first_fit import plan

logger = logging.getLogger(__name__)


def load_input(path: Path) -> PackRequestSchema:
    data = json.loads(path.read_text(encoding="utf-8"))
    return PackRequestSchema.model_validate(data)


def resolve_weights(args: argparse.Namespace, request: PackRequestSchema) -> Optional[tuple[float, float]]:
    """
    Flags win over the input file. With no --mode, weights present anywhere
    select the weighted strategy.
    """
    flag_weights = (args.compute_weight, args.storage_weight)
    if any(w is not None for w in flag_weights):
        if any(w is None for w in flag_weights):
            raise InvalidConfigurationError("--compute-weight and --storage-weight must be given together")
        weights = flag_weights
    else:
        weights = request.weight_pair()

    if args.mode == "unweighted":
        return None
    if args.mode == "weighted" and weights is None:
        raise InvalidConfigurationError("weighted mode needs weights in the input file or on the command line")
    return weights


def format_container(n: int, container: Container) -> str:
    items = ", ".join(str(item.as_pair()) for item in container.placed_items)
    return (
        f"Container {n}: [{items}], "
        f"Remaining Compute: {container.remaining_compute()}, "
        f"Remaining Storage: {container.remaining_storage()}"
    )


def print_plan(result: PackingPlan) -> None:
    for i, container in enumerate(result.containers, start=1):
        print(format_container(i, container))

    if result.unplaced:
        print("❌ Unplaced :", [item.as_pair() for item in result.unplaced])

    m = result.metrics
    bound = m.get("lower_bound")
    bound_text = f" (lower bound {bound})" if bound is not None else ""
    print(
        f"📊 {result.strategy}: {result.container_count} containers{bound_text}, "
        f"compute fill {m.get('mean_compute_fill', 0.0) * 100:.1f}%, "
        f"storage fill {m.get('mean_storage_fill', 0.0) * 100:.1f}%"
    )


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Resource Packer CLI")
    parser.add_argument("--input", required=True, help="Input request JSON file")
    parser.add_argument("--output", help="Output plan JSON file")
    parser.add_argument(
        "--mode",
        choices=["unweighted", "weighted"],
        default=None,
        help="unweighted = raw (compute, storage) order, weighted = weighted score order and fit; "
             "default picks weighted when weights are given",
    )
    parser.add_argument("--compute-weight", type=float, default=None, help="Weight of compute demand")
    parser.add_argument("--storage-weight", type=float, default=None, help="Weight of storage demand")
    parser.add_argument("--preset", help="Container preset, overrides the capacities in the input file")
    parser.add_argument(
        "--allow-unplaced",
        action="store_true",
        help="List items that can never fit instead of failing",
    )

    args = parser.parse_args(argv)
    get_logger()

    try:
        request = load_input(Path(args.input))
        if args.preset:
            compute_capacity, storage_capacity = get_container_capacity(args.preset)
        else:
            compute_capacity, storage_capacity = request.capacity()

        result = plan(
            request.item_pairs(),
            compute_capacity,
            storage_capacity,
            weights=resolve_weights(args, request),
            strict=request.strict and not args.allow_unplaced,
        )
    except (PackingError, ValueError) as e:
        logger.error(f"Packing failed: {e}")
        print(f"❌ {e}", file=sys.stderr)
        return 1

    print_plan(result)

    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        with open(out_path, "w", encoding="utf-8") as f:
            json.dump(plan_to_response(result).model_dump(), f, indent=2, sort_keys=True)
        print(f"✅ Wrote {out_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

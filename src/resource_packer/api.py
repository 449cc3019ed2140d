"""FastAPI endpoint for the resource packer."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Response

from resource_packer.errors import InvalidConfigurationError, UnplaceableItemError
from resource_packer.io.schemas import PackRequestSchema, PackResponseSchema, plan_to_response
from resource_packer.logger import get_logger
from resource_packer.packing.first_fit import plan

get_logger()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Resource Packer API",
    description="First-Fit-Decreasing placement of compute/storage demand onto containers",
)


def _error_response(code: str, summary: str, details: dict[str, Any] | None = None) -> Response:
    body = {"error": code, "summary": summary, "details": details or {}}
    return Response(content=json.dumps(body), status_code=422, media_type="application/json")


@app.post("/pack", response_model=PackResponseSchema)
async def pack_endpoint(request: PackRequestSchema):
    """
    Pack demand items into containers.

    Input (request body):
        {
            "items": [[4, 100], {"compute": 2, "storage": 50}],
            "container": {"compute_capacity": 10, "storage_capacity": 200},
            "weights": {"compute_weight": 0.6, "storage_weight": 0.4},
            "strict": true
        }

    Returns:
        PackResponseSchema, or a 422 body with error INVALID_CONFIGURATION /
        UNPLACEABLE_ITEM.
    """
    try:
        compute_capacity, storage_capacity = request.capacity()

        result = plan(
            request.item_pairs(),
            compute_capacity,
            storage_capacity,
            weights=request.weight_pair(),
            strict=request.strict,
        )
        response = plan_to_response(result)

        logger.info(
            f"containers={response.container_count}, "
            f"items={len(request.items)}, unplaced={len(response.unplaced)}"
        )
        return response

    except (InvalidConfigurationError, ValueError) as e:
        # ValueError also covers an unknown container_preset
        logger.warning(f"Rejected /pack request: {e}")
        return _error_response("INVALID_CONFIGURATION", str(e))
    except UnplaceableItemError as e:
        logger.warning(f"Rejected /pack request: {e}")
        return _error_response(
            "UNPLACEABLE_ITEM",
            str(e),
            {"index": e.index, "item": list(e.item.as_pair()), "reason": e.reason},
        )
    except Exception as e:
        logger.error(f"ERROR in /pack endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/health")
async def health() -> dict[str, Any]:
    """Health check endpoint."""
    return {"ok": True}

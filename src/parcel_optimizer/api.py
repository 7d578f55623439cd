"""FastAPI endpoint for parcel optimizer."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware

from parcel_optimizer.config import configure_logging, get_catalog, get_settings
from parcel_optimizer.io.schemas import BoxTypeSchema, ItemLineSchema, OptimizeRequestSchema
from parcel_optimizer.models import CartLine
from parcel_optimizer.planner import Plan, build_plan, format_summary, plan_for_store
from parcel_optimizer.products import search_products
from parcel_optimizer.store import CartStore

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(
    title="Parcel Optimizer API",
    description="Box packing and carbon metrics for shopping carts",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,
)


class UnknownProductError(ValueError):
    pass


def to_cart_lines(lines: list[ItemLineSchema]) -> list[CartLine]:
    cart_lines = []
    for line in lines:
        try:
            cart_lines.append(line.to_cart_line())
        except ValueError as e:
            raise UnknownProductError(str(e)) from e
    return cart_lines


def format_output(plan: Plan) -> dict[str, Any]:
    """
    Format plan output with guaranteed fields and user-friendly summary.
    """
    metrics = plan.metrics
    return {
        "metrics": {
            "packaging_efficiency": round(metrics.packaging_efficiency, 1),
            "carbon_impact": round(metrics.carbon_impact, 3),
            "carbon_saved": round(metrics.carbon_saved, 3),
            "container_count": metrics.container_count,
            "breakdown": metrics.breakdown,
            "units_packed": sum(len(c.items) for c in plan.result.containers),
            "units_unpacked": len(plan.result.unpacked),
        },
        "summary": format_summary(plan),
        "plan": plan.model_dump(mode="json"),
    }


def _error_response(error: str, summary: str, details: list[str]) -> Response:
    return Response(
        content=json.dumps({"error": error, "summary": summary, "details": details}),
        status_code=422,
        media_type="application/json",
    )


@app.post("/optimize")
async def optimize(request: OptimizeRequestSchema) -> Any:
    """
    Pack the order and suggest saved items that ride along for free.

    Input (request body):
        {
            "items": [{"product_id": "book", "qty": 1},
                      {"id": "lamp", "l": 30, "w": 20, "h": 20, "weight": 1.2, "qty": 1}],
            "deferred": [{"product_id": "mug", "qty": 2}]
        }

    Returns:
        Response with metrics, summary, and plan
    """
    try:
        try:
            cart_lines = to_cart_lines(request.items)
            deferred_lines = to_cart_lines(request.deferred)
        except UnknownProductError as e:
            return _error_response("UNKNOWN_PRODUCT", "⚠️ Unknown product in request", [str(e)])

        cart_items = [item for line in cart_lines for item in line.expand()]
        plan = build_plan(cart_items, deferred_lines, catalog=get_catalog(settings), settings=settings)
        response = format_output(plan)

        logger.info(
            f"units_packed={response['metrics']['units_packed']}, "
            f"units_unpacked={response['metrics']['units_unpacked']}, "
            f"boxes={response['metrics']['container_count']}"
        )
        return response

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"ERROR in /optimize endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/cart/plan")
async def cart_plan() -> dict[str, Any]:
    """Plan for the persisted cart state."""
    try:
        store = CartStore.load(settings.store_path)
        return format_output(plan_for_store(store, catalog=get_catalog(settings), settings=settings))
    except Exception as e:
        logger.error(f"ERROR in /cart/plan endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/catalog")
async def catalog() -> list[BoxTypeSchema]:
    return [
        BoxTypeSchema(short_name=box_type.short_name, **box_type.model_dump())
        for box_type in get_catalog(settings)
    ]


@app.get("/products")
async def products(search: str = Query("", description="Case-insensitive name filter")) -> list[dict[str, Any]]:
    return [item.model_dump() for item in search_products(search)]


@app.get("/health")
async def health() -> dict[str, Any]:
    """Health check endpoint."""
    return {"ok": True}

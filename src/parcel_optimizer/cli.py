from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

from parcel_optimizer.config import configure_logging, get_catalog, get_settings
from parcel_optimizer.io.schemas import OptimizeRequestSchema
from parcel_optimizer.models import CartLine
from parcel_optimizer.planner import build_plan, format_summary

logger = logging.getLogger(__name__)


def load_input(path: Path) -> tuple[list[CartLine], list[CartLine]]:
    """
    Read a cart file:
        {"items": [{"product_id": "book", "qty": 1}, ...],
         "deferred": [{"product_id": "mug", "qty": 2}, ...]}
    Lines may also be explicit: {"id", "name", "l", "w", "h", "weight", "qty"}.
    """
    request = OptimizeRequestSchema.model_validate_json(path.read_text(encoding="utf-8"))
    cart_lines = [line.to_cart_line() for line in request.items]
    deferred_lines = [line.to_cart_line() for line in request.deferred]
    return cart_lines, deferred_lines


def write_plan(plan: dict, path: str = "plan.json") -> None:
    """
    Write a plan dictionary to a JSON file.

    Creates parent folders if needed, writes JSON with indent=2 and sort_keys=True,
    and overwrites the file on every run.
    """
    output_path = Path(path).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    logger.debug(f"write_plan: writing to {output_path}")
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(plan, f, indent=2, sort_keys=True)


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Parcel Optimizer CLI")
    parser.add_argument("--input", required=True, help="Input cart JSON file")
    parser.add_argument("--output", required=True, help="Output plan JSON file")
    parser.add_argument(
        "--mode",
        choices=["pack", "suggest"],
        default="suggest",
        help="pack = boxes and metrics only, suggest = also evaluate saved-for-later items",
    )
    parser.add_argument("--catalog", help="JSON file with custom box types (overrides PARCEL_OPTIMIZER_CATALOG)")
    parser.add_argument("--log-level", help="Logging level (overrides PARCEL_OPTIMIZER_LOG_LEVEL)")

    args = parser.parse_args(argv)

    settings = get_settings()
    if args.catalog:
        settings = settings.model_copy(update={"catalog_path": Path(args.catalog)})
    configure_logging(args.log_level or settings.log_level)

    cart_lines, deferred_lines = load_input(Path(args.input))
    if args.mode == "pack":
        deferred_lines = []

    cart_items = [item for line in cart_lines for item in line.expand()]
    logger.info(f"mode={args.mode}, units={len(cart_items)}, deferred_lines={len(deferred_lines)}")

    plan = build_plan(cart_items, deferred_lines, catalog=get_catalog(settings), settings=settings)

    write_plan(plan.model_dump(mode="json"), args.output)
    print(format_summary(plan))


if __name__ == "__main__":
    main()

"""Runtime settings; loads .env locally via python-dotenv."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from parcel_optimizer.containers import DEFAULT_CATALOG, ContainerCatalog, load_catalog

# Does not override variables already set in the environment
load_dotenv()


class Settings(BaseModel):
    catalog_path: Optional[Path] = Field(default=None, description="JSON file with custom box types")
    store_path: Path = Field(default=Path("cart_state.json"), description="Where the cart state is kept")
    log_level: str = "INFO"
    min_carbon_saving: float = Field(default=0.01, ge=0)
    min_efficiency_gain: float = Field(default=0.1, ge=0)


def get_settings() -> Settings:
    values: dict[str, str] = {}
    env_map = {
        "catalog_path": "PARCEL_OPTIMIZER_CATALOG",
        "store_path": "PARCEL_OPTIMIZER_STORE",
        "log_level": "PARCEL_OPTIMIZER_LOG_LEVEL",
        "min_carbon_saving": "PARCEL_OPTIMIZER_MIN_CARBON_SAVING",
        "min_efficiency_gain": "PARCEL_OPTIMIZER_MIN_EFFICIENCY_GAIN",
    }
    for field_name, env_name in env_map.items():
        value = os.getenv(env_name)
        if value:
            values[field_name] = value
    return Settings(**values)


def get_catalog(settings: Optional[Settings] = None) -> ContainerCatalog:
    settings = settings or get_settings()
    if settings.catalog_path is None:
        return DEFAULT_CATALOG
    return load_catalog(settings.catalog_path)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

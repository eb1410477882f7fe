"""TOML configuration loader."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .db.base import DEFAULT_DB_PATH
from .db.kitchen import DEFAULT_SHELF_DAYS
from .models import DEFAULT_CATEGORIES
from .views import PREVIEW_LIMIT, WARNING_DAYS

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

DB_PATH_ENV = "LIVINGSOLO_DB_PATH"


@dataclass
class DatabaseConfig:
    path: str = DEFAULT_DB_PATH


@dataclass
class KitchenConfig:
    default_categories: list[str] = field(
        default_factory=lambda: list(DEFAULT_CATEGORIES)
    )
    preview_limit: int = PREVIEW_LIMIT
    warning_days: int = WARNING_DAYS
    default_shelf_days: int = DEFAULT_SHELF_DAYS


@dataclass
class BudgetConfig:
    currency: str = "£"


@dataclass
class AppConfig:
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    kitchen: KitchenConfig = field(default_factory=KitchenConfig)
    budget: BudgetConfig = field(default_factory=BudgetConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    The database path can be overridden via the LIVINGSOLO_DB_PATH
    environment variable.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    dbs = raw.get("database", {})
    kit = raw.get("kitchen", {})
    bud = raw.get("budget", {})

    # Resolve database path: environment variable → config file → default
    db_path = os.environ.get(DB_PATH_ENV, "") or dbs.get("path", DEFAULT_DB_PATH)

    return AppConfig(
        database=DatabaseConfig(path=db_path),
        kitchen=KitchenConfig(
            default_categories=kit.get(
                "default_categories", list(DEFAULT_CATEGORIES)
            ),
            preview_limit=kit.get("preview_limit", PREVIEW_LIMIT),
            warning_days=kit.get("warning_days", WARNING_DAYS),
            default_shelf_days=kit.get("default_shelf_days", DEFAULT_SHELF_DAYS),
        ),
        budget=BudgetConfig(
            currency=bud.get("currency", "£"),
        ),
    )

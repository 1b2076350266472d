from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pandas as pd

from ..taxonomy.tags import suggest_tags
from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .data_store import CANONICAL_COLUMNS, split_tags

logger = logging.getLogger(__name__)

_MISSING = ("", "-")


def _as_float(value: Any) -> float | None:
    if value is None or (isinstance(value, str) and value.strip() in _MISSING):
        return None
    # Some exports use a comma as decimal separator ("5,4")
    try:
        result = float(str(value).replace(",", "."))
    except (TypeError, ValueError):
        return None
    return None if pd.isna(result) else result


def _as_int(value: Any) -> int | None:
    result = _as_float(value)
    return int(result) if result is not None else None


def _as_str(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, float) and pd.isna(value):
        return None
    text = str(value).strip()
    return None if text in _MISSING else text


def _tags_for(item: dict[str, Any]) -> list[str]:
    tags = split_tags(item.get("tags"))
    if tags:
        return tags
    specs = item.get("specs") or {}
    return suggest_tags(
        body=_as_str(item.get("body")),
        fuel=_as_str(item.get("fuel")),
        horsepower=_as_float(specs.get("horsepower")),
        drivetrain=_as_str(specs.get("drivetrain") or item.get("drivetrain")),
    )


def normalize_records(items: list[dict[str, Any]]) -> pd.DataFrame:
    """Map raw car export entries onto the canonical catalog columns."""
    rows: list[dict[str, Any]] = []
    for item in items:
        score = item.get("quality_score", item.get("score_total"))
        rows.append({
            "id": _as_str(item.get("id")),
            "brand": _as_str(item.get("brand")),
            "model": _as_str(item.get("model")),
            "trim": _as_str(item.get("trim")),
            "year": _as_int(item.get("year")),
            "body": _as_str(item.get("body")),
            "fuel": _as_str(item.get("fuel")),
            "price": _as_int(item.get("price")),
            "tags": ", ".join(_tags_for(item)),
            "quality_score": _as_float(score) or 0.0,
        })

    canonical = pd.DataFrame(rows, columns=CANONICAL_COLUMNS)

    valid = canonical["id"].notna() & canonical["price"].notna()
    dropped = int((~valid).sum())
    if dropped:
        logger.warning("Dropped %d catalog rows without id or price", dropped)

    canonical = canonical.loc[valid].copy()
    canonical["price"] = canonical["price"].astype(int)
    canonical["year"] = canonical["year"].astype("Int64")
    return canonical.reset_index(drop=True)


def run_ingestion(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> Path:
    """
    Build the processed catalog from the raw car export.

    Steps:
    - Read the raw JSON list of cars.
    - Coerce numeric fields and fill missing tags with rule-based suggestions.
    - Persist the canonical catalog as CSV.
    """
    config.processed_data_dir.mkdir(parents=True, exist_ok=True)

    items = json.loads(config.raw_path.read_text(encoding="utf-8"))
    canonical = normalize_records(items)

    output_path = config.processed_path
    canonical.to_csv(output_path, index=False)
    logger.info("Wrote %d catalog rows to %s", len(canonical), output_path)
    return output_path


if __name__ == "__main__":
    path = run_ingestion()
    print(f"Ingestion complete. Processed catalog saved to: {path}")

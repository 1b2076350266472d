from __future__ import annotations

from pathlib import Path

import pandas as pd

from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig

CANONICAL_COLUMNS: list[str] = [
    "id",
    "brand",
    "model",
    "trim",
    "year",
    "body",
    "fuel",
    "price",
    "tags",
    "quality_score",
]

_df: pd.DataFrame | None = None


def split_tags(raw: object) -> list[str]:
    if isinstance(raw, list):
        return [str(t).strip() for t in raw if str(t).strip()]
    if raw is None or (isinstance(raw, float) and pd.isna(raw)):
        return []
    return [t.strip() for t in str(raw).split(",") if t.strip()]


def prepare_dataframe(df: pd.DataFrame) -> pd.DataFrame:
    """Add the parsed and lowercased helper columns used for querying."""
    df = df.copy()
    for col in CANONICAL_COLUMNS:
        if col not in df.columns:
            df[col] = pd.NA

    df["id"] = df["id"].astype(str)
    df["price"] = pd.to_numeric(df["price"], errors="coerce")
    df["quality_score"] = pd.to_numeric(df["quality_score"], errors="coerce").fillna(0.0)

    # Pre-parse tags into lists for matching
    df["tags_list"] = df["tags"].apply(split_tags)

    # Lowercase body and fuel for case-insensitive lookup
    df["body_lower"] = df["body"].fillna("").astype(str).str.lower()
    df["fuel_lower"] = df["fuel"].fillna("").astype(str).str.lower()

    return df


def _load(path: Path) -> pd.DataFrame:
    return prepare_dataframe(pd.read_csv(path, dtype={"id": str}))


def get_dataframe(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> pd.DataFrame:
    """Return the in-memory catalog DataFrame, loading it on first call."""
    global _df
    if _df is None:
        _df = _load(config.catalog_path)
    return _df


def reset_dataframe() -> None:
    global _df
    _df = None

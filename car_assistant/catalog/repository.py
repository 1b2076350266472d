from __future__ import annotations

from typing import Any, Protocol

import pandas as pd
from pydantic import BaseModel

from ..recommendations.models import VehicleRecord
from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .data_store import get_dataframe, prepare_dataframe


class CatalogQuery(BaseModel):
    """Hard filters pushed down to the catalog. ``None`` matches everything."""

    max_price: float | None = None
    body_type_contains: str | None = None
    fuel_type_starts_with: str | None = None


class Catalog(Protocol):
    def query(self, filters: CatalogQuery) -> list[VehicleRecord]: ...

    def get(self, vehicle_id: str) -> VehicleRecord | None: ...


def _value(raw: Any) -> Any:
    if raw is None or raw is pd.NA:
        return None
    try:
        if pd.isna(raw):
            return None
    except (TypeError, ValueError):
        pass
    return raw


def _row_to_record(row: pd.Series) -> VehicleRecord:
    year = _value(row.get("year"))
    return VehicleRecord(
        id=str(row["id"]),
        brand=_value(row.get("brand")),
        model=_value(row.get("model")),
        trim=_value(row.get("trim")),
        year=int(year) if year is not None else None,
        price=int(row["price"]),
        body_type=_value(row.get("body")) or "",
        fuel_type=_value(row.get("fuel")) or "",
        tags=list(row.get("tags_list") or []),
        quality_score=float(_value(row.get("quality_score")) or 0.0),
    )


class DataFrameCatalog:
    """Catalog backed by the processed catalog DataFrame.

    Filters are case-insensitive and results keep catalog order.
    """

    def __init__(
        self,
        df: pd.DataFrame | None = None,
        config: CatalogConfig = DEFAULT_CATALOG_CONFIG,
    ) -> None:
        self._df = prepare_dataframe(df) if df is not None else None
        self._config = config

    @classmethod
    def from_records(cls, records: list[VehicleRecord]) -> DataFrameCatalog:
        rows = [
            {
                "id": r.id,
                "brand": r.brand,
                "model": r.model,
                "trim": r.trim,
                "year": r.year,
                "body": r.body_type,
                "fuel": r.fuel_type,
                "price": r.price,
                "tags": list(r.tags),
                "quality_score": r.quality_score,
            }
            for r in records
        ]
        return cls(pd.DataFrame(rows))

    @property
    def dataframe(self) -> pd.DataFrame:
        if self._df is None:
            self._df = get_dataframe(self._config)
        return self._df

    def query(self, filters: CatalogQuery) -> list[VehicleRecord]:
        df = self.dataframe
        mask = df["price"].notna()

        if filters.max_price is not None:
            mask = mask & (df["price"] <= filters.max_price)

        if filters.body_type_contains:
            mask = mask & df["body_lower"].str.contains(
                filters.body_type_contains.lower(), regex=False, na=False
            )

        if filters.fuel_type_starts_with:
            mask = mask & df["fuel_lower"].str.startswith(
                filters.fuel_type_starts_with.lower(), na=False
            )

        return [_row_to_record(row) for _, row in df.loc[mask].iterrows()]

    def get(self, vehicle_id: str) -> VehicleRecord | None:
        df = self.dataframe
        match = df.loc[df["id"] == str(vehicle_id)]
        if match.empty:
            return None
        return _row_to_record(match.iloc[0])


_catalog: DataFrameCatalog | None = None


def get_catalog() -> DataFrameCatalog:
    """Return the process-wide catalog over the configured CSV."""
    global _catalog
    if _catalog is None:
        _catalog = DataFrameCatalog()
    return _catalog

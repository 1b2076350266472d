import json
from pathlib import Path

import pandas as pd

from car_assistant.catalog.config import CatalogConfig
from car_assistant.catalog.data_store import CANONICAL_COLUMNS
from car_assistant.catalog.ingest import normalize_records, run_ingestion
from car_assistant.catalog.repository import DataFrameCatalog

RAW_CARS = [
    {"id": "t1", "brand": "Toyota", "model": "C-HR", "year": "2024", "body": "SUV",
     "fuel": "Hybrid", "price": "1650000", "tags": ["Safety", "Comfort"], "score_total": "8,5"},
    {"id": "d1", "brand": "Dacia", "model": "Duster", "year": 2024, "body": "SUV",
     "fuel": "Diesel", "price": 1290000, "tags": [], "specs": {"horsepower": "115"}},
    {"id": "x1", "brand": "Unknown", "model": "NoPrice", "body": "Sedan", "fuel": "Petrol",
     "price": "-"},
    {"brand": "Nameless", "price": 100},
]


def test_normalize_records_coerces_and_drops():
    df = normalize_records(RAW_CARS)
    assert df["id"].tolist() == ["t1", "d1"]
    assert df.loc[0, "price"] == 1_650_000
    assert df.loc[0, "quality_score"] == 8.5
    assert df.loc[0, "tags"] == "Safety, Comfort"


def test_missing_tags_are_suggested():
    df = normalize_records(RAW_CARS)
    tags = df.loc[1, "tags"].split(", ")
    assert tags == ["Low consumption", "Family-focused", "Winter conditions"]


def test_run_ingestion_creates_processed_catalog(tmp_path: Path):
    raw_path = tmp_path / "raw" / "cars.json"
    raw_path.parent.mkdir()
    raw_path.write_text(json.dumps(RAW_CARS), encoding="utf-8")

    cfg = CatalogConfig(raw_path=raw_path, processed_data_dir=tmp_path / "processed")
    output_path = run_ingestion(config=cfg)

    assert output_path.is_file(), "Processed CSV should be created"

    df = pd.read_csv(output_path, dtype={"id": str})
    assert list(df.columns) == CANONICAL_COLUMNS
    assert len(df) == 2

    catalog = DataFrameCatalog(df)
    assert catalog.get("t1").tags == ["Safety", "Comfort"]
    assert catalog.get("d1").year == 2024

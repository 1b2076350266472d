from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class CatalogConfig:
    """
    Locations of the raw car export and the processed catalog.
    """

    raw_path: Path = _DATA_DIR / "raw" / "cars.json"
    processed_data_dir: Path = _DATA_DIR
    processed_filename: str = "catalog.csv"
    catalog_path: Path = field(
        default_factory=lambda: Path(os.getenv("CATALOG_PATH", str(_DATA_DIR / "catalog.csv")))
    )

    @property
    def processed_path(self) -> Path:
        return self.processed_data_dir / self.processed_filename


DEFAULT_CATALOG_CONFIG = CatalogConfig()

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class SessionConfig:
    completion_action: str = "complete"
    # Empty means sessions live in process memory only.
    store_dir: str = os.getenv("SESSION_STORE_DIR", "")


DEFAULT_SESSION_CONFIG = SessionConfig()

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RankingConfig:
    tag_weight: float = 10.0
    quality_weight: float = 0.1
    # Ceiling used when the user gave no budget; keeps the price test uniform.
    unbounded_budget: float = 99_000_000


DEFAULT_RANKING_CONFIG = RankingConfig()

from __future__ import annotations

from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .models import RankedVehicle, VehicleRecord


def search_tags(usage_tags: list[str] | None, priority_tags: list[str] | None) -> list[str]:
    """Combine both tag lists into one bag. Duplicates are kept."""
    return [*(usage_tags or []), *(priority_tags or [])]


def score_vehicle(
    vehicle: VehicleRecord,
    tags: list[str],
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> float:
    """Tag-match score plus a small quality-score tie-breaker.

    Every search tag found in the vehicle's tags counts once per
    occurrence in *tags*, so a tag listed under both usage and priorities
    contributes twice.
    """
    vehicle_tags = set(vehicle.tags)
    matches = sum(1 for tag in tags if tag in vehicle_tags)
    return config.tag_weight * matches + config.quality_weight * (vehicle.quality_score or 0.0)


def rank_candidates(
    candidates: list[VehicleRecord],
    usage_tags: list[str] | None,
    priority_tags: list[str] | None,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> list[RankedVehicle]:
    """Score every candidate and order by score, highest first.

    The sort is stable: equal scores keep their input order. Nothing is
    truncated here.
    """
    tags = search_tags(usage_tags, priority_tags)
    ranked = [
        RankedVehicle(vehicle=vehicle, match_score=score_vehicle(vehicle, tags, config))
        for vehicle in candidates
    ]
    return sorted(ranked, key=lambda item: item.match_score, reverse=True)

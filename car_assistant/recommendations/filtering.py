"""Hard-constraint filter stage: budget, body type and fuel type.

Tags never remove a candidate here; they only influence ranking.
"""
from __future__ import annotations

from ..taxonomy.tags import is_any, translate_fuel_label
from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .models import SelectionCriteria, VehicleRecord


def budget_ceiling(criteria: SelectionCriteria, config: RankingConfig = DEFAULT_RANKING_CONFIG) -> float:
    """Return the effective price ceiling for *criteria*."""
    if criteria.budget is None:
        return config.unbounded_budget
    return criteria.budget


def body_type_filter(criteria: SelectionCriteria) -> str | None:
    """Return the body-type substring to match, or ``None`` for "any"."""
    if is_any(criteria.body_type):
        return None
    return criteria.body_type


def _within_budget(vehicle: VehicleRecord, ceiling: float) -> bool:
    return vehicle.price <= ceiling


def _matches_body(vehicle: VehicleRecord, body: str | None) -> bool:
    # Catalog values may carry qualifiers, e.g. "Hatchback (3/5 door)".
    if body is None:
        return True
    return body.lower() in (vehicle.body_type or "").lower()


def _matches_fuel(vehicle: VehicleRecord, fuel: str | None) -> bool:
    # "Petrol (MHEV)" must match a requested "Petrol".
    if fuel is None:
        return True
    return (vehicle.fuel_type or "").lower().startswith(fuel.lower())


def filter_candidates(
    candidates: list[VehicleRecord],
    criteria: SelectionCriteria,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> list[VehicleRecord]:
    """Keep the candidates that satisfy every hard constraint, in input order."""
    ceiling = budget_ceiling(criteria, config)
    body = body_type_filter(criteria)
    fuel = translate_fuel_label(criteria.fuel_type)

    return [
        vehicle
        for vehicle in candidates
        if _within_budget(vehicle, ceiling)
        and _matches_body(vehicle, body)
        and _matches_fuel(vehicle, fuel)
    ]

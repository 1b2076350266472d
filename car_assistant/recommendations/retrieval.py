from __future__ import annotations

from ..catalog.repository import Catalog, CatalogQuery, get_catalog
from ..errors import InvalidInput, NotFound, storage_call
from ..taxonomy.tags import translate_fuel_label
from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .filtering import body_type_filter, budget_ceiling, filter_candidates
from .models import (
    RankedVehicle,
    RecommendationRequest,
    RecommendationResponse,
    SelectionCriteria,
    VehicleRecord,
)
from .ranking import rank_candidates


def build_catalog_query(
    criteria: SelectionCriteria,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> CatalogQuery:
    """Extract the hard filters that can be pushed down into the catalog."""
    return CatalogQuery(
        max_price=budget_ceiling(criteria, config),
        body_type_contains=body_type_filter(criteria),
        fuel_type_starts_with=translate_fuel_label(criteria.fuel_type),
    )


def recommend(
    criteria: SelectionCriteria,
    catalog: Catalog | None = None,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> list[RankedVehicle]:
    """Return every eligible vehicle, best match first.

    Session state is not touched; callers that want the result recorded
    pass the ids to the session tracker themselves.
    """
    catalog = catalog or get_catalog()

    # --- Hard filters ---
    with storage_call("recommend"):
        candidates = catalog.query(build_catalog_query(criteria, config))

    # Re-applied in case the catalog ignored part of the query
    candidates = filter_candidates(candidates, criteria, config)

    # --- Scoring ---
    return rank_candidates(candidates, criteria.usage_tags, criteria.priority_tags, config)


def get_recommendations(
    request: RecommendationRequest,
    catalog: Catalog | None = None,
) -> RecommendationResponse:
    ranked = recommend(request.criteria(), catalog)
    top = ranked[: request.limit] if request.limit else ranked
    return RecommendationResponse(
        recommendations=top,
        total_candidates=len(ranked),
        session_id=request.session_id,
    )


def get_vehicle(vehicle_id: str | None, catalog: Catalog | None = None) -> VehicleRecord:
    if not vehicle_id:
        raise InvalidInput("vehicle id is required", operation="vehicle")

    catalog = catalog or get_catalog()
    with storage_call("vehicle"):
        vehicle = catalog.get(vehicle_id)

    if vehicle is None:
        raise NotFound(f"vehicle {vehicle_id!r} not found", operation="vehicle")
    return vehicle

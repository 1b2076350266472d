from __future__ import annotations

from pydantic import BaseModel, Field


class VehicleRecord(BaseModel):
    id: str = Field(..., min_length=1)
    brand: str | None = None
    model: str | None = None
    trim: str | None = None
    year: int | None = None
    price: int = Field(..., ge=0, description="Price in the catalog's integer currency unit")
    body_type: str = ""
    fuel_type: str = ""
    tags: list[str] = Field(default_factory=list)
    quality_score: float = 0.0


class SelectionCriteria(BaseModel):
    budget: float | None = Field(default=None, ge=0.0, description="Price ceiling; omit for no limit")
    body_type: str | None = Field(default=None, description='Body type, or "Any"')
    fuel_type: str | None = Field(default=None, description='User-facing fuel label, or "Any"')
    usage_tags: list[str] = Field(default_factory=list)
    priority_tags: list[str] = Field(default_factory=list)


class RankedVehicle(BaseModel):
    vehicle: VehicleRecord
    match_score: float


class RecommendationRequest(SelectionCriteria):
    limit: int | None = Field(default=None, ge=1, le=50)
    session_id: str | None = Field(
        default=None,
        description="When set, the returned ids are recorded into this wizard session",
    )

    def criteria(self) -> SelectionCriteria:
        return SelectionCriteria(**self.model_dump(include=set(SelectionCriteria.model_fields)))


class RecommendationResponse(BaseModel):
    recommendations: list[RankedVehicle]
    total_candidates: int
    session_id: str | None = None

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# Fields a wizard update may change; everything else is fixed at creation.
MUTABLE_FIELDS: tuple[str, ...] = (
    "usage_tags",
    "body_type",
    "fuel_type",
    "priority_tags",
    "budget",
    "recommended_car_ids",
    "selected_car_id",
)


class ClientMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_agent: str = ""
    ip_address: str = "unknown"


class SessionUpdate(BaseModel):
    """Partial update. ``None`` means "keep the current value"."""

    usage_tags: list[str] | None = None
    body_type: str | None = None
    fuel_type: str | None = None
    priority_tags: list[str] | None = None
    budget: float | None = None
    recommended_car_ids: list[str] | None = None
    selected_car_id: str | None = None


class StepData(BaseModel):
    model_config = ConfigDict(frozen=True)

    usage_tags: tuple[str, ...] = ()
    body_type: str | None = None
    fuel_type: str | None = None
    priority_tags: tuple[str, ...] = ()
    budget: float | None = None
    recommended_car_ids: tuple[str, ...] = ()
    selected_car_id: str | None = None


class Step(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    step: str | None = None
    action: str | None = None
    data: StepData


class Session(BaseModel):
    id: str = ""
    usage_tags: list[str] = Field(default_factory=list)
    priority_tags: list[str] = Field(default_factory=list)
    body_type: str | None = None
    fuel_type: str | None = None
    budget: float | None = None
    recommended_car_ids: list[str] = Field(default_factory=list)
    selected_car_id: str | None = None
    history: list[Step] = Field(default_factory=list)
    created_at: datetime | None = None
    completed_at: datetime | None = None
    client_metadata: ClientMetadata = Field(default_factory=ClientMetadata)

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    def snapshot(self) -> StepData:
        return StepData(**{name: getattr(self, name) for name in MUTABLE_FIELDS})


class SessionStartRequest(BaseModel):
    session_id: str | None = None


class SessionUpdateRequest(SessionUpdate):
    session_id: str | None = None
    step: str | None = None
    action: str | None = None

    def changes(self) -> SessionUpdate:
        return SessionUpdate(**self.model_dump(include=set(SessionUpdate.model_fields)))


class SessionResponse(BaseModel):
    session: Session
    is_new: bool | None = None
    resume_step: str | None = None

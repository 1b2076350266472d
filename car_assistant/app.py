from __future__ import annotations

import logging
import os

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_session_analytics
from .auth.dependencies import bearer_token, require_admin, require_user
from .auth.models import LoginRequest
from .auth.users import authenticate, issue_token, revoke_token
from .catalog.data_store import get_dataframe
from .errors import AssistantError, InvalidInput, NotFound, StorageFailure, storage_call
from .recommendations.models import (
    RecommendationRequest,
    RecommendationResponse,
    VehicleRecord,
)
from .recommendations.retrieval import get_recommendations, get_vehicle
from .sessions.models import (
    ClientMetadata,
    SessionResponse,
    SessionStartRequest,
    SessionUpdate,
    SessionUpdateRequest,
)
from .sessions.store import get_session_store
from .sessions.tracker import (
    create_or_get_session,
    get_session,
    resume_point,
    update_session,
)
from .taxonomy.tags import ANY, FUEL_LABELS, STANDARD_TAGS

logger = logging.getLogger(__name__)

app = FastAPI(title="Car Recommendation Assistant API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "car-assistant-secret-change-in-production"),
)

_ERROR_STATUS: dict[type[AssistantError], int] = {
    InvalidInput: 400,
    NotFound: 404,
    StorageFailure: 500,
}


@app.exception_handler(AssistantError)
async def assistant_error_handler(request: Request, exc: AssistantError) -> JSONResponse:
    status = _ERROR_STATUS.get(type(exc), 500)
    if status >= 500:
        logger.error("Storage failure during %s: %s", exc.operation, exc.message)
    return JSONResponse(
        status_code=status,
        content={"detail": exc.message, "operation": exc.operation},
    )


def _client_metadata(request: Request) -> ClientMetadata:
    forwarded_for = request.headers.get("x-forwarded-for")
    ip_address = forwarded_for.split(",")[0].strip() if forwarded_for else "unknown"
    return ClientMetadata(
        user_agent=request.headers.get("user-agent", ""),
        ip_address=ip_address or "unknown",
    )


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    with storage_call("metadata"):
        df = get_dataframe()
    body_types = sorted(df["body"].dropna().astype(str).unique().tolist())
    return {
        "usage_tags": STANDARD_TAGS["usage"],
        "priority_tags": STANDARD_TAGS["priorities"],
        "fuel_labels": list(FUEL_LABELS),
        "body_types": body_types,
        "any": ANY,
    }


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.username, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user, "token": issue_token(user["username"])}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    token = bearer_token(request)
    if token:
        revoke_token(token)
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── Assistant endpoints ──────────────────────────────────────────────────


@app.post("/assistant", response_model=RecommendationResponse)
def assistant(body: RecommendationRequest) -> RecommendationResponse:
    response = get_recommendations(body)

    # Record what the user was shown when the wizard passes its session
    if body.session_id:
        update_session(
            body.session_id,
            SessionUpdate(recommended_car_ids=[r.vehicle.id for r in response.recommendations]),
            step="results",
            action="recommend",
        )

    return response


@app.get("/assistant/car", response_model=VehicleRecord)
def assistant_car(vehicle_id: str | None = Query(default=None, alias="id")) -> VehicleRecord:
    return get_vehicle(vehicle_id)


@app.post("/assistant/session", response_model=SessionResponse)
def start_session(body: SessionStartRequest, request: Request) -> SessionResponse:
    session, is_new = create_or_get_session(body.session_id, _client_metadata(request))
    return SessionResponse(session=session, is_new=is_new, resume_step=resume_point(session))


@app.put("/assistant/session", response_model=SessionResponse)
def put_session(body: SessionUpdateRequest) -> SessionResponse:
    session = update_session(
        body.session_id,
        body.changes(),
        step=body.step,
        action=body.action,
    )
    return SessionResponse(session=session, resume_step=resume_point(session))


@app.get("/assistant/session", response_model=SessionResponse)
def read_session(session_id: str | None = None) -> SessionResponse:
    session = get_session(session_id)
    return SessionResponse(session=session, resume_step=resume_point(session))


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/analytics")
def analytics(user: dict = Depends(require_admin)) -> dict:
    with storage_call("analytics"):
        sessions = get_session_store().list_sessions()
    return compute_session_analytics(sessions)

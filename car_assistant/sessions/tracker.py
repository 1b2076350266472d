from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from ..errors import InvalidInput, NotFound, storage_call
from .config import DEFAULT_SESSION_CONFIG, SessionConfig
from .models import MUTABLE_FIELDS, ClientMetadata, Session, SessionUpdate, Step, StepData
from .store import SessionStore, get_session_store

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def merge_fields(current: Session | StepData, changes: SessionUpdate | StepData) -> dict[str, Any]:
    """Resolve every mutable field as ``change if given else current``.

    Only ``None`` counts as "not given": an empty list is a real value
    and replaces the current one.
    """
    merged: dict[str, Any] = {}
    for name in MUTABLE_FIELDS:
        value = getattr(changes, name)
        merged[name] = value if value is not None else getattr(current, name)
    return merged


def create_or_get_session(
    session_id: str | None,
    client_metadata: ClientMetadata | None = None,
    store: SessionStore | None = None,
) -> tuple[Session, bool]:
    """Return ``(session, is_new)``.

    A known *session_id* returns the stored session unchanged. A missing
    or unknown id always creates a fresh session.
    """
    store = store or get_session_store()

    if session_id:
        with storage_call("create_or_get"):
            existing = store.get(session_id)
        if existing is not None:
            return existing, False

    with storage_call("create_or_get"):
        session = store.create(Session(client_metadata=client_metadata or ClientMetadata()))

    logger.info("Created wizard session %s", session.id)
    return session, True


def get_session(session_id: str | None, store: SessionStore | None = None) -> Session:
    if not session_id:
        raise InvalidInput("session id is required", operation="get")

    store = store or get_session_store()
    with storage_call("get"):
        session = store.get(session_id)

    if session is None:
        raise NotFound(f"session {session_id!r} not found", operation="get")
    return session


def update_session(
    session_id: str | None,
    changes: SessionUpdate | None = None,
    step: str | None = None,
    action: str | None = None,
    store: SessionStore | None = None,
    config: SessionConfig = DEFAULT_SESSION_CONFIG,
) -> Session:
    """Merge *changes* into the session and append one step to its history.

    The first update whose action is the completion action stamps
    ``completed_at``; later ones leave it as it is. The stored record is
    only replaced once the merged session is complete, so a failed save
    leaves the previous version intact.
    """
    if not session_id:
        raise InvalidInput("session id is required", operation="update")

    store = store or get_session_store()
    changes = changes or SessionUpdate()

    with storage_call("update"):
        existing = store.get(session_id)
    if existing is None:
        raise NotFound(f"session {session_id!r} not found", operation="update")

    now = _utcnow()
    merged = merge_fields(existing, changes)
    new_step = Step(timestamp=now, step=step, action=action, data=StepData(**merged))

    completed_at = existing.completed_at
    if action == config.completion_action and completed_at is None:
        completed_at = now

    updated = existing.model_copy(
        update={
            **merged,
            "history": [*existing.history, new_step],
            "completed_at": completed_at,
        },
        deep=True,
    )

    with storage_call("update"):
        saved = store.save(updated)

    if saved.completed_at is not None and existing.completed_at is None:
        logger.info("Wizard session %s completed", session_id)
    return saved


def replay_history(history: list[Step]) -> StepData:
    """Rebuild the mutable fields by folding the step log from an empty session."""
    state = StepData()
    for entry in history:
        state = StepData(**merge_fields(state, entry.data))
    return state


def resume_point(session: Session) -> str | None:
    """Label of the last recorded wizard step, or ``None`` for a fresh session."""
    if not session.history:
        return None
    return session.history[-1].step

from __future__ import annotations

import os
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from .config import DEFAULT_SESSION_CONFIG, SessionConfig
from .models import Session


class SessionStore(Protocol):
    def get(self, session_id: str) -> Session | None: ...

    def create(self, session: Session) -> Session: ...

    def save(self, session: Session) -> Session: ...

    def list_sessions(self) -> list[Session]: ...


def _assign_identity(session: Session) -> Session:
    return session.model_copy(
        update={"id": uuid.uuid4().hex, "created_at": datetime.now(timezone.utc)},
        deep=True,
    )


class InMemorySessionStore:
    """Dict-backed store. Hands out copies so stored records never change in place."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    def get(self, session_id: str) -> Session | None:
        session = self._sessions.get(session_id)
        return session.model_copy(deep=True) if session is not None else None

    def create(self, session: Session) -> Session:
        record = _assign_identity(session)
        self._sessions[record.id] = record
        return record.model_copy(deep=True)

    def save(self, session: Session) -> Session:
        if session.id not in self._sessions:
            raise KeyError(f"session {session.id!r} does not exist")
        self._sessions[session.id] = session.model_copy(deep=True)
        return session.model_copy(deep=True)

    def list_sessions(self) -> list[Session]:
        return [s.model_copy(deep=True) for s in self._sessions.values()]

    def clear(self) -> None:
        self._sessions.clear()


class JsonFileSessionStore:
    """One JSON document per session under *directory*."""

    def __init__(self, directory: Path | str) -> None:
        self._dir = Path(directory)
        self._dir.mkdir(parents=True, exist_ok=True)

    def _path(self, session_id: str) -> Path | None:
        # Ids are uuid hex; anything else cannot name a stored session.
        if not session_id or not session_id.isalnum():
            return None
        return self._dir / f"{session_id}.json"

    def _write(self, session: Session) -> None:
        path = self._dir / f"{session.id}.json"
        # One temp file per write; concurrent writers must never share it.
        tmp = path.with_name(f"{session.id}.{uuid.uuid4().hex}.tmp")
        try:
            tmp.write_text(session.model_dump_json(), encoding="utf-8")
            os.replace(tmp, path)
        finally:
            tmp.unlink(missing_ok=True)

    def get(self, session_id: str) -> Session | None:
        path = self._path(session_id)
        if path is None or not path.is_file():
            return None
        return Session.model_validate_json(path.read_text(encoding="utf-8"))

    def create(self, session: Session) -> Session:
        record = _assign_identity(session)
        self._write(record)
        return record

    def save(self, session: Session) -> Session:
        path = self._path(session.id)
        if path is None or not path.is_file():
            raise KeyError(f"session {session.id!r} does not exist")
        self._write(session)
        return session

    def list_sessions(self) -> list[Session]:
        return [
            Session.model_validate_json(p.read_text(encoding="utf-8"))
            for p in sorted(self._dir.glob("*.json"))
        ]


_store: SessionStore | None = None


def build_session_store(config: SessionConfig = DEFAULT_SESSION_CONFIG) -> SessionStore:
    if config.store_dir:
        return JsonFileSessionStore(config.store_dir)
    return InMemorySessionStore()


def get_session_store() -> SessionStore:
    """Return the process-wide session store, building it on first call."""
    global _store
    if _store is None:
        _store = build_session_store()
    return _store


def set_session_store(store: SessionStore | None) -> None:
    global _store
    _store = store

"""
FastAPI application for the online compiler.

This module configures the FastAPI application, registers routes for the
language catalog and for editor sessions, and enforces authentication via
an API key.  Each session corresponds to one open compiler screen in the
mobile client: it is created when the screen opens, driven by the user's
edits and run requests, and deleted when the screen closes.  Sessions are
kept in memory only.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Dict

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from ..config import Config
from ..exceptions import AlreadySubmitting, UnknownLanguage
from ..judge import HttpJudgeClient, JudgeClient
from ..languages import registry
from ..models import (
    LanguageInfo,
    LanguageList,
    RunResponse,
    SelectLanguageRequest,
    SessionView,
    TextUpdateRequest,
)
from ..session import EditorSession


logger = logging.getLogger("onlinecompiler")

if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter("[onlinecompiler] %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)

logger.setLevel(logging.INFO)


config = Config.from_env()

logger.info(
    "Loaded config: judge_url=%s, judge_api_host=%s, judge_timeout=%ss, session_idle=%ss, languages=%s",
    config.judge_url,
    config.judge_api_host,
    config.judge_timeout_seconds,
    config.session_idle_seconds,
    [option.service_id for option in registry.list_languages()],
)

judge_client: JudgeClient = HttpJudgeClient.from_config(config)

sessions: Dict[str, EditorSession] = {}
# session id -> monotonic time of the last request that touched it
last_seen: Dict[str, float] = {}
_clock = time.monotonic


app = FastAPI(title="Online Compiler Service", version="0.1.0")


@app.middleware("http")
async def authenticate(request, call_next):
    """Middleware to enforce API key authentication on all requests."""
    path = request.url.path
    method = request.method
    client = getattr(request.client, "host", "unknown")

    logger.info("Incoming request: %s %s from %s", method, path, client)

    provided_key = request.headers.get("x-api-key")
    if config.api_key:
        if provided_key != config.api_key:
            logger.warning("Invalid API key for %s %s from %s", method, path, client)
            return JSONResponse(status_code=401, content={"detail": "Invalid API key"})

    response = await call_next(request)
    logger.info("Response: %s %s -> %s", method, path, response.status_code)
    return response


def _get_session(session_id: str) -> EditorSession:
    try:
        session = sessions[session_id]
    except KeyError:
        raise HTTPException(status_code=404, detail="Session not found")
    last_seen[session_id] = _clock()
    return session


def _evict_idle_sessions() -> None:
    """Drop sessions whose screen was never closed.  Busy sessions are kept."""
    cutoff = _clock() - config.session_idle_seconds
    stale = [sid for sid, seen in last_seen.items() if seen < cutoff]
    for session_id in stale:
        session = sessions.get(session_id)
        if session is not None and session.is_busy:
            continue
        sessions.pop(session_id, None)
        last_seen.pop(session_id, None)
        logger.info("Evicted idle session %s", session_id)


def _view(session_id: str, session: EditorSession) -> SessionView:
    snap = session.snapshot()
    return SessionView(
        session_id=session_id,
        selected_language=snap.selected_language,
        source_text=snap.source_text,
        stdin_text=snap.stdin_text,
        last_output=snap.last_output,
        is_busy=snap.is_busy,
        state=snap.state.value,
        requires_stdin=snap.requires_stdin,
    )


@app.get("/health")
async def health() -> Dict[str, str]:
    """Return a simple health check response."""
    return {"status": "ok"}


@app.get("/v1/languages", response_model=LanguageList)
async def list_languages() -> LanguageList:
    """List the supported languages in display order."""
    return LanguageList(
        languages=[
            LanguageInfo(service_id=option.service_id, display_name=option.display_name)
            for option in registry.list_languages()
        ]
    )


@app.post("/v1/sessions", response_model=SessionView)
async def create_session() -> SessionView:
    """Open a new editor session with the first language selected."""
    _evict_idle_sessions()
    session_id = str(uuid.uuid4())
    session = EditorSession(judge_client, registry=registry)
    sessions[session_id] = session
    last_seen[session_id] = _clock()
    logger.info("Created session %s (%s)", session_id, session.selected_language)
    return _view(session_id, session)


@app.get("/v1/sessions/{session_id}", response_model=SessionView)
async def get_session(session_id: str) -> SessionView:
    return _view(session_id, _get_session(session_id))


@app.delete("/v1/sessions/{session_id}")
async def delete_session(session_id: str) -> Dict[str, str]:
    """Close a session.  An in-flight submission finishes but is no longer reachable."""
    last_seen.pop(session_id, None)
    if sessions.pop(session_id, None) is None:
        raise HTTPException(status_code=404, detail="Session not found")
    logger.info("Deleted session %s", session_id)
    return {"detail": "Session deleted"}


@app.put("/v1/sessions/{session_id}/language", response_model=SessionView)
async def select_language(session_id: str, req: SelectLanguageRequest) -> SessionView:
    session = _get_session(session_id)
    try:
        session.select_language(req.service_id)
    except UnknownLanguage as exc:
        logger.warning("[%s] Unsupported language: %s", session_id, exc.service_id)
        raise HTTPException(status_code=400, detail=f"Unsupported language: {exc.service_id}")
    return _view(session_id, session)


@app.put("/v1/sessions/{session_id}/source", response_model=SessionView)
async def edit_source(session_id: str, req: TextUpdateRequest) -> SessionView:
    session = _get_session(session_id)
    session.edit_source(req.text)
    return _view(session_id, session)


@app.put("/v1/sessions/{session_id}/stdin", response_model=SessionView)
async def edit_stdin(session_id: str, req: TextUpdateRequest) -> SessionView:
    session = _get_session(session_id)
    session.edit_stdin(req.text)
    return _view(session_id, session)


@app.post("/v1/sessions/{session_id}/run", response_model=RunResponse)
async def run(session_id: str) -> RunResponse:
    """Submit the session's program and wait for the judged result."""
    session = _get_session(session_id)
    try:
        result = await session.run_submit()
    except AlreadySubmitting:
        raise HTTPException(status_code=409, detail="A submission is already in flight")
    return RunResponse(
        session=_view(session_id, session),
        result_kind=result.kind.value if result is not None else None,
    )


@app.delete("/v1/sessions/{session_id}/output", response_model=SessionView)
async def clear_output(session_id: str) -> SessionView:
    session = _get_session(session_id)
    if not session.clear_output():
        raise HTTPException(status_code=409, detail="A submission is already in flight")
    return _view(session_id, session)

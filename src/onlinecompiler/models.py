"""Pydantic models for the judge wire format and the HTTP API.

The judge models follow the Judge0 ``submissions`` endpoint: a submission is
posted as ``source_code``/``language_id``/``stdin`` and, in wait mode, the
finished result comes back with optional ``stdout``, ``compile_output`` and
``stderr`` fields.  Judge0 reports other fields too (status, timings, memory);
they are accepted and ignored.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SubmissionRequest(BaseModel):
    """Body posted to the judge.  Built once per submission, never mutated."""

    model_config = ConfigDict(frozen=True)

    source_code: str
    language_id: int
    stdin: str = ""


class JudgeResponse(BaseModel):
    """Subset of the judge reply used to build a submission result."""

    model_config = ConfigDict(extra="ignore")

    stdout: Optional[str] = None
    compile_output: Optional[str] = None
    stderr: Optional[str] = None


class LanguageInfo(BaseModel):
    """A catalog entry as exposed by the API."""

    service_id: str
    display_name: str


class LanguageList(BaseModel):
    languages: List[LanguageInfo] = Field(default_factory=list)


class SelectLanguageRequest(BaseModel):
    """Request body for switching a session's language."""

    service_id: str = Field(..., description="Judge service id of the language to select.")


class TextUpdateRequest(BaseModel):
    """Request body for replacing the source or stdin text of a session."""

    text: str = Field(..., description="New text, stored verbatim.")


class SessionView(BaseModel):
    """Snapshot of an editor session."""

    session_id: str
    selected_language: str
    source_text: str
    stdin_text: str
    last_output: str
    is_busy: bool
    state: str
    requires_stdin: bool


class RunResponse(BaseModel):
    """Response body for a run request."""

    session: SessionView
    result_kind: Optional[str] = Field(
        default=None,
        description="Outcome of the submission; null if the result was discarded as stale.",
    )

"""
Base interfaces and result types for judge clients.

All concrete clients should inherit from :class:`JudgeClient` and implement
the :meth:`~JudgeClient.submit` coroutine.  A client is responsible for
delivering one program to the judge and returning a
:class:`SubmissionResult` describing what came back.  Transport problems
are part of that result: a client never lets a network or decoding error
escape ``submit``.

The helpers :func:`build_request` and :func:`parse_response` hold the parts
of the exchange that do not depend on the transport, so every client maps
languages, attaches stdin and interprets replies the same way.
"""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from ..languages import LanguageRegistry, registry as default_registry
from ..models import JudgeResponse, SubmissionRequest
from ..stdin import requires_stdin


NO_OUTPUT_TEXT = "No output"
TRANSPORT_FAILURE_TEXT = "Error compiling code. Please check your internet connection."


class ResultKind(str, enum.Enum):
    OUTPUT = "output"
    COMPILE_ERROR = "compile_error"
    RUNTIME_ERROR = "runtime_error"
    NO_OUTPUT = "no_output"
    TRANSPORT_FAILURE = "transport_failure"


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of one submission attempt.

    Attributes
    ----------
    kind: ResultKind
        Which outcome the judge (or the transport) produced.
    text: str
        The judged text for ``OUTPUT``, ``COMPILE_ERROR`` and
        ``RUNTIME_ERROR``; the failure reason for ``TRANSPORT_FAILURE``;
        empty for ``NO_OUTPUT``.
    """

    kind: ResultKind
    text: str = ""

    @classmethod
    def output(cls, text: str) -> "SubmissionResult":
        return cls(ResultKind.OUTPUT, text)

    @classmethod
    def compile_error(cls, text: str) -> "SubmissionResult":
        return cls(ResultKind.COMPILE_ERROR, text)

    @classmethod
    def runtime_error(cls, text: str) -> "SubmissionResult":
        return cls(ResultKind.RUNTIME_ERROR, text)

    @classmethod
    def no_output(cls) -> "SubmissionResult":
        return cls(ResultKind.NO_OUTPUT)

    @classmethod
    def transport_failure(cls, reason: str) -> "SubmissionResult":
        return cls(ResultKind.TRANSPORT_FAILURE, reason)

    @property
    def is_transport_failure(self) -> bool:
        return self.kind is ResultKind.TRANSPORT_FAILURE

    def display_text(self) -> str:
        """Text shown in the output pane for this outcome."""
        if self.kind is ResultKind.NO_OUTPUT:
            return NO_OUTPUT_TEXT
        if self.kind is ResultKind.TRANSPORT_FAILURE:
            return TRANSPORT_FAILURE_TEXT
        return self.text


def build_request(
    service_id: str,
    source_code: str,
    stdin: str = "",
    registry: LanguageRegistry = default_registry,
) -> SubmissionRequest:
    """Build the request body for one submission.

    ``stdin`` is dropped when the source does not look like it reads input,
    so a value left over in a hidden field never reaches the judge.

    Raises
    ------
    UnknownLanguage
        If ``service_id`` is not in ``registry``.
    """
    language = registry.get(service_id)
    attach = bool(stdin) and requires_stdin(service_id, source_code)
    return SubmissionRequest(
        source_code=source_code,
        language_id=language.judge_language_id,
        stdin=stdin if attach else "",
    )


def parse_response(payload: Any) -> SubmissionResult:
    """Turn a decoded judge reply into a :class:`SubmissionResult`.

    Standard output wins over compiler output, which wins over standard
    error; empty and ``null`` fields are skipped.  A payload that is not a
    JSON object, or whose fields have the wrong types, is reported as a
    transport failure.
    """
    if not isinstance(payload, dict):
        return SubmissionResult.transport_failure(
            f"Malformed judge response: expected an object, got {type(payload).__name__}"
        )
    try:
        reply = JudgeResponse.model_validate(payload)
    except ValidationError as exc:
        return SubmissionResult.transport_failure(
            f"Malformed judge response: {exc.error_count()} invalid field(s)"
        )

    if reply.stdout:
        return SubmissionResult.output(reply.stdout)
    if reply.compile_output:
        return SubmissionResult.compile_error(reply.compile_output)
    if reply.stderr:
        return SubmissionResult.runtime_error(reply.stderr)
    return SubmissionResult.no_output()


class JudgeClient(abc.ABC):
    """
    Abstract base class defining the interface for judge clients.

    Subclasses override :meth:`submit`.  Implementations must not raise for
    transport problems; they return a ``TRANSPORT_FAILURE`` result instead.
    """

    @abc.abstractmethod
    async def submit(
        self,
        service_id: str,
        source_code: str,
        stdin: str = "",
    ) -> SubmissionResult:
        """Send one program to the judge and wait for the finished result.

        Parameters
        ----------
        service_id: str
            Catalog id of the language to run.
        source_code: str
            Program text, sent verbatim.
        stdin: str, optional
            Standard input for the program.  Ignored when the source does not
            appear to read input.

        Returns
        -------
        SubmissionResult
            The judged outcome, or a transport failure.
        """
        raise NotImplementedError

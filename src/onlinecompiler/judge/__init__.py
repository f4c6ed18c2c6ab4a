"""
Client side of the remote judge.

The judge compiles and runs submitted programs; this package only builds the
submission, sends it and normalises the reply into a
:class:`SubmissionResult`.  :class:`JudgeClient` defines the interface the
editor session depends on and :class:`HttpJudgeClient` implements it over
HTTP against a Judge0-compatible ``submissions`` endpoint.  Other transports
(or test doubles) can be added by implementing ``JudgeClient``.
"""

from .base import JudgeClient, ResultKind, SubmissionResult, build_request, parse_response
from .http_client import HttpJudgeClient

__all__ = [
    "JudgeClient",
    "ResultKind",
    "SubmissionResult",
    "HttpJudgeClient",
    "build_request",
    "parse_response",
]

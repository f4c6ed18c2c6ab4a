from __future__ import annotations

import asyncio
from typing import List, Optional, Tuple

import pytest

from onlinecompiler.judge import JudgeClient, SubmissionResult


class FakeJudge(JudgeClient):
    """Judge double that records calls and can hold a submission open."""

    def __init__(self, result: Optional[SubmissionResult] = None) -> None:
        self.result = result or SubmissionResult.output("Hello, World!\n")
        self.calls: List[Tuple[str, str, str]] = []
        self.started: Optional[asyncio.Event] = None
        self.gate: Optional[asyncio.Event] = None

    def hold(self) -> None:
        """Make the next submissions wait until ``gate`` is set."""
        self.started = asyncio.Event()
        self.gate = asyncio.Event()

    async def submit(self, service_id: str, source_code: str, stdin: str = "") -> SubmissionResult:
        self.calls.append((service_id, source_code, stdin))
        if self.started is not None:
            self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        return self.result


@pytest.fixture
def fake_judge() -> FakeJudge:
    return FakeJudge()

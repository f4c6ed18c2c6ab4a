"""Editor session state machine.

An :class:`EditorSession` backs one open compiler screen.  It holds the
selected language, the source and stdin text, the last rendered output and
the busy flag, and applies user actions to them.  The only suspension point
is the judge round trip inside :meth:`EditorSession.run_submit`; while it is
pending the session is ``SUBMITTING`` and refuses a second submission.

Switching language while a submission is in flight does not cancel the
network call.  Every :meth:`~EditorSession.select_language` starts a new
selection generation, and a result is only applied if the generation it was
submitted under is still current when it arrives.  Otherwise the result is
dropped, so the output pane never shows a result for code that is no longer
in the editor.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from .exceptions import AlreadySubmitting
from .judge import JudgeClient, SubmissionResult
from .languages import LanguageRegistry, registry as default_registry
from .stdin import requires_stdin


logger = logging.getLogger("onlinecompiler.session")


class SessionState(str, enum.Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only copy of a session's observable state."""

    selected_language: str
    source_text: str
    stdin_text: str
    last_output: str
    is_busy: bool
    state: SessionState
    requires_stdin: bool


class EditorSession:
    """Mutable state of one compiler screen."""

    def __init__(
        self,
        judge: JudgeClient,
        registry: LanguageRegistry = default_registry,
    ) -> None:
        self._judge = judge
        self._registry = registry
        first = registry.first()
        self.selected_language: str = first.service_id
        self.source_text: str = registry.default_source(first.service_id)
        self.stdin_text: str = ""
        self.last_output: str = ""
        self.is_busy: bool = False
        self._generation = 0

    @property
    def state(self) -> SessionState:
        return SessionState.SUBMITTING if self.is_busy else SessionState.IDLE

    @property
    def requires_stdin(self) -> bool:
        """Whether the stdin field should be shown for the current source."""
        return requires_stdin(self.selected_language, self.source_text)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            selected_language=self.selected_language,
            source_text=self.source_text,
            stdin_text=self.stdin_text,
            last_output=self.last_output,
            is_busy=self.is_busy,
            state=self.state,
            requires_stdin=self.requires_stdin,
        )

    def select_language(self, service_id: str) -> None:
        """Switch language and reset the editor to its starter program.

        Allowed in any state.  An in-flight submission keeps running but its
        result will be discarded.

        Raises
        ------
        UnknownLanguage
            If ``service_id`` is not in the catalog.  The session is left
            unchanged.
        """
        source = self._registry.default_source(service_id)
        if self.is_busy:
            logger.info(
                "Language switched from %s to %s during a submission; its result will be discarded",
                self.selected_language,
                service_id,
            )
        self.selected_language = service_id
        self.source_text = source
        self.stdin_text = ""
        self.last_output = ""
        self._generation += 1

    def edit_source(self, text: str) -> None:
        self.source_text = text

    def edit_stdin(self, text: str) -> None:
        self.stdin_text = text

    def clear_output(self) -> bool:
        """Empty the output pane.  Returns ``False`` (and does nothing) while busy."""
        if self.is_busy:
            logger.info("Ignoring clear_output while a submission is in flight")
            return False
        self.last_output = ""
        return True

    async def run_submit(self) -> Optional[SubmissionResult]:
        """Submit the current program and apply the result.

        Returns the result when it was applied, or ``None`` when it arrived
        after a language switch and was discarded.  The busy flag is cleared
        exactly once whichever way the attempt ends.

        Raises
        ------
        AlreadySubmitting
            If a submission is already in flight.  Nothing is sent and the
            session is not modified.
        """
        if self.is_busy:
            logger.warning("Refusing to submit: a submission is already in flight")
            raise AlreadySubmitting("A submission is already in flight for this session")

        language = self.selected_language
        generation = self._generation
        stdin = self.stdin_text if self.requires_stdin else ""

        self.is_busy = True
        self.last_output = ""
        try:
            result = await self._judge.submit(language, self.source_text, stdin)
            if generation != self._generation:
                logger.info(
                    "Discarding stale %s result for %s (now %s)",
                    result.kind.value,
                    language,
                    self.selected_language,
                )
                return None
            self.last_output = result.display_text()
            return result
        finally:
            self.is_busy = False

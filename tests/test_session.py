"""Tests for the editor session state machine."""

from __future__ import annotations

import asyncio

import pytest

from onlinecompiler.exceptions import AlreadySubmitting, UnknownLanguage
from onlinecompiler.judge import SubmissionResult
from onlinecompiler.languages import registry
from onlinecompiler.session import EditorSession, SessionState


def test_initial_state(fake_judge):
    session = EditorSession(fake_judge)
    assert session.selected_language == "71"
    assert session.source_text == registry.default_source("71")
    assert session.stdin_text == ""
    assert session.last_output == ""
    assert session.is_busy is False
    assert session.state is SessionState.IDLE


def test_python_starter_requires_stdin_javascript_does_not(fake_judge):
    session = EditorSession(fake_judge)
    assert session.requires_stdin is True
    session.select_language("63")
    assert session.requires_stdin is False


def test_requires_stdin_follows_edits(fake_judge):
    session = EditorSession(fake_judge)
    session.edit_source("print('hi')")
    assert session.requires_stdin is False
    session.edit_source("x = input()")
    assert session.requires_stdin is True
    # same text, different language
    session.select_language("54")
    session.edit_source("x = input()")
    assert session.requires_stdin is False


def test_select_language_resets_editor(fake_judge):
    session = EditorSession(fake_judge)
    session.edit_source("print(input())")
    session.edit_stdin("Ada")
    session.last_output = "Ada"

    session.select_language("60")

    assert session.selected_language == "60"
    assert session.source_text == registry.default_source("60")
    assert session.stdin_text == ""
    assert session.last_output == ""


def test_reselecting_same_language_still_resets(fake_judge):
    session = EditorSession(fake_judge)
    session.edit_source("pass")
    session.select_language("71")
    assert session.source_text == registry.default_source("71")


def test_select_unknown_language_leaves_session_untouched(fake_judge):
    session = EditorSession(fake_judge)
    session.edit_source("print(1)")
    before = session.snapshot()
    with pytest.raises(UnknownLanguage):
        session.select_language("python")
    assert session.snapshot() == before


def test_edit_source_is_verbatim_and_idempotent(fake_judge):
    session = EditorSession(fake_judge)
    text = "  print(1)\n\n\t# trailing  "
    session.edit_source(text)
    session.edit_source(text)
    assert session.source_text == text
    session.edit_source("")
    assert session.source_text == ""


def test_run_submit_applies_output(fake_judge):
    session = EditorSession(fake_judge)
    session.edit_stdin("Ada")

    result = asyncio.run(session.run_submit())

    assert result == SubmissionResult.output("Hello, World!\n")
    assert session.last_output == "Hello, World!\n"
    assert session.is_busy is False
    assert fake_judge.calls == [("71", registry.default_source("71"), "Ada")]


def test_run_submit_blanks_stdin_when_not_required(fake_judge):
    session = EditorSession(fake_judge)
    session.select_language("63")
    session.edit_stdin("leftover")
    asyncio.run(session.run_submit())
    assert fake_judge.calls[0][2] == ""


@pytest.mark.parametrize(
    "result, shown",
    [
        (SubmissionResult.compile_error("main.c:1: error"), "main.c:1: error"),
        (SubmissionResult.runtime_error("ZeroDivisionError"), "ZeroDivisionError"),
        (SubmissionResult.no_output(), "No output"),
        (
            SubmissionResult.transport_failure("connection refused"),
            "Error compiling code. Please check your internet connection.",
        ),
    ],
)
def test_every_outcome_ends_up_in_output_pane(fake_judge, result, shown):
    fake_judge.result = result
    session = EditorSession(fake_judge)
    asyncio.run(session.run_submit())
    assert session.last_output == shown
    assert session.state is SessionState.IDLE


def test_run_submit_clears_previous_output_while_in_flight(fake_judge):
    async def scenario():
        fake_judge.hold()
        session = EditorSession(fake_judge)
        session.last_output = "old"
        task = asyncio.create_task(session.run_submit())
        await fake_judge.started.wait()
        snapshot = session.snapshot()
        fake_judge.gate.set()
        await task
        return snapshot

    snapshot = asyncio.run(scenario())
    assert snapshot.last_output == ""
    assert snapshot.is_busy is True
    assert snapshot.state is SessionState.SUBMITTING


def test_double_submit_is_refused(fake_judge):
    async def scenario():
        fake_judge.hold()
        session = EditorSession(fake_judge)
        task = asyncio.create_task(session.run_submit())
        await fake_judge.started.wait()

        before = session.snapshot()
        with pytest.raises(AlreadySubmitting):
            await session.run_submit()
        assert session.snapshot() == before

        fake_judge.gate.set()
        await task
        return session

    session = asyncio.run(scenario())
    assert len(fake_judge.calls) == 1
    assert session.is_busy is False


def test_stale_result_is_discarded(fake_judge):
    async def scenario():
        fake_judge.hold()
        session = EditorSession(fake_judge)
        task = asyncio.create_task(session.run_submit())
        await fake_judge.started.wait()

        session.select_language("63")
        assert session.is_busy is True
        fake_judge.gate.set()
        result = await task
        return session, result

    session, result = asyncio.run(scenario())
    assert result is None
    assert session.last_output == ""
    assert session.selected_language == "63"
    assert session.is_busy is False


def test_switching_away_and_back_still_discards(fake_judge):
    async def scenario():
        fake_judge.hold()
        session = EditorSession(fake_judge)
        task = asyncio.create_task(session.run_submit())
        await fake_judge.started.wait()

        session.select_language("63")
        session.select_language("71")
        fake_judge.gate.set()
        return session, await task

    session, result = asyncio.run(scenario())
    assert result is None
    assert session.last_output == ""


def test_edits_during_submission_do_not_discard_result(fake_judge):
    async def scenario():
        fake_judge.hold()
        session = EditorSession(fake_judge)
        task = asyncio.create_task(session.run_submit())
        await fake_judge.started.wait()
        session.edit_source("print(2)")
        fake_judge.gate.set()
        return session, await task

    session, result = asyncio.run(scenario())
    assert result is not None
    assert session.last_output == "Hello, World!\n"


def test_clear_output(fake_judge):
    session = EditorSession(fake_judge)
    session.last_output = "5"
    assert session.clear_output() is True
    assert session.last_output == ""


def test_clear_output_refused_while_busy(fake_judge):
    async def scenario():
        fake_judge.hold()
        session = EditorSession(fake_judge)
        task = asyncio.create_task(session.run_submit())
        await fake_judge.started.wait()
        cleared = session.clear_output()
        fake_judge.gate.set()
        await task
        return cleared

    assert asyncio.run(scenario()) is False


def test_busy_flag_clears_when_client_raises():
    class ExplodingJudge:
        async def submit(self, service_id, source_code, stdin=""):
            raise UnknownLanguage(service_id)

    session = EditorSession(ExplodingJudge())
    with pytest.raises(UnknownLanguage):
        asyncio.run(session.run_submit())
    assert session.is_busy is False

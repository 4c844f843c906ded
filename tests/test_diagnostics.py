from __future__ import annotations

import logging

import pytest

from tanglesmith.core.diagnostics import (
    LoggingEmitter,
    NullEmitter,
    ensure_emitter,
    event_level,
    format_event_message,
)
from tanglesmith.core.exceptions import (
    AmbiguousLabelError,
    CyclicReferenceError,
    DuplicateRootError,
    TangleError,
    UnknownLabelError,
)
from tanglesmith.ui.cli.diagnostics import CliEmitter, required_verbosity
from tanglesmith.ui.cli.state import CLIState, set_cli_state


def test_null_emitter_is_noop(caplog: pytest.LogCaptureFixture) -> None:
    emitter = NullEmitter()
    with caplog.at_level(logging.WARNING):
        emitter.warning("nothing to see")
        emitter.error("still quiet")
    assert not caplog.records
    emitter.event("ignored", {"value": 1})
    assert emitter.debug_enabled is False


def test_ensure_emitter_defaults_to_null() -> None:
    assert isinstance(ensure_emitter(None), NullEmitter)
    emitter = LoggingEmitter()
    assert ensure_emitter(emitter) is emitter


def test_logging_emitter_logs_messages(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter(debug_enabled=True)
    with caplog.at_level(logging.INFO):
        emitter.warning("careful")
        emitter.event("tangle_complete", {"root": "main", "fragments": 2, "expansions": 1})
    messages = [record.message for record in caplog.records]
    assert "careful" in messages
    assert "Tangled 'main' from 2 fragment(s) with 1 expansion(s)" in messages
    assert emitter.debug_enabled is True


def test_format_event_message() -> None:
    assert (
        format_event_message("fragment_defined", {"label": "a", "operator": "+=", "line": 3})
        == "Fragment 'a' [+=] (line 3)"
    )
    assert format_event_message("something_else", {}) is None


def test_cli_emitter_bridges_state(capsys: pytest.CaptureFixture[str]) -> None:
    state = set_cli_state(verbosity=1, debug=False)
    emitter = CliEmitter(state=state)

    emitter.warning("Heads up", exc=None)
    emitter.error("Boom", exc=None)
    emitter.event("custom", {"flag": True})

    captured = capsys.readouterr()
    assert "Heads up" in captured.err
    assert "Boom" in captured.err
    assert captured.out == ""
    assert state.events["custom"] == [{"flag": True}]


def test_error_messages_name_the_label() -> None:
    assert "main" in str(DuplicateRootError("main", "first"))
    assert "x" in str(UnknownLabelError("x"))
    error = AmbiguousLabelError("pr", ["print a", "print b"])
    assert "'print a'" in str(error) and "'print b'" in str(error)
    assert str(CyclicReferenceError(["a", "b", "a"])).endswith("a -> b -> a")
    assert str(TangleError("bad", line=7)) == "bad (line 7)"



def test_logging_emitter_keeps_fragment_events_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter()
    with caplog.at_level(logging.INFO, logger="tanglesmith"):
        emitter.event("fragment_defined", {"label": "a", "operator": "=", "line": 2})
    assert not caplog.records

    with caplog.at_level(logging.DEBUG, logger="tanglesmith"):
        emitter.event("fragment_defined", {"label": "a", "operator": "=", "line": 2})
    assert [record.levelno for record in caplog.records] == [logging.DEBUG]
    assert caplog.records[0].message == "Fragment 'a' [=] (line 2)"


def test_event_levels() -> None:
    assert event_level("tangle_complete") == logging.INFO
    assert event_level("fragment_defined") == logging.DEBUG
    assert event_level("unlisted") == logging.DEBUG
    assert required_verbosity(logging.INFO) == 1
    assert required_verbosity(logging.DEBUG) == 2


@pytest.mark.parametrize(
    ("verbosity", "summary", "per_fragment"),
    [(0, False, False), (1, True, False), (2, True, True)],
)
def test_cli_emitter_prints_events_by_verbosity(
    capsys: pytest.CaptureFixture[str], verbosity: int, summary: bool, per_fragment: bool
) -> None:
    state = CLIState(verbosity=verbosity)
    emitter = CliEmitter(state=state)

    emitter.event("fragment_defined", {"label": "a", "operator": "=", "line": 2})
    emitter.event("tangle_complete", {"root": "main", "fragments": 1, "expansions": 0})

    err = capsys.readouterr().err
    assert ("Tangled 'main'" in err) is summary
    assert ("Fragment 'a'" in err) is per_fragment
    assert len(state.events["fragment_defined"]) == 1

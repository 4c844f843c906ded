"""Emitter routing core tangle diagnostics to the CLI's stderr console."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from tanglesmith.core.diagnostics import event_level, format_event_message

from .state import CLIState, emit_error, emit_warning, get_cli_state


def required_verbosity(level: int) -> int:
    """Return the ``-v`` count needed to print an event logged at ``level``."""
    return 1 if level >= logging.INFO else 2


class CliEmitter:
    """Report warnings and errors on stderr and record every event on the state.

    Event summaries are printed once the verbosity reaches the event's level:
    ``-v`` shows the tangle summary and ``-vv`` adds a line per fragment.
    """

    def __init__(self, state: CLIState | None = None, *, debug_enabled: bool | None = None) -> None:
        self._state = state or get_cli_state()
        if debug_enabled is None:
            debug_enabled = self._state.show_tracebacks
        self.debug_enabled = bool(debug_enabled)

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        data = dict(payload)
        self._state.record_event(name, data)
        if self._state.verbosity < required_verbosity(event_level(name)):
            return
        message = format_event_message(name, data)
        if message:
            self._state.err_console.log(message)


__all__ = ["CliEmitter", "required_verbosity"]

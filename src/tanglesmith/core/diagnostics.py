"""Diagnostic abstractions shared by the scanner, registry, and tangler."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)

# Events not listed here are reported at DEBUG.
EVENT_LEVELS: dict[str, int] = {
    "fragment_defined": logging.DEBUG,
    "tangle_complete": logging.INFO,
}


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Interface used to surface warnings, errors, and structured events."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Emitter used when nobody observes the tangle."""

    debug_enabled: bool = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        return

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


class LoggingEmitter:
    """Emitter writing tangle diagnostics to a :mod:`logging` logger.

    Events are summarised with :func:`format_event_message` and logged at the
    level :data:`EVENT_LEVELS` assigns them, so per-fragment traces only show
    up once DEBUG is enabled. Tracebacks are attached in debug mode only.
    """

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self._log(logging.WARNING, message, exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self._log(logging.ERROR, message, exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        level = event_level(name)
        if not self._logger.isEnabledFor(level):
            return
        message = format_event_message(name, payload) or f"{name}: {dict(payload)}"
        self._logger.log(level, message)

    def _log(self, level: int, message: str, exc: BaseException | None) -> None:
        exc_info = exc if exc is not None and self.debug_enabled else None
        self._logger.log(level, message, exc_info=exc_info)


def event_level(name: str) -> int:
    """Return the logging level an event is reported at."""
    return EVENT_LEVELS.get(name, logging.DEBUG)


def ensure_emitter(emitter: DiagnosticEmitter | None) -> DiagnosticEmitter:
    """Return a usable emitter, defaulting to the null implementation."""
    return emitter if emitter is not None else NullEmitter()


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly summary for selected diagnostic events."""
    data = dict(payload)

    if name == "fragment_defined":
        label = data.get("label") or "<unknown>"
        operator = data.get("operator") or "root"
        line = data.get("line")
        suffix = f" (line {line})" if line else ""
        return f"Fragment '{label}' [{operator}]{suffix}"

    if name == "tangle_complete":
        root = data.get("root") or "<unknown>"
        fragments = data.get("fragments", 0)
        expansions = data.get("expansions", 0)
        return f"Tangled '{root}' from {fragments} fragment(s) with {expansions} expansion(s)"

    return None


__all__ = [
    "EVENT_LEVELS",
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "ensure_emitter",
    "event_level",
    "format_event_message",
]

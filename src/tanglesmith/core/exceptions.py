"""Exception hierarchy for fragment registration and assembly failures."""

from __future__ import annotations

from collections.abc import Sequence


class TangleError(RuntimeError):
    """Base exception for structural problems found while tangling a document."""

    def __init__(self, message: str, *, label: str | None = None, line: int | None = None) -> None:
        super().__init__(message)
        self.label = label
        self.line = line

    def __str__(self) -> str:
        message = super().__str__()
        if self.line is not None:
            return f"{message} (line {self.line})"
        return message


class DuplicateRootError(TangleError):
    """Raised when a second root declaration is encountered."""

    def __init__(self, label: str, first: str, *, line: int | None = None) -> None:
        super().__init__(
            f"saw multiple root labels: '{label}' (first was '{first}')",
            label=label,
            line=line,
        )
        self.first = first


class DoubleInitError(TangleError):
    """Raised when a fragment that already holds content is initialized again."""

    def __init__(self, label: str, *, line: int | None = None) -> None:
        super().__init__(f"tried to initialize '{label}' twice", label=label, line=line)


class UninitializedAppendError(TangleError):
    """Raised when appending to a label that was never created."""

    def __init__(self, label: str, *, line: int | None = None) -> None:
        super().__init__(
            f"tried to append to '{label}' before initialization", label=label, line=line
        )


class UnknownLabelError(TangleError):
    """Raised when a reference does not resolve to exactly one full label."""

    def __init__(self, label: str, *, line: int | None = None, message: str | None = None) -> None:
        super().__init__(message or f"unknown block '{label}'", label=label, line=line)


class AmbiguousLabelError(UnknownLabelError):
    """Raised when a short form matches several full labels."""

    def __init__(self, label: str, candidates: Sequence[str], *, line: int | None = None) -> None:
        listing = ", ".join(f"'{candidate}'" for candidate in candidates)
        super().__init__(
            label,
            line=line,
            message=f"ambiguous block '{label}' matches {listing}",
        )
        self.candidates = tuple(candidates)


class NoRootError(TangleError):
    """Raised when assembly is attempted without a root declaration."""

    def __init__(self) -> None:
        super().__init__("no root label was declared")


class CyclicReferenceError(TangleError):
    """Raised when a fragment references itself, directly or transitively."""

    def __init__(self, chain: Sequence[str]) -> None:
        path = " -> ".join(chain)
        super().__init__(f"cyclic reference detected: {path}", label=chain[-1] if chain else None)
        self.chain = tuple(chain)


class ExpansionDepthError(TangleError):
    """Raised when nested references exceed the configured depth."""

    def __init__(self, label: str, limit: int) -> None:
        super().__init__(
            f"expanding '{label}' exceeds the maximum nesting depth of {limit}", label=label
        )
        self.limit = limit


class UnterminatedFragmentError(TangleError):
    """Raised when a fragment block reaches the end of the document unclosed."""

    def __init__(self, label: str, *, line: int | None = None) -> None:
        super().__init__(f"fragment '{label}' has no closing fence", label=label, line=line)


class RegistryFrozenError(TangleError):
    """Raised when a frozen registry receives a mutation."""

    def __init__(self, label: str | None = None) -> None:
        super().__init__("the fragment registry is read-only during assembly", label=label)


class ConfigError(TangleError):
    """Raised when a configuration file cannot be loaded or validated."""


__all__ = [
    "AmbiguousLabelError",
    "ConfigError",
    "CyclicReferenceError",
    "DoubleInitError",
    "DuplicateRootError",
    "ExpansionDepthError",
    "NoRootError",
    "RegistryFrozenError",
    "TangleError",
    "UninitializedAppendError",
    "UnknownLabelError",
    "UnterminatedFragmentError",
]

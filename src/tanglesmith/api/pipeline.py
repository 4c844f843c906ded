"""High-level helpers turning literate documents into tangled programs.

Architecture
: `TangleSettings` gathers the configuration model with the optional
  diagnostics applied around a run.
: `TangleResult` carries the emitted text together with the frozen registry
  so callers can inspect fragments after the fact.
: `tangle_document` and `tangle_file` run the scanner, registry, and tangler
  in sequence. Errors propagate unchanged; nothing is written on failure.

Usage Example
:
    >>> from tanglesmith.api import tangle_document
    >>> source = "```\\n«main»\\n```\\n```\\n«main»=\\nprint('hi')\\n```\\n"
    >>> tangle_document(source).text
    "print('hi')\\n"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..core.config import TangleConfig
from ..core.diagnostics import DiagnosticEmitter, ensure_emitter
from ..core.registry import FragmentRegistry
from ..core.scanner import DocumentScanner
from ..core.tangler import Tangler, build_registry, reference_pattern


__all__ = [
    "TangleResult",
    "TangleSettings",
    "tangle_document",
    "tangle_file",
]


@dataclass(slots=True)
class TangleSettings:
    """Run-level knobs applied around the core tangler."""

    config: TangleConfig = field(default_factory=TangleConfig)
    warn_unreferenced: bool = True


@dataclass(slots=True)
class TangleResult:
    """Outcome of a successful tangle run."""

    text: str
    root: str
    registry: FragmentRegistry
    expansions: int = 0
    source: Path | None = None

    def write_to(self, target: Path, *, encoding: str = "utf-8") -> None:
        """Persist the tangled text, creating parent directories as needed."""
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.text, encoding=encoding)


def tangle_document(
    text: str,
    *,
    settings: TangleSettings | None = None,
    emitter: DiagnosticEmitter | None = None,
    source: Path | None = None,
) -> TangleResult:
    """Tangle an in-memory document."""
    settings = settings or TangleSettings()
    config = settings.config
    emitter = ensure_emitter(emitter)

    scanner = DocumentScanner(
        text, left_marker=config.left_marker, right_marker=config.right_marker
    )
    registry = build_registry(scanner, config=config, emitter=emitter)
    tangler = Tangler(registry, config=config, emitter=emitter)
    output = tangler.tangle()

    if settings.warn_unreferenced:
        for label in registry.unreferenced_labels(reference_pattern(config)):
            emitter.warning(f"Fragment '{label}' is never referenced.")

    root = registry.root_label
    assert root is not None
    return TangleResult(
        text=output,
        root=root,
        registry=registry,
        expansions=tangler.expansions,
        source=source,
    )


def tangle_file(
    path: Path,
    *,
    settings: TangleSettings | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> TangleResult:
    """Read a document from disk and tangle it."""
    settings = settings or TangleSettings()
    text = path.read_text(encoding=settings.config.encoding)
    return tangle_document(text, settings=settings, emitter=emitter, source=path)

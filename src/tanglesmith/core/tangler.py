"""Assembly of the root fragment by recursive reference expansion."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import logging
import re

from .config import TangleConfig
from .diagnostics import DiagnosticEmitter, ensure_emitter
from .exceptions import CyclicReferenceError, ExpansionDepthError, NoRootError
from .labels import normalise_label
from .registry import FragmentRegistry
from .scanner import BlockOperator, DocumentScanner, TaggedBlock


logger = logging.getLogger(__name__)


def reference_pattern(config: TangleConfig) -> re.Pattern[str]:
    """Return the pattern matching a bracketed reference on a single line."""
    return re.compile(rf"{re.escape(config.left_marker)}(.*?){re.escape(config.right_marker)}")


def build_registry(
    blocks: Iterable[TaggedBlock],
    *,
    config: TangleConfig | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> FragmentRegistry:
    """Feed tagged blocks into a fresh registry and freeze it."""
    config = config or TangleConfig()
    emitter = ensure_emitter(emitter)
    registry = FragmentRegistry(
        strict_labels=config.strict_labels,
        prefer_exact=config.prefer_exact_match,
        emitter=emitter,
    )
    for block in blocks:
        if block.operator is BlockOperator.ROOT:
            fragment = registry.declare_root(block.label, block.content, line=block.line)
        elif block.operator is BlockOperator.INITIALIZE:
            fragment = registry.initialize(block.label, block.content, line=block.line)
        else:
            fragment = registry.append(block.label, block.content, line=block.line)
        emitter.event(
            "fragment_defined",
            {
                "label": fragment.label,
                "operator": block.operator.value or "root",
                "line": block.line,
            },
        )
    return registry.freeze()


@dataclass(slots=True)
class _Frame:
    label: str
    text: str
    cursor: int = 0


class Tangler:
    """Expand the root fragment of a populated registry into program text."""

    def __init__(
        self,
        registry: FragmentRegistry,
        *,
        config: TangleConfig | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.registry = registry
        self.config = config or TangleConfig()
        self._emitter = ensure_emitter(emitter)
        self._pattern = reference_pattern(self.config)
        self.expansions = 0

    def tangle(self) -> str:
        """Return the fully expanded text of the root fragment.

        References are expanded leftmost first. Each resolved fragment is
        walked in turn before the text following its reference, which yields
        the same bytes as substituting the first reference and rescanning.
        """
        root = self.registry.root
        if root is None:
            raise NoRootError()

        self.expansions = 0
        pieces: list[str] = []
        stack = [_Frame(root.label, root.content)]
        while stack:
            frame = stack[-1]
            match = self._pattern.search(frame.text, frame.cursor)
            if match is None:
                pieces.append(frame.text[frame.cursor :])
                stack.pop()
                continue

            pieces.append(frame.text[frame.cursor : match.start()])
            frame.cursor = match.end()
            fragment = self.registry.fragment(normalise_label(match.group(1)))

            active = [entry.label for entry in stack]
            if fragment.label in active:
                raise CyclicReferenceError([*active, fragment.label])
            if len(stack) >= self.config.max_depth:
                raise ExpansionDepthError(fragment.label, self.config.max_depth)

            logger.debug("expanding '%s' inside '%s'", fragment.label, frame.label)
            stack.append(_Frame(fragment.label, fragment.content))
            self.expansions += 1

        self._emitter.event(
            "tangle_complete",
            {
                "root": root.label,
                "fragments": len(self.registry),
                "expansions": self.expansions,
            },
        )
        return "".join(pieces)


def tangle_text(
    text: str,
    *,
    config: TangleConfig | None = None,
    emitter: DiagnosticEmitter | None = None,
) -> str:
    """Scan ``text``, build its registry, and return the tangled program."""
    config = config or TangleConfig()
    scanner = DocumentScanner(
        text, left_marker=config.left_marker, right_marker=config.right_marker
    )
    registry = build_registry(scanner, config=config, emitter=emitter)
    return Tangler(registry, config=config, emitter=emitter).tangle()


__all__ = ["Tangler", "build_registry", "reference_pattern", "tangle_text"]

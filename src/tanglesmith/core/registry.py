"""Registry mapping full fragment labels to their accumulated content."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import logging
import re
from types import MappingProxyType

from .diagnostics import DiagnosticEmitter, ensure_emitter
from .exceptions import (
    AmbiguousLabelError,
    DoubleInitError,
    DuplicateRootError,
    RegistryFrozenError,
    UninitializedAppendError,
    UnknownLabelError,
)
from .labels import matching_labels, resolve_label


logger = logging.getLogger(__name__)


class Fragment:
    """Named piece of document text, grown only by appending.

    ``provisional`` marks text taken from a root declaration's body. It stands
    in for the root only until the document defines the root explicitly.
    """

    __slots__ = ("_label", "appends", "content", "defined_at", "provisional")

    def __init__(
        self,
        label: str,
        content: str = "",
        *,
        defined_at: int | None = None,
        provisional: bool = False,
    ) -> None:
        self._label = label
        self.content = content
        self.defined_at = defined_at
        self.appends = 0
        self.provisional = provisional

    @property
    def label(self) -> str:
        return self._label

    def __repr__(self) -> str:
        return (
            f"Fragment(label={self._label!r}, content={self.content!r}, "
            f"defined_at={self.defined_at!r}, appends={self.appends!r})"
        )


class FragmentRegistry:
    """Mapping from full label to fragment, plus the distinguished root label.

    The registry is populated in document order and never shrinks. Once
    frozen it rejects every mutation, which is how assembly treats it.
    """

    def __init__(
        self,
        *,
        strict_labels: bool = False,
        prefer_exact: bool = False,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self._fragments: dict[str, Fragment] = {}
        self._root: str | None = None
        self._frozen = False
        self.strict_labels = strict_labels
        self.prefer_exact = prefer_exact
        self._emitter = ensure_emitter(emitter)

    @property
    def root_label(self) -> str | None:
        return self._root

    @property
    def root(self) -> Fragment | None:
        if self._root is None:
            return None
        return self._fragments[self._root]

    @property
    def labels(self) -> list[str]:
        return list(self._fragments)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, label: object) -> bool:
        return label in self._fragments

    def __len__(self) -> int:
        return len(self._fragments)

    def __iter__(self) -> Iterator[Fragment]:
        return iter(self._fragments.values())

    def resolve(self, label: str) -> str | None:
        """Resolve a possibly abbreviated label against the current labels."""
        return resolve_label(label, self._fragments, prefer_exact=self.prefer_exact)

    def fragment(self, label: str) -> Fragment:
        """Return the fragment a label resolves to."""
        full = self.resolve(label)
        if full is None:
            raise self._unresolved(label)
        return self._fragments[full]

    def lookup(self, label: str) -> str:
        """Return the content of the fragment a label resolves to."""
        return self.fragment(label).content

    def declare_root(self, label: str, content: str = "", *, line: int | None = None) -> Fragment:
        """Create the empty root fragment.

        A non-blank body is kept as provisional content: it is the root's text
        unless a later ``=`` or ``+=`` block defines the root, which replaces it.
        """
        self._check_mutable(label)
        if self._root is not None:
            raise DuplicateRootError(label, self._root, line=line)
        fragment = self._fragments.get(label)
        if fragment is None:
            fragment = Fragment(label, defined_at=line)
            self._fragments[label] = fragment
        else:
            fragment.content = ""
            fragment.appends = 0
        fragment.provisional = bool(content.strip())
        if fragment.provisional:
            fragment.content = content
        self._root = label
        logger.debug("declared root fragment '%s'", label)
        return fragment

    def initialize(self, label: str, content: str, *, line: int | None = None) -> Fragment:
        """Set the content of a fragment, creating it when the label is new."""
        self._check_mutable(label)
        full = self.resolve(label)
        if full is None:
            candidates = matching_labels(label, self._fragments)
            if len(candidates) > 1:
                if self.strict_labels:
                    raise AmbiguousLabelError(label, candidates, line=line)
                self._emitter.warning(
                    f"Ambiguous short form '{label}' matches {len(candidates)} labels; "
                    f"registering it as a new label."
                )
            full = label

        fragment = self._fragments.get(full)
        if fragment is None:
            fragment = Fragment(full, content, defined_at=line)
            self._fragments[full] = fragment
            logger.debug("created fragment '%s'", full)
            return fragment

        if fragment.content and not fragment.provisional:
            raise DoubleInitError(full, line=line)
        fragment.content = content
        fragment.provisional = False
        if fragment.defined_at is None:
            fragment.defined_at = line
        logger.debug("initialized fragment '%s'", full)
        return fragment

    def append(self, label: str, content: str, *, line: int | None = None) -> Fragment:
        """Concatenate ``content`` onto an existing fragment."""
        self._check_mutable(label)
        full = self.resolve(label)
        if full is None:
            raise UninitializedAppendError(label, line=line)
        fragment = self._fragments[full]
        if fragment.provisional:
            fragment.content = ""
            fragment.provisional = False
        fragment.content += content
        fragment.appends += 1
        logger.debug("appended %d character(s) to fragment '%s'", len(content), full)
        return fragment

    def freeze(self) -> FragmentRegistry:
        """Reject further mutations; returns ``self`` for chaining."""
        self._frozen = True
        return self

    def snapshot(self) -> Mapping[str, str]:
        """Return a read-only view of label to content."""
        return MappingProxyType(
            {label: fragment.content for label, fragment in self._fragments.items()}
        )

    def unreferenced_labels(self, pattern: re.Pattern[str]) -> list[str]:
        """Return non-root labels that no fragment references."""
        referenced: set[str] = set()
        for fragment in self._fragments.values():
            for match in pattern.finditer(fragment.content):
                full = self.resolve(match.group(1).strip())
                if full is not None:
                    referenced.add(full)
        return [
            label for label in self._fragments if label != self._root and label not in referenced
        ]

    def _check_mutable(self, label: str) -> None:
        if self._frozen:
            raise RegistryFrozenError(label)

    def _unresolved(self, label: str) -> UnknownLabelError:
        candidates = matching_labels(label, self._fragments)
        if len(candidates) > 1:
            return AmbiguousLabelError(label, candidates)
        return UnknownLabelError(label)


__all__ = ["Fragment", "FragmentRegistry"]

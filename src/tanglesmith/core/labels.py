"""Short-form label resolution against the set of known full labels."""

from __future__ import annotations

from collections.abc import Iterable


def normalise_label(raw: str) -> str:
    """Strip the whitespace surrounding a label as written in the document."""
    return raw.strip()


def matching_labels(candidate: str, labels: Iterable[str]) -> list[str]:
    """Return every full label of which ``candidate`` is a prefix."""
    if not candidate:
        return []
    return [label for label in labels if label.startswith(candidate)]


def resolve_label(
    candidate: str,
    labels: Iterable[str],
    *,
    prefer_exact: bool = False,
) -> str | None:
    """Return the unique full label matching ``candidate``, or ``None``.

    A label is a prefix of itself, so an exact name competes with every longer
    label sharing it. ``prefer_exact`` lets an exact name win that contest.
    Resolution always reflects the labels passed in; nothing is cached.
    """
    matches = matching_labels(candidate, labels)
    if prefer_exact and candidate in matches:
        return candidate
    if len(matches) == 1:
        return matches[0]
    return None


__all__ = ["matching_labels", "normalise_label", "resolve_label"]

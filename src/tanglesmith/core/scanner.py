"""Line-oriented scanner extracting tagged fragment blocks from a document.

A fragment block is a fenced code block whose first line is a bracketed label,
optionally followed by an operator:

    ```python
    «label»+=
    content...
    ```

The scanner walks the document as a small state machine (fence opening,
label line, content, closing fence) and yields one `TaggedBlock` per fragment
in document order. Fenced blocks without a label line are ordinary code and
are skipped whole. References inside content are left untouched.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
import re

from .config import DEFAULT_LEFT_MARKER, DEFAULT_RIGHT_MARKER
from .exceptions import UnterminatedFragmentError
from .labels import normalise_label


FENCE = "```"


class BlockOperator(Enum):
    """Role of a tagged block within the registry."""

    ROOT = ""
    INITIALIZE = "="
    APPEND = "+="


@dataclass(frozen=True, slots=True)
class TaggedBlock:
    """Fragment record produced by the scanner."""

    label: str
    operator: BlockOperator
    content: str
    line: int
    info: str = ""


def _split_lines(text: str) -> Iterator[str]:
    start = 0
    length = len(text)
    while start < length:
        end = text.find("\n", start)
        if end == -1:
            yield text[start:]
            return
        yield text[start : end + 1]
        start = end + 1


def _bare(line: str) -> str:
    return line.rstrip("\n").removesuffix("\r")


def _opens_fence(line: str) -> bool:
    return line.startswith(FENCE)


def _closes_fence(line: str) -> bool:
    return _bare(line) == FENCE


def _find_closing_fence(lines: list[str], start: int) -> int | None:
    for index in range(start, len(lines)):
        if _closes_fence(lines[index]):
            return index
    return None


class DocumentScanner:
    """Restartable iterable over the fragment blocks of a document."""

    def __init__(
        self,
        text: str,
        *,
        left_marker: str = DEFAULT_LEFT_MARKER,
        right_marker: str = DEFAULT_RIGHT_MARKER,
    ) -> None:
        self.text = text
        self._header = re.compile(
            rf"{re.escape(left_marker)}(.+?){re.escape(right_marker)}(\+?=)?"
        )

    def __iter__(self) -> Iterator[TaggedBlock]:
        return self._scan()

    def parse_header(self, line: str) -> tuple[str, BlockOperator] | None:
        """Return the label and operator of a label line, or ``None``."""
        match = self._header.fullmatch(_bare(line))
        if match is None:
            return None
        label = normalise_label(match.group(1))
        if not label:
            return None
        return label, BlockOperator(match.group(2) or "")

    def _scan(self) -> Iterator[TaggedBlock]:
        lines = list(_split_lines(self.text))
        index = 0
        while index < len(lines):
            opening = lines[index]
            if not _opens_fence(opening):
                index += 1
                continue

            header = self.parse_header(lines[index + 1]) if index + 1 < len(lines) else None
            if header is None:
                closing = _find_closing_fence(lines, index + 1)
                index = len(lines) if closing is None else closing + 1
                continue

            label, operator = header
            label_line = index + 2
            closing = _find_closing_fence(lines, index + 2)
            if closing is None:
                raise UnterminatedFragmentError(label, line=label_line)

            yield TaggedBlock(
                label=label,
                operator=operator,
                content="".join(lines[index + 2 : closing]),
                line=label_line,
                info=_bare(opening)[len(FENCE) :].strip(),
            )
            index = closing + 1


def scan_blocks(
    text: str,
    *,
    left_marker: str = DEFAULT_LEFT_MARKER,
    right_marker: str = DEFAULT_RIGHT_MARKER,
) -> Iterator[TaggedBlock]:
    """Yield the tagged blocks of ``text`` in document order."""
    yield from DocumentScanner(text, left_marker=left_marker, right_marker=right_marker)


__all__ = ["FENCE", "BlockOperator", "DocumentScanner", "TaggedBlock", "scan_blocks"]

from __future__ import annotations

from pathlib import Path
import textwrap

import pytest

from tanglesmith.api import TangleSettings, tangle_document, tangle_file
from tanglesmith.core.config import TangleConfig
from tanglesmith.core.exceptions import UnknownLabelError


DOCUMENT = textwrap.dedent(
    """\
    # Greeting

    ```
    «greet.py»
    ```

    ```python
    «greet.py»=
    «imports»
    main()
    ```

    ```python
    «imports»=
    from greet import main
    ```

    ```python
    «unused helper»=
    pass
    ```
    """
)


class RecordingEmitter:
    debug_enabled = False

    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.events: list[tuple[str, dict[str, object]]] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        raise AssertionError(message)

    def event(self, name: str, payload: dict[str, object]) -> None:
        self.events.append((name, dict(payload)))


def test_tangle_document_returns_result() -> None:
    result = tangle_document(DOCUMENT)

    assert result.text == "from greet import main\n\nmain()\n"
    assert result.root == "greet.py"
    assert result.expansions == 1
    assert result.source is None
    assert result.registry.labels == ["greet.py", "imports", "unused helper"]


def test_tangle_document_warns_about_unreferenced_fragments() -> None:
    emitter = RecordingEmitter()
    tangle_document(DOCUMENT, emitter=emitter)

    assert emitter.warnings == ["Fragment 'unused helper' is never referenced."]


def test_unreferenced_warning_can_be_disabled() -> None:
    emitter = RecordingEmitter()
    tangle_document(DOCUMENT, settings=TangleSettings(warn_unreferenced=False), emitter=emitter)

    assert emitter.warnings == []


def test_tangle_document_emits_events() -> None:
    emitter = RecordingEmitter()
    tangle_document(DOCUMENT, emitter=emitter)

    names = [name for name, _payload in emitter.events]
    assert names.count("fragment_defined") == 4
    assert names[-1] == "tangle_complete"
    assert emitter.events[-1][1] == {"root": "greet.py", "fragments": 3, "expansions": 1}


def test_tangle_file_reads_and_writes(tmp_path: Path) -> None:
    source = tmp_path / "greet.md"
    source.write_text(DOCUMENT, encoding="utf-8")

    result = tangle_file(source)
    target = tmp_path / "out" / "greet.py"
    result.write_to(target)

    assert result.source == source
    assert target.read_text(encoding="utf-8") == "from greet import main\n\nmain()\n"


def test_tangle_file_honours_encoding(tmp_path: Path) -> None:
    source = tmp_path / "latin.md"
    source.write_text("```\n«main»\n```\n```\n«main»=\ncafé\n```\n", encoding="latin-1")
    settings = TangleSettings(config=TangleConfig(encoding="latin-1"))

    assert tangle_file(source, settings=settings).text == "café\n"


def test_errors_propagate_unchanged() -> None:
    with pytest.raises(UnknownLabelError):
        tangle_document("```\n«main»\n```\n```\n«main»=\n«missing»\n```\n")

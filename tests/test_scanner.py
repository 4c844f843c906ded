from __future__ import annotations

import textwrap

import pytest

from tanglesmith.core.exceptions import UnterminatedFragmentError
from tanglesmith.core.scanner import BlockOperator, DocumentScanner, TaggedBlock, scan_blocks


DOCUMENT = textwrap.dedent(
    """\
    # A tiny program

    ```
    «hello.py»
    ```

    Some narrative text mentioning «not a reference» in prose.

    ```python
    «hello.py»=
    «imports»
    print(greeting)
    ```

    ```python
    «  imports  »=
    greeting = "hi"
    ```

    ```python
    «imports»+=
    extra = 1
    ```
    """
)


def test_scan_yields_blocks_in_document_order() -> None:
    blocks = list(scan_blocks(DOCUMENT))

    assert [(block.label, block.operator) for block in blocks] == [
        ("hello.py", BlockOperator.ROOT),
        ("hello.py", BlockOperator.INITIALIZE),
        ("imports", BlockOperator.INITIALIZE),
        ("imports", BlockOperator.APPEND),
    ]


def test_scan_keeps_content_unstripped() -> None:
    blocks = list(scan_blocks(DOCUMENT))

    assert blocks[0].content == ""
    assert blocks[1].content == "«imports»\nprint(greeting)\n"
    assert blocks[2].content == 'greeting = "hi"\n'
    assert blocks[3].content == "extra = 1\n"


def test_scan_records_line_and_info_string() -> None:
    blocks = list(scan_blocks(DOCUMENT))

    assert blocks[0].line == 4
    assert blocks[0].info == ""
    assert blocks[1].line == 10
    assert blocks[1].info == "python"


def test_scanner_is_restartable() -> None:
    scanner = DocumentScanner(DOCUMENT)

    first = list(scanner)
    second = list(scanner)

    assert first == second
    assert all(isinstance(block, TaggedBlock) for block in first)


def test_ordinary_code_blocks_are_skipped() -> None:
    document = textwrap.dedent(
        """\
        ```python
        x = "«inside ordinary code»"
        ```

        ```
        «main»=
        body
        ```
        """
    )

    blocks = list(scan_blocks(document))

    assert len(blocks) == 1
    assert blocks[0].label == "main"
    assert blocks[0].content == "body\n"


def test_label_line_with_trailing_text_is_not_a_header() -> None:
    document = "```\n«main» = \nbody\n```\n"

    assert list(scan_blocks(document)) == []


def test_blank_label_is_not_a_header() -> None:
    document = "```\n«   »=\nbody\n```\n"

    assert list(scan_blocks(document)) == []


def test_label_may_contain_right_marker() -> None:
    blocks = list(scan_blocks("```\n«a»b»=\nbody\n```\n"))

    assert blocks[0].label == "a»b"
    assert blocks[0].operator is BlockOperator.INITIALIZE


def test_content_may_contain_fence_like_lines() -> None:
    document = "```\n«doc»=\n```python is not a closing fence\nbody\n```\n"

    blocks = list(scan_blocks(document))

    assert blocks[0].content == "```python is not a closing fence\nbody\n"


def test_closing_fence_at_end_of_document_without_newline() -> None:
    blocks = list(scan_blocks("```\n«main»=\nbody\n```"))

    assert blocks[0].content == "body\n"


def test_crlf_structural_lines_are_recognised() -> None:
    blocks = list(scan_blocks("```\r\n«main»=\r\nbody\r\n```\r\n"))

    assert blocks[0].label == "main"
    assert blocks[0].content == "body\r\n"


def test_unterminated_fragment_raises() -> None:
    with pytest.raises(UnterminatedFragmentError) as excinfo:
        list(scan_blocks("intro\n```\n«main»=\nbody\n"))

    assert excinfo.value.label == "main"
    assert excinfo.value.line == 3


def test_custom_markers() -> None:
    blocks = list(scan_blocks("```\n<<main>>+=\nbody\n```\n", left_marker="<<", right_marker=">>"))

    assert blocks[0].label == "main"
    assert blocks[0].operator is BlockOperator.APPEND


def test_scanning_is_lazy() -> None:
    document = "```\n«first»=\na\n```\n```\n«broken»=\nno fence\n"
    iterator = iter(DocumentScanner(document))

    assert next(iterator).label == "first"
    with pytest.raises(UnterminatedFragmentError):
        next(iterator)

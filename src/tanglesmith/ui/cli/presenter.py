"""Rich presenters for CLI summaries."""

from __future__ import annotations

from rich import box
from rich.table import Table
from rich.text import Text

from tanglesmith.core.registry import FragmentRegistry

from .state import CLIState


def _line_count(content: str) -> int:
    if not content:
        return 0
    return content.count("\n") + (0 if content.endswith("\n") else 1)


def build_fragment_table(registry: FragmentRegistry) -> Table:
    """Return a table listing each fragment in definition order."""
    table = Table(
        title="Fragments",
        box=box.SQUARE,
        show_edge=True,
        header_style="bold cyan",
    )
    table.add_column("Label")
    table.add_column("Defined", justify="right")
    table.add_column("Appends", justify="right")
    table.add_column("Lines", justify="right")

    for fragment in registry:
        label = Text(fragment.label)
        if fragment.label == registry.root_label:
            label.stylize("bold green")
            label.append(" (root)", style="green")
        table.add_row(
            label,
            str(fragment.defined_at) if fragment.defined_at is not None else "-",
            str(fragment.appends),
            str(_line_count(fragment.content)),
        )
    return table


def present_fragments(state: CLIState, registry: FragmentRegistry) -> None:
    """Print the fragment table on the stdout console."""
    state.console.print(build_fragment_table(registry))


__all__ = ["build_fragment_table", "present_fragments"]

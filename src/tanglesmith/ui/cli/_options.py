"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
LABELS_PANEL = "Labels"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

InputPathArgument = Annotated[
    Path | None,
    typer.Argument(
        metavar="[INPUT]",
        help="Literate document to tangle. Reads standard input when omitted or '-'.",
        dir_okay=False,
        rich_help_panel=INPUTS_PANEL,
    ),
]

OutputPathArgument = Annotated[
    Path | None,
    typer.Argument(
        metavar="[OUTPUT]",
        help="Destination of the tangled program. Writes standard output when omitted or '-'.",
        dir_okay=False,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML file providing tangling options (an optional 'tanglesmith' section).",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

EncodingOption = Annotated[
    str | None,
    typer.Option(
        "--encoding",
        help="Text encoding of the input document and the output (defaults to utf-8).",
        rich_help_panel=INPUTS_PANEL,
    ),
]

LeftMarkerOption = Annotated[
    str | None,
    typer.Option(
        "--left-marker",
        help="Opening bracket surrounding labels (defaults to '«').",
        rich_help_panel=LABELS_PANEL,
    ),
]

RightMarkerOption = Annotated[
    str | None,
    typer.Option(
        "--right-marker",
        help="Closing bracket surrounding labels (defaults to '»').",
        rich_help_panel=LABELS_PANEL,
    ),
]

StrictOption = Annotated[
    bool,
    typer.Option(
        "--strict",
        help="Fail when an initialization uses an ambiguous short form.",
        rich_help_panel=LABELS_PANEL,
    ),
]

PreferExactOption = Annotated[
    bool,
    typer.Option(
        "--prefer-exact",
        help="Let a reference equal to a full label win over longer labels sharing it.",
        rich_help_panel=LABELS_PANEL,
    ),
]

MaxDepthOption = Annotated[
    int | None,
    typer.Option(
        "--max-depth",
        min=1,
        help="Maximum nesting of references while assembling the root (defaults to 256).",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

ListFragmentsOption = Annotated[
    bool,
    typer.Option(
        "--list",
        help="Print the fragments defined by the document and exit.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

NoWarnUnreferencedOption = Annotated[
    bool,
    typer.Option(
        "--no-warn-unreferenced",
        help="Do not warn about fragments that nothing references.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]


__all__ = [
    "DIAGNOSTICS_PANEL",
    "INPUTS_PANEL",
    "LABELS_PANEL",
    "OUTPUT_PANEL",
    "ConfigOption",
    "DebugOption",
    "EncodingOption",
    "InputPathArgument",
    "LeftMarkerOption",
    "ListFragmentsOption",
    "MaxDepthOption",
    "NoWarnUnreferencedOption",
    "OutputPathArgument",
    "PreferExactOption",
    "RightMarkerOption",
    "StrictOption",
    "VerboseOption",
]

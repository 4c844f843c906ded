"""Implementation of the primary ``tanglesmith`` CLI command."""

from __future__ import annotations

from pathlib import Path
import sys
from typing import Annotated, Any

import click
import typer

from tanglesmith.api import TangleSettings, tangle_document
from tanglesmith.core.config import TangleConfig, load_config
from tanglesmith.core.exceptions import ConfigError, TangleError
from tanglesmith.core.scanner import DocumentScanner
from tanglesmith.core.tangler import build_registry
from tanglesmith.version import get_version

from .._options import (
    DIAGNOSTICS_PANEL,
    ConfigOption,
    DebugOption,
    EncodingOption,
    InputPathArgument,
    LeftMarkerOption,
    ListFragmentsOption,
    MaxDepthOption,
    NoWarnUnreferencedOption,
    OutputPathArgument,
    PreferExactOption,
    RightMarkerOption,
    StrictOption,
    VerboseOption,
)
from ..diagnostics import CliEmitter
from ..presenter import present_fragments
from ..state import configure_logging, emit_error, set_cli_state


STREAM_PLACEHOLDER = "-"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"tanglesmith {get_version()}")
        raise typer.Exit()


def _is_stream(path: Path | None) -> bool:
    return path is None or str(path) == STREAM_PLACEHOLDER


def resolve_config(config_path: Path | None, overrides: dict[str, Any]) -> TangleConfig:
    """Combine an optional configuration file with command-line overrides."""
    base = load_config(config_path) if config_path is not None else TangleConfig()
    return base.merged(overrides)


def read_document(source: Path | None, encoding: str) -> str:
    """Read the whole input document from a file or standard input."""
    if _is_stream(source):
        stream = getattr(sys.stdin, "buffer", None)
        if stream is None:
            return sys.stdin.read()
        return stream.read().decode(encoding)
    assert source is not None
    return source.read_text(encoding=encoding)


def write_program(target: Path | None, text: str, encoding: str) -> None:
    """Write the tangled program to a file or standard output."""
    if _is_stream(target):
        stream = getattr(sys.stdout, "buffer", None)
        if stream is None:
            sys.stdout.write(text)
        else:
            sys.stdout.flush()
            stream.write(text.encode(encoding))
            stream.flush()
        return
    assert target is not None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding=encoding) as handle:
            handle.write(text)
    except OSError as exc:
        raise OSError(f"Failed to write tangled output to '{target}': {exc}") from exc


def tangle(
    input_path: InputPathArgument = None,
    output_path: OutputPathArgument = None,
    config_path: ConfigOption = None,
    encoding: EncodingOption = None,
    left_marker: LeftMarkerOption = None,
    right_marker: RightMarkerOption = None,
    strict: StrictOption = False,
    prefer_exact: PreferExactOption = False,
    max_depth: MaxDepthOption = None,
    list_fragments: ListFragmentsOption = False,
    no_warn_unreferenced: NoWarnUnreferencedOption = False,
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the installed version and exit.",
            rich_help_panel=DIAGNOSTICS_PANEL,
        ),
    ] = False,
) -> None:
    """Extract the fragments of a literate document and tangle them into a program."""

    ctx = click.get_current_context(silent=True)
    typer_ctx = ctx if isinstance(ctx, typer.Context) else None
    state = set_cli_state(ctx=typer_ctx, verbosity=verbose, debug=debug)
    configure_logging(state)

    if typer_ctx is not None and typer_ctx.resilient_parsing:
        return

    try:
        config = resolve_config(
            config_path,
            {
                "left_marker": left_marker,
                "right_marker": right_marker,
                "strict_labels": strict or None,
                "prefer_exact_match": prefer_exact or None,
                "max_depth": max_depth,
                "encoding": encoding,
            },
        )
    except ConfigError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    try:
        text = read_document(input_path, config.encoding)
    except (OSError, UnicodeDecodeError) as exc:
        emit_error(f"Failed to read '{input_path}': {exc}", exception=exc)
        raise typer.Exit(code=1) from exc

    emitter = CliEmitter(state)

    if list_fragments:
        scanner = DocumentScanner(
            text, left_marker=config.left_marker, right_marker=config.right_marker
        )
        try:
            registry = build_registry(scanner, config=config, emitter=emitter)
        except TangleError as exc:
            emit_error(str(exc), exception=exc)
            raise typer.Exit(code=1) from exc
        present_fragments(state, registry)
        raise typer.Exit()

    settings = TangleSettings(config=config, warn_unreferenced=not no_warn_unreferenced)
    source = None if _is_stream(input_path) else input_path
    try:
        result = tangle_document(text, settings=settings, emitter=emitter, source=source)
    except TangleError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    try:
        write_program(output_path, result.text, config.encoding)
    except (OSError, UnicodeEncodeError) as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["read_document", "resolve_config", "tangle", "write_program"]

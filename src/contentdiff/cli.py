#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/contentdiff/cli.py
"""Command-line interface for contentdiff.

Compares two markup documents and writes the annotated result as laid-out
text, a standalone HTML page or JSON::

    contentdiff old.txt new.txt
    contentdiff old.txt new.txt --format html -o diff.html
    contentdiff old.txt new.txt --footer "Page {page} of {total}" --page-height 40

Diagnostics go to stderr. Exit codes: 0 success, 1 unexpected error,
3 invalid options or configuration, 4 file error, 6 evaluation error,
7 layout or rendering error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

from contentdiff import __version__
from contentdiff.cache import MemoryCache
from contentdiff.compilers.markup import MarkupCompiler
from contentdiff.config import load_config_with_priority, options_from_config
from contentdiff.diagnostics import Diagnostic, Tracer
from contentdiff.diff.api import DiffCompilation, compile_diff
from contentdiff.exceptions import (
    CompilationError,
    ContentDiffError,
    EvaluationError,
    LayoutError,
    RenderingError,
    SourceFileError,
    ValidationError,
)
from contentdiff.logging_utils import configure_logging
from contentdiff.options import DiffOptions
from contentdiff.source import Source
from contentdiff.typeset.text_engine import TextTypesetter

if TYPE_CHECKING:
    from rich.console import Console

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_EVALUATION_ERROR = 6
EXIT_LAYOUT_ERROR = 7

OUTPUT_FORMATS = ("text", "html", "json")


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to a CLI exit code."""
    if isinstance(exception, EvaluationError):
        return EXIT_EVALUATION_ERROR
    if isinstance(exception, (LayoutError, RenderingError)):
        return EXIT_LAYOUT_ERROR
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, SourceFileError):
        return EXIT_FILE_ERROR
    return EXIT_ERROR


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from e
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="contentdiff",
        description="Compare two markup documents and annotate insertions and deletions.",
    )
    parser.add_argument("old", help="Old version of the document")
    parser.add_argument("new", help="New version of the document")
    parser.add_argument("-o", "--output", help="Write output to this file instead of stdout")
    parser.add_argument("--format", choices=OUTPUT_FORMATS, default="text", help="Output format (default: text)")
    parser.add_argument("--config", help="Configuration file (.toml, .yaml, .json or pyproject.toml)")

    layout = parser.add_argument_group("layout")
    layout.add_argument("--max-attempts", type=_positive_int, help="Maximum number of layout passes")
    layout.add_argument("--page-width", type=_positive_int, help="Characters per line")
    layout.add_argument("--page-height", type=_positive_int, help="Lines per page")
    layout.add_argument("--footer", help="Footer template, e.g. 'Page {page} of {total}'")

    diffing = parser.add_argument_group("diff")
    diffing.add_argument("--equal-source", choices=("old", "new"), help="Document unchanged text is taken from")
    diffing.add_argument("--coalesce", choices=("word", "following"), help="Space coalescing mode")
    diffing.add_argument("--parallel", action="store_true", help="Evaluate both documents concurrently")

    output = parser.add_argument_group("output")
    output.add_argument(
        "--color",
        choices=("auto", "always", "never"),
        default="auto",
        help="Colorize text output (default: auto, when writing to a terminal)",
    )
    output.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    output.add_argument("--log-file", help="Also write log records to this file")
    output.add_argument("--trace", action="store_true", help="Verbose log format with timestamps")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def apply_cli_overrides(options: DiffOptions, args: argparse.Namespace) -> DiffOptions:
    """Layer command line flags over options loaded from configuration."""
    layout_updates = {
        name: value
        for name, value in (
            ("max_attempts", args.max_attempts),
            ("page_width", args.page_width),
            ("page_height", args.page_height),
            ("footer", args.footer),
        )
        if value is not None
    }
    updates: dict = {}
    if layout_updates:
        updates["layout"] = options.layout.create_updated(**layout_updates)
    if args.equal_source is not None:
        updates["markers"] = options.markers.create_updated(equal_source=args.equal_source)
    if args.coalesce is not None:
        updates["coalesce"] = args.coalesce
    if args.parallel:
        updates["parallel_evaluation"] = True
    return options.create_updated(**updates) if updates else options


def _stderr_console() -> Console:
    from rich.console import Console

    return Console(stderr=True, highlight=False, soft_wrap=True)


def print_diagnostics(diagnostics: Iterable[Diagnostic], console: Optional[Console] = None) -> None:
    """Print diagnostics with their hints to stderr."""
    from rich.text import Text

    console = console or _stderr_console()
    for diagnostic in diagnostics:
        style = "bold red" if diagnostic.is_error else "yellow"
        line = Text()
        if diagnostic.span is not None:
            line.append(f"{diagnostic.span}: ", style="bold")
        line.append(f"{diagnostic.severity.value}: ", style=style)
        line.append(diagnostic.message)
        console.print(line)
        for hint in diagnostic.hints:
            console.print(Text(f"  hint: {hint}", style="cyan"))


def _use_color(choice: str, output_path: Optional[str]) -> bool:
    if choice == "always":
        return True
    if choice == "never" or output_path:
        return False
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(callable(isatty) and isatty())


def render_output(result: DiffCompilation, output_format: str, color: bool, options: DiffOptions) -> str:
    """Render a compilation in the requested format."""
    if output_format == "html":
        from contentdiff.renderers.html import HtmlDiffRenderer

        return HtmlDiffRenderer().render(result.merged, result.statistics)
    if output_format == "json":
        from contentdiff.renderers.json import JsonDiffRenderer

        return JsonDiffRenderer().render(result)

    from contentdiff.renderers.terminal import TerminalRenderer

    return TerminalRenderer(color=color, markers=options.markers).render(result.document)


def _write_output(text: str, output_path: Optional[str]) -> None:
    if not output_path:
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")
        return
    try:
        Path(output_path).write_text(text, encoding="utf-8")
    except OSError as e:
        raise SourceFileError(
            f"Cannot write output file {output_path}: {e}", file_path=output_path, original_error=e
        ) from e
    logger.info("wrote %s", output_path)


def main(args: Optional[list[str]] = None) -> int:
    """Execute the CLI and return the exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(
        parsed_args.log_level,
        log_file=parsed_args.log_file,
        trace_mode=parsed_args.trace,
        use_rich=sys.stderr.isatty(),
    )

    tracer = Tracer()
    console = _stderr_console()
    try:
        options = apply_cli_overrides(options_from_config(load_config_with_priority(parsed_args.config)), parsed_args)
        old_source = Source.from_path(parsed_args.old)
        new_source = Source.from_path(parsed_args.new)

        compiler = MarkupCompiler(cache=MemoryCache())
        result = compile_diff(old_source, new_source, compiler, TextTypesetter(), options, tracer)

        color = _use_color(parsed_args.color, parsed_args.output)
        _write_output(render_output(result, parsed_args.format, color, options), parsed_args.output)
    except CompilationError as e:
        print_diagnostics([*e.diagnostics, *tracer.warnings()], console)
        return get_exit_code_for_exception(e)
    except ContentDiffError as e:
        console.print(f"Error: {e}", markup=False)
        return get_exit_code_for_exception(e)
    except ValueError as e:
        console.print(f"Error: {e}", markup=False)
        return EXIT_VALIDATION_ERROR
    except Exception as e:
        logger.exception("unexpected failure")
        console.print(f"Unexpected error: {e}", markup=False)
        return EXIT_ERROR

    print_diagnostics(result.warnings, console)
    return EXIT_SUCCESS


__all__ = [
    "EXIT_ERROR",
    "EXIT_EVALUATION_ERROR",
    "EXIT_FILE_ERROR",
    "EXIT_LAYOUT_ERROR",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_ERROR",
    "create_parser",
    "get_exit_code_for_exception",
    "main",
]

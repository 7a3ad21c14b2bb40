"""Command-line interface for mkparse."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from mkparse.errors import CLIError, Diagnostic, MakefileError, format_diagnostic
from mkparse.lexer import Tokenizer
from mkparse.main import PipelineOptions, explain_source, process_file
from mkparse.serialization import tokens_to_json


def build_parser() -> argparse.ArgumentParser:
    """Build argparse options for the mkparse CLI."""
    parser = argparse.ArgumentParser(prog="mkparse", description="Parse, expand and re-print rule files")
    parser.add_argument("--path", help="Input rule file (required)")
    parser.add_argument("--out", help="Output file path (default: stdout)")
    parser.add_argument(
        "--separator",
        default="",
        help="Separator used when expanding $< (default: empty string)",
    )
    parser.add_argument("--no-expand", action="store_true", help="Skip automatic variable expansion")
    parser.add_argument("--emit-ast", help="Write AST JSON to this path")
    parser.add_argument("--tokens", action="store_true", help="Print the token stream as JSON and exit")
    parser.add_argument("--explain", action="store_true", help="Print tokens, AST and output as JSON and exit")
    parser.add_argument("--verbose", action="store_true", help="Log informational messages to stderr")
    parser.add_argument("--debug", action="store_true", help="Log debug traces to stderr")
    return parser


def configure_logging(*, verbose: bool = False, debug: bool = False) -> None:
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def run(argv: list[str] | None = None) -> int:
    """Run CLI and return shell exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, debug=args.debug)

    try:
        if not args.path:
            raise CLIError(code="CLI001", message="Missing required option --path.", hint="Run mkparse --help for usage.")
        path = Path(args.path)
        if not path.is_file():
            raise CLIError(code="CLI002", message=f"Input file '{path}' does not exist.")

        options = PipelineOptions(expand=not args.no_expand, separator=args.separator)

        if args.tokens:
            with path.open("r", encoding=options.encoding) as reader:
                tokens = Tokenizer(reader, filename=str(path)).tokenize()
            print(tokens_to_json(tokens))
            return 0

        if args.explain:
            source = path.read_text(encoding=options.encoding)
            payload = explain_source(source, filename=str(path), options=options)
            print(json.dumps(payload, indent=2, sort_keys=True))
            return 0

        artifacts = process_file(
            path,
            output_path=args.out,
            emit_ast_path=args.emit_ast,
            options=options,
        )
        if not args.out:
            sys.stdout.write(artifacts.text)
        return 0

    except CLIError as err:
        print(format_diagnostic(err.to_diagnostic()), file=sys.stderr)
        return 2
    except MakefileError as err:
        print(format_diagnostic(err.to_diagnostic()), file=sys.stderr)
        return 1
    except OSError as err:
        diag = Diagnostic(code="CLI003", message=f"I/O error: {err}", hint="Check input and output paths.")
        print(format_diagnostic(diag), file=sys.stderr)
        return 2
    except Exception as err:  # pragma: no cover - last-resort report
        diag = Diagnostic(code="CLI999", message=f"Internal error: {err}", hint="Run with --debug")
        print(format_diagnostic(diag), file=sys.stderr)
        return 3


if __name__ == "__main__":
    raise SystemExit(run())

"""Top-level pipeline orchestration for mkparse."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from mkparse.ast import Program
from mkparse.expander import Expander
from mkparse.lexer import Tokenizer
from mkparse.parser import Parser
from mkparse.printer import render_program
from mkparse.serialization import ast_to_dict, write_program


logger = logging.getLogger(__name__)


@dataclass
class PipelineOptions:
    """Knobs shared by the library entry points and the CLI."""

    expand: bool = True
    separator: str = ""
    encoding: str = "utf-8"


@dataclass
class ProcessArtifacts:
    """Pipeline output: the expanded program and its rendered text."""

    program: Program
    text: str


def process_source(
    source: str | TextIO,
    *,
    filename: str = "<input>",
    options: PipelineOptions | None = None,
) -> ProcessArtifacts:
    """Parse, expand and render rule-file text."""
    opts = options or PipelineOptions()
    program = Parser(Tokenizer(source, filename=filename)).build()
    if opts.expand:
        Expander(program, separator=opts.separator).expand()
    text = render_program(program)
    logger.debug("Rendered %d target(s) from %s", len(program.targets()), filename)
    return ProcessArtifacts(program=program, text=text)


def process_file(
    input_path: str | Path,
    *,
    output_path: str | Path | None = None,
    emit_ast_path: str | Path | None = None,
    options: PipelineOptions | None = None,
) -> ProcessArtifacts:
    """Process a rule file, optionally writing the rendering and AST JSON.

    The output file is written only after the whole pipeline succeeded.
    """
    opts = options or PipelineOptions()
    path = Path(input_path)
    with path.open("r", encoding=opts.encoding) as reader:
        artifacts = process_source(reader, filename=str(path), options=opts)

    if output_path is not None:
        Path(output_path).write_text(artifacts.text, encoding=opts.encoding)
    if emit_ast_path is not None:
        write_program(artifacts.program, emit_ast_path)
    return artifacts


def explain_source(source: str, *, filename: str = "<input>", options: PipelineOptions | None = None) -> dict[str, Any]:
    """Return a JSON-compatible explanation payload with tokens and AST."""
    opts = options or PipelineOptions()
    tokens = Tokenizer(source, filename=filename).tokenize()
    artifacts = process_source(source, filename=filename, options=opts)
    return {
        "tokens": [token.to_dict() for token in tokens],
        "ast": ast_to_dict(artifacts.program),
        "output": artifacts.text,
    }


if __name__ == "__main__":
    from mkparse.cli import run

    raise SystemExit(run())

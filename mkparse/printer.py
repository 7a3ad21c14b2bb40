"""Renders a program back to rule-file text."""

from __future__ import annotations

import io
import logging
from typing import TextIO

from mkparse.ast import Program, Target
from mkparse.errors import Diagnostic, format_diagnostic


logger = logging.getLogger(__name__)


class Printer:
    """Writes targets to a text sink without touching the AST."""

    def __init__(self, sink: TextIO) -> None:
        self.sink = sink

    def print_program(self, program: Program) -> list[Diagnostic]:
        """Write every target and return diagnostics for skipped nodes."""
        skipped: list[Diagnostic] = []
        for node in program.tree:
            if isinstance(node, Target):
                self.print_target(node)
                continue
            diag = Diagnostic(
                code="PRN001",
                message=f"Skipping {type(node).__name__} node during printing.",
                position=node.position,
            )
            skipped.append(diag)
            logger.warning("%s", format_diagnostic(diag))
        return skipped

    def print_target(self, target: Target) -> None:
        self.sink.write(f"{target.head.value()}:")
        for expr in target.prerequisites:
            self.sink.write(f" {expr.value()}")
        self.sink.write("\n")
        for command in target.recipe:
            self.sink.write(f"\t{command.value()}\n")


def render_program(program: Program) -> str:
    """Render ``program`` into a string."""
    buffer = io.StringIO()
    Printer(buffer).print_program(program)
    return buffer.getvalue()

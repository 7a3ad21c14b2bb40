"""Automatic variable expansion over a parsed program."""

from __future__ import annotations

import logging

from mkparse.ast import ALL_PREREQUISITES, Identifier, Program, Target, VariableReference
from mkparse.errors import Diagnostic, ExpansionError, format_diagnostic


logger = logging.getLogger(__name__)


class Expander:
    """Resolves ``$<`` references in recipes from each rule's prerequisites.

    Only identifier prerequisites contribute; variable prerequisites are not
    expanded recursively. The collected names are joined with ``separator``,
    which is empty unless the caller asks otherwise. Running the pass twice
    recomputes the same values.
    """

    def __init__(self, program: Program, separator: str = "") -> None:
        self.program = program
        self.separator = separator

    def expand(self) -> Program:
        """Expand every target in program order, in place."""
        for node in self.program.tree:
            if isinstance(node, Target):
                self._expand_target(node)
                continue
            diag = Diagnostic(
                code="EXP001",
                message=f"Skipping {type(node).__name__} node during expansion.",
                position=node.position,
            )
            self.program.diagnostics.append(diag)
            logger.warning("%s", format_diagnostic(diag))
        return self.program

    def _expand_target(self, target: Target) -> None:
        prerequisites = [expr.name for expr in target.prerequisites if isinstance(expr, Identifier)]
        joined = self.separator.join(prerequisites)

        for command in target.recipe:
            for term in command.terms:
                if isinstance(term, Identifier):
                    continue
                if not isinstance(term, VariableReference):
                    raise ExpansionError(
                        code="EXP002",
                        message=f"Unknown term type {type(term).__name__} in recipe.",
                        position=command.position,
                    )
                if term.name == ALL_PREREQUISITES:
                    term.resolved_value = joined
                    self.program.symbols[ALL_PREREQUISITES] = joined

        target.expanded = True
        logger.debug("Expanded target %r", target.head.name)


def expand_program(program: Program, separator: str = "") -> Program:
    """Run the expansion pass over ``program`` and return it."""
    return Expander(program, separator=separator).expand()

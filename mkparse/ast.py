"""AST model for rule files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from mkparse.errors import Diagnostic
from mkparse.source_map import SourcePosition


# Reserved name of the automatic "all prerequisites" variable.
ALL_PREREQUISITES = "$^"


@dataclass
class Identifier:
    """Bare literal term."""

    name: str
    position: SourcePosition | None = None

    def value(self) -> str:
        return self.name


@dataclass
class VariableReference:
    """A ``$(NAME)`` or ``$<`` reference; its value is set by expansion."""

    name: str
    resolved_value: str = ""
    position: SourcePosition | None = None

    @property
    def is_automatic(self) -> bool:
        return self.name == ALL_PREREQUISITES

    def value(self) -> str:
        return self.resolved_value


@dataclass
class CommandLine:
    """One recipe line; its value is the terms joined by single spaces."""

    terms: list[Term] = field(default_factory=list)
    position: SourcePosition | None = None

    def value(self) -> str:
        return " ".join(term.value() for term in self.terms)


Term = Union[Identifier, VariableReference]
Expression = Union[Identifier, VariableReference, CommandLine]


@dataclass
class Target:
    """Rule node: head, ordered prerequisites and recipe lines."""

    head: Term
    prerequisites: list[Term] = field(default_factory=list)
    recipe: list[CommandLine] = field(default_factory=list)
    expanded: bool = False
    position: SourcePosition | None = None


@dataclass
class Assignment:
    """Recognised ``name = ...`` statement; the right-hand side is not kept."""

    head: Term
    position: SourcePosition | None = None


AstNode = Union[Target, Assignment]


@dataclass
class Program:
    """Root of a parsed rule file."""

    tree: list[AstNode] = field(default_factory=list)
    symbols: dict[str, str] = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def targets(self) -> list[Target]:
        """Return the rule nodes in program order."""
        return [node for node in self.tree if isinstance(node, Target)]

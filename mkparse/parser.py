"""Recursive-descent parser building the rule-file AST.

The grammar, with left recursion turned into iteration::

    program       := { statement }
    statement     := target | assignment | <ignored token>
    target        := term ':' prerequisites { recipe }
    assignment    := term '=' <rest of line>
    prerequisites := { SPACE | term } NEWLINE
    recipe        := TAB { SPACE | term } NEWLINE
    term          := IDENTIFIER | variable
    variable      := '$' ( '(' IDENTIFIER ')' | '<' )

Grammar violations raise :class:`ParseError`; nothing is recovered and no
partial program is returned.
"""

from __future__ import annotations

import logging
from typing import Final, TextIO

from mkparse.ast import (
    ALL_PREREQUISITES,
    Assignment,
    CommandLine,
    Identifier,
    Program,
    Target,
    Term,
    VariableReference,
)
from mkparse.errors import Diagnostic, ParseError, format_diagnostic
from mkparse.lexer import Tokenizer
from mkparse.source_map import SourcePosition
from mkparse.tokens import Token, TokenKind, token_kind_name


logger = logging.getLogger(__name__)

_TERM_START: Final[frozenset[TokenKind]] = frozenset({TokenKind.IDENTIFIER, TokenKind.DOLLAR})

# Tokens that look like a statement head but can never be one.
_INVALID_HEADS: Final[frozenset[TokenKind]] = frozenset(
    {
        TokenKind.NUMBER,
        TokenKind.SINGLE_QUOTE_LITERAL,
        TokenKind.DOUBLE_QUOTE_LITERAL,
    }
)

_LINE_TERM_KINDS: Final[tuple[TokenKind, ...]] = (
    TokenKind.IDENTIFIER,
    TokenKind.DOLLAR,
    TokenKind.SPACE,
    TokenKind.NEWLINE,
)


class Parser:
    """Builds a :class:`Program` from tokens pulled off a :class:`Tokenizer`."""

    def __init__(self, tokenizer: Tokenizer) -> None:
        self.tokenizer = tokenizer
        self.program = Program()
        self._lookahead: Token | None = None

    def build(self) -> Program:
        """Parse the whole token stream into the program tree."""
        while True:
            token = self._advance()
            if token.is_end:
                break
            if token.kind is TokenKind.NEWLINE:
                continue
            if token.kind in _TERM_START or token.kind in _INVALID_HEADS:
                self._parse_statement(token)
                continue
            logger.info("Ignoring top-level token %s", token)

        logger.debug("Built program with %d node(s)", len(self.program.tree))
        return self.program

    def _parse_statement(self, first: Token) -> None:
        lhs: Term | Token = self._parse_term(first) if first.kind in _TERM_START else first
        follow = self._skip_spaces()

        if follow.kind is TokenKind.COLON:
            self._parse_target(lhs, first)
            return
        if follow.kind is TokenKind.EQUALS:
            self._parse_assignment(lhs, first)
            return

        logger.debug("Ignoring %s after statement head %s", follow, first)
        self._push_back(follow)

    def _parse_target(self, lhs: Term | Token, first: Token) -> None:
        head = self._require_head(lhs, "rule")
        prerequisites = self._parse_line_terms("prerequisite list")

        recipe: list[CommandLine] = []
        while True:
            token = self._advance()
            if token.kind is not TokenKind.TAB:
                self._push_back(token)
                break
            terms = self._parse_line_terms("recipe line")
            recipe.append(CommandLine(terms=terms, position=self._position(token)))

        node = Target(
            head=head,
            prerequisites=prerequisites,
            recipe=recipe,
            position=self._position(first),
        )
        self.program.tree.append(node)
        logger.debug(
            "Parsed target %r with %d prerequisite(s) and %d recipe line(s)",
            head.name,
            len(prerequisites),
            len(recipe),
        )

    def _parse_assignment(self, lhs: Term | Token, first: Token) -> None:
        head = self._require_head(lhs, "assignment")
        while True:
            token = self._advance()
            if token.is_end:
                self._push_back(token)
                break
            if token.kind is TokenKind.NEWLINE:
                break

        position = self._position(first)
        name = head.name
        self.program.tree.append(Assignment(head=head, position=position))
        diag = Diagnostic(
            code="ASG001",
            message=f"Variable assignment to '{name}' is not supported; right-hand side ignored.",
            position=position,
            hint="Assignments are recognised but never evaluated.",
        )
        self.program.diagnostics.append(diag)
        logger.warning("%s", format_diagnostic(diag))

    def _parse_line_terms(self, context: str) -> list[Term]:
        terms: list[Term] = []
        while True:
            token = self._advance()
            if token.is_end:
                self._push_back(token)
                return terms
            if token.kind is TokenKind.NEWLINE:
                return terms
            if token.kind is TokenKind.SPACE:
                continue
            if token.kind in _TERM_START:
                terms.append(self._parse_term(token))
                continue
            raise ParseError(
                code="PAR001",
                message=f"Unexpected {token_kind_name(token.kind)} in {context}.",
                position=self._position(token),
                hint="Rule lines may only contain identifiers, variable references and spaces.",
                expected=_LINE_TERM_KINDS,
            )

    def _parse_term(self, token: Token) -> Term:
        if token.kind is TokenKind.IDENTIFIER:
            return Identifier(name=token.text, position=self._position(token))
        return self._parse_variable_reference(token)

    def _parse_variable_reference(self, dollar: Token) -> VariableReference:
        position = self._position(dollar)
        token = self._advance()

        if token.kind is TokenKind.LESS_THAN:
            return VariableReference(
                name=ALL_PREREQUISITES,
                resolved_value=ALL_PREREQUISITES,
                position=position,
            )

        if token.kind is not TokenKind.LEFT_PAREN:
            raise ParseError(
                code="PAR003",
                message=f"Expected '(' or '<' after '$' but found {token_kind_name(token.kind)}.",
                position=self._position(token),
                hint="Write variables as $(NAME) or use the automatic variable $<.",
                expected=(TokenKind.LEFT_PAREN, TokenKind.LESS_THAN),
            )

        name_tok = self._advance()
        if name_tok.kind is not TokenKind.IDENTIFIER:
            raise ParseError(
                code="PAR003",
                message=f"Expected variable name after '$(' but found {token_kind_name(name_tok.kind)}.",
                position=self._position(name_tok),
                hint="Variable names are made of letters and periods.",
                expected=(TokenKind.IDENTIFIER,),
            )

        close = self._advance()
        if close.kind is not TokenKind.RIGHT_PAREN:
            raise ParseError(
                code="PAR004",
                message=f"Unterminated variable reference $({name_tok.text}.",
                position=self._position(close),
                hint="Close the reference with ')'.",
                expected=(TokenKind.RIGHT_PAREN,),
            )

        return VariableReference(name=name_tok.text, position=position)

    def _require_head(self, lhs: Term | Token, statement: str) -> Term:
        if isinstance(lhs, (Identifier, VariableReference)):
            return lhs
        raise ParseError(
            code="PAR002",
            message=(
                f"Expected identifier or variable as {statement} head "
                f"but found {token_kind_name(lhs.kind)} {lhs.text!r}."
            ),
            position=self._position(lhs),
            hint="Name the rule with letters or a $(VARIABLE) reference.",
            expected=(TokenKind.IDENTIFIER, TokenKind.DOLLAR),
        )

    def _skip_spaces(self) -> Token:
        token = self._advance()
        while token.kind is TokenKind.SPACE:
            token = self._advance()
        return token

    def _advance(self) -> Token:
        if self._lookahead is not None:
            token, self._lookahead = self._lookahead, None
            return token
        return self.tokenizer.next_token()

    def _push_back(self, token: Token) -> None:
        assert self._lookahead is None
        self._lookahead = token

    def _position(self, token: Token) -> SourcePosition:
        if token.is_end:
            return self.tokenizer.position()
        return SourcePosition(file=self.tokenizer.filename, row=token.row, column=token.column)


def parse_source(source: str | TextIO, filename: str = "<input>") -> Program:
    """Tokenize and parse rule-file text in one step."""
    return Parser(Tokenizer(source, filename=filename)).build()

"""Token definitions for rule-file lexical analysis."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Final


class TokenKind(Enum):
    """Finite token categories used by tokenizer and parser."""

    IDENTIFIER = auto()
    NUMBER = auto()

    COLON = auto()  # :
    TAB = auto()
    SPACE = auto()
    NEWLINE = auto()
    HASH = auto()  # #
    EQUALS = auto()  # =
    LESS_THAN = auto()  # <
    DOLLAR = auto()  # $
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    PERIOD = auto()  # .

    SINGLE_QUOTE_LITERAL = auto()
    DOUBLE_QUOTE_LITERAL = auto()

    END_OF_INPUT = auto()


_KIND_NAMES: Final[dict[TokenKind, str]] = {
    TokenKind.IDENTIFIER: "Identifier",
    TokenKind.NUMBER: "Number",
    TokenKind.COLON: "Colon",
    TokenKind.TAB: "Tab",
    TokenKind.SPACE: "Space",
    TokenKind.NEWLINE: "Newline",
    TokenKind.HASH: "Hash",
    TokenKind.EQUALS: "Equals",
    TokenKind.LESS_THAN: "LessThan",
    TokenKind.DOLLAR: "Dollar",
    TokenKind.LEFT_PAREN: "LeftParen",
    TokenKind.RIGHT_PAREN: "RightParen",
    TokenKind.PERIOD: "Period",
    TokenKind.SINGLE_QUOTE_LITERAL: "SingleQuoteLiteral",
    TokenKind.DOUBLE_QUOTE_LITERAL: "DoubleQuoteLiteral",
    TokenKind.END_OF_INPUT: "EndOfInput",
}


def token_kind_name(kind: TokenKind) -> str:
    """Return the display name used in diagnostics for a token kind."""
    return _KIND_NAMES[kind]


@dataclass(frozen=True)
class Token:
    """A single lexical token with its 0-based position."""

    kind: TokenKind
    text: str
    byte_length: int
    row: int
    column: int

    @property
    def is_end(self) -> bool:
        return self.kind is TokenKind.END_OF_INPUT

    def to_dict(self) -> dict[str, Any]:
        """Serialize the token for JSON dumps."""
        return {
            "kind": token_kind_name(self.kind),
            "text": self.text,
            "byte_length": self.byte_length,
            "row": self.row,
            "column": self.column,
        }

    def __str__(self) -> str:
        return f"{token_kind_name(self.kind)}({self.text!r})@{self.row}:{self.column}"


# Signals end of input; never carries a real position.
NONE_TOKEN: Final[Token] = Token(
    kind=TokenKind.END_OF_INPUT,
    text="",
    byte_length=-1,
    row=-1,
    column=-1,
)

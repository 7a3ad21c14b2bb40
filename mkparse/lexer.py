"""Rule-file tokenizer."""

from __future__ import annotations

import io
from typing import Final, Iterator, TextIO

from mkparse.errors import LexError
from mkparse.source_map import SourcePosition
from mkparse.tokens import NONE_TOKEN, Token, TokenKind


_SINGLE_CHAR_TOKENS: Final[dict[str, TokenKind]] = {
    "\t": TokenKind.TAB,
    " ": TokenKind.SPACE,
    ":": TokenKind.COLON,
    "#": TokenKind.HASH,
    "=": TokenKind.EQUALS,
    "$": TokenKind.DOLLAR,
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    ".": TokenKind.PERIOD,
    "<": TokenKind.LESS_THAN,
}

_LITERAL_TOKENS: Final[dict[str, TokenKind]] = {
    "'": TokenKind.SINGLE_QUOTE_LITERAL,
    '"': TokenKind.DOUBLE_QUOTE_LITERAL,
}


def _byte_length(ch: str) -> int:
    return len(ch.encode("utf-8", errors="surrogatepass"))


class Tokenizer:
    """Pulls typed tokens out of a stream of code points, one per call."""

    def __init__(self, source: str | TextIO, filename: str = "<input>") -> None:
        self.reader: TextIO = io.StringIO(source) if isinstance(source, str) else source
        self.filename = filename
        self.row = 0
        self.column = 0
        self._pushback: str | None = None

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            if token.is_end:
                return
            yield token

    def tokenize(self) -> list[Token]:
        """Drain the stream and return every token, sentinel included."""
        tokens = list(self)
        tokens.append(NONE_TOKEN)
        return tokens

    def next_token(self) -> Token:
        """Return the next token, or ``NONE_TOKEN`` once input is exhausted."""
        ch = self._read()
        if not ch:
            return NONE_TOKEN

        if ch == "\n":
            token = Token(TokenKind.NEWLINE, ch, _byte_length(ch), self.row, self.column)
            self.row += 1
            self.column = 0
            return token

        kind = _SINGLE_CHAR_TOKENS.get(ch)
        if kind is not None:
            return self._emit(kind, ch, _byte_length(ch))

        if ch in _LITERAL_TOKENS:
            return self._scan_literal(ch)

        if ch.isalpha():
            return self._scan_identifier(ch)

        if ch.isdigit():
            return self._scan_number(ch)

        raise LexError(
            code="LEX001",
            message=f"Unexpected character {ch!r}.",
            position=self.position(),
            hint="Only letters, digits, quotes and rule punctuation are recognised.",
        )

    def position(self) -> SourcePosition:
        """Position the next token will be reported at."""
        return SourcePosition(file=self.filename, row=self.row, column=self.column)

    def _scan_literal(self, quote: str) -> Token:
        length = _byte_length(quote)
        body: list[str] = []
        while True:
            ch = self._read()
            if not ch:
                return NONE_TOKEN
            if ch == quote:
                break
            if ch == "\n":
                self._unread(ch)
                break
            length += _byte_length(ch)
            body.append(ch)
        return self._emit(_LITERAL_TOKENS[quote], "".join(body), length)

    def _scan_identifier(self, first: str) -> Token:
        length = _byte_length(first)
        chars = [first]
        while True:
            ch = self._read()
            if not ch:
                break
            if not ch.isalpha() and ch != ".":
                self._unread(ch)
                break
            length += _byte_length(ch)
            chars.append(ch)
        return self._emit(TokenKind.IDENTIFIER, "".join(chars), length)

    def _scan_number(self, first: str) -> Token:
        length = _byte_length(first)
        digits = [first]
        while True:
            ch = self._read()
            if not ch:
                break
            if not ch.isdigit():
                self._unread(ch)
                break
            length += _byte_length(ch)
            digits.append(ch)
        return self._emit(TokenKind.NUMBER, "".join(digits), length)

    def _emit(self, kind: TokenKind, text: str, byte_length: int) -> Token:
        token = Token(kind, text, byte_length, self.row, self.column)
        self.column += 1
        return token

    def _read(self) -> str:
        if self._pushback is not None:
            ch, self._pushback = self._pushback, None
            return ch
        try:
            return self.reader.read(1)
        except (OSError, UnicodeDecodeError) as err:
            raise LexError(
                code="LEX002",
                message=f"Failed to read source: {err}",
                position=self.position(),
                hint="Check that the input is readable UTF-8 text.",
            ) from err

    def _unread(self, ch: str) -> None:
        # Only one code point is ever pushed back.
        assert self._pushback is None
        self._pushback = ch

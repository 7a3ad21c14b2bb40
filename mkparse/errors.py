"""Structured diagnostics and exception hierarchy for mkparse."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from mkparse.source_map import SourcePosition
from mkparse.tokens import TokenKind, token_kind_name


@dataclass(frozen=True)
class Diagnostic:
    """Machine-readable diagnostic emitted by pipeline phases."""

    code: str
    message: str
    position: SourcePosition | None = None
    hint: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize the diagnostic for JSON output."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "hint": self.hint,
        }
        if self.position is not None:
            payload["position"] = self.position.to_dict()
        return payload


class MakefileError(Exception):
    """Base error carrying a code and optional source position."""

    def __init__(
        self,
        code: str,
        message: str,
        position: SourcePosition | None = None,
        hint: str = "",
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.position = position
        self.hint = hint

    def to_diagnostic(self) -> Diagnostic:
        """Convert exception into serializable diagnostic."""
        return Diagnostic(code=self.code, message=self.message, position=self.position, hint=self.hint)

    def __str__(self) -> str:
        if self.position is None:
            return f"[{self.code}] {self.message}"
        return f"[{self.code}] {self.message} ({self.position})"


class LexError(MakefileError):
    """Raised by tokenizer failures."""


class ParseError(MakefileError):
    """Raised by grammar violations.

    ``expected`` lists the token kinds that would have been accepted at the
    failing position; it is empty when the failure is not about token order.
    """

    def __init__(
        self,
        code: str,
        message: str,
        position: SourcePosition | None = None,
        hint: str = "",
        expected: Iterable[TokenKind] = (),
    ) -> None:
        super().__init__(code, message, position, hint)
        self.expected: tuple[TokenKind, ...] = tuple(expected)

    @property
    def row(self) -> int:
        return -1 if self.position is None else self.position.row

    @property
    def column(self) -> int:
        return -1 if self.position is None else self.position.column

    def expected_names(self) -> list[str]:
        return [token_kind_name(kind) for kind in self.expected]


class ExpansionError(MakefileError):
    """Raised by variable expansion failures."""


class CLIError(MakefileError):
    """Raised by CLI usage or orchestration failures."""


def format_diagnostic(diag: Diagnostic) -> str:
    """Format diagnostic into a stable human-readable line."""
    suffix = "" if diag.position is None else f" {diag.position}"
    hint = f" Hint: {diag.hint}" if diag.hint else ""
    return f"{diag.code}{suffix}: {diag.message}{hint}"

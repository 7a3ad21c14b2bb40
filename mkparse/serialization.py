"""Serialization helpers for tokens and the rule-file AST."""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any

from mkparse.ast import Program
from mkparse.tokens import Token


def ast_to_dict(node: Any) -> Any:
    """Serialize AST dataclasses recursively into JSON-compatible dicts."""
    if isinstance(node, list):
        return [ast_to_dict(item) for item in node]
    if isinstance(node, dict):
        return {key: ast_to_dict(value) for key, value in node.items()}
    if hasattr(node, "to_dict"):
        return node.to_dict()
    if is_dataclass(node) and not isinstance(node, type):
        payload = {item.name: ast_to_dict(getattr(node, item.name)) for item in fields(node)}
        payload["node_type"] = type(node).__name__
        return payload
    return node


def program_to_json(program: Program, indent: int = 2) -> str:
    """Serialize a Program to JSON text."""
    return json.dumps(ast_to_dict(program), indent=indent, sort_keys=True)


def tokens_to_json(tokens: list[Token], indent: int = 2) -> str:
    """Serialize a token stream to JSON text."""
    return json.dumps([token.to_dict() for token in tokens], indent=indent)


def write_program(program: Program, path: str | Path) -> None:
    """Write serialized AST JSON to path."""
    target = Path(path)
    target.write_text(program_to_json(program), encoding="utf-8")

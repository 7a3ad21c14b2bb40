"""Rule-file (Makefile-like) front end: tokenizer, parser, expander, printer."""

from __future__ import annotations

from typing import Any


__all__ = [
    "PipelineOptions",
    "ProcessArtifacts",
    "explain_source",
    "parse_source",
    "process_file",
    "process_source",
]


def process_source(*args: Any, **kwargs: Any):
    from mkparse.main import process_source as _process_source

    return _process_source(*args, **kwargs)


def process_file(*args: Any, **kwargs: Any):
    from mkparse.main import process_file as _process_file

    return _process_file(*args, **kwargs)


def explain_source(*args: Any, **kwargs: Any):
    from mkparse.main import explain_source as _explain_source

    return _explain_source(*args, **kwargs)


def parse_source(*args: Any, **kwargs: Any):
    from mkparse.parser import parse_source as _parse_source

    return _parse_source(*args, **kwargs)


def __getattr__(name: str):
    if name in {"PipelineOptions", "ProcessArtifacts"}:
        from mkparse import main

        return getattr(main, name)
    raise AttributeError(name)

"""Minimal EDN writer for the ``-Sdeps`` argument of the clojure CLI.

Only the shapes a deps map needs are supported: maps, keywords, symbols and
strings.
"""

from __future__ import annotations

from typing import Any, Mapping


class Keyword(str):
    """EDN keyword, written as ``:name``."""


class Symbol(str):
    """EDN symbol, written verbatim (e.g. ``metosin/malli``)."""


def _encode_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def encode(value: Any) -> str:
    if isinstance(value, Keyword):
        return f":{value}"
    if isinstance(value, Symbol):
        return str(value)
    if isinstance(value, str):
        return _encode_string(value)
    if isinstance(value, Mapping):
        entries = ", ".join(f"{encode(k)} {encode(v)}" for k, v in value.items())
        return "{" + entries + "}"
    raise TypeError(f"Cannot encode {type(value).__name__} as EDN")


__all__ = ["Keyword", "Symbol", "encode"]

"""Parser registry for tfvc_blame."""

from __future__ import annotations

from .annotate import TfvcAnnotateParser
from .base import BaseParser, ParserError

_PARSER_CLASSES: dict[str, type[BaseParser]] = {
    TfvcAnnotateParser.name: TfvcAnnotateParser,
}


def get_parser(name: str) -> BaseParser:
    normalized = (name or "").lower()
    if normalized not in _PARSER_CLASSES:
        raise ParserError(f"No parser registered for '{name}'")
    parser_cls = _PARSER_CLASSES[normalized]
    return parser_cls()


__all__ = [
    "BaseParser",
    "ParserError",
    "TfvcAnnotateParser",
    "get_parser",
]

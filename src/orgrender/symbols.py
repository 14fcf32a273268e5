"""Org special symbols to HTML entities.

Org writes symbols as ``\\name`` or ``\\name{}`` (``\\alpha``, ``\\rarr``,
``\\nbsp``). Names that are HTML entities become ``&name;``; anything else
is left untouched so backslashes in paths survive.

Example:
    >>> special_symbols_to_html(r"\\alpha \\to \\beta{} \\foo")
    '&alpha; &rarr; &beta; \\\\foo'
"""

from __future__ import annotations

import re
from html.entities import html5

_SYMBOL_RE = re.compile(r"\\([a-zA-Z]+)(?:\{\})?")

# Org names that differ from the HTML entity name
_ORG_ALIASES = {
    "to": "rarr",
    "gets": "larr",
    "dots": "hellip",
    "ldots": "hellip",
    "textbackslash": "bsol",
}


def _replace(match: re.Match[str]) -> str:
    name = match.group(1)
    entity = _ORG_ALIASES.get(name, name)
    if f"{entity};" in html5:
        return f"&{entity};"
    return match.group(0)


def special_symbols_to_html(text: str) -> str:
    """Replace org special symbols with HTML entities."""
    if "\\" not in text:
        return text
    return _SYMBOL_RE.sub(_replace, text)


__all__ = ["special_symbols_to_html"]

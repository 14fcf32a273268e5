"""Pattern rewriting primitives for org inline markup.

Each function finds one kind of inline construct and hands its parts to a
callback that returns the replacement. Renderers decide what markup to
produce; this module only knows the org syntax.

Example:
    >>> rewrite_emphasis("a *bold* move", lambda marker, body: f"<b>{body}</b>")
    'a <b>bold</b> move'

Code contents (``=code=`` and ``~verbatim~``) can be held out of later
passes with CodeSnippets:

    >>> snippets = CodeSnippets()
    >>> text = rewrite_emphasis("=a*b*c=", lambda m, b: f"<code>{b}</code>", snippets)
    >>> snippets.restore(rewrite_emphasis(text, lambda m, b: "X"))
    '<code>a*b*c</code>'

"""

from __future__ import annotations

import re
from collections.abc import Callable

# Emphasis borders follow org-emphasis-regexp-components
_PRE_EMPHASIS = r""" \t('\""""
_POST_EMPHASIS = r"""\- \t.,:!?;'")"""
_BORDER_FORBIDDEN = r"""\s,"'"""
_MARKERS = r"*/_=~+"

_EMPHASIS_RE = re.compile(
    rf"([{_PRE_EMPHASIS}]|^)"
    rf"([{re.escape(_MARKERS)}])"
    rf"([^{_BORDER_FORBIDDEN}]|[^{_BORDER_FORBIDDEN}].*?[^{_BORDER_FORBIDDEN}])"
    r"\2"
    rf"(?=[{_POST_EMPHASIS}]|$)",
    re.MULTILINE,
)

CODE_MARKERS = frozenset({"=", "~"})

_SUBP_RE = re.compile(r"([_^])\{(.*?)\}")

_IMAGE_LINK_RE = re.compile(r"\[\[([^\]\[]+\.(?:jpg|jpeg|gif|png))\]\]", re.IGNORECASE)

_LINK_RE = re.compile(r"\[\[([^\]\[]+)\]\]")

_LINK_TEXT_RE = re.compile(r"\[\[([^\]\[]+)\]\[([^\]\[]+)\]\]")

_FOOTNOTE_RE = re.compile(r"\[fn:([^:\]]+)(?::([^\]]*))?\]")

_PLACEHOLDER_RE = re.compile("\x00(\\d+)\x00")


class CodeSnippets:
    """Holds code contents out of later rewrite passes.

    protect() swaps text for a placeholder; restore() puts every stored
    snippet back. One instance serves one piece of text.
    """

    __slots__ = ("_snippets",)

    def __init__(self) -> None:
        self._snippets: list[str] = []

    def protect(self, text: str) -> str:
        self._snippets.append(text)
        return f"\x00{len(self._snippets) - 1}\x00"

    def restore(self, text: str) -> str:
        if not self._snippets:
            return text

        def _restore(match: re.Match[str]) -> str:
            index = int(match.group(1))
            if index < len(self._snippets):
                return self._snippets[index]
            return match.group(0)

        return _PLACEHOLDER_RE.sub(_restore, text)

    def __len__(self) -> int:
        return len(self._snippets)


def rewrite_emphasis(
    text: str,
    replace: Callable[[str, str], str],
    snippets: CodeSnippets | None = None,
) -> str:
    """Rewrite ``*bold*``, ``/italic/``, ``_underline_``, ``=code=``,
    ``~verbatim~`` and ``+strike+`` in one pass.

    Args:
        text: Text to rewrite
        replace: Called with (marker, body), returns the replacement
        snippets: When given, bodies of code markers are protected from
            later passes and the callback receives the placeholder

    Returns:
        Rewritten text
    """

    def _sub(match: re.Match[str]) -> str:
        pre, marker, body = match.group(1), match.group(2), match.group(3)
        if snippets is not None and marker in CODE_MARKERS:
            body = snippets.protect(body)
        return pre + replace(marker, body)

    return _EMPHASIS_RE.sub(_sub, text)


def rewrite_subp(text: str, replace: Callable[[str, str], str]) -> str:
    """Rewrite ``_{sub}`` and ``^{super}``; callback gets ("_" or "^", text)."""
    return _SUBP_RE.sub(lambda m: replace(m.group(1), m.group(2)), text)


def rewrite_images(text: str, replace: Callable[[str], str]) -> str:
    """Rewrite bare image links such as ``[[diagram.png]]``."""
    return _IMAGE_LINK_RE.sub(lambda m: replace(m.group(1)), text)


def rewrite_links(text: str, replace: Callable[[str, str | None], str]) -> str:
    """Rewrite ``[[link]]`` and ``[[link][description]]``.

    The callback receives (link, description); description is None for
    bare links.
    """
    text = _LINK_RE.sub(lambda m: replace(m.group(1), None), text)
    return _LINK_TEXT_RE.sub(lambda m: replace(m.group(1), m.group(2)), text)


def rewrite_footnotes(text: str, replace: Callable[[str, str | None], str]) -> str:
    """Rewrite ``[fn:name]`` and ``[fn:name:definition]`` references.

    The callback receives (name, definition); definition is None for plain
    references.
    """
    return _FOOTNOTE_RE.sub(lambda m: replace(m.group(1), m.group(2)), text)


__all__ = [
    "CODE_MARKERS",
    "CodeSnippets",
    "rewrite_emphasis",
    "rewrite_subp",
    "rewrite_images",
    "rewrite_links",
    "rewrite_footnotes",
]

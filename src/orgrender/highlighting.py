"""Syntax highlighting protocol and adapters for orgrender.

Highlighting is optional and chosen explicitly when a renderer is built.
Nothing in the package probes for installed highlighters on its own.

Usage:
    from orgrender import HtmlRenderer
    from orgrender.highlighting import create_highlighter

    renderer = HtmlRenderer(highlighter=create_highlighter("rosettes"))

    # Or any object implementing the Highlighter protocol
    class MyHighlighter:
        def highlight(self, code: str, language: str) -> str:
            return f'<pre class="language-{language}">{code}</pre>'

        def supports_language(self, language: str) -> bool:
            return True

Installation:
    pip install orgrender[syntax]      # Rosettes (primary)
    pip install orgrender[pygments]    # Pygments (secondary)
"""

from __future__ import annotations

import warnings
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    import logging

# Lexer name every supported backend understands
PLAIN_TEXT_LANGUAGE = "text"

_LANGUAGE_ALIASES = {
    "emacs-lisp": "scheme",
    "common-lisp": "scheme",
    "lisp": "scheme",
}


class UnsupportedLanguageError(LookupError):
    """Highlighter has no lexer for the requested language."""

    def __init__(self, language: str) -> None:
        self.language = language
        super().__init__(f"No lexer for language {language!r}")


class Highlighter(Protocol):
    """Protocol for syntax highlighters.

    Highlighters take code and a language name and return HTML markup with
    highlighting applied, including the wrapping element.
    """

    def highlight(self, code: str, language: str) -> str:
        """Highlight code with syntax colors.

        Args:
            code: Source code to highlight (not escaped)
            language: Language identifier (e.g., "python", "scheme")

        Returns:
            HTML markup with highlighting

        Contract:
            - MUST escape HTML entities in code
            - MUST raise UnsupportedLanguageError for unknown languages
        """
        ...

    def supports_language(self, language: str) -> bool:
        """Check if highlighter supports the given language.

        Contract:
            - MUST NOT raise exceptions
        """
        ...


class RosettesHighlighter:
    """Rosettes-based syntax highlighter implementing Highlighter protocol."""

    __slots__ = ("_rosettes",)

    def __init__(self) -> None:
        import rosettes  # type: ignore[import-not-found]

        self._rosettes = rosettes

    def highlight(self, code: str, language: str) -> str:
        """Highlight code using Rosettes."""
        if not self.supports_language(language):
            raise UnsupportedLanguageError(language)
        result: str = self._rosettes.highlight(code, language=language)
        return result

    def supports_language(self, language: str) -> bool:
        """Check if Rosettes supports the language."""
        try:
            result: bool = self._rosettes.supports_language(language)
            return result
        except Exception:
            return False


class PygmentsHighlighter:
    """Pygments-based syntax highlighter implementing Highlighter protocol."""

    __slots__ = ("_formatter",)

    def __init__(self, *, cssclass: str = "highlight") -> None:
        from pygments.formatters import HtmlFormatter

        self._formatter = HtmlFormatter(cssclass=cssclass)

    def highlight(self, code: str, language: str) -> str:
        """Highlight code using Pygments."""
        from pygments import highlight
        from pygments.lexers import get_lexer_by_name
        from pygments.util import ClassNotFound

        try:
            lexer = get_lexer_by_name(language)
        except ClassNotFound as exc:
            raise UnsupportedLanguageError(language) from exc
        result: str = highlight(code, lexer, self._formatter)
        return result

    def supports_language(self, language: str) -> bool:
        """Check if Pygments has a lexer for the language."""
        from pygments.lexers import get_lexer_by_name
        from pygments.util import ClassNotFound

        try:
            get_lexer_by_name(language)
        except ClassNotFound:
            return False
        return True


_BACKENDS: dict[str, type[RosettesHighlighter] | type[PygmentsHighlighter]] = {
    "rosettes": RosettesHighlighter,
    "pygments": PygmentsHighlighter,
}


def create_highlighter(name: str = "rosettes") -> Highlighter:
    """Build a highlighter backend by name.

    Args:
        name: "rosettes" (primary) or "pygments" (secondary)

    Returns:
        Highlighter instance

    Raises:
        ValueError: Unknown backend name
        ImportError: Backend package is not installed
    """
    try:
        backend = _BACKENDS[name]
    except KeyError:
        raise ValueError(
            f"Unknown highlighter {name!r}, expected one of {sorted(_BACKENDS)}"
        ) from None
    return backend()


def normalize_language(language: str) -> str:
    """Map a block language to the lexer name used for highlighting.

    Example:
        >>> normalize_language("emacs-lisp")
        'scheme'
        >>> normalize_language("")
        'text'
    """
    if not language:
        return PLAIN_TEXT_LANGUAGE
    return _LANGUAGE_ALIASES.get(language, language)


@contextmanager
def quiet_diagnostics() -> Iterator[None]:
    """Silence warnings raised while a highlighter runs.

    The previous warning filters are restored on every exit path,
    including when the highlighter raises.
    """
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        yield


def highlight_block(
    highlighter: Highlighter,
    code: str,
    language: str,
    logger: logging.Logger,
) -> str | None:
    """Highlight a source block, downgrading unknown languages to plain text.

    Args:
        highlighter: Backend to delegate to
        code: Block contents (not escaped)
        language: Declared block language (normalized here)
        logger: Receives the downgrade diagnostics

    Returns:
        Highlighted HTML, or None if even the plain-text lexer is unsupported
    """
    lang = normalize_language(language)
    try:
        with quiet_diagnostics():
            return highlighter.highlight(code, lang)
    except UnsupportedLanguageError:
        logger.debug("No lexer for %r, falling back to %r", lang, PLAIN_TEXT_LANGUAGE)

    try:
        with quiet_diagnostics():
            return highlighter.highlight(code, PLAIN_TEXT_LANGUAGE)
    except UnsupportedLanguageError:
        logger.debug("Highlighter has no plain-text lexer, escaping block")
        return None


__all__ = [
    "Highlighter",
    "UnsupportedLanguageError",
    "RosettesHighlighter",
    "PygmentsHighlighter",
    "PLAIN_TEXT_LANGUAGE",
    "create_highlighter",
    "normalize_language",
    "quiet_diagnostics",
    "highlight_block",
]

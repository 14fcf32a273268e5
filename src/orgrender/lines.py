"""Classified line records consumed by the output buffer.

Lines are produced by the classifier (or built directly by callers that
classify text themselves). They are frozen and carry everything the output
buffer needs: the paragraph-level type, the indent, and the major mode the
line opens.

Headlines are a distinct variant. The renderer checks
``isinstance(line, Headline)`` instead of probing for optional fields.

"""

from __future__ import annotations

from dataclasses import dataclass

from orgrender.modes import DELIMITER_MODES, Mode


@dataclass(frozen=True, slots=True)
class Line:
    """A single classified line of org text.

    Attributes:
        text: Raw line text, without the trailing newline
        paragraph_type: Paragraph-level mode of the line
        indent: Column of the first non-blank character (0 for blank lines)
        major_mode: Block-level mode this line opens (a list, a table, a block)
        assigned_paragraph_type: Override for the output type, set by the
            classifier for lines whose meaning depends on context (table
            headers, lines inside source blocks)
        is_code_block_line: Line opens or belongs to a src/example block
        block_lang: Language declared by the enclosing src block
        is_begin_block: Line is a ``#+BEGIN_`` delimiter
        is_end_block: Line is a ``#+END_`` delimiter
        content: Text contributed to the accumulation buffer (list markers
            stripped). Defaults to the stripped raw text.
        lineno: 1-indexed source line number, when known

    """

    text: str
    paragraph_type: Mode
    indent: int = 0
    major_mode: Mode | None = None
    assigned_paragraph_type: Mode | None = None
    is_code_block_line: bool = False
    block_lang: str = ""
    is_begin_block: bool = False
    is_end_block: bool = False
    content: str | None = None
    lineno: int | None = None

    def __post_init__(self) -> None:
        if self.indent < 0:
            raise ValueError(f"Line indent must be >= 0, got {self.indent}")
        if self.content is None:
            object.__setattr__(self, "content", self.text.strip())

    @property
    def output_type(self) -> Mode:
        """Type used for output decisions (assigned type wins)."""
        return self.assigned_paragraph_type or self.paragraph_type

    @property
    def is_blank(self) -> bool:
        return self.paragraph_type is Mode.BLANK

    @property
    def is_delimiter(self) -> bool:
        return self.paragraph_type in DELIMITER_MODES

    def __repr__(self) -> str:
        text = self.text
        if len(text) > 20:
            text = text[:17] + "..."
        return f"Line({self.paragraph_type.name}, {text!r}, indent={self.indent})"


@dataclass(frozen=True, slots=True, repr=False)
class Headline(Line):
    """An outline heading line.

    Attributes:
        level: Outline depth (number of leading stars), at least 1
        keyword: TODO-style keyword (e.g. "TODO", "DONE"), if any

    """

    level: int = 1
    keyword: str | None = None

    def __post_init__(self) -> None:
        Line.__post_init__(self)
        if self.level < 1:
            raise ValueError(f"Headline level must be >= 1, got {self.level}")

    def __repr__(self) -> str:
        return f"Headline(level={self.level}, keyword={self.keyword!r}, {self.content!r})"


__all__ = ["Line", "Headline"]

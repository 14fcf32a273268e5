"""Structural modes and constant mode sets.

A Mode names both the paragraph-level type of a classified line and the
block-level structure that the output buffer keeps open on its stack.
"""

from __future__ import annotations

from enum import Enum, auto


class Mode(Enum):
    """Structural tags shared by lines and the mode stack.

    Paragraph-level modes describe a single line (a list item, a table row),
    major modes describe the structure a line opens (the list itself, the
    table, a delimited block).

    """

    PARAGRAPH = auto()
    HEADING1 = auto()
    HEADING2 = auto()
    HEADING3 = auto()
    HEADING4 = auto()
    HEADING5 = auto()
    HEADING6 = auto()
    LIST_ITEM = auto()
    ORDERED_LIST = auto()
    UNORDERED_LIST = auto()
    DEFINITION_LIST = auto()  # major mode of definition items
    DEFINITION_ITEM = auto()
    TABLE = auto()
    TABLE_ROW = auto()
    TABLE_HEADER = auto()
    TABLE_SEPARATOR = auto()
    BLOCKQUOTE = auto()
    EXAMPLE = auto()
    SRC = auto()
    INLINE_EXAMPLE = auto()  # ": " prefixed lines
    CENTER = auto()
    COMMENT = auto()
    HORIZONTAL_RULE = auto()
    BEGIN_BLOCK = auto()
    END_BLOCK = auto()
    BLANK = auto()
    START = auto()

    @classmethod
    def heading(cls, level: int) -> Mode:
        """Return the heading mode for an outline level.

        Levels deeper than 6 share HEADING6.

        Example:
            >>> Mode.heading(2)
            <Mode.HEADING2: 3>
        """
        if level < 1:
            raise ValueError(f"Heading level must be >= 1, got {level}")
        return _HEADINGS[min(level, 6) - 1]


_HEADINGS = (
    Mode.HEADING1,
    Mode.HEADING2,
    Mode.HEADING3,
    Mode.HEADING4,
    Mode.HEADING5,
    Mode.HEADING6,
)

HEADING_MODES = frozenset(_HEADINGS)

# Delimited blocks: only an explicit end line closes them
BLOCK_MODES = frozenset({Mode.BLOCKQUOTE, Mode.CENTER, Mode.EXAMPLE, Mode.SRC})

# Whitespace-significant content
CODE_MODES = frozenset({Mode.SRC, Mode.EXAMPLE, Mode.INLINE_EXAMPLE})

TABLE_MODES = frozenset(
    {Mode.TABLE, Mode.TABLE_ROW, Mode.TABLE_HEADER, Mode.TABLE_SEPARATOR}
)

DELIMITER_MODES = frozenset({Mode.BEGIN_BLOCK, Mode.END_BLOCK})

# Singleton lines never merge with the next one
SINGLETON_MODES = HEADING_MODES | {Mode.COMMENT, Mode.HORIZONTAL_RULE}


__all__ = [
    "Mode",
    "HEADING_MODES",
    "BLOCK_MODES",
    "CODE_MODES",
    "TABLE_MODES",
    "DELIMITER_MODES",
    "SINGLETON_MODES",
]

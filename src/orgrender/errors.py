"""Exception classes for orgrender.

Every error raised here is fatal: the conversion aborts and nothing inside
the package catches it. Recoverable conditions (a mismatched mode pop, an
unsupported highlighting language) are logged instead of raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from orgrender.modes import Mode


class OrgRenderError(Exception):
    """Base exception for all orgrender errors.

    Subclass this for specific error categories.
    """

    pass


class ModeMixError(OrgRenderError):
    """Accumulation buffer received text for a different mode.

    Raised when text is accumulated while the buffer already holds content
    recorded under another mode. The buffer state is corrupt at that point.
    """

    def __init__(self, buffer_mode: Mode, current_mode: Mode | None) -> None:
        """Initialize mode mix error.

        Args:
            buffer_mode: Mode already recorded for the buffer
            current_mode: Mode currently on top of the stack
        """
        self.buffer_mode = buffer_mode
        self.current_mode = current_mode
        current = current_mode.name if current_mode is not None else None
        super().__init__(
            f"Accumulation buffer is mixing modes: buffer_mode == {buffer_mode.name}, "
            f"current_mode == {current}"
        )


class InvalidLevelError(OrgRenderError):
    """Headline number requested for a level below 1."""

    def __init__(self, level: int) -> None:
        self.level = level
        super().__init__(f"Headline level not valid: {level}")


class HeadlineCountError(OrgRenderError):
    """A headline flush collected more than one line."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Cannot flush more than one headline at once, got {count} lines")


__all__ = [
    "OrgRenderError",
    "ModeMixError",
    "InvalidLevelError",
    "HeadlineCountError",
]

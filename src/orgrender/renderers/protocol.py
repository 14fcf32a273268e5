"""Renderer protocol: the contract between the output buffer and a format.

The output buffer decides when structures open and close and when
accumulated text must be written. A renderer decides what that looks like
in its target markup. The buffer passes itself as a read-only BufferView on
every call; renderers never mutate the stack or the accumulation buffer.

Example:
    from orgrender.renderers.protocol import Renderer

    def convert(lines: list[Line], renderer: Renderer) -> str:
        return render_lines(lines, renderer)

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from orgrender.lines import Line
    from orgrender.modes import Mode
    from orgrender.sink import OutputSink


class BufferView(Protocol):
    """Read-only surface of the output buffer seen by renderers."""

    @property
    def text(self) -> str:
        """Accumulated, not yet rendered text."""
        ...

    @property
    def lines(self) -> tuple[Line, ...]:
        """Lines that contributed to the accumulated text."""
        ...

    @property
    def buffer_mode(self) -> Mode | None:
        """Mode the accumulated text was collected under."""
        ...

    @property
    def output_type(self) -> Mode:
        """Output type of the most recently prepared line."""
        ...

    @property
    def current_mode(self) -> Mode | None:
        """Mode on top of the stack."""
        ...

    @property
    def block_lang(self) -> str:
        """Language of the most recent src block."""
        ...

    @property
    def depth(self) -> int:
        """Stack depth below the top entry (stack length minus one)."""
        ...

    @property
    def output(self) -> OutputSink:
        """Sink receiving rendered output."""
        ...

    @property
    def preserve_whitespace(self) -> bool:
        """True while the current mode is whitespace-significant."""
        ...

    def next_headline_number(self, level: int) -> str:
        """Next outline number for a heading at ``level``."""
        ...


class Renderer(Protocol):
    """Protocol for output formats driven by the output buffer.

    The built-in ``HtmlRenderer`` is the reference implementation.

    """

    def enter(self, mode: Mode, indent: int, buffer: BufferView) -> bool:
        """Open output for a mode just pushed on the stack.

        Args:
            mode: Mode being opened
            indent: Indent the mode was opened at
            buffer: Output buffer state (mode already on the stack)

        Returns:
            True if output for this open was suppressed
        """
        ...

    def leave(self, mode: Mode, buffer: BufferView) -> Mode:
        """Close output for the mode on top of the stack.

        Called before the entry is removed. Returns the closed mode.
        """
        ...

    def flush(self, buffer: BufferView) -> None:
        """Write the accumulated text according to its buffer mode."""
        ...

    def emit_footnotes(self, buffer: BufferView) -> bool:
        """Write collected footnotes; return False if nothing was written."""
        ...

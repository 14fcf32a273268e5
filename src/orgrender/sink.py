"""Append-only output sink.

Follows the StringBuilder pattern: fragments are appended to a list and
joined once. The sink only grows; nothing written is ever rewound.

"""

from __future__ import annotations


class OutputSink:
    """Append-only text accumulator.

    Usage:
            >>> out = OutputSink()
            >>> _ = out.append("<p>").append("Hello").append("</p>\\n")
            >>> out.build()
            '<p>Hello</p>\\n'
            >>> out.at_line_start
            True

    """

    __slots__ = ("_parts", "_last")

    def __init__(self) -> None:
        """Initialize empty sink."""
        self._parts: list[str] = []
        self._last = ""

    def append(self, s: str) -> OutputSink:
        """Append a string to the sink.

        Args:
            s: String to append (empty strings are skipped)

        Returns:
            self for method chaining
        """
        if s:
            self._parts.append(s)
            self._last = s
        return self

    def append_line(self, s: str = "") -> OutputSink:
        """Append a string followed by newline."""
        if s:
            self._parts.append(s)
        self._parts.append("\n")
        self._last = "\n"
        return self

    @property
    def at_line_start(self) -> bool:
        """True if nothing was written yet or the last write ended a line."""
        return not self._last or self._last.endswith("\n")

    def build(self) -> str:
        """Join all parts into the final string."""
        return "".join(self._parts)

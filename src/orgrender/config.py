"""Render configuration for orgrender.

Options are fixed when a renderer is built and read throughout a conversion.

Usage:
    from orgrender import HtmlRenderer, RenderConfig

    config = RenderConfig(export_footnotes=True, export_heading_number=True)
    renderer = HtmlRenderer(config)

    # From external settings (unknown keys ignored)
    config = RenderConfig.from_dict({"skip_tables": True, "theme": "dark"})

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class RenderConfig:
    """Immutable render configuration.

    Frozen dataclass: a renderer can hold it without copying.

    Attributes:
        decorate_title: First structural open gets a one-shot ``class="title"``
        skip_tables: Suppress all table-family output
        use_sub_superscripts: Rewrite ``_{sub}`` and ``^{sup}``
        export_footnotes: Rewrite footnote references and emit the footnotes
            section after the document
        export_heading_number: Prefix headings with outline numbers ("1.2")
        export_todo_keyword: Prefix headings with their TODO keyword badge

    """

    decorate_title: bool = False
    skip_tables: bool = False
    use_sub_superscripts: bool = False
    export_footnotes: bool = False
    export_heading_number: bool = False
    export_todo_keyword: bool = False

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> RenderConfig:
        """Create RenderConfig from a dictionary.

        Only keys that name RenderConfig fields are used; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                RenderConfig attribute names.

        Returns:
            New RenderConfig instance with values from dict.

        Example:
            >>> config = RenderConfig.from_dict({
            ...     "export_footnotes": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.export_footnotes
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
DEFAULT_CONFIG: RenderConfig = RenderConfig()


__all__ = ["RenderConfig", "DEFAULT_CONFIG"]

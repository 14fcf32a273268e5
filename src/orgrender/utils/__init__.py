"""Utility helpers for orgrender."""

from orgrender.utils.logger import get_logger

__all__ = ["get_logger"]

"""Internal helpers shared by dismark modules."""

from dismark.utils.logger import get_logger

__all__ = ["get_logger"]

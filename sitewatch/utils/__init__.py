"""Shared helpers: logging and display formatting."""
from .formatting import format_date, format_datetime, format_hours, format_time
from .logger import get_logger, setup_logging

__all__ = [
    "format_date",
    "format_datetime",
    "format_hours",
    "format_time",
    "get_logger",
    "setup_logging",
]

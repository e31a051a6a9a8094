"""Display formatting for dates, times and hours."""

from datetime import datetime


def format_date(value: datetime) -> str:
    """``Jan 5, 2024``"""
    return f"{value:%b} {value.day}, {value.year}"


def format_time(value: datetime) -> str:
    """``08:30 AM``"""
    return value.strftime("%I:%M %p")


def format_datetime(value: datetime) -> str:
    """``Jan 5, 08:30 AM``"""
    return f"{value:%b} {value.day}, {format_time(value)}"


def format_hours(hours: float) -> str:
    return f"{hours:.1f}"

"""Small helpers for size strings, date comparison and prompting."""

from __future__ import annotations

import datetime

SIZE_STRINGS = ("KB", "MB", "GB", "TB")

_MULTIPLIERS = {
    "K": 1024,
    "M": 1048576,
    "G": 1073741824,
}


def string_to_bytes_value(string: str) -> float:
    """Convert a listing size such as ``"1.5M"`` into a number of bytes.

    The last character is always taken as the unit; an unknown unit
    counts as a multiplier of one.
    """
    if not string:
        raise ValueError("Cannot parse an empty size string")
    number, unit = string[:-1], string[-1]
    try:
        value = float(number)
    except ValueError as exc:
        raise ValueError(f"Invalid size value: {string!r}") from exc
    return value * _MULTIPLIERS.get(unit, 1)


def bytes_value_to_size_string(bytes_value: float) -> str:
    """Format a byte count as a human readable size, starting from kilobytes."""
    value = bytes_value / 1024.0
    index = 0
    while value >= 1024.0 and index < len(SIZE_STRINGS):
        index += 1
        value /= 1024.0
    if index >= len(SIZE_STRINGS):
        raise ValueError(f"Size too large to format: {bytes_value}")
    return f"{value:.5f}{SIZE_STRINGS[index]}"


def date_is_after(to_check: datetime.date, reference: datetime.date) -> bool:
    """Return True if ``to_check`` is strictly later than ``reference``."""
    return to_check > reference


def get_input(message: str) -> str:
    """Prompt the user with ``message`` on a fresh line and return the reply.

    End of input yields an empty string.
    """
    try:
        return input(f"\n{message}")
    except EOFError:
        return ""
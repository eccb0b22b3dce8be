"""Column width computation and padding helpers shared by the renderers."""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable, Iterable
from typing import TypeVar

from .constants import COLUMN_SEPARATOR, DATE_FORMAT

T = TypeVar("T")


def spaces(count: int) -> str:
    """Return a blank string of the given width."""
    return " " * max(count, 0)


def max_width(items: Iterable[T], projection: Callable[[T], str | None]) -> int | None:
    """Return the widest projected string across items.

    Items whose projection is None are skipped. Returns None if nothing
    projected to a string (including an empty collection).
    """
    widths = [len(text) for text in map(projection, items) if text is not None]
    return max(widths) if widths else None


def left_aligned(text: str, width: int) -> str:
    """Pad text on the right to width, dropping trailing characters if too long."""
    if len(text) >= width:
        return text[: max(width, 0)]
    return text + spaces(width - len(text))


def right_aligned(text: str, width: int) -> str:
    """Pad text on the left to width, dropping trailing characters if too long."""
    if len(text) >= width:
        return text[: max(width, 0)]
    return spaces(width - len(text)) + text


def left_aligned_or_spaces(text: str | None, width: int) -> str:
    """Left-align text, or return a blank field of the same width for None."""
    if text is None:
        return spaces(width)
    return left_aligned(text, width)


def right_aligned_or_spaces(text: str | None, width: int) -> str:
    """Right-align text, or return a blank field of the same width for None."""
    if text is None:
        return spaces(width)
    return right_aligned(text, width)


def format_date(timestamp: dt.datetime) -> str:
    """Format a timestamp as 'Mar 21 14:05' in local time."""
    return timestamp.astimezone().strftime(DATE_FORMAT)


def join_columns(pieces: Iterable[str], sep: str = COLUMN_SEPARATOR) -> str:
    """Join rendered cells with the column separator."""
    return sep.join(pieces)

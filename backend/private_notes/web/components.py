from __future__ import annotations

from datetime import datetime
from typing import Union

from jinja2 import Environment

PREVIEW_LENGTH = 120


def _parse(value: Union[str, datetime]) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def format_date(value: Union[str, datetime], long: bool = False) -> str:
    """`Jan 5, 2024`, or `January 5, 2024 at 03:04 PM` when `long`."""
    dt = _parse(value)
    if not long:
        return f"{dt:%b} {dt.day}, {dt.year}"
    return f"{dt:%B} {dt.day}, {dt.year} at {dt:%I:%M %p}"


def truncate_content(text: str, max_length: int = PREVIEW_LENGTH) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def note_count_label(count: int) -> str:
    return f"{count} {'note' if count == 1 else 'notes'}"


def register_filters(env: Environment) -> None:
    env.filters["format_date"] = format_date
    env.filters["truncate_content"] = truncate_content
    env.filters["note_count"] = note_count_label

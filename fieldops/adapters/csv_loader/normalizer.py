"""CSV column normalization: handles BOM, trailing spaces, encoding quirks."""

from __future__ import annotations

import re


def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    - Removes BOM characters (\\ufeff)
    - Replaces runs of spaces / non-breaking spaces / dashes with one underscore
    - Splits camelCase ("currentLoad" → "current_load")
    - Lowercases and drops anything that is not alphanumeric or underscore
    """
    name = name.replace("\ufeff", "").strip()
    name = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", name)
    name = re.sub(r"[\s\u00a0\-]+", "_", name)
    name = name.lower()
    name = re.sub(r"[^\w]", "", name, flags=re.UNICODE)
    return name


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def parse_tag(raw: str | None) -> str | None:
    """Canonical form of a specialty / zone tag: trimmed, single-spaced, lowercase."""
    value = clean_string(raw)
    if value is None:
        return None
    return re.sub(r"\s+", " ", value).lower()


def parse_list(raw: str | None) -> list[str]:
    """Parse 'CCNA; Fibra óptica, ITIL' into ['CCNA', 'Fibra óptica', 'ITIL'].

    Separators are comma, semicolon and pipe; order is kept, duplicates dropped.
    """
    if not raw:
        return []
    seen: dict[str, None] = {}
    for part in re.split(r"[,;|]+", raw):
        part = part.strip()
        if part:
            seen.setdefault(part, None)
    return list(seen)

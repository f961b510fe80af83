"""Shared input normalizers for resources."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

_logger = logging.getLogger(__name__)


def _normalize_tag_texts(values: Optional[Iterable[str] | str]) -> list[str]:
    """Normalize a single tag or an iterable of tags to a list of non-empty strings."""
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    return [value for value in values if isinstance(value, str) and value.strip()]


def parse_custom_properties(items: Optional[Iterable[str]]) -> dict[str, Optional[str]]:
    """Parse ``key=value`` strings into a custom properties dict.

    Only the first ``=`` separates key and value. Entries without one, or with an
    empty key, are skipped with a warning. Later keys override earlier ones.
    """
    properties: dict[str, Optional[str]] = {}
    for item in items or []:
        key, sep, value = item.partition("=") if isinstance(item, str) else ("", "", "")
        key = key.strip()
        if not sep or not key:
            _logger.warning("Skipping invalid custom property: %r", item)
            continue
        properties[key] = value
    return properties

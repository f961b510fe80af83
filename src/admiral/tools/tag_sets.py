"""Ordered tag-link set helpers.

Tag links are kept as lists so display order survives, but behave as sets:
a link appears at most once and re-adding never moves it.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence

from ..utils import unique_in_order


def add_tag_links(
    current: Sequence[str],
    tag_texts: Iterable[str],
    resolve_or_create: Callable[[str], str],
) -> list[str]:
    """Return ``current`` with the links for ``tag_texts`` appended when missing.

    ``resolve_or_create`` maps ``key:value`` text to a tag link, creating the tag
    in the registry when needed. Its errors propagate.
    """
    result = unique_in_order(current)
    present = set(result)
    for text in tag_texts:
        link = resolve_or_create(text)
        if link and link not in present:
            present.add(link)
            result.append(link)
    return result


def remove_tag_links(
    current: Sequence[str],
    tag_texts: Iterable[str],
    resolve_existing: Callable[[str], Optional[str]],
) -> list[str]:
    """Return ``current`` without any occurrence of the links for ``tag_texts``.

    ``resolve_existing`` must not create tags; text it cannot resolve is skipped.
    """
    to_remove = set()
    for text in tag_texts:
        link = resolve_existing(text)
        if link:
            to_remove.add(link)
    return [link for link in current if link not in to_remove]


__all__ = ["add_tag_links", "remove_tag_links"]

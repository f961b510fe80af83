"""Shared helpers for the Admiral client."""

from __future__ import annotations

from typing import Iterable

RESOURCE_POOLS_PATH = "/resources/pools"
ELASTIC_PLACEMENT_ZONES_PATH = "/resources/elastic-placement-zones-config"
TAGS_PATH = "/resources/tags"
TAG_ASSIGNMENT_PATH = "/resources/tag-assignment"


def unique_in_order(values: Iterable[str]) -> list[str]:
    """Return unique values preserving the original order."""
    seen: set[str] = set()
    output: list[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        output.append(value)
    return output


def resource_pool_link(pool_id: str) -> str:
    """Return the document link of the resource pool with ``pool_id``."""
    return f"{RESOURCE_POOLS_PATH}/{pool_id}"


def placement_zone_link(pool_link: str) -> str:
    """Return the elastic placement zone config link for a resource pool link."""
    return f"{ELASTIC_PLACEMENT_ZONES_PATH}{pool_link}"


def tag_link(tag_id: str) -> str:
    """Return the document link of the tag with ``tag_id``."""
    return f"{TAGS_PATH}/{tag_id}"


def id_from_link(link: str) -> str:
    """Return the trailing document ID of ``link``."""
    return link.rstrip("/").rsplit("/", 1)[-1] if link else ""

"""Placement zone helper tools."""

from __future__ import annotations

import copy
import logging
from typing import Callable, Iterable, Optional, Sequence

from ..errors import AmbiguousIdentifier, DuplicateNameAmbiguity, NotFound
from ..resources.placement_zones_types import (
    EpzState,
    PlacementZone,
    PlacementZoneEdit,
    PlacementZoneList,
    ZoneUpdate,
    present_or_absent,
)
from ..resources.tags_types import Tag, TagAssignmentRequest, parse_tag
from ..utils import resource_pool_link, unique_in_order
from .metrics import used_cpu_percent, used_memory_percent
from .tag_sets import add_tag_links, remove_tag_links

_logger = logging.getLogger(__name__)

NO_ELEMENTS_FOUND = "No elements found."


def resolve_link(zones: PlacementZoneList, short_id: str) -> str:
    """Return the resource pool link of the one zone ``short_id`` refers to.

    An exact zone ID wins outright. Otherwise ``short_id`` may be an ID prefix or a
    zone name, and must point at exactly one zone either way.

    Raises
    ------
    ValueError
        If ``short_id`` is empty.
    AmbiguousIdentifier
        If ID prefix and name matches cover more than one zone.
    DuplicateNameAmbiguity
        If several zones carry the name ``short_id``.
    NotFound
        If nothing matches.
    """
    if not isinstance(short_id, str) or not short_id.strip():
        raise ValueError(f"Invalid placement zone ID: {short_id!r}")
    short_id = short_id.strip()
    candidates = list(zones)

    for zone in candidates:
        if zone.id == short_id:
            return resource_pool_link(zone.id)

    by_name = [zone for zone in candidates if zone.name == short_id]
    if len(by_name) > 1:
        raise DuplicateNameAmbiguity(
            "Placement zones with duplicate name found, provide ID to target a specific placement zone."
        )

    # A prefix and a name pointing at different zones is ambiguous too.
    matched = unique_in_order(
        [zone.id for zone in candidates if zone.id.startswith(short_id)]
        + [zone.id for zone in by_name]
    )
    if len(matched) == 1:
        return resource_pool_link(matched[0])
    if len(matched) > 1:
        raise AmbiguousIdentifier(
            f"Placement zone identifier {short_id!r} is ambiguous, provide more characters of the ID."
        )
    raise NotFound(f"Placement zone not found: {short_id}")


def _parse_assignment_tags(tag_texts: Iterable[str]) -> Optional[list[Tag]]:
    tags: list[Tag] = []
    for text in tag_texts:
        try:
            tags.append(parse_tag(text))
        except ValueError:
            _logger.warning("Skipping invalid tag for assignment: %r", text)
    return tags or None


def build_tag_assignment(
    resource_link: str,
    tags_to_add: Sequence[str],
    tags_to_remove: Sequence[str],
) -> Optional[TagAssignmentRequest]:
    """Build the tag assignment request, or ``None`` when there is nothing to send."""
    if not tags_to_add and not tags_to_remove:
        return None
    to_assign = _parse_assignment_tags(tags_to_add)
    to_unassign = _parse_assignment_tags(tags_to_remove)
    if to_assign is None and to_unassign is None:
        return None
    return TagAssignmentRequest(
        resource_link=resource_link,
        tags_to_assign=to_assign,
        tags_to_unassign=to_unassign,
    )


def apply_edit(
    zone: PlacementZone,
    edit: PlacementZoneEdit,
    *,
    resolve_or_create: Callable[[str], str],
    resolve_existing: Callable[[str], Optional[str]],
) -> ZoneUpdate:
    """Apply ``edit`` to ``zone`` without touching the original.

    Removals run before additions, for the zone's own tags and the EPZ match tags
    alike. Only EPZ match tags go through ``resolve_or_create``. The returned patch
    keeps the stored ``tagLinks``: own tag changes go through the separate tag
    assignment request, so the zone ends up in the returned state only after both
    the patch and the assignment succeed. The two calls are not atomic.
    """
    pool = copy.deepcopy(zone.resource_pool_state)
    if edit.name:
        pool.name = edit.name

    # Patch body carries the zone as stored apart from the name and the EPZ.
    patch_pool = copy.deepcopy(pool)

    # Own tags are created by the assignment endpoint, never here. Tags not yet in
    # the registry, or text that does not parse, are missing from the expected links.
    pool.tag_links = remove_tag_links(pool.tag_links, edit.tags_to_remove, resolve_existing)
    pool.tag_links = add_tag_links(
        pool.tag_links, edit.tags_to_add, lambda text: resolve_existing(text) or ""
    )

    epz = copy.deepcopy(zone.epz_state) if zone.epz_state is not None else EpzState()
    epz.tag_links_to_match = remove_tag_links(
        epz.tag_links_to_match, edit.tags_to_match_to_remove, resolve_existing
    )
    epz.tag_links_to_match = add_tag_links(
        epz.tag_links_to_match, edit.tags_to_match_to_add, resolve_or_create
    )
    epz_state = present_or_absent(epz)

    updated = PlacementZone(
        resource_pool_state=pool,
        epz_state=epz_state,
        document_self_link=zone.document_self_link,
    )
    patch = PlacementZone(resource_pool_state=patch_pool, epz_state=epz_state).to_dict()
    assignment = build_tag_assignment(
        resource_pool_link(zone.id), edit.tags_to_add, edit.tags_to_remove
    )
    return ZoneUpdate(zone=updated, patch=patch, tag_assignment=assignment)


def format_table(
    zones: PlacementZoneList,
    describe_tags: Callable[[Sequence[str]], str],
) -> str:
    """Render zones as tab separated rows in ``document_links`` order."""
    if len(zones) < 1:
        return NO_ELEMENTS_FOUND
    lines = ["ID\tNAME\tMEMORY\tCPU\tTAGS"]
    for zone in zones:
        pool = zone.resource_pool_state
        lines.append(
            "\t".join(
                [
                    pool.id,
                    pool.name,
                    used_memory_percent(pool.max_memory_bytes, pool.system_metrics),
                    used_cpu_percent(pool.system_metrics),
                    describe_tags(pool.tag_links),
                ]
            )
        )
    return "\n".join(lines).strip()


__all__ = [
    "NO_ELEMENTS_FOUND",
    "apply_edit",
    "build_tag_assignment",
    "format_table",
    "resolve_link",
]

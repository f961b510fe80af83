"""Placement zone resource wrapper."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional, TYPE_CHECKING

from .base import Resource
from .placement_zones_types import (
    EpzState,
    PlacementZone,
    PlacementZoneEdit,
    PlacementZoneList,
    ResourcePoolState,
    present_or_absent,
)
from ._common_types import _normalize_tag_texts, parse_custom_properties
from ..errors import AdmiralError, NotFound, TransportFailure
from ..tools.placement_zones import apply_edit, format_table, resolve_link
from ..tools.tag_sets import add_tag_links
from ..utils import ELASTIC_PLACEMENT_ZONES_PATH, placement_zone_link, resource_pool_link

if TYPE_CHECKING:  # pragma: no cover
    from ..client import Admiral
    from .tags import Tags


class PlacementZones(Resource):
    """Placement zone operations.

    Every method is one synchronous round of reads followed by at most one write,
    except :meth:`edit`, which patches the zone and then assigns tags in a second
    call. Errors propagate to the caller unchanged.
    """

    def __init__(self, client: "Admiral", *, tags: "Tags") -> None:
        super().__init__(client)
        self._tags = tags

    def list(self, *, timeout: Optional[int] = None) -> PlacementZoneList:
        """Fetch all placement zones.

        Parameters
        ----------
        timeout
            Request timeout in seconds.

        Returns
        -------
        PlacementZoneList
            Zones in the order given by the store's ``documentLinks``.
        """
        response = self._get(ELASTIC_PLACEMENT_ZONES_PATH, params={"expand": "true"}, timeout=timeout)
        if not isinstance(response, dict):
            self._logger.warning("Placement zones response missing expected document list.")
            raise TransportFailure(
                f"GET {ELASTIC_PLACEMENT_ZONES_PATH} returned no document list: {response!r}"
            )
        return PlacementZoneList.from_dict(response)

    def resolve_link(self, short_id: str, *, timeout: Optional[int] = None) -> str:
        """Resolve a zone ID, ID prefix or name to its resource pool link.

        Raises
        ------
        ValueError
            If ``short_id`` is empty.
        NotFound
            If no zone matches.
        AmbiguousIdentifier
            If several zones match; name clashes raise ``DuplicateNameAmbiguity``.
        """
        return resolve_link(self.list(timeout=timeout), short_id)

    def get(self, short_id: str, *, timeout: Optional[int] = None) -> PlacementZone:
        """Fetch one placement zone by ID, ID prefix or name.

        Parameters
        ----------
        short_id
            Zone identifier as accepted by :meth:`resolve_link`.
        timeout
            Request timeout in seconds.

        Returns
        -------
        PlacementZone
            The matching zone.
        """
        zones = self.list(timeout=timeout)
        link = resolve_link(zones, short_id)
        for zone in zones:
            if resource_pool_link(zone.id) == link:
                return zone
        raise NotFound(f"Placement zone not found: {short_id}")

    def get_name(self, link: str, *, timeout: Optional[int] = None) -> str:
        """Return the name of the resource pool at ``link``."""
        response = self._get(link, timeout=timeout)
        if not isinstance(response, dict):
            raise NotFound(f"Placement zone not found: {link}")
        return ResourcePoolState.from_dict(response).name

    def add(
        self,
        name: str,
        *,
        is_scheduler: bool = False,
        custom_properties: Optional[Iterable[str] | Mapping[str, Optional[str]]] = None,
        tags: Optional[Iterable[str]] = None,
        tags_to_match: Optional[Iterable[str]] = None,
        timeout: Optional[int] = None,
    ) -> str:
        """Create a placement zone.

        Parameters
        ----------
        name
            Zone name. Names need not be unique.
        is_scheduler
            Mark the zone as a scheduler placement zone.
        custom_properties
            ``key=value`` strings or a mapping of user custom properties.
        tags
            ``key:value`` tags to attach to the zone. Missing tags are created.
        tags_to_match
            ``key:value`` tags the elastic placement zone matches compute on.
        timeout
            Request timeout in seconds.

        Returns
        -------
        str
            ID of the created zone.
        """
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Invalid placement zone name: {name!r}")

        if isinstance(custom_properties, Mapping):
            properties = dict(custom_properties)
        else:
            properties = parse_custom_properties(custom_properties)

        pool = ResourcePoolState(name=name)
        pool.custom_properties = properties
        pool.tag_links = add_tag_links([], _normalize_tag_texts(tags), self._tags.resolve_or_create)
        pool.set_scheduler(is_scheduler)
        epz = EpzState(
            tag_links_to_match=add_tag_links(
                [], _normalize_tag_texts(tags_to_match), self._tags.resolve_or_create
            )
        )
        zone = PlacementZone(resource_pool_state=pool, epz_state=present_or_absent(epz))

        response = self._post(ELASTIC_PLACEMENT_ZONES_PATH, json=zone.to_dict(), timeout=timeout)
        created = PlacementZone.from_dict(response) if isinstance(response, dict) else None
        if created is None or not created.id:
            raise AdmiralError("Create placement zone response missing resource pool link.")
        self._logger.info("Created placement zone %s (%s)", created.id, name)
        return created.id

    def edit(
        self,
        short_id: str,
        *,
        name: Optional[str] = None,
        tags_to_add: Optional[Iterable[str]] = None,
        tags_to_remove: Optional[Iterable[str]] = None,
        tags_to_match_to_add: Optional[Iterable[str]] = None,
        tags_to_match_to_remove: Optional[Iterable[str]] = None,
        timeout: Optional[int] = None,
    ) -> str:
        """Edit a placement zone.

        The zone is patched first (name, EPZ match tags). The zone's own tag changes
        are then sent to the tag assignment endpoint, skipped when there are none.
        The two calls are not atomic: if the assignment fails the patch has already
        been applied and is not undone.

        Parameters
        ----------
        short_id
            Zone identifier as accepted by :meth:`resolve_link`.
        name
            New name; empty or ``None`` keeps the current one.
        tags_to_add, tags_to_remove
            ``key:value`` tags to attach to or detach from the zone.
        tags_to_match_to_add, tags_to_match_to_remove
            ``key:value`` tags to add to or remove from the EPZ match rule.
        timeout
            Request timeout in seconds.

        Returns
        -------
        str
            Full ID of the edited zone.
        """
        zone = self.get(short_id, timeout=timeout)
        edit = PlacementZoneEdit(
            name=name,
            tags_to_add=_normalize_tag_texts(tags_to_add),
            tags_to_remove=_normalize_tag_texts(tags_to_remove),
            tags_to_match_to_add=_normalize_tag_texts(tags_to_match_to_add),
            tags_to_match_to_remove=_normalize_tag_texts(tags_to_match_to_remove),
        )
        update = apply_edit(
            zone,
            edit,
            resolve_or_create=self._tags.resolve_or_create,
            resolve_existing=self._tags.resolve_existing,
        )
        pool_link = resource_pool_link(zone.id)
        self._patch(placement_zone_link(pool_link), json=update.patch, timeout=timeout)
        if update.tag_assignment is not None:
            self._tags.assign(update.tag_assignment, timeout=timeout)
        self._logger.info("Updated placement zone %s", zone.id)
        return zone.id

    def remove(self, short_id: str, *, timeout: Optional[int] = None) -> str:
        """Delete a placement zone and return its full ID."""
        link = self.resolve_link(short_id, timeout=timeout)
        self._delete(link, timeout=timeout)
        self._logger.info("Removed placement zone %s", link)
        return link.rsplit("/", 1)[-1]

    def format_table(self, *, timeout: Optional[int] = None) -> str:
        """Return the zone listing as tab separated ``ID NAME MEMORY CPU TAGS`` rows."""
        return format_table(
            self.list(timeout=timeout),
            lambda links: self._tags.describe(links, timeout=timeout),
        )

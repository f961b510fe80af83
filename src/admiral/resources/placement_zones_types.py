"""Types, structures and (de)serialization for placement zones.

A placement zone is a resource pool plus an optional elastic placement zone (EPZ)
rule. On the wire both travel as one document::

    {"resourcePoolState": {...}, "epzState": {...} | null}

System-computed values live in ``customProperties`` under keys prefixed with
``__``. They are lifted into :class:`SystemMetrics` on read and merged back on
write, so user properties and system data never share a dict in memory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Mapping, Optional, TypedDict, cast
from typing_extensions import ReadOnly

from .tags_types import TagAssignmentRequest
from ..utils import RESOURCE_POOLS_PATH, id_from_link

RESERVED_PREFIX = "__"
AVAILABLE_MEMORY_KEY = "__availableMemory"
CPU_USAGE_KEY = "__cpuUsage"
PLACEMENT_ZONE_TYPE_KEY = "__placementZoneType"
SCHEDULER_ZONE_TYPE = "SCHEDULER"

CustomProperties = dict[str, Optional[str]]


#region --- WIRE RESPONSES ---

class ResourcePoolStateResponse(TypedDict, total=False):
    """Readonly resource pool document."""
    name: ReadOnly[str]
    maxCpuCount: ReadOnly[int]
    maxMemoryBytes: ReadOnly[int]
    customProperties: ReadOnly[dict[str, Optional[str]]]
    tagLinks: ReadOnly[list[str]]
    documentSelfLink: ReadOnly[str]


class EpzStateResponse(TypedDict, total=False):
    """Readonly elastic placement zone document."""
    resourcePoolLink: ReadOnly[str]
    tagLinksToMatch: ReadOnly[list[str]]
    documentSelfLink: ReadOnly[str]


class PlacementZoneResponse(TypedDict, total=False):
    """Readonly placement zone document."""
    resourcePoolState: ReadOnly[ResourcePoolStateResponse]
    epzState: ReadOnly[Optional[EpzStateResponse]]
    documentSelfLink: ReadOnly[str]


class PlacementZoneListResponse(TypedDict, total=False):
    """Readonly query result page."""
    totalCount: ReadOnly[int]
    documents: ReadOnly[dict[str, PlacementZoneResponse]]
    documentLinks: ReadOnly[list[str]]

#endregion


#region --- DOMAIN MODEL ---

@dataclass
class SystemMetrics:
    """Reserved custom properties written by the system, kept as raw strings."""

    available_memory: Optional[str] = None
    cpu_usage: Optional[str] = None
    placement_zone_type: Optional[str] = None
    extra: CustomProperties = field(default_factory=dict)

    @classmethod
    def split_custom_properties(
        cls, properties: Optional[Mapping[str, Optional[str]]]
    ) -> tuple["SystemMetrics", CustomProperties]:
        """Split a raw ``customProperties`` map into system metrics and user properties."""
        metrics = cls()
        user: CustomProperties = {}
        for key, value in (properties or {}).items():
            if key == AVAILABLE_MEMORY_KEY:
                metrics.available_memory = value
            elif key == CPU_USAGE_KEY:
                metrics.cpu_usage = value
            elif key == PLACEMENT_ZONE_TYPE_KEY:
                metrics.placement_zone_type = value
            elif key.startswith(RESERVED_PREFIX):
                metrics.extra[key] = value
            else:
                user[key] = value
        return metrics, user

    def to_custom_properties(self) -> CustomProperties:
        output: CustomProperties = dict(self.extra)
        if self.available_memory is not None:
            output[AVAILABLE_MEMORY_KEY] = self.available_memory
        if self.cpu_usage is not None:
            output[CPU_USAGE_KEY] = self.cpu_usage
        if self.placement_zone_type is not None:
            output[PLACEMENT_ZONE_TYPE_KEY] = self.placement_zone_type
        return output


@dataclass
class ResourcePoolState:
    name: str = ""
    max_cpu_count: int = 0
    max_memory_bytes: int = 0
    custom_properties: CustomProperties = field(default_factory=dict)
    system_metrics: SystemMetrics = field(default_factory=SystemMetrics)
    tag_links: list[str] = field(default_factory=list)
    document_self_link: str = ""

    @property
    def id(self) -> str:
        return self.document_self_link.replace(RESOURCE_POOLS_PATH + "/", "")

    @property
    def is_scheduler(self) -> bool:
        return self.system_metrics.placement_zone_type == SCHEDULER_ZONE_TYPE

    def set_scheduler(self, is_scheduler: bool) -> None:
        """Mark the pool as a scheduler placement zone.

        Only ``True`` has an effect: there is no path that clears the marker.
        """
        if is_scheduler:
            self.system_metrics.placement_zone_type = SCHEDULER_ZONE_TYPE

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, object]]) -> "ResourcePoolState":
        data = data or {}
        metrics, user = SystemMetrics.split_custom_properties(
            cast(Optional[Mapping[str, Optional[str]]], data.get("customProperties"))
        )
        return cls(
            name=str(data.get("name") or ""),
            max_cpu_count=int(cast(int, data.get("maxCpuCount") or 0)),
            max_memory_bytes=int(cast(int, data.get("maxMemoryBytes") or 0)),
            custom_properties=user,
            system_metrics=metrics,
            tag_links=list(cast(list[str], data.get("tagLinks") or [])),
            document_self_link=str(data.get("documentSelfLink") or ""),
        )

    def to_dict(self) -> dict[str, object]:
        output: dict[str, object] = {}
        if self.document_self_link:
            output["documentSelfLink"] = self.document_self_link
        if self.name:
            output["name"] = self.name
        if self.max_cpu_count:
            output["maxCpuCount"] = self.max_cpu_count
        if self.max_memory_bytes:
            output["maxMemoryBytes"] = self.max_memory_bytes
        properties = {**self.custom_properties, **self.system_metrics.to_custom_properties()}
        if properties:
            output["customProperties"] = properties
        output["tagLinks"] = list(self.tag_links)
        return output


@dataclass
class EpzState:
    resource_pool_link: str = ""
    tag_links_to_match: list[str] = field(default_factory=list)
    document_self_link: str = ""

    def is_absent(self) -> bool:
        """True when the EPZ carries nothing and must travel as ``null``."""
        return not self.tag_links_to_match and not self.resource_pool_link and not self.document_self_link

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, object]]) -> "EpzState":
        data = data or {}
        return cls(
            resource_pool_link=str(data.get("resourcePoolLink") or ""),
            tag_links_to_match=list(cast(list[str], data.get("tagLinksToMatch") or [])),
            document_self_link=str(data.get("documentSelfLink") or ""),
        )

    def to_dict(self) -> Optional[dict[str, object]]:
        if self.is_absent():
            return None
        output: dict[str, object] = {}
        if self.document_self_link:
            output["documentSelfLink"] = self.document_self_link
        if self.resource_pool_link:
            output["resourcePoolLink"] = self.resource_pool_link
        if self.tag_links_to_match:
            output["tagLinksToMatch"] = list(self.tag_links_to_match)
        return output


def present_or_absent(epz_state: Optional[EpzState]) -> Optional[EpzState]:
    """Return ``epz_state``, or ``None`` when it is logically absent."""
    if epz_state is None or epz_state.is_absent():
        return None
    return epz_state


@dataclass
class PlacementZone:
    resource_pool_state: ResourcePoolState = field(default_factory=ResourcePoolState)
    epz_state: Optional[EpzState] = None
    document_self_link: str = ""

    @property
    def id(self) -> str:
        return self.resource_pool_state.id or id_from_link(self.document_self_link)

    @property
    def name(self) -> str:
        return self.resource_pool_state.name

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, object]]) -> "PlacementZone":
        data = data or {}
        return cls(
            resource_pool_state=ResourcePoolState.from_dict(
                cast(Optional[Mapping[str, object]], data.get("resourcePoolState"))
            ),
            epz_state=present_or_absent(
                EpzState.from_dict(cast(Optional[Mapping[str, object]], data.get("epzState")))
            ),
            document_self_link=str(data.get("documentSelfLink") or ""),
        )

    def to_dict(self) -> dict[str, object]:
        output: dict[str, object] = {
            "resourcePoolState": self.resource_pool_state.to_dict(),
            "epzState": self.epz_state.to_dict() if self.epz_state is not None else None,
        }
        if self.document_self_link:
            output["documentSelfLink"] = self.document_self_link
        return output


@dataclass
class PlacementZoneList:
    """One page of placement zones. ``document_links`` holds the display order."""

    total_count: int = 0
    documents: dict[str, PlacementZone] = field(default_factory=dict)
    document_links: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.document_links)

    def __getitem__(self, index: int) -> PlacementZone:
        return self.documents[self.document_links[index]]

    def __iter__(self) -> Iterator[PlacementZone]:
        for link in self.document_links:
            zone = self.documents.get(link)
            if zone is not None:
                yield zone

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, object]]) -> "PlacementZoneList":
        data = data or {}
        raw_documents = data.get("documents")
        documents: dict[str, PlacementZone] = {}
        if isinstance(raw_documents, dict):
            for link, raw in raw_documents.items():
                if not isinstance(raw, dict):
                    continue
                zone = PlacementZone.from_dict(raw)
                if not zone.document_self_link:
                    zone.document_self_link = link
                documents[link] = zone
        links = data.get("documentLinks")
        document_links = [link for link in links if isinstance(link, str)] if isinstance(links, list) else []
        total = data.get("totalCount")
        return cls(
            total_count=total if isinstance(total, int) else len(document_links),
            documents=documents,
            document_links=document_links,
        )

#endregion


#region --- EDITS ---

@dataclass
class PlacementZoneEdit:
    """Requested changes to an existing placement zone. Tags are ``key:value`` text."""

    name: Optional[str] = None
    tags_to_add: list[str] = field(default_factory=list)
    tags_to_remove: list[str] = field(default_factory=list)
    tags_to_match_to_add: list[str] = field(default_factory=list)
    tags_to_match_to_remove: list[str] = field(default_factory=list)


@dataclass
class ZoneUpdate:
    """Outcome of applying a :class:`PlacementZoneEdit`.

    ``zone`` is the expected state after both calls land. ``patch`` is the body for
    the zone PATCH, which keeps the stored ``tagLinks``; the zone's own tag changes
    travel in ``tag_assignment`` instead, or not at all when it is ``None``.
    """

    zone: PlacementZone
    patch: dict[str, object]
    tag_assignment: Optional[TagAssignmentRequest] = None

#endregion


__all__ = [
    "AVAILABLE_MEMORY_KEY",
    "CPU_USAGE_KEY",
    "PLACEMENT_ZONE_TYPE_KEY",
    "SCHEDULER_ZONE_TYPE",
    "EpzState",
    "PlacementZone",
    "PlacementZoneEdit",
    "PlacementZoneList",
    "PlacementZoneListResponse",
    "PlacementZoneResponse",
    "ResourcePoolState",
    "SystemMetrics",
    "ZoneUpdate",
    "present_or_absent",
]

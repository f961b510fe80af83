"""Public package surface for the Admiral placement zones client."""

from .client import ADMIRAL_PORT, DEFAULT_HOST, Admiral
from .errors import (
    AdmiralError,
    AmbiguousIdentifier,
    DuplicateNameAmbiguity,
    MalformedStoredMetric,
    NotFound,
    TagResolutionFailure,
    TransportFailure,
)
from .resources.placement_zones_types import (
    EpzState,
    PlacementZone,
    PlacementZoneEdit,
    PlacementZoneList,
    ResourcePoolState,
    SystemMetrics,
)

__all__ = [
    "ADMIRAL_PORT",
    "DEFAULT_HOST",
    "Admiral",
    "AdmiralError",
    "AmbiguousIdentifier",
    "DuplicateNameAmbiguity",
    "EpzState",
    "MalformedStoredMetric",
    "NotFound",
    "PlacementZone",
    "PlacementZoneEdit",
    "PlacementZoneList",
    "ResourcePoolState",
    "SystemMetrics",
    "TagResolutionFailure",
    "TransportFailure",
]

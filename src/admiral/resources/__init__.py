"""Resource module exports."""

from .placement_zones import PlacementZones
from .tags import Tags

__all__ = [
    "PlacementZones",
    "Tags",
]

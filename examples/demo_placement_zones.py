"""CLI demo that exercises the :class:`admiral.Admiral` placement zone helpers.

Run with the virtual environment activated::

    python examples/demo_placement_zones.py

Optionally set ``ADMIRAL_HOST`` / ``ADMIRAL_PORT`` / ``ADMIRAL_TOKEN`` environment
variables if your Admiral instance is not available at the defaults
(``localhost:8282``, no auth).
"""

import logging
import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from admiral import Admiral, AdmiralError

logging.basicConfig(level=logging.INFO)


def main() -> None:
    admiral = Admiral()

    try:
        zone_id = admiral.placement_zones.add(
            "demo-pool",
            custom_properties=["owner=demo"],
            tags=["env:prod"],
            tags_to_match=["zone:eu"],
        )
        print(f"Created placement zone {zone_id}")

        admiral.placement_zones.edit(zone_id, tags_to_add=["team:x"], tags_to_remove=["env:prod"])
        zone = admiral.placement_zones.get(zone_id)
        print(f"Zone {zone.name} now has tags {admiral.tags.describe(zone.resource_pool_state.tag_links)}")

        print()
        print(admiral.placement_zones.format_table())

        admiral.placement_zones.remove(zone_id)
        print(f"\nRemoved placement zone {zone_id}")
    except AdmiralError as exc:
        print(f"Admiral request failed: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()

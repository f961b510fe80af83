import sys
import unittest
from pathlib import Path

# Ensure src/ is on sys.path so we can import the package without installation
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from admiral.resources._common_types import (  # noqa: E402
    _normalize_tag_texts,
    parse_custom_properties,
)
from admiral.utils import id_from_link, placement_zone_link, unique_in_order  # noqa: E402


class CommonTypesTests(unittest.TestCase):
    def test_parse_custom_properties(self):
        self.assertEqual(
            parse_custom_properties(["a=1", "b=x=y", "c=", "bad", "=v", "a=2"]),
            {"a": "2", "b": "x=y", "c": ""},
        )

    def test_parse_custom_properties_none(self):
        self.assertEqual(parse_custom_properties(None), {})

    def test_normalize_tag_texts(self):
        self.assertEqual(_normalize_tag_texts(None), [])
        self.assertEqual(_normalize_tag_texts("env:prod"), ["env:prod"])
        self.assertEqual(_normalize_tag_texts(["env:prod", "", "  ", 3]), ["env:prod"])


class UtilsTests(unittest.TestCase):
    def test_unique_in_order(self):
        self.assertEqual(unique_in_order(["b", "a", "b", "c", "a"]), ["b", "a", "c"])

    def test_links(self):
        self.assertEqual(
            placement_zone_link("/resources/pools/x"),
            "/resources/elastic-placement-zones-config/resources/pools/x",
        )
        self.assertEqual(id_from_link("/resources/pools/x"), "x")
        self.assertEqual(id_from_link(""), "")

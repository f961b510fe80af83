import sys
import unittest
from pathlib import Path

# Ensure src/ is on sys.path so we can import the package without installation
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from admiral.errors import MalformedStoredMetric  # noqa: E402
from admiral.resources.placement_zones_types import SystemMetrics  # noqa: E402
from admiral.tools.metrics import (  # noqa: E402
    MetricPolicy,
    parse_float_metric,
    parse_int_metric,
    used_cpu_percent,
    used_memory_percent,
)


class MemoryPercentTests(unittest.TestCase):
    def test_zero_max_is_zero(self):
        self.assertEqual(used_memory_percent(0, SystemMetrics(available_memory="123")), "0.00%")
        self.assertEqual(used_memory_percent(0, {}), "0.00%")

    def test_used_percentage(self):
        self.assertEqual(used_memory_percent(1000, SystemMetrics(available_memory="400")), "60.00%")

    def test_accepts_raw_custom_properties(self):
        self.assertEqual(used_memory_percent(1000, {"__availableMemory": "250"}), "75.00%")

    def test_missing_available_counts_as_zero(self):
        self.assertEqual(used_memory_percent(1000, SystemMetrics()), "100.00%")
        self.assertEqual(used_memory_percent(1000, {"__availableMemory": None}), "100.00%")
        self.assertEqual(used_memory_percent(1000, None), "100.00%")

    def test_rounds_half_up(self):
        self.assertEqual(used_memory_percent(3, SystemMetrics(available_memory="2")), "33.33%")
        self.assertEqual(used_memory_percent(80000, SystemMetrics(available_memory="79999")), "0.00%")
        self.assertEqual(used_memory_percent(8000, SystemMetrics(available_memory="7999")), "0.01%")

    def test_malformed_value_is_fatal(self):
        with self.assertRaises(MalformedStoredMetric):
            used_memory_percent(1000, SystemMetrics(available_memory="lots"))

    def test_malformed_value_with_soft_policy(self):
        metrics = SystemMetrics(available_memory="lots")
        self.assertEqual(
            used_memory_percent(1000, metrics, policy=MetricPolicy.DEFAULT_TO_ZERO), "100.00%"
        )


class CpuPercentTests(unittest.TestCase):
    def test_missing_key(self):
        self.assertEqual(used_cpu_percent({}), "0%")
        self.assertEqual(used_cpu_percent(SystemMetrics()), "0%")

    def test_null_value(self):
        self.assertEqual(used_cpu_percent({"__cpuUsage": None}), "0%")

    def test_non_numeric_soft_fails(self):
        self.assertEqual(used_cpu_percent({"__cpuUsage": "busy"}), "0%")
        self.assertEqual(used_cpu_percent({"__cpuUsage": "nan"}), "0%")

    def test_formats_two_places(self):
        self.assertEqual(used_cpu_percent({"__cpuUsage": "12.345"}), "12.35%")
        self.assertEqual(used_cpu_percent(SystemMetrics(cpu_usage="7")), "7.00%")

    def test_rounds_half_up(self):
        self.assertEqual(used_cpu_percent({"__cpuUsage": "0.125"}), "0.13%")

    def test_strict_policy_raises(self):
        with self.assertRaises(MalformedStoredMetric):
            used_cpu_percent({"__cpuUsage": "busy"}, policy=MetricPolicy.STRICT)


class ParseMetricTests(unittest.TestCase):
    def test_parse_int_missing(self):
        self.assertEqual(parse_int_metric(None, "k", MetricPolicy.STRICT), 0)

    def test_parse_int_rejects_float_text(self):
        with self.assertRaises(MalformedStoredMetric):
            parse_int_metric("1.5", "k", MetricPolicy.STRICT)

    def test_parse_int_accepts_signed_digits(self):
        self.assertEqual(parse_int_metric("+400", "k", MetricPolicy.STRICT), 400)
        self.assertEqual(parse_int_metric("-5", "k", MetricPolicy.STRICT), -5)

    def test_parse_int_rejects_loose_int_text(self):
        for raw in (" 400 ", "1_000", "٤٠٠", ""):
            with self.subTest(raw=raw):
                with self.assertRaises(MalformedStoredMetric):
                    parse_int_metric(raw, "k", MetricPolicy.STRICT)
                self.assertEqual(parse_int_metric(raw, "k", MetricPolicy.DEFAULT_TO_ZERO), 0)

    def test_parse_float_infinite(self):
        self.assertIsNone(parse_float_metric("inf", "k", MetricPolicy.DEFAULT_TO_ZERO))
        with self.assertRaises(MalformedStoredMetric):
            parse_float_metric("inf", "k", MetricPolicy.STRICT)

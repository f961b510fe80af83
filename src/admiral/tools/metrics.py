"""Utilization percentages derived from system metrics.

Memory and CPU are parsed under different policies. Available memory is written by
the system, so an unparsable value means the store is corrupt and is an error. CPU
usage is reported loosely and anything unparsable reads as ``0%``.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Mapping, Optional

from ..errors import MalformedStoredMetric
from ..resources.placement_zones_types import AVAILABLE_MEMORY_KEY, SystemMetrics

MetricsInput = SystemMetrics | Mapping[str, Optional[str]]

_CENTS = Decimal("0.01")
# Signed ASCII digits only; int() alone would also take spaces and underscores.
_INTEGER_RE = re.compile(r"[-+]?[0-9]+")


class MetricPolicy(Enum):
    STRICT = "strict"
    DEFAULT_TO_ZERO = "default_to_zero"


def _as_metrics(metrics: Optional[MetricsInput]) -> SystemMetrics:
    if isinstance(metrics, SystemMetrics):
        return metrics
    return SystemMetrics.split_custom_properties(metrics)[0]


def _round_percent(value: float) -> Decimal:
    """Round half-up to two decimal places."""
    return Decimal(repr(value)).quantize(_CENTS, rounding=ROUND_HALF_UP)


def parse_int_metric(raw: Optional[str], key: str, policy: MetricPolicy) -> int:
    """Parse an integer metric, ``0`` when missing.

    Raises
    ------
    MalformedStoredMetric
        Under ``STRICT`` when ``raw`` is present but not an integer.
    """
    if raw is None:
        return 0
    if isinstance(raw, str) and _INTEGER_RE.fullmatch(raw):
        return int(raw)
    if policy is MetricPolicy.STRICT:
        raise MalformedStoredMetric(f"Stored metric {key} is not an integer: {raw!r}")
    return 0


def parse_float_metric(raw: Optional[str], key: str, policy: MetricPolicy) -> Optional[float]:
    """Parse a float metric. Returns ``None`` for missing values or, under
    ``DEFAULT_TO_ZERO``, for unparsable ones."""
    if raw is None:
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        if policy is MetricPolicy.STRICT:
            raise MalformedStoredMetric(f"Stored metric {key} is not a number: {raw!r}") from exc
        return None
    if not math.isfinite(value):
        if policy is MetricPolicy.STRICT:
            raise MalformedStoredMetric(f"Stored metric {key} is not finite: {raw!r}")
        return None
    return value


def used_memory_percent(
    max_memory_bytes: int,
    metrics: Optional[MetricsInput],
    *,
    policy: MetricPolicy = MetricPolicy.STRICT,
) -> str:
    """Return used memory as ``"XX.XX%"`` of ``max_memory_bytes``.

    Missing available memory counts as none available. A zero maximum gives
    ``"0.00%"``.
    """
    available = parse_int_metric(_as_metrics(metrics).available_memory, AVAILABLE_MEMORY_KEY, policy)
    used = max_memory_bytes - available
    percentage = 0.0
    if max_memory_bytes != 0:
        percentage = used / max_memory_bytes * 100
    return f"{_round_percent(percentage):.2f}%"


def used_cpu_percent(
    metrics: Optional[MetricsInput],
    *,
    policy: MetricPolicy = MetricPolicy.DEFAULT_TO_ZERO,
) -> str:
    """Return CPU usage as ``"X.XX%"``, or ``"0%"`` when it cannot be read."""
    value = parse_float_metric(_as_metrics(metrics).cpu_usage, "__cpuUsage", policy)
    if value is None:
        return "0%"
    return f"{_round_percent(value):.2f}%"


__all__ = [
    "MetricPolicy",
    "parse_float_metric",
    "parse_int_metric",
    "used_cpu_percent",
    "used_memory_percent",
]

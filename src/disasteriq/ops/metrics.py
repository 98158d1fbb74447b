"""Synthetic Prometheus exposition text for the /api/metrics endpoint.

Counts are fixed and a few gauges are randomized. Nothing here measures the
running process.
"""

import random
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from ..utils.time import utc_now

PREFIX = "disaster_iq"

# (labels, value) pairs per family
Sample = Tuple[str, str]


def _family(name: str, help_text: str, metric_type: str, samples: Sequence[Sample], ts: int) -> List[str]:
    lines = [
        f"# HELP {name} {help_text}\n",
        f"# TYPE {name} {metric_type}\n",
    ]
    for suffix_labels, value in samples:
        lines.append(f"{name}{suffix_labels} {value} {ts}\n")
    return lines


def _histogram(name: str, help_text: str, buckets: Sequence[Tuple[str, int]], total: float, count: int, ts: int) -> List[str]:
    lines = [
        f"# HELP {name} {help_text}\n",
        f"# TYPE {name} histogram\n",
    ]
    for le, value in buckets:
        lines.append(f'{name}_bucket{{le="{le}"}} {value} {ts}\n')
    lines.append(f"{name}_sum {total} {ts}\n")
    lines.append(f"{name}_count {count} {ts}\n")
    return lines


def generate_metrics(rng: Optional[random.Random] = None, now: Optional[datetime] = None) -> str:
    """
    Render every metric family as exposition text.

    Each sample carries the same trailing epoch-seconds timestamp.
    """
    rng = rng or random.Random()
    ts = int((now or utc_now()).timestamp())

    lines: List[str] = []
    lines += _family(
        f"{PREFIX}_api_requests_total",
        "Total number of API requests",
        "counter",
        [
            ('{endpoint="/api/disasters"}', "328"),
            ('{endpoint="/api/alerts"}', "213"),
            ('{endpoint="/api/metrics"}', "42"),
        ],
        ts,
    )
    lines += _family(
        f"{PREFIX}_active_disasters",
        "Current number of active disasters",
        "gauge",
        [
            ('{type="wildfire"}', "23"),
            ('{type="earthquake"}', "12"),
            ('{type="flood"}', "7"),
            ('{type="storm"}', "4"),
            ('{type="volcano"}', "1"),
        ],
        ts,
    )
    lines += _family(
        f"{PREFIX}_memory_usage_bytes",
        "Memory usage in bytes",
        "gauge",
        [
            ('{type="heap"}', str(int(rng.random() * 500_000_000))),
            ('{type="rss"}', str(int(rng.random() * 700_000_000))),
        ],
        ts,
    )
    lines += _family(
        f"{PREFIX}_cpu_usage",
        "CPU usage percentage",
        "gauge",
        [("", f"{rng.random() * 35:.2f}")],
        ts,
    )
    lines += _histogram(
        f"{PREFIX}_http_request_duration_seconds",
        "HTTP request duration in seconds",
        [("0.05", 1420), ("0.1", 2326), ("0.2", 2898), ("0.5", 2975), ("1.0", 2983), ("+Inf", 2983)],
        235.67,
        2983,
        ts,
    )
    lines += _family(
        f"{PREFIX}_errors_total",
        "Total number of errors",
        "counter",
        [
            ('{type="api"}', "18"),
            ('{type="db"}', "3"),
            ('{type="auth"}', "0"),
        ],
        ts,
    )
    lines += _family(
        f"{PREFIX}_external_service_up",
        "External service availability (1=up, 0=down)",
        "gauge",
        [
            ('{service="nasa_api"}', "1"),
            ('{service="usgs_api"}', "1"),
            ('{service="noaa_api"}', "0" if rng.random() > 0.9 else "1"),
        ],
        ts,
    )
    lines += _family(
        f"{PREFIX}_external_request_duration_seconds",
        "External API request duration in seconds",
        "gauge",
        [
            ('{service="nasa_api"}', f"{rng.random() * 0.4 + 0.2:.3f}"),
            ('{service="usgs_api"}', f"{rng.random() * 0.5 + 0.3:.3f}"),
            ('{service="noaa_api"}', f"{rng.random() * 0.8 + 0.5:.3f}"),
        ],
        ts,
    )
    return "".join(lines)

"""Fixed display tables for the analytics view.

Color tokens and confidence bucket bounds shared by the aggregator.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, NamedTuple

from phishscope.models.domain import RiskLevel

RISK_COLORS: Mapping[RiskLevel, str] = MappingProxyType(
    {
        "safe": "hsl(142, 76%, 36%)",
        "low": "hsl(45, 93%, 47%)",
        "medium": "hsl(217, 91%, 60%)",
        "high": "hsl(0, 84%, 60%)",
        "critical": "hsl(0, 63%, 31%)",
    }
)


class BucketSpec(NamedTuple):
    """A closed confidence range with its inclusive upper bound."""

    label: str
    upper: int
    color: str


# Contiguous, in range order, covering [0, 100]
CONFIDENCE_BUCKETS: tuple[BucketSpec, ...] = (
    BucketSpec("0-20%", 20, "hsl(0, 84%, 60%)"),
    BucketSpec("21-40%", 40, "hsl(25, 95%, 53%)"),
    BucketSpec("41-60%", 60, "hsl(45, 93%, 47%)"),
    BucketSpec("61-80%", 80, "hsl(100, 60%, 45%)"),
    BucketSpec("81-100%", 100, "hsl(142, 76%, 36%)"),
)

MIN_CONFIDENCE = 0
MAX_CONFIDENCE = 100

"""
Distribution Service
====================
Share of records at each mood level, for legends and pie slices.

Levels nobody logged are left out rather than zero-filled, so a
renderer draws a slice only for categories that actually occurred.
"""

from __future__ import annotations

import logging
from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from moody.models.insights import DistributionEntry
from moody.models.mood import MOOD_LEVELS, MoodLevel, MoodRecord

logger = logging.getLogger(__name__)

_ONE_DECIMAL = Decimal("0.1")


def _percentage(count: int, total: int) -> float:
    share = Decimal(count * 100) / Decimal(total)
    return float(share.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def compute_distribution(
    records: Sequence[MoodRecord],
    levels: Sequence[MoodLevel] = MOOD_LEVELS,
) -> list[DistributionEntry]:
    """Count and percentage per level, in *levels* order.

    Percentages are rounded half-up to one decimal (6.25 -> 6.3), so they
    may not sum to exactly 100. Returns ``[]`` for empty input.
    """
    total = len(records)
    if total == 0:
        return []

    counts = Counter(r.value for r in records)

    distribution = [
        DistributionEntry(
            value=level.value,
            label=level.label,
            color=level.color,
            emoji=level.emoji,
            count=counts[level.value],
            percentage=_percentage(counts[level.value], total),
        )
        for level in levels
        if counts[level.value] > 0
    ]

    unmatched = total - sum(entry.count for entry in distribution)
    if unmatched:
        logger.debug("%d of %d records matched no supplied level", unmatched, total)

    return distribution

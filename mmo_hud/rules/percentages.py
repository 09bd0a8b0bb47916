"""
Derived display percentages for resource bars.

Party and enemy primary bars use different denominators when temporary
points are present:
- Party: the pool inflates to value + temp only when that exceeds max.
- Enemies: the pool is always max + temp.
Both formulas are kept as they are; unifying them changes what players see.

All functions mutate the bar in place and return it.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..state.schema import Bar, NormalizedEntry


def round_percent(part: float, whole: float) -> int:
    """
    Percentage of part in whole, rounded half up and clamped to 0-100.

    A zero or negative whole yields 0.
    """
    if whole <= 0:
        return 0
    percent = math.floor(part / whole * 100 + 0.5)
    return max(0, min(100, percent))


def apply_party_primary(bar: "Bar") -> "Bar":
    """Percentages for a party member's primary bar."""
    temp = bar.temp or 0
    if bar.value + temp > bar.max:
        total = bar.value + temp
    else:
        total = bar.max

    bar.percent = round_percent(bar.value, total)
    if bar.temp:
        bonus = round_percent(bar.temp, total)
        # The bonus gives way, never the primary percent
        if bar.percent + bonus > 100:
            bonus = 100 - bar.percent
        bar.bonus_percent = bonus
    return bar


def apply_enemy_primary(bar: "Bar") -> "Bar":
    """Percentages for an enemy's primary bar."""
    total = bar.max + (bar.temp or 0)

    bar.percent = round_percent(bar.value, total)
    if bar.temp:
        bar.bonus_percent = min(round_percent(bar.temp, total), 100 - bar.percent)
    return bar


def apply_secondary(bar: "Bar") -> "Bar":
    """Plain value/max percentage; temporary points are ignored."""
    bar.percent = round_percent(bar.value, bar.max)
    return bar


def apply_party_percentages(entry: "NormalizedEntry") -> "NormalizedEntry":
    apply_party_primary(entry.primary)
    if entry.secondary is not None:
        apply_secondary(entry.secondary)
    return entry


def apply_enemy_percentages(entry: "NormalizedEntry") -> "NormalizedEntry":
    apply_enemy_primary(entry.primary)
    return entry

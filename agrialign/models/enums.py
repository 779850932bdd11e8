"""Classification enums for the coordination pipeline.

Each StrEnum value is the exact label returned in API payloads.
"""

from enum import StrEnum

# ── Harvest forecasting ─────────────────────────────────────────────────────


class HarvestLevel(StrEnum):
    """Forecasted volume banded against daily transport capacity."""

    low = "LOW"
    medium = "MEDIUM"
    high = "HIGH"


class WeatherCondition(StrEnum):
    """Human label for a weather deviation flag."""

    adverse = "Adverse"
    normal = "Normal"
    favorable = "Favorable"


# ── Logistics ───────────────────────────────────────────────────────────────


class StressLevel(StrEnum):
    """Transport stress classification."""

    normal = "NORMAL"
    elevated = "ELEVATED"
    high = "HIGH"


# ── Storage ─────────────────────────────────────────────────────────────────


class UtilizationBand(StrEnum):
    """Cold-storage occupancy band."""

    low = "LOW"
    medium = "MEDIUM"
    high = "HIGH"


class StorageAction(StrEnum):
    """Reservation decision for excess harvest volume."""

    no_action = "NO_ACTION"
    reserve_partial = "RESERVE_PARTIAL"
    reserve_urgent = "RESERVE_URGENT"
    reserve_immediately = "RESERVE_IMMEDIATELY"


class Urgency(StrEnum):
    """Ordinal urgency attached to a storage decision."""

    none = "NONE"
    medium = "MEDIUM"
    high = "HIGH"
    critical = "CRITICAL"

"""Domain model registry.

Application code can do::

    from agrialign.models import FarmerRecord, Region, StressLevel, ...
"""

# ── Enums ───────────────────────────────────────────────────────────────────
from agrialign.models.enums import (
    HarvestLevel,
    StorageAction,
    StressLevel,
    Urgency,
    UtilizationBand,
    WeatherCondition,
)

# ── Farmer records ──────────────────────────────────────────────────────────
from agrialign.models.farmer import FarmerRecord

# ── Reference data ──────────────────────────────────────────────────────────
from agrialign.models.reference import (
    CropProfile,
    Region,
    StorageFacility,
    WeatherSignal,
)

__all__ = [
    # Reference data
    "CropProfile",
    # Farmer records
    "FarmerRecord",
    # Enums
    "HarvestLevel",
    "Region",
    "StorageAction",
    "StorageFacility",
    "StressLevel",
    "Urgency",
    "UtilizationBand",
    "WeatherCondition",
    "WeatherSignal",
]

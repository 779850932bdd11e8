"""Reference records: crops, regions, weather signals and storage facilities.

These are snapshots handed to the coordination core.  Storage usage is
mutated by external systems; the core only ever reads a capacity/usage
pair, so every model here is frozen.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CropProfile(BaseModel):
    """Agronomic reference: maturity duration + average yield."""

    model_config = ConfigDict(frozen=True)

    crop_id: str
    crop_type: str
    avg_maturity_days: int = Field(ge=0)
    avg_yield_per_hectare: float = Field(gt=0)
    category: str
    shelf_life_days: int = Field(ge=0)


class Region(BaseModel):
    """District served by a shared transport fleet."""

    model_config = ConfigDict(frozen=True)

    region_id: str
    name: str
    state: str | None = None
    transport_capacity_per_day: float = Field(gt=0)
    typical_harvest_window: str


class WeatherSignal(BaseModel):
    """Short-range forecast deviation for a region.

    ``deviation_flag`` is -1 (adverse), 0 (normal) or +1 (favorable).
    """

    model_config = ConfigDict(frozen=True)

    region_id: str
    deviation_flag: int = Field(ge=-1, le=1)
    forecast: str
    temperature_avg: float | None = None
    humidity_avg: float | None = None


class StorageFacility(BaseModel):
    """Cold-storage facility capacity snapshot."""

    model_config = ConfigDict(frozen=True)

    storage_id: str
    name: str
    region_id: str
    total_capacity: float = Field(gt=0)
    current_usage: float = Field(ge=0)
    type: str
    temperature_range: str

    @model_validator(mode="after")
    def _validate_usage(self) -> "StorageFacility":
        if self.current_usage > self.total_capacity:
            raise ValueError("current_usage cannot exceed total_capacity")
        return self

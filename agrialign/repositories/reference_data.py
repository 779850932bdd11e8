"""Read-only lookup tables for crops, regions, storage facilities and weather."""

from __future__ import annotations

from collections.abc import Iterable

from agrialign.data import sample_data
from agrialign.errors import NotFoundError
from agrialign.models.reference import CropProfile, Region, StorageFacility, WeatherSignal


class ReferenceData:
    """Immutable reference tables keyed by uppercase identifier."""

    def __init__(
        self,
        *,
        crops: Iterable[CropProfile],
        regions: Iterable[Region],
        facilities: Iterable[StorageFacility],
        weather: Iterable[WeatherSignal],
    ) -> None:
        self._crops = {crop.crop_id.upper(): crop for crop in crops}
        self._regions = {region.region_id.upper(): region for region in regions}
        self._facilities = {item.storage_id.upper(): item for item in facilities}
        self._weather = {signal.region_id.upper(): signal for signal in weather}

    @classmethod
    def from_sample_data(cls) -> "ReferenceData":
        return cls(
            crops=sample_data.CROPS,
            regions=sample_data.REGIONS,
            facilities=sample_data.STORAGE_FACILITIES,
            weather=sample_data.WEATHER,
        )

    def list_crops(self) -> list[CropProfile]:
        return list(self._crops.values())

    def get_crop(self, crop_id: str) -> CropProfile:
        crop = self._crops.get(crop_id.upper())
        if crop is None:
            raise NotFoundError("Crop", crop_id)
        return crop

    def list_regions(self) -> list[Region]:
        return list(self._regions.values())

    def get_region(self, region_id: str) -> Region:
        region = self._regions.get(region_id.upper())
        if region is None:
            raise NotFoundError("Region", region_id)
        return region

    def list_facilities(self, region_id: str | None = None) -> list[StorageFacility]:
        facilities = list(self._facilities.values())
        if region_id is None:
            return facilities
        return [item for item in facilities if item.region_id.upper() == region_id.upper()]

    def get_facility(self, storage_id: str) -> StorageFacility:
        facility = self._facilities.get(storage_id.upper())
        if facility is None:
            raise NotFoundError("Storage facility", storage_id)
        return facility

    def all_weather(self) -> dict[str, WeatherSignal]:
        return dict(self._weather)

    def get_weather(self, region_id: str) -> WeatherSignal:
        signal = self._weather.get(region_id.upper())
        if signal is None:
            raise NotFoundError("Weather signal for region", region_id)
        return signal

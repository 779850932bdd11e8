"""Pydantic request/response schemas for reference data and farmer records."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from agrialign.models.farmer import FarmerRecord
from agrialign.models.reference import CropProfile, Region, StorageFacility, WeatherSignal


class FarmerCreate(BaseModel):
	name: str = Field(min_length=1, max_length=255)
	region_id: str = Field(default="DIST001", min_length=1, max_length=32)
	crop_id: str = Field(default="TOMATO", min_length=1, max_length=32)
	sowing_date: date
	cultivated_area: float = Field(gt=0)
	readiness_score: float = Field(default=0.5, ge=0.0, le=1.0)
	contact: str | None = Field(default=None, max_length=64)


class FarmerUpdate(BaseModel):
	readiness_score: float | None = Field(default=None, ge=0.0, le=1.0)
	cultivated_area: float | None = Field(default=None, gt=0)
	sowing_date: date | None = None


class FarmerDetail(FarmerRecord):
	crop_details: CropProfile | None = None
	region_details: Region | None = None


class FarmerListRead(BaseModel):
	count: int
	total_cultivated_area: float
	average_readiness_score: float
	farmers: list[FarmerRecord] = Field(default_factory=list)


class CropListRead(BaseModel):
	count: int
	crops: list[CropProfile] = Field(default_factory=list)


class RegionListRead(BaseModel):
	count: int
	regions: list[Region] = Field(default_factory=list)


class RegionDetail(Region):
	weather: WeatherSignal | None = None


class FacilityRead(StorageFacility):
	available_capacity: float
	utilization_percent: int


class StorageListRead(BaseModel):
	count: int
	total_capacity: float
	total_usage: float
	total_available: float
	overall_utilization_percent: int
	facilities: list[FacilityRead] = Field(default_factory=list)


class CountSummary(BaseModel):
	count: int
	active: list[str] = Field(default_factory=list)


class FarmerSummary(BaseModel):
	count: int
	total_cultivated_area: float


class StorageSummary(BaseModel):
	facility_count: int
	total_capacity: float
	current_usage: float
	available: float


class TransportSummary(BaseModel):
	total_capacity_per_day: float


class SystemSummary(BaseModel):
	crops: CountSummary
	regions: CountSummary
	farmers: FarmerSummary
	storage: StorageSummary
	transport: TransportSummary

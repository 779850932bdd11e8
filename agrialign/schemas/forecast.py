"""Pydantic schemas for the forecast pipeline and its endpoints."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from agrialign.models.enums import (
	HarvestLevel,
	StorageAction,
	StressLevel,
	Urgency,
	UtilizationBand,
	WeatherCondition,
)
from agrialign.models.reference import StorageFacility

# ── Harvest forecasting ─────────────────────────────────────────────────────


class HarvestForecast(BaseModel):
	model_config = ConfigDict(frozen=True)

	expected_harvest_date: date
	days_to_harvest: int
	maturity_score: float
	weather_modifier: float
	readiness_index: float
	base_volume_tonnes: float
	forecasted_harvest_volume: float = Field(ge=0)
	harvest_level: HarvestLevel
	confidence_score: float
	forecast_window_days: int


class FarmerForecast(HarvestForecast):
	farmer_id: str
	farmer_name: str


class ForecastAggregate(BaseModel):
	model_config = ConfigDict(frozen=True)

	total_forecasted_volume: float
	farmer_count: int
	average_confidence: float
	individual_forecasts: list[FarmerForecast | HarvestForecast] = Field(default_factory=list)


# ── Logistics ───────────────────────────────────────────────────────────────


class StagingLocation(BaseModel):
	model_config = ConfigDict(frozen=True)

	location: str
	priority: int
	suggested_capacity: float


class LogisticsAssessment(BaseModel):
	model_config = ConfigDict(frozen=True)

	region_id: str
	logistics_alert: bool
	logistics_stress_level: StressLevel
	utilization_ratio: float
	forecasted_volume: float
	transport_capacity: float
	excess_volume: float
	advisories: list[str] = Field(default_factory=list)
	staging_locations: list[StagingLocation] = Field(default_factory=list)
	fleet_preposition_required: bool


# ── Storage ─────────────────────────────────────────────────────────────────


class StorageAvailability(BaseModel):
	model_config = ConfigDict(frozen=True)

	total_capacity: float
	current_usage: float
	available_capacity: float
	utilization_percent: float
	utilization_band: UtilizationBand


class StorageDemand(BaseModel):
	model_config = ConfigDict(frozen=True)

	forecasted_volume: float
	transport_capacity: float
	excess_requiring_storage: float


class AllocationDecision(BaseModel):
	model_config = ConfigDict(frozen=True)

	storage_alert: bool
	storage_action: StorageAction
	storage_reserve_percentage: int
	excess_volume: float
	available_storage: float
	urgency: Urgency


class StorageAssessment(BaseModel):
	model_config = ConfigDict(frozen=True)

	current_availability: StorageAvailability
	demand_forecast: StorageDemand
	allocation_decision: AllocationDecision
	advisories: list[str] = Field(default_factory=list)


class FacilityAvailability(StorageFacility):
	available: float


class FacilityAggregate(BaseModel):
	model_config = ConfigDict(frozen=True)

	facility_count: int
	total_capacity: float
	total_usage: float
	total_available: float
	facilities: list[FacilityAvailability] = Field(default_factory=list)


# ── Dashboard ───────────────────────────────────────────────────────────────


class WeatherSummary(BaseModel):
	condition: WeatherCondition
	deviation_flag: int
	forecast: str


class DashboardSummary(BaseModel):
	harvest_level: HarvestLevel
	forecasted_harvest_volume: float
	logistics_stress_level: StressLevel
	storage_action: StorageAction
	storage_reserve_percentage: int


class CombinedReport(BaseModel):
	crop: str
	region: str
	forecast_window: int
	summary: DashboardSummary
	weather: WeatherSummary
	harvest_forecast: ForecastAggregate
	logistics_assessment: LogisticsAssessment
	storage_assessment: StorageAssessment
	storage_facilities: FacilityAggregate
	advisories: list[str] = Field(default_factory=list)


# ── Endpoint payloads ───────────────────────────────────────────────────────


class ForecastRequest(BaseModel):
	farmer_id: str | None = Field(default=None, min_length=1, max_length=32)
	weather_deviation: int | None = Field(default=None, ge=-1, le=1)


class VolumeRequest(BaseModel):
	forecasted_volume: float | None = Field(default=None, ge=0)
	weather_deviation: int | None = Field(default=None, ge=-1, le=1)


class HarvestForecastResponse(ForecastAggregate):
	crop: str
	region: str
	weather_condition: WeatherCondition


class LogisticsResponse(LogisticsAssessment):
	crop: str
	region: str


class StorageResponse(StorageAssessment):
	crop: str
	region: str
	facilities: FacilityAggregate


class DashboardResponse(CombinedReport):
	generated_at: datetime
	cached: bool = False

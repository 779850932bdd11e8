"""Coordination service: composes harvest, logistics and storage assessments."""

from __future__ import annotations

import json
import time
from collections.abc import Callable, Sequence
from datetime import UTC, date, datetime

import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError

from agrialign.config import get_settings
from agrialign.models.farmer import FarmerRecord
from agrialign.models.reference import CropProfile, Region, StorageFacility, WeatherSignal
from agrialign.repositories.farmer_repo import FarmerRepository
from agrialign.repositories.reference_data import ReferenceData
from agrialign.schemas.forecast import (
	CombinedReport,
	DashboardResponse,
	DashboardSummary,
	FarmerForecast,
	ForecastAggregate,
	HarvestForecastResponse,
	LogisticsResponse,
	StorageResponse,
	WeatherSummary,
)
from agrialign.services.harvest_forecast import (
	FORECAST_WINDOW_DAYS,
	aggregate_forecasts,
	classify_harvest_level,
	compute_harvest_forecast,
	weather_condition,
)
from agrialign.services.logistics_stress import assess_logistics
from agrialign.services.storage_allocation import (
	aggregate_storage_facilities,
	assess_storage_allocation,
)

Clock = Callable[[], date]

_logger = structlog.get_logger("agrialign.coordination")


def forecast_farmers(
	farmers: Sequence[FarmerRecord],
	crop: CropProfile,
	region: Region,
	weather_flag: int,
	today: date,
) -> ForecastAggregate:
	"""Forecast every farmer and aggregate; any per-farmer failure propagates."""
	forecasts = [
		FarmerForecast(
			farmer_id=farmer.farmer_id,
			farmer_name=farmer.name,
			**compute_harvest_forecast(
				sowing_date=farmer.sowing_date,
				avg_maturity_days=crop.avg_maturity_days,
				cultivated_area=farmer.cultivated_area,
				avg_yield_per_hectare=crop.avg_yield_per_hectare,
				farmer_readiness_score=farmer.readiness_score,
				weather_deviation_flag=weather_flag,
				transport_capacity=region.transport_capacity_per_day,
				today=today,
			).model_dump(),
		)
		for farmer in farmers
	]
	return aggregate_forecasts(forecasts)


def run_coordination_dashboard(
	target_farmers: Sequence[FarmerRecord],
	crop: CropProfile,
	region: Region,
	weather: WeatherSignal,
	facilities: Sequence[StorageFacility],
	*,
	today: date,
	weather_flag: int | None = None,
) -> CombinedReport:
	"""Build the unified report for a farmer set.

	``weather_flag`` overrides the region's stored deviation flag.  Raises
	``EmptyInputError`` when ``target_farmers`` is empty.
	"""
	flag = weather.deviation_flag if weather_flag is None else weather_flag
	capacity = region.transport_capacity_per_day

	harvest = forecast_farmers(target_farmers, crop, region, flag, today)
	total_volume = harvest.total_forecasted_volume

	logistics = assess_logistics(
		forecasted_volume=total_volume,
		transport_capacity=capacity,
		region_id=region.region_id,
	)

	storage_totals = aggregate_storage_facilities(facilities)
	storage = assess_storage_allocation(
		forecasted_volume=total_volume,
		transport_capacity=capacity,
		total_storage_capacity=storage_totals.total_capacity,
		current_storage_usage=storage_totals.total_usage,
	)

	return CombinedReport(
		crop=crop.crop_type,
		region=region.name,
		forecast_window=FORECAST_WINDOW_DAYS,
		summary=DashboardSummary(
			harvest_level=classify_harvest_level(total_volume, capacity),
			forecasted_harvest_volume=total_volume,
			logistics_stress_level=logistics.logistics_stress_level,
			storage_action=storage.allocation_decision.storage_action,
			storage_reserve_percentage=storage.allocation_decision.storage_reserve_percentage,
		),
		weather=WeatherSummary(
			condition=weather_condition(flag),
			deviation_flag=flag,
			forecast=weather.forecast,
		),
		harvest_forecast=harvest,
		logistics_assessment=logistics,
		storage_assessment=storage,
		storage_facilities=storage_totals,
		advisories=[*logistics.advisories, *storage.advisories],
	)


class CoordinationService:
	"""Resolves records for the forecast endpoints and runs the pipeline."""

	def __init__(
		self,
		repository: FarmerRepository,
		reference: ReferenceData,
		redis_client: Redis | None = None,
		clock: Clock = date.today,
	):
		self.repository = repository
		self.reference = reference
		self.redis_client = redis_client
		self.clock = clock
		self.settings = get_settings()

	def _context(self, weather_deviation: int | None) -> tuple[CropProfile, Region, WeatherSignal, int]:
		region = self.reference.get_region(self.settings.default_region_id)
		crop = self.reference.get_crop(self.settings.default_crop_id)
		weather = self.reference.get_weather(region.region_id)
		flag = weather.deviation_flag if weather_deviation is None else weather_deviation
		return crop, region, weather, flag

	def _target_farmers(self, farmer_id: str | None) -> list[FarmerRecord]:
		if farmer_id:
			return [self.repository.get(farmer_id)]
		return self.repository.list()

	def _total_volume(self, crop: CropProfile, region: Region, flag: int) -> float:
		aggregate = forecast_farmers(self.repository.list(), crop, region, flag, self.clock())
		return aggregate.total_forecasted_volume

	async def harvest_forecast(
		self,
		farmer_id: str | None = None,
		weather_deviation: int | None = None,
	) -> HarvestForecastResponse:
		crop, region, _weather, flag = self._context(weather_deviation)
		farmers = self._target_farmers(farmer_id)
		aggregate = forecast_farmers(farmers, crop, region, flag, self.clock())
		return HarvestForecastResponse(
			crop=crop.crop_type,
			region=region.name,
			weather_condition=weather_condition(flag),
			**aggregate.model_dump(),
		)

	async def logistics(
		self,
		forecasted_volume: float | None = None,
		weather_deviation: int | None = None,
	) -> LogisticsResponse:
		crop, region, _weather, flag = self._context(weather_deviation)
		volume = forecasted_volume
		if volume is None:
			volume = self._total_volume(crop, region, flag)

		assessment = assess_logistics(
			forecasted_volume=volume,
			transport_capacity=region.transport_capacity_per_day,
			region_id=region.region_id,
		)
		return LogisticsResponse(crop=crop.crop_type, region=region.name, **assessment.model_dump())

	async def storage(
		self,
		forecasted_volume: float | None = None,
		weather_deviation: int | None = None,
	) -> StorageResponse:
		crop, region, _weather, flag = self._context(weather_deviation)
		facilities = aggregate_storage_facilities(self.reference.list_facilities(region.region_id))
		volume = forecasted_volume
		if volume is None:
			volume = self._total_volume(crop, region, flag)

		assessment = assess_storage_allocation(
			forecasted_volume=volume,
			transport_capacity=region.transport_capacity_per_day,
			total_storage_capacity=facilities.total_capacity,
			current_storage_usage=facilities.total_usage,
		)
		return StorageResponse(
			crop=crop.crop_type,
			region=region.name,
			facilities=facilities,
			**assessment.model_dump(),
		)

	async def dashboard(
		self,
		farmer_id: str | None = None,
		weather_deviation: int | None = None,
	) -> DashboardResponse:
		start = time.perf_counter()
		crop, region, weather, flag = self._context(weather_deviation)
		today = self.clock()
		cache_key = self._dashboard_cache_key(farmer_id, flag, today)

		cached = await self._cache_get(cache_key)
		if cached is not None:
			payload = json.loads(cached)
			response = DashboardResponse(**payload, generated_at=datetime.now(UTC), cached=True)
			self._log_run(response, start)
			return response

		report = run_coordination_dashboard(
			self._target_farmers(farmer_id),
			crop,
			region,
			weather,
			self.reference.list_facilities(region.region_id),
			today=today,
			weather_flag=flag,
		)
		await self._cache_set(cache_key, report.model_dump_json())

		response = DashboardResponse(**report.model_dump(), generated_at=datetime.now(UTC), cached=False)
		self._log_run(response, start)
		return response

	async def _cache_get(self, key: str) -> str | None:
		if self.redis_client is None:
			return None
		try:
			return await self.redis_client.get(key)
		except RedisError as exc:
			_logger.warning("dashboard_cache_read_failed", cache_key=key, error=str(exc))
			return None

	async def _cache_set(self, key: str, value: str) -> None:
		if self.redis_client is None:
			return
		try:
			await self.redis_client.setex(key, self.settings.cache_ttl_seconds, value)
		except RedisError as exc:
			_logger.warning("dashboard_cache_write_failed", cache_key=key, error=str(exc))

	def _dashboard_cache_key(self, farmer_id: str | None, flag: int, today: date) -> str:
		"""Key a dashboard on selector, weather flag, date and repository revision.

		The revision is the in-process repository's counter, so the key only
		tracks farmer changes made by this process.  Several workers sharing one
		Redis each hold their own farmer store and can collide on a revision
		number; run a single worker per Redis database or give each worker its
		own ``redis_url``.
		"""
		selector = farmer_id.upper() if farmer_id else "all"
		return (
			f"agrialign:dashboard:{selector}:weather:{flag}"
			f":date:{today.isoformat()}:rev:{self.repository.revision}"
		)

	@staticmethod
	def _log_run(response: DashboardResponse, start: float) -> None:
		_logger.info(
			"coordination_dashboard",
			farmer_count=response.harvest_forecast.farmer_count,
			total_volume=response.summary.forecasted_harvest_volume,
			stress_level=response.logistics_assessment.logistics_stress_level.value,
			storage_action=response.summary.storage_action.value,
			cached=response.cached,
			duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
		)

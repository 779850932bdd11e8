from __future__ import annotations

from datetime import date

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from agrialign.data import sample_data
from agrialign.errors import EmptyInputError, InvalidInputError, NotFoundError
from agrialign.models.enums import HarvestLevel, StorageAction, StressLevel, WeatherCondition
from agrialign.repositories.farmer_repo import InMemoryFarmerRepository
from agrialign.repositories.reference_data import ReferenceData
from agrialign.schemas.forecast import FarmerForecast
from agrialign.services.coordination import CoordinationService, run_coordination_dashboard

CROP = sample_data.CROPS[0]
REGION = sample_data.REGIONS[0]
WEATHER = sample_data.WEATHER[0]


def _dashboard(farmers, **kwargs):
	return run_coordination_dashboard(
		farmers,
		CROP,
		REGION,
		WEATHER,
		sample_data.STORAGE_FACILITIES,
		today=kwargs.pop("today", date(2026, 1, 10)),
		**kwargs,
	)


def test_dashboard_for_all_sample_farmers() -> None:
	report = _dashboard(sample_data.FARMERS)

	assert report.crop == "Tomato"
	assert report.region == "Nashik District"
	assert report.forecast_window == 5
	assert report.harvest_forecast.farmer_count == 3
	assert report.harvest_forecast.total_forecasted_volume == pytest.approx(167.31)

	assert report.summary.harvest_level == HarvestLevel.high
	assert report.summary.logistics_stress_level == StressLevel.high
	assert report.logistics_assessment.excess_volume == pytest.approx(67.31)

	allocation = report.storage_assessment.allocation_decision
	assert allocation.storage_action == StorageAction.reserve_partial
	assert allocation.storage_reserve_percentage == 8
	assert report.summary.storage_reserve_percentage == 8
	assert report.storage_facilities.total_available == 550

	assert report.weather.condition == WeatherCondition.normal
	assert report.weather.forecast == WEATHER.forecast


def test_individual_forecasts_keep_farmer_identity() -> None:
	report = _dashboard(sample_data.FARMERS)
	forecasts = report.harvest_forecast.individual_forecasts

	assert all(isinstance(item, FarmerForecast) for item in forecasts)
	assert [item.farmer_id for item in forecasts] == ["F001", "F002", "F003"]
	assert [item.forecasted_harvest_volume for item in forecasts] == pytest.approx([57.81, 31.5, 78.0])
	assert [item.days_to_harvest for item in forecasts] == [3, 8, -2]


def test_advisories_are_logistics_then_storage() -> None:
	report = _dashboard(sample_data.FARMERS)

	expected = [*report.logistics_assessment.advisories, *report.storage_assessment.advisories]
	assert report.advisories == expected
	assert len(report.advisories) == 7


def test_single_farmer_dashboard_reuses_harvest_level_thresholds() -> None:
	report = _dashboard(sample_data.FARMERS[:1])

	assert report.summary.forecasted_harvest_volume == pytest.approx(57.81)
	assert report.summary.harvest_level == HarvestLevel.low
	assert report.summary.logistics_stress_level == StressLevel.normal
	assert report.summary.storage_action == StorageAction.no_action
	assert len(report.advisories) == 4


def test_weather_flag_overrides_region_signal() -> None:
	report = _dashboard(sample_data.FARMERS[:1], weather_flag=1)

	assert report.weather.deviation_flag == 1
	assert report.weather.condition == WeatherCondition.favorable
	assert report.summary.forecasted_harvest_volume == pytest.approx(59.06)


def test_empty_farmer_set_propagates_empty_input_error() -> None:
	with pytest.raises(EmptyInputError):
		_dashboard([])


def test_missing_facilities_are_rejected_not_divided_by_zero() -> None:
	with pytest.raises(InvalidInputError) as exc_info:
		run_coordination_dashboard(
			sample_data.FARMERS,
			CROP,
			REGION,
			WEATHER,
			[],
			today=date(2026, 1, 10),
		)
	assert exc_info.value.field == "total_storage_capacity"


def test_invalid_farmer_record_is_not_dropped() -> None:
	broken = sample_data.FARMERS[0].model_copy(update={"readiness_score": 1.5})

	with pytest.raises(InvalidInputError) as exc_info:
		_dashboard([broken, *sample_data.FARMERS[1:]])
	assert exc_info.value.field == "farmer_readiness_score"


@pytest.mark.asyncio
async def test_service_unknown_farmer_raises_not_found() -> None:
	service = CoordinationService(
		InMemoryFarmerRepository(sample_data.FARMERS),
		ReferenceData.from_sample_data(),
		clock=lambda: date(2026, 1, 10),
	)

	with pytest.raises(NotFoundError) as exc_info:
		await service.dashboard(farmer_id="F999")
	assert exc_info.value.identifier == "F999"


@pytest.mark.asyncio
async def test_service_dashboard_cache_round_trip(fake_redis) -> None:
	repository = InMemoryFarmerRepository(sample_data.FARMERS)
	service = CoordinationService(
		repository,
		ReferenceData.from_sample_data(),
		fake_redis,
		clock=lambda: date(2026, 1, 10),
	)

	first = await service.dashboard()
	assert first.cached is False
	assert fake_redis.setex.await_count == 1

	second = await service.dashboard()
	assert second.cached is True
	assert second.summary == first.summary
	assert second.advisories == first.advisories
	assert second.harvest_forecast.individual_forecasts[0].farmer_id == "F001"

	repository.update("F002", readiness_score=0.2)
	third = await service.dashboard()
	assert third.cached is False
	assert fake_redis.setex.await_count == 2


@pytest.mark.asyncio
async def test_service_logistics_computes_volume_when_omitted() -> None:
	service = CoordinationService(
		InMemoryFarmerRepository(sample_data.FARMERS),
		ReferenceData.from_sample_data(),
		clock=lambda: date(2026, 1, 10),
	)

	computed = await service.logistics()
	explicit = await service.logistics(forecasted_volume=50)

	assert computed.forecasted_volume == pytest.approx(167.31)
	assert computed.logistics_stress_level == StressLevel.high
	assert explicit.logistics_stress_level == StressLevel.normal
	assert explicit.crop == "Tomato"


@pytest.mark.asyncio
async def test_service_dashboard_runs_uncached_when_redis_fails(fake_redis) -> None:
	fake_redis.get.side_effect = RedisConnectionError("down")
	fake_redis.setex.side_effect = RedisConnectionError("down")
	service = CoordinationService(
		InMemoryFarmerRepository(sample_data.FARMERS),
		ReferenceData.from_sample_data(),
		fake_redis,
		clock=lambda: date(2026, 1, 10),
	)

	response = await service.dashboard()

	assert response.cached is False
	assert response.summary.forecasted_harvest_volume == pytest.approx(167.31)
	assert fake_redis.setex.await_count == 1

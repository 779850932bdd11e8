"""Harvest inflow forecasting: per-farmer volume and confidence estimates.

Pipeline for one farmer plot:

    expected harvest date -> days to harvest -> maturity score
    weather flag -> weather modifier
    0.5 * readiness + 0.3 * maturity + 0.2 * weather -> readiness index
    area * yield * readiness index -> forecasted volume -> harvest level

The readiness index is not normalised: with favorable weather it reaches
1.02 when readiness and maturity are both 1.0, and harvest level
thresholds assume that scale.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import date, datetime, timedelta

from agrialign.errors import EmptyInputError, InvalidInputError
from agrialign.models.enums import HarvestLevel, WeatherCondition
from agrialign.schemas.forecast import ForecastAggregate, HarvestForecast
from agrialign.services.numeric import (
	require_finite,
	require_non_negative,
	require_positive,
	require_unit_interval,
	round_half_up,
)

FORECAST_WINDOW_DAYS = 5

_WEATHER_MODIFIERS: dict[int, float] = {
	-1: 0.9,
	0: 1.0,
	1: 1.1,
}

_WEATHER_CONDITIONS: dict[int, WeatherCondition] = {
	-1: WeatherCondition.adverse,
	0: WeatherCondition.normal,
	1: WeatherCondition.favorable,
}

_READINESS_WEIGHT = 0.5
_MATURITY_WEIGHT = 0.3
_WEATHER_WEIGHT = 0.2

_LOW_BAND_FRACTION = 0.7


def weather_modifier(deviation_flag: int) -> float:
	"""Map a weather deviation flag to a yield multiplier; unknown flags are neutral."""
	return _WEATHER_MODIFIERS.get(deviation_flag, 1.0)


def weather_condition(deviation_flag: int) -> WeatherCondition:
	return _WEATHER_CONDITIONS.get(deviation_flag, WeatherCondition.normal)


def parse_sowing_date(value: date | str) -> date:
	if isinstance(value, datetime):
		return value.date()
	if isinstance(value, date):
		return value
	try:
		return date.fromisoformat(str(value))
	except ValueError as exc:
		raise InvalidInputError("sowing_date", f"malformed date {value!r}") from exc


def expected_harvest_date(sowing_date: date, avg_maturity_days: int) -> date:
	return sowing_date + timedelta(days=avg_maturity_days)


def days_to_harvest(harvest_date: date, today: date) -> int:
	"""Whole days until harvest; negative when the harvest is overdue."""
	return math.ceil((harvest_date - today) / timedelta(days=1))


def maturity_score(days_until_harvest: int) -> float:
	return 1.0 if days_until_harvest <= FORECAST_WINDOW_DAYS else 0.5


def readiness_index(farmer_readiness_score: float, maturity: float, weather: float) -> float:
	return (
		_READINESS_WEIGHT * farmer_readiness_score
		+ _MATURITY_WEIGHT * maturity
		+ _WEATHER_WEIGHT * weather
	)


def classify_harvest_level(forecasted_volume: float, transport_capacity: float) -> HarvestLevel:
	"""Band a volume against daily transport capacity.

	Shared by per-farmer forecasts and the dashboard's aggregate level.
	Both bounds of MEDIUM are inclusive: 0.7 * capacity and capacity itself.
	"""
	if forecasted_volume < _LOW_BAND_FRACTION * transport_capacity:
		return HarvestLevel.low
	if forecasted_volume <= transport_capacity:
		return HarvestLevel.medium
	return HarvestLevel.high


def confidence_score(farmer_readiness_score: float, maturity: float) -> float:
	return min(0.95, 0.5 + 0.3 * farmer_readiness_score + 0.15 * maturity)


def compute_harvest_forecast(
	*,
	sowing_date: date | str,
	avg_maturity_days: int,
	cultivated_area: float,
	avg_yield_per_hectare: float,
	farmer_readiness_score: float,
	weather_deviation_flag: int,
	transport_capacity: float,
	today: date,
) -> HarvestForecast:
	"""Forecast one farmer's harvest volume inside the forecast window.

	``today`` is explicit so identical inputs always produce identical output.
	Raises ``InvalidInputError`` naming the offending field.
	"""
	sown = parse_sowing_date(sowing_date)
	maturity_days = require_non_negative("avg_maturity_days", avg_maturity_days)
	if not maturity_days.is_integer():
		raise InvalidInputError("avg_maturity_days", "must be a whole number of days")
	area = require_positive("cultivated_area", cultivated_area)
	yield_per_hectare = require_non_negative("avg_yield_per_hectare", avg_yield_per_hectare)
	readiness = require_unit_interval("farmer_readiness_score", farmer_readiness_score)
	capacity = require_positive("transport_capacity", transport_capacity)
	require_finite("weather_deviation_flag", weather_deviation_flag)

	harvest_date = expected_harvest_date(sown, int(maturity_days))
	days_left = days_to_harvest(harvest_date, today)
	maturity = maturity_score(days_left)
	weather = weather_modifier(weather_deviation_flag)
	index = readiness_index(readiness, maturity, weather)

	base_volume = area * yield_per_hectare
	forecasted_volume = base_volume * index

	return HarvestForecast(
		expected_harvest_date=harvest_date,
		days_to_harvest=days_left,
		maturity_score=round_half_up(maturity, 2),
		weather_modifier=weather,
		readiness_index=round_half_up(index, 3),
		base_volume_tonnes=round_half_up(base_volume, 2),
		forecasted_harvest_volume=round_half_up(forecasted_volume, 2),
		harvest_level=classify_harvest_level(forecasted_volume, capacity),
		confidence_score=round_half_up(confidence_score(readiness, maturity), 2),
		forecast_window_days=FORECAST_WINDOW_DAYS,
	)


def aggregate_forecasts(forecasts: Sequence[HarvestForecast]) -> ForecastAggregate:
	"""Sum volumes and average confidence across farmer forecasts."""
	if not forecasts:
		raise EmptyInputError()

	total_volume = sum(item.forecasted_harvest_volume for item in forecasts)
	average_confidence = sum(item.confidence_score for item in forecasts) / len(forecasts)

	return ForecastAggregate(
		total_forecasted_volume=round_half_up(total_volume, 2),
		farmer_count=len(forecasts),
		average_confidence=round_half_up(average_confidence, 2),
		individual_forecasts=list(forecasts),
	)

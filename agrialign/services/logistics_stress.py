"""Logistics stress detection: forecasted inflow against daily transport capacity."""

from __future__ import annotations

from agrialign.models.enums import StressLevel
from agrialign.schemas.forecast import LogisticsAssessment, StagingLocation
from agrialign.services.numeric import require_non_negative, require_positive, round_half_up

_ELEVATED_FRACTION = 0.8

_ADVISORIES: dict[StressLevel, tuple[str, ...]] = {
	StressLevel.high: (
		"⚠️ CRITICAL: Pre-position additional transport fleet immediately",
		"📅 Consider staggering harvest timing across 2-3 days",
		"🚛 Request backup transport from neighboring districts",
		"📊 Excess volume: {excess_volume} tonnes needs additional capacity",
	),
	StressLevel.elevated: (
		"⚡ ALERT: Transport utilization approaching capacity",
		"🚛 Put backup transport on standby",
		"📋 Prioritize perishable loads for first transport wave",
	),
	StressLevel.normal: (
		"✅ Transport capacity is sufficient for forecasted volume",
		"📋 Standard fleet deployment recommended",
	),
}

# Static placeholders until collection points come from geospatial data:
# (location, priority, share of excess, capacity cap in tonnes).
_STAGING_POINTS: tuple[tuple[str, int, float, float], ...] = (
	("Primary Collection Point - Village Hub", 1, 0.6, 50.0),
	("Secondary Collection Point - Mandi Approach", 2, 0.4, 30.0),
)


def classify_stress(forecasted_volume: float, transport_capacity: float) -> StressLevel:
	if forecasted_volume > transport_capacity:
		return StressLevel.high
	if forecasted_volume > _ELEVATED_FRACTION * transport_capacity:
		return StressLevel.elevated
	return StressLevel.normal


def logistics_advisories(stress_level: StressLevel, excess_volume: float) -> list[str]:
	return [template.format(excess_volume=excess_volume) for template in _ADVISORIES[stress_level]]


def suggest_staging_locations(region_id: str, excess_volume: float) -> list[StagingLocation]:
	if excess_volume <= 0:
		return []

	return [
		StagingLocation(
			location=location,
			priority=priority,
			suggested_capacity=min(excess_volume * share, cap),
		)
		for location, priority, share, cap in _STAGING_POINTS
	]


def assess_logistics(
	*,
	forecasted_volume: float,
	transport_capacity: float,
	region_id: str,
) -> LogisticsAssessment:
	"""Classify transport stress for an aggregate forecasted volume."""
	volume = require_non_negative("forecasted_volume", forecasted_volume)
	capacity = require_positive("transport_capacity", transport_capacity)

	stress_level = classify_stress(volume, capacity)
	alert = stress_level != StressLevel.normal
	excess_volume = max(0.0, round_half_up(volume - capacity, 2))

	return LogisticsAssessment(
		region_id=region_id,
		logistics_alert=alert,
		logistics_stress_level=stress_level,
		utilization_ratio=round_half_up(volume / capacity, 2),
		forecasted_volume=volume,
		transport_capacity=capacity,
		excess_volume=excess_volume,
		advisories=logistics_advisories(stress_level, excess_volume),
		staging_locations=suggest_staging_locations(region_id, excess_volume),
		fleet_preposition_required=alert,
	)

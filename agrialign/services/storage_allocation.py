"""Cold-storage allocation: reserve capacity for volume transport cannot move."""

from __future__ import annotations

from collections.abc import Sequence

from agrialign.errors import InvalidInputError
from agrialign.models.enums import StorageAction, Urgency, UtilizationBand
from agrialign.models.reference import StorageFacility
from agrialign.schemas.forecast import (
	AllocationDecision,
	FacilityAggregate,
	FacilityAvailability,
	StorageAssessment,
	StorageAvailability,
	StorageDemand,
)
from agrialign.services.numeric import require_non_negative, require_positive, round_half_up

_URGENT_FRACTION = 0.7

_ADVISORIES: dict[StorageAction, tuple[str, ...]] = {
	StorageAction.reserve_immediately: (
		"🚨 CRITICAL: Storage capacity insufficient for forecasted excess",
		"📞 Contact additional cold storage facilities immediately",
		"🥬 Prioritize most perishable produce for available storage",
		"📅 Consider accelerating market dispatch to free capacity",
	),
	StorageAction.reserve_urgent: (
		"⚠️ URGENT: Reserve storage capacity now",
		"📊 Reserve {reserve_percentage}% of total capacity",
		"🕐 Recommended reservation window: Next 24-48 hours",
	),
	StorageAction.reserve_partial: (
		"📋 PLANNED: Partial storage reservation recommended",
		"📊 Reserve {reserve_percentage}% of total capacity",
		"🕐 Recommended reservation window: Next 3-5 days",
	),
	StorageAction.no_action: (
		"✅ No immediate storage reservation required",
		"📋 Transport capacity is sufficient for forecasted volume",
	),
}


def utilization_band(utilization_percent: float) -> UtilizationBand:
	if utilization_percent < 50:
		return UtilizationBand.low
	if utilization_percent < 80:
		return UtilizationBand.medium
	return UtilizationBand.high


def calculate_available_storage(total_capacity: float, current_usage: float) -> StorageAvailability:
	capacity = require_positive("total_storage_capacity", total_capacity)
	usage = require_non_negative("current_storage_usage", current_usage)
	if usage > capacity:
		raise InvalidInputError("current_storage_usage", "cannot exceed total storage capacity")

	utilization_percent = usage / capacity * 100
	return StorageAvailability(
		total_capacity=capacity,
		current_usage=usage,
		available_capacity=capacity - usage,
		utilization_percent=round_half_up(utilization_percent, 2),
		utilization_band=utilization_band(utilization_percent),
	)


def forecast_storage_demand(forecasted_volume: float, transport_capacity: float) -> float:
	"""Volume that cannot be shipped out immediately."""
	return max(0.0, forecasted_volume - transport_capacity)


def determine_storage_action(
	excess_volume: float,
	available_storage: float,
	total_capacity: float,
) -> AllocationDecision:
	"""Pick a reservation action; rules are checked from no excess up to overflow."""
	if excess_volume <= 0:
		action, urgency, reserve = StorageAction.no_action, Urgency.none, 0
	elif excess_volume > available_storage:
		action, urgency, reserve = StorageAction.reserve_immediately, Urgency.critical, 100
	elif excess_volume > _URGENT_FRACTION * available_storage:
		action, urgency = StorageAction.reserve_urgent, Urgency.high
		reserve = int(round_half_up(excess_volume / total_capacity * 100, 0))
	else:
		action, urgency = StorageAction.reserve_partial, Urgency.medium
		reserve = int(round_half_up(excess_volume / total_capacity * 100, 0))

	return AllocationDecision(
		storage_alert=action != StorageAction.no_action,
		storage_action=action,
		storage_reserve_percentage=reserve,
		excess_volume=round_half_up(excess_volume, 2),
		available_storage=round_half_up(available_storage, 2),
		urgency=urgency,
	)


def storage_advisories(decision: AllocationDecision) -> list[str]:
	return [
		template.format(reserve_percentage=decision.storage_reserve_percentage)
		for template in _ADVISORIES[decision.storage_action]
	]


def aggregate_storage_facilities(facilities: Sequence[StorageFacility]) -> FacilityAggregate:
	"""Sum capacity and usage across facilities, attaching per-facility availability."""
	total_capacity = sum(item.total_capacity for item in facilities)
	total_usage = sum(item.current_usage for item in facilities)

	return FacilityAggregate(
		facility_count=len(facilities),
		total_capacity=total_capacity,
		total_usage=total_usage,
		total_available=total_capacity - total_usage,
		facilities=[
			FacilityAvailability(**item.model_dump(), available=item.total_capacity - item.current_usage)
			for item in facilities
		],
	)


def assess_storage_allocation(
	*,
	forecasted_volume: float,
	transport_capacity: float,
	total_storage_capacity: float,
	current_storage_usage: float,
) -> StorageAssessment:
	volume = require_non_negative("forecasted_volume", forecasted_volume)
	transport = require_positive("transport_capacity", transport_capacity)

	availability = calculate_available_storage(total_storage_capacity, current_storage_usage)
	excess_volume = forecast_storage_demand(volume, transport)
	decision = determine_storage_action(
		excess_volume,
		availability.available_capacity,
		availability.total_capacity,
	)

	return StorageAssessment(
		current_availability=availability,
		demand_forecast=StorageDemand(
			forecasted_volume=volume,
			transport_capacity=transport,
			excess_requiring_storage=excess_volume,
		),
		allocation_decision=decision,
		advisories=storage_advisories(decision),
	)

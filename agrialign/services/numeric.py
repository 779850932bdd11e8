"""Rounding and boundary guards shared by the forecast calculators."""

from __future__ import annotations

import math

from agrialign.errors import InvalidInputError


def round_half_up(value: float, digits: int = 2) -> float:
	"""Round halves toward positive infinity at ``digits`` decimals.

	Python's ``round`` rounds halves to even, which would shift published
	volumes such as 0.125 -> 0.12 instead of 0.13.
	"""
	scale = 10**digits
	return math.floor(value * scale + 0.5) / scale


def require_finite(field: str, value: float) -> float:
	if isinstance(value, bool) or not isinstance(value, (int, float)):
		raise InvalidInputError(field, "must be a number")
	if not math.isfinite(value):
		raise InvalidInputError(field, "must be finite")
	return float(value)


def require_positive(field: str, value: float) -> float:
	number = require_finite(field, value)
	if number <= 0:
		raise InvalidInputError(field, "must be greater than 0")
	return number


def require_non_negative(field: str, value: float) -> float:
	number = require_finite(field, value)
	if number < 0:
		raise InvalidInputError(field, "must be >= 0")
	return number


def require_unit_interval(field: str, value: float) -> float:
	number = require_finite(field, value)
	if not 0.0 <= number <= 1.0:
		raise InvalidInputError(field, "must be between 0 and 1")
	return number

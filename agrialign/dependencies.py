"""FastAPI dependencies resolving process-wide stores from ``app.state``."""

from __future__ import annotations

from datetime import date

from fastapi import Request
from redis.asyncio import Redis

from agrialign.repositories.farmer_repo import FarmerRepository
from agrialign.repositories.reference_data import ReferenceData
from agrialign.services.coordination import Clock


def get_farmer_repository(request: Request) -> FarmerRepository:
	return request.app.state.farmer_repository


def get_reference_data(request: Request) -> ReferenceData:
	return request.app.state.reference_data


def get_redis(request: Request) -> Redis | None:
	return getattr(request.app.state, "redis", None)


def get_clock() -> Clock:
	"""Calendar source for forecasts; tests override this to pin ``today``."""
	return date.today

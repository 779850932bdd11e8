"""Harvest, logistics, storage and dashboard forecast routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status
from redis.asyncio import Redis

from agrialign.dependencies import get_clock, get_farmer_repository, get_redis, get_reference_data
from agrialign.middleware.logging import record_service_error
from agrialign.repositories.farmer_repo import FarmerRepository
from agrialign.repositories.reference_data import ReferenceData
from agrialign.schemas.forecast import (
	DashboardResponse,
	ForecastRequest,
	HarvestForecastResponse,
	LogisticsResponse,
	StorageResponse,
	VolumeRequest,
)
from agrialign.services.coordination import Clock, CoordinationService

router = APIRouter(prefix="/forecast", tags=["forecast"])


def _map_error(request: Request, exc: Exception) -> HTTPException:
	record_service_error(request, exc)
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="forecast failure")


def get_coordination_service(
	repository: FarmerRepository = Depends(get_farmer_repository),
	reference: ReferenceData = Depends(get_reference_data),
	redis_client: Redis | None = Depends(get_redis),
	clock: Clock = Depends(get_clock),
) -> CoordinationService:
	return CoordinationService(repository, reference, redis_client, clock)


@router.post("/harvest", response_model=HarvestForecastResponse)
async def harvest_forecast(
	request: Request,
	payload: ForecastRequest,
	service: CoordinationService = Depends(get_coordination_service),
) -> HarvestForecastResponse:
	try:
		return await service.harvest_forecast(payload.farmer_id, payload.weather_deviation)
	except Exception as exc:
		raise _map_error(request, exc) from exc


@router.post("/logistics", response_model=LogisticsResponse)
async def logistics_assessment(
	request: Request,
	payload: VolumeRequest,
	service: CoordinationService = Depends(get_coordination_service),
) -> LogisticsResponse:
	try:
		return await service.logistics(payload.forecasted_volume, payload.weather_deviation)
	except Exception as exc:
		raise _map_error(request, exc) from exc


@router.post("/storage", response_model=StorageResponse)
async def storage_assessment(
	request: Request,
	payload: VolumeRequest,
	service: CoordinationService = Depends(get_coordination_service),
) -> StorageResponse:
	try:
		return await service.storage(payload.forecasted_volume, payload.weather_deviation)
	except Exception as exc:
		raise _map_error(request, exc) from exc


@router.post("/dashboard", response_model=DashboardResponse)
async def coordination_dashboard(
	request: Request,
	payload: ForecastRequest,
	service: CoordinationService = Depends(get_coordination_service),
) -> DashboardResponse:
	try:
		return await service.dashboard(payload.farmer_id, payload.weather_deviation)
	except Exception as exc:
		raise _map_error(request, exc) from exc

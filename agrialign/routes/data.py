"""Reference data & farmer registration routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status

from agrialign.dependencies import get_farmer_repository, get_reference_data
from agrialign.middleware.logging import record_service_error
from agrialign.models.farmer import FarmerRecord
from agrialign.models.reference import CropProfile, WeatherSignal
from agrialign.repositories.farmer_repo import FarmerRepository
from agrialign.repositories.reference_data import ReferenceData
from agrialign.schemas.data import (
	CropListRead,
	FacilityRead,
	FarmerCreate,
	FarmerDetail,
	FarmerListRead,
	FarmerUpdate,
	RegionDetail,
	RegionListRead,
	StorageListRead,
	SystemSummary,
)
from agrialign.services.data_service import DataService

router = APIRouter(prefix="/data", tags=["data"])


def _map_error(request: Request, exc: Exception) -> HTTPException:
	record_service_error(request, exc)
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(
		status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
		detail="Unexpected data service failure",
	)


def get_data_service(
	repository: FarmerRepository = Depends(get_farmer_repository),
	reference: ReferenceData = Depends(get_reference_data),
) -> DataService:
	return DataService(repository, reference)


@router.get("/crops", response_model=CropListRead)
async def list_crops(service: DataService = Depends(get_data_service)) -> CropListRead:
	return service.list_crops()


@router.get("/crops/{crop_id}", response_model=CropProfile)
async def get_crop(
	crop_id: str,
	request: Request,
	service: DataService = Depends(get_data_service),
) -> CropProfile:
	try:
		return service.reference.get_crop(crop_id)
	except Exception as exc:
		raise _map_error(request, exc) from exc


@router.get("/regions", response_model=RegionListRead)
async def list_regions(service: DataService = Depends(get_data_service)) -> RegionListRead:
	return service.list_regions()


@router.get("/regions/{region_id}", response_model=RegionDetail)
async def get_region(
	region_id: str,
	request: Request,
	service: DataService = Depends(get_data_service),
) -> RegionDetail:
	try:
		return service.get_region(region_id)
	except Exception as exc:
		raise _map_error(request, exc) from exc


@router.get("/storage", response_model=StorageListRead)
async def list_storage(service: DataService = Depends(get_data_service)) -> StorageListRead:
	return service.list_storage()


@router.get("/storage/{storage_id}", response_model=FacilityRead)
async def get_storage(
	storage_id: str,
	request: Request,
	service: DataService = Depends(get_data_service),
) -> FacilityRead:
	try:
		return service.get_storage(storage_id)
	except Exception as exc:
		raise _map_error(request, exc) from exc


@router.get("/weather", response_model=dict[str, WeatherSignal])
async def list_weather(service: DataService = Depends(get_data_service)) -> dict[str, WeatherSignal]:
	return service.list_weather()


@router.get("/summary", response_model=SystemSummary)
async def get_summary(service: DataService = Depends(get_data_service)) -> SystemSummary:
	return service.summary()


@router.get("/farmers", response_model=FarmerListRead)
async def list_farmers(service: DataService = Depends(get_data_service)) -> FarmerListRead:
	return service.list_farmers()


@router.get("/farmers/{farmer_id}", response_model=FarmerDetail)
async def get_farmer(
	farmer_id: str,
	request: Request,
	service: DataService = Depends(get_data_service),
) -> FarmerDetail:
	try:
		return service.get_farmer(farmer_id)
	except Exception as exc:
		raise _map_error(request, exc) from exc


@router.post("/farmers", response_model=FarmerRecord, status_code=status.HTTP_201_CREATED)
async def register_farmer(
	request: Request,
	payload: FarmerCreate,
	service: DataService = Depends(get_data_service),
) -> FarmerRecord:
	try:
		return service.register_farmer(payload)
	except Exception as exc:
		raise _map_error(request, exc) from exc


@router.put("/farmers/{farmer_id}", response_model=FarmerRecord)
async def update_farmer(
	farmer_id: str,
	request: Request,
	payload: FarmerUpdate,
	service: DataService = Depends(get_data_service),
) -> FarmerRecord:
	try:
		return service.update_farmer(farmer_id, payload)
	except Exception as exc:
		raise _map_error(request, exc) from exc

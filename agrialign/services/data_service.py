"""Reference data and farmer registration service."""

from __future__ import annotations

from agrialign.models.farmer import FarmerRecord
from agrialign.models.reference import StorageFacility, WeatherSignal
from agrialign.repositories.farmer_repo import FarmerRepository
from agrialign.repositories.reference_data import ReferenceData
from agrialign.schemas.data import (
	CountSummary,
	CropListRead,
	FacilityRead,
	FarmerCreate,
	FarmerDetail,
	FarmerListRead,
	FarmerSummary,
	FarmerUpdate,
	RegionDetail,
	RegionListRead,
	StorageListRead,
	StorageSummary,
	SystemSummary,
	TransportSummary,
)
from agrialign.services.numeric import round_half_up


class DataService:
	"""Service for reference lookups and farmer CRUD over injected stores."""

	def __init__(self, repository: FarmerRepository, reference: ReferenceData):
		self.repository = repository
		self.reference = reference

	def list_crops(self) -> CropListRead:
		crops = self.reference.list_crops()
		return CropListRead(count=len(crops), crops=crops)

	def list_regions(self) -> RegionListRead:
		regions = self.reference.list_regions()
		return RegionListRead(count=len(regions), regions=regions)

	def get_region(self, region_id: str) -> RegionDetail:
		region = self.reference.get_region(region_id)
		weather = self.reference.all_weather().get(region.region_id.upper())
		return RegionDetail(**region.model_dump(), weather=weather)

	def list_weather(self) -> dict[str, WeatherSignal]:
		return self.reference.all_weather()

	def list_storage(self) -> StorageListRead:
		facilities = self.reference.list_facilities()
		total_capacity = sum(item.total_capacity for item in facilities)
		total_usage = sum(item.current_usage for item in facilities)
		overall = round_half_up(total_usage / total_capacity * 100, 0) if total_capacity else 0
		return StorageListRead(
			count=len(facilities),
			total_capacity=total_capacity,
			total_usage=total_usage,
			total_available=total_capacity - total_usage,
			overall_utilization_percent=int(overall),
			facilities=[self._facility_read(item) for item in facilities],
		)

	def get_storage(self, storage_id: str) -> FacilityRead:
		return self._facility_read(self.reference.get_facility(storage_id))

	def list_farmers(self) -> FarmerListRead:
		farmers = self.repository.list()
		total_area = sum(item.cultivated_area for item in farmers)
		average_readiness = (
			sum(item.readiness_score for item in farmers) / len(farmers) if farmers else 0.0
		)
		return FarmerListRead(
			count=len(farmers),
			total_cultivated_area=total_area,
			average_readiness_score=round_half_up(average_readiness, 2),
			farmers=farmers,
		)

	def get_farmer(self, farmer_id: str) -> FarmerDetail:
		farmer = self.repository.get(farmer_id)
		return FarmerDetail(
			**farmer.model_dump(),
			crop_details=self.reference.get_crop(farmer.crop_id),
			region_details=self.reference.get_region(farmer.region_id),
		)

	def register_farmer(self, payload: FarmerCreate) -> FarmerRecord:
		# Unknown region or crop raises NotFoundError before anything is stored.
		region = self.reference.get_region(payload.region_id)
		crop = self.reference.get_crop(payload.crop_id)
		return self.repository.add(
			name=payload.name,
			region_id=region.region_id,
			crop_id=crop.crop_id,
			sowing_date=payload.sowing_date,
			cultivated_area=payload.cultivated_area,
			readiness_score=payload.readiness_score,
			contact=payload.contact,
		)

	def update_farmer(self, farmer_id: str, payload: FarmerUpdate) -> FarmerRecord:
		return self.repository.update(farmer_id, **payload.model_dump(exclude_none=True))

	def summary(self) -> SystemSummary:
		crops = self.reference.list_crops()
		regions = self.reference.list_regions()
		farmers = self.repository.list()
		facilities = self.reference.list_facilities()
		total_capacity = sum(item.total_capacity for item in facilities)
		total_usage = sum(item.current_usage for item in facilities)

		return SystemSummary(
			crops=CountSummary(count=len(crops), active=[crop.crop_type for crop in crops]),
			regions=CountSummary(count=len(regions), active=[region.name for region in regions]),
			farmers=FarmerSummary(
				count=len(farmers),
				total_cultivated_area=sum(item.cultivated_area for item in farmers),
			),
			storage=StorageSummary(
				facility_count=len(facilities),
				total_capacity=total_capacity,
				current_usage=total_usage,
				available=total_capacity - total_usage,
			),
			transport=TransportSummary(
				total_capacity_per_day=sum(region.transport_capacity_per_day for region in regions),
			),
		)

	@staticmethod
	def _facility_read(facility: StorageFacility) -> FacilityRead:
		return FacilityRead(
			**facility.model_dump(),
			available_capacity=facility.total_capacity - facility.current_usage,
			utilization_percent=int(round_half_up(facility.current_usage / facility.total_capacity * 100, 0)),
		)

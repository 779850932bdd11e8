from __future__ import annotations

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_list_and_get_crops(client: AsyncClient) -> None:
	response = await client.get("/api/v1/data/crops")
	assert response.status_code == 200
	assert response.json()["count"] == 1
	assert response.json()["crops"][0]["crop_type"] == "Tomato"

	response = await client.get("/api/v1/data/crops/tomato")
	assert response.status_code == 200
	assert response.json()["avg_maturity_days"] == 90

	response = await client.get("/api/v1/data/crops/RICE")
	assert response.status_code == 404
	assert response.json()["detail"] == "Crop RICE not found"


@pytest.mark.asyncio
async def test_region_detail_includes_weather(client: AsyncClient) -> None:
	response = await client.get("/api/v1/data/regions")
	assert response.status_code == 200
	assert response.json()["count"] == 1

	response = await client.get("/api/v1/data/regions/DIST001")
	assert response.status_code == 200
	body = response.json()
	assert body["name"] == "Nashik District"
	assert body["transport_capacity_per_day"] == 100
	assert body["weather"]["deviation_flag"] == 0

	response = await client.get("/api/v1/data/regions/DIST404")
	assert response.status_code == 404


@pytest.mark.asyncio
async def test_storage_listing_and_detail(client: AsyncClient) -> None:
	response = await client.get("/api/v1/data/storage")
	assert response.status_code == 200
	body = response.json()
	assert body["count"] == 2
	assert body["total_capacity"] == 800
	assert body["total_usage"] == 250
	assert body["total_available"] == 550
	assert body["overall_utilization_percent"] == 31

	response = await client.get("/api/v1/data/storage/cs001")
	assert response.status_code == 200
	facility = response.json()
	assert facility["available_capacity"] == 350
	assert facility["utilization_percent"] == 30

	response = await client.get("/api/v1/data/storage/CS999")
	assert response.status_code == 404


@pytest.mark.asyncio
async def test_weather_is_keyed_by_region(client: AsyncClient) -> None:
	response = await client.get("/api/v1/data/weather")
	assert response.status_code == 200
	assert response.json()["DIST001"]["forecast"] == "Normal conditions expected for next 5 days"


@pytest.mark.asyncio
async def test_system_summary(client: AsyncClient) -> None:
	response = await client.get("/api/v1/data/summary")
	assert response.status_code == 200

	body = response.json()
	assert body["crops"] == {"count": 1, "active": ["Tomato"]}
	assert body["regions"] == {"count": 1, "active": ["Nashik District"]}
	assert body["farmers"]["count"] == 3
	assert body["farmers"]["total_cultivated_area"] == pytest.approx(7.5)
	assert body["storage"]["available"] == 550
	assert body["transport"]["total_capacity_per_day"] == 100


@pytest.mark.asyncio
async def test_list_and_get_farmers(client: AsyncClient) -> None:
	response = await client.get("/api/v1/data/farmers")
	assert response.status_code == 200
	body = response.json()
	assert body["count"] == 3
	assert body["total_cultivated_area"] == pytest.approx(7.5)
	assert body["average_readiness_score"] == pytest.approx(0.83)

	response = await client.get("/api/v1/data/farmers/F002")
	assert response.status_code == 200
	detail = response.json()
	assert detail["name"] == "Suresh Jadhav"
	assert detail["crop_details"]["crop_id"] == "TOMATO"
	assert detail["region_details"]["region_id"] == "DIST001"

	response = await client.get("/api/v1/data/farmers/F404")
	assert response.status_code == 404


@pytest.mark.asyncio
async def test_register_farmer_assigns_next_identifier(client: AsyncClient) -> None:
	response = await client.post(
		"/api/v1/data/farmers",
		json={"name": "Anil Pawar", "sowing_date": "2025-11-01", "cultivated_area": 1.2},
	)
	assert response.status_code == 201

	body = response.json()
	assert body["farmer_id"] == "F004"
	assert body["region_id"] == "DIST001"
	assert body["crop_id"] == "TOMATO"
	assert body["readiness_score"] == 0.5
	assert body["created_at"] is not None

	listing = await client.get("/api/v1/data/farmers")
	assert listing.json()["count"] == 4


@pytest.mark.asyncio
async def test_register_farmer_rejects_unknown_references(client: AsyncClient) -> None:
	payload = {"name": "Anil Pawar", "sowing_date": "2025-11-01", "cultivated_area": 1.2}

	response = await client.post("/api/v1/data/farmers", json={**payload, "region_id": "DIST404"})
	assert response.status_code == 404

	response = await client.post("/api/v1/data/farmers", json={**payload, "crop_id": "RICE"})
	assert response.status_code == 404

	listing = await client.get("/api/v1/data/farmers")
	assert listing.json()["count"] == 3


@pytest.mark.asyncio
@pytest.mark.parametrize(
	"overrides",
	[
		{"cultivated_area": 0},
		{"readiness_score": 1.5},
		{"sowing_date": "not-a-date"},
		{"name": ""},
	],
)
async def test_register_farmer_validates_payload(client: AsyncClient, overrides: dict[str, object]) -> None:
	payload = {"name": "Anil Pawar", "sowing_date": "2025-11-01", "cultivated_area": 1.2, **overrides}
	response = await client.post("/api/v1/data/farmers", json=payload)
	assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_farmer(client: AsyncClient) -> None:
	response = await client.put(
		"/api/v1/data/farmers/f001",
		json={"readiness_score": 0.4, "cultivated_area": 3.0},
	)
	assert response.status_code == 200

	body = response.json()
	assert body["farmer_id"] == "F001"
	assert body["readiness_score"] == 0.4
	assert body["cultivated_area"] == 3.0
	assert body["sowing_date"] == "2025-10-15"
	assert body["updated_at"] is not None

	response = await client.put("/api/v1/data/farmers/F001", json={"readiness_score": 1.5})
	assert response.status_code == 422

	response = await client.put("/api/v1/data/farmers/F404", json={"readiness_score": 0.4})
	assert response.status_code == 404

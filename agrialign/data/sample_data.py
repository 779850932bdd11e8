"""Seed records for a single-crop, single-district deployment.

Tomato in Nashik District with a 3-5 day forecast horizon.  Volumes are in
tonnes, areas in hectares.
"""

from __future__ import annotations

from datetime import date

from agrialign.models.farmer import FarmerRecord
from agrialign.models.reference import CropProfile, Region, StorageFacility, WeatherSignal

CROPS: tuple[CropProfile, ...] = (
    CropProfile(
        crop_id="TOMATO",
        crop_type="Tomato",
        avg_maturity_days=90,
        avg_yield_per_hectare=25,
        category="Perishable",
        shelf_life_days=7,
    ),
)

REGIONS: tuple[Region, ...] = (
    Region(
        region_id="DIST001",
        name="Nashik District",
        state="Maharashtra",
        transport_capacity_per_day=100,
        typical_harvest_window="Oct-Feb",
    ),
)

FARMERS: tuple[FarmerRecord, ...] = (
    FarmerRecord(
        farmer_id="F001",
        name="Ramesh Patil",
        region_id="DIST001",
        crop_id="TOMATO",
        sowing_date=date(2025, 10, 15),
        cultivated_area=2.5,
        readiness_score=0.85,
        contact="+91-9876543210",
    ),
    FarmerRecord(
        farmer_id="F002",
        name="Suresh Jadhav",
        region_id="DIST001",
        crop_id="TOMATO",
        sowing_date=date(2025, 10, 20),
        cultivated_area=1.8,
        readiness_score=0.70,
        contact="+91-9876543211",
    ),
    FarmerRecord(
        farmer_id="F003",
        name="Vijay Shinde",
        region_id="DIST001",
        crop_id="TOMATO",
        sowing_date=date(2025, 10, 10),
        cultivated_area=3.2,
        readiness_score=0.95,
        contact="+91-9876543212",
    ),
)

STORAGE_FACILITIES: tuple[StorageFacility, ...] = (
    StorageFacility(
        storage_id="CS001",
        name="Nashik Cold Storage Hub",
        region_id="DIST001",
        total_capacity=500,
        current_usage=150,
        type="Cold Storage",
        temperature_range="4-8°C",
    ),
    StorageFacility(
        storage_id="CS002",
        name="Sinnar Agri Warehouse",
        region_id="DIST001",
        total_capacity=300,
        current_usage=100,
        type="Cold Storage",
        temperature_range="4-8°C",
    ),
)

WEATHER: tuple[WeatherSignal, ...] = (
    WeatherSignal(
        region_id="DIST001",
        deviation_flag=0,
        forecast="Normal conditions expected for next 5 days",
        temperature_avg=28,
        humidity_avg=65,
    ),
)

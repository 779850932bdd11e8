"""FarmerRecord: one farmer's registered plot and self-reported readiness."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class FarmerRecord(BaseModel):
    """Registered farmer plot.

    Records are replaced, not mutated in place: repositories revalidate
    the merged fields into a new record, so a record handed to the core
    never changes underneath it.
    """

    model_config = ConfigDict(frozen=True)

    farmer_id: str
    name: str
    region_id: str
    crop_id: str
    sowing_date: date
    cultivated_area: float = Field(gt=0)
    readiness_score: float = Field(ge=0.0, le=1.0)
    contact: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

"""Farmer record repository.

The coordination core never reads farmer state directly; services resolve
records through a ``FarmerRepository`` and hand the core plain snapshots.

Design:
  - Identifiers are matched case-insensitively (stored uppercase).
  - Every mutation bumps ``revision`` so cached dashboards keyed on it
    expire as soon as a farmer changes.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from datetime import UTC, date, datetime
from typing import Any, Protocol

from agrialign.errors import NotFoundError
from agrialign.models.farmer import FarmerRecord

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset({"readiness_score", "cultivated_area", "sowing_date"})


class FarmerRepository(Protocol):
    """Read/write access to farmer records."""

    @property
    def revision(self) -> int: ...

    def list(self) -> list[FarmerRecord]: ...

    def get(self, farmer_id: str) -> FarmerRecord: ...

    def add(
        self,
        *,
        name: str,
        region_id: str,
        crop_id: str,
        sowing_date: date,
        cultivated_area: float,
        readiness_score: float,
        contact: str | None = None,
    ) -> FarmerRecord: ...

    def update(self, farmer_id: str, **changes: Any) -> FarmerRecord: ...


class InMemoryFarmerRepository:
    """Process-local ``FarmerRepository`` seeded with fixture records."""

    def __init__(self, seed: Iterable[FarmerRecord] = ()) -> None:
        self._records: dict[str, FarmerRecord] = {}
        self._revision = 0
        self._lock = threading.Lock()
        for record in seed:
            self._records[record.farmer_id.upper()] = record

    @property
    def revision(self) -> int:
        return self._revision

    def list(self) -> list[FarmerRecord]:
        with self._lock:
            return list(self._records.values())

    def get(self, farmer_id: str) -> FarmerRecord:
        """Fetch a farmer by identifier.

        Raises:
            NotFoundError: No farmer is registered under ``farmer_id``.
        """
        record = self._records.get(farmer_id.upper())
        if record is None:
            raise NotFoundError("Farmer", farmer_id)
        return record

    def add(
        self,
        *,
        name: str,
        region_id: str,
        crop_id: str,
        sowing_date: date,
        cultivated_area: float,
        readiness_score: float,
        contact: str | None = None,
    ) -> FarmerRecord:
        """Register a farmer under the next sequential ``F###`` identifier."""
        with self._lock:
            farmer_id = f"F{len(self._records) + 1:03d}"
            record = FarmerRecord(
                farmer_id=farmer_id,
                name=name,
                region_id=region_id.upper(),
                crop_id=crop_id.upper(),
                sowing_date=sowing_date,
                cultivated_area=cultivated_area,
                readiness_score=readiness_score,
                contact=contact,
                created_at=datetime.now(UTC),
            )
            self._records[farmer_id] = record
            self._revision += 1

        logger.info("farmer registered", extra={"farmer_id": farmer_id, "region_id": record.region_id})
        return record

    def update(self, farmer_id: str, **changes: Any) -> FarmerRecord:
        """Apply readiness, area or sowing-date changes and return the new record.

        ``None`` values are ignored; any other field name is rejected.
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"fields cannot be updated: {', '.join(sorted(unknown))}")

        applied = {key: value for key, value in changes.items() if value is not None}
        with self._lock:
            current = self.get(farmer_id)
            payload = current.model_dump()
            payload.update(applied)
            payload["updated_at"] = datetime.now(UTC)
            record = FarmerRecord.model_validate(payload)
            self._records[current.farmer_id.upper()] = record
            self._revision += 1

        logger.info("farmer updated", extra={"farmer_id": record.farmer_id, "fields": sorted(applied)})
        return record

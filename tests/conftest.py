"""Shared pytest fixtures: async test client, seeded stores and a Redis fake."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import date
from typing import Any
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from agrialign.data import sample_data
from agrialign.dependencies import get_clock
from agrialign.main import app
from agrialign.repositories.farmer_repo import InMemoryFarmerRepository
from agrialign.repositories.reference_data import ReferenceData

PINNED_TODAY = date(2026, 1, 10)


class FakeRedis:
	def __init__(self) -> None:
		self._store: dict[str, str] = {}
		self._counter: dict[str, int] = {}
		self.get = AsyncMock(side_effect=self._get)
		self.setex = AsyncMock(side_effect=self._setex)
		self.incr = AsyncMock(side_effect=self._incr)
		self.expire = AsyncMock(return_value=True)

	async def _get(self, key: str) -> str | None:
		return self._store.get(key)

	async def _setex(self, key: str, _ttl: int, value: str) -> bool:
		self._store[key] = value
		return True

	async def _incr(self, key: str) -> int:
		value = self._counter.get(key, 0) + 1
		self._counter[key] = value
		return value

	def keys(self) -> list[str]:
		return list(self._store)

	def reset_counters(self) -> None:
		self._counter.clear()


@pytest.fixture
def today() -> date:
	return PINNED_TODAY


@pytest.fixture
def reference_data() -> ReferenceData:
	return ReferenceData.from_sample_data()


@pytest.fixture
def farmer_repository() -> InMemoryFarmerRepository:
	"""A fresh repository per test so registrations never leak between tests."""
	return InMemoryFarmerRepository(sample_data.FARMERS)


@pytest.fixture
def fake_redis() -> FakeRedis:
	return FakeRedis()


@asynccontextmanager
async def _client_for(
	farmer_repository: InMemoryFarmerRepository,
	reference_data: ReferenceData,
	redis_client: Any,
) -> AsyncGenerator[AsyncClient, None]:
	app.state.farmer_repository = farmer_repository
	app.state.reference_data = reference_data
	app.state.redis = redis_client
	app.dependency_overrides[get_clock] = lambda: (lambda: PINNED_TODAY)
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan

	transport = ASGITransport(app=app)
	try:
		async with AsyncClient(transport=transport, base_url="http://test") as test_client:
			yield test_client
	finally:
		app.router.lifespan_context = original_lifespan
		app.dependency_overrides.clear()
		app.state.redis = None


@pytest.fixture
async def client(
	farmer_repository: InMemoryFarmerRepository,
	reference_data: ReferenceData,
) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled, no Redis and a pinned clock."""
	async with _client_for(farmer_repository, reference_data, None) as test_client:
		yield test_client


@pytest.fixture
async def redis_client(
	farmer_repository: InMemoryFarmerRepository,
	reference_data: ReferenceData,
	fake_redis: FakeRedis,
) -> AsyncGenerator[AsyncClient, None]:
	"""Same as ``client`` but with the fake Redis attached to ``app.state``."""
	async with _client_for(farmer_repository, reference_data, fake_redis) as test_client:
		yield test_client

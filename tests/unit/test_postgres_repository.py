"""Unit tests for the PostgreSQL payment repository with a mocked pool."""

from unittest.mock import AsyncMock, MagicMock

import asyncpg
import pytest

from payment_gateway.domain.errors import StorageError
from payment_gateway.domain.payment import PaymentRecord, PaymentStatus
from payment_gateway.infrastructure.postgres_repository import (
    CREATE_PAYMENTS_TABLE,
    SELECT_PAYMENT,
    UPSERT_PAYMENT,
    PostgresPaymentRepository,
)


class _Acquire:
    """Async context manager standing in for ``pool.acquire()``."""

    def __init__(self, conn):
        self.conn = conn

    async def __aenter__(self):
        return self.conn

    async def __aexit__(self, exc_type, exc, tb):
        return False


@pytest.fixture
def conn():
    connection = MagicMock()
    connection.execute = AsyncMock(return_value="INSERT 0 1")
    connection.fetchrow = AsyncMock(return_value=None)
    return connection


@pytest.fixture
def pool(conn):
    mock_pool = MagicMock()
    mock_pool.acquire = MagicMock(side_effect=lambda: _Acquire(conn))
    return mock_pool


@pytest.fixture
def record():
    return PaymentRecord(
        id="pay-1",
        status=PaymentStatus.AUTHORIZED,
        card_last_four="8877",
        expiry_month=4,
        expiry_year=2030,
        currency="GBP",
        amount=100,
    )


class TestPostgresPaymentRepository:
    @pytest.mark.asyncio
    async def test_ensure_schema(self, pool, conn):
        await PostgresPaymentRepository(pool).ensure_schema()

        conn.execute.assert_awaited_once_with(CREATE_PAYMENTS_TABLE)

    @pytest.mark.asyncio
    async def test_save_upserts_record(self, pool, conn, record):
        await PostgresPaymentRepository(pool).save(record)

        conn.execute.assert_awaited_once_with(
            UPSERT_PAYMENT, "pay-1", "Authorized", "8877", 4, 2030, "GBP", 100
        )

    @pytest.mark.asyncio
    async def test_find_by_id_maps_row(self, pool, conn, record):
        conn.fetchrow.return_value = {
            "id": "pay-1",
            "status": "Authorized",
            "card_last_four": "8877",
            "expiry_month": 4,
            "expiry_year": 2030,
            "currency": "GBP",
            "amount": 100,
        }

        found = await PostgresPaymentRepository(pool).find_by_id("pay-1")

        assert found == record
        conn.fetchrow.assert_awaited_once_with(SELECT_PAYMENT, "pay-1")

    @pytest.mark.asyncio
    async def test_find_by_id_missing_returns_none(self, pool):
        assert await PostgresPaymentRepository(pool).find_by_id("missing") is None

    @pytest.mark.asyncio
    async def test_save_failure_is_storage_error(self, pool, conn, record):
        conn.execute.side_effect = asyncpg.PostgresError("disk full")

        with pytest.raises(StorageError) as exc_info:
            await PostgresPaymentRepository(pool).save(record)

        assert "pay-1" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, asyncpg.PostgresError)

    @pytest.mark.asyncio
    async def test_find_failure_is_storage_error(self, pool, conn):
        conn.fetchrow.side_effect = ConnectionRefusedError("connection refused")

        with pytest.raises(StorageError):
            await PostgresPaymentRepository(pool).find_by_id("pay-1")

    @pytest.mark.asyncio
    async def test_schema_failure_is_storage_error(self, pool, conn):
        conn.execute.side_effect = asyncpg.InterfaceError("pool is closed")

        with pytest.raises(StorageError):
            await PostgresPaymentRepository(pool).ensure_schema()

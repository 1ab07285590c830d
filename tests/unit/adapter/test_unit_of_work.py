"""Unit tests for SqlAlchemyUnitOfWork error translation"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import IntegrityError, OperationalError

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain.exceptions import ConflictError, StorageUnavailableError


@pytest.fixture
def session():
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.mark.asyncio
class TestSqlAlchemyUnitOfWork:
    async def test_commit(self, session):
        await SqlAlchemyUnitOfWork(session).commit()

        session.commit.assert_called_once()

    async def test_integrity_error_becomes_conflict(self, session):
        session.commit = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))
        )

        with pytest.raises(ConflictError):
            await SqlAlchemyUnitOfWork(session).commit()

        session.rollback.assert_called_once()

    async def test_operational_error_becomes_storage_unavailable(self, session):
        session.commit = AsyncMock(
            side_effect=OperationalError("COMMIT", {}, Exception("connection lost"))
        )

        with pytest.raises(StorageUnavailableError):
            await SqlAlchemyUnitOfWork(session).commit()

    async def test_context_exit_rolls_back(self, session):
        async with SqlAlchemyUnitOfWork(session):
            pass

        session.rollback.assert_called_once()

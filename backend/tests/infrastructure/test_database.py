"""Database session manager — error mapping and rollback."""

import pytest
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)

from app.core.errors import DatabaseError, ResourceNotFoundError
from app.infrastructure.database import DatabaseSessionManager, classify_db_error


@pytest.mark.parametrize("error,operation", [
    (IntegrityError("INSERT", {}, Exception("duplicate key")), "commit"),
    (OperationalError("SELECT 1", {}, Exception("connection lost")), "execute"),
    (DBAPIError("SELECT 1", {}, Exception("driver")), "query"),
    (SQLAlchemyError("mapper"), "unknown"),
])
def test_classify_db_error(error, operation):
    assert classify_db_error(error)[1] == operation


@pytest.fixture
async def manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    yield manager
    await manager.dispose()


async def test_sqlalchemy_error_becomes_database_error(manager):
    with pytest.raises(DatabaseError) as exc:
        async with manager.session():
            raise IntegrityError("INSERT", {}, Exception("duplicate key"))
    assert exc.value.http_status == 503


async def test_domain_errors_pass_through(manager):
    with pytest.raises(ResourceNotFoundError):
        async with manager.session():
            raise ResourceNotFoundError("Claim", "c-1")


async def test_health_check(manager):
    assert await manager.health_check() is True

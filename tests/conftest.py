"""
Test harness: an isolated database per test, emptied before the test body runs
"""

import logging
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from usersvc.db import DatabaseManager
from usersvc.services import UserService


def sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest_asyncio.fixture
async def db(tmp_path: Path) -> AsyncGenerator[DatabaseManager, None]:
    """Connect, create the schema and truncate every table; disconnect afterwards"""
    manager = DatabaseManager(sqlite_url(tmp_path / "users.sqlite3"))
    await manager.connect()
    await manager.create_tables()
    await manager.truncate_tables()

    yield manager

    await manager.disconnect()


@pytest.fixture
def service(db: DatabaseManager) -> UserService:
    return UserService(db, logger=logging.getLogger("tests.user_service"))


@pytest.fixture
def user_body() -> dict:
    return {"name": "Fake User", "email": "fake@example.com", "password": "password1"}

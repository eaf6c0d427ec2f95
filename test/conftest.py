"""
Test Configuration and Fixtures

Unit and API tests run without infrastructure: repositories are AsyncMock doubles behind
a fake unit of work, and HTTP tests override use case dependencies on the FastAPI app.
"""

# =============================================================================
# Environment setup MUST happen before any application import
# (settings and the log sink read it at import time)
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    from dotenv import load_dotenv

    load_dotenv(Path(__file__).parent.parent / '.env.example', override=False)
    os.environ['POSTGRES_DB'] = 'venue_ticketing_test_db'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


_early_setup_test_environment()

from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402

from src.platform.database.unit_of_work import AbstractUnitOfWork  # noqa: E402
from src.service.identity.domain.entity.user_entity import UserEntity, UserRole  # noqa: E402


class FakeUnitOfWork(AbstractUnitOfWork):
    """Every repository is an AsyncMock; commits and rollbacks are counted"""

    def __init__(self) -> None:
        self.user_query_repo = AsyncMock()
        self.venue_command_repo = AsyncMock()
        self.venue_query_repo = AsyncMock()
        self.seat_command_repo = AsyncMock()
        self.seat_query_repo = AsyncMock()
        self.event_command_repo = AsyncMock()
        self.event_query_repo = AsyncMock()
        self.ticket_command_repo = AsyncMock()
        self.ticket_query_repo = AsyncMock()
        self.committed = 0
        self.rolled_back = 0

    async def _commit(self) -> None:
        self.committed += 1

    async def rollback(self) -> None:
        self.rolled_back += 1


@pytest.fixture
def uow() -> FakeUnitOfWork:
    return FakeUnitOfWork()


@pytest.fixture
def attendee() -> UserEntity:
    return UserEntity(id=10, email='attendee@example.com', name='Attendee')


@pytest.fixture
def other_attendee() -> UserEntity:
    return UserEntity(id=11, email='other@example.com', name='Other Attendee')


@pytest.fixture
def admin() -> UserEntity:
    return UserEntity(id=1, email='admin@example.com', name='Admin', role=UserRole.ADMIN)


@pytest.fixture
def other_admin() -> UserEntity:
    return UserEntity(id=2, email='admin2@example.com', name='Admin 2', role=UserRole.ADMIN)


@pytest.fixture
def superadmin() -> UserEntity:
    return UserEntity(id=99, email='root@example.com', name='Root', role=UserRole.SUPERADMIN)



# =============================================================================
# Integration Test Database
# =============================================================================
_TABLES = ['ticket_history', 'ticket', 'event', 'seat', 'venue_section', 'venue', 'user']


async def _setup_test_database() -> None:
    from sqlalchemy import text
    from sqlalchemy.ext.asyncio import create_async_engine

    from src.platform.config.core_setting import settings

    test_db = settings.POSTGRES_DB
    postgres_url = settings.DATABASE_URL_ASYNC.replace(f'/{test_db}', '/postgres')

    # Create database if not exists
    engine = create_async_engine(postgres_url, isolation_level='AUTOCOMMIT')
    async with engine.begin() as conn:
        result = await conn.execute(
            text('SELECT 1 FROM pg_database WHERE datname = :name'), {'name': test_db}
        )
        if not result.fetchone():
            await conn.execute(text(f'CREATE DATABASE {test_db}'))
    await engine.dispose()

    # Reset schema; migrations run afterwards, outside this loop
    reset_engine = create_async_engine(settings.DATABASE_URL_ASYNC)
    async with reset_engine.begin() as conn:
        await conn.execute(text('DROP SCHEMA public CASCADE'))
        await conn.execute(text('CREATE SCHEMA public'))
    await reset_engine.dispose()


@pytest.fixture(scope='session')
def integration_database() -> None:
    """Fresh schema at alembic head; skips the test when PostgreSQL is unreachable"""
    import asyncio

    from alembic import command
    from alembic.config import Config

    try:
        asyncio.run(_setup_test_database())
    except (OSError, ConnectionError) as e:
        pytest.skip(f'PostgreSQL is not reachable: {e}')

    root = Path(__file__).parent.parent
    alembic_cfg = Config(root / 'alembic.ini')
    alembic_cfg.set_main_option('script_location', str(root / 'src' / 'platform' / 'alembic'))
    command.upgrade(alembic_cfg, 'head')


@pytest.fixture
async def session_factory(integration_database: None):
    from sqlalchemy import text
    from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

    from src.platform.config.core_setting import settings

    engine = create_async_engine(settings.DATABASE_URL_ASYNC)
    async with engine.begin() as conn:
        quoted = ', '.join(f'"{table}"' for table in _TABLES)
        await conn.execute(text(f'TRUNCATE {quoted} RESTART IDENTITY CASCADE'))

    yield async_sessionmaker(engine, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def new_uow(session_factory):
    """Each call is a separate transaction on its own connection"""
    from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork

    return lambda: SqlAlchemyUnitOfWork(session_factory=session_factory)


@pytest.fixture
async def stored_users(session_factory) -> dict[str, UserEntity]:
    from src.service.identity.driven_adapter.repo.user_command_repo_impl import (
        UserCommandRepoImpl,
    )

    repo = UserCommandRepoImpl(session_factory=session_factory)
    users = {
        'admin': UserEntity(email='admin@example.com', name='Admin', role=UserRole.ADMIN),
        'attendee': UserEntity(email='attendee@example.com', name='Attendee'),
        'other_attendee': UserEntity(email='other@example.com', name='Other Attendee'),
    }
    return {key: await repo.create(user_entity=user) for key, user in users.items()}

"""
HTTP test fixtures

The app is built without the production lifespan (no database, no sweeper) but with the
container wired, so unauthenticated requests reach the real JWT provider. Callers
are injected by overriding `get_current_user`; use cases by overriding their
`depends` factories with instances built on the fake unit of work.
"""

from contextlib import asynccontextmanager
from typing import Any, Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.service.identity.domain.entity.user_entity import UserEntity
from src.service.identity.driving_adapter.http_controller.auth.current_user import (
    get_current_user,
)


@asynccontextmanager
async def _no_lifespan(app: FastAPI):
    yield


@pytest.fixture
def app() -> FastAPI:
    container.wire(modules=WIRE_MODULES)
    app = create_app(lifespan=_no_lifespan, title_suffix=' (Test)')
    yield app
    app.dependency_overrides.clear()
    container.unwire()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def login_as(app: FastAPI) -> Callable[[UserEntity], None]:
    def _login_as(user: UserEntity) -> None:
        app.dependency_overrides[get_current_user] = lambda: user

    return _login_as


@pytest.fixture
def provide(app: FastAPI) -> Callable[[Any, Any], None]:
    """provide(SomeUseCase.depends, instance)"""

    def _provide(factory: Any, instance: Any) -> None:
        app.dependency_overrides[factory] = lambda: instance

    return _provide

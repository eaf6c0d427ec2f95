#!/usr/bin/env python
"""
Superadmin bootstrap

Creates the superadmin account from SUPERADMIN_EMAIL / SUPERADMIN_NAME /
SUPERADMIN_PASSWORD. Safe to run repeatedly: an existing account is left untouched.

Usage:
    uv run python -m script.create_superadmin
    create-superadmin
"""

import anyio

from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.database.orm_db_setting import dispose_engines
from src.platform.logging.loguru_io import Logger
from src.service.identity.app.command.create_user_use_case import CreateUserUseCase


async def create_superadmin() -> None:
    user_query_repo = container.user_query_repo()
    if await user_query_repo.exists_by_email(email=settings.SUPERADMIN_EMAIL):
        Logger.base.info(f'ℹ️  Superadmin {settings.SUPERADMIN_EMAIL} already exists')
        return

    use_case = CreateUserUseCase(
        user_command_repo=container.user_command_repo(),
        password_hasher=container.password_hasher(),
    )
    user = await use_case.create_superadmin(
        email=settings.SUPERADMIN_EMAIL,
        password=settings.SUPERADMIN_PASSWORD.get_secret_value(),
        name=settings.SUPERADMIN_NAME,
    )
    Logger.base.info(f'✅ Superadmin created: id={user.id} email={user.email}')


async def _run() -> None:
    try:
        await create_superadmin()
    finally:
        await dispose_engines()


def main() -> None:
    anyio.run(_run)


if __name__ == '__main__':
    main()

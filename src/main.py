"""
Production FastAPI Application

HTTP API plus the background hold sweeper.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import dispose_engines, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.service.ticketing.driving_adapter.background.hold_sweeper import run_hold_sweeper


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [Venue Ticketing] Starting up...')

    tracing = TracingConfig(service_name='venue-ticketing')
    tracing.setup()
    Logger.base.info('📊 [Venue Ticketing] OpenTelemetry tracing configured')

    # Wire dependency injection for all modules
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Venue Ticketing] Dependency injection wired')

    tracing.instrument_sqlalchemy(engine=get_engine())
    Logger.base.info('🗄️  [Venue Ticketing] Database engine ready + instrumented')

    async with anyio.create_task_group() as tg:
        tg.start_soon(run_hold_sweeper)
        Logger.base.info('✅ [Venue Ticketing] Ready to serve requests')

        yield

        Logger.base.info('🛑 [Venue Ticketing] Shutting down...')
        tg.cancel_scope.cancel()

    await dispose_engines()
    Logger.base.info('🗄️  [Venue Ticketing] Database engines disposed')

    # Shutdown tracing (flush remaining spans)
    tracing.shutdown()
    Logger.base.info('📊 [Venue Ticketing] Tracing shutdown complete')

    container.unwire()
    Logger.base.info('👋 [Venue Ticketing] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')

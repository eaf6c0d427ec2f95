from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import AsyncIterator, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession


class SessionScopedRepo:
    """
    Repository base with two modes:

    - UoW mode: constructed with `session`, every call joins the caller's transaction
    - Standalone mode: constructed with `session_factory`, every call opens its own session
    """

    def __init__(
        self,
        session_factory: Optional[
            Callable[[], AbstractAsyncContextManager[AsyncSession]]
        ] = None,
        session: Optional[AsyncSession] = None,
    ) -> None:
        self.session_factory = session_factory
        self.session = session

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        if self.session is not None:
            yield self.session
        elif self.session_factory is not None:
            async with self.session_factory() as session:
                yield session
        else:
            raise RuntimeError('No session or session_factory available')

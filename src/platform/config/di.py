"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.identity.driven_adapter.repo.user_command_repo_impl import UserCommandRepoImpl
from src.service.identity.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.identity.driven_adapter.security.bcrypt_password_hasher import (
    BcryptPasswordHasher,
)
from src.service.identity.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.shared_kernel.driven_adapter.mail.logging_mail_sender import LoggingMailSender
from src.service.shared_kernel.driven_adapter.storage.local_image_storage import (
    LocalImageStorage,
)
from src.service.ticketing.driven_adapter.qr.qr_code_renderer import QrCodeRenderer
from src.service.ticketing.driven_adapter.qr.qr_token_signer import QrTokenSigner
from src.service.ticketing.driven_adapter.repo.event_query_repo_impl import EventQueryRepoImpl
from src.service.ticketing.driven_adapter.repo.ticket_query_repo_impl import TicketQueryRepoImpl
from src.service.venue.driven_adapter.repo.seat_query_repo_impl import SeatQueryRepoImpl
from src.service.venue.driven_adapter.repo.venue_query_repo_impl import VenueQueryRepoImpl


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (primary for writes, replica for reads; the replica falls back to primary)
    database = providers.Singleton(Database, read_only=False)
    read_database = providers.Singleton(Database, read_only=True)

    # Unit of Work: a fresh one per request, repositories share its session
    unit_of_work = providers.Factory(SqlAlchemyUnitOfWork, session_factory=database.provided.session)

    # Repositories (stateless - use session_factory per call)
    user_command_repo = providers.Singleton(
        UserCommandRepoImpl, session_factory=database.provided.session
    )
    # Login reads its own writes, so users stay on the primary
    user_query_repo = providers.Singleton(
        UserQueryRepoImpl, session_factory=database.provided.session
    )
    venue_query_repo = providers.Singleton(
        VenueQueryRepoImpl, session_factory=read_database.provided.session
    )
    seat_query_repo = providers.Singleton(
        SeatQueryRepoImpl, session_factory=read_database.provided.session
    )
    event_query_repo = providers.Singleton(
        EventQueryRepoImpl, session_factory=read_database.provided.session
    )
    ticket_query_repo = providers.Singleton(
        TicketQueryRepoImpl, session_factory=read_database.provided.session
    )

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)
    password_hasher = providers.Singleton(BcryptPasswordHasher)

    # Tickets
    qr_token_signer = providers.Singleton(QrTokenSigner)
    qr_code_renderer = providers.Singleton(QrCodeRenderer)

    # Collaborators
    image_storage = providers.Singleton(LocalImageStorage)
    mail_sender = providers.Singleton(LoggingMailSender)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()

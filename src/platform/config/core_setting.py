from pathlib import Path
from typing import Annotated, List, Optional

import orjson
from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Venue Ticketing'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production
    LOG_TIMEZONE: str = 'UTC'

    # PostgreSQL (primary)
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'venue_ticketing'
    POSTGRES_PORT: int = 5432

    # PostgreSQL read replica (falls back to primary when unset)
    POSTGRES_REPLICA_SERVER: Optional[str] = None
    POSTGRES_REPLICA_PORT: Optional[int] = None

    # SQLAlchemy pool tuning
    DB_POOL_SIZE_WRITE: int = 10
    DB_POOL_SIZE_READ: int = 20
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800
    DB_POOL_PRE_PING: bool = True

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'

    @property
    def DATABASE_READ_URL_ASYNC(self) -> str:
        if not self.POSTGRES_REPLICA_SERVER:
            return self.DATABASE_URL_ASYNC
        password = self.POSTGRES_PASSWORD.get_secret_value()
        port = self.POSTGRES_REPLICA_PORT or self.POSTGRES_PORT
        return f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}@{self.POSTGRES_REPLICA_SERVER}:{port}/{self.POSTGRES_DB}'

    # Security
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    ALGORITHM: str = 'HS256'
    AUTH_COOKIE_NAME: str = 'venueticketingauth'

    # QR ticket tokens are signed with their own key so it can rotate independently
    QR_TOKEN_SECRET: SecretStr = SecretStr('test_qr_token_secret_change_in_production')

    # Ticket holds
    TICKET_HOLD_SECONDS: int = 600
    HOLD_SWEEP_INTERVAL_SECONDS: int = 30

    # Media / mail collaborators
    MEDIA_URL: str = '/static/uploads'
    MAIL_SENDER: str = 'no-reply@venue-ticketing.local'

    # Superadmin bootstrap (script/create_superadmin.py)
    SUPERADMIN_EMAIL: str = 'superadmin@venue-ticketing.local'
    SUPERADMIN_NAME: str = 'Super Admin'
    SUPERADMIN_PASSWORD: SecretStr = SecretStr('change-me-please')

    # Paging
    DEFAULT_PAGE_LIMIT: int = 20
    MAX_PAGE_LIMIT: int = 200

    # CORS
    # Comma list or JSON list; NoDecode hands the raw string to the validator below
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and v.strip().startswith('['):
            return [str(origin).strip() for origin in orjson.loads(v) if str(origin).strip()]
        if isinstance(v, str):
            return [i.strip() for i in v.split(',') if i.strip()]
        if isinstance(v, list):
            return v
        return []


settings = Settings()  # type: ignore

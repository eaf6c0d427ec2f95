from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.service.identity.domain.entity.user_entity import UserEntity
from src.service.identity.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


bearer_scheme = HTTPBearer(auto_error=False)


@inject
async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> UserEntity:
    """
    Resolve the caller from a Bearer header, falling back to the login cookie.

    Stateless: the user is rebuilt from the JWT payload, no DB query.
    """
    token = credentials.credentials if credentials else None
    if not token:
        token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    return jwt_auth.get_current_user_info_from_jwt(token)

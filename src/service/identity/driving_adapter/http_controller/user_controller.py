from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response, status

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.identity.app.command.create_user_use_case import CreateUserUseCase
from src.service.identity.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.identity.domain.entity.user_entity import UserEntity
from src.service.identity.driving_adapter.http_controller.auth.current_user import (
    get_current_user,
)
from src.service.identity.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.identity.driving_adapter.http_controller.auth.role_auth import (
    require_superadmin,
)
from src.service.identity.driving_adapter.http_controller.schema.user_schema import (
    CreateUserRequest,
    LoginRequest,
    LoginResponse,
    UserResponse,
)


router = APIRouter()


@router.post('', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_user(
    request: CreateUserRequest,
    use_case: CreateUserUseCase = Depends(CreateUserUseCase.depends),
) -> UserResponse:
    user_entity = await use_case.register_attendee(
        email=request.email,
        password=request.password.get_secret_value(),
        name=request.name,
    )
    return UserResponse.from_entity(user_entity)


@router.post('/admin', response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_admin(
    request: CreateUserRequest,
    current_user: UserEntity = Depends(require_superadmin),
    use_case: CreateUserUseCase = Depends(CreateUserUseCase.depends),
) -> UserResponse:
    user_entity = await use_case.provision_admin(
        actor=current_user,
        email=request.email,
        password=request.password.get_secret_value(),
        name=request.name,
    )
    return UserResponse.from_entity(user_entity)


@router.post('/login', response_model=LoginResponse)
@Logger.io
@inject
async def login(
    response: Response,
    request: LoginRequest,
    user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> LoginResponse:
    user_entity = await jwt_auth.authenticate_user(
        user_query_repo=user_query_repo,
        email=request.email,
        password=request.password.get_secret_value(),
    )

    token = jwt_auth.create_jwt_token(user_entity)

    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite='lax',
        secure=not settings.DEBUG,
    )

    return LoginResponse(access_token=token, user=UserResponse.from_entity(user_entity))


@router.get('', response_model=UserResponse)
@Logger.io
async def get_me(current_user: UserEntity = Depends(get_current_user)) -> UserResponse:
    return UserResponse.from_entity(current_user)

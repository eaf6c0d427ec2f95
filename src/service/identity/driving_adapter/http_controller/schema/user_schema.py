"""
User API Schemas - Pydantic models for request/response
"""

from pydantic import BaseModel, EmailStr, Field, SecretStr

from src.service.identity.domain.entity.user_entity import UserEntity, UserRole


class CreateUserRequest(BaseModel):
    email: EmailStr
    password: SecretStr = Field(
        ...,
        min_length=8,
        max_length=72,
        description='Password must be 8-72 characters (bcrypt limit)',
    )
    name: str = Field(..., min_length=1, max_length=100)

    class Config:
        json_schema_extra = {
            'example': {
                'email': 'attendee@example.com',
                'password': 'P@ssw0rd',
                'name': 'Jane Doe',
            }
        }


class LoginRequest(BaseModel):
    email: EmailStr
    password: SecretStr = Field(
        ..., min_length=1, max_length=72, description='User password (max 72 chars)'
    )

    class Config:
        json_schema_extra = {'example': {'email': 'attendee@example.com', 'password': 'P@ssw0rd'}}


class UserResponse(BaseModel):
    id: int
    email: str
    name: str
    role: UserRole
    is_active: bool

    @classmethod
    def from_entity(cls, user_entity: UserEntity) -> 'UserResponse':
        return cls(
            id=user_entity.id or 0,
            email=user_entity.email,
            name=user_entity.name,
            role=user_entity.role,
            is_active=user_entity.is_active,
        )

    class Config:
        from_attributes = True
        json_schema_extra = {
            'example': {
                'id': 1,
                'email': 'attendee@example.com',
                'name': 'Jane Doe',
                'role': 'attendee',
                'is_active': True,
            }
        }


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = 'bearer'
    user: UserResponse

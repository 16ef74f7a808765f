"""
User API Schemas - Pydantic models for request/response
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, SecretStr

from src.service.session_booking.domain.entity.user_entity import UserEntity, UserRole


class CreateUserRequest(BaseModel):
    """Registration request; field rules are checked by the registration validator"""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[SecretStr] = None
    confirm_password: Optional[SecretStr] = None

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'name': 'Camille Martin',
                'email': 'camille@example.com',
                'password': 'Passw0rdOk',
                'confirm_password': 'Passw0rdOk',
            }
        }
    )


class LoginRequest(BaseModel):
    email: str
    password: SecretStr

    model_config = ConfigDict(
        json_schema_extra={'example': {'email': 'camille@example.com', 'password': 'Passw0rdOk'}}
    )


class UpdateProfileRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[SecretStr] = None
    current_password: Optional[SecretStr] = None


class UserResponse(BaseModel):
    id: int
    email: str
    name: str
    role: UserRole
    is_active: bool

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            'example': {
                'id': 1,
                'email': 'camille@example.com',
                'name': 'Camille Martin',
                'role': 'user',
                'is_active': True,
            }
        },
    )

    @classmethod
    def from_entity(cls, user: UserEntity) -> 'UserResponse':
        return cls(
            id=user.id or 0,
            email=user.email,
            name=user.name,
            role=user.role,
            is_active=user.is_active,
        )

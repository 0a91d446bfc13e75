from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime

from message_apps.models.user import UserStatus
from .base import CamelModel

class UserDto(CamelModel):
    user_id: int
    username: str
    email: Optional[str] = None
    status: Optional[UserStatus] = None
    created_at: Optional[datetime] = None

class UserCreate(CamelModel):
    username: str = Field(min_length=1, max_length=50)
    email: str = Field(min_length=1, max_length=100)
    # Plaintext; the field name is kept for compatibility with existing clients
    password: str = Field(alias="passwordHash", min_length=1)

class UserLogin(CamelModel):
    username: str
    password: str = Field(alias="passwordHash")

class LoginResponse(CamelModel):
    token: str
    refresh_token: str
    message: str

class RefreshRequest(CamelModel):
    refresh_token: Optional[str] = None

    @field_validator("refresh_token", mode="before")
    @classmethod
    def drop_non_string(cls, value):
        # Anything but a string can never match a stored token
        return value if isinstance(value, str) else None

class TokenResponse(CamelModel):
    access_token: str
    refresh_token: str

from pydantic import BaseModel, Field

from .base import CamelModel
from .user import UserResponse
from ..core.security import UserRole
from typing import Optional


class UserLogin(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


class TokenVerification(CamelModel):
    valid: bool = True
    id: str
    email: str
    role: UserRole
    name: Optional[str] = None

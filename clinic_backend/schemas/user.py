from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel, UpdateModel
from ..core.security import UserRole


class UserCreate(CamelModel):
    id: Optional[str] = None
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)
    role: UserRole
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    date_of_birth: Optional[str] = None
    address: Optional[str] = None
    device_id: Optional[str] = None
    status: str = "active"
    clinic_id: Optional[str] = None


class UserUpdate(UpdateModel):
    email: Optional[str] = Field(None, min_length=3, max_length=255)
    password: Optional[str] = Field(None, min_length=1)
    role: Optional[UserRole] = None
    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    date_of_birth: Optional[str] = None
    address: Optional[str] = None
    device_id: Optional[str] = None
    status: Optional[str] = None
    clinic_id: Optional[str] = None


class UserSummary(CamelModel):
    """Limited projection used for listings."""
    id: str
    email: str
    role: UserRole
    name: str
    phone: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None


class UserResponse(UserSummary):
    date_of_birth: Optional[str] = None
    address: Optional[str] = None
    device_id: Optional[str] = None
    clinic_id: Optional[str] = None

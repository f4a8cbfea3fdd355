from typing import Dict, List, Optional

from pydantic import Field, field_validator

from .base import CamelModel


class ClinicBase(CamelModel):
    name: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    phone: Optional[str] = None
    email: Optional[str] = None
    description: Optional[str] = None
    location_id: Optional[int] = None
    device_id: Optional[str] = None
    admin_id: Optional[str] = None
    registration_date: Optional[str] = None
    status: str = "active"
    facilities: List[str] = Field(default_factory=list)
    operating_hours: Dict[str, str] = Field(default_factory=dict)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("facilities")
    @classmethod
    def unique_facilities(cls, value: List[str]) -> List[str]:
        # Facilities behave as a set; keep first-seen order
        return list(dict.fromkeys(value))


class ClinicCreate(ClinicBase):
    pass


class ClinicResponse(ClinicBase):
    id: int

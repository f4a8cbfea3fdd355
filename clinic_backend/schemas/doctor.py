from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import CamelModel, UpdateModel


class TimeSlot(CamelModel):
    day: str = Field(..., min_length=1)
    times: List[str] = Field(default_factory=list)


class DoctorCreate(CamelModel):
    user_id: str = Field(..., min_length=1)
    clinic_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    specialization: Optional[str] = None
    experience: Optional[str] = None
    qualification: Optional[str] = None
    description: Optional[str] = None
    available_slots: List[TimeSlot] = Field(default_factory=list)
    status: str = "active"


class DoctorUpdate(UpdateModel):
    user_id: Optional[str] = Field(None, min_length=1)
    clinic_id: Optional[str] = Field(None, min_length=1)
    name: Optional[str] = Field(None, min_length=1)
    specialization: Optional[str] = None
    experience: Optional[str] = None
    qualification: Optional[str] = None
    description: Optional[str] = None
    available_slots: Optional[List[TimeSlot]] = None
    status: Optional[str] = None


class DoctorContact(CamelModel):
    id: str
    email: Optional[str] = None
    phone: Optional[str] = None


class DoctorResponse(CamelModel):
    id: int
    user_id: str
    clinic_id: str
    name: str
    specialization: Optional[str] = None
    experience: Optional[str] = None
    qualification: Optional[str] = None
    description: str = ""
    available_slots: List[TimeSlot] = Field(default_factory=list)
    status: str = "active"
    created_at: Optional[datetime] = None
    user: Optional[DoctorContact] = None

from typing import Optional

from pydantic import Field

from .base import CamelModel, UpdateModel


class AppointmentCreate(CamelModel):
    id: Optional[str] = None
    # Patients may omit this; it defaults to the caller
    patient_id: Optional[str] = None
    doctor_id: str = Field(..., min_length=1)
    clinic_id: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1)
    time: str = Field(..., min_length=1)
    status: str = "pending"
    reason: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None


class AppointmentUpdate(UpdateModel):
    doctor_id: Optional[str] = Field(None, min_length=1)
    clinic_id: Optional[str] = Field(None, min_length=1)
    date: Optional[str] = Field(None, min_length=1)
    time: Optional[str] = Field(None, min_length=1)
    status: Optional[str] = Field(None, min_length=1)
    reason: Optional[str] = None
    notes: Optional[str] = None


class AppointmentResponse(CamelModel):
    id: str
    patient_id: str
    doctor_id: str
    clinic_id: str
    date: str
    time: str
    status: str
    reason: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None

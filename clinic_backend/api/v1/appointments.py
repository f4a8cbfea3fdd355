from typing import List, Optional

from fastapi import APIRouter, Depends

from ...core.security import TokenPayload
from ...api.deps import get_appointment_service, get_current_identity
from ...services.appointment_service import AppointmentService
from ...schemas.appointment import AppointmentCreate, AppointmentResponse, AppointmentUpdate
from ...schemas.base import DeleteResponse

router = APIRouter(prefix="/appointments", tags=["Appointments"])

@router.get("", response_model=List[AppointmentResponse])
def list_appointments(
    identity: TokenPayload = Depends(get_current_identity),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Patients see their own, doctors see theirs, admins see all."""
    return service.list_appointments(identity)

@router.post("", response_model=AppointmentResponse)
def create_appointment(
    appointment_data: AppointmentCreate,
    identity: TokenPayload = Depends(get_current_identity),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Book an appointment. Patients can only book for themselves."""
    return service.create_appointment(identity, appointment_data)

@router.get("/{appointment_id}", response_model=AppointmentResponse)
def get_appointment(
    appointment_id: str,
    identity: TokenPayload = Depends(get_current_identity),
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.get_appointment(identity, appointment_id)

@router.patch("/{appointment_id}", response_model=AppointmentResponse)
def update_appointment(
    appointment_id: str,
    appointment_data: Optional[AppointmentUpdate] = None,
    identity: TokenPayload = Depends(get_current_identity),
    service: AppointmentService = Depends(get_appointment_service),
):
    return service.update_appointment(identity, appointment_id, appointment_data or AppointmentUpdate())

@router.delete("/{appointment_id}", response_model=DeleteResponse)
def delete_appointment(
    appointment_id: str,
    identity: TokenPayload = Depends(get_current_identity),
    service: AppointmentService = Depends(get_appointment_service),
):
    service.delete_appointment(identity, appointment_id)
    return DeleteResponse()

from typing import List, Optional

from fastapi import APIRouter, Depends

from ...api.deps import get_admin_identity, get_current_identity, get_doctor_service
from ...services.doctor_service import DoctorService
from ...schemas.base import DeleteResponse
from ...schemas.doctor import DoctorCreate, DoctorResponse, DoctorUpdate

router = APIRouter(prefix="/doctors", tags=["Doctors"])

@router.get("", response_model=List[DoctorResponse],
            dependencies=[Depends(get_current_identity)])
def list_doctors(service: DoctorService = Depends(get_doctor_service)):
    """List doctors with decrypted descriptions and contact details."""
    return service.list_doctors()

@router.get("/{doctor_id}", response_model=DoctorResponse,
            dependencies=[Depends(get_current_identity)])
def get_doctor(doctor_id: int, service: DoctorService = Depends(get_doctor_service)):
    return service.get_doctor(doctor_id)

@router.post("", response_model=DoctorResponse,
             dependencies=[Depends(get_admin_identity)])
def create_doctor(doctor_data: DoctorCreate, service: DoctorService = Depends(get_doctor_service)):
    """Create a doctor (admin only). The description is encrypted at rest."""
    return service.create_doctor(doctor_data)

@router.patch("/{doctor_id}", response_model=DoctorResponse,
              dependencies=[Depends(get_admin_identity)])
def update_doctor(doctor_id: int, doctor_data: Optional[DoctorUpdate] = None,
                  service: DoctorService = Depends(get_doctor_service)):
    return service.update_doctor(doctor_id, doctor_data or DoctorUpdate())

@router.delete("/{doctor_id}", response_model=DeleteResponse,
               dependencies=[Depends(get_admin_identity)])
def delete_doctor(doctor_id: int, service: DoctorService = Depends(get_doctor_service)):
    service.delete_doctor(doctor_id)
    return DeleteResponse()

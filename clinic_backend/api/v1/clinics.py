from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...services.clinic_service import ClinicService
from ...schemas.clinic import ClinicCreate, ClinicResponse

# Public: no authentication on clinic routes
router = APIRouter(prefix="/clinics", tags=["Clinics"])

@router.get("", response_model=List[ClinicResponse])
def list_clinics(db: Session = Depends(get_db)):
    return ClinicService(db).list_clinics()

@router.post("", response_model=ClinicResponse)
def create_clinic(clinic_data: ClinicCreate, db: Session = Depends(get_db)):
    return ClinicService(db).create_clinic(clinic_data)

@router.get("/{clinic_id}", response_model=ClinicResponse)
def get_clinic(clinic_id: int, db: Session = Depends(get_db)):
    return ClinicService(db).get_clinic(clinic_id)

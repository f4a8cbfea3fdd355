import json
from typing import List

from ..models.clinic import Clinic
from ..schemas.clinic import ClinicCreate, ClinicResponse
from .base import BaseService, load_json, utc_timestamp


class ClinicService(BaseService):
    model = Clinic
    entity_name = "Clinic"

    @staticmethod
    def to_response(clinic: Clinic) -> ClinicResponse:
        """Parse the JSON sub-fields stored as text."""
        return ClinicResponse(
            id=clinic.id,
            name=clinic.name,
            address=clinic.address,
            phone=clinic.phone,
            email=clinic.email,
            description=clinic.description,
            location_id=clinic.location_id,
            device_id=clinic.device_id,
            admin_id=clinic.admin_id,
            registration_date=clinic.registration_date,
            status=clinic.status,
            facilities=load_json(clinic.facilities, []),
            operating_hours=load_json(clinic.operating_hours, {}),
            created_at=clinic.created_at,
            updated_at=clinic.updated_at,
        )

    def list_clinics(self) -> List[ClinicResponse]:
        clinics = self.db.query(Clinic).order_by(Clinic.name).all()
        return [self.to_response(clinic) for clinic in clinics]

    def get_clinic(self, clinic_id: int) -> ClinicResponse:
        return self.to_response(self._get_or_404(clinic_id))

    def create_clinic(self, data: ClinicCreate) -> ClinicResponse:
        now = utc_timestamp()
        clinic = Clinic(
            name=data.name,
            address=data.address,
            phone=data.phone,
            email=data.email,
            description=data.description,
            location_id=data.location_id,
            device_id=data.device_id,
            admin_id=data.admin_id,
            registration_date=data.registration_date or now,
            status=data.status or "active",
            facilities=json.dumps(data.facilities),
            operating_hours=json.dumps(data.operating_hours),
            created_at=data.created_at or now,
            updated_at=data.updated_at or now,
        )
        self.db.add(clinic)
        self._commit("Clinic already exists")
        self.db.refresh(clinic)
        return self.to_response(clinic)

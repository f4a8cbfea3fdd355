import json
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.crypto import FieldCipher
from ..models.doctor import Doctor
from ..models.user import User
from ..schemas.doctor import DoctorContact, DoctorCreate, DoctorResponse, DoctorUpdate
from .base import BaseService, load_json

logger = logging.getLogger(__name__)


class DoctorService(BaseService):
    """Doctor records. ``description`` is encrypted at rest."""

    model = Doctor
    entity_name = "Doctor"
    required_fields = ("user_id", "clinic_id", "name", "status")

    def __init__(self, db: Session, cipher: FieldCipher):
        super().__init__(db)
        self.cipher = cipher

    def _contact(self, user_id: str, email: Optional[str], phone: Optional[str]) -> DoctorContact:
        # Contact fields may be stored either plain or encrypted
        return DoctorContact(
            id=user_id,
            email=self.cipher.decrypt_if_encrypted(email) or None,
            phone=self.cipher.decrypt_if_encrypted(phone) or None,
        )

    def to_response(self, doctor: Doctor, email: Optional[str] = None,
                    phone: Optional[str] = None) -> DoctorResponse:
        return DoctorResponse(
            id=doctor.id,
            user_id=doctor.user_id,
            clinic_id=doctor.clinic_id,
            name=doctor.name,
            specialization=doctor.specialization,
            experience=doctor.experience,
            qualification=doctor.qualification,
            description=self.cipher.safe_decrypt(doctor.description),
            available_slots=load_json(doctor.available_slots, []),
            status=doctor.status,
            created_at=doctor.created_at,
            user=self._contact(doctor.user_id, email, phone),
        )

    def _with_contact(self, doctor: Doctor) -> DoctorResponse:
        owner = self.db.query(User.email, User.phone).filter(User.id == doctor.user_id).first()
        if owner is None:
            return self.to_response(doctor)
        return self.to_response(doctor, owner.email, owner.phone)

    def list_doctors(self) -> List[DoctorResponse]:
        rows = self.db.query(Doctor, User.email, User.phone).outerjoin(
            User, Doctor.user_id == User.id
        ).order_by(Doctor.id).all()
        return [self.to_response(doctor, email, phone) for doctor, email, phone in rows]

    def get_doctor(self, doctor_id: int) -> DoctorResponse:
        return self._with_contact(self._get_or_404(doctor_id))

    def create_doctor(self, data: DoctorCreate) -> DoctorResponse:
        doctor = Doctor(
            user_id=data.user_id,
            clinic_id=data.clinic_id,
            name=data.name,
            specialization=data.specialization,
            experience=data.experience,
            qualification=data.qualification,
            description=self.cipher.safe_encrypt(data.description),
            available_slots=json.dumps([slot.model_dump() for slot in data.available_slots]),
            status=data.status or "active",
        )
        self.db.add(doctor)
        self._commit("Doctor already exists")
        self.db.refresh(doctor)

        logger.info(f"Created doctor {doctor.id} for user {doctor.user_id}")
        return self._with_contact(doctor)

    def update_doctor(self, doctor_id: int, data: DoctorUpdate) -> DoctorResponse:
        """Replace supplied fields; description is re-encrypted, slots re-serialized."""
        changes = self._require_changes(data.changes())
        doctor = self._get_or_404(doctor_id)

        if "description" in changes:
            changes["description"] = self.cipher.safe_encrypt(changes["description"])
        if "available_slots" in changes:
            changes["available_slots"] = json.dumps(changes["available_slots"] or [])

        for field, value in changes.items():
            setattr(doctor, field, value)

        self._commit("Doctor already exists")
        self.db.refresh(doctor)
        return self._with_contact(doctor)

    def delete_doctor(self, doctor_id: int) -> None:
        self._delete(doctor_id)

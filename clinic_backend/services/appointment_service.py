import logging
import uuid
from typing import List

from ..core.exceptions import DuplicateKey, ForbiddenOwnership, ValidationError
from ..core.security import TokenPayload, UserRole
from ..models.appointment import Appointment
from ..models.doctor import Doctor
from ..schemas.appointment import AppointmentCreate, AppointmentUpdate
from .base import BaseService, utc_timestamp

logger = logging.getLogger(__name__)


class AppointmentService(BaseService):
    """Appointments, scoped by role and ownership.

    Patients own appointments whose ``patient_id`` is their user id. Doctors
    own appointments whose ``doctor_id`` is the id of any doctor record
    linked to their user; a doctor without such a record owns nothing.
    Admins are not filtered.
    """

    model = Appointment
    entity_name = "Appointment"
    required_fields = ("doctor_id", "clinic_id", "date", "time", "status")

    def _owned_doctor_ids(self, identity: TokenPayload) -> List[str]:
        rows = self.db.query(Doctor.id).filter(Doctor.user_id == identity.id).all()
        return [str(row.id) for row in rows]

    def _check_ownership(self, identity: TokenPayload, appointment: Appointment, action: str) -> None:
        if identity.role == UserRole.ADMIN:
            return
        if identity.role == UserRole.PATIENT:
            if appointment.patient_id != identity.id:
                raise ForbiddenOwnership(f"Cannot {action} another patient's appointment")
            return
        if identity.role == UserRole.DOCTOR:
            if appointment.doctor_id not in self._owned_doctor_ids(identity):
                raise ForbiddenOwnership(f"Cannot {action} another doctor's appointment")
            return
        raise ForbiddenOwnership()

    def list_appointments(self, identity: TokenPayload) -> List[Appointment]:
        query = self.db.query(Appointment)

        if identity.role == UserRole.DOCTOR:
            doctor_ids = self._owned_doctor_ids(identity)
            if not doctor_ids:
                return []
            query = query.filter(Appointment.doctor_id.in_(doctor_ids))
        elif identity.role == UserRole.PATIENT:
            query = query.filter(Appointment.patient_id == identity.id)

        return query.order_by(Appointment.date.desc(), Appointment.time.desc()).all()

    def get_appointment(self, identity: TokenPayload, appointment_id: str) -> Appointment:
        appointment = self._get_or_404(appointment_id)
        self._check_ownership(identity, appointment, "view")
        return appointment

    def create_appointment(self, identity: TokenPayload, data: AppointmentCreate) -> Appointment:
        patient_id = data.patient_id
        if identity.role == UserRole.PATIENT:
            patient_id = patient_id or identity.id
            if patient_id != identity.id:
                raise ForbiddenOwnership("Cannot create appointment for another patient")
        elif not patient_id:
            raise ValidationError("patientId is required")

        appointment_id = data.id or str(uuid.uuid4())
        if self.db.get(Appointment, appointment_id) is not None:
            raise DuplicateKey("Appointment already exists", field="id")

        appointment = Appointment(
            id=appointment_id,
            patient_id=patient_id,
            doctor_id=data.doctor_id,
            clinic_id=data.clinic_id,
            date=data.date,
            time=data.time,
            status=data.status or "pending",
            reason=data.reason,
            notes=data.notes,
            created_at=data.created_at or utc_timestamp(),
        )
        self.db.add(appointment)
        self._commit("Appointment already exists", field="id")
        self.db.refresh(appointment)

        logger.info(f"Created appointment {appointment.id} for patient {appointment.patient_id}")
        return appointment

    def update_appointment(self, identity: TokenPayload, appointment_id: str,
                           data: AppointmentUpdate) -> Appointment:
        changes = self._require_changes(data.changes())
        appointment = self._get_or_404(appointment_id)
        self._check_ownership(identity, appointment, "update")

        for field, value in changes.items():
            setattr(appointment, field, value)

        self.db.commit()
        self.db.refresh(appointment)
        return appointment

    def delete_appointment(self, identity: TokenPayload, appointment_id: str) -> None:
        appointment = self._get_or_404(appointment_id)
        self._check_ownership(identity, appointment, "delete")

        self.db.delete(appointment)
        self.db.commit()
        logger.info(f"Deleted appointment {appointment_id}")

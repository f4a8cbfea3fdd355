from sqlalchemy import Column, String, Text, Index
import enum

from ..core.database import Base

class AppointmentStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        Index("ix_appointments_date_time", "date", "time"),
    )

    id = Column(String(64), primary_key=True, index=True)

    # Weak references: users.id, str(doctors.id), clinics.id
    patient_id = Column(String(64), nullable=False, index=True)
    doctor_id = Column(String(64), nullable=False, index=True)
    clinic_id = Column(String(64), nullable=False)

    # Appointment details
    date = Column(String(20), nullable=False)
    time = Column(String(20), nullable=False)
    # Open set; AppointmentStatus lists the well-known values
    status = Column(String(30), nullable=False, default=AppointmentStatus.PENDING.value)
    reason = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    # Tracking
    created_at = Column(String(40), nullable=True)

    def __repr__(self):
        return f"<Appointment(id={self.id}, patient_id={self.patient_id}, doctor_id={self.doctor_id}, date='{self.date}')>"

from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.sql import func

from ..core.database import Base

class Doctor(Base):
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Weak references, no cascade on delete
    user_id = Column(String(64), nullable=False, index=True)
    clinic_id = Column(String(64), nullable=False)

    # Professional information
    name = Column(String(255), nullable=False)
    specialization = Column(String(100), nullable=True)
    experience = Column(String(100), nullable=True)
    qualification = Column(String(255), nullable=True)
    # AES-GCM token, see core.crypto
    description = Column(Text, nullable=True)

    # Availability, JSON list of {"day": ..., "times": [...]}
    available_slots = Column(Text, nullable=False, default="[]")
    status = Column(String(20), nullable=False, default="active")

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self):
        return f"<Doctor(id={self.id}, name='{self.name}', specialization='{self.specialization}')>"

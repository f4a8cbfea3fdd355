from sqlalchemy import Column, Integer, String, Text

from ..core.database import Base

class Clinic(Base):
    __tablename__ = "clinics"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    address = Column(String(255), nullable=False)
    phone = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)

    # Weak reference to locations.id, no cascade
    location_id = Column(Integer, nullable=True)
    device_id = Column(String(100), nullable=True)
    admin_id = Column(String(64), nullable=True)
    registration_date = Column(String(40), nullable=True)
    status = Column(String(20), nullable=False, default="active")

    # JSON text columns, parsed at the service boundary
    facilities = Column(Text, nullable=False, default="[]")
    operating_hours = Column(Text, nullable=False, default="{}")

    created_at = Column(String(40), nullable=True)
    updated_at = Column(String(40), nullable=True)

    def __repr__(self):
        return f"<Clinic(id={self.id}, name='{self.name}')>"

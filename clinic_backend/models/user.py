from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func

from ..core.database import Base

class User(Base):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True, index=True)
    # Stored lower-cased; uniqueness is case-insensitive
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)
    name = Column(String(255), nullable=False)

    # Contact information
    phone = Column(String(255), nullable=True)
    phone_hash = Column(String(64), unique=True, index=True, nullable=True)
    date_of_birth = Column(String(40), nullable=True)
    address = Column(String(255), nullable=True)
    device_id = Column(String(100), nullable=True)

    status = Column(String(20), nullable=False, default="active")
    clinic_id = Column(String(64), nullable=True)

    # Timestamps
    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"

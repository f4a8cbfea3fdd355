from sqlalchemy import Column, Integer, String, DateTime, Index
from sqlalchemy.sql import func

from ..core.database import Base

class Location(Base):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    state = Column(String(100), nullable=False)
    district = Column(String(100), nullable=True)
    area = Column(String(100), nullable=True)

    created_at = Column(DateTime, server_default=func.now())

    # A missing district or area counts as one value, not as distinct NULLs
    __table_args__ = (
        Index(
            "uq_location_triple",
            state,
            func.coalesce(district, ""),
            func.coalesce(area, ""),
            unique=True,
        ),
    )

    def __repr__(self):
        return f"<Location(id={self.id}, state='{self.state}', district='{self.district}', area='{self.area}')>"

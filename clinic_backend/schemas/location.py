from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel


class LocationCreate(CamelModel):
    state: str = Field(..., min_length=1)
    district: Optional[str] = None
    area: Optional[str] = None


class LocationResponse(LocationCreate):
    id: int
    created_at: Optional[datetime] = None

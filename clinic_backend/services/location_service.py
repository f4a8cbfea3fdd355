from typing import List

from sqlalchemy import func

from ..core.exceptions import DuplicateKey
from ..models.location import Location
from ..schemas.location import LocationCreate
from .base import BaseService


class LocationService(BaseService):
    model = Location
    entity_name = "Location"

    def list_locations(self) -> List[Location]:
        return self.db.query(Location).order_by(
            Location.state, Location.district, Location.area
        ).all()

    def get_location(self, location_id: int) -> Location:
        return self._get_or_404(location_id)

    def create_location(self, data: LocationCreate) -> Location:
        """Create a location; the (state, district, area) triple is unique."""
        self._ensure_triple_available(data)

        location = Location(state=data.state, district=data.district, area=data.area)
        self.db.add(location)
        self._commit("Location already exists")
        self.db.refresh(location)
        return location

    def _ensure_triple_available(self, data: LocationCreate) -> None:
        # A missing district or area matches a stored null or empty string
        existing = self.db.query(Location.id).filter(
            Location.state == data.state,
            func.coalesce(Location.district, "") == (data.district or ""),
            func.coalesce(Location.area, "") == (data.area or ""),
        ).first()
        if existing:
            raise DuplicateKey("Location already exists")

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...services.location_service import LocationService
from ...schemas.location import LocationCreate, LocationResponse

# Public: no authentication on location routes
router = APIRouter(prefix="/locations", tags=["Locations"])

@router.get("", response_model=List[LocationResponse])
def list_locations(db: Session = Depends(get_db)):
    return LocationService(db).list_locations()

@router.post("", response_model=LocationResponse)
def create_location(location_data: LocationCreate, db: Session = Depends(get_db)):
    """Create a location. Duplicate (state, district, area) returns 409."""
    return LocationService(db).create_location(location_data)

@router.get("/{location_id}", response_model=LocationResponse)
def get_location(location_id: int, db: Session = Depends(get_db)):
    return LocationService(db).get_location(location_id)

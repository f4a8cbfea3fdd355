from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...api.deps import get_admin_identity
from ...services.user_service import UserService
from ...schemas.base import DeleteResponse
from ...schemas.user import UserCreate, UserResponse, UserSummary, UserUpdate

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    dependencies=[Depends(get_admin_identity)],
)

@router.get("", response_model=List[UserSummary])
def list_users(db: Session = Depends(get_db)):
    """List all users (admin only), limited fields."""
    return [UserSummary.model_validate(row) for row in UserService(db).list_users()]

@router.post("", response_model=UserResponse)
def create_user(user_data: UserCreate, db: Session = Depends(get_db)):
    """Create a user (admin only)."""
    return UserResponse.model_validate(UserService(db).create_user(user_data))

@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, db: Session = Depends(get_db)):
    return UserResponse.model_validate(UserService(db).get_user(user_id))

@router.patch("/{user_id}", response_model=UserResponse)
def update_user(user_id: str, user_data: Optional[UserUpdate] = None, db: Session = Depends(get_db)):
    """Partially update a user (admin only)."""
    return UserResponse.model_validate(UserService(db).update_user(user_id, user_data or UserUpdate()))

@router.delete("/{user_id}", response_model=DeleteResponse)
def delete_user(user_id: str, db: Session = Depends(get_db)):
    UserService(db).delete_user(user_id)
    return DeleteResponse()

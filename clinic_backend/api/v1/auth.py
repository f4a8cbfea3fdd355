from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...core.security import TokenPayload
from ...api.deps import get_current_identity, rate_limit_check
from ...services.auth_service import AuthService
from ...schemas.auth import LoginResponse, TokenVerification, UserLogin
from ...schemas.user import UserResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])

@router.post("/login", response_model=LoginResponse)
def login(
    login_data: UserLogin,
    db: Session = Depends(get_db),
    _: None = Depends(rate_limit_check)
):
    """Authenticate user and return an access token."""
    auth_service = AuthService(db)
    return auth_service.authenticate_user(login_data)

@router.get("/profile", response_model=UserResponse)
def get_profile(
    identity: TokenPayload = Depends(get_current_identity),
    db: Session = Depends(get_db)
):
    """Get the caller's own record."""
    auth_service = AuthService(db)
    return UserResponse.model_validate(auth_service.get_profile(identity))

@router.post("/verify-token", response_model=TokenVerification)
async def verify_token_endpoint(
    identity: TokenPayload = Depends(get_current_identity)
):
    """Verify if token is valid."""
    return TokenVerification(
        id=identity.id,
        email=identity.email,
        role=identity.role,
        name=identity.name,
    )

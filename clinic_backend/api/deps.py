from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional
import logging

from ..core.crypto import FieldCipher
from ..core.database import get_db, get_redis
from ..core.exceptions import (
    InsufficientPermissions, MissingToken, RateLimitExceeded
)
from ..core.security import (
    security, decode_access_token, UserRole, TokenPayload
)
from ..services.appointment_service import AppointmentService
from ..services.doctor_service import DoctorService

logger = logging.getLogger(__name__)

async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> TokenPayload:
    """Resolve the caller's identity from the Authorization bearer token."""
    if credentials is None or not credentials.credentials:
        raise MissingToken()

    return decode_access_token(credentials.credentials)

# Role-based access control dependencies
def require_roles(*allowed_roles: UserRole):
    """Create a dependency that requires one of the given roles."""
    async def role_checker(
        identity: TokenPayload = Depends(get_current_identity)
    ) -> TokenPayload:
        if identity.role not in allowed_roles:
            logger.info(f"User {identity.id} with role {identity.role.value} denied")
            raise InsufficientPermissions()
        return identity

    return role_checker

# Specific role dependencies
async def get_admin_identity(
    identity: TokenPayload = Depends(require_roles(UserRole.ADMIN))
) -> TokenPayload:
    """Require admin role."""
    return identity

def get_field_cipher(request: Request) -> FieldCipher:
    """Field cipher created at startup."""
    return request.app.state.cipher

def get_doctor_service(
    db: Session = Depends(get_db),
    cipher: FieldCipher = Depends(get_field_cipher),
) -> DoctorService:
    return DoctorService(db, cipher)

def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    return AppointmentService(db)

# Rate limiting dependency
def rate_limit_check(
    request: Request,
    redis_client = Depends(get_redis)
) -> None:
    """Basic per-IP rate limiting for the login endpoint."""
    settings = request.app.state.settings
    if not settings.RATE_LIMIT_ENABLED:
        return

    client_ip = request.client.host if request.client else "unknown"
    key = f"rate_limit:login:{client_ip}"

    current_requests = redis_client.get(key)
    if current_requests is None:
        redis_client.setex(key, settings.LOGIN_RATE_LIMIT_WINDOW_SECONDS, 1)
    else:
        if int(current_requests) >= settings.LOGIN_RATE_LIMIT:
            logger.warning(f"Login rate limit exceeded for {client_ip}")
            raise RateLimitExceeded()
        redis_client.incr(key)

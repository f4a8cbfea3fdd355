import logging
import uuid
from typing import Optional

from sqlalchemy import func

from ..core.crypto import hash_value
from ..core.exceptions import DuplicateKey
from ..core.security import get_password_hash
from ..models.user import User
from ..schemas.user import UserCreate, UserUpdate
from .base import BaseService

logger = logging.getLogger(__name__)

# Explicit projection for listings; password and phone_hash are never selected
SUMMARY_COLUMNS = (
    User.id, User.email, User.role, User.name, User.phone, User.status, User.created_at,
)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_phone(phone: Optional[str]) -> Optional[str]:
    """Blank phone numbers are stored as null so they never collide."""
    if phone is None or not phone.strip():
        return None
    return phone


class UserService(BaseService):
    model = User
    entity_name = "User"
    required_fields = ("email", "password", "role", "name", "status")
    conflicts = {
        "phone_hash": ("Phone number already exists", "phone"),
        "email": ("Email already exists", "email"),
        "id": ("User id already exists", "id"),
    }

    def list_users(self):
        """Return the limited-field projection of every user, ordered by name."""
        return self.db.query(*SUMMARY_COLUMNS).order_by(User.name).all()

    def get_user(self, user_id: str) -> User:
        return self._get_or_404(user_id)

    def create_user(self, data: UserCreate) -> User:
        """Create a user; email is unique case-insensitively, phone by hash."""
        email = normalize_email(data.email)
        self._ensure_email_available(email)

        phone = normalize_phone(data.phone)
        phone_hash = hash_value(phone) if phone else None
        if phone_hash:
            self._ensure_phone_available(phone_hash)

        user_id = data.id or str(uuid.uuid4())
        if self.db.get(User, user_id) is not None:
            raise DuplicateKey("User id already exists", field="id")

        user = User(
            id=user_id,
            email=email,
            password=get_password_hash(data.password),
            role=data.role.value,
            name=data.name,
            phone=phone,
            phone_hash=phone_hash,
            date_of_birth=data.date_of_birth,
            address=data.address,
            device_id=data.device_id,
            status=data.status or "active",
            clinic_id=data.clinic_id,
        )
        self.db.add(user)
        self._commit("Email already exists", field="email", conflicts=self.conflicts)
        self.db.refresh(user)

        logger.info(f"Created user {user.id} with role {user.role}")
        return user

    def update_user(self, user_id: str, data: UserUpdate) -> User:
        """Replace only the supplied fields; a new password is re-hashed."""
        changes = self._require_changes(data.changes())
        user = self._get_or_404(user_id)

        if "password" in changes:
            changes["password"] = get_password_hash(changes["password"])
        if "email" in changes:
            changes["email"] = normalize_email(changes["email"])
            self._ensure_email_available(changes["email"], exclude_id=user.id)
        if "phone" in changes:
            changes["phone"] = normalize_phone(changes["phone"])
            changes["phone_hash"] = hash_value(changes["phone"]) if changes["phone"] else None
            if changes["phone_hash"]:
                self._ensure_phone_available(changes["phone_hash"], exclude_id=user.id)
        if "role" in changes:
            changes["role"] = changes["role"].value

        for field, value in changes.items():
            setattr(user, field, value)

        self._commit("Email already exists", field="email", conflicts=self.conflicts)
        self.db.refresh(user)
        return user

    def delete_user(self, user_id: str) -> None:
        """Hard delete. Doctor records and appointments are left in place."""
        self._delete(user_id)

    def _ensure_email_available(self, email: str, exclude_id: Optional[str] = None) -> None:
        query = self.db.query(User.id).filter(func.lower(User.email) == email)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        if query.first():
            logger.info("Rejected duplicate email")
            raise DuplicateKey("Email already exists", field="email")

    def _ensure_phone_available(self, phone_hash: str, exclude_id: Optional[str] = None) -> None:
        query = self.db.query(User.id).filter(User.phone_hash == phone_hash)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        if query.first():
            logger.info("Rejected duplicate phone number")
            raise DuplicateKey("Phone number already exists", field="phone")

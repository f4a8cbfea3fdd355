import logging

from sqlalchemy.orm import Session

from ..core.exceptions import InvalidCredentials, NotFound
from ..core.security import TokenPayload, create_user_token, verify_password
from ..models.user import User
from ..schemas.auth import LoginResponse, UserLogin
from ..schemas.user import UserResponse

logger = logging.getLogger(__name__)

class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def authenticate_user(self, login_data: UserLogin) -> LoginResponse:
        """Authenticate user and return a signed token.

        Unknown email, wrong password and inactive accounts all produce the
        same 401 so callers cannot probe which emails exist.
        """
        user = self.db.query(User).filter(
            User.email == login_data.email.strip().lower(),
            User.status == "active",
        ).first()

        if not user or not verify_password(login_data.password, user.password):
            logger.info(f"Failed login attempt for {login_data.email}")
            raise InvalidCredentials()

        token = create_user_token(user)
        logger.info(f"User {user.id} logged in")

        return LoginResponse(
            token=token,
            user=UserResponse.model_validate(user),
        )

    def get_profile(self, identity: TokenPayload) -> User:
        """Return the caller's own record."""
        user = self.db.get(User, identity.id)
        if user is None:
            raise NotFound("User not found")
        return user

"""Login for back-office users."""

from dataclasses import dataclass

import structlog
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select

from storefront.models.enums import UserRole
from storefront.models.user import User
from storefront.services.auth.exceptions import InvalidCredentials
from storefront.services.auth.passwords import verify_password

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """Identity stored in the session cookies after a successful login."""

    id: str
    name: str
    email: str
    role: str


class AuthService:
    """Service for checking back-office credentials."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def authenticate(self, email: str, password: str) -> SessionUser:
        """Return the user for valid credentials.

        Raises:
            InvalidCredentials: for an unknown email and for a wrong password alike
        """
        statement = select(User).options(selectinload(User.role)).where(User.email == email)  # type: ignore[arg-type]
        result = await self.session.execute(statement)
        user = result.scalars().first()

        if user is None or not verify_password(password, user.password):
            logger.info("Login rejected")
            raise InvalidCredentials("Invalid email or password")

        role = user.role.name if user.role else UserRole.USER.value
        logger.info("Login succeeded", user_id=user.id, role=role)
        return SessionUser(id=user.id, name=user.name, email=user.email, role=role)

"""
User lookups and account creation.
"""

from typing import Optional

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from kindred.core.security import get_password_hash
from kindred.models.user import User, UserPreference, UserRole

PASSWORD_TOKEN = "password-token"
PASSWORD_TOKEN_EXPIRE = "password-token-expire"


class UserService:
    """Find and create users"""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _select(self):
        return select(User).options(selectinload(User.preferences))

    async def find(self, user_id: str) -> Optional[User]:
        result = await self.db.execute(self._select().where(User.id == user_id))
        return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive match on the email address; blank never matches"""
        email = (email or "").strip()
        if not email:
            return None
        result = await self.db.execute(
            self._select().where(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def find_by_user_name(self, user_name: str) -> Optional[User]:
        if not user_name:
            return None
        result = await self.db.execute(self._select().where(User.user_name == user_name))
        return result.scalar_one_or_none()

    async def find_by_identifier(self, identifier: str) -> Optional[User]:
        """User name or email address, as typed on the login form"""
        identifier = (identifier or "").strip()
        if not identifier:
            return None
        result = await self.db.execute(
            self._select().where(
                or_(
                    User.user_name == identifier,
                    func.lower(User.email) == identifier.lower(),
                )
            )
        )
        return result.scalars().first()

    async def find_by_password_token(self, token: str) -> Optional[User]:
        """The user whose current password reset link carries this token"""
        if not token:
            return None
        result = await self.db.execute(
            self._select()
            .join(UserPreference, UserPreference.user_id == User.id)
            .where(
                UserPreference.setting_name == PASSWORD_TOKEN,
                UserPreference.setting_value == token,
            )
        )
        return result.scalars().first()

    async def create(
        self,
        user_name: str,
        real_name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.MEMBER,
    ) -> User:
        user = User(
            user_name=user_name,
            real_name=real_name,
            email=email,
            hashed_password=get_password_hash(password),
            role=role,
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        return user

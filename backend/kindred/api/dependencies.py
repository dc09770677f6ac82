from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from kindred.core.database import get_db
from kindred.core.exceptions import AuthorizationError
from kindred.core.logging_config import set_user_id
from kindred.core.security import decode_token
from kindred.models.user import User
from kindred.services.log_service import LogService
from kindred.services.user_service import UserService

security = HTTPBearer()


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


def get_log_service(request: Request, db: AsyncSession = Depends(get_db)) -> LogService:
    return LogService(db, request, user_id=getattr(request.state, "user_id", None))


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
    users: UserService = Depends(get_user_service),
) -> User:
    """Authenticated user from the bearer token"""
    payload = decode_token(credentials.credentials)

    if payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type"
        )

    user_id = payload.get("sub")
    try:
        uuid.UUID(user_id or "")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload"
        )

    user = await users.find(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive"
        )

    request.state.user_id = user.id
    set_user_id(user.id)
    return user


async def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise AuthorizationError("Admin access required")
    return current_user

from datetime import datetime

from fastapi import APIRouter, Depends, Request

from kindred.api.dependencies import get_current_user, get_log_service, get_user_service
from kindred.api.views import view
from kindred.core.config import settings
from kindred.core.exceptions import AuthenticationError
from kindred.core.i18n import I18N
from kindred.core.logging_config import logger, set_user_id
from kindred.core.rate_limiter import login_rate_limit
from kindred.core.security import create_access_token, verify_password
from kindred.models.user import User
from kindred.schemas.auth import Token, UserLogin, UserResponse
from kindred.schemas.pages import PageResponse
from kindred.services.log_service import LogService
from kindred.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["Authentication"])


async def refuse_login(log: LogService, name: str, reason: str, message: str):
    """Record a failed sign-in and reject it"""
    await log.add_authentication_log(f"Login failed ->{name}<- {reason}")
    await log.db.commit()
    logger.log_auth_event("login", False, name, reason)
    raise AuthenticationError(message)


@router.get("/login", name="login", response_model=PageResponse)
async def login_page(request: Request):
    return view(PageResponse, request, I18N.translate("Sign in"))


@router.post("/login", name="login-action", response_model=Token)
@login_rate_limit()
async def login(
    request: Request,
    credentials: UserLogin,
    users: UserService = Depends(get_user_service),
    log: LogService = Depends(get_log_service),
):
    user = await users.find_by_identifier(credentials.identifier)

    if user is None or not verify_password(credentials.password, user.hashed_password):
        await refuse_login(
            log, credentials.identifier, "bad credentials",
            I18N.translate("The user name or password is incorrect."),
        )

    if not user.verified:
        await refuse_login(
            log, user.user_name, "not verified",
            I18N.translate("This account has not been verified. Please check your email for a verification message."),
        )

    if not user.approved or not user.is_active:
        await refuse_login(
            log, user.user_name, "not approved",
            I18N.translate("This account has not been approved. Please wait for an administrator to approve it."),
        )

    user.last_login = datetime.utcnow()
    set_user_id(user.id)
    log.user_id = user.id
    await log.add_authentication_log(f"Login: {user.user_name}/{user.real_name}")
    await users.db.commit()
    logger.log_auth_event("login", True, user.user_name)

    access_token = create_access_token({"sub": user.id, "role": user.role.value})
    return Token(access_token=access_token, expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60)


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    return current_user

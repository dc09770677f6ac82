"""
Forgotten passwords.

A user asks for a reset link by email address. The link carries a random
token, stored with its expiry time in the user's preferences, and lets them
choose a new password within the next hour.
"""

from html import escape

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse

from kindred.api.dependencies import get_log_service, get_user_service
from kindred.api.views import absolute_route, redirect, route, view
from kindred.core.config import settings
from kindred.core.exceptions import InvalidPasswordTokenError
from kindred.core.flash import FlashMessages
from kindred.core.i18n import I18N
from kindred.core.rate_limiter import password_request_rate_limit
from kindred.core.security import (
    generate_password_token,
    get_password_hash,
    password_token_expiry,
    utc_timestamp,
)
from kindred.models.user import User
from kindred.schemas.pages import PasswordRequestPage, PasswordResetPage
from kindred.services.log_service import LogService
from kindred.services.mail_service import (
    MailService,
    SiteUser,
    get_mail_service,
    password_request_html,
    password_request_text,
)
from kindred.services.user_service import PASSWORD_TOKEN, PASSWORD_TOKEN_EXPIRE, UserService

router = APIRouter(tags=["Password"])


async def user_for_token(users: UserService, token: str) -> User:
    """The user a reset link belongs to, if the link is still valid"""
    user = await users.find_by_password_token(token)
    if user is None:
        raise InvalidPasswordTokenError()

    try:
        expires = int(user.get_preference(PASSWORD_TOKEN_EXPIRE, "0"))
    except ValueError:
        expires = 0

    if expires < utc_timestamp():
        raise InvalidPasswordTokenError()

    return user


@router.get("/password-request", name="password-request", response_model=PasswordRequestPage)
async def password_request_page(request: Request):
    """Form to request a password reset link"""
    return view(PasswordRequestPage, request, I18N.translate("Request a new password"))


@router.post("/password-request", name="password-request-action", response_class=RedirectResponse)
@password_request_rate_limit()
async def password_request_action(
    request: Request,
    email: str = Form(""),
    users: UserService = Depends(get_user_service),
    mail: MailService = Depends(get_mail_service),
    log: LogService = Depends(get_log_service),
):
    """Email a password reset link to the owner of an account"""
    user = await users.find_by_email(email)

    if user is not None:
        token = generate_password_token(settings.PASSWORD_TOKEN_LENGTH)
        expire = password_token_expiry()
        url = absolute_route(request, "password-reset", token=token)

        user.set_preference(PASSWORD_TOKEN, token)
        user.set_preference(PASSWORD_TOKEN_EXPIRE, expire)
        await users.db.commit()

        sent = await mail.send(
            SiteUser(),
            user,
            SiteUser(),
            I18N.translate("Request a new password"),
            password_request_text(user, url),
            password_request_html(user, url),
        )
        if not sent:
            await log.add_error_log(f"Unable to send a password reset link to user: {user.user_name}")

        await log.add_authentication_log(f"Password request for user: {user.user_name}")

        message1 = I18N.translate("A password reset link has been sent to “%s”.", escape(email))
        message2 = I18N.translate("This link is valid for one hour.")
        FlashMessages.add_message(request, message1 + "<br>" + message2, "success")
    else:
        message = I18N.translate("There is no user account with the email “%s”.", escape(email))
        FlashMessages.add_message(request, message, "danger")

    return redirect(route(request, "password-request"))


@router.get("/password-reset/{token}", name="password-reset", response_model=PasswordResetPage)
async def password_reset_page(
    request: Request,
    token: str,
    users: UserService = Depends(get_user_service),
):
    """Form to choose a new password, reached from the emailed link"""
    try:
        user = await user_for_token(users, token)
    except InvalidPasswordTokenError as e:
        FlashMessages.add_message(request, I18N.translate(e.message), "danger")
        return redirect(route(request, "password-request"))

    return view(
        PasswordResetPage,
        request,
        I18N.translate("Set a new password"),
        token=token,
        user_name=user.user_name,
    )


@router.post("/password-reset/{token}", name="password-reset-action", response_class=RedirectResponse)
async def password_reset_action(
    request: Request,
    token: str,
    password: str = Form(""),
    users: UserService = Depends(get_user_service),
    log: LogService = Depends(get_log_service),
):
    try:
        user = await user_for_token(users, token)
    except InvalidPasswordTokenError as e:
        FlashMessages.add_message(request, I18N.translate(e.message), "danger")
        return redirect(route(request, "password-request"))

    if len(password) < settings.MIN_PASSWORD_LENGTH:
        FlashMessages.add_message(
            request,
            I18N.translate("Passwords must contain at least %s characters.", settings.MIN_PASSWORD_LENGTH),
            "danger",
        )
        return redirect(route(request, "password-reset", token=token))

    user.hashed_password = get_password_hash(password)
    user.delete_preference(PASSWORD_TOKEN)
    user.delete_preference(PASSWORD_TOKEN_EXPIRE)
    await users.db.commit()

    await log.add_authentication_log(f"Password reset for user: {user.user_name}")

    FlashMessages.add_message(request, I18N.translate("The password has been changed."), "success")
    return redirect(route(request, "login"))

"""
Helpers shared by page endpoints: view models and route URLs.
"""

from typing import Type, TypeVar

from fastapi.responses import RedirectResponse
from starlette.requests import Request

from kindred.core.config import settings
from kindred.core.flash import FlashMessages
from kindred.core.i18n import I18N
from kindred.schemas.pages import PageResponse

PageT = TypeVar("PageT", bound=PageResponse)


def view(page_class: Type[PageT], request: Request, title: str, layout: str = "default", **fields) -> PageT:
    """Build a page view model, consuming the pending flash messages"""
    return page_class(
        title=title,
        layout=layout,
        language=I18N.language(),
        direction=I18N.direction(),
        messages=FlashMessages.get_messages(request),
        **fields,
    )


def route(request: Request, name: str, **params) -> str:
    """Path of a named route"""
    return str(request.app.url_path_for(name, **params))


def absolute_route(request: Request, name: str, **params) -> str:
    """Absolute URL of a named route, rooted at SITE_URL rather than the Host header"""
    return settings.SITE_URL.rstrip("/") + route(request, name, **params)


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=302)

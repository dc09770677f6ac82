"""View models returned by page endpoints in place of rendered templates"""
from pydantic import BaseModel
from typing import List, Optional


class FlashMessage(BaseModel):
    text: str
    status: str


class PageResponse(BaseModel):
    title: str
    layout: str = "default"
    language: str
    direction: str
    messages: List[FlashMessage] = []


class PasswordRequestPage(PageResponse):
    pass


class PasswordResetPage(PageResponse):
    token: str
    user_name: str


class MapProviderOption(BaseModel):
    name: str
    label: str
    requires_api_key: bool
    has_api_key: bool


class MapProviderPage(PageResponse):
    provider: str
    providers: List[MapProviderOption]
    geonames: Optional[str] = None

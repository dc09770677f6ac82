from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from kindred.api.dependencies import get_current_admin, get_log_service
from kindred.api.views import redirect, route, view
from kindred.core.database import get_db
from kindred.core.exceptions import ValidationError
from kindred.core.flash import FlashMessages
from kindred.core.i18n import I18N
from kindred.models.user import User
from kindred.schemas.pages import MapProviderOption, MapProviderPage
from kindred.services.log_service import LogService
from kindred.services.map_provider_service import MapProviderService

router = APIRouter(prefix="/admin", tags=["Admin"])

LAYOUT = "administration"


def get_map_provider_service(db: AsyncSession = Depends(get_db)) -> MapProviderService:
    return MapProviderService(db)


@router.get("/map-provider", name="map-provider", response_model=MapProviderPage)
async def provider_details(
    request: Request,
    admin: User = Depends(get_current_admin),
    maps: MapProviderService = Depends(get_map_provider_service),
):
    """Which map provider is used, and the keys it needs"""
    api_keys = await maps.api_keys()

    return view(
        MapProviderPage,
        request,
        I18N.translate("Map provider"),
        layout=LAYOUT,
        provider=await maps.current_provider(),
        providers=[
            MapProviderOption(
                name=provider.name,
                label=provider.label,
                requires_api_key=provider.requires_api_key,
                has_api_key=provider.name in api_keys,
            )
            for provider in maps.providers()
        ],
        geonames=await maps.geonames_user() or None,
    )


@router.post("/map-provider", name="map-provider-action", response_class=RedirectResponse)
async def provider_details_action(
    request: Request,
    provider: str = Form(""),
    api_key: str = Form(""),
    geonames: Optional[str] = Form(None),
    admin: User = Depends(get_current_admin),
    maps: MapProviderService = Depends(get_map_provider_service),
    log: LogService = Depends(get_log_service),
):
    try:
        map_provider = await maps.save(provider, api_key, geonames)
    except ValidationError as e:
        FlashMessages.add_message(request, e.message, "danger")
    else:
        await log.add_configuration_log(f"Map provider set to {map_provider.name}")
        FlashMessages.add_message(
            request, I18N.translate("The map provider preferences have been updated."), "success"
        )

    return redirect(route(request, "map-provider"))

"""
Map provider settings.

Maps of places are drawn with tiles from one of several providers. Some of
them need an API key. The choice is stored in site settings:

    map-provider              provider name
    map-api-key-<provider>    API key for that provider
    geonames                  GeoNames user name for place lookups
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kindred.core.exceptions import ValidationError
from kindred.core.i18n import I18N
from kindred.models.site_setting import SiteSetting

MAP_PROVIDER = "map-provider"
MAP_API_KEY_PREFIX = "map-api-key-"
GEONAMES = "geonames"


@dataclass(frozen=True)
class MapProvider:
    name: str
    label: str
    requires_api_key: bool = False


MAP_PROVIDERS: Dict[str, MapProvider] = {
    provider.name: provider
    for provider in (
        MapProvider("openstreetmap", "OpenStreetMap"),
        MapProvider("esri", "Esri"),
        MapProvider("mapbox", "Mapbox", requires_api_key=True),
        MapProvider("here", "HERE", requires_api_key=True),
        MapProvider("google", "Google Maps", requires_api_key=True),
    )
}

DEFAULT_MAP_PROVIDER = "openstreetmap"


class MapProviderService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get(self, setting_name: str, default: str = "") -> str:
        setting = await self.db.get(SiteSetting, setting_name)
        return setting.setting_value if setting is not None else default

    async def _set(self, setting_name: str, setting_value: str) -> None:
        setting = await self.db.get(SiteSetting, setting_name)
        if setting is None:
            self.db.add(SiteSetting(setting_name=setting_name, setting_value=setting_value))
        else:
            setting.setting_value = setting_value

    def providers(self) -> List[MapProvider]:
        return list(MAP_PROVIDERS.values())

    async def current_provider(self) -> str:
        provider = await self._get(MAP_PROVIDER, DEFAULT_MAP_PROVIDER)
        return provider if provider in MAP_PROVIDERS else DEFAULT_MAP_PROVIDER

    async def api_key(self, provider: str) -> str:
        return await self._get(MAP_API_KEY_PREFIX + provider)

    async def api_keys(self) -> Dict[str, str]:
        result = await self.db.execute(
            select(SiteSetting).where(SiteSetting.setting_name.startswith(MAP_API_KEY_PREFIX))
        )
        return {
            setting.setting_name[len(MAP_API_KEY_PREFIX):]: setting.setting_value
            for setting in result.scalars()
            if setting.setting_value
        }

    async def geonames_user(self) -> str:
        return await self._get(GEONAMES)

    async def save(self, provider: str, api_key: Optional[str] = None, geonames: Optional[str] = None) -> MapProvider:
        """
        Store the chosen provider.

        A blank api_key keeps the key already stored for that provider.
        Raises ValidationError for an unknown provider, or one that needs
        a key when none is stored.
        """
        provider = (provider or "").strip().lower()
        map_provider = MAP_PROVIDERS.get(provider)
        if map_provider is None:
            raise ValidationError(
                I18N.translate("The map provider “%s” is not available.", provider),
                field="provider",
            )

        api_key = (api_key or "").strip()
        if not api_key:
            api_key = await self.api_key(provider)

        if map_provider.requires_api_key and not api_key:
            raise ValidationError(
                I18N.translate("An API key is required to use %s.", map_provider.label),
                field="api_key",
            )

        await self._set(MAP_PROVIDER, provider)
        if api_key:
            await self._set(MAP_API_KEY_PREFIX + provider, api_key)
        if geonames is not None:
            await self._set(GEONAMES, geonames.strip())

        await self.db.commit()
        return map_provider

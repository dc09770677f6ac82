"""
Unit Tests for the map provider settings
"""
import pytest

from kindred.core.exceptions import ValidationError
from kindred.models.site_setting import SiteSetting
from kindred.services.map_provider_service import (
    DEFAULT_MAP_PROVIDER,
    GEONAMES,
    MAP_API_KEY_PREFIX,
    MAP_PROVIDER,
    MapProviderService,
)


@pytest.fixture
def maps(db_session):
    return MapProviderService(db_session)


class TestMapProviderDefaults:

    @pytest.mark.asyncio
    async def test_default_provider(self, maps):
        assert await maps.current_provider() == DEFAULT_MAP_PROVIDER

    @pytest.mark.asyncio
    async def test_stored_provider_no_longer_offered(self, db_session, maps):
        db_session.add(SiteSetting(setting_name=MAP_PROVIDER, setting_value="retired"))
        await db_session.commit()

        assert await maps.current_provider() == DEFAULT_MAP_PROVIDER

    def test_providers(self, maps):
        names = [provider.name for provider in maps.providers()]

        assert DEFAULT_MAP_PROVIDER in names
        assert {"mapbox", "here", "google"} <= {p.name for p in maps.providers() if p.requires_api_key}

    @pytest.mark.asyncio
    async def test_no_keys(self, maps):
        assert await maps.api_keys() == {}
        assert await maps.geonames_user() == ""


class TestSaveMapProvider:

    @pytest.mark.asyncio
    async def test_save_keyless_provider(self, maps):
        provider = await maps.save("esri")

        assert provider.name == "esri"
        assert await maps.current_provider() == "esri"

    @pytest.mark.asyncio
    async def test_provider_name_normalised(self, maps):
        await maps.save("  OpenStreetMap ")

        assert await maps.current_provider() == "openstreetmap"

    @pytest.mark.asyncio
    async def test_unknown_provider(self, maps):
        with pytest.raises(ValidationError) as exc_info:
            await maps.save("atlas")

        assert exc_info.value.details == {"field": "provider"}
        assert "atlas" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_key_required(self, maps):
        with pytest.raises(ValidationError) as exc_info:
            await maps.save("mapbox")

        assert exc_info.value.details == {"field": "api_key"}
        assert await maps.current_provider() == DEFAULT_MAP_PROVIDER

    @pytest.mark.asyncio
    async def test_save_with_key(self, maps):
        await maps.save("mapbox", api_key=" pk.123 ")

        assert await maps.current_provider() == "mapbox"
        assert await maps.api_key("mapbox") == "pk.123"
        assert await maps.api_keys() == {"mapbox": "pk.123"}

    @pytest.mark.asyncio
    async def test_blank_key_keeps_stored_key(self, maps):
        await maps.save("mapbox", api_key="pk.123")
        await maps.save("esri")

        await maps.save("mapbox", api_key="")

        assert await maps.current_provider() == "mapbox"
        assert await maps.api_key("mapbox") == "pk.123"

    @pytest.mark.asyncio
    async def test_new_key_replaces_stored_key(self, db_session, maps):
        await maps.save("google", api_key="old")
        await maps.save("google", api_key="new")

        setting = await db_session.get(SiteSetting, MAP_API_KEY_PREFIX + "google")
        assert setting.setting_value == "new"

    @pytest.mark.asyncio
    async def test_geonames(self, maps):
        await maps.save("esri", geonames=" kindred ")

        assert await maps.geonames_user() == "kindred"

    @pytest.mark.asyncio
    async def test_geonames_untouched_when_absent(self, db_session, maps):
        await maps.save("esri", geonames="kindred")
        await maps.save("openstreetmap")

        setting = await db_session.get(SiteSetting, GEONAMES)
        assert setting.setting_value == "kindred"

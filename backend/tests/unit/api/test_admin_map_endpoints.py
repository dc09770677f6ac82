"""
Unit Tests for the map provider administration page
"""
import pytest
from httpx import AsyncClient
from sqlalchemy import select

from kindred.models.log import LogEntry, LogType

MAP_URL = '/api/v1/admin/map-provider'


class TestMapProviderAccess:

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client: AsyncClient):
        response = await client.get(MAP_URL)

        # HTTPBearer answers 403 or 401 depending on the FastAPI release
        assert response.status_code in (401, 403)

    @pytest.mark.asyncio
    async def test_requires_admin(self, client: AsyncClient, auth_headers):
        response = await client.get(MAP_URL, headers=auth_headers)

        assert response.status_code == 403
        error = response.json()['error']
        assert error['code'] == 'NOT_AUTHORIZED'
        assert error['message'] == 'Admin access required'

    @pytest.mark.asyncio
    async def test_post_requires_admin(self, client: AsyncClient, auth_headers):
        response = await client.post(MAP_URL, data={'provider': 'esri'}, headers=auth_headers)

        assert response.status_code == 403
        assert response.json()['error']['code'] == 'NOT_AUTHORIZED'

    @pytest.mark.asyncio
    async def test_invalid_token(self, client: AsyncClient):
        response = await client.get(MAP_URL, headers={'Authorization': 'Bearer not-a-token'})

        assert response.status_code == 401


class TestMapProviderPage:

    @pytest.mark.asyncio
    async def test_defaults(self, client: AsyncClient, admin_auth_headers):
        response = await client.get(MAP_URL, headers=admin_auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data['title'] == 'Map provider'
        assert data['layout'] == 'administration'
        assert data['provider'] == 'openstreetmap'
        assert data['geonames'] is None

        providers = {option['name']: option for option in data['providers']}
        assert providers['openstreetmap']['requires_api_key'] is False
        assert providers['mapbox']['requires_api_key'] is True
        assert not any(option['has_api_key'] for option in data['providers'])


class TestMapProviderAction:

    @pytest.mark.asyncio
    async def test_save(self, client: AsyncClient, db_session, admin_auth_headers, admin_user):
        response = await client.post(
            MAP_URL,
            data={'provider': 'mapbox', 'api_key': 'pk.123', 'geonames': 'kindred'},
            headers=admin_auth_headers,
        )

        assert response.status_code == 302
        assert response.headers['location'] == MAP_URL

        data = (await client.get(MAP_URL, headers=admin_auth_headers)).json()
        assert data['provider'] == 'mapbox'
        assert data['geonames'] == 'kindred'
        assert {o['name'] for o in data['providers'] if o['has_api_key']} == {'mapbox'}
        assert data['messages'] == [
            {'text': 'The map provider preferences have been updated.', 'status': 'success'}
        ]

        result = await db_session.execute(select(LogEntry).where(LogEntry.log_type == LogType.CONFIG))
        entries = result.scalars().all()
        assert [entry.log_message for entry in entries] == ['Map provider set to mapbox']
        assert entries[0].user_id == admin_user.id

    @pytest.mark.asyncio
    async def test_missing_api_key(self, client: AsyncClient, admin_auth_headers):
        response = await client.post(MAP_URL, data={'provider': 'google'}, headers=admin_auth_headers)

        assert response.status_code == 302

        data = (await client.get(MAP_URL, headers=admin_auth_headers)).json()
        assert data['provider'] == 'openstreetmap'
        assert data['messages'] == [
            {'text': 'An API key is required to use Google Maps.', 'status': 'danger'}
        ]

    @pytest.mark.asyncio
    async def test_unknown_provider(self, client: AsyncClient, admin_auth_headers):
        await client.post(MAP_URL, data={'provider': 'atlas'}, headers=admin_auth_headers)

        data = (await client.get(MAP_URL, headers=admin_auth_headers)).json()
        assert data['messages'][0]['status'] == 'danger'
        assert 'atlas' in data['messages'][0]['text']

    @pytest.mark.asyncio
    async def test_stored_key_reused(self, client: AsyncClient, admin_auth_headers):
        await client.post(MAP_URL, data={'provider': 'here', 'api_key': 'here-key'}, headers=admin_auth_headers)
        await client.post(MAP_URL, data={'provider': 'esri'}, headers=admin_auth_headers)

        await client.post(MAP_URL, data={'provider': 'here', 'api_key': ''}, headers=admin_auth_headers)

        data = (await client.get(MAP_URL, headers=admin_auth_headers)).json()
        assert data['provider'] == 'here'
        assert data['messages'][-1]['status'] == 'success'

"""
Unit Tests for Profile API Endpoints
"""
import pytest
from httpx import AsyncClient

from conftest import create_user, headers_for


class TestProfile:
    """Own profile read and partial update"""

    @pytest.mark.asyncio
    async def test_get_profile(self, client: AsyncClient, auth_headers, test_user):
        response = await client.get('/api/v1/profiles/me', headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data['id'] == str(test_user.id)
        assert data['currency'] == 'EUR'
        assert data['pinned_module'] == 'A'
        assert data['onboarding_completed'] is False

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, client: AsyncClient, auth_headers):
        before = (await client.get('/api/v1/profiles/me', headers=auth_headers)).json()

        response = await client.patch('/api/v1/profiles/me', headers=auth_headers, json={
            'job_title': 'Lead Developer',
            'height': 180,
        })

        assert response.status_code == 200
        data = response.json()
        assert data['job_title'] == 'Lead Developer'
        assert data['height'] == 180
        assert data['first_name'] == before['first_name']

    @pytest.mark.asyncio
    async def test_username_conflict(self, client: AsyncClient, db_session, auth_headers):
        await create_user(db_session, username='taken_name')

        response = await client.patch('/api/v1/profiles/me', headers=auth_headers, json={
            'username': 'TAKEN_NAME',
        })

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'USERNAME_TAKEN'

    @pytest.mark.asyncio
    async def test_invalid_values(self, client: AsyncClient, auth_headers):
        response = await client.patch('/api/v1/profiles/me', headers=auth_headers, json={
            'activity_level': 9,
            'pinned_module': 'Z',
        })

        assert response.status_code == 422
        field_errors = response.json()['field_errors']
        assert 'activity_level' in field_errors
        assert 'pinned_module' in field_errors


class TestCompletenessAndOnboarding:

    @pytest.mark.asyncio
    async def test_new_profile_is_incomplete(self, client: AsyncClient, auth_headers):
        response = await client.get('/api/v1/profiles/me/completeness', headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data['is_complete'] is False
        assert data['pro_complete'] is False
        assert {'key': 'height', 'label': 'Taille'} in data['missing_physio_fields']
        # Currency defaults to EUR
        assert 'currency' not in [f['key'] for f in data['missing_pro_fields']]

    @pytest.mark.asyncio
    async def test_filled_sections(self, client: AsyncClient, auth_headers):
        await client.patch('/api/v1/profiles/me', headers=auth_headers, json={
            'home_country': 'France',
            'nationality': 'FR',
        })

        response = await client.get('/api/v1/profiles/me/completeness', headers=auth_headers)

        assert response.json()['map_complete'] is True
        assert response.json()['missing_map_fields'] == []

    @pytest.mark.asyncio
    async def test_onboarding_progress(self, client: AsyncClient, auth_headers):
        step = await client.post('/api/v1/profiles/me/onboarding', headers=auth_headers, json={'step': 2})
        done = await client.post('/api/v1/profiles/me/onboarding', headers=auth_headers, json={
            'step': 4, 'completed': True,
        })

        assert step.json()['onboarding_step'] == 2
        assert step.json()['onboarding_completed'] is False
        assert done.json()['onboarding_completed'] is True


class TestSearch:

    @pytest.mark.asyncio
    async def test_search_by_username_and_name(self, client: AsyncClient, db_session, auth_headers):
        await create_user(db_session, username='marie_curie', first_name='Marie', last_name='Curie')
        await create_user(db_session, username='pierre_c', first_name='Pierre', last_name='Curie')

        response = await client.get('/api/v1/profiles/search?q=curie', headers=auth_headers)

        assert response.status_code == 200
        assert [p['username'] for p in response.json()] == ['marie_curie', 'pierre_c']
        assert 'annual_income' not in response.json()[0]

    @pytest.mark.asyncio
    async def test_search_excludes_self(self, client: AsyncClient, db_session):
        me = await create_user(db_session, username='solo_searcher')

        response = await client.get('/api/v1/profiles/search?q=solo', headers=headers_for(me))

        assert response.json() == []

    @pytest.mark.asyncio
    async def test_empty_query_rejected(self, client: AsyncClient, auth_headers):
        response = await client.get('/api/v1/profiles/search?q=', headers=auth_headers)

        assert response.status_code == 422

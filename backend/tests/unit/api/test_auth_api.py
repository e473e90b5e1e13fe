"""
Unit Tests for Authentication API Endpoints
"""
import pytest
from httpx import AsyncClient
from faker import Faker

from conftest import TEST_PASSWORD, create_user, headers_for
from stats_api.core.security import create_refresh_token, create_access_token

fake = Faker()


class TestUserRegistration:
    """Test user registration endpoint"""

    @pytest.mark.asyncio
    async def test_register_success(self, client: AsyncClient, test_user_data):
        """Registration returns the user and never the password hash"""
        response = await client.post('/api/v1/auth/register', json=test_user_data)

        assert response.status_code == 201
        data = response.json()
        assert data['email'] == test_user_data['email']
        assert data['is_active'] is True
        assert 'id' in data
        assert 'hashed_password' not in data

    @pytest.mark.asyncio
    async def test_register_creates_profile(self, client: AsyncClient, test_user_data):
        """A profile with the submitted names exists right after registration"""
        await client.post('/api/v1/auth/register', json=test_user_data)
        login = await client.post('/api/v1/auth/login', json={
            'email': test_user_data['email'],
            'password': test_user_data['password'],
        })
        headers = {'Authorization': f"Bearer {login.json()['access_token']}"}

        response = await client.get('/api/v1/profiles/me', headers=headers)

        assert response.status_code == 200
        assert response.json()['username'] == test_user_data['username']
        assert response.json()['first_name'] == test_user_data['first_name']

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client: AsyncClient, test_user, test_user_data):
        test_user_data['email'] = test_user.email

        response = await client.post('/api/v1/auth/register', json=test_user_data)

        assert response.status_code == 400
        assert 'already registered' in response.json()['detail'].lower()

    @pytest.mark.asyncio
    async def test_register_duplicate_username(self, client: AsyncClient, db_session, test_user_data):
        await create_user(db_session, username='camille_d')
        test_user_data['username'] = 'Camille_D'

        response = await client.post('/api/v1/auth/register', json=test_user_data)

        assert response.status_code == 400
        assert response.json()['detail'] == 'Username already taken'

    @pytest.mark.asyncio
    async def test_register_invalid_email(self, client: AsyncClient, test_user_data):
        test_user_data['email'] = 'not-an-email'

        response = await client.post('/api/v1/auth/register', json=test_user_data)

        assert response.status_code == 422
        assert 'email' in response.json()['field_errors']

    @pytest.mark.asyncio
    async def test_register_short_password(self, client: AsyncClient, test_user_data):
        test_user_data['password'] = '123'

        response = await client.post('/api/v1/auth/register', json=test_user_data)

        assert response.status_code == 422
        assert 'password' in response.json()['field_errors']


class TestUserLogin:
    """Test login endpoint"""

    @pytest.mark.asyncio
    async def test_login_success(self, client: AsyncClient, test_user):
        response = await client.post('/api/v1/auth/login', json={
            'email': test_user.email,
            'password': TEST_PASSWORD,
        })

        assert response.status_code == 200
        data = response.json()
        assert data['token_type'] == 'bearer'
        assert data['access_token'] and data['refresh_token']
        assert data['user']['email'] == test_user.email
        assert data['user']['last_login'] is not None

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client: AsyncClient, test_user):
        response = await client.post('/api/v1/auth/login', json={
            'email': test_user.email,
            'password': 'wrongpassword',
        })

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, client: AsyncClient):
        response = await client.post('/api/v1/auth/login', json={
            'email': fake.email(),
            'password': TEST_PASSWORD,
        })

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_login_inactive_user(self, client: AsyncClient, db_session):
        user = await create_user(db_session, is_active=False)

        response = await client.post('/api/v1/auth/login', json={
            'email': user.email,
            'password': TEST_PASSWORD,
        })

        assert response.status_code == 401
        assert response.json()['detail'] == 'Account is inactive'


class TestTokens:
    """Refresh flow and bearer checks"""

    @pytest.mark.asyncio
    async def test_refresh_returns_new_pair(self, client: AsyncClient, test_user):
        token = create_refresh_token({'sub': str(test_user.id), 'email': test_user.email})

        response = await client.post('/api/v1/auth/refresh', json={'refresh_token': token})

        assert response.status_code == 200
        assert 'access_token' in response.json()

    @pytest.mark.asyncio
    async def test_refresh_rejects_access_token(self, client: AsyncClient, test_user):
        token = create_access_token({'sub': str(test_user.id), 'email': test_user.email})

        response = await client.post('/api/v1/auth/refresh', json={'refresh_token': token})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_refresh_rejects_garbage(self, client: AsyncClient):
        response = await client.post('/api/v1/auth/refresh', json={'refresh_token': 'not.a.token'})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_me(self, client: AsyncClient, test_user, auth_headers):
        response = await client.get('/api/v1/auth/me', headers=auth_headers)

        assert response.status_code == 200
        assert response.json()['id'] == str(test_user.id)

    @pytest.mark.asyncio
    async def test_me_without_token(self, client: AsyncClient):
        response = await client.get('/api/v1/auth/me')

        assert response.status_code == 401
        assert response.json()['detail'] == 'Not authenticated'

    @pytest.mark.asyncio
    async def test_me_with_refresh_token(self, client: AsyncClient, test_user):
        token = create_refresh_token({'sub': str(test_user.id)})

        response = await client.get('/api/v1/auth/me', headers={'Authorization': f'Bearer {token}'})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_inactive_user_forbidden(self, client: AsyncClient, db_session):
        user = await create_user(db_session, is_active=False)

        response = await client.get('/api/v1/auth/me', headers=headers_for(user))

        assert response.status_code == 403

"""
Unit Tests for Visitor Mode and Health Check Endpoints
"""
import pytest
from httpx import AsyncClient

from stats_api.core.config import settings


class TestVisitorMode:

    @pytest.mark.asyncio
    async def test_demo_dashboard_without_auth(self, client: AsyncClient):
        response = await client.get('/api/v1/visitor/dashboard')

        assert response.status_code == 200
        data = response.json()
        assert data['is_demo'] is True
        assert data['profile']['first_name'] == 'Camille'
        assert data['harmony']['meta']['language'] == 'fr'
        assert data['snapshot']['visited_countries'] == 12

    @pytest.mark.asyncio
    async def test_demo_dashboard_language(self, client: AsyncClient):
        response = await client.get('/api/v1/visitor/dashboard?language=es')

        assert response.json()['harmony']['meta']['language'] == 'es'

    @pytest.mark.asyncio
    async def test_disabled(self, client: AsyncClient, monkeypatch):
        monkeypatch.setattr(settings, 'VISITOR_MODE_ENABLED', False)

        response = await client.get('/api/v1/visitor/dashboard')

        assert response.status_code == 404


class TestHealthChecks:

    @pytest.mark.asyncio
    async def test_root_health(self, client: AsyncClient):
        response = await client.get('/health')

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'

    @pytest.mark.asyncio
    async def test_liveness(self, client: AsyncClient):
        response = await client.get('/api/v1/health/live')

        assert response.status_code == 200
        assert response.json()['status'] == 'alive'

    @pytest.mark.asyncio
    async def test_readiness(self, client: AsyncClient):
        response = await client.get('/api/v1/health/ready')

        assert response.status_code == 200
        assert response.json()['checks']['database']['tables_ready'] is True

    @pytest.mark.asyncio
    async def test_deep_reports_missing_ai_key(self, client: AsyncClient):
        response = await client.get('/api/v1/health/deep')

        assert response.status_code == 200
        data = response.json()
        assert data['checks']['redis']['configured'] is False
        assert data['checks']['ai']['configured'] is False
        assert data['status'] == 'degraded'

    @pytest.mark.asyncio
    async def test_security_headers(self, client: AsyncClient):
        response = await client.get('/health')

        assert response.headers['X-Content-Type-Options'] == 'nosniff'
        assert 'X-Request-ID' in response.headers

"""
Unit Tests for Finance and Travel API Endpoints
"""
import pytest
from httpx import AsyncClient


class TestFinance:
    """Assets, liabilities and net worth"""

    @pytest.mark.asyncio
    async def test_assets_ordered_by_value(self, client: AsyncClient, auth_headers):
        await client.post('/api/v1/finance/assets', headers=auth_headers, json={
            'asset_type': 'cash', 'name': 'Compte courant', 'current_value': 3000, 'is_liquid': True,
        })
        await client.post('/api/v1/finance/assets', headers=auth_headers, json={
            'asset_type': 'real_estate', 'name': 'Appartement', 'current_value': 280000,
        })

        response = await client.get('/api/v1/finance/assets', headers=auth_headers)

        assert response.status_code == 200
        assert [a['name'] for a in response.json()] == ['Appartement', 'Compte courant']
        assert response.json()[1]['currency'] == 'EUR'

    @pytest.mark.asyncio
    async def test_unknown_asset_type(self, client: AsyncClient, auth_headers):
        response = await client.post('/api/v1/finance/assets', headers=auth_headers, json={
            'asset_type': 'gold_bars', 'name': 'Lingots', 'current_value': 1000,
        })

        assert response.status_code == 422
        assert 'asset_type' in response.json()['field_errors']

    @pytest.mark.asyncio
    async def test_negative_value_rejected(self, client: AsyncClient, auth_headers):
        response = await client.post('/api/v1/finance/liabilities', headers=auth_headers, json={
            'liability_type': 'car_loan', 'name': 'Voiture', 'original_amount': 15000, 'remaining_amount': -1,
        })

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_summary(self, client: AsyncClient, auth_headers):
        await client.post('/api/v1/finance/assets', headers=auth_headers, json={
            'asset_type': 'savings', 'name': 'Livret A', 'current_value': 20000, 'is_liquid': True,
        })
        await client.post('/api/v1/finance/liabilities', headers=auth_headers, json={
            'liability_type': 'mortgage', 'name': 'Prêt immo', 'original_amount': 200000,
            'remaining_amount': 150000, 'interest_rate': 1.4,
        })

        response = await client.get('/api/v1/finance/summary', headers=auth_headers)

        assert response.json() == {
            'total_assets': 20000,
            'total_liabilities': 150000,
            'net_worth': -130000,
            'liquid_assets': 20000,
            'has_any_data': True,
        }

    @pytest.mark.asyncio
    async def test_delete_asset(self, client: AsyncClient, auth_headers):
        created = await client.post('/api/v1/finance/assets', headers=auth_headers, json={
            'asset_type': 'crypto', 'name': 'BTC', 'current_value': 900,
        })

        response = await client.delete(f"/api/v1/finance/assets/{created.json()['id']}", headers=auth_headers)
        listing = await client.get('/api/v1/finance/assets', headers=auth_headers)

        assert response.status_code == 204
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_cannot_delete_other_users_liability(
        self, client: AsyncClient, auth_headers, other_auth_headers
    ):
        created = await client.post('/api/v1/finance/liabilities', headers=other_auth_headers, json={
            'liability_type': 'credit_card', 'name': 'Visa', 'original_amount': 2000, 'remaining_amount': 800,
        })

        response = await client.delete(
            f"/api/v1/finance/liabilities/{created.json()['id']}", headers=auth_headers
        )

        assert response.status_code == 404
        assert response.json()['error']['code'] == 'LIABILITY_NOT_FOUND'


class TestTravel:
    """Visited countries and trips"""

    @pytest.mark.asyncio
    async def test_add_country_uppercases_code(self, client: AsyncClient, auth_headers):
        response = await client.post('/api/v1/travel/countries', headers=auth_headers, json={
            'country_code': 'jp', 'country_name': 'Japon', 'total_days_spent': 14,
        })

        assert response.status_code == 201
        assert response.json()['country_code'] == 'JP'
        assert response.json()['visit_count'] == 1

    @pytest.mark.asyncio
    async def test_duplicate_country(self, client: AsyncClient, auth_headers):
        payload = {'country_code': 'IT', 'country_name': 'Italie'}
        await client.post('/api/v1/travel/countries', headers=auth_headers, json=payload)

        response = await client.post('/api/v1/travel/countries', headers=auth_headers, json=payload)

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'COUNTRY_EXISTS'

    @pytest.mark.asyncio
    async def test_invalid_country_code(self, client: AsyncClient, auth_headers):
        response = await client.post('/api/v1/travel/countries', headers=auth_headers, json={
            'country_code': 'FRA', 'country_name': 'France',
        })

        assert response.status_code == 422
        assert 'country_code' in response.json()['field_errors']

    @pytest.mark.asyncio
    async def test_summary(self, client: AsyncClient, auth_headers):
        await client.post('/api/v1/travel/countries', headers=auth_headers, json={
            'country_code': 'ES', 'country_name': 'Espagne',
        })
        await client.post('/api/v1/travel/trips', headers=auth_headers, json={
            'destination_country': 'Espagne', 'start_date': '2025-07-01', 'transport': 'train', 'distance_km': 1050,
        })
        await client.post('/api/v1/travel/trips', headers=auth_headers, json={
            'destination_country': 'Espagne', 'start_date': '2025-09-12', 'purpose': 'work',
        })

        response = await client.get('/api/v1/travel/summary', headers=auth_headers)

        assert response.json() == {
            'total_countries_visited': 1,
            'total_trips': 2,
            'total_distance_km': 1050,
            'has_any_data': True,
        }

    @pytest.mark.asyncio
    async def test_trips_newest_first(self, client: AsyncClient, auth_headers):
        for start in ('2024-03-01', '2025-05-01'):
            await client.post('/api/v1/travel/trips', headers=auth_headers, json={
                'destination_country': 'Portugal', 'start_date': start,
            })

        response = await client.get('/api/v1/travel/trips', headers=auth_headers)

        assert [t['start_date'] for t in response.json()] == ['2025-05-01', '2024-03-01']

    @pytest.mark.asyncio
    async def test_delete_trip_not_found(self, client: AsyncClient, auth_headers):
        response = await client.delete(
            '/api/v1/travel/trips/00000000-0000-0000-0000-000000000000', headers=auth_headers
        )

        assert response.status_code == 404

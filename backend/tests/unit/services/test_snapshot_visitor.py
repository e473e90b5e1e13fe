"""
Unit Tests for snapshot totals and the visitor demo dashboard
"""
from datetime import date

from stats_api.models.finance import Asset, Liability
from stats_api.schemas.harmony import HarmonyAnalysis
from stats_api.services.snapshot_service import asset_totals, liability_totals
from stats_api.services.visitor_service import demo_dashboard, demo_snapshot, DEMO_PROFILE

TODAY = date(2025, 12, 30)


def test_asset_totals_buckets():
    assets = [
        Asset(asset_type="cash", current_value=10000, is_liquid=True),
        Asset(asset_type="stocks", current_value=25000, is_liquid=True),
        Asset(asset_type="real_estate", current_value=300000, is_liquid=False),
        Asset(asset_type="retirement", current_value=15000, is_liquid=False),
    ]

    totals = asset_totals(assets)

    assert totals.total == 350000
    assert totals.liquid == 35000
    assert totals.real_estate == 300000
    assert totals.investments == 40000


def test_liability_totals_split_mortgages():
    totals = liability_totals([
        Liability(liability_type="mortgage", remaining_amount=200000),
        Liability(liability_type="car_loan", remaining_amount=8000),
        Liability(liability_type="credit_card", remaining_amount=1500),
    ])

    assert totals.total == 209500
    assert totals.mortgages == 200000
    assert totals.other_debt == 9500


def test_empty_totals_are_zero():
    assert asset_totals([]).total == 0
    assert liability_totals([]).other_debt == 0


class TestVisitorDemo:

    def test_snapshot_dates_are_relative_to_today(self):
        snapshot = demo_snapshot(TODAY)

        dates = [entry.date for entry in snapshot.health_records.sleep]
        assert all(d <= TODAY.isoformat() for d in dates)
        assert snapshot.visited_countries == 12
        assert snapshot.assets.total == 922450

    def test_dashboard_shape(self):
        dashboard = demo_dashboard(TODAY, "en")

        assert dashboard["is_demo"] is True
        assert dashboard["profile"] is DEMO_PROFILE
        assert dashboard["snapshot"]["language"] == "en"
        assert dashboard["harmony"]["meta"]["language"] == "en"

    def test_harmony_block_is_a_valid_analysis(self):
        dashboard = demo_dashboard(TODAY)

        analysis = HarmonyAnalysis.model_validate(dashboard["harmony"])
        assert analysis.meta.language == "fr"
        assert 0 <= analysis.harmony_score.value <= 100

    def test_dashboard_is_deterministic(self):
        assert demo_dashboard(TODAY) == demo_dashboard(TODAY)

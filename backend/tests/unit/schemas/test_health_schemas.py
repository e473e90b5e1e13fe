"""
Unit Tests for health, travel and profile input schemas
"""
from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from stats_api.schemas.health import (
    SleepRecordCreate,
    SleepRecordUpdate,
    SportSessionCreate,
    BodyMeasurementCreate,
    NutritionLogCreate,
)
from stats_api.schemas.travel import VisitedCountryCreate
from stats_api.schemas.auth import UserRegister


def _sleep(**overrides):
    data = {"date": "2025-12-30", "duration": 480, "quality": "good"}
    data.update(overrides)
    return data


class TestSleepSchema:

    def test_valid_record(self):
        record = SleepRecordCreate(**_sleep(deep_sleep_minutes=90, rem_sleep_minutes=100, bedtime="23:15"))

        assert record.duration == 480
        assert record.bedtime == "23:15"

    def test_future_date_rejected(self):
        tomorrow = (date.today() + timedelta(days=1)).isoformat()

        with pytest.raises(ValidationError) as exc_info:
            SleepRecordCreate(**_sleep(date=tomorrow))

        assert "future" in str(exc_info.value)

    @pytest.mark.parametrize("value", ["30/12/2025", "2025-13-01", "2025-12-3", "yesterday"])
    def test_bad_date_format_rejected(self, value):
        with pytest.raises(ValidationError):
            SleepRecordCreate(**_sleep(date=value))

    @pytest.mark.parametrize("duration", [0, 1441])
    def test_duration_bounds(self, duration):
        with pytest.raises(ValidationError):
            SleepRecordCreate(**_sleep(duration=duration))

    def test_phases_cannot_exceed_duration(self):
        with pytest.raises(ValidationError) as exc_info:
            SleepRecordCreate(**_sleep(duration=300, deep_sleep_minutes=200, rem_sleep_minutes=150))

        assert "cannot exceed total duration" in str(exc_info.value)

    @pytest.mark.parametrize("value", ["23:15", "07:05:30"])
    def test_time_formats_accepted(self, value):
        assert SleepRecordCreate(**_sleep(wake_time=value)).wake_time == value

    @pytest.mark.parametrize("value", ["24:00", "7:05", "07h05"])
    def test_bad_time_rejected(self, value):
        with pytest.raises(ValidationError):
            SleepRecordCreate(**_sleep(wake_time=value))

    def test_quality_enum(self):
        with pytest.raises(ValidationError):
            SleepRecordCreate(**_sleep(quality="great"))

    def test_partial_update_only_checks_given_phases(self):
        update = SleepRecordUpdate(deep_sleep_minutes=100)

        assert update.model_dump(exclude_unset=True) == {"deep_sleep_minutes": 100}


class TestOtherHealthSchemas:

    def test_sport_type_trimmed(self):
        session = SportSessionCreate(date="2025-12-29", duration=45, type="  running ", intensity="high")

        assert session.type == "running"

    def test_sport_intensity_enum(self):
        with pytest.raises(ValidationError):
            SportSessionCreate(date="2025-12-29", duration=45, type="running", intensity="insane")

    def test_body_ranges(self):
        assert BodyMeasurementCreate(date="2025-12-29", weight=74.5).weight == 74.5
        with pytest.raises(ValidationError):
            BodyMeasurementCreate(date="2025-12-29", weight=10)
        with pytest.raises(ValidationError):
            BodyMeasurementCreate(date="2025-12-29", resting_heart_rate=250)

    def test_nutrition_water_limit(self):
        with pytest.raises(ValidationError):
            NutritionLogCreate(date="2025-12-29", water_intake=25)


class TestMiscSchemas:

    def test_country_code_uppercased(self):
        assert VisitedCountryCreate(country_code="fr", country_name="France").country_code == "FR"

    def test_register_password_min_length(self):
        with pytest.raises(ValidationError):
            UserRegister(email="a@example.com", password="short")

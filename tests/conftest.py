"""Shared pytest fixtures and configuration."""

import os
import pytest
from datetime import date
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")
os.environ.setdefault("LOG_FORMAT", "text")


@pytest.fixture(autouse=True)
def default_fee_schedule(monkeypatch):
    """Every test starts from the built-in fee schedule."""
    from src.services.fee_schedule import reset_fee_schedule

    monkeypatch.delenv("FEE_SCHEDULE_PATH", raising=False)
    reset_fee_schedule()
    yield
    reset_fee_schedule()


@pytest.fixture
def sample_deal_data():
    """Deal record as stored in estimated_net_properties."""
    from tests.fixtures.deals import SAMPLE_DEAL
    return dict(SAMPLE_DEAL)


@pytest.fixture
def sample_deal(sample_deal_data):
    from src.models.deal import DealRecord
    return DealRecord.model_validate(sample_deal_data)


@pytest.fixture
def sample_schedule():
    """Schedule record from the worked milestone example."""
    from src.models.deal import PropertyScheduleRecord
    from tests.fixtures.deals import SAMPLE_SCHEDULE
    return PropertyScheduleRecord.model_validate(SAMPLE_SCHEDULE)


@pytest.fixture
def today():
    return date(2025, 1, 20)


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2025-01-20 12:00:00") as frozen_time:
        yield frozen_time

"""Pytest configuration and shared fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from mdi_advisor.core.models import ICRatio, Injection, InsulinProfile
from mdi_advisor.main import app

# 2024-03-01 12:00:00 UTC
NOW = 1_709_294_400_000
HOUR_MS = 3_600_000


def hours_ago(hours: float) -> int:
    """Epoch milliseconds ``hours`` before NOW."""
    return int(NOW - hours * HOUR_MS)


def injection(units: float, hours: float) -> Injection:
    """An injection of ``units`` given ``hours`` before NOW."""
    return Injection(timestamp=hours_ago(hours), units=units)


@pytest.fixture
def profile() -> InsulinProfile:
    """ISF 50, IC 15/12/10, DIA 4h, target 100."""
    return InsulinProfile(
        isf=50,
        ic_ratio=ICRatio(breakfast=15, lunch=12, dinner=10),
        dia_hours=4,
        target=100,
    )


@pytest.fixture
def profile_payload() -> dict:
    """Same profile as ``profile`` in its camelCase wire form."""
    return {
        "isf": 50,
        "icRatio": {"breakfast": 15, "lunch": 12, "dinner": 10},
        "diaHours": 4,
        "target": 100,
    }


@pytest.fixture
async def client():
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

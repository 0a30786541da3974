"""Tests for the HTTP endpoints."""

from conftest import NOW, hours_ago
from mdi_advisor.middleware import CORRELATION_ID_HEADER

DAY0 = 1_709_251_200_000
DAY_MS = 86_400_000
HOUR_MS = 3_600_000


def _week(night_glucose: list[float]) -> list[dict]:
    return [
        {
            "date": f"2024-03-{index + 1:02d}",
            "measurements": [
                {"timestamp": DAY0 + index * DAY_MS + 3 * HOUR_MS, "glucose": glucose},
                {"timestamp": DAY0 + index * DAY_MS + 12 * HOUR_MS, "glucose": 120},
            ],
        }
        for index, glucose in enumerate(night_glucose)
    ]


class TestHealthAndRoot:
    async def test_liveness(self, client):
        response = await client.get("/health/live")

        assert response.status_code == 200
        assert response.json() == {"status": "alive"}

    async def test_root(self, client):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["name"] == "MDI Advisor API"


class TestCorrelationId:
    async def test_generates_correlation_id(self, client):
        response = await client.get("/health/live")
        assert response.headers[CORRELATION_ID_HEADER]

    async def test_echoes_incoming_correlation_id(self, client):
        response = await client.get(
            "/health/live", headers={CORRELATION_ID_HEADER: "req-42"}
        )
        assert response.headers[CORRELATION_ID_HEADER] == "req-42"


class TestDoseEndpoints:
    """Tests for /api/dose."""

    async def test_calculate(self, client, profile_payload):
        response = await client.post(
            "/api/dose/calculate",
            json={
                "profile": profile_payload,
                "params": {"timeOfDay": "breakfast", "glucose": 180, "carbohydrates": 60},
                "now": NOW,
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["result"]["dose"] == 5.5
        assert data["result"]["breakdown"]["carbDose"] == 4.0
        assert data["result"]["breakdown"]["correctionDose"] == 1.6
        assert data["warnings"] == []

    async def test_calculate_renders_spanish_warnings(self, client, profile_payload):
        response = await client.post(
            "/api/dose/calculate",
            json={
                "profile": profile_payload,
                "params": {
                    "timeOfDay": "lunch",
                    "glucose": 120,
                    "carbohydrates": 48,
                    "context": {"alcohol": True},
                },
                "now": NOW,
                "language": "es",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["result"]["warnings"] == [{"key": "warnings.alcohol", "params": {}}]
        assert data["warnings"][0].startswith("Alcohol: mayor riesgo")

    async def test_calculate_rejects_out_of_range_profile(self, client, profile_payload):
        profile_payload["isf"] = 5
        response = await client.post(
            "/api/dose/calculate",
            json={
                "profile": profile_payload,
                "params": {"timeOfDay": "breakfast", "glucose": 180},
                "now": NOW,
            },
        )

        assert response.status_code == 422

    async def test_correction(self, client, profile_payload):
        response = await client.post(
            "/api/dose/correction",
            json={"profile": profile_payload, "glucose": 250, "now": NOW},
        )

        assert response.status_code == 200
        assert response.json()["result"]["dose"] == 1.5
        assert response.json()["result"]["breakdown"]["adjustments"]["betweenMeals"] == -50

    async def test_between_meal_correction_refused(self, client, profile_payload):
        response = await client.post(
            "/api/dose/between-meal-correction",
            json={
                "profile": profile_payload,
                "glucose": 250,
                "previousInjections": [{"timestamp": hours_ago(1), "units": 3}],
                "now": NOW,
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["result"]["dose"] == 0
        assert data["result"]["reason"]["key"] == "correction.wait3Hours"
        assert "1.0 hours" in data["reason"]

    async def test_pre_sleep(self, client, profile_payload):
        response = await client.post(
            "/api/dose/pre-sleep",
            json={"profile": profile_payload, "glucose": 90, "now": NOW},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["result"]["action"] == "eat_snack"
        assert data["result"]["carbohydrates"] == 15
        assert "15g" in data["reason"]

    async def test_on_board(self, client):
        response = await client.post(
            "/api/dose/iob",
            json={
                "diaHours": 4,
                "injections": [{"timestamp": hours_ago(2), "units": 4}],
                "meals": [{"timestamp": hours_ago(2), "carbohydrates": 60}],
                "now": NOW,
            },
        )

        assert response.status_code == 200
        assert response.json() == {
            "iob": 2.0,
            "cob": 30,
            "hoursSinceLastInjection": 2.0,
            "safeForNewDose": False,
        }


    async def test_on_board_with_curve(self, client):
        response = await client.post(
            "/api/dose/iob",
            json={
                "diaHours": 4,
                "injections": [{"timestamp": hours_ago(2), "units": 4}],
                "now": NOW,
                "curve": "parabolic",
            },
        )

        assert response.status_code == 200
        assert response.json()["iob"] == 3.0

    async def test_pre_sleep_rejects_unknown_curve(self, client, profile_payload):
        response = await client.post(
            "/api/dose/pre-sleep",
            json={"profile": profile_payload, "glucose": 150, "now": NOW, "curve": "cubic"},
        )

        assert response.status_code == 422


class TestAnalysisEndpoints:
    """Tests for /api/analysis."""

    async def test_weekly_validation(self, client):
        response = await client.post(
            "/api/analysis/weekly-validation",
            json={"record": _week([120] * 7)},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["result"]["tier"] == "excellent"
        assert data["recommendation"].startswith("EXCELLENT: 100.0%")

    async def test_weekly_validation_rejects_short_record(self, client):
        response = await client.post(
            "/api/analysis/weekly-validation",
            json={"record": _week([120, 120])},
        )

        assert response.status_code == 422

    async def test_patterns(self, client):
        response = await client.post(
            "/api/analysis/patterns",
            json={"record": _week([60, 60, 60, 60, 60, 120, 120])},
        )

        assert response.status_code == 200
        findings = response.json()["findings"]
        assert len(findings) == 1
        assert findings[0]["finding"]["kind"] == "recurring_hypoglycemia"
        assert findings[0]["finding"]["hour"] == 3
        assert findings[0]["description"] == "Recurring hypoglycemias in the night (around 3:00)"

    async def test_patterns_unknown_timezone(self, client):
        response = await client.post(
            "/api/analysis/patterns",
            json={"record": _week([120] * 3), "timezone": "Mars/Olympus_Mons"},
        )

        assert response.status_code == 422
        assert "Invalid timezone" in str(response.json()["detail"])


class TestInputValidationErrorHandler:
    async def test_maps_engine_validation_error_to_422(self):
        import json

        from mdi_advisor.core.validation import InputValidationError, validate_insulin_profile
        from mdi_advisor.main import input_validation_error_handler

        try:
            validate_insulin_profile({"isf": 5})
        except InputValidationError as exc:
            response = await input_validation_error_handler(None, exc)

        assert response.status_code == 422
        body = json.loads(response.body)
        assert body["model"] == "InsulinProfile"
        assert "isf" in [error["field"] for error in body["errors"]]

"""Tests for the intervals.icu client and activity normalization."""

import base64
from datetime import date
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from triplan.exceptions import FeedNotConfiguredError
from triplan.integrations.base import (
    AuthenticationError,
    IntegrationError,
    NetworkError,
    RateLimitError,
)
from triplan.integrations.intervals_icu import (
    IntervalsIcuClient,
    classify_activity_type,
    extract_power_zone_times,
    normalize_activity,
)
from triplan.models.records import ActivityType

ATHLETE_ID = "i12345"
API_KEY = "secret-key"

SAMPLE_ACTIVITY = {
    "id": "i987",
    "type": "Ride",
    "start_date_local": "2026-02-10T07:15:00",
    "moving_time": 3600,
    "elapsed_time": 3900,
    "distance": 30500.0,
    "name": "Endurance Ride",
    "average_heartrate": 138,
    "icu_training_load": 62,
    "icu_average_watts": 180,
    "icu_zone_times": [
        {"id": "Z1", "secs": 600}, {"id": "Z2", "secs": 2400}, {"id": "Z3", "secs": 400},
        {"id": "Z4", "secs": 100}, {"id": "Z5", "secs": 50}, {"id": "Z6", "secs": 30},
        {"id": "Z7", "secs": 20}, {"id": "SS", "secs": 300},
    ],
}


def _client(handler, max_retries=3):
    return IntervalsIcuClient(
        ATHLETE_ID,
        API_KEY,
        max_retries=max_retries,
        transport=httpx.MockTransport(handler),
    )


class TestClassifyActivityType:
    """Tests for classify_activity_type."""

    @pytest.mark.parametrize("raw_type,expected", [
        ("Run", ActivityType.RUN),
        ("VirtualRide", ActivityType.BIKE),
        ("GravelRide", ActivityType.BIKE),
        ("Swim", ActivityType.SWIM),
        ("OpenWaterSwim", ActivityType.SWIM),
        ("WeightTraining", ActivityType.STRENGTH),
        ("RockClimbing", ActivityType.CLIMBING),
        ("AlpineSki", ActivityType.SKI),
        ("Yoga", ActivityType.RECOVERY),
        ("Hike", ActivityType.HIKE),
        ("Kitesurf", ActivityType.REST),
    ])
    def test_type_field(self, raw_type, expected):
        assert classify_activity_type({"type": raw_type}) == expected

    def test_falls_through_to_later_fields(self):
        raw = {"type": "Other Thing", "sub_sport": "indoor_cycling"}

        assert classify_activity_type(raw) == ActivityType.BIKE

    def test_no_type(self):
        assert classify_activity_type({}) == ActivityType.REST


class TestZones:
    """Tests for zone helpers."""

    def test_power_zone_times(self):
        assert extract_power_zone_times(SAMPLE_ACTIVITY) == [600, 2400, 400, 100, 50, 30, 20]

    def test_power_zone_times_missing(self):
        assert extract_power_zone_times({}) is None
        assert extract_power_zone_times({"icu_zone_times": [{"secs": 1}]}) is None


class TestNormalizeActivity:
    """Tests for normalize_activity."""

    def test_core_fields(self):
        activity = normalize_activity(SAMPLE_ACTIVITY)

        assert activity.external_id == "i987"
        assert activity.id == "intervals_i987"
        assert activity.activity_type == ActivityType.BIKE
        assert activity.date == date(2026, 2, 10)
        assert activity.start_time == "2026-02-10T07:15:00"
        assert activity.duration == 3600
        assert activity.distance == 30500.0
        assert activity.title == "Endurance Ride"
        assert activity.source == "intervals.icu"

    def test_passthrough_fields(self):
        fields = normalize_activity(SAMPLE_ACTIVITY).fields

        assert fields["avg_heart_rate"] == 138
        assert fields["icu_training_load"] == 62
        assert fields["raw_type"] == "Ride"
        assert fields["icu_power_zone_times"] == [600, 2400, 400, 100, 50, 30, 20]
        assert "max_heart_rate" not in fields

    def test_minimal_record(self):
        activity = normalize_activity({"id": 42, "type": "Run", "start_date": "2026-02-09T18:00:00Z"})

        assert activity.external_id == "42"
        assert activity.date == date(2026, 2, 9)
        assert activity.duration == 0
        assert activity.title == "run Workout"

    def test_elapsed_time_fallback(self):
        activity = normalize_activity({"id": 1, "elapsed_time": 900})

        assert activity.duration == 900
        assert activity.date is None


class TestIntervalsIcuClient:
    """Tests for IntervalsIcuClient."""

    def test_requires_credentials(self):
        with pytest.raises(FeedNotConfiguredError):
            IntervalsIcuClient("", API_KEY)
        with pytest.raises(FeedNotConfiguredError):
            IntervalsIcuClient(ATHLETE_ID, "")

    def test_repr_hides_key(self):
        assert API_KEY not in repr(IntervalsIcuClient(ATHLETE_ID, API_KEY))

    @pytest.mark.asyncio
    async def test_fetch_activities(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[SAMPLE_ACTIVITY])

        async with _client(handler) as client:
            raw = await client.fetch_activities(date(2026, 2, 1), date(2026, 2, 10))

        request = seen[0]
        expected_auth = base64.b64encode(f"API_KEY:{API_KEY}".encode()).decode()
        assert raw == [SAMPLE_ACTIVITY]
        assert request.url.path == f"/api/v1/athlete/{ATHLETE_ID}/activities"
        assert request.url.params["oldest"] == "2026-02-01"
        assert request.url.params["newest"] == "2026-02-10"
        assert request.headers["Authorization"] == f"Basic {expected_auth}"

    @pytest.mark.asyncio
    async def test_non_list_response(self):
        async with _client(lambda request: httpx.Response(200, json={"unexpected": True})) as client:
            assert await client.fetch_activities(date(2026, 2, 1), date(2026, 2, 10)) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 403])
    async def test_auth_failure(self, status):
        async with _client(lambda request: httpx.Response(status)) as client:
            with pytest.raises(AuthenticationError) as exc_info:
                await client.fetch_activities(date(2026, 2, 1), date(2026, 2, 10))

        assert exc_info.value.status_code == 401
        assert exc_info.value.provider == "intervals.icu"

    @pytest.mark.asyncio
    async def test_not_found(self):
        async with _client(lambda request: httpx.Response(404)) as client:
            with pytest.raises(IntegrationError) as exc_info:
                await client.get_athlete()

        assert exc_info.value.code == "not_found"

    @pytest.mark.asyncio
    async def test_server_error(self):
        def handler(request):
            return httpx.Response(500, json={"error": "boom"})

        async with _client(handler) as client:
            with pytest.raises(IntegrationError) as exc_info:
                await client.get_athlete()

        assert exc_info.value.message == "boom (500)"
        assert exc_info.value.code == "500"

    @pytest.mark.asyncio
    async def test_rate_limit_exhausted(self):
        def handler(request):
            return httpx.Response(429, headers={"Retry-After": "30"})

        async with _client(handler, max_retries=1) as client:
            with pytest.raises(RateLimitError) as exc_info:
                await client.get_athlete()

        assert exc_info.value.retry_after == 30
        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_rate_limit_retried(self):
        responses = [
            httpx.Response(429, headers={"Retry-After": "120"}),
            httpx.Response(200, json={"id": ATHLETE_ID}),
        ]

        with patch("triplan.integrations.intervals_icu.asyncio.sleep", new=AsyncMock()) as sleep:
            async with _client(lambda request: responses.pop(0)) as client:
                athlete = await client.get_athlete()

        assert athlete == {"id": ATHLETE_ID}
        sleep.assert_awaited_once_with(60)

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(NetworkError) as exc_info:
                await client.fetch_activities(date(2026, 2, 1), date(2026, 2, 10))

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_connection_ok(self):
        async with _client(lambda request: httpx.Response(200, json={"id": ATHLETE_ID})) as client:
            assert await client.test_connection() is True

    @pytest.mark.asyncio
    async def test_connection_rejected(self):
        async with _client(lambda request: httpx.Response(401)) as client:
            assert await client.test_connection() is False

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        client = _client(lambda request: httpx.Response(200, json=[]))
        await client.fetch_activities(date(2026, 2, 1), date(2026, 2, 1))

        await client.close()
        await client.close()

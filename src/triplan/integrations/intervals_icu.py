"""
intervals.icu integration.

Implements:
- Basic-auth client for the intervals.icu REST API
- Activity listing for a date range
- Activity type classification from the provider's free-form type fields
- Normalization into ExternalActivity with the optional metrics passed through
"""

import asyncio
import logging
from datetime import date
from typing import Any, Dict, List, Optional

import httpx

from ..exceptions import FeedNotConfiguredError
from ..models.records import ActivityType, ExternalActivity
from .base import (
    AuthenticationError,
    IntegrationError,
    NetworkError,
    RateLimitError,
    WorkoutFeed,
)

logger = logging.getLogger(__name__)

PROVIDER = "intervals.icu"
DEFAULT_BASE_URL = "https://intervals.icu/api/v1"


# Lowercased provider type -> activity type
ACTIVITY_TYPE_KEYWORDS: Dict[str, ActivityType] = {
    # Running
    "run": ActivityType.RUN,
    "running": ActivityType.RUN,
    "trail run": ActivityType.RUN,
    "trail_run": ActivityType.RUN,
    "trailrun": ActivityType.RUN,
    "trail running": ActivityType.RUN,
    "treadmill": ActivityType.RUN,
    "treadmill run": ActivityType.RUN,
    "treadmill_run": ActivityType.RUN,
    "track": ActivityType.RUN,
    "track run": ActivityType.RUN,
    "virtualrun": ActivityType.RUN,
    "virtual_run": ActivityType.RUN,
    "ultra": ActivityType.RUN,
    "ultrarun": ActivityType.RUN,
    "walk": ActivityType.RUN,
    "walking": ActivityType.RUN,

    # Cycling
    "ride": ActivityType.BIKE,
    "bike": ActivityType.BIKE,
    "biking": ActivityType.BIKE,
    "cycling": ActivityType.BIKE,
    "cycle": ActivityType.BIKE,
    "road": ActivityType.BIKE,
    "road bike": ActivityType.BIKE,
    "road_bike": ActivityType.BIKE,
    "gravel": ActivityType.BIKE,
    "gravel bike": ActivityType.BIKE,
    "gravel_bike": ActivityType.BIKE,
    "gravelride": ActivityType.BIKE,
    "mountain bike": ActivityType.BIKE,
    "mountain_bike": ActivityType.BIKE,
    "mountainbikeride": ActivityType.BIKE,
    "mtb": ActivityType.BIKE,
    "cyclocross": ActivityType.BIKE,
    "cx": ActivityType.BIKE,
    "virtualride": ActivityType.BIKE,
    "virtual_ride": ActivityType.BIKE,
    "e-bike": ActivityType.BIKE,
    "ebike": ActivityType.BIKE,
    "ebikeride": ActivityType.BIKE,
    "indoor cycling": ActivityType.BIKE,
    "indoor_cycling": ActivityType.BIKE,
    "spin": ActivityType.BIKE,
    "trainer": ActivityType.BIKE,
    "turbo": ActivityType.BIKE,

    # Swimming
    "swim": ActivityType.SWIM,
    "swimming": ActivityType.SWIM,
    "open water": ActivityType.SWIM,
    "open_water": ActivityType.SWIM,
    "openwaterswim": ActivityType.SWIM,
    "pool": ActivityType.SWIM,
    "pool swim": ActivityType.SWIM,

    # Hiking
    "hike": ActivityType.HIKE,
    "hiking": ActivityType.HIKE,
    "backcountry": ActivityType.HIKE,

    # Strength and gym cardio
    "strength": ActivityType.STRENGTH,
    "strength_training": ActivityType.STRENGTH,
    "strength training": ActivityType.STRENGTH,
    "weight_training": ActivityType.STRENGTH,
    "weight training": ActivityType.STRENGTH,
    "weighttraining": ActivityType.STRENGTH,
    "weights": ActivityType.STRENGTH,
    "gym": ActivityType.STRENGTH,
    "workout": ActivityType.STRENGTH,
    "crossfit": ActivityType.STRENGTH,
    "functional": ActivityType.STRENGTH,
    "rower": ActivityType.STRENGTH,
    "rowing": ActivityType.STRENGTH,
    "elliptical": ActivityType.STRENGTH,
    "stairmaster": ActivityType.STRENGTH,
    "stair stepper": ActivityType.STRENGTH,

    # Climbing
    "climb": ActivityType.CLIMBING,
    "climbing": ActivityType.CLIMBING,
    "rock climbing": ActivityType.CLIMBING,
    "rockclimbing": ActivityType.CLIMBING,
    "bouldering": ActivityType.CLIMBING,
    "sport climbing": ActivityType.CLIMBING,

    # Skiing
    "ski": ActivityType.SKI,
    "skiing": ActivityType.SKI,
    "alpine ski": ActivityType.SKI,
    "alpineski": ActivityType.SKI,
    "downhill ski": ActivityType.SKI,
    "backcountry ski": ActivityType.SKI,
    "backcountry_ski": ActivityType.SKI,
    "backcountryski": ActivityType.SKI,
    "nordicski": ActivityType.SKI,
    "xc ski": ActivityType.SKI,
    "cross country ski": ActivityType.SKI,
    "skate ski": ActivityType.SKI,
    "classic ski": ActivityType.SKI,

    # Basketball
    "basketball": ActivityType.BASKETBALL,
    "bball": ActivityType.BASKETBALL,

    # Recovery
    "yoga": ActivityType.RECOVERY,
    "stretching": ActivityType.RECOVERY,
    "stretch": ActivityType.RECOVERY,
    "massage": ActivityType.RECOVERY,
    "meditation": ActivityType.RECOVERY,
    "pilates": ActivityType.RECOVERY,
    "recovery": ActivityType.RECOVERY,

    # Rest
    "other": ActivityType.REST,
    "rest": ActivityType.REST,
}

# Raw fields inspected for classification, most specific first
TYPE_FIELDS = ("type", "activity_type", "sport_type", "sub_sport")

# Output name -> raw intervals.icu field, passed through untouched
PASSTHROUGH_FIELDS: Dict[str, str] = {
    "description": "description",
    "start_date_local": "start_date_local",
    "moving_time": "moving_time",
    "elapsed_time": "elapsed_time",
    "icu_recording_time": "icu_recording_time",
    "coasting_time": "coasting_time",
    "icu_distance": "icu_distance",
    # Heart rate
    "avg_heart_rate": "average_heartrate",
    "max_heart_rate": "max_heartrate",
    "athlete_max_hr": "athlete_max_hr",
    "lthr": "lthr",
    "icu_resting_hr": "icu_resting_hr",
    "hr_load": "hr_load",
    "trimp": "trimp",
    "icu_hrr": "icu_hrr",
    "icu_hr_zones": "icu_hr_zones",
    "icu_hr_zone_times": "icu_hr_zone_times",
    # Speed and pace
    "avg_speed": "average_speed",
    "max_speed": "max_speed",
    "avg_pace": "pace",
    "gap": "gap",
    "gap_model": "gap_model",
    "avg_cadence": "average_cadence",
    "average_stride": "average_stride",
    # Elevation
    "elevation_gain": "total_elevation_gain",
    "elevation_loss": "total_elevation_loss",
    "min_altitude": "min_altitude",
    "max_altitude": "max_altitude",
    "average_altitude": "average_altitude",
    # Power
    "icu_average_watts": "icu_average_watts",
    "icu_weighted_avg_watts": "icu_weighted_avg_watts",
    "icu_power_zones": "icu_power_zones",
    "icu_sweet_spot_min": "icu_sweet_spot_min",
    "icu_sweet_spot_max": "icu_sweet_spot_max",
    "pace_zones": "pace_zones",
    "pace_zone_times": "pace_zone_times",
    "gap_zone_times": "gap_zone_times",
    # Load
    "icu_training_load": "icu_training_load",
    "icu_training_load_data": "icu_training_load_data",
    "icu_intensity": "icu_intensity",
    "icu_atl": "icu_atl",
    "icu_ctl": "icu_ctl",
    "icu_tsb": "icu_tsb",
    "power_load": "power_load",
    "pace_load": "pace_load",
    "polarization_index": "polarization_index",
    "icu_efficiency_factor": "icu_efficiency_factor",
    "icu_power_hr": "icu_power_hr",
    "decoupling": "decoupling",
    # Intervals
    "interval_summary": "interval_summary",
    "icu_lap_count": "icu_lap_count",
    "icu_warmup_time": "icu_warmup_time",
    "icu_cooldown_time": "icu_cooldown_time",
    # Energy and feel
    "calories": "calories",
    "carbs_used": "carbs_used",
    "carbs_ingested": "carbs_ingested",
    "session_rpe": "session_rpe",
    "perceived_exertion": "perceived_exertion",
    "feel": "feel",
    # Device and source
    "device_name": "device_name",
    "source_app": "source",
    "file_type": "file_type",
    "device_external_id": "external_id",
    "strava_id": "strava_id",
    # Flags
    "commute": "commute",
    "race": "race",
    "trainer": "trainer",
    "has_heartrate": "has_heartrate",
    "has_gps": "has_gps",
    "has_weather": "has_weather",
    "has_segments": "has_segments",
    "device_watts": "device_watts",
    "icu_weight": "icu_weight",
    "analyzed": "analyzed",
    "icu_sync_date": "icu_sync_date",
    "created": "created",
    "raw_type": "type",
}

POWER_ZONE_COUNT = 7


def classify_activity_type(raw: Dict[str, Any]) -> ActivityType:
    """Best-effort keyword classification; REST when nothing matches."""
    for field_name in TYPE_FIELDS:
        value = raw.get(field_name)
        if not value:
            continue
        mapped = ACTIVITY_TYPE_KEYWORDS.get(str(value).strip().lower())
        if mapped is not None:
            return mapped
    return ActivityType.REST


def extract_power_zone_times(raw: Dict[str, Any]) -> Optional[List[int]]:
    """Seconds in power zones Z1-Z7 from ``icu_zone_times``.

    intervals.icu lists ``{"id": "Z1", "secs": 379}`` entries followed by a
    sweet-spot entry; only the first seven are zones.
    """
    zone_times = raw.get("icu_zone_times")
    if not isinstance(zone_times, list):
        return None
    zones = [
        (z.get("secs") or 0) if isinstance(z, dict) else 0
        for z in zone_times[:POWER_ZONE_COUNT]
    ]
    return zones if len(zones) == POWER_ZONE_COUNT else None


def normalize_activity(raw: Dict[str, Any]) -> ExternalActivity:
    """Map one intervals.icu activity to an ExternalActivity."""
    activity_type = classify_activity_type(raw)
    start = raw.get("start_date_local") or raw.get("start_date")

    fields = {name: raw.get(source) for name, source in PASSTHROUGH_FIELDS.items()}
    fields["icu_power_zone_times"] = extract_power_zone_times(raw)
    # Drop absent values so the stored record only carries what the feed sent
    fields = {k: v for k, v in fields.items() if v is not None}

    return ExternalActivity(
        external_id=str(raw["id"]),
        activity_type=activity_type,
        date=start.split("T")[0] if start else None,
        start_time=start,
        duration=raw.get("moving_time") or raw.get("elapsed_time") or 0,
        distance=raw.get("distance") or 0,
        title=raw.get("name") or f"{activity_type.value} Workout",
        source=PROVIDER,
        fields=fields,
    )


class IntervalsIcuClient(WorkoutFeed):
    """
    Client for the intervals.icu API v1.

    Authentication is HTTP Basic with the literal username ``API_KEY`` and
    the athlete's API key as password.

    Usage:
        async with IntervalsIcuClient(athlete_id, api_key) as client:
            raw = await client.fetch_activities(date(2026, 1, 26), date.today())
            activities = [client.normalize(r) for r in raw]
    """

    provider = PROVIDER

    def __init__(
        self,
        athlete_id: str,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        max_retries: int = 3,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not athlete_id or not api_key:
            raise FeedNotConfiguredError()
        self.athlete_id = athlete_id
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

    def __repr__(self) -> str:
        return f"IntervalsIcuClient(athlete_id={self.athlete_id!r})"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(
                auth=("API_KEY", self._api_key),
                headers={"Accept": "application/json"},
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._http_client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._http_client is not None and not self._http_client.is_closed:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "IntervalsIcuClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Make an API request with rate limit handling.

        Args:
            method: HTTP method
            endpoint: API endpoint (e.g., "/athlete/i123/activities")
            params: Query parameters

        Returns:
            Decoded JSON response

        Raises:
            AuthenticationError: If the API key or athlete id is rejected
            RateLimitError: If rate limited after all retries
            NetworkError: If intervals.icu cannot be reached
            IntegrationError: For other API errors
        """
        url = f"{self.base_url}{endpoint}"
        client = await self._get_client()

        for attempt in range(self.max_retries):
            try:
                response = await client.request(method, url, params=params)
            except httpx.TimeoutException as e:
                raise NetworkError(f"Timed out reaching intervals.icu: {e}", PROVIDER)
            except httpx.TransportError as e:
                raise NetworkError(f"Network error - unable to reach intervals.icu: {e}", PROVIDER)

            if response.status_code == 200:
                return response.json()

            if response.status_code in (401, 403):
                raise AuthenticationError(
                    f"Invalid API key or athlete ID ({response.status_code})",
                    PROVIDER,
                )

            if response.status_code == 404:
                raise IntegrationError("Athlete not found (404)", PROVIDER, "not_found")

            if response.status_code == 429:
                retry_after = self._get_retry_after(response)
                if attempt < self.max_retries - 1:
                    logger.warning(f"intervals.icu rate limited, retrying in {min(retry_after, 60)}s")
                    await asyncio.sleep(min(retry_after, 60))
                    continue
                raise RateLimitError("Rate limit exceeded (429)", PROVIDER, retry_after)

            try:
                error_data = response.json()
                error_msg = (error_data.get("error") if isinstance(error_data, dict) else None) or str(error_data)
            except ValueError:
                error_msg = response.text or "intervals.icu API error"

            raise IntegrationError(
                f"{error_msg} ({response.status_code})",
                PROVIDER,
                str(response.status_code),
            )

        raise IntegrationError("Max retries exceeded", PROVIDER)

    def _get_retry_after(self, response: httpx.Response) -> int:
        """Get retry-after time from rate limit response."""
        retry_after = response.headers.get("Retry-After")
        if retry_after:
            try:
                return int(retry_after)
            except ValueError:
                pass
        # Fallback to 15 minutes if header not present
        return 900

    async def get_athlete(self) -> Dict[str, Any]:
        return await self._request("GET", f"/athlete/{self.athlete_id}")

    async def test_connection(self) -> bool:
        """Check the credentials by fetching the athlete record."""
        try:
            athlete = await self.get_athlete()
        except IntegrationError as e:
            logger.warning(f"intervals.icu connection test failed: {e}")
            return False
        return isinstance(athlete, dict) and str(athlete.get("id")) == str(self.athlete_id)

    async def fetch_activities(self, start: date, end: date) -> List[Dict[str, Any]]:
        data = await self._request(
            "GET",
            f"/athlete/{self.athlete_id}/activities",
            params={"oldest": start.isoformat(), "newest": end.isoformat()},
        )
        activities = data if isinstance(data, list) else []
        logger.info(f"Fetched {len(activities)} activities from intervals.icu ({start} to {end})")
        return activities

    def normalize(self, raw: Dict[str, Any]) -> ExternalActivity:
        return normalize_activity(raw)

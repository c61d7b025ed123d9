"""
Weather Forecasts via Open-Meteo

DESIGN DECISION: We use Open-Meteo because:
1. Free, no API key
2. Daily aggregates (max/min temperature, snowfall) in one call
3. WMO weather codes, so icons and labels are a fixed lookup table

Weather is decoration for the itinerary. A failed fetch is logged and the
board renders without it; it never blocks the page.
"""

import asyncio
from collections.abc import Mapping, Sequence
from typing import Any, Optional

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from tripboard.config import get_settings
from tripboard.logger import get_logger
from tripboard.models.weather import DailyForecast, SnowboardCondition, WeatherInfo


logger = get_logger(__name__)


# Forecast points along the route
LOCATIONS: dict[str, dict[str, Any]] = {
    "sapporo": {"lat": 43.0618, "lon": 141.3545, "name": "札幌"},
    "chitose": {"lat": 42.8206, "lon": 141.6503, "name": "千歳"},
    "shikotsu": {"lat": 42.7589, "lon": 141.3628, "name": "支笏湖"},
    "jozankei": {"lat": 42.9689, "lon": 141.1667, "name": "定山渓"},
    "rusutsu": {"lat": 42.7500, "lon": 140.8833, "name": "ルスツ"},
}

# WMO weather interpretation codes (https://open-meteo.com/en/docs)
WEATHER_CODES: dict[int, WeatherInfo] = {
    0: WeatherInfo(icon="☀️", label="快晴"),
    1: WeatherInfo(icon="🌤️", label="晴れ"),
    2: WeatherInfo(icon="⛅", label="くもり時々晴れ"),
    3: WeatherInfo(icon="☁️", label="くもり"),
    45: WeatherInfo(icon="🌫️", label="霧"),
    48: WeatherInfo(icon="🌫️", label="霧氷", snow_chance=True),
    51: WeatherInfo(icon="🌧️", label="小雨"),
    53: WeatherInfo(icon="🌧️", label="雨"),
    55: WeatherInfo(icon="🌧️", label="強い雨"),
    56: WeatherInfo(icon="🌨️", label="凍雨", snow_chance=True),
    57: WeatherInfo(icon="🌨️", label="強い凍雨", snow_chance=True),
    61: WeatherInfo(icon="🌧️", label="小雨"),
    63: WeatherInfo(icon="🌧️", label="雨"),
    65: WeatherInfo(icon="🌧️", label="大雨"),
    66: WeatherInfo(icon="🌨️", label="凍雨", snow_chance=True),
    67: WeatherInfo(icon="🌨️", label="強い凍雨", snow_chance=True),
    71: WeatherInfo(icon="🌨️", label="小雪", snow_chance=True),
    73: WeatherInfo(icon="❄️", label="雪", snow_chance=True),
    75: WeatherInfo(icon="❄️", label="大雪", snow_chance=True),
    77: WeatherInfo(icon="🌨️", label="霧雪", snow_chance=True),
    80: WeatherInfo(icon="🌧️", label="にわか雨"),
    81: WeatherInfo(icon="🌧️", label="にわか雨"),
    82: WeatherInfo(icon="⛈️", label="激しいにわか雨"),
    85: WeatherInfo(icon="🌨️", label="にわか雪", snow_chance=True),
    86: WeatherInfo(icon="❄️", label="激しいにわか雪", snow_chance=True),
    95: WeatherInfo(icon="⛈️", label="雷雨"),
    96: WeatherInfo(icon="⛈️", label="雷雨（雹あり）"),
    99: WeatherInfo(icon="⛈️", label="激しい雷雨"),
}

UNKNOWN_WEATHER = WeatherInfo(icon="❓", label="不明")

DAILY_VARIABLES = (
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
    "snowfall_sum",
)


class WeatherError(Exception):
    """Base exception for weather fetch errors."""
    pass


class WeatherResponseError(WeatherError):
    """The forecast response was not in the expected shape."""
    pass


def get_weather_info(code: int) -> WeatherInfo:
    """Icon and label for a WMO weather code."""
    return WEATHER_CODES.get(code, UNKNOWN_WEATHER)


def get_snowboard_condition(
    weather_code: int,
    snowfall: float,
    temp_max: float,
    temp_min: float,
) -> SnowboardCondition:
    """
    Rate the day for snowboarding. First matching rule wins:

    1. 10cm+ of fresh snow -> powder day
    2. Snowing and staying below freezing -> good riding
    3. Clear/cloudy, below freezing, not brutally cold -> perfect day
    4. Max 5°C or less -> rideable
    5. Otherwise -> warm
    """
    weather = get_weather_info(weather_code)

    if snowfall >= 10:
        return SnowboardCondition(label="🎿 パウダー日和！", color="#4ecdc4")

    if weather.snow_chance and temp_max <= 0:
        return SnowboardCondition(label="❄️ スノボ日和！", color="#4ecdc4")

    if weather_code <= 3 and temp_max <= 0 and temp_min >= -15:
        return SnowboardCondition(label="☀️ 絶好のスノボ日和！", color="#ff6b9d")

    if temp_max <= 5:
        return SnowboardCondition(label="🏂 滑れる！", color="#6b89ff")

    return SnowboardCondition(label="🌡️ 暖かめ", color="#ffaa00")


def parse_daily_forecast(payload: Mapping[str, Any], location_name: str) -> list[DailyForecast]:
    """
    Turn an Open-Meteo ``daily`` block into one DailyForecast per day.

    Raises:
        WeatherResponseError: if the payload is missing expected arrays
    """
    try:
        daily = payload["daily"]
        days = daily["time"]
        columns = {name: daily[name] for name in DAILY_VARIABLES}
    except (KeyError, TypeError) as e:
        raise WeatherResponseError(f"Unexpected forecast payload: missing {e}")

    if not isinstance(days, list):
        raise WeatherResponseError("Unexpected forecast payload: 'time' is not a list")
    short = sorted(
        name for name, values in columns.items()
        if not isinstance(values, list) or len(values) != len(days)
    )
    if short:
        raise WeatherResponseError(
            f"Forecast columns don't match the {len(days)} days: {', '.join(short)}"
        )

    forecasts = []
    for i, day in enumerate(days):
        code = int(columns["weather_code"][i])
        info = get_weather_info(code)
        temp_max = columns["temperature_2m_max"][i]
        temp_min = columns["temperature_2m_min"][i]
        # Open-Meteo reports null for days it has no data on
        snowfall = columns["snowfall_sum"][i] or 0.0
        precipitation = columns["precipitation_sum"][i] or 0.0

        forecasts.append(DailyForecast(
            date=day,
            location=location_name,
            weather_code=code,
            weather_icon=info.icon,
            weather_label=info.label,
            temp_max=temp_max,
            temp_min=temp_min,
            snowfall=snowfall,
            precipitation=precipitation,
            snowboard_condition=get_snowboard_condition(code, snowfall, temp_max, temp_min),
        ))

    return forecasts


def get_forecast_for_date(
    forecasts: Sequence[DailyForecast],
    target_date: str,
) -> Optional[DailyForecast]:
    """The forecast for ``target_date`` (YYYY-MM-DD), if there is one."""
    for forecast in forecasts:
        if forecast.date == target_date:
            return forecast
    return None


class OpenMeteoWeatherService:
    """
    Fetches daily forecasts for the trip's locations.

    IMPORTANT: Fetch failures never raise to the caller. They are logged
    and an empty forecast is returned.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        self._settings = get_settings().weather
        self._session = session or requests.Session()

    @retry(
        retry=retry_if_exception_type(requests.RequestException),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=5),
        reraise=True,
    )
    def _get_json(self, lat: float, lon: float) -> dict:
        response = self._session.get(
            self._settings.base_url,
            params={
                "latitude": lat,
                "longitude": lon,
                "daily": ",".join(DAILY_VARIABLES),
                "timezone": self._settings.timezone,
                "forecast_days": self._settings.forecast_days,
            },
            timeout=self._settings.request_timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def fetch_forecast(
        self,
        lat: float,
        lon: float,
        location_name: str,
    ) -> list[DailyForecast]:
        """
        Daily forecasts for one point.

        Returns:
            One entry per day, or [] if the fetch failed
        """
        try:
            payload = await asyncio.to_thread(self._get_json, lat, lon)
            return parse_daily_forecast(payload, location_name)
        except (requests.RequestException, ValueError, TypeError, WeatherError) as e:
            logger.warning(
                "weather_fetch_failed",
                location=location_name,
                error=str(e),
            )
            return []

    async def fetch_multi_location(
        self,
        locations: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ) -> dict[str, list[DailyForecast]]:
        """Forecasts for every location, keyed like ``LOCATIONS``."""
        locations = locations or LOCATIONS
        results = {}

        for key, loc in locations.items():
            results[key] = await self.fetch_forecast(loc["lat"], loc["lon"], loc["name"])

        return results

"""Weather forecast services package."""

from tripboard.services.weather.open_meteo import (
    LOCATIONS,
    WEATHER_CODES,
    OpenMeteoWeatherService,
    WeatherError,
    WeatherResponseError,
    get_forecast_for_date,
    get_snowboard_condition,
    get_weather_info,
    parse_daily_forecast,
)

__all__ = [
    "LOCATIONS",
    "WEATHER_CODES",
    "OpenMeteoWeatherService",
    "WeatherError",
    "WeatherResponseError",
    "get_forecast_for_date",
    "get_snowboard_condition",
    "get_weather_info",
    "parse_daily_forecast",
]

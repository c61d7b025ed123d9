"""Services package."""

from tripboard.services.storage import (
    ConnectionError,
    InMemoryTripStore,
    InvalidUpdateError,
    NotFoundError,
    StorageError,
    TripDocumentStore,
)
from tripboard.services.weather import (
    OpenMeteoWeatherService,
    WeatherError,
    WeatherResponseError,
)

__all__ = [
    # Storage services
    "ConnectionError",
    "InMemoryTripStore",
    "InvalidUpdateError",
    "NotFoundError",
    "StorageError",
    "TripDocumentStore",
    # Weather services
    "OpenMeteoWeatherService",
    "WeatherError",
    "WeatherResponseError",
]

"""Weather forecast models shown next to each day of the itinerary."""

from pydantic import BaseModel, ConfigDict, Field


class WeatherInfo(BaseModel):
    """Display data for one WMO weather code."""
    model_config = ConfigDict(frozen=True)

    icon: str
    label: str
    snow_chance: bool = False


class SnowboardCondition(BaseModel):
    """How good the day looks for riding, with a badge colour."""
    model_config = ConfigDict(frozen=True)

    label: str
    color: str = Field(..., pattern="^#[0-9a-fA-F]{6}$")


class DailyForecast(BaseModel):
    """One day of forecast for one location."""

    date: str = Field(..., description="YYYY-MM-DD in the trip timezone")
    location: str
    weather_code: int
    weather_icon: str
    weather_label: str
    temp_max: float
    temp_min: float
    snowfall: float = Field(default=0.0, ge=0)
    precipitation: float = Field(default=0.0, ge=0)
    snowboard_condition: SnowboardCondition

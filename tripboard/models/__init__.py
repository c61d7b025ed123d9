"""
Data Models Package

This package contains all Pydantic models used in Trip Board.
All data read from or written to the shared document conforms to these schemas.
"""

from tripboard.models.trip import (
    EDITABLE_TEXT_FIELDS,
    Accommodation,
    Airport,
    ChecklistItem,
    Comment,
    CostLine,
    CostRange,
    Costs,
    DaySchedule,
    Expense,
    ExpenseDraft,
    FlightLeg,
    Flights,
    PerPersonCost,
    Sauna,
    Spot,
    TimelineItem,
    TripDocument,
)
from tripboard.models.settlement import SettlementView, Transfer
from tripboard.models.validation import ValidationIssue, ValidationResult
from tripboard.models.weather import DailyForecast, SnowboardCondition, WeatherInfo

__all__ = [
    # Document models
    "EDITABLE_TEXT_FIELDS",
    "Accommodation",
    "Airport",
    "ChecklistItem",
    "Comment",
    "CostLine",
    "CostRange",
    "Costs",
    "DaySchedule",
    "Expense",
    "ExpenseDraft",
    "FlightLeg",
    "Flights",
    "PerPersonCost",
    "Sauna",
    "Spot",
    "TimelineItem",
    "TripDocument",
    # Settlement models
    "SettlementView",
    "Transfer",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
    # Weather models
    "DailyForecast",
    "SnowboardCondition",
    "WeatherInfo",
]

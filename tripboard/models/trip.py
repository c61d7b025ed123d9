"""
Trip Document Models

The whole trip lives in ONE shared document. These models describe its
shape so every reader and writer agrees on it.

DESIGN DECISION: Field names are snake_case in Python but camelCase on
the wire (``paidBy``, ``splitAmong``, ``updatedAt``), matching what is
stored in the document. Unknown top-level fields are kept as-is so an
older page never drops data a newer page wrote.
"""

from datetime import datetime, timezone
from typing import Optional, Union
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid4().hex


class DocumentModel(BaseModel):
    """Base for every part of the trip document."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    def to_wire(self) -> dict:
        """Dump in the stored (camelCase, JSON-safe) shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# EXPENSE LEDGER
# =============================================================================

class Expense(DocumentModel):
    """
    One recorded payment: who paid, how much, who shares the cost.

    Expenses are only ever appended or removed, never edited in place.
    """

    id: str = Field(
        default_factory=_new_id,
        min_length=1,
        description="Stable identifier for the lifetime of the expense"
    )
    paid_by: str = Field(
        ...,
        min_length=1,
        description="Member who fronted the money"
    )
    description: str = Field(
        default="",
        max_length=200,
        description="Free text label"
    )
    amount: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Amount in whole yen"
    )
    split_among: list[str] = Field(
        ...,
        min_length=1,
        description="Members who share the cost (may include the payer)"
    )
    date: datetime = Field(
        default_factory=_utcnow,
        description="When the expense was recorded (informational only)"
    )

    @field_validator('split_among')
    @classmethod
    def dedupe_split(cls, v: list[str]) -> list[str]:
        """Collapse duplicate participants, keeping first-seen order."""
        seen = []
        for member in v:
            member = member.strip()
            if member and member not in seen:
                seen.append(member)
        if not seen:
            raise ValueError("split_among must name at least one member")
        return seen


class ExpenseDraft(DocumentModel):
    """
    Expense input as typed into the form, BEFORE validation.

    All fields are optional because the form might be half-filled.
    This is never stored; only an ``Expense`` is.
    """

    paid_by: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[float] = None
    split_among: list[str] = Field(default_factory=list)


class Comment(DocumentModel):
    """A free-form note left on the board."""

    id: str = Field(default_factory=_new_id)
    author: str = Field(..., min_length=1, max_length=50)
    text: str = Field(..., min_length=1, max_length=1000)
    date: datetime = Field(default_factory=_utcnow)


# =============================================================================
# ITINERARY
# =============================================================================

class Airport(DocumentModel):
    code: str
    name: str
    time: str


class FlightLeg(DocumentModel):
    date: str
    from_airport: Airport = Field(..., alias="from")
    to_airport: Airport = Field(..., alias="to")
    airline: str
    duration: str


class Flights(DocumentModel):
    outbound: FlightLeg
    inbound: FlightLeg


class Accommodation(DocumentModel):
    name: str
    address: str = ""
    details: str = ""
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    access: str = ""
    checkin: str = ""
    checkout: str = ""
    url: Optional[str] = None


class TimelineItem(DocumentModel):
    time: str = ""
    title: str
    desc: str = ""
    url: Optional[str] = None
    is_drive: bool = False
    highlight: bool = False
    tag: Optional[str] = None


class DaySchedule(DocumentModel):
    day: int = Field(..., ge=1)
    date: str
    title: str
    title_url: Optional[str] = None
    timeline: list[TimelineItem] = Field(default_factory=list)


class Spot(DocumentModel):
    name: str
    address: str = ""
    phone: str = ""
    hours: str = ""
    closed: str = ""


class Sauna(DocumentModel):
    name: str
    feature: str = ""
    price: str = ""
    hours: str = ""


class ChecklistItem(DocumentModel):
    text: str
    done: bool = False
    result: Optional[str] = None
    options: Optional[str] = None


# =============================================================================
# COST ESTIMATES (planning figures, separate from the expense ledger)
# =============================================================================

class CostLine(DocumentModel):
    label: str
    # Either an exact figure or a free-text range like "10,000〜15,000"
    amount: Union[int, str]
    note: Optional[str] = None


class CostRange(DocumentModel):
    min: int = Field(..., ge=0)
    max: int = Field(..., ge=0)


class PerPersonCost(CostRange):
    people: int = Field(..., ge=1)


class Costs(DocumentModel):
    shared: list[CostLine] = Field(default_factory=list)
    shared_total: Optional[CostRange] = None
    per_person: Optional[PerPersonCost] = None
    individual: list[CostLine] = Field(default_factory=list)
    note: Optional[str] = None


# =============================================================================
# THE DOCUMENT
# =============================================================================

class TripDocument(DocumentModel):
    """
    The single shared trip document.

    CRITICAL: Balances and settlements are NOT fields here. They are
    always re-derived from ``members`` and ``expenses``.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="allow",
    )

    title: str
    dates: str = ""
    subtitle: str = ""
    flight: Optional[Flights] = None
    accommodation: Optional[Accommodation] = None
    days: list[DaySchedule] = Field(default_factory=list)
    spots: dict[str, Spot] = Field(default_factory=dict)
    saunas: list[Sauna] = Field(default_factory=list)
    checklist: list[ChecklistItem] = Field(default_factory=list)
    costs: Optional[Costs] = None

    members: list[str] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    playlist_url: Optional[str] = None

    updated_at: datetime = Field(default_factory=_utcnow)

    @field_validator('members')
    @classmethod
    def members_unique(cls, v: list[str]) -> list[str]:
        """Member names must be unique within the trip."""
        cleaned = [m.strip() for m in v]
        if len(set(cleaned)) != len(cleaned):
            raise ValueError("Member names must be unique")
        return cleaned

    def find_expense(self, expense_id: str) -> Optional[Expense]:
        """Look up an expense by id."""
        for expense in self.expenses:
            if expense.id == expense_id:
                return expense
        return None


# Top-level document fields that may be edited in place as plain text.
EDITABLE_TEXT_FIELDS = frozenset({"title", "dates", "subtitle"})

"""
Tests for Trip Board models

Test strategy:
1. Unit tests for individual components (models, validators, engine)
2. Flow tests for the board against the in-memory store
3. No real API calls in tests (use mocks)
"""

import pytest
from datetime import datetime
from pydantic import ValidationError

from tripboard.models.settlement import SettlementView, Transfer
from tripboard.models.trip import (
    Comment,
    Expense,
    ExpenseDraft,
    FlightLeg,
    TripDocument,
)
from tripboard.models.validation import ValidationIssue, ValidationResult
from tripboard.models.weather import SnowboardCondition
from tripboard.seed import build_initial_document


class TestExpenseModel:
    """Tests for the Expense model."""

    def test_expense_creation(self):
        """Test Expense model creation with defaults."""
        expense = Expense(
            paid_by="Aki",
            description="ガソリン",
            amount=4800,
            split_among=["Aki", "Ben"],
        )
        assert expense.paid_by == "Aki"
        assert expense.amount == 4800
        assert len(expense.id) == 32
        assert expense.date.tzinfo is not None

    def test_ids_are_unique(self):
        first = Expense(paid_by="A", amount=1, split_among=["A"])
        second = Expense(paid_by="A", amount=1, split_among=["A"])
        assert first.id != second.id

    def test_accepts_wire_names(self):
        """Test that camelCase keys from the document are accepted."""
        expense = Expense.model_validate({
            "id": "abc",
            "paidBy": "Aki",
            "description": "駐車場",
            "amount": 1000,
            "splitAmong": ["Aki", "Ben"],
            "date": "2026-01-11T10:00:00+09:00",
        })
        assert expense.paid_by == "Aki"
        assert expense.split_among == ["Aki", "Ben"]

    def test_to_wire_uses_camel_case(self):
        expense = Expense(id="abc", paid_by="Aki", amount=1000, split_among=["Ben"])
        wire = expense.to_wire()
        assert wire["paidBy"] == "Aki"
        assert wire["splitAmong"] == ["Ben"]
        assert "paid_by" not in wire
        assert isinstance(wire["date"], str)

    def test_split_is_deduplicated(self):
        """Test duplicate participants collapse, keeping order."""
        expense = Expense(paid_by="A", amount=90, split_among=["B", " A ", "B", "C"])
        assert expense.split_among == ["B", "A", "C"]

    def test_empty_split_rejected(self):
        with pytest.raises(ValidationError):
            Expense(paid_by="A", amount=90, split_among=[])

    def test_blank_split_rejected(self):
        with pytest.raises(ValidationError):
            Expense(paid_by="A", amount=90, split_among=["  ", ""])

    @pytest.mark.parametrize("amount", [0, -100])
    def test_non_positive_amount_rejected(self, amount):
        with pytest.raises(ValidationError):
            Expense(paid_by="A", amount=amount, split_among=["A"])

    @pytest.mark.parametrize("amount", [float("inf"), float("nan"), "Infinity"])
    def test_non_finite_amount_rejected(self, amount):
        with pytest.raises(ValidationError):
            Expense(paid_by="A", amount=amount, split_among=["A"])

    def test_description_too_long(self):
        with pytest.raises(ValidationError):
            Expense(paid_by="A", amount=1, split_among=["A"], description="x" * 201)

    def test_draft_allows_missing_fields(self):
        draft = ExpenseDraft()
        assert draft.paid_by is None
        assert draft.amount is None
        assert draft.split_among == []


class TestTripDocument:
    """Tests for the shared trip document."""

    def test_seed_document_is_valid(self):
        """The initial trip content parses as a TripDocument."""
        document = build_initial_document()
        assert document.title == "北海道旅行 2026"
        assert len(document.days) == 3
        assert document.members == []
        assert document.expenses == []
        assert document.costs.per_person.people == 5

    def test_flight_uses_from_and_to(self):
        document = build_initial_document()
        leg = document.flight.outbound
        assert leg.from_airport.code == "HND"
        assert leg.to_airport.code == "CTS"

        wire = leg.to_wire()
        assert wire["from"]["code"] == "HND"
        assert wire["to"]["code"] == "CTS"

    def test_flight_leg_by_field_name(self):
        leg = FlightLeg(
            date="1月11日",
            from_airport={"code": "HND", "name": "羽田", "time": "06:45"},
            to_airport={"code": "CTS", "name": "新千歳", "time": "08:20"},
            airline="SKY",
            duration="1h35m",
        )
        assert leg.to_wire()["from"]["name"] == "羽田"

    def test_timeline_flags_round_trip_names(self):
        document = build_initial_document()
        drive = document.days[0].timeline[2]
        assert drive.is_drive is True
        assert document.to_wire()["days"][0]["timeline"][2]["isDrive"] is True

    def test_duplicate_members_rejected(self):
        with pytest.raises(ValidationError):
            TripDocument(title="t", members=["A", "B", "A"])

    def test_unknown_fields_are_kept(self):
        """Fields written by a newer page survive a round trip."""
        document = TripDocument.model_validate({"title": "t", "packingList": ["ゴーグル"]})
        assert document.to_wire()["packingList"] == ["ゴーグル"]

    def test_find_expense(self):
        expense = Expense(id="e1", paid_by="A", amount=10, split_among=["A"])
        document = TripDocument(title="t", members=["A"], expenses=[expense])
        assert document.find_expense("e1") == expense
        assert document.find_expense("missing") is None

    def test_updated_at_defaults_to_now(self):
        document = TripDocument(title="t")
        assert isinstance(document.updated_at, datetime)
        assert "updatedAt" in document.to_wire()

    def test_comment_limits(self):
        assert Comment(author="Aki", text="楽しみ！").author == "Aki"
        with pytest.raises(ValidationError):
            Comment(author="", text="hi")
        with pytest.raises(ValidationError):
            Comment(author="Aki", text="x" * 1001)


class TestSettlementModels:
    """Tests for Transfer and SettlementView."""

    def test_transfer_serializes_from_to(self):
        transfer = Transfer(from_member="B", to_member="A", amount=100)
        assert transfer.to_wire() == {"from": "B", "to": "A", "amount": 100}

    def test_transfer_from_wire(self):
        transfer = Transfer.model_validate({"from": "B", "to": "A", "amount": 5})
        assert transfer.from_member == "B"

    def test_self_transfer_rejected(self):
        with pytest.raises(ValidationError):
            Transfer(from_member="A", to_member="A", amount=10)

    def test_zero_transfer_rejected(self):
        with pytest.raises(ValidationError):
            Transfer(from_member="B", to_member="A", amount=0)

    def test_transfer_is_frozen(self):
        transfer = Transfer(from_member="B", to_member="A", amount=100)
        with pytest.raises(ValidationError):
            transfer.amount = 5

    def test_settlement_view_is_settled(self):
        assert SettlementView().is_settled is True
        view = SettlementView(transfers=[Transfer(from_member="B", to_member="A", amount=1)])
        assert view.is_settled is False


class TestValidationModels:
    """Tests for validation-related models."""

    def test_validation_issue_creation(self):
        issue = ValidationIssue(
            field="amount",
            issue_type="invalid_value",
            message="Amount must be greater than zero",
            severity="error",
            suggested_fix="Enter the amount paid in yen",
        )
        assert issue.severity == "error"

    def test_invalid_severity_rejected(self):
        with pytest.raises(ValidationError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")

    def test_validation_result_counts(self):
        result = ValidationResult(
            schema_valid=False,
            semantic_valid=False,
            is_valid=False,
            issues=[
                ValidationIssue(field="a", issue_type="missing", message="m", severity="error"),
                ValidationIssue(field="b", issue_type="suspicious_value", message="w", severity="warning"),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1


class TestWeatherModels:
    """Tests for weather display models."""

    def test_condition_color_must_be_hex(self):
        assert SnowboardCondition(label="ok", color="#4ecdc4").color == "#4ecdc4"
        with pytest.raises(ValidationError):
            SnowboardCondition(label="ok", color="teal")

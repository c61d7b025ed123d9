"""
Tests for the two-stage expense validator.
"""

import pytest

from tripboard.models.trip import Expense, ExpenseDraft
from tripboard.settlement import InvalidExpenseError
from tripboard.validation import ExpenseValidator


MEMBERS = ["Aki", "Ben", "Chie"]


@pytest.fixture
def validator():
    return ExpenseValidator(max_expense_amount=100_000)


def draft(**overrides):
    fields = {
        "paid_by": "Aki",
        "description": "レンタカー",
        "amount": 31000,
        "split_among": ["Aki", "Ben", "Chie"],
    }
    fields.update(overrides)
    return ExpenseDraft(**fields)


def issue_types(result):
    return {(i.field, i.issue_type) for i in result.issues}


class TestSchemaValidation:
    """Stage 1: required fields and basic shape."""

    def test_valid_draft(self, validator):
        result = validator.validate(draft(), MEMBERS)
        assert result.is_valid
        assert result.schema_valid
        assert result.semantic_valid
        assert result.issues == []

    def test_missing_payer(self, validator):
        result = validator.validate(draft(paid_by=None), MEMBERS)
        assert not result.schema_valid
        assert ("paid_by", "missing") in issue_types(result)

    def test_blank_payer_is_missing(self, validator):
        result = validator.validate(draft(paid_by="   "), MEMBERS)
        assert ("paid_by", "missing") in issue_types(result)

    def test_missing_description(self, validator):
        result = validator.validate(draft(description=""), MEMBERS)
        assert ("description", "missing") in issue_types(result)

    def test_description_too_long(self, validator):
        result = validator.validate(draft(description="x" * 201), MEMBERS)
        assert ("description", "too_long") in issue_types(result)

    def test_missing_amount(self, validator):
        result = validator.validate(draft(amount=None), MEMBERS)
        assert ("amount", "missing") in issue_types(result)

    @pytest.mark.parametrize("amount", [0, -500])
    def test_non_positive_amount(self, validator, amount):
        result = validator.validate(draft(amount=amount), MEMBERS)
        assert not result.is_valid
        assert ("amount", "invalid_value") in issue_types(result)

    @pytest.mark.parametrize("amount", [float("inf"), float("nan")])
    def test_non_finite_amount(self, validator, amount):
        result = validator.validate(draft(amount=amount), MEMBERS)
        assert not result.is_valid
        assert ("amount", "invalid_value") in issue_types(result)

    def test_non_finite_amount_never_becomes_expense(self, validator):
        with pytest.raises(InvalidExpenseError):
            validator.ensure_valid(draft(amount=float("inf")), MEMBERS)

    def test_empty_split(self, validator):
        result = validator.validate(draft(split_among=[]), MEMBERS)
        assert not result.is_valid
        assert ("split_among", "empty") in issue_types(result)

    def test_semantic_stage_skipped_on_schema_failure(self, validator):
        """An unknown payer isn't reported when the amount is already wrong."""
        result = validator.validate(draft(paid_by="Zed", amount=0), MEMBERS)
        assert not result.semantic_valid
        assert ("paid_by", "unknown_member") not in issue_types(result)

    def test_reports_every_schema_problem(self, validator):
        result = validator.validate(ExpenseDraft(), MEMBERS)
        assert result.error_count == 4


class TestSemanticValidation:
    """Stage 2: membership and plausibility."""

    def test_unknown_payer(self, validator):
        result = validator.validate(draft(paid_by="Zed"), MEMBERS)
        assert not result.is_valid
        assert ("paid_by", "unknown_member") in issue_types(result)

    def test_unknown_participant(self, validator):
        result = validator.validate(draft(split_among=["Aki", "Zed"]), MEMBERS)
        assert not result.is_valid
        issue = next(i for i in result.issues if i.issue_type == "unknown_member")
        assert "Zed" in issue.message

    def test_large_amount_is_warning(self, validator):
        """Suspiciously large amounts warn but don't block."""
        result = validator.validate(draft(amount=250_000), MEMBERS)
        assert result.is_valid
        assert len(result.warnings) == 1
        assert ("amount", "suspicious_value") in issue_types(result)

    def test_self_only_split_is_info(self, validator):
        result = validator.validate(draft(split_among=["Aki"]), MEMBERS)
        assert result.is_valid
        assert ("split_among", "self_only") in issue_types(result)
        assert result.warnings == []

    def test_default_limit_from_settings(self):
        validator = ExpenseValidator()
        result = validator.validate(draft(amount=999_999), MEMBERS)
        assert result.warnings == []


class TestEnsureValid:
    """Tests for ensure_valid."""

    def test_returns_expense(self, validator):
        expense = validator.ensure_valid(draft(), MEMBERS)
        assert isinstance(expense, Expense)
        assert expense.paid_by == "Aki"
        assert expense.split_among == ["Aki", "Ben", "Chie"]

    def test_raises_with_error_issues(self, validator):
        with pytest.raises(InvalidExpenseError) as exc_info:
            validator.ensure_valid(draft(split_among=[]), MEMBERS)
        assert [i.issue_type for i in exc_info.value.issues] == ["empty"]

    def test_warnings_do_not_block(self, validator):
        expense = validator.ensure_valid(draft(amount=500_000), MEMBERS)
        assert expense.amount == 500_000


class TestUserFriendlySummary:
    """Tests for the form summary text."""

    def test_clean_result(self, validator):
        result = validator.validate(draft(), MEMBERS)
        assert validator.get_user_friendly_summary(result) == "✅ Looks good!"

    def test_errors_listed_with_fixes(self, validator):
        result = validator.validate(draft(amount=0), MEMBERS)
        summary = validator.get_user_friendly_summary(result)
        assert summary.startswith("❌ Please fix the following:")
        assert "Amount must be a number greater than zero" in summary
        assert "💡 Enter the amount paid in yen" in summary

    def test_warnings_listed(self, validator):
        result = validator.validate(draft(amount=250_000), MEMBERS)
        summary = validator.get_user_friendly_summary(result)
        assert "⚠️ Please verify the following:" in summary

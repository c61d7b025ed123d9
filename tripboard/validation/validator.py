"""
Two-Stage Expense Validation

DESIGN DECISION: Validation happens in two distinct stages:

STAGE 1 - SCHEMA VALIDATION:
- Payer and description present
- Amount present and positive
- At least one participant in the split

STAGE 2 - SEMANTIC VALIDATION:
- Payer and participants are registered trip members
- Unusually large amounts
- Splits that cannot change anyone's balance

Stage 2 only runs when stage 1 passes.

IMPORTANT: Validation NEVER silently fixes issues. An empty split is
rejected here, before it can reach the settlement engine.
"""

import math
from collections.abc import Sequence
from typing import Optional

from tripboard.config import get_settings
from tripboard.models.trip import Expense, ExpenseDraft
from tripboard.models.validation import ValidationIssue, ValidationResult
from tripboard.settlement import InvalidExpenseError


class ExpenseValidator:
    """
    Validates expense input before it is added to the ledger.
    """

    def __init__(self, max_expense_amount: Optional[int] = None):
        """
        Initialize validator.

        Args:
            max_expense_amount: Amounts above this are flagged with a warning.
                               Defaults to the configured value.
        """
        if max_expense_amount is None:
            max_expense_amount = get_settings().app.max_expense_amount
        self._max_amount = max_expense_amount

    def _validate_schema(
        self,
        draft: ExpenseDraft,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 1: Schema validation.

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        if not draft.paid_by:
            issues.append(ValidationIssue(
                field="paid_by",
                issue_type="missing",
                message="Who paid is required",
                severity="error",
                suggested_fix="Pick the member who paid",
            ))

        if not draft.description:
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="A description is required",
                severity="error",
                suggested_fix="Say what the money was spent on",
            ))
        elif len(draft.description) > 200:
            issues.append(ValidationIssue(
                field="description",
                issue_type="too_long",
                message="Description must be 200 characters or fewer",
                severity="error",
            ))

        if draft.amount is None:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
                severity="error",
            ))
        elif not (math.isfinite(draft.amount) and draft.amount > 0):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be a number greater than zero",
                severity="error",
                suggested_fix="Enter the amount paid in yen",
            ))

        if not [m for m in draft.split_among if m and m.strip()]:
            issues.append(ValidationIssue(
                field="split_among",
                issue_type="empty",
                message="Select at least one member to split with",
                severity="error",
                suggested_fix="Tick everyone who shares this cost",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)

        return is_valid, issues

    def _validate_semantic(
        self,
        draft: ExpenseDraft,
        members: Sequence[str],
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 2: Semantic validation.

        Returns: (is_valid, list_of_issues)
        """
        issues = []
        roster = set(members)

        if draft.paid_by not in roster:
            issues.append(ValidationIssue(
                field="paid_by",
                issue_type="unknown_member",
                message=f"'{draft.paid_by}' is not a member of this trip",
                severity="error",
                suggested_fix="Add them as a member first",
            ))

        unknown = [m for m in draft.split_among if m not in roster]
        if unknown:
            issues.append(ValidationIssue(
                field="split_among",
                issue_type="unknown_member",
                message=f"Not members of this trip: {', '.join(unknown)}",
                severity="error",
                suggested_fix="Add them as members first",
            ))

        if draft.amount > self._max_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount (¥{draft.amount:,.0f}) seems unusually high",
                severity="warning",
                suggested_fix="Please verify this amount is correct",
            ))

        if set(draft.split_among) == {draft.paid_by}:
            issues.append(ValidationIssue(
                field="split_among",
                issue_type="self_only",
                message="Only the payer shares this cost, so no one owes anything for it",
                severity="info",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)

        return is_valid, issues

    def validate(
        self,
        draft: ExpenseDraft,
        members: Sequence[str],
    ) -> ValidationResult:
        """
        Run full two-stage validation pipeline.

        Args:
            draft: The expense as entered
            members: Current trip members

        Returns:
            ValidationResult with all issues found
        """
        all_issues = []

        schema_valid, schema_issues = self._validate_schema(draft)
        all_issues.extend(schema_issues)

        semantic_valid = False
        if schema_valid:
            semantic_valid, semantic_issues = self._validate_semantic(draft, members)
            all_issues.extend(semantic_issues)

        warnings = [i.message for i in all_issues if i.severity == "warning"]

        return ValidationResult(
            schema_valid=schema_valid,
            semantic_valid=semantic_valid,
            is_valid=schema_valid and semantic_valid,
            issues=all_issues,
            warnings=warnings,
        )

    def ensure_valid(
        self,
        draft: ExpenseDraft,
        members: Sequence[str],
    ) -> Expense:
        """
        Validate and build the Expense to store.

        Raises:
            InvalidExpenseError: carrying the error-level issues
        """
        result = self.validate(draft, members)
        if not result.is_valid:
            errors = [i for i in result.issues if i.severity == "error"]
            raise InvalidExpenseError(
                "; ".join(i.message for i in errors),
                issues=errors,
            )

        return Expense(
            paid_by=draft.paid_by,
            description=draft.description,
            amount=draft.amount,
            split_among=draft.split_among,
        )

    def get_user_friendly_summary(
        self,
        result: ValidationResult,
    ) -> str:
        """Short message for the expense form."""
        if result.is_valid and not result.warnings:
            return "✅ Looks good!"

        lines = []

        errors = [i for i in result.issues if i.severity == "error"]
        if errors:
            lines.append("❌ Please fix the following:")
            for issue in errors:
                lines.append(f"   • {issue.message}")
                if issue.suggested_fix:
                    lines.append(f"     💡 {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Please verify the following:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)

"""
Settlement Engine

Turns the expense ledger into who-pays-whom.

Two steps:
1. BALANCES - every member's net position from the full expense list.
   Positive means the member is owed money, negative means they owe.
2. SETTLEMENTS - a short list of pairwise transfers that brings every
   balance back to zero, found by greedy largest-debt-first matching.

DESIGN DECISION: Nothing here is stored. Balances are re-derived from the
whole ledger on every call so they can never drift from the expenses.
Every call works on its own copies, so the engine is safe to call from
any number of readers at once.

DESIGN DECISION: Shares are divided with real arithmetic. Only the amount
shown on each transfer is rounded to whole yen; the running remainders
used for matching are never rounded, which keeps the pass zero-sum.

The greedy matching is deterministic but NOT a minimum-transaction solver.
Ties keep the member order given by the caller.
"""

import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Union

from pydantic import ValidationError

from tripboard.models.settlement import Transfer
from tripboard.models.trip import Expense


DEFAULT_TOLERANCE = 1.0

ExpenseInput = Union[Expense, Mapping]


class SettlementInputError(ValueError):
    """Base exception for input the engine refuses to compute on."""
    pass


class InvalidExpenseError(SettlementInputError):
    """An expense is malformed (non-positive amount, empty split, ...)."""

    def __init__(self, message: str, expense_id: str = None, issues: list = None):
        self.expense_id = expense_id
        self.issues = issues or []
        super().__init__(message)


class UnknownMemberError(InvalidExpenseError):
    """An expense names someone who is not a member of the trip."""

    def __init__(self, member: str, expense_id: str = None):
        self.member = member
        super().__init__(
            f"'{member}' is not a member of this trip",
            expense_id=expense_id,
        )


class DuplicateMemberError(SettlementInputError):
    """The same member name appears more than once."""
    pass


class SettlementInvariantError(AssertionError):
    """
    Debts and credits failed to cancel out.

    This is a bookkeeping bug, not a user error.
    """
    pass


def _coerce_expense(expense: ExpenseInput) -> Expense:
    """Accept an Expense or a stored mapping; reject anything invalid."""
    if isinstance(expense, Expense):
        candidate = expense
    else:
        try:
            candidate = Expense.model_validate(expense)
        except ValidationError as e:
            expense_id = expense.get("id") if isinstance(expense, Mapping) else None
            raise InvalidExpenseError(
                f"Invalid expense: {e.error_count()} problem(s)",
                expense_id=expense_id,
                issues=e.errors(include_url=False),
            ) from e

    # Models built with model_construct() skip field validation
    if not candidate.split_among:
        raise InvalidExpenseError(
            "Expense must be split among at least one member",
            expense_id=candidate.id,
        )
    if not (math.isfinite(candidate.amount) and candidate.amount > 0):
        raise InvalidExpenseError(
            f"Expense amount must be positive and finite, got {candidate.amount}",
            expense_id=candidate.id,
        )
    return candidate


def _roster(members: Sequence[str]) -> list[str]:
    roster = list(members)
    if len(set(roster)) != len(roster):
        duplicates = sorted({m for m in roster if roster.count(m) > 1})
        raise DuplicateMemberError(f"Duplicate member names: {', '.join(duplicates)}")
    return roster


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_balances(
    members: Sequence[str],
    expenses: Iterable[ExpenseInput],
) -> dict[str, float]:
    """
    Net position of every member.

    Every member appears in the result, at 0.0 if untouched by any
    expense. The payer is credited the full amount and each participant
    is debited an equal share, so the values always sum to (about) zero.

    Raises:
        InvalidExpenseError: non-positive amount or empty split
        UnknownMemberError: payer or participant not in ``members``
        DuplicateMemberError: a name appears twice in ``members``
    """
    balances = {member: 0.0 for member in _roster(members)}

    for raw in expenses:
        expense = _coerce_expense(raw)

        for member in [expense.paid_by, *expense.split_among]:
            if member not in balances:
                raise UnknownMemberError(member, expense_id=expense.id)

        share = expense.amount / len(expense.split_among)
        balances[expense.paid_by] += expense.amount
        for member in expense.split_among:
            balances[member] -= share

    return balances


def compute_settlements(
    members: Sequence[str],
    expenses: Iterable[ExpenseInput],
    tolerance: float = DEFAULT_TOLERANCE,
) -> list[Transfer]:
    """
    Transfers that settle every balance, in the order they were matched.

    Members within ``tolerance`` of zero are treated as settled. The
    largest remaining debtor always pays the largest remaining creditor
    as much as either side needs; transfers at or below ``tolerance``
    are dropped as noise.

    Raises:
        The input errors of ``compute_balances``, and
        SettlementInvariantError if debts and credits fail to cancel out.
    """
    if tolerance <= 0:
        raise ValueError("tolerance must be positive")

    balances = compute_balances(members, expenses)

    # [member, remaining] pairs; remainders are mutated as we match
    debtors = [[m, -b] for m, b in balances.items() if b < -tolerance]
    creditors = [[m, b] for m, b in balances.items() if b > tolerance]

    # Stable sort: equal amounts keep member order
    debtors.sort(key=lambda entry: entry[1], reverse=True)
    creditors.sort(key=lambda entry: entry[1], reverse=True)

    transfers = []
    i = j = 0
    while i < len(debtors) and j < len(creditors):
        debtor, owed = debtors[i]
        creditor, due = creditors[j]

        amount = min(owed, due)
        if amount > tolerance:
            shown = _round_half_up(amount)
            if shown > 0:
                transfers.append(
                    Transfer(from_member=debtor, to_member=creditor, amount=shown)
                )

        debtors[i][1] = owed - amount
        creditors[j][1] = due - amount

        if debtors[i][1] < tolerance:
            i += 1
        if creditors[j][1] < tolerance:
            j += 1

    # Whatever is left unmatched must be explained by the near-zero
    # balances we skipped plus sub-tolerance crumbs left at each step.
    leftover = sum(r for _, r in debtors[i:]) + sum(r for _, r in creditors[j:])
    skipped = sum(abs(b) for b in balances.values() if abs(b) <= tolerance)
    allowance = skipped + tolerance * len(balances)
    if leftover > allowance:
        raise SettlementInvariantError(
            f"Unmatched balance of {leftover:.2f} after settlement "
            f"(allowed {allowance:.2f})"
        )

    return transfers


def apply_transfers(
    balances: Mapping[str, float],
    transfers: Iterable[Transfer],
) -> dict[str, float]:
    """
    Balances after every transfer has been paid.

    The payer moves up by the amount and the receiver moves down.
    Returns a new mapping; the input is left untouched.
    """
    adjusted = dict(balances)
    for transfer in transfers:
        adjusted[transfer.from_member] = adjusted.get(transfer.from_member, 0.0) + transfer.amount
        adjusted[transfer.to_member] = adjusted.get(transfer.to_member, 0.0) - transfer.amount
    return adjusted


def per_person_share(amount: float, people: int) -> int:
    """
    Display-only "per person" figure, rounded UP to whole yen.

    Independent of the engine's internal precision; never feed this
    back into balances.
    """
    if people < 1:
        raise ValueError("people must be at least 1")
    if amount < 0:
        raise ValueError("amount must not be negative")
    return math.ceil(amount / people)

"""Group expense settlement package."""

from tripboard.settlement.engine import (
    DEFAULT_TOLERANCE,
    DuplicateMemberError,
    InvalidExpenseError,
    SettlementInputError,
    SettlementInvariantError,
    UnknownMemberError,
    apply_transfers,
    compute_balances,
    compute_settlements,
    per_person_share,
)

__all__ = [
    "DEFAULT_TOLERANCE",
    "DuplicateMemberError",
    "InvalidExpenseError",
    "SettlementInputError",
    "SettlementInvariantError",
    "UnknownMemberError",
    "apply_transfers",
    "compute_balances",
    "compute_settlements",
    "per_person_share",
]

"""Expense validation package."""

from tripboard.validation.validator import ExpenseValidator

__all__ = ["ExpenseValidator"]

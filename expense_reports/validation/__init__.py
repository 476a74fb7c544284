"""Form validation package."""

from expense_reports.validation.validator import (
    AMOUNT_FIELD,
    ITEM_NAME_FIELD,
    ExpenseFormValidator,
)

__all__ = ["AMOUNT_FIELD", "ITEM_NAME_FIELD", "ExpenseFormValidator"]

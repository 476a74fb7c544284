"""
Expense Form Validation

Checks the two text fields of the expense form before anything is sent
to the store:
- item name must not be blank
- amount must not be blank
- amount must parse as a finite decimal number

IMPORTANT: Validation NEVER silently fixes issues beyond trimming
surrounding whitespace. Every problem is reported against its field.
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Optional

from expense_reports.models.expense import FormValidationResult, ValidationIssue


ITEM_NAME_FIELD = "item_name"
AMOUNT_FIELD = "amount"


class ExpenseFormValidator:
    """Validates raw expense form input."""

    def _parse_amount(self, amount_text: str) -> Optional[Decimal]:
        """Parse amount_text, returning None unless it is a finite number."""
        try:
            amount = Decimal(amount_text)
        except InvalidOperation:
            return None
        if not amount.is_finite():
            return None
        # Stored as a JSON float
        if not math.isfinite(float(amount)):
            return None
        return amount

    def validate(
        self,
        item_name: Optional[str],
        amount_text: Optional[str],
    ) -> FormValidationResult:
        """
        Validate the form fields.

        Args:
            item_name: Raw item name as typed
            amount_text: Raw amount as typed

        Returns:
            FormValidationResult with the cleaned values and all issues found
        """
        item_name = (item_name or "").strip()
        amount_text = (amount_text or "").strip()
        issues = []
        amount = None

        if not item_name:
            issues.append(ValidationIssue(
                field=ITEM_NAME_FIELD,
                issue_type="missing",
                message="Item name is required",
            ))

        if not amount_text:
            issues.append(ValidationIssue(
                field=AMOUNT_FIELD,
                issue_type="missing",
                message="Amount is required",
            ))
        else:
            amount = self._parse_amount(amount_text)
            if amount is None:
                issues.append(ValidationIssue(
                    field=AMOUNT_FIELD,
                    issue_type="invalid_format",
                    message="Enter a valid amount",
                ))

        return FormValidationResult(
            item_name=item_name,
            amount=amount,
            issues=issues,
        )

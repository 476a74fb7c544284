"""
Expense Models

These models define the schemas for the expense form and the records
written to the remote store. They are designed to:
1. Enforce type safety at runtime
2. Provide clear field-level validation messages
3. Be serializable for storage and logging

DESIGN DECISION: An Expense is immutable once built. It is written once
and never read back or updated by this application.
"""

from decimal import Decimal
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def new_expense_id() -> str:
    """Generate a fresh, store-safe unique key for an expense."""
    return uuid4().hex


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class Expense(BaseModel):
    """
    A single expense line item.

    Stored under expenses/<id> with the same camelCase keys the
    mobile clients use (id, itemName, amount).
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    id: str = Field(
        default_factory=new_expense_id,
        min_length=1,
        description="Unique expense key"
    )
    item_name: str = Field(
        ...,
        min_length=1,
        alias="itemName",
        description="What was bought"
    )
    amount: Decimal = Field(
        ...,
        allow_inf_nan=False,
        description="Amount spent"
    )

    def to_record(self) -> dict:
        """Convert to the JSON document written to the store."""
        return {
            "id": self.id,
            "itemName": self.item_name,
            "amount": float(self.amount),
        }


# =============================================================================
# FORM VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Form field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format')"
    )
    message: str = Field(
        ...,
        description="Message shown next to the field"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
    )


class FormValidationResult(BaseModel):
    """Result of validating the expense form."""

    item_name: str = Field(
        default="",
        description="Item name with surrounding whitespace removed"
    )
    amount: Optional[Decimal] = Field(
        default=None,
        description="Parsed amount, None when missing or invalid"
    )
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def field_errors(self) -> dict[str, str]:
        """First error message per field, in the order found."""
        errors: dict[str, str] = {}
        for issue in self.issues:
            if issue.severity == "error":
                errors.setdefault(issue.field, issue.message)
        return errors


class SubmissionResult(BaseModel):
    """
    Outcome of one expense submission.

    The UI uses status_message for the status label, notification for
    the transient toast and clear_fields to decide whether to reset
    the inputs.
    """

    success: bool
    expense: Optional[Expense] = None
    validation: FormValidationResult
    status_message: Optional[str] = None
    notification: Optional[str] = None
    clear_fields: bool = False

"""Tests for expense form validation."""

from decimal import Decimal

import pytest

from expense_reports.validation import AMOUNT_FIELD, ITEM_NAME_FIELD, ExpenseFormValidator


@pytest.fixture
def validator():
    return ExpenseFormValidator()


class TestExpenseFormValidator:
    """Tests for ExpenseFormValidator."""

    def test_valid_input(self, validator):
        """Test that surrounding whitespace is trimmed from valid input."""
        result = validator.validate("  Coffee ", " 3.50 ")
        assert result.is_valid
        assert result.item_name == "Coffee"
        assert result.amount == Decimal("3.50")
        assert result.issues == []

    def test_blank_item_name(self, validator):
        """Test that a blank item name is a field error."""
        result = validator.validate("   ", "3.50")
        assert not result.is_valid
        assert result.field_errors == {ITEM_NAME_FIELD: "Item name is required"}

    def test_missing_amount(self, validator):
        """Test that an empty amount is a field error."""
        result = validator.validate("Coffee", "")
        assert result.field_errors == {AMOUNT_FIELD: "Amount is required"}
        assert result.amount is None

    @pytest.mark.parametrize("amount_text", ["abc", "3,50", "12.3.4", "--1"])
    def test_non_numeric_amount(self, validator, amount_text):
        """Test that text that is not a decimal number is rejected."""
        result = validator.validate("Coffee", amount_text)
        assert result.field_errors == {AMOUNT_FIELD: "Enter a valid amount"}
        assert result.amount is None

    @pytest.mark.parametrize("amount_text", ["NaN", "Infinity", "-inf"])
    def test_non_finite_amount(self, validator, amount_text):
        """Test that NaN and infinities are rejected."""
        result = validator.validate("Coffee", amount_text)
        assert result.field_errors == {AMOUNT_FIELD: "Enter a valid amount"}

    @pytest.mark.parametrize("amount_text", ["1e400", "-1e400"])
    def test_amount_too_large_to_store(self, validator, amount_text):
        """Test that amounts overflowing a stored float are rejected."""
        result = validator.validate("Coffee", amount_text)
        assert result.field_errors == {AMOUNT_FIELD: "Enter a valid amount"}
        assert result.amount is None

    @pytest.mark.parametrize("amount_text,expected", [
        ("12", Decimal("12")),
        ("0.01", Decimal("0.01")),
        ("1e3", Decimal("1000")),
        ("-5", Decimal("-5")),
    ])
    def test_decimal_formats(self, validator, amount_text, expected):
        """Test the decimal notations that are accepted."""
        result = validator.validate("Coffee", amount_text)
        assert result.is_valid
        assert result.amount == expected

    def test_both_fields_reported(self, validator):
        """Test that both fields are flagged in one pass."""
        result = validator.validate("", "x")
        assert set(result.field_errors) == {ITEM_NAME_FIELD, AMOUNT_FIELD}

    def test_none_inputs(self, validator):
        """Test that missing inputs are treated as blank."""
        result = validator.validate(None, None)
        assert result.field_errors == {
            ITEM_NAME_FIELD: "Item name is required",
            AMOUNT_FIELD: "Amount is required",
        }

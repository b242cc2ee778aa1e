"""Unit tests for boundary coercion of stored profile values"""

import pytest
from credit_engine.domain.models import FinancialProfile
from credit_engine.utils.coercion import to_amount, to_flag, to_text


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, 0.0),
        ("", 0.0),
        ("  ", 0.0),
        ("abc", 0.0),
        ("1500.50", 1500.5),
        (" 42 ", 42.0),
        (1200, 1200.0),
        (-50, 0.0),
        (float("nan"), 0.0),
        (float("inf"), 0.0),
        (True, 0.0),
        ([1], 0.0),
    ],
)
def test_to_amount(value, expected):
    assert to_amount(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (True, True),
        (False, False),
        (1, True),
        (0, False),
        ("true", True),
        ("Yes", True),
        ("on", True),
        ("false", False),
        ("", False),
        (None, False),
    ],
)
def test_to_flag(value, expected):
    assert to_flag(value) is expected


def test_to_text():
    assert to_text(None) == ""
    assert to_text("  Retail ") == "Retail"
    assert to_text(42) == "42"


def test_from_mapping_defaults_missing_and_null_fields():
    """Test absent, null and malformed values default instead of failing"""
    profile = FinancialProfile.from_mapping(
        {
            "monthly_income": "2500",
            "housing_expense": None,
            "food_expense": "n/a",
            "savings_value": 300,
            "business_type": "   ",
            "business_registration": None,
            "seasonal_income": "yes",
            "bank_account": "Acct-1",
            "unrelated_column": "ignored",
        }
    )

    assert profile.monthly_income == 2500.0
    assert profile.housing_expense == 0.0
    assert profile.food_expense == 0.0
    assert profile.total_expenses == 0.0
    assert profile.total_assets == 300.0
    assert profile.business_type == ""
    assert profile.business_registration is False
    assert profile.seasonal_income is True
    assert profile.bank_account == "Acct-1"
    assert profile.community_role == ""


def test_from_mapping_empty_equals_default_profile():
    assert FinancialProfile.from_mapping({}) == FinancialProfile()

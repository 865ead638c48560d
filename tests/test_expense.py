"""
Unit tests for the Expense entity.
"""
from datetime import datetime, timedelta, timezone

import pytest

from app.domain.clock import utc_now
from app.domain.entities import Expense, ExpenseCategory, ExpenseProps
from app.domain.value_objects import ExpenseId, Money
from tests.conftest import days_ago, make_expense


def _props(**overrides) -> ExpenseProps:
    now = utc_now()
    values = dict(
        id=ExpenseId.create(),
        description="Groceries",
        amount=Money.create("42.10", "EUR").value,
        category=ExpenseCategory.FOOD,
        expense_date=days_ago(2),
        created_at=now,
        updated_at=now,
    )
    values.update(overrides)
    return ExpenseProps(**values)


def test_create_valid_expense():
    result = Expense.create(_props())

    assert result.is_ok()
    expense = result.value
    assert expense.description == "Groceries"
    assert expense.category == ExpenseCategory.FOOD
    assert str(expense.amount) == "42.10 EUR"


def test_constructor_is_private():
    with pytest.raises(TypeError):
        Expense(_props())


def test_collects_all_errors():
    tomorrow = utc_now() + timedelta(days=1)

    result = Expense.create(_props(description="", expense_date=tomorrow))

    assert result.is_err()
    assert len(result.error) >= 2
    fields = {e.field for e in result.error}
    assert fields == {"description", "expenseDate"}


def test_description_length_boundary():
    assert Expense.create(_props(description="x" * 500)).is_ok()

    result = Expense.create(_props(description="x" * 501))
    assert result.is_err()
    assert "500" in result.error[0].message


def test_whitespace_description_is_required():
    result = Expense.create(_props(description="   "))

    assert result.is_err()
    assert result.error[0].message == "Description is required"


def test_naive_expense_date_is_treated_as_utc():
    naive = datetime(2024, 3, 1, 12, 0, 0)

    expense = Expense.create(_props(expense_date=naive)).value

    assert expense.expense_date == datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_update_description_returns_new_instance():
    expense = make_expense(description="Lunch")

    result = expense.update_description("  Dinner  ")

    assert result.is_ok()
    updated = result.value
    assert updated is not expense
    assert updated.description == "Dinner"
    assert expense.description == "Lunch"
    assert updated.id == expense.id
    assert updated.created_at == expense.created_at
    assert updated.updated_at >= expense.updated_at


def test_update_description_validates():
    expense = make_expense()

    assert expense.update_description("").error.field == "description"
    assert "500" in expense.update_description("y" * 501).error.message


def test_update_category_and_amount():
    expense = make_expense(category="food")
    new_amount = Money.create(99, "GBP").value

    updated = expense.update_category("transport").value.update_amount(new_amount).value

    assert updated.category == ExpenseCategory.TRANSPORT
    assert updated.amount == new_amount
    assert expense.category == ExpenseCategory.FOOD


def test_update_category_unknown_value_raises():
    with pytest.raises(ValueError):
        make_expense().update_category("travel")


def test_equality_by_identity():
    expense_id = ExpenseId.create()
    a = make_expense(description="A", expense_id=expense_id)
    b = make_expense(description="B", expense_id=expense_id)

    assert a == b
    assert hash(a) == hash(b)
    assert a != make_expense(description="A")


def test_to_json():
    expense_date = datetime(2025, 1, 15, 8, 30, tzinfo=timezone.utc)
    expense = make_expense(amount=25.555, currency="USD", category="food", expense_date=expense_date)

    data = expense.to_json()

    assert data["id"] == str(expense.id)
    assert data["amount"] == 25.56
    assert data["currency"] == "USD"
    assert data["category"] == "food"
    assert data["expenseDate"] == "2025-01-15T08:30:00.000Z"
    assert data["createdAt"].endswith("Z")

"""
Fluent builder for Expense entities.

Separates structural completeness (did the caller supply every required
field?) from business-rule validity (is what they supplied acceptable?).
build() reports all missing fields at once; only when nothing is missing
does it delegate to Expense.create() for the business rules.

Example:
    result = (
        ExpenseBuilder()
        .with_description("Lunch at restaurant")
        .with_amount(25.50, "USD")
        .with_category("food")
        .with_expense_date(datetime(2025, 12, 24, tzinfo=timezone.utc))
        .build()
    )
    if result.is_ok():
        expense = result.value
"""

from datetime import datetime
from typing import List, Optional, Union

from .clock import utc_now
from .entities import Expense, ExpenseCategory, ExpenseProps
from .errors import ValidationError
from .result import Result, err
from .value_objects import Currency, ExpenseId, Money, Numeric


class ExpenseBuilder:
    """Single-use accumulator; discard after build()"""

    def __init__(self):
        self._id: Optional[ExpenseId] = None
        self._description: Optional[str] = None
        self._amount: Optional[Money] = None
        self._category: ExpenseCategory = ExpenseCategory.OTHER
        self._expense_date: Optional[datetime] = None
        self._created_at: Optional[datetime] = None
        self._updated_at: Optional[datetime] = None

    def with_id(self, expense_id: ExpenseId) -> "ExpenseBuilder":
        """Set a specific ID (reconstitution from persistence)"""
        self._id = expense_id
        return self

    def with_description(self, description: str) -> "ExpenseBuilder":
        self._description = description
        return self

    def with_amount(
        self, value: Numeric, currency: Union[Currency, str]
    ) -> "ExpenseBuilder":
        """
        Set the amount from a raw number and currency.

        An invalid amount is dropped: the amount stays unset and build()
        reports it as missing.
        """
        money_result = Money.create(value, currency)
        if money_result.is_ok():
            self._amount = money_result.value
        return self

    def with_money(self, money: Money) -> "ExpenseBuilder":
        """Set an already validated Money (reconstitution from persistence)"""
        self._amount = money
        return self

    def with_category(self, category: Union[ExpenseCategory, str]) -> "ExpenseBuilder":
        """
        Set the category from an ExpenseCategory or its string value.

        Raises ValueError for an unknown string; request models validate
        categories before they reach the builder.
        """
        self._category = ExpenseCategory(category)
        return self

    def with_expense_date(self, expense_date: datetime) -> "ExpenseBuilder":
        self._expense_date = expense_date
        return self

    def with_created_at(self, created_at: datetime) -> "ExpenseBuilder":
        self._created_at = created_at
        return self

    def with_updated_at(self, updated_at: datetime) -> "ExpenseBuilder":
        self._updated_at = updated_at
        return self

    def build(self) -> Result[Expense, List[ValidationError]]:
        errors: List[ValidationError] = []

        if not self._description:
            errors.append(ValidationError("description", "Description is required"))
        if self._amount is None:
            errors.append(ValidationError("amount", "Amount is required"))
        if self._expense_date is None:
            errors.append(ValidationError("expenseDate", "Expense date is required"))

        if errors:
            return err(errors)

        now = utc_now()
        props = ExpenseProps(
            id=self._id or ExpenseId.create(),
            description=self._description,
            amount=self._amount,
            category=self._category,
            expense_date=self._expense_date,
            created_at=self._created_at or now,
            updated_at=self._updated_at or now,
        )
        return Expense.create(props)

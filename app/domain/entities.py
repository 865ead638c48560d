"""
Domain Entities - Rich business objects with identity and lifecycle.

Entities differ from value objects in that they have:
- Identity (tracked by ExpenseId, not by value)
- A lifecycle (created once, then updated)
- Business logic (methods that enforce invariants)

Expense is immutable: every update returns a new instance with a refreshed
updated_at, the original is never changed in place.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Union

from .clock import ensure_utc, to_iso, utc_now
from .errors import ValidationError
from .result import Result, err, ok
from .value_objects import ExpenseId, Money


class ExpenseCategory(str, Enum):
    """Expense category - business classification"""

    FOOD = "food"
    TRANSPORT = "transport"
    ENTERTAINMENT = "entertainment"
    UTILITIES = "utilities"
    HEALTHCARE = "healthcare"
    OTHER = "other"


@dataclass(frozen=True)
class ExpenseProps:
    """Full field set of an Expense"""

    id: ExpenseId
    description: str
    amount: Money
    category: ExpenseCategory
    expense_date: datetime
    created_at: datetime
    updated_at: datetime


# Guards Expense.__init__ so instances only come from create() or _copy_with()
_CREATE_TOKEN = object()


class Expense:
    """
    Expense entity.

    Invariants (enforced by create() and update_description()):
    1. description is non-empty after trimming, at most 500 characters
    2. expense_date is not in the future at validation time
    3. amount is positive (guaranteed by Money)
    4. category is one of ExpenseCategory

    Equality is by identity (ExpenseId).
    """

    MAX_DESCRIPTION_LENGTH = 500

    def __init__(self, props: ExpenseProps, _token: object = None):
        if _token is not _CREATE_TOKEN:
            raise TypeError("Use Expense.create() or ExpenseBuilder to create expenses")
        self._props = props

    # Read-only views

    @property
    def id(self) -> ExpenseId:
        return self._props.id

    @property
    def description(self) -> str:
        return self._props.description

    @property
    def amount(self) -> Money:
        return self._props.amount

    @property
    def category(self) -> ExpenseCategory:
        return self._props.category

    @property
    def expense_date(self) -> datetime:
        return self._props.expense_date

    @property
    def created_at(self) -> datetime:
        return self._props.created_at

    @property
    def updated_at(self) -> datetime:
        return self._props.updated_at

    @classmethod
    def create(cls, props: ExpenseProps) -> Result["Expense", List[ValidationError]]:
        """
        Validate props and create an Expense.

        Every rule is checked; the error list contains one entry per violated
        rule, not just the first one.
        """
        errors: List[ValidationError] = []

        description_error = cls._validate_description(props.description)
        if description_error:
            errors.append(description_error)

        expense_date = ensure_utc(props.expense_date)
        if expense_date > utc_now():
            errors.append(
                ValidationError("expenseDate", "Expense date cannot be in the future")
            )

        if errors:
            return err(errors)

        normalized = replace(
            props,
            description=props.description.strip(),
            category=ExpenseCategory(props.category),
            expense_date=expense_date,
            created_at=ensure_utc(props.created_at),
            updated_at=ensure_utc(props.updated_at),
        )
        return ok(cls(normalized, _CREATE_TOKEN))

    @classmethod
    def _validate_description(cls, description: str) -> Union[ValidationError, None]:
        if not description or not description.strip():
            return ValidationError("description", "Description is required")
        if len(description.strip()) > cls.MAX_DESCRIPTION_LENGTH:
            return ValidationError(
                "description",
                f"Description must be at most {cls.MAX_DESCRIPTION_LENGTH} characters",
            )
        return None

    def _copy_with(self, **overrides: Any) -> "Expense":
        """New instance with overrides applied and updated_at set to now"""
        props = replace(self._props, updated_at=utc_now(), **overrides)
        return Expense(props, _CREATE_TOKEN)

    def update_description(self, new_description: str) -> Result["Expense", ValidationError]:
        description_error = self._validate_description(new_description)
        if description_error:
            return err(description_error)
        return ok(self._copy_with(description=new_description.strip()))

    def update_category(
        self, new_category: Union[ExpenseCategory, str]
    ) -> Result["Expense", ValidationError]:
        """Raises ValueError for a string that is not an ExpenseCategory value"""
        return ok(self._copy_with(category=ExpenseCategory(new_category)))

    def update_amount(self, new_amount: Money) -> Result["Expense", ValidationError]:
        return ok(self._copy_with(amount=new_amount))

    def to_json(self) -> Dict[str, Any]:
        """Plain dict for serialization (camelCase keys, ISO-8601 timestamps)"""
        return {
            "id": str(self.id),
            "description": self.description,
            "amount": float(self.amount.amount),
            "currency": self.amount.currency.value,
            "category": self.category.value,
            "expenseDate": to_iso(self.expense_date),
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Expense):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return (
            f"Expense(id={self.id}, amount={self.amount}, "
            f"category={self.category.value})"
        )

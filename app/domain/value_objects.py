"""
Value Objects for the expense domain.

Value objects are immutable, compared by value, and validated at creation.
Unlike entities they have no identity of their own:
- Money: positive amount (2 decimal places) tagged with a currency
- ExpenseId: UUID-shaped identifier of an Expense

Creation goes through the ``create`` / ``from_string`` factories, which
return a Result instead of raising for invalid input.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Union
import re
import uuid

from .errors import ValidationError
from .result import Result, err, ok


class Currency(str, Enum):
    """Supported currencies (ISO 4217)"""

    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    JPY = "JPY"


Numeric = Union[Decimal, int, float, str]

_CENTS = Decimal("0.01")

# Largest value the expenses.amount NUMERIC(12, 2) column can hold
MAX_AMOUNT = Decimal("9999999999.99")


@dataclass(frozen=True)
class Money:
    """
    Monetary amount with currency.

    Invariants:
    - amount is strictly positive (checked before rounding)
    - amount is at most MAX_AMOUNT after rounding
    - amount is stored with 2 decimal places, rounded half away from zero
    - currency is one of Currency

    Example:
        Money.create(25.555, "USD").value -> Money(25.56 USD)
    """

    amount: Decimal
    currency: Currency

    DECIMAL_PLACES = 2

    @classmethod
    def create(
        cls, amount: Numeric, currency: Union[Currency, str]
    ) -> Result["Money", ValidationError]:
        """
        Create a Money value object.

        Floats go through str() so 25.555 is treated as the decimal 25.555,
        not its binary approximation.
        """
        try:
            value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        except InvalidOperation:
            return err(ValidationError("amount", "Amount must be a number"))

        if not value.is_finite():
            return err(ValidationError("amount", "Amount must be a number"))
        if value <= 0:
            return err(ValidationError("amount", "Amount must be positive"))

        try:
            code = Currency(currency)
        except ValueError:
            allowed = ", ".join(c.value for c in Currency)
            return err(
                ValidationError("currency", f"Currency must be one of: {allowed}")
            )

        # quantize raises once the result needs more digits than the context allows
        try:
            rounded = value.quantize(_CENTS, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            rounded = None
        if rounded is None or rounded > MAX_AMOUNT:
            return err(ValidationError("amount", f"Amount must be at most {MAX_AMOUNT}"))

        return ok(cls(amount=rounded, currency=code))

    def add(self, other: "Money") -> Result["Money", ValidationError]:
        """Add two Money values (same currency only)"""
        if self.currency != other.currency:
            return err(
                ValidationError(
                    "currency", "Cannot add money with different currencies"
                )
            )
        return Money.create(self.amount + other.amount, self.currency)

    def equals(self, other: object) -> bool:
        return self == other

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency.value}"

    def __repr__(self) -> str:
        return f"Money({self})"


@dataclass(frozen=True)
class ExpenseId:
    """
    Expense identifier value object.

    Format: UUID (8-4-4-4-12 hex, case-insensitive)
    Example: 550e8400-e29b-41d4-a716-446655440000
    """

    value: str

    UUID_PATTERN = re.compile(
        r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
        re.IGNORECASE,
    )

    @classmethod
    def create(cls) -> "ExpenseId":
        """Generate a new random ExpenseId (no collision check)"""
        return cls(str(uuid.uuid4()))

    @classmethod
    def from_string(cls, value: str) -> Result["ExpenseId", ValidationError]:
        """
        Parse an ExpenseId from an external string.

        Returns:
            Ok(ExpenseId), or Err(ValidationError(field="id")) when the value
            is empty/whitespace or not UUID-shaped.
        """
        if not value or not value.strip():
            return err(ValidationError("id", "Expense ID cannot be empty"))
        if not cls.UUID_PATTERN.fullmatch(value):
            return err(ValidationError("id", "Expense ID must be a valid UUID"))
        return ok(cls(value))

    def equals(self, other: object) -> bool:
        return self == other

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"ExpenseId('{self.value}')"

"""
Domain layer - Business logic and domain models.

This layer contains:
- Result type (explicit success/failure returns)
- Domain errors
- Value objects (Money, ExpenseId)
- The Expense entity and its builder

No dependencies on infrastructure or frameworks.
"""

from app.domain.builders import ExpenseBuilder
from app.domain.entities import Expense, ExpenseCategory, ExpenseProps
from app.domain.errors import DomainError, NotFoundError, ValidationError, ValidationErrors
from app.domain.result import Err, Ok, Result, err, ok
from app.domain.value_objects import Currency, ExpenseId, Money

__all__ = [
    "Currency",
    "DomainError",
    "Err",
    "Expense",
    "ExpenseBuilder",
    "ExpenseCategory",
    "ExpenseId",
    "ExpenseProps",
    "Money",
    "NotFoundError",
    "Ok",
    "Result",
    "ValidationError",
    "ValidationErrors",
    "err",
    "ok",
]

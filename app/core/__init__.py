"""Core module containing interfaces."""

from app.core.interfaces import (
    IExpenseRepository,
    ListExpensesFilter,
    PaginatedResult,
    PaginationOptions,
)

__all__ = [
    "IExpenseRepository",
    "ListExpensesFilter",
    "PaginatedResult",
    "PaginationOptions",
]

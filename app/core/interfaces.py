"""
Core interfaces for the Expense Tracker.

The application layer depends on these abstractions, not on SQLAlchemy.
Repository methods return Results: expected failures (not found, corrupted
rows, database errors) come back as Err values instead of exceptions.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, List, Optional, TypeVar
import math

from app.domain.entities import Expense, ExpenseCategory
from app.domain.result import Result
from app.domain.value_objects import ExpenseId

T = TypeVar("T")


@dataclass(frozen=True)
class ListExpensesFilter:
    """Optional filters for listing expenses (dates are inclusive)"""
    category: Optional[ExpenseCategory] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


@dataclass(frozen=True)
class PaginationOptions:
    """1-based page number and page size"""
    page: int = 1
    limit: int = 20

    def __post_init__(self):
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.limit < 1:
            raise ValueError(f"limit must be >= 1, got {self.limit}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class PaginatedResult(Generic[T]):
    """One page of results plus pagination metadata"""
    data: List[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


class IExpenseRepository(ABC):
    """
    Interface for expense storage and retrieval.

    Implementations must:
    - Reconstruct entities through ExpenseBuilder so stored data is re-validated
    - Return NotFoundError for unknown ids on find/update/delete
    """

    @abstractmethod
    async def save(self, expense: Expense) -> Result[None, Exception]:
        """Insert a new expense"""
        pass

    @abstractmethod
    async def find_by_id(self, expense_id: ExpenseId) -> Result[Expense, Exception]:
        """
        Get expense by ID.

        Returns:
            Ok(Expense), Err(NotFoundError) if missing, Err(ValidationErrors)
            if the stored row no longer satisfies the entity invariants
        """
        pass

    @abstractmethod
    async def update(self, expense: Expense) -> Result[None, Exception]:
        """Persist changes to an existing expense"""
        pass

    @abstractmethod
    async def delete(self, expense_id: ExpenseId) -> Result[None, Exception]:
        """Delete an expense"""
        pass

    @abstractmethod
    async def list(
        self,
        pagination: PaginationOptions,
        filter: Optional[ListExpensesFilter] = None
    ) -> Result[PaginatedResult[Expense], Exception]:
        """List expenses, newest expense_date first"""
        pass

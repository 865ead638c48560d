"""
Pytest configuration and shared fixtures.
"""
import os

# Must be set before app.config is imported anywhere
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from app.core.interfaces import (
    IExpenseRepository,
    ListExpensesFilter,
    PaginatedResult,
    PaginationOptions,
)
from app.db import connection
from app.domain.builders import ExpenseBuilder
from app.domain.entities import Expense
from app.domain.errors import NotFoundError
from app.domain.result import err, ok
from app.domain.value_objects import ExpenseId

IN_MEMORY_DB = "sqlite+aiosqlite:///:memory:"


class InMemoryExpenseRepository(IExpenseRepository):
    """Dict-backed repository for handler tests"""

    def __init__(self):
        self.expenses: Dict[str, Expense] = {}

    async def save(self, expense):
        self.expenses[expense.id.value] = expense
        return ok(None)

    async def find_by_id(self, expense_id):
        expense = self.expenses.get(expense_id.value)
        if expense is None:
            return err(NotFoundError("Expense", str(expense_id)))
        return ok(expense)

    async def update(self, expense):
        if expense.id.value not in self.expenses:
            return err(NotFoundError("Expense", str(expense.id)))
        self.expenses[expense.id.value] = expense
        return ok(None)

    async def delete(self, expense_id):
        if self.expenses.pop(expense_id.value, None) is None:
            return err(NotFoundError("Expense", str(expense_id)))
        return ok(None)

    async def list(self, pagination: PaginationOptions, filter: Optional[ListExpensesFilter] = None):
        matches: List[Expense] = list(self.expenses.values())
        if filter is not None:
            if filter.category is not None:
                matches = [e for e in matches if e.category == filter.category]
            if filter.start_date is not None:
                matches = [e for e in matches if e.expense_date >= filter.start_date]
            if filter.end_date is not None:
                matches = [e for e in matches if e.expense_date <= filter.end_date]
        matches.sort(key=lambda e: e.expense_date, reverse=True)
        page = matches[pagination.offset:pagination.offset + pagination.limit]
        return ok(PaginatedResult(
            data=page, total=len(matches), page=pagination.page, limit=pagination.limit
        ))


def days_ago(days: int) -> datetime:
    return datetime.now(timezone.utc) - timedelta(days=days)


def make_expense(
    description: str = "Lunch at restaurant",
    amount="25.50",
    currency: str = "USD",
    category: str = "food",
    expense_date: Optional[datetime] = None,
    expense_id: Optional[ExpenseId] = None,
) -> Expense:
    builder = (
        ExpenseBuilder()
        .with_description(description)
        .with_amount(amount, currency)
        .with_category(category)
        .with_expense_date(expense_date or days_ago(1))
    )
    if expense_id is not None:
        builder.with_id(expense_id)
    return builder.build().unwrap()


@pytest.fixture
def repository():
    return InMemoryExpenseRepository()


@pytest_asyncio.fixture
async def db_session():
    """
    Fresh in-memory database per test.

    Yields a session from the app's session factory; commit/rollback is left
    to the test.
    """
    await connection.init_db(IN_MEMORY_DB)

    async with connection.async_session_maker() as session:
        yield session

    await connection.close_db()


@pytest.fixture
def client():
    """TestClient with lifespan (creates a fresh in-memory database)"""
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client

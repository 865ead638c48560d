"""
Expense use cases - command and query handlers.

Each handler orchestrates:
- Input parsing into domain values (ExpenseId, Money)
- Domain logic (ExpenseBuilder, Expense.update_*)
- Persistence (IExpenseRepository)
- Mapping entities to response dicts

Handlers return Results. Err values always carry an Exception instance
(ValidationError, ValidationErrors, NotFoundError or a database error) so
the HTTP layer can raise them as-is.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Union
import logging

from app.core.interfaces import (
    IExpenseRepository,
    ListExpensesFilter,
    PaginationOptions,
)
from app.domain.builders import ExpenseBuilder
from app.domain.clock import utc_now
from app.domain.entities import Expense, ExpenseCategory
from app.domain.errors import ValidationErrors
from app.domain.result import Result, err, ok
from app.domain.value_objects import Currency, ExpenseId, Money

logger = logging.getLogger(__name__)

ExpenseResponse = Dict[str, Any]


# ============================================
# Commands / Queries (plain input DTOs)
# ============================================

@dataclass(frozen=True)
class CreateExpenseCommand:
    description: str
    amount: Union[Decimal, float]
    currency: Union[Currency, str]
    category: Union[ExpenseCategory, str]
    expense_date: Optional[datetime] = None  # required; None is reported by the builder


@dataclass(frozen=True)
class UpdateExpenseCommand:
    """Partial update - None means "leave unchanged"."""
    description: Optional[str] = None
    amount: Optional[Union[Decimal, float]] = None
    currency: Optional[Union[Currency, str]] = None
    category: Optional[Union[ExpenseCategory, str]] = None
    expense_date: Optional[datetime] = None


@dataclass(frozen=True)
class ListExpensesQuery:
    page: int = 1
    limit: int = 20
    category: Optional[Union[ExpenseCategory, str]] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


def to_response_dto(expense: Expense) -> ExpenseResponse:
    """Map an Expense entity to the API response shape"""
    return expense.to_json()


# ============================================
# Command handlers
# ============================================

class CreateExpenseHandler:
    """Build a new Expense from raw input and persist it"""

    def __init__(self, repository: IExpenseRepository):
        self._repository = repository

    async def execute(self, command: CreateExpenseCommand) -> Result[ExpenseResponse, Exception]:
        expense_result = (
            ExpenseBuilder()
            .with_description(command.description)
            .with_amount(command.amount, command.currency)
            .with_category(command.category)
            .with_expense_date(command.expense_date)
            .build()
        )
        if expense_result.is_err():
            logger.info(f"Rejected new expense: {len(expense_result.error)} validation error(s)")
            return err(ValidationErrors(expense_result.error))

        expense = expense_result.value
        save_result = await self._repository.save(expense)
        if save_result.is_err():
            return save_result

        logger.info(f"Created expense {expense.id} ({expense.category.value}, {expense.amount})")
        return ok(to_response_dto(expense))


class UpdateExpenseHandler:
    """
    Apply a partial update to an existing Expense.

    Amount and currency are combined into a new Money; a missing half falls
    back to the stored value. A new expense_date is applied by rebuilding
    the entity so the future-date rule still holds.
    """

    def __init__(self, repository: IExpenseRepository):
        self._repository = repository

    async def execute(
        self, expense_id: str, command: UpdateExpenseCommand
    ) -> Result[ExpenseResponse, Exception]:
        id_result = ExpenseId.from_string(expense_id)
        if id_result.is_err():
            return id_result

        find_result = await self._repository.find_by_id(id_result.value)
        if find_result.is_err():
            return find_result
        expense = find_result.value

        if command.description is not None:
            update_result = expense.update_description(command.description)
            if update_result.is_err():
                return update_result
            expense = update_result.value

        if command.category is not None:
            expense = expense.update_category(command.category).unwrap()

        if command.amount is not None or command.currency is not None:
            money_result = Money.create(
                command.amount if command.amount is not None else expense.amount.amount,
                command.currency if command.currency is not None else expense.amount.currency,
            )
            if money_result.is_err():
                return money_result
            expense = expense.update_amount(money_result.value).unwrap()

        if command.expense_date is not None:
            rebuilt = (
                ExpenseBuilder()
                .with_id(expense.id)
                .with_description(expense.description)
                .with_money(expense.amount)
                .with_category(expense.category)
                .with_expense_date(command.expense_date)
                .with_created_at(expense.created_at)
                .with_updated_at(utc_now())
                .build()
            )
            if rebuilt.is_err():
                return err(ValidationErrors(rebuilt.error))
            expense = rebuilt.value

        update_result = await self._repository.update(expense)
        if update_result.is_err():
            return update_result

        logger.info(f"Updated expense {expense.id}")
        return ok(to_response_dto(expense))


class DeleteExpenseHandler:
    def __init__(self, repository: IExpenseRepository):
        self._repository = repository

    async def execute(self, expense_id: str) -> Result[None, Exception]:
        id_result = ExpenseId.from_string(expense_id)
        if id_result.is_err():
            return id_result

        delete_result = await self._repository.delete(id_result.value)
        if delete_result.is_ok():
            logger.info(f"Deleted expense {expense_id}")
        return delete_result


# ============================================
# Query handlers
# ============================================

class GetExpenseByIdHandler:
    def __init__(self, repository: IExpenseRepository):
        self._repository = repository

    async def execute(self, expense_id: str) -> Result[ExpenseResponse, Exception]:
        id_result = ExpenseId.from_string(expense_id)
        if id_result.is_err():
            return id_result

        find_result = await self._repository.find_by_id(id_result.value)
        if find_result.is_err():
            return find_result
        return ok(to_response_dto(find_result.value))


class ListExpensesHandler:
    """Paginated, optionally filtered listing"""

    def __init__(self, repository: IExpenseRepository):
        self._repository = repository

    async def execute(self, query: ListExpensesQuery) -> Result[Dict[str, Any], Exception]:
        filter = ListExpensesFilter(
            category=ExpenseCategory(query.category) if query.category else None,
            start_date=query.start_date,
            end_date=query.end_date,
        )

        list_result = await self._repository.list(
            PaginationOptions(page=query.page, limit=query.limit), filter
        )
        if list_result.is_err():
            return list_result

        page = list_result.value
        return ok({
            "data": [to_response_dto(expense) for expense in page.data],
            "pagination": {
                "page": page.page,
                "limit": page.limit,
                "total": page.total,
                "totalPages": page.total_pages,
            },
        })

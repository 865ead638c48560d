"""
Expense Repository implementation using SQLAlchemy.

Handles conversion between:
- Domain entity (Expense) → ORM model (ExpenseModel)
- ORM model → Domain entity, rebuilt through ExpenseBuilder so stored rows
  are validated again on the way out

Expected failures are returned as Err values (see IExpenseRepository).
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, desc, and_
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.core.interfaces import (
    IExpenseRepository,
    ListExpensesFilter,
    PaginatedResult,
    PaginationOptions,
)
from app.domain.builders import ExpenseBuilder
from app.domain.clock import ensure_utc
from app.domain.entities import Expense, ExpenseCategory
from app.domain.errors import NotFoundError, ValidationError, ValidationErrors
from app.domain.result import Result, err, ok
from app.domain.value_objects import ExpenseId, Money
from app.db.models import ExpenseModel

logger = logging.getLogger(__name__)


class ExpenseRepository(IExpenseRepository):
    """
    SQLAlchemy implementation of IExpenseRepository.

    The session is owned by the caller (get_db_session commits on success
    and rolls back on error); this class only flushes.
    """

    def __init__(self, db_session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            db_session: SQLAlchemy async session
        """
        self._db = db_session

    async def save(self, expense: Expense) -> Result[None, Exception]:
        try:
            self._db.add(self._to_orm(expense))
            await self._db.flush()
        except SQLAlchemyError as e:
            logger.error(f"Failed to save expense {expense.id}: {e}")
            return err(e)

        logger.info(f"💾 Saved expense {expense.id} ({expense.amount})")
        return ok(None)

    async def find_by_id(self, expense_id: ExpenseId) -> Result[Expense, Exception]:
        try:
            db_expense = await self._db.get(ExpenseModel, expense_id.value)
        except SQLAlchemyError as e:
            logger.error(f"Failed to retrieve expense {expense_id}: {e}")
            return err(e)

        if db_expense is None:
            return err(NotFoundError("Expense", str(expense_id)))

        result = self._to_domain(db_expense)
        if result.is_err():
            logger.warning(
                f"Stored expense {expense_id} failed validation: {result.error}"
            )
        return result

    async def update(self, expense: Expense) -> Result[None, Exception]:
        try:
            db_expense = await self._db.get(ExpenseModel, expense.id.value)
            if db_expense is None:
                return err(NotFoundError("Expense", str(expense.id)))

            db_expense.description = expense.description
            db_expense.amount = expense.amount.amount
            db_expense.currency = expense.amount.currency.value
            db_expense.category = expense.category.value
            db_expense.expense_date = ensure_utc(expense.expense_date)
            db_expense.updated_at = ensure_utc(expense.updated_at)

            await self._db.flush()
        except SQLAlchemyError as e:
            logger.error(f"Failed to update expense {expense.id}: {e}")
            return err(e)

        logger.info(f"✏️  Updated expense {expense.id}")
        return ok(None)

    async def delete(self, expense_id: ExpenseId) -> Result[None, Exception]:
        try:
            db_expense = await self._db.get(ExpenseModel, expense_id.value)
            if db_expense is None:
                return err(NotFoundError("Expense", str(expense_id)))

            await self._db.delete(db_expense)
            await self._db.flush()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete expense {expense_id}: {e}")
            return err(e)

        logger.info(f"🗑️  Deleted expense {expense_id}")
        return ok(None)

    async def list(
        self,
        pagination: PaginationOptions,
        filter: Optional[ListExpensesFilter] = None
    ) -> Result[PaginatedResult[Expense], Exception]:
        conditions = self._build_conditions(filter)

        stmt = select(ExpenseModel)
        count_stmt = select(func.count()).select_from(ExpenseModel)
        if conditions:
            stmt = stmt.where(and_(*conditions))
            count_stmt = count_stmt.where(and_(*conditions))

        stmt = (
            stmt
            .order_by(desc(ExpenseModel.expense_date), desc(ExpenseModel.created_at))
            .offset(pagination.offset)
            .limit(pagination.limit)
        )

        try:
            rows = (await self._db.execute(stmt)).scalars().all()
            total = (await self._db.execute(count_stmt)).scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list expenses: {e}")
            return err(e)

        expenses: List[Expense] = []
        for row in rows:
            result = self._to_domain(row)
            if result.is_err():
                logger.warning(f"Stored expense {row.id} failed validation: {result.error}")
                return result
            expenses.append(result.value)

        logger.debug(
            f"📖 Listed {len(expenses)} of {total} expenses "
            f"(page={pagination.page}, limit={pagination.limit})"
        )

        return ok(PaginatedResult(
            data=expenses,
            total=total,
            page=pagination.page,
            limit=pagination.limit,
        ))

    def _build_conditions(self, filter: Optional[ListExpensesFilter]) -> List:
        if filter is None:
            return []

        conditions = []
        if filter.category is not None:
            conditions.append(ExpenseModel.category == ExpenseCategory(filter.category).value)
        # Stored values are UTC wall-clock, so compare against UTC
        if filter.start_date is not None:
            conditions.append(ExpenseModel.expense_date >= ensure_utc(filter.start_date))
        if filter.end_date is not None:
            conditions.append(ExpenseModel.expense_date <= ensure_utc(filter.end_date))
        return conditions

    # Domain ↔ ORM conversion methods

    def _to_orm(self, expense: Expense) -> ExpenseModel:
        """Convert domain Expense → ORM ExpenseModel"""
        return ExpenseModel(
            id=expense.id.value,
            description=expense.description,
            amount=expense.amount.amount,
            currency=expense.amount.currency.value,
            category=expense.category.value,
            expense_date=ensure_utc(expense.expense_date),
            created_at=ensure_utc(expense.created_at),
            updated_at=ensure_utc(expense.updated_at),
        )

    def _to_domain(self, db_expense: ExpenseModel) -> Result[Expense, ValidationErrors]:
        """Convert ORM ExpenseModel → domain Expense (re-validated)"""
        id_result = ExpenseId.from_string(db_expense.id)
        if id_result.is_err():
            return err(ValidationErrors([id_result.error]))

        money_result = Money.create(db_expense.amount, db_expense.currency)
        if money_result.is_err():
            return err(ValidationErrors([money_result.error]))

        try:
            category = ExpenseCategory(db_expense.category)
        except ValueError:
            return err(ValidationErrors([
                ValidationError("category", f"Unknown category '{db_expense.category}'")
            ]))

        build_result = (
            ExpenseBuilder()
            .with_id(id_result.value)
            .with_description(db_expense.description)
            .with_money(money_result.value)
            .with_category(category)
            .with_expense_date(db_expense.expense_date)
            .with_created_at(db_expense.created_at)
            .with_updated_at(db_expense.updated_at)
            .build()
        )
        if build_result.is_err():
            return err(ValidationErrors(build_result.error))
        return build_result

"""
Expenses API - CRUD and listing endpoints.

Routes are thin: parse the request with pydantic, run the matching handler
from app.application.expense_service, and raise the Err value if there is
one. The exception handlers in app.main turn domain errors into 400/404.
"""
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from app.application.expense_service import (
    CreateExpenseCommand,
    CreateExpenseHandler,
    DeleteExpenseHandler,
    GetExpenseByIdHandler,
    ListExpensesHandler,
    ListExpensesQuery,
    UpdateExpenseCommand,
    UpdateExpenseHandler,
)
from app.config import settings
from app.db.connection import get_db_session
from app.domain.entities import ExpenseCategory
from app.domain.result import Result
from app.domain.value_objects import MAX_AMOUNT, Currency
from app.repositories.expense_repository import ExpenseRepository

router = APIRouter()


# ============================================
# Pydantic Models
# ============================================

class CreateExpenseRequest(BaseModel):
    """Request to record a new expense"""
    description: str = Field(..., min_length=1, max_length=500, description="What the expense was for")
    amount: Decimal = Field(..., gt=0, le=MAX_AMOUNT, description="Positive amount, rounded to 2 decimals")
    currency: Currency = Field(..., description="USD | EUR | GBP | JPY")
    category: ExpenseCategory = Field(..., description="food | transport | entertainment | utilities | healthcare | other")
    expense_date: datetime = Field(
        ..., alias="expenseDate", description="ISO 8601 datetime; cannot be in the future"
    )

    class Config:
        populate_by_name = True


class UpdateExpenseRequest(BaseModel):
    """Partial update - omitted fields are left unchanged"""
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    amount: Optional[Decimal] = Field(None, gt=0, le=MAX_AMOUNT)
    currency: Optional[Currency] = None
    category: Optional[ExpenseCategory] = None
    expense_date: Optional[datetime] = Field(None, alias="expenseDate")

    class Config:
        populate_by_name = True


class ExpenseResponse(BaseModel):
    """Expense details (camelCase, ISO 8601 timestamps)"""
    id: str
    description: str
    amount: float
    currency: str
    category: str
    expenseDate: str
    createdAt: str
    updatedAt: str


class PaginationInfo(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int


class ListExpensesResponse(BaseModel):
    data: List[ExpenseResponse]
    pagination: PaginationInfo


# ============================================
# Dependencies
# ============================================

async def get_expense_repository(
    db: AsyncSession = Depends(get_db_session)
) -> ExpenseRepository:
    return ExpenseRepository(db)


def _unwrap(result: Result):
    """Return the Ok value or raise the Err so the app exception handlers map it"""
    if result.is_err():
        raise result.error
    return result.value


# ============================================
# Endpoints
# ============================================

@router.post("/expenses", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    request: CreateExpenseRequest,
    repository: ExpenseRepository = Depends(get_expense_repository)
):
    """Create a new expense."""
    command = CreateExpenseCommand(
        description=request.description,
        amount=request.amount,
        currency=request.currency,
        category=request.category,
        expense_date=request.expense_date,
    )
    return _unwrap(await CreateExpenseHandler(repository).execute(command))


@router.get("/expenses", response_model=ListExpensesResponse)
async def list_expenses(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    category: Optional[ExpenseCategory] = Query(None),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    repository: ExpenseRepository = Depends(get_expense_repository)
):
    """
    List expenses, newest expense date first.

    Filters: category, startDate/endDate (inclusive, on expense date).
    """
    query = ListExpensesQuery(
        page=page,
        limit=limit,
        category=category,
        start_date=start_date,
        end_date=end_date,
    )
    return _unwrap(await ListExpensesHandler(repository).execute(query))


@router.get("/expenses/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: str,
    repository: ExpenseRepository = Depends(get_expense_repository)
):
    """Get a single expense by ID."""
    return _unwrap(await GetExpenseByIdHandler(repository).execute(expense_id))


@router.put("/expenses/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: str,
    request: UpdateExpenseRequest,
    repository: ExpenseRepository = Depends(get_expense_repository)
):
    """Update description, amount/currency, category and/or expense date."""
    command = UpdateExpenseCommand(
        description=request.description,
        amount=request.amount,
        currency=request.currency,
        category=request.category,
        expense_date=request.expense_date,
    )
    return _unwrap(await UpdateExpenseHandler(repository).execute(expense_id, command))


@router.delete("/expenses/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: str,
    repository: ExpenseRepository = Depends(get_expense_repository)
):
    """Delete an expense."""
    _unwrap(await DeleteExpenseHandler(repository).execute(expense_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""
SQLAlchemy ORM models for database tables.

These map to actual tables and are separate from the domain entities in
app/domain/entities.py; ExpenseRepository converts between the two.

YAGNI: Start minimal, add tables only when needed.
"""
from sqlalchemy import Column, String, DateTime, Index, Numeric
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class ExpenseModel(Base):
    """
    Expenses table - one row per expense.

    Timestamps are stored as UTC. SQLite drops tzinfo on read, so the domain
    layer treats naive values coming back as UTC.
    """
    __tablename__ = "expenses"

    id = Column(String(36), primary_key=True)  # UUID string (ExpenseId)
    description = Column(String(500), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)  # Always 2 decimal places
    currency = Column(String(3), nullable=False)  # 'USD', 'EUR', 'GBP', 'JPY'
    category = Column(String(20), nullable=False)  # 'food', 'transport', ...
    expense_date = Column(DateTime(timezone=True), nullable=False)  # When the expense occurred
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index('idx_expenses_expense_date', 'expense_date'),
        Index('idx_expenses_category', 'category'),
    )

    def __repr__(self) -> str:
        return f"<ExpenseModel id={self.id} amount={self.amount} {self.currency}>"

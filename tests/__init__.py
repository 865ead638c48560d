"""
Tests for the Expense Tracker

Tests are organized by layer:
- test_money.py, test_expense_id.py, test_result.py: value objects and Result
- test_expense.py, test_expense_builder.py: Expense entity and its builder
- test_expense_repository.py: SQLAlchemy repository against in-memory SQLite
- test_expense_handlers.py: command/query handlers with an in-memory repository
- test_expenses_api.py: HTTP endpoints end to end
"""

"""
Expense API endpoints.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.dependencies import get_current_user
from backend.app.db.session import get_db
from backend.app.domain.ledger.payments import to_money, today_str
from backend.app.schemas.ledger import (
    ExpenseCreate, ExpenseResponse, SaveExpenseResponse, SuccessResponse
)
from backend.app.services.ledger_store import LedgerStore

logger = logging.getLogger("ledger.expenses")

router = APIRouter(prefix="/api", tags=["Expenses"])


@router.get("/get-expenses", response_model=List[ExpenseResponse])
async def get_expenses(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """List all expenses, newest first."""
    try:
        return await LedgerStore(db).list_expenses()
    except SQLAlchemyError:
        logger.exception("Failed to list expenses")
        return []


@router.post("/save-expense", response_model=SaveExpenseResponse, response_model_exclude_none=True)
async def save_expense(
    expense: ExpenseCreate,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Record a standalone expense. Date defaults to today, amount to 0."""
    try:
        created = await LedgerStore(db).create_expense(
            date=expense.date or today_str(),
            description=expense.description,
            amount=float(to_money(expense.amount)),
        )
    except SQLAlchemyError:
        logger.exception("Failed to save expense")
        await db.rollback()
        return SaveExpenseResponse(success=False)

    return SaveExpenseResponse(success=True, expense=ExpenseResponse.model_validate(created))


@router.delete("/delete-expense/{expense_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_expense(
    expense_id: str,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete an expense by id. Unknown or malformed ids answer `success: false`."""
    try:
        key = int(expense_id)
    except ValueError:
        return SuccessResponse(success=False, msg="Invalid expense id")

    try:
        found = await LedgerStore(db).delete_expense(key)
    except SQLAlchemyError:
        logger.exception("Failed to delete expense %s", expense_id)
        await db.rollback()
        return SuccessResponse(success=False)

    return SuccessResponse(success=found)

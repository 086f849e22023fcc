"""Expenses: create, list, get, delete."""
import logging
import os

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from splitter.database import get_db
from splitter.errors import InvalidInput, NotFound, RepositoryFailure
from splitter.repository import ExpenseRepository
from splitter.schemas import ExpenseCreate, ExpenseResponse
from splitter.services.split_calculator import RoundingPolicy, compute_shares, to_cents

logger = logging.getLogger(__name__)

SPLIT_ROUNDING_POLICY = RoundingPolicy(os.getenv("SPLIT_ROUNDING_POLICY", RoundingPolicy.PER_SHARE.value))

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.post("", response_model=ExpenseResponse)
def create_expense(data: ExpenseCreate, db: Session = Depends(get_db)):
    if not data.description.strip():
        raise HTTPException(status_code=400, detail="Description is required")
    try:
        total = to_cents(data.total_amount)
        shares = compute_shares(total, data.participant_ids, SPLIT_ROUNDING_POLICY)
        expense = ExpenseRepository(db).create_expense(
            description=data.description,
            total_amount=total,
            payer_id=data.paid_by,
            shares=shares,
            expense_date=data.expense_date,
        )
    except InvalidInput as exc:
        logger.warning("Rejected expense %r: %s", data.description, exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except RepositoryFailure:
        raise HTTPException(status_code=503, detail="Failed to add expense. Please try again.")
    logger.info("Added expense %s (%s, %s split %d ways)", expense.id, expense.description, expense.total_amount, len(shares))
    return expense


@router.get("", response_model=list[ExpenseResponse])
def list_expenses(db: Session = Depends(get_db)):
    try:
        return ExpenseRepository(db).list_expenses()
    except RepositoryFailure:
        raise HTTPException(status_code=503, detail="Failed to load expenses. Please try again.")


@router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(expense_id: int, db: Session = Depends(get_db)):
    try:
        return ExpenseRepository(db).get_expense(expense_id)
    except NotFound:
        raise HTTPException(status_code=404, detail="Expense not found")
    except RepositoryFailure:
        raise HTTPException(status_code=503, detail="Failed to load expense. Please try again.")


@router.delete("/{expense_id}", status_code=204)
def delete_expense(
    expense_id: int,
    confirm: bool = Query(False),
    db: Session = Depends(get_db),
):
    repo = ExpenseRepository(db)
    try:
        expense = repo.get_expense(expense_id)
        if not confirm:
            raise HTTPException(
                status_code=400,
                detail=f'Are you sure you want to delete "{expense.description}"? Repeat with confirm=true.',
            )
        repo.delete_expense(expense_id)
    except NotFound:
        raise HTTPException(status_code=404, detail="Expense not found")
    except RepositoryFailure:
        raise HTTPException(status_code=503, detail="Failed to delete expense. Please try again.")
    logger.info("Deleted expense %s", expense_id)

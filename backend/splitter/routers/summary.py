"""Summary: totals owed, net balances, and the full view snapshot."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from splitter.database import get_db
from splitter.errors import RepositoryFailure
from splitter.repository import ExpenseRepository
from splitter.schemas import AppState, ExpenseResponse, ParticipantResponse, SummaryResponse
from splitter.services.aggregator import compute_balances, compute_totals, grand_total

router = APIRouter(tags=["summary"])


def _summary(expenses: list[ExpenseResponse]) -> SummaryResponse:
    totals = compute_totals(expenses)
    return SummaryResponse(
        totals=totals,
        grand_total=grand_total(totals),
        balances=compute_balances(expenses),
    )


@router.get("/summary", response_model=SummaryResponse)
def get_summary(db: Session = Depends(get_db)):
    try:
        expenses = ExpenseRepository(db).list_expenses()
    except RepositoryFailure:
        raise HTTPException(status_code=503, detail="Failed to load expenses. Please try again.")
    return _summary(expenses)


@router.get("/state", response_model=AppState)
def get_state(db: Session = Depends(get_db)):
    repo = ExpenseRepository(db)
    try:
        participants = repo.list_participants()
        expenses = repo.list_expenses()
    except RepositoryFailure:
        raise HTTPException(status_code=503, detail="Failed to load data. Please try again.")
    return AppState(
        participants=[ParticipantResponse.model_validate(p) for p in participants],
        expenses=expenses,
        summary=_summary(expenses),
    )

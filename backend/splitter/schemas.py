"""Pydantic schemas for request/response."""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


# ----- Participant -----
class ParticipantCreate(BaseModel):
    name: str


class ParticipantResponse(BaseModel):
    id: int
    name: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ----- Expense -----
class ExpenseCreate(BaseModel):
    description: str
    total_amount: Decimal
    paid_by: int
    participant_ids: list[int]
    expense_date: Optional[date] = None


class OwedShareInfo(BaseModel):
    id: int
    name: str
    amount_owed: Decimal


class ExpenseResponse(BaseModel):
    id: int
    description: str
    total_amount: Decimal
    expense_date: date
    created_at: Optional[datetime] = None
    paid_by: int
    payer_name: str
    participants: list[OwedShareInfo] = []


# ----- Summary -----
class ParticipantTotal(BaseModel):
    participant_id: int
    name: str
    total: Decimal


class ParticipantBalance(BaseModel):
    participant_id: int
    name: str
    paid: Decimal
    owes: Decimal
    net: Decimal


class SummaryResponse(BaseModel):
    totals: list[ParticipantTotal]
    grand_total: Decimal
    balances: list[ParticipantBalance]


class AppState(BaseModel):
    participants: list[ParticipantResponse]
    expenses: list[ExpenseResponse]
    summary: SummaryResponse

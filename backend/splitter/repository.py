"""Expense repository: participants, expenses and owed shares on top of a SQLAlchemy session."""
import logging
from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from splitter.errors import (
    DuplicateParticipant,
    InvalidInput,
    NotFound,
    ReferentialConstraint,
    RepositoryFailure,
)
from splitter.models import Expense, OwedShare, Participant
from splitter.schemas import ExpenseResponse, OwedShareInfo
from splitter.services.split_calculator import check_amount

logger = logging.getLogger(__name__)


def expense_record(exp: Expense) -> ExpenseResponse:
    return ExpenseResponse(
        id=exp.id,
        description=exp.description,
        total_amount=exp.total_amount,
        expense_date=exp.expense_date,
        created_at=exp.created_at,
        paid_by=exp.paid_by,
        payer_name=exp.payer.name if exp.payer else "Unknown",
        participants=[
            OwedShareInfo(id=s.participant_id, name=s.participant.name, amount_owed=s.amount_owed)
            for s in exp.shares
        ],
    )


class ExpenseRepository:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _failures(self, action: str):
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Error %s", action)
            raise RepositoryFailure(f"Error {action}") from exc

    # ----- Participants -----
    def list_participants(self) -> list[Participant]:
        with self._failures("loading participants"):
            return self.db.query(Participant).order_by(Participant.name).all()

    def create_participant(self, name: str) -> Participant:
        name = (name or "").strip()
        if not name:
            raise InvalidInput("Please enter a name")
        with self._failures("adding participant"):
            if self.db.query(Participant).filter(Participant.name == name).first():
                raise DuplicateParticipant(f"Participant '{name}' already exists")
            participant = Participant(name=name)
            self.db.add(participant)
            try:
                self.db.commit()
            except IntegrityError as exc:
                # lost a race with another session inserting the same name
                self.db.rollback()
                raise DuplicateParticipant(f"Participant '{name}' already exists") from exc
            self.db.refresh(participant)
            return participant

    def get_participant(self, participant_id: int) -> Participant:
        with self._failures("loading participant"):
            participant = self.db.get(Participant, participant_id)
        if participant is None:
            raise NotFound("Participant not found")
        return participant

    def delete_participant(self, participant_id: int) -> None:
        participant = self.get_participant(participant_id)
        with self._failures("deleting participant"):
            paid = self.db.query(Expense.id).filter(Expense.paid_by == participant_id).first()
            owed = self.db.query(OwedShare.id).filter(OwedShare.participant_id == participant_id).first()
            if paid or owed:
                raise ReferentialConstraint(
                    f"Cannot remove {participant.name}. They may have expenses associated with them."
                )
            self.db.delete(participant)
            try:
                self.db.commit()
            except IntegrityError as exc:
                self.db.rollback()
                raise ReferentialConstraint(
                    f"Cannot remove {participant.name}. They may have expenses associated with them."
                ) from exc

    # ----- Expenses -----
    def _expense_query(self):
        return self.db.query(Expense).options(
            joinedload(Expense.payer),
            selectinload(Expense.shares).joinedload(OwedShare.participant),
        )

    def list_expenses(self) -> list[ExpenseResponse]:
        with self._failures("loading expenses"):
            expenses = self._expense_query().order_by(Expense.expense_date.desc(), Expense.id.desc()).all()
            return [expense_record(e) for e in expenses]

    def _get_expense(self, expense_id: int) -> Expense:
        with self._failures("loading expense"):
            expense = self._expense_query().filter(Expense.id == expense_id).first()
        if expense is None:
            raise NotFound("Expense not found")
        return expense

    def get_expense(self, expense_id: int) -> ExpenseResponse:
        return expense_record(self._get_expense(expense_id))

    def create_expense(
        self,
        description: str,
        total_amount: Decimal,
        payer_id: int,
        shares: dict[int, Decimal],
        expense_date: Optional[date] = None,
    ) -> ExpenseResponse:
        """Write the expense and all of its owed shares in one transaction."""
        description = (description or "").strip()
        if not description:
            raise InvalidInput("Description is required")
        if total_amount is None:
            raise InvalidInput("Amount must be positive")
        check_amount(total_amount)
        if not shares:
            raise InvalidInput("At least one participant required")

        with self._failures("adding expense"):
            wanted = set(shares) | {payer_id}
            found = {p.id for p in self.db.query(Participant).filter(Participant.id.in_(wanted)).all()}
            if payer_id not in found:
                raise InvalidInput("Payer must be an existing participant")
            if found != wanted:
                raise InvalidInput("All participants must exist")

            expense = Expense(
                description=description,
                total_amount=total_amount,
                paid_by=payer_id,
                expense_date=expense_date or date.today(),
            )
            self.db.add(expense)
            self.db.flush()
            for pid, amount in shares.items():
                self.db.add(OwedShare(expense_id=expense.id, participant_id=pid, amount_owed=amount))
            self.db.commit()
            expense_id = expense.id

        return self.get_expense(expense_id)

    def delete_expense(self, expense_id: int) -> None:
        expense = self._get_expense(expense_id)
        with self._failures("deleting expense"):
            self.db.delete(expense)
            self.db.commit()

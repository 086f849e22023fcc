"""SQLAlchemy models."""
from datetime import date

from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, Date, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from splitter.database import Base


class Participant(Base):
    __tablename__ = "participants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    expenses_paid = relationship(
        "Expense", back_populates="payer", foreign_keys="Expense.paid_by", passive_deletes="all"
    )
    shares = relationship("OwedShare", back_populates="participant", passive_deletes="all")


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)
    description = Column(String(512), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    expense_date = Column(Date, nullable=False, default=date.today)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    paid_by = Column(Integer, ForeignKey("participants.id", ondelete="RESTRICT"), nullable=False)

    payer = relationship("Participant", back_populates="expenses_paid", foreign_keys=[paid_by])
    shares = relationship(
        "OwedShare",
        back_populates="expense",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="OwedShare.id",
    )


class OwedShare(Base):
    __tablename__ = "expense_participants"
    __table_args__ = (UniqueConstraint("expense_id", "participant_id"),)

    id = Column(Integer, primary_key=True, index=True)
    expense_id = Column(Integer, ForeignKey("expenses.id", ondelete="CASCADE"), nullable=False)
    participant_id = Column(Integer, ForeignKey("participants.id", ondelete="RESTRICT"), nullable=False)
    amount_owed = Column(Numeric(12, 2), nullable=False)

    expense = relationship("Expense", back_populates="shares")
    participant = relationship("Participant", back_populates="shares")

"""Per-participant totals and net balances, recomputed from the full expense list."""
from collections import defaultdict
from decimal import Decimal
from typing import Iterable

from splitter.schemas import ExpenseResponse, ParticipantBalance, ParticipantTotal


def compute_totals(expenses: Iterable[ExpenseResponse]) -> list[ParticipantTotal]:
    """Sum of amount_owed per participant, largest first. Ties keep first-seen order."""
    names: dict[int, str] = {}
    totals: dict[int, Decimal] = defaultdict(Decimal)
    for e in expenses:
        for p in e.participants:
            names.setdefault(p.id, p.name)
            totals[p.id] += p.amount_owed

    out = [ParticipantTotal(participant_id=pid, name=name, total=totals[pid]) for pid, name in names.items()]
    out.sort(key=lambda t: t.total, reverse=True)
    return out


def grand_total(totals: Iterable[ParticipantTotal]) -> Decimal:
    return sum((t.total for t in totals), Decimal("0.00"))


def compute_balances(expenses: Iterable[ExpenseResponse]) -> list[ParticipantBalance]:
    """
    paid: sum of total_amount over expenses the participant paid.
    owes: sum of their owed shares, including a payer's share of their own expense.
    net = paid - owes (positive = the group owes them). Sorted by net, largest first.
    """
    names: dict[int, str] = {}
    paid: dict[int, Decimal] = defaultdict(Decimal)
    owes: dict[int, Decimal] = defaultdict(Decimal)
    for e in expenses:
        names.setdefault(e.paid_by, e.payer_name)
        paid[e.paid_by] += e.total_amount
        for p in e.participants:
            names.setdefault(p.id, p.name)
            owes[p.id] += p.amount_owed

    out = [
        ParticipantBalance(
            participant_id=pid,
            name=name,
            paid=paid.get(pid, Decimal("0.00")),
            owes=owes.get(pid, Decimal("0.00")),
            net=paid.get(pid, Decimal("0.00")) - owes.get(pid, Decimal("0.00")),
        )
        for pid, name in names.items()
    ]
    # list.sort is stable, so equal nets stay in first-appearance order
    out.sort(key=lambda b: b.net, reverse=True)
    return out

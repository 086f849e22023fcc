"""Divide an expense total evenly among the selected participants."""
from decimal import Decimal, InvalidOperation, ROUND_DOWN, ROUND_HALF_UP
from enum import Enum
from typing import Hashable, Iterable, Union

from splitter.errors import InvalidInput

CENT = Decimal("0.01")
# Largest value a Numeric(12, 2) money column holds.
MAX_AMOUNT = Decimal("9999999999.99")


class RoundingPolicy(str, Enum):
    # Each share rounded on its own; the sum may drift from the total by a few cents.
    PER_SHARE = "per_share"
    # Shares rounded down, then the leftover cents go to the first participant.
    REMAINDER_TO_FIRST = "remainder_to_first"


def to_cents(value: Union[Decimal, float, int, str], rounding: str = ROUND_HALF_UP) -> Decimal:
    try:
        if not isinstance(value, Decimal):
            value = Decimal(str(value))
        if not value.is_finite():
            raise InvalidOperation
        return value.quantize(CENT, rounding=rounding)
    except InvalidOperation as exc:
        raise InvalidInput(f"Invalid amount: {value}") from exc


def check_amount(total: Decimal) -> Decimal:
    if total <= 0:
        raise InvalidInput("Amount must be positive")
    if total > MAX_AMOUNT:
        raise InvalidInput(f"Amount must not exceed {MAX_AMOUNT}")
    return total


def compute_shares(
    total_amount: Union[Decimal, float, int, str],
    participant_ids: Iterable[Hashable],
    policy: RoundingPolicy = RoundingPolicy.PER_SHARE,
) -> dict:
    """
    total_amount: positive amount to split, at most MAX_AMOUNT.
    participant_ids: who owes a share; duplicates are ignored, first-seen order is kept.
    Returns participant id -> non-negative share in cents.
    """
    total = check_amount(to_cents(total_amount))
    ids = list(dict.fromkeys(participant_ids))
    if not ids:
        raise InvalidInput("At least one participant required")

    if policy == RoundingPolicy.REMAINDER_TO_FIRST:
        share = to_cents(total / len(ids), rounding=ROUND_DOWN)
        shares = {pid: share for pid in ids}
        shares[ids[0]] = share + (total - share * len(ids))
        return shares

    share = to_cents(total / len(ids))
    return {pid: share for pid in ids}

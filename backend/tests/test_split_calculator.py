from decimal import Decimal

import pytest

from splitter.errors import InvalidInput
from splitter.services.split_calculator import MAX_AMOUNT, RoundingPolicy, compute_shares, to_cents


def test_even_split():
    assert compute_shares(Decimal("50.00"), ["A", "B"]) == {"A": Decimal("25.00"), "B": Decimal("25.00")}


def test_uneven_split_keeps_each_share_rounded():
    shares = compute_shares(Decimal("100.00"), ["A", "B", "C"])
    assert shares == {"A": Decimal("33.33"), "B": Decimal("33.33"), "C": Decimal("33.33")}
    assert sum(shares.values()) == Decimal("99.99")


def test_remainder_to_first_sums_exactly():
    shares = compute_shares(Decimal("100.00"), ["A", "B", "C"], RoundingPolicy.REMAINDER_TO_FIRST)
    assert shares == {"A": Decimal("33.34"), "B": Decimal("33.33"), "C": Decimal("33.33")}
    assert sum(shares.values()) == Decimal("100.00")


def test_rounds_half_up():
    # 0.05 / 2 = 0.025
    assert compute_shares(Decimal("0.05"), ["A", "B"]) == {"A": Decimal("0.03"), "B": Decimal("0.03")}


@pytest.mark.parametrize("total", ["0.01", "1.00", "10.00", "99.99", "100.00", "1234.56"])
@pytest.mark.parametrize("n", [1, 2, 3, 6, 7])
def test_share_count_precision_and_tolerance(total, n):
    total = Decimal(total)
    ids = [f"p{i}" for i in range(n)]
    shares = compute_shares(total, ids)
    assert len(shares) == n
    for amount in shares.values():
        assert amount >= 0
        assert amount.as_tuple().exponent == -2
    assert abs(sum(shares.values()) - total) < Decimal("0.01") * n


def test_order_does_not_matter():
    first = compute_shares(Decimal("10.00"), ["A", "B", "C"])
    second = compute_shares(Decimal("10.00"), ["C", "A", "B"])
    assert first == second


def test_duplicate_ids_counted_once():
    assert compute_shares(Decimal("9.00"), [1, 2, 1]) == {1: Decimal("4.50"), 2: Decimal("4.50")}


def test_accepts_float_and_str():
    assert compute_shares(10.0, ["A", "B"]) == {"A": Decimal("5.00"), "B": Decimal("5.00")}
    assert compute_shares("7.50", ["A"]) == {"A": Decimal("7.50")}


@pytest.mark.parametrize("total", [Decimal("0"), Decimal("-5.00")])
def test_non_positive_total_rejected(total):
    with pytest.raises(InvalidInput):
        compute_shares(total, ["A"])


def test_empty_participants_rejected():
    with pytest.raises(InvalidInput):
        compute_shares(Decimal("10.00"), [])


def test_to_cents():
    assert to_cents("2.675") == Decimal("2.68")
    assert to_cents(3) == Decimal("3.00")


def test_remainder_to_first_never_negative():
    shares = compute_shares(Decimal("0.05"), range(10), RoundingPolicy.REMAINDER_TO_FIRST)
    assert shares[0] == Decimal("0.05")
    assert all(shares[i] == Decimal("0.00") for i in range(1, 10))
    assert sum(shares.values()) == Decimal("0.05")


@pytest.mark.parametrize("total", ["0.01", "0.05", "0.99", "100.00", "1234.56"])
@pytest.mark.parametrize("n", [2, 3, 7, 10])
def test_remainder_to_first_shares_are_exact_cents(total, n):
    total = Decimal(total)
    shares = compute_shares(total, range(n), RoundingPolicy.REMAINDER_TO_FIRST)
    assert sum(shares.values()) == total
    for amount in shares.values():
        assert amount >= 0
        assert amount.as_tuple().exponent == -2


@pytest.mark.parametrize("total", ["1e30", "10000000000.00", "123456789012345678.91", "NaN"])
def test_out_of_range_total_rejected(total):
    with pytest.raises(InvalidInput):
        compute_shares(total, ["A"])


def test_largest_total_accepted():
    assert compute_shares(MAX_AMOUNT, ["A"]) == {"A": Decimal("9999999999.99")}


def test_to_cents_rejects_garbage():
    with pytest.raises(InvalidInput):
        to_cents("1e30")
    with pytest.raises(InvalidInput):
        to_cents("twelve")

from decimal import Decimal

import pytest

from agroquote.business_logic.cost_comparison import (
    CaseInsensitiveUnitPolicy, ExactUnitPolicy, InvalidQuoteError,
    rank_quotes, select_winner, split_valid_quotes, total_cost, unit_cost,
)
from agroquote.constants import RankLabel

from conftest import make_quote


def test_unit_cost_divides_price_by_normalized_package():
    assert unit_cost(make_quote(1, "50.00", "25")) == Decimal("2")
    assert unit_cost(make_quote(2, "90.00", "50")) == Decimal("1.8")
    # A 20 L package with factor 0.5 holds 10 standard units.
    assert unit_cost(make_quote(3, "30.00", "20", factor="0.5")) == Decimal("3")


def test_total_cost_scales_with_quantity():
    quote = make_quote(1, "50.00", "25")
    assert total_cost(quote, Decimal("100")) == Decimal("200")
    assert total_cost(quote, Decimal("0")) == Decimal("0")


def test_costs_move_with_price_and_package():
    cheap = make_quote(1, "40.00", "25")
    pricey = make_quote(2, "60.00", "25")
    bigger = make_quote(3, "40.00", "50")
    assert unit_cost(cheap) < unit_cost(pricey)
    assert unit_cost(bigger) < unit_cost(cheap)
    assert total_cost(cheap, Decimal("10")) < total_cost(cheap, Decimal("20"))


@pytest.mark.parametrize("size, factor, reason", [
    ("0", "1.0", "tamanho da embalagem"),
    ("25", "0", "fator de conversão"),
    ("-5", "1.0", "tamanho da embalagem"),
])
def test_degenerate_quote_is_rejected(size, factor, reason):
    quote = make_quote(7, "50.00", size, factor=factor)
    with pytest.raises(InvalidQuoteError) as excinfo:
        unit_cost(quote)
    assert reason in excinfo.value.reason
    assert excinfo.value.quote is quote
    assert isinstance(excinfo.value, ValueError)


def test_split_valid_quotes_keeps_order_and_collects_rejections():
    good1 = make_quote(1, "50.00", "25")
    bad = make_quote(2, "10.00", "0")
    good2 = make_quote(3, "90.00", "50")
    valid, rejected = split_valid_quotes([good1, bad, good2])
    assert valid == [good1, good2]
    assert [e.quote for e in rejected] == [bad]


def test_select_winner_picks_lowest_total():
    farm1 = make_quote(1, "50.00", "25", store_name="Farm1")
    farm2 = make_quote(2, "90.00", "50", store_name="Farm2")
    winner = select_winner([farm1, farm2], Decimal("100"))
    assert winner.quote is farm2
    assert winner.total_cost == Decimal("180")
    assert winner.rank == 1
    assert winner.label is RankLabel.WINNER
    assert winner.store.name == "Farm2"


def test_select_winner_keeps_first_on_tie():
    first = make_quote(1, "50.00", "25")
    second = make_quote(2, "100.00", "50")
    assert select_winner([first, second], Decimal("10")).quote is first
    assert select_winner([second, first], Decimal("10")).quote is second


def test_select_winner_with_no_quotes():
    assert select_winner([], Decimal("10")) is None
    assert rank_quotes([], Decimal("10")) == []


def test_rank_quotes_orders_ascending_and_is_stable():
    a = make_quote(1, "60.00", "25")   # 2.40
    b = make_quote(2, "50.00", "25")   # 2.00
    c = make_quote(3, "100.00", "50")  # 2.00, ties with b
    d = make_quote(4, "90.00", "50")   # 1.80
    ranking = rank_quotes([a, b, c, d], Decimal("1"))

    assert [r.quote.id for r in ranking] == [4, 2, 3, 1]
    assert [r.rank for r in ranking] == [1, 2, 3, 4]
    assert [r.is_winner for r in ranking] == [True, False, False, False]
    assert ranking[1].label is RankLabel.LOSER
    costs = [r.total_cost for r in ranking]
    assert costs == sorted(costs)


def test_rank_first_matches_select_winner():
    quotes = [make_quote(i, price, size) for i, (price, size) in
              enumerate([("70", "30"), ("45", "20"), ("45", "20"), ("99", "40")], start=1)]
    winner = select_winner(quotes, Decimal("37.5"))
    ranking = rank_quotes(quotes, Decimal("37.5"))
    assert ranking[0].quote is winner.quote
    assert ranking[0].total_cost == winner.total_cost


def test_exact_unit_policy_is_plain_equality():
    policy = ExactUnitPolicy()
    assert policy.is_compatible("KG", "KG")
    assert not policy.is_compatible("kg", "KG")
    assert not policy.is_compatible("L", "KG")


def test_case_insensitive_unit_policy():
    policy = CaseInsensitiveUnitPolicy()
    assert policy.is_compatible(" kg", "KG")
    assert not policy.is_compatible("L", "KG")

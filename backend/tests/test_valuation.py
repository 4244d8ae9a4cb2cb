"""Position, basket and portfolio valuation."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from basketwise import Basket, Sign, StockPosition, aggregate_portfolio, value_basket, value_position
from basketwise.valuation import build_portfolio_cashflows, is_fully_exited


def test_open_position_uses_last_traded_price():
    valuation = value_position(StockPosition(symbol="TCS", quantity=10, buy_price=100, last_traded_price=120))
    assert valuation.invested == pytest.approx(1000)
    assert valuation.current_value == pytest.approx(1200)
    assert valuation.return_abs == pytest.approx(200)
    assert valuation.return_pct == pytest.approx(20)
    assert valuation.sign is Sign.POSITIVE
    assert valuation.exited is False


def test_exited_position_uses_sell_price():
    valuation = value_position(
        StockPosition(
            symbol="TCS",
            quantity=10,
            buy_price=100,
            last_traded_price=120,
            sell_price=90,
            sell_date="2024-06-30",
        )
    )
    assert valuation.exited is True
    assert valuation.effective_price == 90
    assert valuation.current_value == pytest.approx(900)
    assert valuation.return_pct == pytest.approx(-10)
    assert valuation.sign is Sign.NEGATIVE


def test_sell_price_without_date_is_still_live():
    valuation = value_position(
        StockPosition(symbol="TCS", quantity=10, buy_price=100, last_traded_price=120, sell_price=90, sell_date="  ")
    )
    assert valuation.exited is False
    assert valuation.current_value == pytest.approx(1200)


def test_decimal_inputs_are_valued_like_floats():
    valuation = value_position(
        StockPosition(symbol="A", quantity=Decimal("10"), buy_price=Decimal("100"), last_traded_price=Decimal("120"))
    )
    assert valuation.invested == pytest.approx(1000)
    assert valuation.current_value == pytest.approx(1200)
    assert valuation.return_pct == pytest.approx(20)
    assert valuation.sign is Sign.POSITIVE


def test_position_without_ltp_is_valued_at_cost():
    valuation = value_position(StockPosition(symbol="TCS", quantity=4, buy_price=250))
    assert valuation.return_abs == 0
    assert valuation.return_pct == 0
    assert valuation.sign is Sign.ZERO


@pytest.mark.parametrize(
    "stock",
    [
        StockPosition(symbol="A", quantity=0, buy_price=100, last_traded_price=150),
        StockPosition(symbol="B", quantity=5, buy_price=0, last_traded_price=10),
        StockPosition(symbol="C", quantity="abc", buy_price=None, last_traded_price="x"),  # type: ignore[arg-type]
    ],
)
def test_zero_cost_positions_report_zero_percent(stock):
    valuation = value_position(stock)
    assert valuation.invested == 0
    assert valuation.return_pct == 0.0


def test_malformed_numbers_coalesce_instead_of_raising():
    stock = StockPosition.from_mapping({"symbol": "X", "quantity": "ten", "buy_price": "12.5", "ltp": None})
    valuation = value_position(stock)
    assert valuation.quantity == 0
    assert valuation.current_value == 0


def test_basket_totals_are_sums_and_return_comes_from_sums(mixed_basket):
    valuation = value_basket(mixed_basket)
    assert valuation.invested == pytest.approx(sum(p.invested for p in valuation.positions))
    assert valuation.current_value == pytest.approx(sum(p.current_value for p in valuation.positions))
    assert valuation.invested == pytest.approx(2000)
    assert valuation.current_value == pytest.approx(2100)
    # 5%, not the 20% + -10% sum of per-position percentages
    assert valuation.return_pct == pytest.approx(5.0)
    assert [p.symbol for p in valuation.positions] == ["TCS", "INFY"]
    assert valuation.positions[0].label == "Tata Consultancy (TCS)"
    assert valuation.positions[1].label == "INFY"
    assert valuation.fully_exited is False


def test_fully_exited_requires_every_stock_and_at_least_one():
    exited = StockPosition(symbol="A", quantity=1, buy_price=10, sell_price=12, sell_date="2024-01-02")
    live = StockPosition(symbol="B", quantity=1, buy_price=10)
    assert is_fully_exited(Basket(id="1", name="empty", created_at="2024-01-01")) is False
    assert is_fully_exited(Basket(id="2", name="partial", created_at="2024-01-01", stocks=(exited, live))) is False
    assert is_fully_exited(Basket(id="3", name="done", created_at="2024-01-01", stocks=(exited,))) is True
    assert value_basket(Basket(id="1", name="empty", created_at="2024-01-01")).return_pct == 0


def test_portfolio_excludes_exited_positions_from_totals(mixed_basket, as_of):
    summary = aggregate_portfolio([mixed_basket], today=as_of)
    assert summary.total_invested == pytest.approx(1000)
    assert summary.total_current_value == pytest.approx(1200)
    assert summary.total_return == pytest.approx(200)
    assert summary.total_return_pct == pytest.approx(20)


def test_portfolio_cashflows_include_realised_exits(mixed_basket, as_of):
    flows = build_portfolio_cashflows([mixed_basket], as_of)
    assert [(cf.amount, cf.date) for cf in flows] == [
        (-1000, date(2023, 1, 1)),
        (1200, as_of),
        (-1000, date(2023, 1, 1)),
        (900, date(2023, 7, 1)),
    ]
    summary = aggregate_portfolio([mixed_basket], today=as_of)
    assert 0 < summary.xirr < 10
    assert len(summary.cashflows) == 4


def test_portfolio_xirr_for_single_open_basket(as_of):
    basket = Basket(
        id="b-2",
        name="One year",
        created_at="2023-01-01",
        stocks=(StockPosition(symbol="TCS", quantity=10, buy_price=100, last_traded_price=110),),
    )
    assert aggregate_portfolio([basket], today=as_of).xirr == pytest.approx(10.0, abs=0.1)


def test_unparseable_creation_date_skips_cashflows_but_keeps_totals(as_of, caplog):
    basket = Basket(
        id="b-3",
        name="Broken",
        created_at="yesterday",
        stocks=(StockPosition(symbol="TCS", quantity=10, buy_price=100, last_traded_price=110),),
    )
    summary = aggregate_portfolio([basket], today=as_of)
    assert summary.total_invested == pytest.approx(1000)
    assert summary.cashflows == ()
    assert summary.xirr == 0
    assert "unparseable created_at" in caplog.text


def test_aggregate_of_no_baskets_is_all_zero():
    summary = aggregate_portfolio([], today=date(2024, 1, 1))
    assert summary.total_invested == 0
    assert summary.total_return_pct == 0
    assert summary.xirr == 0


def test_portfolio_valuation_date_must_be_supplied(mixed_basket):
    with pytest.raises(TypeError):
        aggregate_portfolio([mixed_basket])

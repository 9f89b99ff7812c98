"""
Tests for request parameter rendering and wire value coercion.
"""

import math

import pytest

from cryptomkt.exchanges.cryptomkt.structs.requests import (
    BooksOptions, TradesOptions, MarketOrderOptions, MarketOrderRequest, PaymentRequest
)
from cryptomkt.exchanges.cryptomkt.utils import (
    to_float, to_int, format_number, to_side, from_side, to_order_status, payment_status_text
)
from cryptomkt.exchanges.structs import Side, OrderStatus


class TestMarketOrderRequest:

    def test_params(self):
        request = MarketOrderRequest(market="ethclp", side=Side.SELL, amount=1.25, price=7120)
        assert request.to_params() == {
            "amount": "1.25", "market": "ethclp", "price": "7120", "type": "sell"
        }

    def test_params_round_trip(self):
        request = MarketOrderRequest(market="ethclp", side=Side.BUY, amount=0.3, price=10000.0)
        assert MarketOrderRequest.from_params(request.to_params()) == request

    @pytest.mark.parametrize("amount,price", [
        (0.000000004, 100.0),
        (1.123456789, 7120.5),
        (1e-12, 1e20),
        (123456789.123456, 0.1),
    ])
    def test_round_trip_keeps_precision(self, amount, price):
        request = MarketOrderRequest(market="btcclp", side=Side.BUY, amount=amount, price=price)
        request.validate()

        params = request.to_params()

        assert "e" not in params["amount"] and "e" not in params["price"]
        assert MarketOrderRequest.from_params(params) == request

    @pytest.mark.parametrize("kwargs", [
        dict(market="", side=Side.BUY, amount=1, price=1),
        dict(market="ethclp", side=Side.BUY, amount=-1, price=1),
        dict(market="ethclp", side=Side.BUY, amount=1, price=0),
        dict(market="ethclp", side=Side.BUY, amount=math.nan, price=1),
        dict(market="ethclp", side=Side.BUY, amount=math.inf, price=1),
        dict(market="ethclp", side=Side.BUY, amount=1, price=math.nan),
        dict(market="ethclp", side=Side.BUY, amount=1, price=-math.inf),
    ])
    def test_validate(self, kwargs):
        with pytest.raises(ValueError):
            MarketOrderRequest(**kwargs).validate()


class TestPaymentRequest:

    def test_small_amount_is_sent_exactly(self):
        request = PaymentRequest(to_receive=0.000000004, to_receive_currency="BTC", payment_receiver="a@b.cl")
        assert request.to_params()["to_receive"] == "0.000000004"

    @pytest.mark.parametrize("to_receive", [math.nan, math.inf, -math.inf, 0.0])
    def test_validate_rejects(self, to_receive):
        request = PaymentRequest(to_receive=to_receive, to_receive_currency="CLP", payment_receiver="a@b.cl")
        with pytest.raises(ValueError):
            request.validate()


class TestQueryOptions:

    def test_books_kind_is_sent_as_type(self):
        assert BooksOptions(market="ETHCLP", side=Side.SELL).to_params() == {
            "market": "ETHCLP", "type": "sell"
        }

    def test_unset_fields_are_omitted(self):
        assert TradesOptions(market="ETHCLP").to_params() == {"market": "ETHCLP"}
        assert MarketOrderOptions(market="ETHCLP", limit=5).to_params() == {
            "market": "ETHCLP", "limit": "5"
        }

    def test_zero_page_is_sent(self):
        assert MarketOrderOptions(market="ETHCLP", page=0).to_params()["page"] == "0"


class TestCoercion:

    @pytest.mark.parametrize("value,expected", [
        ("120347", 120347.0),
        ("10.3399", 10.3399),
        (0.5, 0.5),
        (3, 3.0),
        ("", None),
        ("null", None),
        (None, None),
    ])
    def test_to_float(self, value, expected):
        assert to_float(value) == expected

    def test_to_float_rejects_text(self):
        with pytest.raises(ValueError):
            to_float("abc")

    def test_to_int(self):
        assert to_int("20") == 20
        assert to_int(20) == 20
        assert to_int("null") == 0
        assert to_int("null", None) is None
        assert to_int("2.0") == 2

    @pytest.mark.parametrize("value,expected", [
        (10000, "10000"),
        (10000.0, "10000"),
        (0.3, "0.3"),
        (0.00000001, "0.00000001"),
        (1.123456789, "1.123456789"),
        (0.000000004, "0.000000004"),
        (1e20, "100000000000000000000"),
    ])
    def test_format_number(self, value, expected):
        assert format_number(value) == expected

    @pytest.mark.parametrize("value", [math.nan, math.inf])
    def test_format_number_rejects_non_finite(self, value):
        with pytest.raises(ValueError):
            format_number(value)

    def test_sides(self):
        assert to_side("BUY") is Side.BUY
        assert from_side(Side.SELL) == "sell"
        with pytest.raises(ValueError):
            to_side("hold")

    def test_order_status(self):
        assert to_order_status("executed") is OrderStatus.EXECUTED
        assert to_order_status("canceled") is OrderStatus.CANCELLED
        assert to_order_status("paused") is OrderStatus.UNKNOWN

    def test_payment_status_text(self):
        assert payment_status_text(-3) == "invalid-amount"
        assert payment_status_text(3) == "success"
        assert payment_status_text(42) == "unknown"

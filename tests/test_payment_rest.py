"""
Tests for payment order endpoints and business status handling.
"""

import pytest

from cryptomkt.exchanges.cryptomkt.rest import check_payment_status
from cryptomkt.exchanges.cryptomkt.rest.strategies import HEADER_SIGNATURE, sign
from cryptomkt.exchanges.cryptomkt.structs.requests import PaymentRequest, PaymentOrdersOptions
from cryptomkt.exchanges.structs import PaymentOrder, PaymentStatus
from cryptomkt.infrastructure.exceptions.exchange import (
    PaymentStatusError, MultiplePaymentsError, AmountMismatchError,
    ConversionFailedError, PaymentExpiredError
)
from cryptomkt.infrastructure.networking.http import HTTPMethod


def payment_response(status, payment_id="P13433"):
    return {
        "status": "success",
        "data": {
            "id": payment_id,
            "external_id": "ABC1234",
            "status": status,
            "to_receive": "3000",
            "to_receive_currency": "CLP",
            "expected_amount": "0.0053",
            "expected_currency": "ETH",
            "deposit_address": "0x7a3c...",
            "refund_email": "refund@example.com",
            "qr": "https://www.cryptomkt.com/qr/P13433",
            "obs": "",
            "callback_url": "https://merchant.example.com/callback",
            "error_url": "https://merchant.example.com/error",
            "success_url": "https://merchant.example.com/success",
            "payment_url": "https://www.cryptomkt.com/payment/P13433",
            "remaining": "0.0053",
            "language": "es",
            "created_at": "2017-12-08T18:33:22.178822",
            "updated_at": "2017-12-08T18:33:22.178822",
            "server_at": "2017-12-08T18:34:02.941302"
        }
    }


@pytest.fixture
def payment_request():
    return PaymentRequest(
        to_receive=3000,
        to_receive_currency="CLP",
        payment_receiver="merchant@example.com",
        external_id="ABC1234",
        callback_url="https://merchant.example.com/callback",
        error_url="https://merchant.example.com/error",
        success_url="https://merchant.example.com/success",
        refund_email="refund@example.com",
    )


class TestCreatePayment:

    @pytest.mark.asyncio
    async def test_create_payment(self, client, fake_exchange, fixed_clock, payment_request):
        fake_exchange.reply('POST', '/v1/payment/new_order', payment_response(0))

        payment = await client.payment.create_payment(payment_request)

        request = fake_exchange.last_request
        assert request.form == {
            "callback_url": "https://merchant.example.com/callback",
            "error_url": "https://merchant.example.com/error",
            "external_id": "ABC1234",
            "language": "es",
            "payment_receiver": "merchant@example.com",
            "refund_email": "refund@example.com",
            "success_url": "https://merchant.example.com/success",
            "to_receive": "3000",
            "to_receive_currency": "CLP",
        }
        assert request.headers[HEADER_SIGNATURE] == sign(
            client.config.credentials.secret_key, fixed_clock.timestamp,
            HTTPMethod.POST, '/v1/payment/new_order', request.form
        )
        assert payment.payment_id == "P13433"
        assert payment.payment_status is PaymentStatus.WAITING_FOR_PAYMENTS
        assert payment.status_text == "waiting-for-payments"
        assert payment.to_receive == 3000.0
        assert payment.remaining == 0.0053

    @pytest.mark.asyncio
    async def test_optional_fields_are_omitted(self, client, fake_exchange):
        fake_exchange.reply('POST', '/v1/payment/new_order', payment_response(0))

        await client.payment.create_payment(
            PaymentRequest(to_receive=1.5, to_receive_currency="ETH", payment_receiver="m@example.com")
        )

        assert fake_exchange.last_request.form == {
            "language": "es",
            "payment_receiver": "m@example.com",
            "to_receive": "1.5",
            "to_receive_currency": "ETH",
        }

    @pytest.mark.asyncio
    async def test_incomplete_request_is_not_sent(self, client, fake_exchange):
        with pytest.raises(ValueError):
            await client.payment.create_payment(
                PaymentRequest(to_receive=10, to_receive_currency="CLP", payment_receiver="")
            )
        assert fake_exchange.requests == []

    @pytest.mark.asyncio
    async def test_amount_mismatch(self, client, fake_exchange, payment_request):
        fake_exchange.reply('POST', '/v1/payment/new_order', payment_response(-3))

        with pytest.raises(AmountMismatchError) as exc_info:
            await client.payment.create_payment(payment_request)

        error = exc_info.value
        assert isinstance(error, PaymentStatusError)
        assert error.status_code == 200
        assert error.payment_status == -3
        assert error.payment.payment_id == "P13433"


class TestPaymentStatus:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status,error_class", [
        (-4, MultiplePaymentsError),
        (-3, AmountMismatchError),
        (-2, ConversionFailedError),
        (-1, PaymentExpiredError),
    ])
    async def test_failure_statuses(self, client, fake_exchange, status, error_class):
        fake_exchange.reply('GET', '/v1/payment/status', payment_response(status))

        with pytest.raises(error_class):
            await client.payment.get_payment_status("P13433")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [0, 1, 2, 3])
    async def test_progress_statuses(self, client, fake_exchange, status):
        fake_exchange.reply('GET', '/v1/payment/status', payment_response(status))

        payment = await client.payment.get_payment_status("P13433")

        assert fake_exchange.last_request.query == {"id": "P13433"}
        assert payment.status == status
        assert not payment.payment_status.is_failure

    @pytest.mark.asyncio
    async def test_status_as_string(self, client, fake_exchange):
        fake_exchange.reply('GET', '/v1/payment/status', payment_response("3"))

        payment = await client.payment.get_payment_status("P13433")

        assert payment.payment_status is PaymentStatus.SUCCESS

    def test_unknown_status_is_not_raised(self):
        payment = PaymentOrder(payment_id="P1", status=7)
        assert check_payment_status(payment) is payment
        assert payment.status_text == "unknown"


class TestPaymentOrders:

    @pytest.mark.asyncio
    async def test_history_lists_failures(self, client, fake_exchange):
        body = {
            "status": "success",
            "pagination": {"previous": "null", "limit": 20, "page": 0, "next": "null"},
            "data": [payment_response(3, "P1")["data"], payment_response(-1, "P2")["data"]],
        }
        fake_exchange.reply('GET', '/v1/payment/orders', body)

        page = await client.payment.get_payment_orders(
            PaymentOrdersOptions(start_date="01/03/2018", end_date="08/03/2018")
        )

        assert fake_exchange.last_request.query == {"start_date": "01/03/2018", "end_date": "08/03/2018"}
        assert [p.payment_id for p in page.payments] == ["P1", "P2"]
        assert page.payments[1].payment_status is PaymentStatus.EXPIRED

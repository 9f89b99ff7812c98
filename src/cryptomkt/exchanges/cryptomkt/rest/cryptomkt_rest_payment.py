"""
CryptoMarket Payment REST API

Payment orders (merchant checkout). All calls are authenticated.

Creation and status responses carry a business status code next to the
HTTP status. Negative codes are raised as PaymentStatusError subclasses
once the response has been decoded successfully.
"""

from typing import Dict, List, Type

from cryptomkt.exchanges.structs import PaymentOrder, PaymentOrdersPage, PaymentStatus
from cryptomkt.exchanges.cryptomkt.structs.exchange import CryptomktPaymentResponse
from cryptomkt.exchanges.cryptomkt.structs.requests import PaymentRequest, PaymentOrdersOptions
from cryptomkt.exchanges.cryptomkt.utils import rest_to_payment, rest_to_pagination
from cryptomkt.infrastructure.exceptions.exchange import (
    PaymentStatusError, MultiplePaymentsError, AmountMismatchError,
    ConversionFailedError, PaymentExpiredError
)
from cryptomkt.infrastructure.networking.http import HTTPMethod
from .cryptomkt_base_rest import CryptomktBaseRest, mapping_errors

_PAYMENT_STATUS_ERRORS: Dict[PaymentStatus, Type[PaymentStatusError]] = {
    PaymentStatus.MULTIPLE_PAYMENTS: MultiplePaymentsError,
    PaymentStatus.AMOUNT_MISMATCH: AmountMismatchError,
    PaymentStatus.CONVERSION_FAILED: ConversionFailedError,
    PaymentStatus.EXPIRED: PaymentExpiredError,
}

_PAYMENT_STATUS_MESSAGES = {
    PaymentStatus.MULTIPLE_PAYMENTS: "multiple payments were sent to the deposit address",
    PaymentStatus.AMOUNT_MISMATCH: "received amount does not match the expected amount",
    PaymentStatus.CONVERSION_FAILED: "currency conversion failed",
    PaymentStatus.EXPIRED: "payment order expired",
}


def check_payment_status(payment: PaymentOrder) -> PaymentOrder:
    """
    Raise the business error matching a failed payment status.

    Returns:
        The payment unchanged for statuses 0..3 and for unknown codes
    """
    status = payment.payment_status
    error_class = _PAYMENT_STATUS_ERRORS.get(status) if status is not None else None
    if error_class is None:
        return payment

    raise error_class(
        f"Payment {payment.payment_id}: {_PAYMENT_STATUS_MESSAGES[status]}",
        payment.status,
        payment
    )


class CryptomktPaymentRest:
    """Payment order endpoints."""

    def __init__(self, transport: CryptomktBaseRest):
        self._transport = transport
        self.logger = transport.logger

    async def create_payment(self, request: PaymentRequest) -> PaymentOrder:
        """
        Create a payment order.

        Raises:
            ValueError: If the request is incomplete
            PaymentStatusError: If the created order reports a failure status
        """
        request.validate()

        data, _ = await self._transport.request(
            HTTPMethod.POST, '/payment/new_order', CryptomktPaymentResponse,
            request.to_params(), authenticated=True
        )

        with mapping_errors('/payment/new_order'):
            payment = rest_to_payment(data)

        self.logger.info("Payment order created",
                         payment_id=payment.payment_id,
                         external_id=payment.external_id,
                         status=payment.status_text)
        return check_payment_status(payment)

    async def get_payment_status(self, payment_id: str) -> PaymentOrder:
        """
        Current state of a payment order.

        Raises:
            PaymentStatusError: If the order reports a failure status
        """
        data, _ = await self._transport.request(
            HTTPMethod.GET, '/payment/status', CryptomktPaymentResponse,
            {'id': payment_id}, authenticated=True
        )

        with mapping_errors('/payment/status'):
            payment = rest_to_payment(data)
        return check_payment_status(payment)

    async def get_payment_orders(self, options: PaymentOrdersOptions) -> PaymentOrdersPage:
        """Payment order history. Failed orders are listed, not raised."""
        data, pagination = await self._transport.request(
            HTTPMethod.GET, '/payment/orders', List[CryptomktPaymentResponse],
            options.to_params(), authenticated=True
        )

        with mapping_errors('/payment/orders'):
            return PaymentOrdersPage(
                payments=[rest_to_payment(p) for p in data],
                pagination=rest_to_pagination(pagination)
            )

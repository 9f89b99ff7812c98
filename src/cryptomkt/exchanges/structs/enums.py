from enum import IntEnum


class Side(IntEnum):
    """Order side, also used as the order book kind."""
    BUY = 1
    SELL = 2


class OrderStatus(IntEnum):
    """Market order lifecycle status."""
    UNKNOWN = -1
    ACTIVE = 1
    EXECUTED = 2
    CANCELLED = 3


class PaymentStatus(IntEnum):
    """
    Business status embedded in payment order responses.

    Negative values are terminal failures; 0..3 are progress states.
    """
    MULTIPLE_PAYMENTS = -4
    AMOUNT_MISMATCH = -3
    CONVERSION_FAILED = -2
    EXPIRED = -1
    WAITING_FOR_PAYMENTS = 0
    WAITING_FOR_BLOCK = 1
    PROCESSING = 2
    SUCCESS = 3

    @property
    def text(self) -> str:
        return _PAYMENT_STATUS_TEXT[self]

    @property
    def is_failure(self) -> bool:
        return self.value < 0


_PAYMENT_STATUS_TEXT = {
    PaymentStatus.MULTIPLE_PAYMENTS: "multiple-payments",
    PaymentStatus.AMOUNT_MISMATCH: "invalid-amount",
    PaymentStatus.CONVERSION_FAILED: "conversion-fail",
    PaymentStatus.EXPIRED: "expired",
    PaymentStatus.WAITING_FOR_PAYMENTS: "waiting-for-payments",
    PaymentStatus.WAITING_FOR_BLOCK: "waiting-for-block",
    PaymentStatus.PROCESSING: "processing",
    PaymentStatus.SUCCESS: "success",
}

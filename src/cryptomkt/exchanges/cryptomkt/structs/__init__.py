from .exchange import (
    CryptomktEnvelope, CryptomktErrorResponse, CryptomktPagination,
    CryptomktTickerResponse, CryptomktBookEntryResponse, CryptomktTradeResponse,
    CryptomktOrderAmountResponse, CryptomktOrderResponse, CryptomktBalanceResponse,
    CryptomktPaymentResponse
)

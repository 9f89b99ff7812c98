from typing import NewType

MarketName = NewType('MarketName', str)
WalletName = NewType('WalletName', str)
OrderId = NewType('OrderId', str)
PaymentId = NewType('PaymentId', str)

from .cryptomkt_base_rest import CryptomktBaseRest
from .cryptomkt_rest_public import CryptomktPublicRest
from .cryptomkt_rest_payment import CryptomktPaymentRest, check_payment_status
from .cryptomkt_rest_private import CryptomktPrivateRest

__all__ = [
    'CryptomktBaseRest',
    'CryptomktPublicRest',
    'CryptomktPaymentRest',
    'CryptomktPrivateRest',
    'check_payment_status',
]

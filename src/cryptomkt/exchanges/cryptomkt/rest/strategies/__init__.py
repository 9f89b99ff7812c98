from .auth import (
    CryptomktAuthStrategy,
    SignatureRule,
    SIGNED_ENDPOINTS,
    SIGNING_PROTOCOL,
    HEADER_API_KEY,
    HEADER_TIMESTAMP,
    HEADER_SIGNATURE,
    build_signature_payload,
    create_signing_context,
    sign,
    sign_payload,
)

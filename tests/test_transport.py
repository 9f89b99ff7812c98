"""
Tests for the shared REST transport: headers, error classification and
envelope decoding against an in-process server.
"""

from typing import List

import pytest

from cryptomkt.config import ExchangeConfig, ClockConfig, NetworkConfig
from cryptomkt.exchanges.cryptomkt.rest import CryptomktBaseRest
from cryptomkt.exchanges.cryptomkt.rest.strategies import (
    HEADER_API_KEY, HEADER_TIMESTAMP, HEADER_SIGNATURE, sign
)
from cryptomkt.infrastructure.exceptions.exchange import (
    ExchangeApiError, ExchangeConnectionRestError, AuthenticationError,
    InsufficientPermissionsError, InvalidParameterError, NotFoundError,
    TooManyRequestsError, ServiceUnavailableError, ErrorBodyDecodeError,
    ResponseDecodeError
)
from cryptomkt.infrastructure.exceptions.system import ConfigurationError
from cryptomkt.infrastructure.networking.http import HTTPMethod, FORM_CONTENT_TYPE

AUTH_HEADERS = (HEADER_API_KEY, HEADER_TIMESTAMP, HEADER_SIGNATURE)


@pytest.fixture
async def transport(exchange_config, fixed_clock):
    transport = CryptomktBaseRest(exchange_config, clock=fixed_clock)
    yield transport
    await transport.close()


@pytest.fixture
async def public_transport(public_config, fixed_clock):
    transport = CryptomktBaseRest(public_config, clock=fixed_clock)
    yield transport
    await transport.close()


class TestAuthenticationHeaders:

    @pytest.mark.asyncio
    async def test_public_request_has_no_auth_headers(self, transport, fake_exchange):
        fake_exchange.reply('GET', '/v1/market', {"status": "success", "data": ["ETHCLP"]})

        await transport.send(HTTPMethod.GET, '/market')

        headers = fake_exchange.last_request.headers
        assert not any(name in headers for name in AUTH_HEADERS)

    @pytest.mark.asyncio
    async def test_authenticated_request_is_signed(self, transport, fake_exchange, fixed_clock):
        fake_exchange.reply('POST', '/v1/orders/cancel', {"status": "success", "data": {}})

        await transport.send(HTTPMethod.POST, '/orders/cancel', {"id": "M1"}, authenticated=True)

        request = fake_exchange.last_request
        secret = transport.config.credentials.secret_key
        assert request.headers[HEADER_API_KEY] == transport.config.credentials.api_key
        assert request.headers[HEADER_TIMESTAMP] == str(fixed_clock.timestamp)
        assert request.headers[HEADER_SIGNATURE] == sign(
            secret, fixed_clock.timestamp, HTTPMethod.POST, '/v1/orders/cancel', {"id": "M1"}
        )

    @pytest.mark.asyncio
    async def test_clock_consulted_only_for_signed_requests(self, transport, fake_exchange, fixed_clock):
        fake_exchange.reply('GET', '/v1/market', {"status": "success", "data": []})

        await transport.send(HTTPMethod.GET, '/market')
        assert fixed_clock.calls == 0

    @pytest.mark.asyncio
    async def test_authenticated_without_credentials(self, public_transport, fake_exchange):
        with pytest.raises(ConfigurationError):
            await public_transport.send(HTTPMethod.GET, '/balance', authenticated=True)
        assert fake_exchange.requests == []

    @pytest.mark.asyncio
    async def test_undeclared_path_is_not_sent(self, transport, fake_exchange):
        with pytest.raises(ValueError):
            await transport.send(HTTPMethod.GET, '/ticker', authenticated=True)
        assert fake_exchange.requests == []


class TestRequestEncoding:

    @pytest.mark.asyncio
    async def test_post_is_form_encoded(self, transport, fake_exchange):
        fake_exchange.reply('POST', '/v1/orders/cancel', {"status": "success", "data": {}})

        await transport.send(HTTPMethod.POST, '/orders/cancel', {"id": "M1"}, authenticated=True)

        request = fake_exchange.last_request
        assert request.content_type == FORM_CONTENT_TYPE
        assert request.form == {"id": "M1"}

    @pytest.mark.asyncio
    async def test_get_uses_query_string(self, transport, fake_exchange):
        fake_exchange.reply('GET', '/v1/book', {"status": "success", "data": []})

        await transport.send(HTTPMethod.GET, '/book', {"market": "ETHCLP", "type": "buy", "page": None})

        assert fake_exchange.last_request.query == {"market": "ETHCLP", "type": "buy"}

    @pytest.mark.asyncio
    async def test_canonical_path(self, transport):
        assert transport.canonical_path('/orders/cancel') == '/v1/orders/cancel'
        assert transport.build_url('/ticker').endswith('/v1/ticker')


class TestErrorClassification:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status,error_class", [
        (400, InvalidParameterError),
        (401, AuthenticationError),
        (403, InsufficientPermissionsError),
        (404, NotFoundError),
        (429, TooManyRequestsError),
        (503, ServiceUnavailableError),
    ])
    async def test_error_status_maps_to_type(self, transport, fake_exchange, status, error_class):
        fake_exchange.reply('GET', '/v1/market', {"status": "error", "message": "boom"}, status=status)

        with pytest.raises(error_class) as exc_info:
            await transport.send(HTTPMethod.GET, '/market')

        assert isinstance(exc_info.value, ExchangeApiError)
        assert exc_info.value.status_code == status
        assert exc_info.value.message == "boom"

    @pytest.mark.asyncio
    async def test_invalid_signature_message_is_kept(self, transport, fake_exchange):
        fake_exchange.reply('GET', '/v1/balance', {"message": "invalid signature"}, status=401)

        with pytest.raises(AuthenticationError) as exc_info:
            await transport.send(HTTPMethod.GET, '/balance', authenticated=True)

        assert exc_info.value.message == "invalid signature"

    @pytest.mark.asyncio
    async def test_error_id_becomes_api_code(self, transport, fake_exchange):
        fake_exchange.reply('GET', '/v1/market', {"status": "error", "message": "bad", "id": "17"},
                            status=400)

        with pytest.raises(InvalidParameterError) as exc_info:
            await transport.send(HTTPMethod.GET, '/market')

        assert exc_info.value.api_code == 17
        assert exc_info.value.api_status == "error"

    @pytest.mark.asyncio
    async def test_unparseable_error_body(self, transport, fake_exchange):
        fake_exchange.reply('GET', '/v1/market', "<html>maintenance</html>", status=503)

        with pytest.raises(ErrorBodyDecodeError) as exc_info:
            await transport.send(HTTPMethod.GET, '/market')

        assert not isinstance(exc_info.value, ExchangeApiError)
        assert exc_info.value.status_code == 503
        assert "maintenance" in exc_info.value.body

    @pytest.mark.asyncio
    async def test_other_status_passes_through(self, transport, fake_exchange):
        fake_exchange.reply('GET', '/v1/market', "teapot", status=418)

        response = await transport.send(HTTPMethod.GET, '/market')

        assert response.status == 418
        assert response.text == "teapot"
        assert not response.ok

    @pytest.mark.asyncio
    async def test_connection_failure(self, fixed_clock):
        config = ExchangeConfig(base_url="http://127.0.0.1:1", clock=ClockConfig(source="local"),
                                network=NetworkConfig(request_timeout=2.0, connect_timeout=1.0))
        transport = CryptomktBaseRest(config, clock=fixed_clock)
        try:
            with pytest.raises(ExchangeConnectionRestError) as exc_info:
                await transport.send(HTTPMethod.GET, '/market')
        finally:
            await transport.close()

        assert exc_info.value.url == "http://127.0.0.1:1/v1/market"
        assert "http://127.0.0.1:1/v1/market" in str(exc_info.value)


class TestEnvelopeDecoding:

    @pytest.mark.asyncio
    async def test_data_and_pagination(self, transport, fake_exchange):
        fake_exchange.reply('GET', '/v1/market', {
            "status": "success",
            "pagination": {"previous": "null", "limit": 20, "page": 0, "next": 1},
            "data": ["ETHCLP", "ETHARS"],
        })

        data, pagination = await transport.request(HTTPMethod.GET, '/market', List[str])

        assert data == ["ETHCLP", "ETHARS"]
        assert pagination.limit == 20
        assert pagination.next == 1

    @pytest.mark.asyncio
    async def test_error_envelope(self, transport, fake_exchange):
        fake_exchange.reply('GET', '/v1/market', {"status": "error", "message": "market closed"})

        with pytest.raises(ExchangeApiError) as exc_info:
            await transport.request(HTTPMethod.GET, '/market', List[str])

        assert exc_info.value.message == "market closed"
        assert exc_info.value.api_status == "error"

    @pytest.mark.asyncio
    async def test_missing_data(self, transport, fake_exchange):
        fake_exchange.reply('GET', '/v1/market', {"status": "success"})

        with pytest.raises(ResponseDecodeError):
            await transport.request(HTTPMethod.GET, '/market', List[str])

    @pytest.mark.asyncio
    async def test_wrong_data_shape(self, transport, fake_exchange):
        fake_exchange.reply('GET', '/v1/market', {"status": "success", "data": {"a": 1}})

        with pytest.raises(ResponseDecodeError):
            await transport.request(HTTPMethod.GET, '/market', List[str])

    @pytest.mark.asyncio
    async def test_not_json(self, transport, fake_exchange):
        fake_exchange.reply('GET', '/v1/market', "not json")

        with pytest.raises(ResponseDecodeError):
            await transport.request(HTTPMethod.GET, '/market', List[str])

    @pytest.mark.asyncio
    async def test_performance_stats(self, transport, fake_exchange):
        fake_exchange.reply('GET', '/v1/market', {"status": "success", "data": []})

        await transport.send(HTTPMethod.GET, '/market')
        await transport.send(HTTPMethod.GET, '/market')

        assert transport.get_performance_stats()["requests"] == 2

"""
PaymasterSignerClient tests.

Request shapes are checked against ``httpx.MockTransport``; the end-to-end
cases run the client against a live ``PaymasterServer`` in-process through
``httpx.ASGITransport``.
"""

import json
from unittest.mock import patch

import httpx
import pytest

from paymaster_signer.adapters.evm.signatures import PaymasterAuthorization, SigningIdentity
from paymaster_signer.adapters.evm.swaps import StableSwapQuoteReader
from paymaster_signer.adapters.evm.verifies import recover_paymaster_signer
from paymaster_signer.adapters.resolvers import HintChainResolver
from paymaster_signer.clients import PaymasterClientError, PaymasterSignerClient
from paymaster_signer.servers.apps import PaymasterServer

from test_mocks import (
    MOCK_PAYER_ADDRESS,
    MOCK_QUOTE_RESULT,
    MOCK_SIGNER_ADDRESS,
    MOCK_SIGNER_PRIVATE_KEY,
    MOCK_STABLESWAP_ADDRESS,
    MOCK_USDC_ADDRESS,
    MOCK_USDT_ADDRESS,
    MOCK_VALID_UNTIL,
    MockWeb3Provider,
    create_mock_chains,
    create_mock_registry,
)

BASE_URL = "http://paymaster.test"


def _recording_transport(requests, status_code=200, payload=None):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, json=payload if payload is not None else {})
    return httpx.MockTransport(handler)


class TestRequestShapes:

    @pytest.mark.asyncio
    async def test_sign_body(self):
        requests = []
        transport = _recording_transport(requests, payload={"signature": "0xabc"})
        async with PaymasterSignerClient(base_url=BASE_URL, transport=transport) as client:
            signature = await client.sign(
                MOCK_PAYER_ADDRESS,
                MOCK_USDC_ADDRESS,
                valid_until=MOCK_VALID_UNTIL,
                chain="base",
            )

        assert signature == "0xabc"
        request = requests[0]
        assert request.method == "POST"
        assert request.url.path == "/sign"
        assert json.loads(request.content) == {
            "payerAddress": MOCK_PAYER_ADDRESS,
            "tokenAddress": MOCK_USDC_ADDRESS,
            "validUntil": MOCK_VALID_UNTIL,
            "chain": "base",
        }

    @pytest.mark.asyncio
    async def test_default_chain_header(self):
        requests = []
        transport = _recording_transport(requests, payload={"signerAddress": MOCK_SIGNER_ADDRESS})
        async with PaymasterSignerClient(
            chain=84532, base_url=BASE_URL, transport=transport
        ) as client:
            signer = await client.signer()

        assert signer.signer_address == MOCK_SIGNER_ADDRESS
        assert requests[0].headers["x-chain"] == "84532"

    @pytest.mark.asyncio
    async def test_quote_params(self):
        requests = []
        payload = {
            "tokenIn": MOCK_USDC_ADDRESS,
            "tokenOut": MOCK_USDT_ADDRESS,
            "amountIn": "100",
            "amountOut": "99",
            "fee": "1",
            "totalUserPays": "101",
        }
        transport = _recording_transport(requests, payload=payload)
        async with PaymasterSignerClient(base_url=BASE_URL, transport=transport) as client:
            quote = await client.get_quote(MOCK_USDC_ADDRESS, MOCK_USDT_ADDRESS, 100)

        assert quote.total_user_pays == "101"
        params = requests[0].url.params
        assert params["tokenIn"] == MOCK_USDC_ADDRESS
        assert params["amountIn"] == "100"
        assert "chain" not in params

    @pytest.mark.asyncio
    async def test_error_body_raised(self):
        transport = _recording_transport(
            [], status_code=400, payload={"error": "UnknownChain", "message": "Unknown chain 'x'"}
        )
        async with PaymasterSignerClient(base_url=BASE_URL, transport=transport) as client:
            with pytest.raises(PaymasterClientError) as exc_info:
                await client.health()

        assert exc_info.value.kind == "UnknownChain"
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Unknown chain 'x'"

    @pytest.mark.asyncio
    async def test_non_json_error(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(502, text="bad gateway"))
        async with PaymasterSignerClient(base_url=BASE_URL, transport=transport) as client:
            with pytest.raises(PaymasterClientError) as exc_info:
                await client.health()

        assert exc_info.value.kind == "HttpError"
        assert exc_info.value.status_code == 502


@pytest.fixture
def asgi_server():
    identity = SigningIdentity.from_private_key(MOCK_SIGNER_PRIVATE_KEY)
    reader = StableSwapQuoteReader(create_mock_chains())
    with patch.object(reader, "_get_web3_instance", return_value=MockWeb3Provider()):
        yield PaymasterServer(identity, HintChainResolver(create_mock_registry()), quote_reader=reader)


class TestAgainstServer:

    @pytest.mark.asyncio
    async def test_sign_roundtrip(self, asgi_server):
        transport = httpx.ASGITransport(app=asgi_server)
        async with PaymasterSignerClient(base_url=BASE_URL, transport=transport) as client:
            health = await client.health()
            signature = await client.sign(
                MOCK_PAYER_ADDRESS, MOCK_USDC_ADDRESS, valid_until=MOCK_VALID_UNTIL, valid_after=0
            )

        assert health.signer_address == MOCK_SIGNER_ADDRESS
        authorization = PaymasterAuthorization(
            payer=MOCK_PAYER_ADDRESS,
            token=MOCK_USDC_ADDRESS,
            valid_until=MOCK_VALID_UNTIL,
            valid_after=0,
        )
        assert recover_paymaster_signer(authorization, signature) == MOCK_SIGNER_ADDRESS

    @pytest.mark.asyncio
    async def test_quote_and_build(self, asgi_server):
        transport = httpx.ASGITransport(app=asgi_server)
        async with PaymasterSignerClient(
            chain="sepolia", base_url=BASE_URL, transport=transport
        ) as client:
            quote = await client.get_quote(MOCK_USDC_ADDRESS, MOCK_USDT_ADDRESS, 1_000_000)
            build = await client.build_swap(
                MOCK_USDC_ADDRESS, MOCK_USDT_ADDRESS, 1_000_000, quote.amount_out
            )

        assert quote.amount_out == str(MOCK_QUOTE_RESULT[0])
        assert build.to == MOCK_STABLESWAP_ADDRESS
        assert build.chain_id == 11155111
        assert build.min_amount_out == quote.amount_out

    @pytest.mark.asyncio
    async def test_server_error_surfaces(self, asgi_server):
        transport = httpx.ASGITransport(app=asgi_server)
        async with PaymasterSignerClient(base_url=BASE_URL, transport=transport) as client:
            with pytest.raises(PaymasterClientError) as exc_info:
                await client.sign(MOCK_PAYER_ADDRESS, MOCK_USDC_ADDRESS, chain="optimism")

        assert exc_info.value.kind == "UnknownChain"
        assert exc_info.value.status_code == 400

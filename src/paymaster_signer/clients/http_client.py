"""
Paymaster Signer HTTP Client

Thin ``httpx.AsyncClient`` wrapper for wallets and bundler-side services that
talk to the paymaster signer. Error bodies (``{"error", "message"}``) are
raised as ``PaymasterClientError``.
"""

from typing import Any, Dict, Optional, Union

import httpx

from ..schemas.https import (
    HealthResponse,
    PaymasterSignResponse,
    SignerResponse,
    SwapBuildResponse,
    SwapQuoteResponse,
)

Amount = Union[int, str]


class PaymasterClientError(Exception):
    """Error response returned by the paymaster signer."""

    def __init__(self, kind: str, message: str, status_code: int) -> None:
        super().__init__(f"{kind}: {message}")
        self.kind = kind
        self.message = message
        self.status_code = status_code


class PaymasterSignerClient(httpx.AsyncClient):
    """
    Async client for the paymaster signer API.

    Fully compatible with ``httpx.AsyncClient`` (timeouts, transports,
    context-manager use).

    Usage:
        ```python
        async with PaymasterSignerClient(base_url="http://localhost:3001", chain="base-sepolia") as client:
            signature = await client.sign(payer, usdc)
            quote = await client.get_quote(usdc, eurc, 1_000_000)
        ```
    """

    def __init__(self, chain: Optional[Union[str, int]] = None, **kwargs) -> None:
        """
        Args:
            chain: Optional chain alias or id sent as the ``x-chain`` header
                   on every request (per-call ``chain=`` arguments override it).
            **kwargs: Standard httpx.AsyncClient arguments (base_url, timeout, ...).
        """
        if chain is not None:
            headers = dict(kwargs.pop("headers", None) or {})
            headers["x-chain"] = str(chain)
            kwargs["headers"] = headers
        super().__init__(**kwargs)

    async def health(self) -> HealthResponse:
        return HealthResponse.model_validate(await self._call("GET", "/health"))

    async def signer(self) -> SignerResponse:
        return SignerResponse.model_validate(await self._call("GET", "/signer"))

    async def sign(
        self,
        payer_address: str,
        token_address: str,
        *,
        valid_until: Optional[int] = None,
        valid_after: Optional[int] = None,
        is_activation: Optional[bool] = None,
        chain: Optional[Union[str, int]] = None,
    ) -> str:
        """Request a paymaster signature; returns the 0x-prefixed signature."""
        body: Dict[str, Any] = {"payerAddress": payer_address, "tokenAddress": token_address}
        if valid_until is not None:
            body["validUntil"] = valid_until
        if valid_after is not None:
            body["validAfter"] = valid_after
        if is_activation is not None:
            body["isActivation"] = is_activation
        if chain is not None:
            body["chain"] = chain
        payload = await self._call("POST", "/sign", json=body)
        return PaymasterSignResponse.model_validate(payload).signature

    async def get_quote(
        self,
        token_in: str,
        token_out: str,
        amount_in: Amount,
        *,
        chain: Optional[Union[str, int]] = None,
    ) -> SwapQuoteResponse:
        params: Dict[str, Any] = {"tokenIn": token_in, "tokenOut": token_out, "amountIn": str(amount_in)}
        if chain is not None:
            params["chain"] = str(chain)
        return SwapQuoteResponse.model_validate(await self._call("GET", "/swap/quote", params=params))

    async def build_swap(
        self,
        token_in: str,
        token_out: str,
        amount_in: Amount,
        min_amount_out: Amount,
        *,
        chain: Optional[Union[str, int]] = None,
    ) -> SwapBuildResponse:
        body: Dict[str, Any] = {
            "tokenIn": token_in,
            "tokenOut": token_out,
            "amountIn": str(amount_in),
            "minAmountOut": str(min_amount_out),
        }
        if chain is not None:
            body["chain"] = chain
        return SwapBuildResponse.model_validate(await self._call("POST", "/swap/build", json=body))

    async def _call(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        response = await self.request(method, url, **kwargs)
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_success and isinstance(payload, dict):
            return payload

        if isinstance(payload, dict) and "error" in payload:
            raise PaymasterClientError(
                str(payload["error"]), str(payload.get("message", "")), response.status_code
            )
        raise PaymasterClientError("HttpError", response.text, response.status_code)

"""
StableSwap Quote Reader and Calldata Builder

``StableSwapQuoteReader`` performs the one network operation of the service:
an ``eth_call`` to the StableSwap ``getQuote`` view function on the resolved
chain. ``build_swap_calldata`` encodes the ``swap`` call for the client to
send itself; it never touches the network.

Dependencies:
    - web3.py: AsyncWeb3 contract calls (non-blocking per request)
    - eth_abi / eth_utils: argument encoding and function selectors
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple

from eth_abi import encode as abi_encode
from eth_utils import function_abi_to_4byte_selector
from web3 import AsyncWeb3
from web3.exceptions import ContractLogicError

from ...engine.exceptions import BuildFailed, QuoteFailed
from ...engine.logs import get_logger
from .constants import ChainConfig
from .STABLESWAP_ABI import get_quote_abi, get_swap_abi
from .validators import require_address, require_amount

logger = get_logger(__name__)


@dataclass(frozen=True)
class SwapQuote:
    """Decoded ``getQuote`` result plus the validated request it answers."""

    token_in: str
    token_out: str
    amount_in: int
    amount_out: int
    fee: int
    total_user_pays: int


@dataclass(frozen=True)
class SwapCalldata:
    """Unsigned call the client sends to execute a swap."""

    to: str
    data: str
    value: int
    amount_in: int
    min_amount_out: int
    chain_id: int


# ---------------------------------------------------------------------------
# Quote reader
# ---------------------------------------------------------------------------

class StableSwapQuoteReader:
    """
    Reads StableSwap quotes from the chain a request resolved to.

    One ``AsyncWeb3`` instance is created per configured chain at
    construction time; after that the reader holds no mutable state, so a
    single instance serves any number of concurrent requests.

    Example::

        reader = StableSwapQuoteReader(registry.chains(), request_timeout=10)
        quote = await reader.get_quote(usdc, eurc, "1000000", chain)
        quote.amount_out, quote.fee, quote.total_user_pays
    """

    def __init__(self, chains: Iterable[ChainConfig] = (), request_timeout: float = 10) -> None:
        self._request_timeout = request_timeout
        self._web3_instances: Dict[str, AsyncWeb3] = {
            chain.alias: self._create_web3_instance(chain) for chain in chains
        }

    def _create_web3_instance(self, chain: ChainConfig) -> AsyncWeb3:
        return AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(
            chain.rpc_url,
            request_kwargs={"timeout": self._request_timeout},
        ))

    def _get_web3_instance(self, chain: ChainConfig) -> AsyncWeb3:
        """Return the AsyncWeb3 instance bound to ``chain``'s RPC endpoint."""
        w3 = self._web3_instances.get(chain.alias)
        if w3 is None:
            w3 = self._create_web3_instance(chain)
        return w3

    async def get_quote(
        self,
        token_in: Any,
        token_out: Any,
        amount_in: Any,
        chain: ChainConfig,
    ) -> SwapQuote:
        """
        Validate inputs and read ``getQuote(tokenIn, tokenOut, amountIn)``.

        Args:
            token_in:  Address of the token the user pays with.
            token_out: Address of the token the user receives.
            amount_in: Positive integer amount of ``token_in`` (smallest unit).
            chain:     Resolved chain configuration.

        Returns:
            ``SwapQuote`` with ``amount_out``, ``fee`` and ``total_user_pays``.

        Raises:
            InvalidInput: Malformed address or non-positive amount.
            QuoteFailed:  Revert, transport error, timeout or bad return shape.
        """
        checksum_in = require_address(token_in, "tokenIn")
        checksum_out = require_address(token_out, "tokenOut")
        amount = require_amount(amount_in, "amountIn")

        w3 = self._get_web3_instance(chain)
        contract = w3.eth.contract(address=chain.swap_contract_address, abi=get_quote_abi())

        try:
            result = await asyncio.wait_for(
                contract.functions.getQuote(checksum_in, checksum_out, amount).call(),
                timeout=self._request_timeout,
            )
        except ContractLogicError as e:
            raise QuoteFailed(f"Quote reverted: {getattr(e, 'message', None) or e}") from e
        except asyncio.TimeoutError as e:
            raise QuoteFailed(
                f"Quote timed out after {self._request_timeout}s on {chain.alias}"
            ) from e
        except Exception as e:
            raise QuoteFailed(f"Quote call failed: {e}") from e

        amount_out, fee, total_user_pays = _decode_quote(result)
        logger.debug(
            "swap_quote_read",
            chain=chain.alias,
            token_in=checksum_in,
            token_out=checksum_out,
            amount_in=amount,
            amount_out=amount_out,
        )
        return SwapQuote(
            token_in=checksum_in,
            token_out=checksum_out,
            amount_in=amount,
            amount_out=amount_out,
            fee=fee,
            total_user_pays=total_user_pays,
        )


def _decode_quote(result: Any) -> Tuple[int, int, int]:
    """Unpack exactly three uint256 values ``(amountOut, fee, totalUserPays)``."""
    try:
        values = tuple(result)
    except TypeError as e:
        raise QuoteFailed(f"Unexpected getQuote return value: {result!r}") from e
    if len(values) != 3 or not all(isinstance(v, int) and v >= 0 for v in values):
        raise QuoteFailed(f"Unexpected getQuote return value: {result!r}")
    return values


# ---------------------------------------------------------------------------
# Calldata builder
# ---------------------------------------------------------------------------

_SWAP_ABI: Dict[str, Any] = get_swap_abi()[0]
_SWAP_SELECTOR: bytes = function_abi_to_4byte_selector(_SWAP_ABI)
_SWAP_INPUT_TYPES = [param["type"] for param in _SWAP_ABI["inputs"]]


def encode_swap_call(amount_in: int, token_in: str, token_out: str, min_amount_out: int) -> bytes:
    """Selector followed by ``(amountIn, tokenIn, tokenOut, minAmountOut)``."""
    return _SWAP_SELECTOR + abi_encode(
        _SWAP_INPUT_TYPES, [amount_in, token_in, token_out, min_amount_out]
    )


def build_swap_calldata(
    token_in: Any,
    token_out: Any,
    amount_in: Any,
    min_amount_out: Any,
    chain: ChainConfig,
) -> SwapCalldata:
    """
    Validate inputs and encode the StableSwap ``swap`` call.

    Pure and deterministic: identical inputs always produce byte-identical
    ``data``. ``min_amount_out`` is not compared against any quote.

    Raises:
        InvalidInput: Malformed address or non-positive amount.
        BuildFailed:  The encoder rejected already validated values.
    """
    checksum_in = require_address(token_in, "tokenIn")
    checksum_out = require_address(token_out, "tokenOut")
    amount = require_amount(amount_in, "amountIn")
    minimum = require_amount(min_amount_out, "minAmountOut")

    try:
        data = encode_swap_call(amount, checksum_in, checksum_out, minimum)
    except Exception as e:
        raise BuildFailed(f"Failed to encode swap calldata: {e}") from e

    return SwapCalldata(
        to=chain.swap_contract_address,
        data="0x" + data.hex(),
        value=0,
        amount_in=amount,
        min_amount_out=minimum,
        chain_id=chain.chain_id,
    )

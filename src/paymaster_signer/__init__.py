"""
Paymaster signer and StableSwap calldata service.

Signs ERC-4337 paymaster authorizations and prepares StableSwap quotes and
calldata for wallets on one or more EVM chains.
"""

from .adapters import ChainRegistry, HintChainResolver, FixedChainResolver, RequestChainHints
from .adapters.evm import (
    ChainConfig,
    SigningIdentity,
    SignDefaults,
    PaymasterSignatureEngine,
    StableSwapQuoteReader,
    build_swap_calldata,
)
from .config import Settings
from .schemas.versions import ProtocolVersion, SignatureScheme, ChainMode
from .servers import PaymasterServer
from .clients import PaymasterSignerClient, PaymasterClientError

__version__ = "0.1.0"

__all__ = [
    "ChainRegistry",
    "HintChainResolver",
    "FixedChainResolver",
    "RequestChainHints",
    "ChainConfig",
    "SigningIdentity",
    "SignDefaults",
    "PaymasterSignatureEngine",
    "StableSwapQuoteReader",
    "build_swap_calldata",
    "Settings",
    "ProtocolVersion",
    "SignatureScheme",
    "ChainMode",
    "PaymasterServer",
    "PaymasterSignerClient",
    "PaymasterClientError",
]

from .constants import ChainConfig, UINT256_MAX, DEFAULT_VALIDITY_SECONDS
from .validators import require_address, require_amount, require_uint256
from .signatures import (
    SigningIdentity,
    SignDefaults,
    PaymasterAuthorization,
    PaymasterSignatureEngine,
    encode_paymaster_data,
    hash_paymaster_data,
)
from .verifies import (
    recover_digest_signer,
    recover_paymaster_signer,
    is_valid_paymaster_signature,
)
from .swaps import (
    SwapQuote,
    SwapCalldata,
    StableSwapQuoteReader,
    build_swap_calldata,
    encode_swap_call,
)

__all__ = [
    "ChainConfig",
    "UINT256_MAX",
    "DEFAULT_VALIDITY_SECONDS",
    "require_address",
    "require_amount",
    "require_uint256",
    "SigningIdentity",
    "SignDefaults",
    "PaymasterAuthorization",
    "PaymasterSignatureEngine",
    "encode_paymaster_data",
    "hash_paymaster_data",
    "recover_digest_signer",
    "recover_paymaster_signer",
    "is_valid_paymaster_signature",
    "SwapQuote",
    "SwapCalldata",
    "StableSwapQuoteReader",
    "build_swap_calldata",
    "encode_swap_call",
]

"""
HTTP Request/Response Schema Models

Pydantic models for the JSON bodies exchanged with wallets and smart-account
front-ends. Request models only shape the payload; field-level validation
(address format, uint256 range, positivity) is performed by the signing and
swap components so that every failure surfaces as ``InvalidInput``.
"""

from typing import Any, List, Optional

from pydantic import Field

from .bases import CanonicalModel


# ============================================================================
# Chain hints (shared by every chain-aware request)
# ============================================================================

class ChainHintFields(CanonicalModel):
    """Optional body fields naming the target chain.

    Attributes:
        chain: Chain alias (e.g. ``"base-sepolia"``); numeric strings are
            also matched against chain ids.
        chain_id: Numeric chain id (e.g. ``84532``).
    """
    chain: Optional[Any] = None
    chain_id: Optional[Any] = None


# ============================================================================
# Service identity
# ============================================================================

class HealthResponse(CanonicalModel):
    status: str = "ok"
    signer_address: str
    message: str = "Backend ready. Private key loaded."


class SignerResponse(CanonicalModel):
    signer_address: str
    note: str = "Add this address as authorized signer on Paymaster"


# ============================================================================
# Paymaster signing
# ============================================================================

class PaymasterSignRequest(ChainHintFields):
    """Body of ``POST /sign``.

    Attributes:
        payer_address: EOA or smart account whose user operation is sponsored.
        token_address: ERC-20 token the payer settles gas with.
        valid_until: Expiry (unix seconds); defaults to now + validity window.
        valid_after: Start of validity (unix seconds); defaults to 0.
        is_activation: Activation-flagged authorization (protocol v2 only).
    """
    payer_address: Optional[Any] = None
    token_address: Optional[Any] = None
    valid_until: Optional[Any] = None
    valid_after: Optional[Any] = None
    is_activation: Optional[Any] = None


class PaymasterSignResponse(CanonicalModel):
    signature: str = Field(..., description="0x-prefixed 65-byte r || s || v signature")


# ============================================================================
# StableSwap
# ============================================================================

class SwapQuoteResponse(CanonicalModel):
    token_in: str
    token_out: str
    amount_in: str
    amount_out: str
    fee: str
    total_user_pays: str


class SwapBuildRequest(ChainHintFields):
    """Body of ``POST /swap/build``."""
    token_in: Optional[Any] = None
    token_out: Optional[Any] = None
    amount_in: Optional[Any] = None
    min_amount_out: Optional[Any] = None


class SwapBuildResponse(CanonicalModel):
    to: str
    data: str
    value: str = "0"
    amount_in: str
    min_amount_out: str
    chain_id: int
    note: str = (
        "Approve tokenIn for the StableSwap contract, then send this call "
        "from the payer's smart account"
    )


# ============================================================================
# Chains and errors
# ============================================================================

class ChainSummary(CanonicalModel):
    alias: str
    chain_id: int
    swap_contract: str


class ChainsResponse(CanonicalModel):
    default_chain: str
    chains: List[ChainSummary]


class ErrorResponse(CanonicalModel):
    error: str
    message: str

"""
Exception and Error Definitions Module

Defines the exception hierarchy for paymaster signing, chain resolution and
StableSwap interactions. Every per-request error carries the ``kind`` string
and HTTP status it is reported with, so the server can convert any of them
into the fixed ``{"error": kind, "message": detail}`` body.

Exception Hierarchy:
    PaymasterError (root)
    ├── InvalidInput
    ├── UnknownChain
    │   └── ConflictingChainHint
    ├── BlockchainInteractionError
    │   ├── QuoteFailed
    │   └── BuildFailed
    ├── SigningFailed
    └── ConfigurationError
        └── StartupConfigurationMissing
"""

from typing import Any, Dict


class PaymasterError(Exception):
    """
    Root exception class for all project-specific exceptions.

    Attributes:
        kind: Stable error identifier returned to clients in the ``error`` field.
        status_code: HTTP status used when the error reaches a request boundary.
        message: Human-readable detail returned in the ``message`` field.
    """

    kind: str = "PaymasterError"
    status_code: int = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message or self.kind

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.kind, "message": self.message}


class InvalidInput(PaymasterError):
    """
    Raised when request input fails validation.

    This includes scenarios such as:
    - Missing or malformed payer / token addresses
    - Zero, negative, fractional or non-numeric amounts
    - Integers outside the uint256 range
    - A request body that is not a JSON object
    """

    kind = "InvalidInput"
    status_code = 400


class UnknownChain(PaymasterError):
    """
    Raised when a supplied chain hint matches no registry entry.

    Only the absence of every hint selects the default chain; an invalid hint
    never falls back silently.
    """

    kind = "UnknownChain"
    status_code = 400


class ConflictingChainHint(UnknownChain):
    """
    Raised when explicit chain hints in one request resolve to different chains,
    e.g. ``chain=base-sepolia`` together with ``chainId=1``.
    """

    kind = "ConflictingChainHint"


class BlockchainInteractionError(PaymasterError):
    """
    Base exception for failures while reading from or encoding for a contract.
    """

    status_code = 400


class QuoteFailed(BlockchainInteractionError):
    """
    Raised when the StableSwap quote read fails.

    This includes scenarios such as:
    - Contract revert (e.g. unsupported token pair)
    - RPC transport failure
    - RPC call exceeding the configured timeout
    - Unexpected return shape
    """

    kind = "QuoteFailed"


class BuildFailed(BlockchainInteractionError):
    """
    Raised when swap calldata cannot be encoded from already validated inputs.
    """

    kind = "BuildFailed"


class SigningFailed(PaymasterError):
    """
    Raised when hashing or signing fails unexpectedly for a validated request.
    """

    kind = "SigningFailed"
    status_code = 500


class ConfigurationError(PaymasterError):
    """
    Raised when configuration is missing or invalid.
    """

    kind = "ConfigurationError"


class StartupConfigurationMissing(ConfigurationError):
    """
    Raised at boot when the signing key, an RPC endpoint or a contract address
    is absent or unusable. The process must not start serving traffic.
    """

    kind = "StartupConfigurationMissing"

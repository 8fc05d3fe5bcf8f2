"""
Paymaster Signing Utilities

In-process signing of paymaster authorizations with ``eth_account``. No RPC
calls or on-chain state queries are made.

The on-chain Paymaster recomputes::

    hash = keccak256(abi.encode(payer, token, validUntil, validAfter[, isActivation]))

and recovers the signer from the signature over that hash. The optional
``bool isActivation`` word exists only in protocol ``v2``.

Exported helpers
----------------
SigningIdentity
    The service keypair, derived once at startup from the configured key.

SignDefaults
    Defaults for the optional request fields, resolved once per request.

PaymasterSignatureEngine
    Builds the pre-image, hashes it and signs the digest.
"""

import time
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from eth_abi import encode as abi_encode
from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount
from eth_utils import keccak

from ...engine.exceptions import InvalidInput, SigningFailed, StartupConfigurationMissing
from ...schemas.versions import ProtocolVersion, SignatureScheme
from .constants import DEFAULT_VALIDITY_SECONDS
from .validators import require_address, require_uint256


# ---------------------------------------------------------------------------
# Signing identity
# ---------------------------------------------------------------------------

class SigningIdentity:
    """
    The service's single signing keypair.

    Built once during startup and passed by reference into the request
    handlers. The private key never leaves this object and is never logged.

    Attributes:
        address: Checksummed address that must be registered as the
                 authorized signer on the Paymaster.
    """

    __slots__ = ("_account",)

    def __init__(self, account: LocalAccount) -> None:
        self._account = account

    @classmethod
    def from_private_key(cls, private_key: Optional[str]) -> "SigningIdentity":
        """
        Derive the identity from a hex private key.

        Raises:
            StartupConfigurationMissing: If the key is absent or not a valid
                secp256k1 private key.
        """
        if not private_key:
            raise StartupConfigurationMissing("PAYMASTER_SIGNER_PRIVATE_KEY not found in environment")
        key = private_key.strip()
        if not key.startswith("0x"):
            key = "0x" + key
        try:
            account = Account.from_key(key)
        except Exception as e:
            raise StartupConfigurationMissing(
                "PAYMASTER_SIGNER_PRIVATE_KEY is not a valid secp256k1 private key"
            ) from e
        return cls(account)

    @property
    def address(self) -> str:
        return self._account.address

    def sign_digest(self, digest: bytes, scheme: SignatureScheme) -> bytes:
        """Sign a 32-byte digest and return the 65-byte ``r || s || v`` signature."""
        if len(digest) != 32:
            raise ValueError(f"digest must be 32 bytes, got {len(digest)}")
        if scheme is SignatureScheme.ETH_SIGNED_MESSAGE:
            signed = self._account.sign_message(encode_defunct(primitive=digest))
        else:
            signed = self._account.unsafe_sign_hash(digest)
        return bytes(signed.signature)

    def __repr__(self) -> str:
        return f"SigningIdentity(address={self.address})"


# ---------------------------------------------------------------------------
# Request defaults
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SignDefaults:
    """Values used for optional ``/sign`` fields the caller leaves out.

    +----------------+---------------------------------------------+
    | Field          | Default                                     |
    +================+=============================================+
    | validUntil     | ``now + validity_seconds`` (1 hour)         |
    +----------------+---------------------------------------------+
    | validAfter     | ``0`` (immediately valid)                   |
    +----------------+---------------------------------------------+
    | isActivation   | ``False``                                   |
    +----------------+---------------------------------------------+
    """

    validity_seconds: int = DEFAULT_VALIDITY_SECONDS
    valid_after: int = 0
    is_activation: bool = False

    def resolve(
        self,
        *,
        payer_address: Any,
        token_address: Any,
        valid_until: Any = None,
        valid_after: Any = None,
        is_activation: Any = None,
        now: Optional[int] = None,
    ) -> "PaymasterAuthorization":
        """
        Validate raw request fields and fill in defaults.

        A ``validUntil`` of ``0`` is treated like an absent one, so callers
        cannot request an authorization that expired at the epoch.

        Raises:
            InvalidInput: Malformed address, uint256 or flag.
        """
        payer = require_address(payer_address, "payerAddress")
        token = require_address(token_address, "tokenAddress")

        resolved_until = 0 if valid_until is None else require_uint256(valid_until, "validUntil")
        if resolved_until == 0:
            current = int(time.time()) if now is None else int(now)
            resolved_until = current + self.validity_seconds

        if valid_after is None:
            resolved_after = self.valid_after
        else:
            resolved_after = require_uint256(valid_after, "validAfter")

        if is_activation is None:
            resolved_activation = self.is_activation
        elif isinstance(is_activation, bool):
            resolved_activation = is_activation
        else:
            raise InvalidInput(f"Invalid isActivation: expected a boolean, got {is_activation!r}")

        return PaymasterAuthorization(
            payer=payer,
            token=token,
            valid_until=resolved_until,
            valid_after=resolved_after,
            is_activation=resolved_activation,
        )


@dataclass(frozen=True)
class PaymasterAuthorization:
    """Validated, fully defaulted paymaster sign request."""

    payer: str
    token: str
    valid_until: int
    valid_after: int
    is_activation: bool = False


# ---------------------------------------------------------------------------
# Signature engine
# ---------------------------------------------------------------------------

def encode_paymaster_data(
    authorization: PaymasterAuthorization,
    protocol: ProtocolVersion = ProtocolVersion.V1,
) -> bytes:
    """
    ABI-encode the authorization in the fixed field order of ``protocol``.

    Every field occupies one 32-byte word, so the result is 128 bytes for
    ``v1`` and 160 bytes for ``v2``.
    """
    values: Tuple[Any, ...] = (
        authorization.payer,
        authorization.token,
        authorization.valid_until,
        authorization.valid_after,
    )
    if protocol.supports_activation:
        values += (authorization.is_activation,)
    return abi_encode(list(protocol.abi_types), list(values))


def hash_paymaster_data(
    authorization: PaymasterAuthorization,
    protocol: ProtocolVersion = ProtocolVersion.V1,
) -> bytes:
    """Keccak-256 digest the Paymaster verifies the signature against."""
    return keccak(encode_paymaster_data(authorization, protocol))


class PaymasterSignatureEngine:
    """
    Deterministic paymaster signer bound to one protocol version.

    Example::

        engine = PaymasterSignatureEngine(identity, protocol=ProtocolVersion.V1)
        auth = engine.defaults.resolve(payer_address=payer, token_address=usdc)
        signature = engine.sign(auth)   # "0x" + 130 hex chars
    """

    def __init__(
        self,
        identity: SigningIdentity,
        *,
        protocol: ProtocolVersion = ProtocolVersion.V1,
        scheme: SignatureScheme = SignatureScheme.ETH_SIGNED_MESSAGE,
        defaults: Optional[SignDefaults] = None,
    ) -> None:
        self.identity = identity
        self.protocol = protocol
        self.scheme = scheme
        self.defaults = defaults or SignDefaults()

    def authorize(self, **fields: Any) -> PaymasterAuthorization:
        """
        Validate and default raw request fields for this protocol version.

        Raises:
            InvalidInput: Field validation failed, or an activation-flagged
                authorization was requested from a ``v1`` deployment.
        """
        authorization = self.defaults.resolve(**fields)
        if authorization.is_activation and not self.protocol.supports_activation:
            raise InvalidInput(
                f"isActivation is not supported by paymaster protocol {self.protocol.value}"
            )
        return authorization

    def digest(self, authorization: PaymasterAuthorization) -> bytes:
        return hash_paymaster_data(authorization, self.protocol)

    def sign(self, authorization: PaymasterAuthorization) -> str:
        """
        Sign a validated authorization.

        Returns:
            0x-prefixed 65-byte signature hex string.

        Raises:
            SigningFailed: Hashing or signing failed unexpectedly.
        """
        try:
            signature = self.identity.sign_digest(self.digest(authorization), self.scheme)
        except Exception as e:
            raise SigningFailed(f"Signing failed: {e}") from e
        return "0x" + signature.hex()

from enum import Enum
from typing import Tuple


class ProtocolVersion(Enum):
    """Paymaster authorization layouts understood by the on-chain verifier."""

    V1 = "v1"
    V2 = "v2"

    @classmethod
    def from_string(cls, value: str) -> "ProtocolVersion":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unsupported paymaster protocol version: {value}")

    @property
    def supports_activation(self) -> bool:
        return self is ProtocolVersion.V2

    @property
    def abi_types(self) -> Tuple[str, ...]:
        """ABI types of the signed pre-image, in encoding order."""
        base = ("address", "address", "uint256", "uint256")
        if self.supports_activation:
            return base + ("bool",)
        return base


class SignatureScheme(Enum):
    """How the 32-byte paymaster digest is turned into an ECDSA signature."""

    # EIP-191 personal signature over the raw digest bytes
    ETH_SIGNED_MESSAGE = "eth_signed_message"
    # signature over the bare digest
    RAW_DIGEST = "raw_digest"

    @classmethod
    def from_string(cls, value: str) -> "SignatureScheme":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unsupported signature scheme: {value}")


class ChainMode(Enum):
    SINGLE = "single"
    MULTI = "multi"

    @classmethod
    def from_string(cls, value: str) -> "ChainMode":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unsupported chain mode: {value}")

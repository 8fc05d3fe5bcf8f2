"""
Paymaster signature recovery.

Mirrors what the on-chain Paymaster does when it checks an authorization, so
operators and tests can confirm a signature recovers to the registered
signer before it is ever submitted in a user operation.
"""

from typing import Union

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_keys import keys
from hexbytes import HexBytes

from ...schemas.versions import ProtocolVersion, SignatureScheme
from .signatures import PaymasterAuthorization, hash_paymaster_data


def recover_digest_signer(
    digest: bytes,
    signature: Union[str, bytes],
    scheme: SignatureScheme = SignatureScheme.ETH_SIGNED_MESSAGE,
) -> str:
    """
    Recover the checksummed signer address of a 32-byte digest signature.

    Args:
        digest:    Keccak-256 digest that was signed.
        signature: 65-byte ``r || s || v`` signature (bytes or 0x-hex).
        scheme:    Convention the signature was produced under.

    Returns:
        Checksummed signer address.
    """
    sig = HexBytes(signature)
    if scheme is SignatureScheme.ETH_SIGNED_MESSAGE:
        return Account.recover_message(encode_defunct(primitive=digest), signature=sig)
    return _recover_raw_digest(digest, sig)


def _recover_raw_digest(digest: bytes, signature: bytes) -> str:
    """Recover the signer of a bare 32-byte digest (no EIP-191 prefix)."""
    if len(signature) != 65:
        raise ValueError(f"signature must be 65 bytes, got {len(signature)}")
    v = signature[64]
    if v >= 27:
        v -= 27
    vrs = keys.Signature(signature_bytes=bytes(signature[:64]) + bytes([v]))
    public_key = vrs.recover_public_key_from_msg_hash(digest)
    return public_key.to_checksum_address()


def recover_paymaster_signer(
    authorization: PaymasterAuthorization,
    signature: Union[str, bytes],
    *,
    protocol: ProtocolVersion = ProtocolVersion.V1,
    scheme: SignatureScheme = SignatureScheme.ETH_SIGNED_MESSAGE,
) -> str:
    """Recompute the paymaster digest for ``authorization`` and recover its signer."""
    return recover_digest_signer(hash_paymaster_data(authorization, protocol), signature, scheme)


def is_valid_paymaster_signature(
    authorization: PaymasterAuthorization,
    signature: Union[str, bytes],
    expected_signer: str,
    *,
    protocol: ProtocolVersion = ProtocolVersion.V1,
    scheme: SignatureScheme = SignatureScheme.ETH_SIGNED_MESSAGE,
) -> bool:
    """Return ``True`` when ``signature`` over ``authorization`` recovers to ``expected_signer``."""
    try:
        recovered = recover_paymaster_signer(
            authorization, signature, protocol=protocol, scheme=scheme
        )
    except Exception:
        return False
    return recovered.lower() == expected_signer.lower()

"""
Input validators for EVM addresses and uint256 quantities.

All validators raise ``InvalidInput`` so callers can surface failures as
client errors without inspecting the cause.
"""

import re
from decimal import Decimal
from typing import Any

from eth_utils import to_checksum_address

from ...engine.exceptions import InvalidInput
from .constants import UINT256_MAX

_HEX_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
_UNSIGNED_DECIMAL_RE = re.compile(r"^[0-9]+$")


def require_address(value: Any, field: str = "address") -> str:
    """
    Validate a 20-byte hex address and return its EIP-55 checksummed form.

    Any letter case is accepted; the returned value is always re-checksummed,
    so a mixed-case input with a stale checksum is normalised rather than
    rejected.

    Args:
        value: Candidate address (``0x`` followed by 40 hex digits).
        field: Field name used in the error message.

    Returns:
        Checksummed address string.

    Raises:
        InvalidInput: Missing, non-string, non-hex or wrong-length value.
    """
    if value is None or value == "":
        raise InvalidInput(f"Missing required field: {field}")
    if not isinstance(value, str) or not _HEX_ADDRESS_RE.match(value.strip()):
        raise InvalidInput(f"Invalid {field}: expected 0x-prefixed 20-byte hex address, got {value!r}")
    return to_checksum_address(value.strip())


def require_uint256(value: Any, field: str = "value", *, positive: bool = False) -> int:
    """
    Coerce ``value`` to an integer within the uint256 range.

    Accepted forms are Python ints, integral floats and decimal-digit
    strings (``"100"``). Booleans, fractions, signs, hex strings and
    anything non-numeric are rejected.

    Args:
        value: Candidate quantity.
        field: Field name used in the error message.
        positive: When ``True`` zero is rejected as well.

    Returns:
        The value as ``int``.

    Raises:
        InvalidInput: On any representation or range violation.
    """
    if value is None or value == "":
        raise InvalidInput(f"Missing required field: {field}")

    if isinstance(value, bool):
        raise InvalidInput(f"Invalid {field}: expected an integer, got {value!r}")

    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise InvalidInput(f"Invalid {field}: expected an integer, got {value!r}")
        number = int(Decimal(str(value)))
    elif isinstance(value, str) and _UNSIGNED_DECIMAL_RE.match(value.strip()):
        number = int(value.strip())
    elif isinstance(value, str) and value.strip().startswith("-"):
        raise InvalidInput(f"Invalid {field}: must not be negative, got {value!r}")
    else:
        raise InvalidInput(f"Invalid {field}: expected an integer, got {value!r}")

    if number < 0:
        raise InvalidInput(f"Invalid {field}: must not be negative, got {value!r}")
    if positive and number == 0:
        raise InvalidInput(f"Invalid {field}: must be greater than zero")
    if number > UINT256_MAX:
        raise InvalidInput(f"Invalid {field}: exceeds uint256 range")
    return number


def require_amount(value: Any, field: str = "amount") -> int:
    """Validate a strictly positive uint256 token amount."""
    return require_uint256(value, field, positive=True)

from .bases import CanonicalModel
from .versions import ProtocolVersion, SignatureScheme, ChainMode
from .https import (
    ChainHintFields,
    HealthResponse,
    SignerResponse,
    PaymasterSignRequest,
    PaymasterSignResponse,
    SwapQuoteResponse,
    SwapBuildRequest,
    SwapBuildResponse,
    ChainSummary,
    ChainsResponse,
    ErrorResponse,
)

__all__ = [
    "CanonicalModel",
    "ProtocolVersion",
    "SignatureScheme",
    "ChainMode",
    "ChainHintFields",
    "HealthResponse",
    "SignerResponse",
    "PaymasterSignRequest",
    "PaymasterSignResponse",
    "SwapQuoteResponse",
    "SwapBuildRequest",
    "SwapBuildResponse",
    "ChainSummary",
    "ChainsResponse",
    "ErrorResponse",
]

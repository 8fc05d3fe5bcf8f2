from .exceptions import (
    PaymasterError,
    InvalidInput,
    UnknownChain,
    ConflictingChainHint,
    BlockchainInteractionError,
    QuoteFailed,
    BuildFailed,
    SigningFailed,
    ConfigurationError,
    StartupConfigurationMissing,
)
from .logs import setup_logging, get_logger

__all__ = [
    "PaymasterError",
    "InvalidInput",
    "UnknownChain",
    "ConflictingChainHint",
    "BlockchainInteractionError",
    "QuoteFailed",
    "BuildFailed",
    "SigningFailed",
    "ConfigurationError",
    "StartupConfigurationMissing",
    "setup_logging",
    "get_logger",
]

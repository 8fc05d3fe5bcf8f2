from .registry import ChainRegistry
from .resolvers import (
    CHAIN_HEADER,
    CHAIN_HINT_PRECEDENCE,
    ChainHintStrategy,
    RequestChainHints,
    ChainResolver,
    HintChainResolver,
    FixedChainResolver,
)
from .evm import ChainConfig

__all__ = [
    "ChainRegistry",
    "CHAIN_HEADER",
    "CHAIN_HINT_PRECEDENCE",
    "ChainHintStrategy",
    "RequestChainHints",
    "ChainResolver",
    "HintChainResolver",
    "FixedChainResolver",
    "ChainConfig",
]

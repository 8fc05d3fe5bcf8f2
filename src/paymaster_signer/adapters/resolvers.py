"""
Request Chain Resolver

Selects the ``ChainConfig`` a request targets from the hints it carries:

* query field ``chain`` / body field ``chain``      (alias, or numeric id)
* query field ``chainId`` / body field ``chainId``  (numeric id)
* header ``x-chain``                                 (alias or numeric id)

Hints are evaluated in the fixed order of ``CHAIN_HINT_PRECEDENCE``. Every
explicit (query/body) hint present must resolve, and they must all agree;
the header is consulted only when no explicit hint is present; the default
chain is used only when no hint is present at all.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Literal, Mapping, Optional, Tuple

from ..engine.exceptions import ConflictingChainHint, UnknownChain
from .evm.constants import ChainConfig
from .registry import ChainRegistry

CHAIN_HEADER: str = "x-chain"


@dataclass(frozen=True)
class RequestChainHints:
    """Raw chain hints lifted from one request.

    ``headers`` keys are expected lower-case (Starlette ``Headers`` already
    match case-insensitively).
    """

    query: Mapping[str, Any] = field(default_factory=dict)
    body: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ChainHintStrategy:
    """Extracts one hint value from one request channel."""

    name: str
    source: Literal["query", "body", "headers"]
    key: str
    explicit: bool = True

    def extract(self, hints: RequestChainHints) -> Optional[Any]:
        """Return the hint value, or ``None`` when the channel does not carry it."""
        value = getattr(hints, self.source).get(self.key)
        if value is None:
            return None
        if isinstance(value, str) and not value.strip():
            return None
        return value


#: Evaluation order of chain hints. Explicit hints outrank the header.
CHAIN_HINT_PRECEDENCE: Tuple[ChainHintStrategy, ...] = (
    ChainHintStrategy("query.chain", "query", "chain"),
    ChainHintStrategy("body.chain", "body", "chain"),
    ChainHintStrategy("query.chainId", "query", "chainId"),
    ChainHintStrategy("body.chainId", "body", "chainId"),
    ChainHintStrategy(f"header.{CHAIN_HEADER}", "headers", CHAIN_HEADER, explicit=False),
)


class ChainResolver(ABC):
    """Maps request hints to a chain from the registry."""

    def __init__(self, registry: ChainRegistry) -> None:
        self.registry = registry

    @abstractmethod
    def resolve(self, hints: Optional[RequestChainHints] = None) -> ChainConfig:
        ...


class HintChainResolver(ChainResolver):
    """Multichain resolver driven by ``CHAIN_HINT_PRECEDENCE``."""

    def __init__(
        self,
        registry: ChainRegistry,
        precedence: Tuple[ChainHintStrategy, ...] = CHAIN_HINT_PRECEDENCE,
    ) -> None:
        super().__init__(registry)
        self.precedence = precedence

    def _match(self, strategy: ChainHintStrategy, value: Any) -> ChainConfig:
        chain = self.registry.lookup(value)
        if chain is None:
            raise UnknownChain(
                f"Unknown chain {value!r} (from {strategy.name}); "
                f"supported: {', '.join(c.alias for c in self.registry.chains())}"
            )
        return chain

    def resolve(self, hints: Optional[RequestChainHints] = None) -> ChainConfig:
        """
        Resolve the request's chain.

        Raises:
            UnknownChain: A supplied hint matches no registry entry.
            ConflictingChainHint: Explicit hints resolve to different chains.
        """
        hints = hints or RequestChainHints()

        explicit: List[Tuple[ChainHintStrategy, ChainConfig]] = []
        for strategy in self.precedence:
            if not strategy.explicit:
                continue
            value = strategy.extract(hints)
            if value is not None:
                explicit.append((strategy, self._match(strategy, value)))

        if explicit:
            first_strategy, first_chain = explicit[0]
            for strategy, chain in explicit[1:]:
                if chain.chain_id != first_chain.chain_id:
                    raise ConflictingChainHint(
                        f"{first_strategy.name} selects {first_chain.alias} "
                        f"but {strategy.name} selects {chain.alias}"
                    )
            return first_chain

        for strategy in self.precedence:
            if strategy.explicit:
                continue
            value = strategy.extract(hints)
            if value is not None:
                return self._match(strategy, value)

        return self.registry.default


class FixedChainResolver(ChainResolver):
    """Single-chain deployments: every request targets the default chain."""

    def resolve(self, hints: Optional[RequestChainHints] = None) -> ChainConfig:
        return self.registry.default

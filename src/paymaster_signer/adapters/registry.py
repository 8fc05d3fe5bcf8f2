"""
Chain Registry

Immutable lookup of the chains this process serves, indexed by alias and by
numeric chain id. Built once at startup; safe for unlimited concurrent
readers.
"""

from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional

from ..engine.exceptions import StartupConfigurationMissing
from .evm.constants import ChainConfig


class ChainRegistry:
    """
    Alias / chain-id index over a fixed set of ``ChainConfig`` entries.

    Invariant: no two entries share an alias or a numeric id.

    Example::

        registry = ChainRegistry([base_sepolia, sepolia], default_alias="base-sepolia")
        registry.lookup("base-sepolia")   # alias match
        registry.lookup("84532")          # numeric id match
        registry.default                  # base_sepolia
    """

    def __init__(self, chains: Iterable[ChainConfig], default_alias: str) -> None:
        by_alias = {}
        by_id = {}
        for chain in chains:
            if chain.alias in by_alias:
                raise StartupConfigurationMissing(f"Duplicate chain alias: {chain.alias}")
            if chain.chain_id in by_id:
                raise StartupConfigurationMissing(
                    f"Duplicate chain id {chain.chain_id}: "
                    f"{by_id[chain.chain_id].alias} and {chain.alias}"
                )
            by_alias[chain.alias] = chain
            by_id[chain.chain_id] = chain

        if not by_alias:
            raise StartupConfigurationMissing("No chains configured")
        if default_alias not in by_alias:
            raise StartupConfigurationMissing(
                f"Default chain '{default_alias}' is not among the enabled chains: "
                f"{', '.join(by_alias)}"
            )

        self._by_alias: Mapping[str, ChainConfig] = MappingProxyType(by_alias)
        self._by_id: Mapping[int, ChainConfig] = MappingProxyType(by_id)
        self._default = by_alias[default_alias]

    @property
    def default(self) -> ChainConfig:
        return self._default

    def chains(self) -> List[ChainConfig]:
        return list(self._by_alias.values())

    def get_by_alias(self, alias: str) -> Optional[ChainConfig]:
        """Case-sensitive exact alias match."""
        return self._by_alias.get(alias)

    def get_by_chain_id(self, chain_id: int) -> Optional[ChainConfig]:
        return self._by_id.get(chain_id)

    def lookup(self, hint: Any) -> Optional[ChainConfig]:
        """
        Match a raw hint against aliases first, then against numeric ids.

        Integers (and decimal strings) fall through to the id index;
        everything else only matches an alias.
        """
        if isinstance(hint, bool):
            return None
        if isinstance(hint, str):
            text = hint.strip()
            chain = self._by_alias.get(text)
            if chain is not None:
                return chain
            if text.isascii() and text.isdigit():
                return self._by_id.get(int(text))
            return None
        if isinstance(hint, int):
            return self._by_id.get(hint)
        return None

    def __len__(self) -> int:
        return len(self._by_alias)

    def __contains__(self, alias: object) -> bool:
        return alias in self._by_alias

"""
EVM Chain Configuration

Built-in chain metadata (numeric id, display name, public RPC fallback), the
immutable ``ChainConfig`` entry stored in the chain registry, and the helpers
that map a chain alias to its environment variable names.
"""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


#: Largest value representable by a Solidity ``uint256``.
UINT256_MAX: int = 2**256 - 1

#: Default lifetime of a paymaster authorization when ``validUntil`` is omitted.
DEFAULT_VALIDITY_SECONDS: int = 3600


class ChainConfig(BaseModel):
    """EVM network entry served by this process.

    Immutable once built at startup; shared by reference across requests.
    """

    model_config = ConfigDict(frozen=True)

    alias: str = Field(..., description="Case-sensitive chain alias, e.g. 'base-sepolia'")
    chain_id: int = Field(..., gt=0, description="EIP-155 chain id")
    rpc_url: str = Field(..., description="JSON-RPC endpoint URL")
    swap_contract_address: str = Field(..., description="Checksummed StableSwap contract address")
    name: str = Field(default="", description="Human-readable network name")


# Raw chain metadata. RPC endpoints are public fallbacks; deployments
# override them with <ALIAS>_RPC_URL.
_EVM_CHAINS_DATA: Dict[str, Dict] = {
    "ethereum": {
        "chain_id": 1,
        "name": "Ethereum Mainnet",
        "public_rpc_url": "https://ethereum-rpc.publicnode.com",
    },
    "sepolia": {
        "chain_id": 11155111,
        "name": "Ethereum Sepolia",
        "public_rpc_url": "https://ethereum-sepolia-rpc.publicnode.com",
    },
    "base": {
        "chain_id": 8453,
        "name": "Base Mainnet",
        "public_rpc_url": "https://mainnet.base.org",
    },
    "base-sepolia": {
        "chain_id": 84532,
        "name": "Base Sepolia",
        "public_rpc_url": "https://sepolia.base.org",
    },
    "arbitrum": {
        "chain_id": 42161,
        "name": "Arbitrum One",
        "public_rpc_url": "https://arb1.arbitrum.io/rpc",
    },
    "arbitrum-sepolia": {
        "chain_id": 421614,
        "name": "Arbitrum Sepolia",
        "public_rpc_url": "https://sepolia-rollup.arbitrum.io/rpc",
    },
    "optimism": {
        "chain_id": 10,
        "name": "OP Mainnet",
        "public_rpc_url": "https://mainnet.optimism.io",
    },
    "optimism-sepolia": {
        "chain_id": 11155420,
        "name": "OP Sepolia",
        "public_rpc_url": "https://sepolia.optimism.io",
    },
    "polygon": {
        "chain_id": 137,
        "name": "Polygon Mainnet",
        "public_rpc_url": "https://polygon-rpc.com",
    },
    "polygon-amoy": {
        "chain_id": 80002,
        "name": "Polygon Amoy",
        "public_rpc_url": "https://rpc-amoy.polygon.technology",
    },
}


def get_known_chain(alias: str) -> Dict:
    """Return built-in metadata for ``alias``, or an empty dict when unknown."""
    return dict(_EVM_CHAINS_DATA.get(alias, {}))


def env_prefix_for_alias(alias: str) -> str:
    """
    Map a chain alias to the prefix of its per-chain environment variables.

    Example:
        env_prefix_for_alias("base-sepolia")  # "BASE_SEPOLIA"
        # reads BASE_SEPOLIA_RPC_URL, BASE_SEPOLIA_STABLESWAP_ADDRESS, ...
    """
    return alias.strip().upper().replace("-", "_")

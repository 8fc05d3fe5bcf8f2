"""
Service configuration.

Settings are read once at startup from the process environment (after
``python-dotenv`` loads a ``.env`` file) and frozen into a ``Settings``
model. Anything required that is missing or unusable raises
``StartupConfigurationMissing`` so the process never starts serving with a
partial configuration.
"""

import os
from typing import List, Mapping, Optional

import dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .adapters.evm.constants import (
    DEFAULT_VALIDITY_SECONDS,
    ChainConfig,
    env_prefix_for_alias,
    get_known_chain,
)
from .adapters.evm.validators import require_address
from .engine.exceptions import InvalidInput, StartupConfigurationMissing
from .schemas.versions import ChainMode, ProtocolVersion, SignatureScheme


class Settings(BaseModel):
    """Immutable process configuration."""

    model_config = ConfigDict(frozen=True)

    signer_private_key: str = Field(..., repr=False)
    host: str = "0.0.0.0"
    port: int = 3001
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    protocol_version: ProtocolVersion = ProtocolVersion.V1
    signature_scheme: SignatureScheme = SignatureScheme.ETH_SIGNED_MESSAGE
    validity_seconds: int = Field(default=DEFAULT_VALIDITY_SECONDS, gt=0)
    chain_mode: ChainMode = ChainMode.MULTI
    default_chain: str = "base-sepolia"
    chains: List[ChainConfig]
    rpc_timeout: float = Field(default=10.0, gt=0)
    log_level: str = "INFO"
    log_format: str = "console"

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        load_dotenv: bool = True,
    ) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ`` (tests).
            load_dotenv: Load ``.env`` into ``os.environ`` first.

        Raises:
            StartupConfigurationMissing: Required value missing or invalid.
        """
        if environ is None:
            if load_dotenv:
                dotenv.load_dotenv()
            environ = os.environ

        def get(key: str, default: Optional[str] = None) -> Optional[str]:
            value = environ.get(key)
            if value is None or not value.strip():
                return default
            return value.strip()

        private_key = get("PAYMASTER_SIGNER_PRIVATE_KEY")
        if not private_key:
            raise StartupConfigurationMissing("PAYMASTER_SIGNER_PRIVATE_KEY not found in environment")

        default_chain = get("DEFAULT_CHAIN", "base-sepolia")
        try:
            chain_mode = ChainMode.from_string(get("CHAIN_MODE", "multi"))
            protocol_version = ProtocolVersion.from_string(get("PAYMASTER_PROTOCOL_VERSION", "v1"))
            signature_scheme = SignatureScheme.from_string(
                get("PAYMASTER_SIGNATURE_SCHEME", "eth_signed_message")
            )
        except ValueError as e:
            raise StartupConfigurationMissing(str(e)) from e

        if chain_mode is ChainMode.SINGLE:
            aliases = [default_chain]
        else:
            aliases = _split_csv(get("ENABLED_CHAINS", default_chain))

        chains = [_load_chain(alias, get) for alias in aliases]

        try:
            return cls(
                signer_private_key=private_key,
                host=get("HOST", "0.0.0.0"),
                port=get("PORT", "3001"),
                cors_origins=_split_csv(get("CORS_ORIGINS", "*")),
                protocol_version=protocol_version,
                signature_scheme=signature_scheme,
                validity_seconds=get("PAYMASTER_VALIDITY_SECONDS", str(DEFAULT_VALIDITY_SECONDS)),
                chain_mode=chain_mode,
                default_chain=default_chain,
                chains=chains,
                rpc_timeout=get("RPC_TIMEOUT_SECONDS", "10"),
                log_level=get("LOG_LEVEL", "INFO"),
                log_format=get("LOG_FORMAT", "console"),
            )
        except ValidationError as e:
            raise StartupConfigurationMissing(f"Invalid configuration: {e}") from e


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _load_chain(alias: str, get) -> ChainConfig:
    """
    Assemble one ``ChainConfig`` from built-in metadata and ``<ALIAS>_*`` variables.

    Reads ``<ALIAS>_STABLESWAP_ADDRESS`` (required), ``<ALIAS>_RPC_URL``
    (required for chains without a built-in public RPC) and
    ``<ALIAS>_CHAIN_ID`` (required for chains not in the built-in table).
    """
    prefix = env_prefix_for_alias(alias)
    known = get_known_chain(alias)

    raw_chain_id = get(f"{prefix}_CHAIN_ID") or known.get("chain_id")
    if raw_chain_id is None:
        raise StartupConfigurationMissing(f"{prefix}_CHAIN_ID is required for custom chain '{alias}'")
    try:
        chain_id = int(raw_chain_id)
    except ValueError as e:
        raise StartupConfigurationMissing(f"{prefix}_CHAIN_ID must be an integer") from e

    rpc_url = get(f"{prefix}_RPC_URL") or known.get("public_rpc_url")
    if not rpc_url:
        raise StartupConfigurationMissing(f"{prefix}_RPC_URL is required for chain '{alias}'")

    raw_contract = get(f"{prefix}_STABLESWAP_ADDRESS")
    if not raw_contract:
        raise StartupConfigurationMissing(
            f"{prefix}_STABLESWAP_ADDRESS is required for chain '{alias}'"
        )
    try:
        contract = require_address(raw_contract, f"{prefix}_STABLESWAP_ADDRESS")
    except InvalidInput as e:
        raise StartupConfigurationMissing(e.message) from e

    try:
        return ChainConfig(
            alias=alias,
            chain_id=chain_id,
            rpc_url=rpc_url,
            swap_contract_address=contract,
            name=known.get("name", alias),
        )
    except ValidationError as e:
        raise StartupConfigurationMissing(f"Invalid configuration for chain '{alias}': {e}") from e

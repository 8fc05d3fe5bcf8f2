"""
Settings and startup wiring tests.

``Settings.from_env`` is always given an explicit mapping so neither the
process environment nor a local ``.env`` file leaks into the results.
"""

import pytest

from paymaster_signer.adapters.resolvers import FixedChainResolver, HintChainResolver
from paymaster_signer.config import Settings
from paymaster_signer.engine.exceptions import StartupConfigurationMissing
from paymaster_signer.schemas.versions import ChainMode, ProtocolVersion, SignatureScheme
from paymaster_signer.servers.apps import PaymasterServer

from test_mocks import (
    MOCK_SIGNER_ADDRESS,
    MOCK_STABLESWAP_ADDRESS,
    create_mock_env,
)


class TestSettingsFromEnv:

    def test_minimal_environment(self):
        settings = Settings.from_env(create_mock_env())

        assert settings.port == 3001
        assert settings.protocol_version is ProtocolVersion.V1
        assert settings.signature_scheme is SignatureScheme.ETH_SIGNED_MESSAGE
        assert settings.chain_mode is ChainMode.MULTI
        assert settings.validity_seconds == 3600
        assert settings.cors_origins == ["*"]
        assert len(settings.chains) == 1

        chain = settings.chains[0]
        assert chain.alias == "base-sepolia"
        assert chain.chain_id == 84532
        assert chain.rpc_url == "https://sepolia.base.org"
        assert chain.swap_contract_address == MOCK_STABLESWAP_ADDRESS

    def test_private_key_not_in_repr(self):
        settings = Settings.from_env(create_mock_env())
        assert settings.signer_private_key not in repr(settings)

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_private_key(self, value):
        env = create_mock_env()
        if value is None:
            del env["PAYMASTER_SIGNER_PRIVATE_KEY"]
        else:
            env["PAYMASTER_SIGNER_PRIVATE_KEY"] = value
        with pytest.raises(StartupConfigurationMissing, match="PAYMASTER_SIGNER_PRIVATE_KEY"):
            Settings.from_env(env)

    def test_missing_stableswap_address(self):
        env = create_mock_env()
        del env["BASE_SEPOLIA_STABLESWAP_ADDRESS"]
        with pytest.raises(StartupConfigurationMissing, match="BASE_SEPOLIA_STABLESWAP_ADDRESS"):
            Settings.from_env(env)

    def test_invalid_stableswap_address(self):
        env = create_mock_env(BASE_SEPOLIA_STABLESWAP_ADDRESS="0x1234")
        with pytest.raises(StartupConfigurationMissing, match="BASE_SEPOLIA_STABLESWAP_ADDRESS"):
            Settings.from_env(env)

    def test_stableswap_address_checksummed(self):
        env = create_mock_env(BASE_SEPOLIA_STABLESWAP_ADDRESS=MOCK_STABLESWAP_ADDRESS.lower())
        assert Settings.from_env(env).chains[0].swap_contract_address == MOCK_STABLESWAP_ADDRESS

    def test_multiple_enabled_chains(self):
        env = create_mock_env(
            ENABLED_CHAINS="base-sepolia, sepolia",
            SEPOLIA_STABLESWAP_ADDRESS=MOCK_STABLESWAP_ADDRESS,
            SEPOLIA_RPC_URL="http://localhost:8547",
        )
        settings = Settings.from_env(env)
        assert [c.alias for c in settings.chains] == ["base-sepolia", "sepolia"]
        assert settings.chains[1].chain_id == 11155111
        assert settings.chains[1].rpc_url == "http://localhost:8547"

    def test_custom_chain_requires_chain_id(self):
        env = create_mock_env(
            ENABLED_CHAINS="base-sepolia,devnet",
            DEVNET_RPC_URL="http://localhost:8545",
            DEVNET_STABLESWAP_ADDRESS=MOCK_STABLESWAP_ADDRESS,
        )
        with pytest.raises(StartupConfigurationMissing, match="DEVNET_CHAIN_ID"):
            Settings.from_env(env)

    def test_custom_chain_requires_rpc_url(self):
        env = create_mock_env(
            ENABLED_CHAINS="base-sepolia,devnet",
            DEVNET_CHAIN_ID="31337",
            DEVNET_STABLESWAP_ADDRESS=MOCK_STABLESWAP_ADDRESS,
        )
        with pytest.raises(StartupConfigurationMissing, match="DEVNET_RPC_URL"):
            Settings.from_env(env)

    def test_custom_chain(self):
        env = create_mock_env(
            ENABLED_CHAINS="base-sepolia,devnet",
            DEVNET_CHAIN_ID="31337",
            DEVNET_RPC_URL="http://localhost:8545",
            DEVNET_STABLESWAP_ADDRESS=MOCK_STABLESWAP_ADDRESS,
        )
        chain = Settings.from_env(env).chains[1]
        assert chain.alias == "devnet"
        assert chain.chain_id == 31337

    def test_single_mode_loads_only_default_chain(self):
        env = create_mock_env(CHAIN_MODE="single", ENABLED_CHAINS="base-sepolia,devnet")
        settings = Settings.from_env(env)
        assert settings.chain_mode is ChainMode.SINGLE
        assert [c.alias for c in settings.chains] == ["base-sepolia"]

    @pytest.mark.parametrize("key, value", [
        ("PAYMASTER_PROTOCOL_VERSION", "v9"),
        ("PAYMASTER_SIGNATURE_SCHEME", "eip712"),
        ("CHAIN_MODE", "sharded"),
        ("PORT", "not-a-port"),
        ("PAYMASTER_VALIDITY_SECONDS", "0"),
    ])
    def test_invalid_values(self, key, value):
        with pytest.raises(StartupConfigurationMissing):
            Settings.from_env(create_mock_env(**{key: value}))

    def test_overrides(self):
        env = create_mock_env(
            PORT="8080",
            PAYMASTER_PROTOCOL_VERSION="v2",
            PAYMASTER_SIGNATURE_SCHEME="raw_digest",
            PAYMASTER_VALIDITY_SECONDS="600",
            CORS_ORIGINS="https://a.example, https://b.example",
        )
        settings = Settings.from_env(env)
        assert settings.port == 8080
        assert settings.protocol_version is ProtocolVersion.V2
        assert settings.signature_scheme is SignatureScheme.RAW_DIGEST
        assert settings.validity_seconds == 600
        assert settings.cors_origins == ["https://a.example", "https://b.example"]


class TestServerFromSettings:

    def test_multi_mode_uses_hint_resolver(self):
        server = PaymasterServer.from_settings(Settings.from_env(create_mock_env()))
        assert isinstance(server.resolver, HintChainResolver)
        assert server.identity.address == MOCK_SIGNER_ADDRESS

    def test_single_mode_uses_fixed_resolver(self):
        server = PaymasterServer.from_settings(
            Settings.from_env(create_mock_env(CHAIN_MODE="single"))
        )
        assert isinstance(server.resolver, FixedChainResolver)

    def test_engine_follows_settings(self):
        env = create_mock_env(
            PAYMASTER_PROTOCOL_VERSION="v2",
            PAYMASTER_SIGNATURE_SCHEME="raw_digest",
            PAYMASTER_VALIDITY_SECONDS="120",
        )
        server = PaymasterServer.from_settings(Settings.from_env(env))
        engine = server.signature_engine
        assert engine.protocol is ProtocolVersion.V2
        assert engine.scheme is SignatureScheme.RAW_DIGEST
        assert engine.defaults.validity_seconds == 120

    def test_invalid_private_key(self):
        settings = Settings.from_env(create_mock_env(PAYMASTER_SIGNER_PRIVATE_KEY="0xdeadbeef"))
        with pytest.raises(StartupConfigurationMissing):
            PaymasterServer.from_settings(settings)

    def test_default_chain_not_enabled(self):
        env = create_mock_env(
            DEFAULT_CHAIN="sepolia",
            ENABLED_CHAINS="base-sepolia",
        )
        with pytest.raises(StartupConfigurationMissing):
            PaymasterServer.from_settings(Settings.from_env(env))

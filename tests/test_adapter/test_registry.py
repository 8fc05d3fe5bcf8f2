import pytest

from paymaster_signer.adapters.registry import ChainRegistry
from paymaster_signer.engine.exceptions import StartupConfigurationMissing

from test_mocks import create_mock_chain, create_mock_chains, create_mock_registry


class TestChainRegistry:

    def test_indexes_by_alias_and_id(self):
        registry = create_mock_registry()
        assert len(registry) == 3
        assert registry.get_by_alias("base").chain_id == 8453
        assert registry.get_by_chain_id(84532).alias == "base-sepolia"
        assert "sepolia" in registry
        assert registry.default.alias == "base-sepolia"

    def test_lookup_prefers_alias_then_numeric_id(self):
        registry = create_mock_registry()
        assert registry.lookup("sepolia").chain_id == 11155111
        assert registry.lookup("11155111").alias == "sepolia"
        assert registry.lookup(8453).alias == "base"
        assert registry.lookup(" 84532 ").alias == "base-sepolia"

    def test_numeric_alias_matches_before_chain_id(self):
        chains = [
            create_mock_chain("8453", 1),
            create_mock_chain("base", 8453),
        ]
        registry = ChainRegistry(chains, default_alias="base")
        assert registry.lookup("8453").chain_id == 1
        assert registry.lookup(8453).alias == "base"

    @pytest.mark.parametrize("hint", ["Base", "BASE-SEPOLIA", "unknown", "999", 999, True, 1.5, None])
    def test_lookup_misses(self, hint):
        assert create_mock_registry().lookup(hint) is None

    def test_duplicate_alias_rejected(self):
        chains = [create_mock_chain("base", 8453), create_mock_chain("base", 84532)]
        with pytest.raises(StartupConfigurationMissing, match="Duplicate chain alias"):
            ChainRegistry(chains, default_alias="base")

    def test_duplicate_chain_id_rejected(self):
        chains = [create_mock_chain("base", 8453), create_mock_chain("base-mainnet", 8453)]
        with pytest.raises(StartupConfigurationMissing, match="Duplicate chain id"):
            ChainRegistry(chains, default_alias="base")

    def test_default_must_be_enabled(self):
        with pytest.raises(StartupConfigurationMissing, match="Default chain"):
            ChainRegistry(create_mock_chains(), default_alias="polygon")

    def test_empty_registry_rejected(self):
        with pytest.raises(StartupConfigurationMissing, match="No chains"):
            ChainRegistry([], default_alias="base")

    def test_chain_config_is_immutable(self):
        chain = create_mock_chain()
        with pytest.raises(Exception):
            chain.chain_id = 1

from paymaster_signer.adapters import ChainRegistry, HintChainResolver
from paymaster_signer.adapters.evm import ChainConfig, SigningIdentity
from paymaster_signer.engine import setup_logging
from paymaster_signer.servers import PaymasterServer


pk = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"  # anvil account #0, never use on a real chain
identity = SigningIdentity.from_private_key(pk)
print("Signer address:", identity.address)
print("Add this address as authorized signer on Paymaster")

# Two chains: requests pick one with ?chain=, body "chain"/"chainId" or the x-chain header
registry = ChainRegistry(
    [
        ChainConfig(
            alias="base-sepolia",
            chain_id=84532,
            rpc_url="https://sepolia.base.org",
            swap_contract_address="0x5FbDB2315678afecb367f032d93F642f64180aa3",
        ),
        ChainConfig(
            alias="local",
            chain_id=31337,
            rpc_url="http://localhost:8545",
            swap_contract_address="0x5FbDB2315678afecb367f032d93F642f64180aa3",
        ),
    ],
    default_alias="base-sepolia",
)

setup_logging("DEBUG")
app = PaymasterServer(
    identity,
    HintChainResolver(registry),
    title="Paymaster Signer (example)",
)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="localhost", port=3001, log_config=None)

from paymaster_signer.clients import PaymasterSignerClient, PaymasterClientError
import httpx

payer = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
usdc = "0x036CbD53842c5426634e7929541eC2318f3dCF7e"  # USDC on Base Sepolia
eurc = "0x808456652fdb597867f38412077A9182bf77359F"  # EURC on Base Sepolia


async def main():
    async with PaymasterSignerClient(
        base_url="http://localhost:3001",
        chain="base-sepolia",
        timeout=httpx.Timeout(30.0),
    ) as client:
        print("Signer:", (await client.signer()).signer_address)

        signature = await client.sign(payer, usdc)
        print("Paymaster signature:", signature)

        try:
            quote = await client.get_quote(usdc, eurc, 1_000_000)
        except PaymasterClientError as e:
            print(f"Quote failed ({e.kind}): {e.message}")
            return

        # Accept up to 0.5% less than quoted
        min_out = int(quote.amount_out) * 995 // 1000
        tx = await client.build_swap(usdc, eurc, quote.amount_in, min_out)
        print("Send to:", tx.to)
        print("Calldata:", tx.data)


if __name__ == "__main__":
    import asyncio
    asyncio.run(main())

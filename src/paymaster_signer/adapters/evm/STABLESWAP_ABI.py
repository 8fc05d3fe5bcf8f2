"""
StableSwap Smart Contract ABI Module

ABI fragments for the two StableSwap entry points this service touches.

Note the argument order differs between the two functions; it is part of the
deployed ABI and must be kept exactly:

    getQuote(address tokenIn, address tokenOut, uint256 amountIn)
        view returns (uint256 amountOut, uint256 fee, uint256 totalUserPays)

    swap(uint256 amountIn, address tokenIn, address tokenOut, uint256 minAmountOut)

Usage:
    from STABLESWAP_ABI import get_quote_abi, SWAP_SIGNATURE

    contract = w3.eth.contract(address=stableswap, abi=get_quote_abi())
    amount_out, fee, total = await contract.functions.getQuote(a, b, n).call()
"""

from typing import Any, Dict, List

#: Canonical signature of the swap entry point (selector pre-image).
SWAP_SIGNATURE: str = "swap(uint256,address,address,uint256)"


def get_quote_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for the StableSwap ``getQuote`` view function.

    Returns:
        List[Dict[str, Any]]: ABI for getQuote
    """
    return [
        {
            "name": "getQuote",
            "type": "function",
            "stateMutability": "view",
            "inputs": [
                {"name": "tokenIn", "type": "address"},
                {"name": "tokenOut", "type": "address"},
                {"name": "amountIn", "type": "uint256"},
            ],
            "outputs": [
                {"name": "amountOut", "type": "uint256"},
                {"name": "fee", "type": "uint256"},
                {"name": "totalUserPays", "type": "uint256"},
            ],
        }
    ]


def get_swap_abi() -> List[Dict[str, Any]]:
    """
    Get ABI for the StableSwap ``swap`` entry point.

    Returns:
        List[Dict[str, Any]]: ABI for swap
    """
    return [
        {
            "name": "swap",
            "type": "function",
            "stateMutability": "nonpayable",
            "inputs": [
                {"name": "amountIn", "type": "uint256"},
                {"name": "tokenIn", "type": "address"},
                {"name": "tokenOut", "type": "address"},
                {"name": "minAmountOut", "type": "uint256"},
            ],
            "outputs": [],
        }
    ]

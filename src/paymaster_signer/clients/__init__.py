"""
Client module for the paymaster signer API.
"""

from .http_client import PaymasterSignerClient, PaymasterClientError

__all__ = ["PaymasterSignerClient", "PaymasterClientError"]

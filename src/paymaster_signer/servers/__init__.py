from .apps import PaymasterServer

__all__ = [
    "PaymasterServer",
]

"""Wallet domain exports"""

from .models import WALLET_TYPES, WalletInput, WalletSnapshot
from .service import WalletService

__all__ = [
    "WALLET_TYPES",
    "WalletInput",
    "WalletSnapshot",
    "WalletService",
]

"""Wallet ledger exports"""

from .effects import expense_effects, income_effects, payment_effects, transfer_effects
from .models import LedgerEntryRecord, ReconcileReport, WalletEffect
from .service import LedgerService

__all__ = [
    "LedgerEntryRecord",
    "LedgerService",
    "ReconcileReport",
    "WalletEffect",
    "expense_effects",
    "income_effects",
    "payment_effects",
    "transfer_effects",
]

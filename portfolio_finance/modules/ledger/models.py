"""Domain models for wallet ledger effects."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True, slots=True)
class WalletEffect:
    """Signed amount a money movement adds to one wallet's balance."""

    wallet_id: str
    amount: Decimal


@dataclass(slots=True)
class LedgerEntryRecord:
    id: int
    wallet_id: str
    source_type: str
    source_id: str
    amount: Decimal
    kind: str
    description: Optional[str]
    created_at: Optional[datetime]


@dataclass(slots=True)
class ReconcileReport:
    wallet_id: str
    stored_balance: Decimal
    ledger_balance: Decimal

    @property
    def drift(self) -> Decimal:
        return self.stored_balance - self.ledger_balance

    @property
    def consistent(self) -> bool:
        return self.drift == 0

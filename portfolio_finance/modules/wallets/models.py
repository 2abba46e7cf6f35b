"""Domain models for wallets."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

from portfolio_finance.modules.common.parsing import merged, parse_bool, parse_choice, parse_text

WALLET_TYPES = ("Cash", "Bank", "Mobile Wallet", "Credit Card", "Investment", "Other")


@dataclass(slots=True)
class WalletSnapshot:
    id: str
    name: str
    type: str
    balance: Decimal
    currency: str
    color: Optional[str]
    is_default: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]


@dataclass(slots=True)
class WalletInput:
    """Editable wallet fields; the balance is written only by the ledger."""

    name: str
    type: str = "Cash"
    currency: str = "PKR"
    color: Optional[str] = None
    is_default: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], current: Any = None) -> "WalletInput":
        return cls(
            name=parse_text(merged(data, current, "name"), "Name", required=True),
            type=parse_choice(merged(data, current, "type"), "Type", WALLET_TYPES, default="Cash"),
            currency=parse_text(merged(data, current, "currency"), "Currency") or "PKR",
            color=parse_text(merged(data, current, "color"), "Color"),
            is_default=parse_bool(merged(data, current, "is_default", "isDefault")),
        )

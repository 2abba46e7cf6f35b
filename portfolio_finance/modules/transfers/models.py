"""Domain models for wallet-to-wallet transfers."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from portfolio_finance.modules.common.exceptions import ValidationError
from portfolio_finance.modules.common.parsing import merged, parse_date, parse_money, parse_ref, parse_text


@dataclass(slots=True)
class TransferSnapshot:
    id: str
    from_wallet_id: str
    to_wallet_id: str
    amount: Decimal
    date: dt.date
    notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None


@dataclass(slots=True)
class TransferInput:
    from_wallet_id: str
    to_wallet_id: str
    amount: Decimal
    date: dt.date
    notes: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], current: Any = None) -> "TransferInput":
        from_wallet_id = parse_ref(merged(data, current, "from_wallet_id", "fromWallet"))
        to_wallet_id = parse_ref(merged(data, current, "to_wallet_id", "toWallet"))
        if from_wallet_id is None or to_wallet_id is None:
            raise ValidationError("Both wallets are required")
        if from_wallet_id == to_wallet_id:
            raise ValidationError("Cannot transfer to the same wallet")
        return cls(
            from_wallet_id=from_wallet_id,
            to_wallet_id=to_wallet_id,
            amount=parse_money(merged(data, current, "amount"), "Amount", positive=True),
            date=parse_date(merged(data, current, "date"), "Date", default=dt.date.today()),
            notes=parse_text(merged(data, current, "notes"), "Notes"),
        )

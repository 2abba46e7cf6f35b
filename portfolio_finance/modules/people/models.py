"""Domain models for people."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

from portfolio_finance.modules.common.parsing import merged, parse_choice, parse_text

PERSON_TYPES = ("Friend", "Family", "Business", "Shop", "Other")


@dataclass(slots=True)
class PersonSnapshot:
    id: str
    name: str
    type: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class PersonBalance:
    """Totals derived from a person's payments; never stored.

    A positive balance means more was received from the person than sent.
    """

    person: PersonSnapshot
    total_given: Decimal
    total_received: Decimal

    @property
    def balance(self) -> Decimal:
        return self.total_received - self.total_given


@dataclass(slots=True)
class PersonInput:
    name: str
    type: str = "Other"
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], current: Any = None) -> "PersonInput":
        email = parse_text(merged(data, current, "email"), "Email")
        return cls(
            name=parse_text(merged(data, current, "name"), "Name", required=True),
            type=parse_choice(merged(data, current, "type"), "Type", PERSON_TYPES, default="Other"),
            phone=parse_text(merged(data, current, "phone"), "Phone"),
            email=email.lower() if email else None,
            address=parse_text(merged(data, current, "address"), "Address"),
            notes=parse_text(merged(data, current, "notes"), "Notes"),
        )

"""Domain models for categories."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from portfolio_finance.modules.common.parsing import merged, parse_choice, parse_text

CATEGORY_TYPES = ("expense", "income")


@dataclass(slots=True)
class CategorySnapshot:
    id: str
    name: str
    type: str
    color: Optional[str] = None
    icon: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class CategoryInput:
    name: str
    type: str
    color: str = "#6b7280"
    icon: str = "fa-tag"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], current: Any = None) -> "CategoryInput":
        return cls(
            name=parse_text(merged(data, current, "name"), "Name", required=True),
            type=parse_choice(merged(data, current, "type"), "Type", CATEGORY_TYPES),
            color=parse_text(merged(data, current, "color"), "Color") or "#6b7280",
            icon=parse_text(merged(data, current, "icon"), "Icon") or "fa-tag",
        )

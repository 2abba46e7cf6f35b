"""Domain models for offline sync replay."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from portfolio_finance.modules.common.exceptions import ValidationError


def _optional_text(data: Mapping[str, Any], *names: str) -> Optional[str]:
    """First non-empty value among ``names``; metadata must be text when present."""
    for name in names:
        value = data.get(name)
        if value is None or value == "":
            continue
        if not isinstance(value, str):
            raise ValidationError(f"Change {name} must be a string")
        return value
    return None


@dataclass(slots=True)
class SyncChange:
    """One queued write as the client recorded it."""

    url: str
    method: str = "POST"
    body: dict[str, Any] = field(default_factory=dict)
    id: Optional[int] = None
    entity: Optional[str] = None
    action: Optional[str] = None
    target_id: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Any) -> "SyncChange":
        if not isinstance(data, Mapping):
            raise ValidationError("Change must be an object")
        url = data.get("url")
        if not isinstance(url, str) or not url.strip():
            raise ValidationError("Change url is required")
        body = data.get("body") or {}
        if not isinstance(body, Mapping):
            raise ValidationError("Change body must be an object")
        return cls(
            url=url.strip(),
            method=str(data.get("method") or "POST").upper(),
            body=dict(body),
            id=data.get("id"),
            entity=_optional_text(data, "entity"),
            action=_optional_text(data, "action"),
            target_id=_optional_text(data, "target_id", "targetId"),
        )


@dataclass(frozen=True, slots=True)
class ChangeTarget:
    entity: str
    action: str
    target_id: Optional[str] = None


@dataclass(slots=True)
class SyncResult:
    success: bool
    change: Any
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"success": self.success, "change": self.change}
        if self.error is not None:
            payload["error"] = self.error
        return payload

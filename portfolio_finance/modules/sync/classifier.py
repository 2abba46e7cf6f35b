"""Map a queued change to the ``(entity, action, id)`` it targets.

Structured metadata wins when the client sent it. Otherwise the URL path is
matched segment by segment against the known route shapes; anything else is
rejected rather than guessed.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from portfolio_finance.modules.common.exceptions import ValidationError

from .models import ChangeTarget, SyncChange

ENTITIES = frozenset({"expenses", "income", "payments", "wallets", "people", "categories", "transfers"})

CREATE = "create"
UPDATE = "update"
DELETE = "delete"
PAY = "pay"

_ACTION_ALIASES = {
    "add": CREATE,
    "create": CREATE,
    "edit": UPDATE,
    "update": UPDATE,
    "delete": DELETE,
    "pay": PAY,
}
_NEEDS_ID = frozenset({UPDATE, DELETE, PAY})
_PREFIX = ("admin", "finance")


def _segments(url: str) -> list[str]:
    parts = [part for part in urlsplit(url).path.split("/") if part]
    if tuple(parts[: len(_PREFIX)]) == _PREFIX:
        parts = parts[len(_PREFIX):]
    return parts


def parse_url(url: str) -> ChangeTarget:
    parts = _segments(url)
    if parts == ["wallets", "transfer"]:
        return ChangeTarget("transfers", CREATE)
    if len(parts) == 2 and parts[0] in ENTITIES and parts[1] == "add":
        return ChangeTarget(parts[0], CREATE)
    if len(parts) == 3 and parts[0] in ENTITIES and parts[1] in ("edit", "delete"):
        return ChangeTarget(parts[0], _ACTION_ALIASES[parts[1]], parts[2])
    if len(parts) == 3 and parts[0] == "expenses" and parts[2] == "pay":
        return ChangeTarget("expenses", PAY, parts[1])
    raise ValidationError(f"Unrecognised sync url: {url}")


def classify(change: SyncChange) -> ChangeTarget:
    if change.entity and change.action:
        action = _ACTION_ALIASES.get(change.action.lower())
        if change.entity not in ENTITIES or action is None:
            raise ValidationError(f"Unsupported change: {change.entity}/{change.action}")
        target = ChangeTarget(change.entity, action, change.target_id)
    else:
        target = parse_url(change.url)
    if target.action in _NEEDS_ID and not target.target_id:
        raise ValidationError(f"{target.entity}/{target.action} needs a target id")
    return target

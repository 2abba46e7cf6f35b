"""Shared response handling for finance mutation routes.

Forms get a 303 redirect back to the list page with ``?success=`` or
``?error=``; callers sending ``Accept: application/json`` get JSON instead.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Mapping
from urllib.parse import quote

from fastapi import Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.infrastructure.cache import discard_pending, invalidate_committed
from portfolio_finance.modules.common.exceptions import (
    ConflictError,
    FinanceError,
    LedgerConsistencyError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[FinanceError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (StorageUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (LedgerConsistencyError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: FinanceError) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_payload(exc: FinanceError) -> dict[str, Any]:
    payload: dict[str, Any] = {"success": False, "message": str(exc)}
    if isinstance(exc, StorageUnavailableError):
        payload["offline"] = True
    return payload


def error_json(exc: FinanceError) -> JSONResponse:
    return JSONResponse(status_code=status_for(exc), content=error_payload(exc))


def wants_json(request: Request) -> bool:
    accept = request.headers.get("accept", "")
    return "application/json" in accept


async def read_payload(request: Request) -> dict[str, Any]:
    """Form-encoded or JSON body as a flat mapping of field values."""
    content_type = request.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            body = await request.json()
        except ValueError as exc:
            raise ValidationError("Request body is not valid JSON") from exc
        if not isinstance(body, Mapping):
            raise ValidationError("Request body must be an object")
        return dict(body)
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def _redirect(url: str, key: str, message: str) -> RedirectResponse:
    separator = "&" if "?" in url else "?"
    return RedirectResponse(f"{url}{separator}{key}={quote(message)}", status_code=status.HTTP_303_SEE_OTHER)


async def run_mutation(
    request: Request,
    db: AsyncSession,
    action: Callable[[], Awaitable[Any]],
    *,
    redirect_to: str,
    message: str,
    serialize: Callable[[Any], Any] | None = None,
):
    """Run ``action`` in the request transaction and render the outcome."""
    try:
        result = await action()
    except OperationalError as exc:
        await db.rollback()
        discard_pending(db)
        logger.error("Store unavailable during %s %s: %s", request.method, request.url.path, exc)
        return _failure(request, StorageUnavailableError("Database is unavailable"), redirect_to)
    except FinanceError as exc:
        await db.rollback()
        discard_pending(db)
        return _failure(request, exc, redirect_to)

    await db.commit()
    await invalidate_committed(db)
    if wants_json(request):
        data = serialize(result) if serialize is not None else None
        return JSONResponse(content={"success": True, "message": message, "data": data})
    return _redirect(redirect_to, "success", message)


def _failure(request: Request, exc: FinanceError, redirect_to: str):
    if isinstance(exc, LedgerConsistencyError):
        logger.error("Ledger consistency violation on %s: %s", request.url.path, exc)
    else:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    if wants_json(request):
        return error_json(exc)
    return _redirect(redirect_to, "error", str(exc))

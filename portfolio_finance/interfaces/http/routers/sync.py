"""Batch replay of writes queued while the client was offline."""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_finance.core.config import Settings, get_settings
from portfolio_finance.infrastructure.cache import discard_pending, invalidate_committed
from portfolio_finance.interfaces.http.deps import get_db_session, get_sync_service
from portfolio_finance.modules.sync import SyncReplayService

logger = logging.getLogger(__name__)

router = APIRouter()


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"success": False, "message": message})


@router.post("/sync")
async def sync_changes(
    request: Request,
    service: SyncReplayService = Depends(get_sync_service),
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
):
    try:
        body = await request.json()
    except ValueError:
        return _bad_request("Request body is not valid JSON")

    changes = body.get("changes") if isinstance(body, dict) else None
    if not isinstance(changes, list):
        return _bad_request("Invalid changes format")
    if len(changes) > settings.sync.max_batch_size:
        return _bad_request(f"At most {settings.sync.max_batch_size} changes per batch")

    try:
        results = await service.replay(changes)
        await db.commit()
    except Exception:
        logger.exception("Sync batch of %d changes failed", len(changes))
        await db.rollback()
        discard_pending(db)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": "Sync failed"},
        )
    await invalidate_committed(db)
    return {"success": True, "results": [result.to_dict() for result in results]}

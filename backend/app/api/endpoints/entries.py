"""
Entry API endpoints.

Business failures answer HTTP 200 with `success: false`; callers check the flag.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from backend.app.core.dependencies import get_current_user
from backend.app.core.exceptions import EntryNotFoundError
from backend.app.db.session import get_db
from backend.app.domain.ledger.ledger_service import LedgerService
from backend.app.schemas.ledger import (
    EntryResponse, HistoryUpdate, SaveEntryResponse, SuccessResponse
)
from backend.app.services.ledger_store import LedgerStore
from backend.app.services.uploads import UploadStorage, get_upload_storage

logger = logging.getLogger("ledger.entries")

router = APIRouter(prefix="/api", tags=["Entries"])


@router.get("/get-entries", response_model=List[EntryResponse])
async def get_entries(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    List all entries, newest first.

    A storage failure yields an empty list.
    """
    try:
        return await LedgerStore(db).find_all()
    except SQLAlchemyError:
        logger.exception("Failed to list entries")
        return []


@router.post("/save-entry", response_model=SaveEntryResponse, response_model_exclude_unset=True)
async def save_entry(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Create or update an entry from a partial payload.

    Identity fields omitted on update keep their stored values; payments are
    normalized and the totals recomputed on every save.
    """
    try:
        entry = await LedgerService.save_entry(LedgerStore(db), payload or {})
    except (SQLAlchemyError, RuntimeError):
        logger.exception("Failed to save entry")
        await db.rollback()
        return SaveEntryResponse(success=False)

    return SaveEntryResponse(success=True, entry=EntryResponse.model_validate(entry))


@router.post("/update-history", response_model=SaveEntryResponse, response_model_exclude_unset=True)
async def update_history(
    update: HistoryUpdate,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Replace the payment history of an existing entry.

    Only payments and derived totals change.
    """
    try:
        entry = await LedgerService.update_history(
            LedgerStore(db), update.unique_id, update.payments
        )
    except EntryNotFoundError as exc:
        logger.info("History update skipped: %s", exc.message)
        return SaveEntryResponse(success=False, msg="Entry not found")
    except SQLAlchemyError:
        logger.exception("Failed to update history for %s", update.unique_id)
        await db.rollback()
        return SaveEntryResponse(success=False)

    return SaveEntryResponse(success=True, entry=EntryResponse.model_validate(entry))


@router.delete("/delete-entry/{uid}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_entry(
    uid: str,
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    storage: UploadStorage = Depends(get_upload_storage)
):
    """
    Delete an entry and every file uploaded for its uniqueID.

    `success` is false when no entry matched.
    """
    try:
        found = await LedgerStore(db).delete_by_key(uid)
    except SQLAlchemyError:
        logger.exception("Failed to delete entry %s", uid)
        await db.rollback()
        return SuccessResponse(success=False)

    # Row delete is committed; cleanup failures are only logged
    try:
        await run_in_threadpool(storage.remove_area, uid)
    except OSError:
        logger.exception("Failed to remove upload area for %s", uid)

    return SuccessResponse(success=found)

"""
Export and upload endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from backend.app.core.config import settings
from backend.app.core.dependencies import get_current_user
from backend.app.db.session import get_db
from backend.app.schemas.ledger import UploadResponse
from backend.app.services.export import XLSX_MEDIA_TYPE, export_ledger
from backend.app.services.ledger_store import LedgerStore
from backend.app.services.uploads import UploadStorage, get_upload_storage

logger = logging.getLogger("ledger.files")

router = APIRouter(prefix="/api", tags=["Files"])


@router.get("/export-excel")
async def export_excel(
    current_user: dict = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Download every entry as a single-sheet workbook."""
    try:
        entries = await LedgerStore(db).find_all()
    except SQLAlchemyError:
        logger.exception("Failed to load entries for export")
        return JSONResponse(content={"success": False})

    content = await run_in_threadpool(export_ledger, entries, settings.export_sheet_name)
    logger.info("Exported %d entries", len(entries))

    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{settings.export_filename}"'},
    )


@router.post("/upload", response_model=UploadResponse, response_model_exclude_none=True)
async def upload_file(
    file: UploadFile = File(...),
    uid: Optional[str] = Form(default=None),
    current_user: dict = Depends(get_current_user),
    storage: UploadStorage = Depends(get_upload_storage)
):
    """Store a file under the upload area of `uid` ('general' when omitted)."""
    content = await file.read()
    try:
        stored = await run_in_threadpool(storage.save, uid, file.filename, content)
    except OSError:
        logger.exception("Failed to store upload for %s", uid)
        return UploadResponse(success=False)

    return UploadResponse(success=True, file=stored)

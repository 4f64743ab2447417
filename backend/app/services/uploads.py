"""
Upload storage keyed by entry uniqueID.

Files live under `<upload_dir>/<uid>/`. Deleting an entry removes its area.
"""

import logging
import shutil
import time
from pathlib import Path
from typing import Dict, Any, Optional
from backend.app.core.config import settings

logger = logging.getLogger("ledger.uploads")

DEFAULT_AREA = "general"


def exact_area_name(uid: Optional[str]) -> Optional[str]:
    """The uid itself when it is a single safe path segment, else None."""
    if not uid:
        return None
    uid = str(uid)
    if uid in (".", "..") or "\\" in uid or Path(uid).name != uid:
        return None
    return uid


def safe_area_name(uid: Optional[str]) -> str:
    """Reduce a uid to one safe path segment; unusable values map to 'general'."""
    if not uid:
        return DEFAULT_AREA
    name = Path(str(uid).strip()).name
    if name in ("", ".", ".."):
        return DEFAULT_AREA
    return name


class UploadStorage:

    def __init__(self, root: str):
        self.root = Path(root)

    def area(self, uid: Optional[str]) -> Path:
        return self.root / safe_area_name(uid)

    def save(self, uid: Optional[str], original_name: Optional[str], content: bytes) -> Dict[str, Any]:
        """
        Store one uploaded file as `<epoch-millis><original extension>`.

        Returns:
            Description of the stored file
        """
        area_name = safe_area_name(uid)
        directory = self.root / area_name
        directory.mkdir(parents=True, exist_ok=True)

        suffix = Path(original_name or "").suffix
        filename = f"{int(time.time() * 1000)}{suffix}"
        target = directory / filename
        target.write_bytes(content)

        logger.info("Stored upload %s for %s (%d bytes)", filename, area_name, len(content))
        return {
            "filename": filename,
            "originalName": original_name,
            "uid": area_name,
            "path": f"{area_name}/{filename}",
            "size": len(content),
        }

    def remove_area(self, uid: str) -> bool:
        """
        Delete every file stored for a uid. Returns False if there was none.

        Only the area named exactly by the uid is touched; uids that are not a
        single path segment never match an area.
        """
        area_name = exact_area_name(uid)
        if area_name is None:
            return False
        directory = self.root / area_name
        if not directory.is_dir():
            return False
        shutil.rmtree(directory)
        logger.info("Removed upload area %s", directory.name)
        return True


def get_upload_storage() -> UploadStorage:
    """FastAPI dependency for the configured upload storage."""
    return UploadStorage(settings.upload_dir)

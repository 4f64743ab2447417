"""
API Router.

Aggregates all ledger endpoints.
"""

from fastapi import APIRouter
from backend.app.api.endpoints import auth, entries, expenses, files

router = APIRouter()

# Operator login
router.include_router(auth.router)

# Ledger
router.include_router(entries.router)
router.include_router(expenses.router)

# Export and uploads
router.include_router(files.router)

"""
Ledger Service (Domain Logic).

Runs the save and history-update flows: lookup, reconciliation, persistence.
"""

import logging
from datetime import date
from typing import Any, Mapping, Optional

from backend.app.core.config import settings
from backend.app.core.exceptions import EntryNotFoundError
from backend.app.domain.ledger.reconciler import (
    generate_unique_id,
    reconcile_entry,
    reconcile_history,
    resolve_unique_id,
)
from backend.app.models.entry import Entry
from backend.app.services.ledger_store import LedgerStore

logger = logging.getLogger("ledger.service")

MAX_UID_ATTEMPTS = 20


class LedgerService:

    @staticmethod
    async def new_unique_id(store: LedgerStore) -> str:
        """
        Generate a uniqueID that no stored entry uses yet.

        Raises:
            RuntimeError: if every attempt collided
        """
        for _ in range(MAX_UID_ATTEMPTS):
            candidate = generate_unique_id(settings.uid_prefix)
            if not await store.key_exists(candidate):
                return candidate
        raise RuntimeError("Could not allocate a free uniqueID")

    @staticmethod
    async def save_entry(
        store: LedgerStore,
        payload: Mapping[str, Any],
        today: Optional[date] = None,
    ) -> Entry:
        """
        Full save path.

        Flow:
        1. Look up the stored entry by the supplied uniqueID (if any)
        2. Allocate a uniqueID when none was supplied
        3. Reconcile identity fields, payments and totals
        4. Insert or overwrite
        """
        unique_id = resolve_unique_id(payload)
        existing = await store.find_by_key(unique_id) if unique_id else None

        if unique_id is None:
            unique_id = await LedgerService.new_unique_id(store)

        record = reconcile_entry(
            payload,
            existing.to_record() if existing is not None else None,
            unique_id,
            today,
        )
        return await store.upsert(record)

    @staticmethod
    async def update_history(
        store: LedgerStore,
        unique_id: Optional[str],
        raw_payments: Any,
        today: Optional[date] = None,
    ) -> Entry:
        """
        Replace the payment history of an existing entry.

        Raises:
            EntryNotFoundError: no entry with that uniqueID; nothing is written
        """
        existing = await store.find_by_key(unique_id) if unique_id else None
        if existing is None:
            raise EntryNotFoundError(unique_id)

        record = reconcile_history(existing.to_record(), raw_payments, today)
        return await store.upsert(record)

"""
Ledger store: persistence facade over entries and expenses.

Every write commits on its own; one entry is one row, so a save is a
single-row write and concurrent saves to the same uniqueID are last-writer-wins.
"""

import logging
from typing import Any, Dict, List, Optional
from sqlalchemy import select, delete, desc
from sqlalchemy.ext.asyncio import AsyncSession
from backend.app.models.entry import Entry
from backend.app.models.expense import Expense

logger = logging.getLogger("ledger.store")

ENTRY_FIELDS = (
    "date", "name", "contact", "agent", "agent_phone",
    "amount", "payments", "paid", "expenditure", "due", "balance",
)


class LedgerStore:

    def __init__(self, db: AsyncSession):
        self.db = db

    # Entries

    async def find_by_key(self, unique_id: str) -> Optional[Entry]:
        """Exact-match lookup by uniqueID."""
        result = await self.db.execute(select(Entry).where(Entry.unique_id == unique_id))
        return result.scalar_one_or_none()

    async def key_exists(self, unique_id: str) -> bool:
        result = await self.db.execute(select(Entry.id).where(Entry.unique_id == unique_id))
        return result.first() is not None

    async def find_all(self) -> List[Entry]:
        """All entries, newest first."""
        result = await self.db.execute(
            select(Entry).order_by(desc(Entry.created_at), desc(Entry.id))
        )
        return list(result.scalars().all())

    async def upsert(self, record: Dict[str, Any]) -> Entry:
        """
        Insert a new entry or overwrite every field of the stored one.

        Args:
            record: reconciled entry keyed by model attribute names
        """
        entry = await self.find_by_key(record["unique_id"])
        created = entry is None
        if created:
            entry = Entry(unique_id=record["unique_id"])
            self.db.add(entry)

        for field in ENTRY_FIELDS:
            setattr(entry, field, record.get(field))

        await self.db.commit()
        await self.db.refresh(entry)

        logger.info(
            "Entry %s %s", entry.unique_id, "created" if created else "updated"
        )
        return entry

    async def delete_by_key(self, unique_id: str) -> bool:
        """Delete an entry. Returns False when nothing matched."""
        result = await self.db.execute(delete(Entry).where(Entry.unique_id == unique_id))
        await self.db.commit()
        found = result.rowcount > 0
        logger.info("Entry %s delete (found=%s)", unique_id, found)
        return found

    # Expenses

    async def list_expenses(self) -> List[Expense]:
        """All expenses, newest first."""
        result = await self.db.execute(
            select(Expense).order_by(desc(Expense.created_at), desc(Expense.id))
        )
        return list(result.scalars().all())

    async def create_expense(self, date: str, description: Optional[str], amount: float) -> Expense:
        expense = Expense(date=date, description=description, amount=amount)
        self.db.add(expense)
        await self.db.commit()
        await self.db.refresh(expense)
        logger.info("Expense %s created", expense.id)
        return expense

    async def delete_expense(self, expense_id: int) -> bool:
        result = await self.db.execute(delete(Expense).where(Expense.id == expense_id))
        await self.db.commit()
        found = result.rowcount > 0
        logger.info("Expense %s delete (found=%s)", expense_id, found)
        return found

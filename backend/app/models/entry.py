"""
Entry database model.

One row per customer ledger record. The payment history is embedded as a
JSON list so an entry is always written as a single row.
"""

from sqlalchemy import Column, Integer, Float, String, DateTime, JSON
from sqlalchemy.sql import func
from backend.app.db.session import Base


class Entry(Base):
    """
    Customer ledger entry.

    `paid`, `expenditure`, `due` and `balance` are derived from `payments` and
    `amount`; they are rewritten on every save and never set on their own.
    """
    __tablename__ = "entries"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    unique_id = Column(String(64), unique=True, index=True, nullable=False)

    date = Column(String(32), nullable=True)

    # Identity / contact (sticky across updates)
    name = Column(String(255), nullable=True)
    contact = Column(String(100), nullable=True)
    agent = Column(String(255), nullable=True)
    agent_phone = Column(String(100), nullable=True)

    # Financials
    amount = Column(Float, nullable=False, default=0.0)
    paid = Column(Float, nullable=False, default=0.0)
    expenditure = Column(Float, nullable=False, default=0.0)
    due = Column(Float, nullable=False, default=0.0)
    balance = Column(Float, nullable=False, default=0.0)

    # Ordered transaction history: [{date, paid, expenditure, mode}, ...]
    payments = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def to_record(self) -> dict:
        """Snapshot of the stored fields in the shape the reconciler works on."""
        return {
            "unique_id": self.unique_id,
            "date": self.date,
            "name": self.name,
            "contact": self.contact,
            "agent": self.agent,
            "agent_phone": self.agent_phone,
            "amount": self.amount,
            "payments": list(self.payments or []),
            "paid": self.paid,
            "expenditure": self.expenditure,
            "due": self.due,
            "balance": self.balance,
        }

    def __repr__(self):
        return f"<Entry(id={self.id}, unique_id='{self.unique_id}', amount={self.amount}, due={self.due})>"

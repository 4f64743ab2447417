"""
Expense database model.

Standalone cost records, unrelated to any entry.
"""

from sqlalchemy import Column, Integer, Float, String, DateTime
from sqlalchemy.sql import func
from backend.app.db.session import Base


class Expense(Base):
    """Expense model. Created and deleted only, never updated."""
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    date = Column(String(32), nullable=True)
    description = Column(String(500), nullable=True)
    amount = Column(Float, nullable=False, default=0.0)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Expense(id={self.id}, amount={self.amount}, description='{self.description}')>"

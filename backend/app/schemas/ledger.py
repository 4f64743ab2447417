"""
Ledger Schemas.

Responses use the client's field names (uniqueID, agentPhone, _id, createdAt).
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Any, Dict, List, Optional


class PaymentResponse(BaseModel):
    """One line of an entry's payment history."""
    date: str
    paid: float
    expenditure: float
    mode: str


class EntryResponse(BaseModel):
    """Schema for displaying an entry."""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(validation_alias=AliasChoices("id", "_id"), serialization_alias="_id")
    unique_id: str = Field(validation_alias=AliasChoices("unique_id", "uniqueID"), serialization_alias="uniqueID")
    date: Optional[str] = None
    name: Optional[str] = None
    contact: Optional[str] = None
    agent: Optional[str] = None
    agent_phone: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("agent_phone", "agentPhone"), serialization_alias="agentPhone"
    )
    amount: float = 0.0
    paid: float = 0.0
    expenditure: float = 0.0
    due: float = 0.0
    balance: float = 0.0
    payments: List[PaymentResponse] = []
    created_at: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("created_at", "createdAt"), serialization_alias="createdAt"
    )
    updated_at: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("updated_at", "updatedAt"), serialization_alias="updatedAt"
    )


class SaveEntryResponse(BaseModel):
    success: bool
    entry: Optional[EntryResponse] = None
    msg: Optional[str] = None


class HistoryUpdate(BaseModel):
    """
    Schema for replacing an entry's payment history.

    `payments` stays loosely typed; the normalizer coerces each element.
    """
    unique_id: Optional[str] = Field(default=None, alias="uniqueID")
    payments: Any = None


class ExpenseCreate(BaseModel):
    """Schema for creating an expense."""
    date: Optional[str] = None
    description: Optional[str] = None
    amount: Any = None


class ExpenseResponse(BaseModel):
    """Schema for displaying an expense."""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(validation_alias=AliasChoices("id", "_id"), serialization_alias="_id")
    date: Optional[str] = None
    description: Optional[str] = None
    amount: float = 0.0
    created_at: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("created_at", "createdAt"), serialization_alias="createdAt"
    )


class SaveExpenseResponse(BaseModel):
    success: bool
    expense: Optional[ExpenseResponse] = None


class SuccessResponse(BaseModel):
    success: bool
    msg: Optional[str] = None


class UploadResponse(BaseModel):
    success: bool
    file: Optional[Dict[str, Any]] = None

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class OrderSubmission(BaseModel):
    """Raw checkout payload. Nothing here is trusted; see domain.validation."""
    model_config = ConfigDict(extra="ignore")

    name: Any = Field(None, examples=["Ann"])
    email: Any = Field(None, examples=["ann@x.com"])
    phone: Any = Field(None, examples=["+1 555-0100"])
    address1: Any = Field(None, examples=["221B Baker St"])
    address2: Any = Field(None, examples=[""])
    city: Any = Field(None, examples=["London"])
    state: Any = Field(None, examples=["LN"])
    country: Any = Field(None, examples=["GB"])
    pin: Any = Field(None, examples=["NW1 6XE"])
    qty: Any = Field(None, examples=[2])


class Receipt(BaseModel):
    id: UUID
    created_at: datetime
    total_cents: int


class ValidationResult(BaseModel):
    ok: bool
    # field -> message, "" when the field passed
    errors: Dict[str, str] = {}

    def failing(self) -> Dict[str, str]:
        return {field: msg for field, msg in self.errors.items() if msg}


class CleanOrder(BaseModel):
    name: str
    email: str
    phone: str
    address1: str
    address2: str
    city: str
    state: str
    country: str
    pin: str
    qty: Optional[int]

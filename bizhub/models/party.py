from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import Field
from bizhub.models.base import MongoModel

class PartyType(str, Enum):
    CUSTOMER = "customer"
    SUPPLIER = "supplier"

class Party(MongoModel):
    """
    Customer or supplier with a running balance against the tenant's business.
    Balance, transaction count and last transaction time are owned by the ledger.
    """
    tenant_id: str
    party_id: str = Field(..., description="Tenant-scoped party ID")

    name: str
    party_type: PartyType = PartyType.SUPPLIER
    phone: Optional[str] = None
    email: Optional[str] = None

    balance: Decimal = Decimal("0")
    total_transactions: int = Field(0, ge=0)
    last_transaction_at: Optional[datetime] = None

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

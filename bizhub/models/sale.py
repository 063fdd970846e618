from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import Field
from bizhub.models.base import MongoModel

class SaleItem(MongoModel):
    item_name: str
    quantity: Decimal = Field(Decimal("1"), gt=0)
    unit_price: Decimal = Field(Decimal("0"), ge=0)

class Sale(MongoModel):
    """Sale aggregate as stored on the sales collection."""
    tenant_id: str
    sale_id: str
    invoice_number: Optional[str] = None

    total_amount: Decimal = Field(Decimal("0"), ge=0)
    payment_status: str = "unpaid"
    counterparty_name: Optional[str] = None
    party_id: Optional[str] = None
    items: List[SaleItem] = Field(default_factory=list)

    created_at: datetime = Field(default_factory=datetime.utcnow)

class SalesTransactionSummary(MongoModel):
    """
    Denormalized one-row view of a sale for dashboards.
    Derived from the sale; never authoritative.
    """
    tenant_id: str
    summary_id: str
    type: str = "sale"

    total_price: Decimal
    payment_status: str
    counterparty_name: str
    item_name: str
    quantity: Decimal

    timestamp: datetime = Field(default_factory=datetime.utcnow)

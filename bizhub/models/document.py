from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from pydantic import Field
from bizhub.models.base import MongoModel

class DocumentKind(str, Enum):
    PURCHASE = "purchase"
    PURCHASE_RETURN = "purchaseReturn"
    EXPENSE = "expense"

class DocumentStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"

# ID prefixes for generated document numbers
DOCUMENT_ID_PREFIXES = {
    DocumentKind.PURCHASE: "PUR",
    DocumentKind.PURCHASE_RETURN: "PRT",
    DocumentKind.EXPENSE: "EXP",
}

class DocumentItem(MongoModel):
    item_name: str
    quantity: Decimal = Field(Decimal("1"), gt=0)
    unit_price: Decimal = Field(Decimal("0"), ge=0)

class FinancialDocument(MongoModel):
    """
    Purchase, purchase return or expense. Only kind, status and amount
    decide how the document moves its party's balance; the payment fields
    are bookkeeping for the document itself.
    """
    tenant_id: str
    document_id: str = Field(..., description="Tenant-scoped document ID")
    kind: DocumentKind

    party_id: Optional[str] = None
    party_name: Optional[str] = Field(None, description="Supplier name as written on the bill")
    amount: Decimal = Field(..., ge=0, description="Magnitude only; sign comes from the kind")
    status: DocumentStatus = DocumentStatus.ACTIVE

    paid_amount: Decimal = Field(Decimal("0"), ge=0)
    balance_amount: Decimal = Field(Decimal("0"), description="Amount still outstanding on this document")
    payment_status: str = "pending"
    payment_method: Optional[str] = None

    document_date: datetime = Field(default_factory=datetime.utcnow)
    reference: Optional[str] = Field(None, description="Bill or return number")
    notes: Optional[str] = None
    items: List[DocumentItem] = Field(default_factory=list)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

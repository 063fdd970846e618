"""Request and response bodies for the HTTP layer."""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from bizhub.ledger.balance import LedgerOutcome
from bizhub.models.document import DocumentItem, FinancialDocument
from bizhub.models.party import PartyType
from bizhub.models.sale import Sale, SaleItem, SalesTransactionSummary


class PartyCreate(BaseModel):
    party_id: Optional[str] = None
    name: str = Field(..., min_length=1)
    party_type: PartyType = PartyType.SUPPLIER
    phone: Optional[str] = None
    email: Optional[str] = None


class DocumentCreate(BaseModel):
    document_id: Optional[str] = None
    kind: str
    party_id: Optional[str] = None
    party_name: Optional[str] = None
    # Checked by DocumentService so a missing amount is a 400, not a 422
    amount: Optional[Decimal] = None
    status: str = "active"
    paid_amount: Decimal = Field(Decimal("0"), ge=0)
    # Defaults to amount - paid_amount
    balance_amount: Optional[Decimal] = None
    payment_status: str = "pending"
    payment_method: Optional[str] = None
    document_date: Optional[datetime] = None
    reference: Optional[str] = None
    notes: Optional[str] = None
    items: List[DocumentItem] = Field(default_factory=list)


class DocumentUpdate(BaseModel):
    kind: Optional[str] = None
    party_id: Optional[str] = None
    party_name: Optional[str] = None
    amount: Optional[Decimal] = None
    status: Optional[str] = None
    paid_amount: Optional[Decimal] = Field(None, ge=0)
    balance_amount: Optional[Decimal] = None
    payment_status: Optional[str] = None
    payment_method: Optional[str] = None
    document_date: Optional[datetime] = None
    reference: Optional[str] = None
    notes: Optional[str] = None
    items: Optional[List[DocumentItem]] = None


class SaleCreate(BaseModel):
    sale_id: Optional[str] = None
    invoice_number: Optional[str] = None
    total_amount: Optional[Decimal] = Field(None, ge=0)
    payment_status: str = "unpaid"
    counterparty_name: Optional[str] = None
    party_id: Optional[str] = None
    items: List[SaleItem] = Field(default_factory=list)


class DocumentResponse(BaseModel):
    document: FinancialDocument
    ledger: List[LedgerOutcome] = Field(default_factory=list)


class DeleteResponse(BaseModel):
    document_id: str
    deleted: bool = True
    ledger: List[LedgerOutcome] = Field(default_factory=list)


class SaleResponse(BaseModel):
    sale: Sale
    mirrored: bool
    summary: Optional[SalesTransactionSummary] = None

from fastapi import Depends, HTTPException

from bizhub.config import settings
from bizhub.database import db
from bizhub.errors import ConcurrentUpdateLoss, DocumentNotFound, LedgerError, PartyInUse, PartyNotFound, ValidationError
from bizhub.ledger.balance import BalanceLedger
from bizhub.ledger.effects import build_sign_table
from bizhub.ledger.mirror import TransactionMirror
from bizhub.services.documents import DocumentService
from bizhub.services.parties import PartyService
from bizhub.services.sales import SaleService


def get_ledger() -> BalanceLedger:
    return BalanceLedger(
        db.parties,
        db.documents,
        strict=settings.LEDGER_STRICT_PARTY_CHECK,
        signs=build_sign_table(settings.EXPENSE_BALANCE_SIGN),
    )


def get_document_service(ledger: BalanceLedger = Depends(get_ledger)) -> DocumentService:
    return DocumentService(db.documents, db.parties, ledger, strict=settings.LEDGER_STRICT_PARTY_CHECK)


def get_party_service(ledger: BalanceLedger = Depends(get_ledger)) -> PartyService:
    return PartyService(db.parties, db.documents, ledger)


def get_sale_service() -> SaleService:
    mirror = TransactionMirror(db.transactions, enabled=settings.MIRROR_ENABLED)
    return SaleService(db.sales, db.transactions, mirror)


def http_error(error: LedgerError) -> HTTPException:
    """Map a ledger error onto the HTTP status the routers return."""
    if isinstance(error, ValidationError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, (PartyNotFound, DocumentNotFound)):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, (PartyInUse, ConcurrentUpdateLoss)):
        return HTTPException(status_code=409, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))

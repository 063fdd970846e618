import logging
import uuid
from datetime import datetime
from typing import Awaitable, List, Optional, Tuple, Union

from pymongo.errors import DuplicateKeyError, PyMongoError

from bizhub.errors import ConcurrentUpdateLoss, DocumentNotFound, PartyNotFound, ValidationError
from bizhub.ledger.balance import BalanceLedger, LedgerAction, LedgerOutcome
from bizhub.models.document import DOCUMENT_ID_PREFIXES, DocumentKind, DocumentStatus, FinancialDocument
from bizhub.repositories.document import DocumentRepository
from bizhub.repositories.party import PartyRepository
from bizhub.schemas import DocumentCreate, DocumentUpdate
from bizhub.tenancy import validate_tenant_id

logger = logging.getLogger(__name__)

# Fields whose change moves money between or within party balances
BALANCE_FIELDS = ("kind", "amount", "party_id")
# Everything the ledger reads; an update only lands while these are unchanged
LEDGER_FIELDS = BALANCE_FIELDS + ("status",)
NON_NULLABLE_FIELDS = ("paid_amount", "balance_amount", "payment_status", "document_date", "items")
MAX_UPDATE_ATTEMPTS = 3


class DocumentService:
    """
    Request flow for purchases, purchase returns and expenses: persist the
    document first, then let the ledger reconcile the party. A failed
    reconciliation never undoes the document write.
    """

    def __init__(self, documents: DocumentRepository, parties: PartyRepository,
                 ledger: BalanceLedger, strict: bool = False):
        self.documents = documents
        self.parties = parties
        self.ledger = ledger
        self.strict = strict

    async def create(self, tenant_id: str, data: DocumentCreate) -> Tuple[FinancialDocument, List[LedgerOutcome]]:
        tenant_id = validate_tenant_id(tenant_id)
        kind = self._parse_kind(data.kind)
        status = self._parse_status(data.status)
        if data.amount is None:
            raise ValidationError("Amount is required")
        if data.amount < 0:
            raise ValidationError("Amount must not be negative")
        await self._check_party(tenant_id, data.party_id)

        document = FinancialDocument(
            tenant_id=tenant_id,
            document_id=data.document_id or f"{DOCUMENT_ID_PREFIXES[kind]}-{uuid.uuid4().hex[:8].upper()}",
            kind=kind,
            party_id=data.party_id or None,
            party_name=data.party_name,
            amount=data.amount,
            status=status,
            paid_amount=data.paid_amount,
            balance_amount=(data.balance_amount if data.balance_amount is not None
                            else data.amount - data.paid_amount),
            payment_status=data.payment_status,
            payment_method=data.payment_method,
            document_date=data.document_date or datetime.utcnow(),
            reference=data.reference,
            notes=data.notes,
            items=data.items,
        )
        try:
            await self.documents.create(document)
        except DuplicateKeyError:
            raise ValidationError(f"Document {document.document_id} already exists")

        logger.info(f"Created {document.kind} {document.document_id} for {tenant_id}")
        outcome = await self._reconcile(self.ledger.on_create(document))
        return document, outcome

    async def get(self, tenant_id: str, document_id: str) -> FinancialDocument:
        document = await self.documents.get(validate_tenant_id(tenant_id), document_id)
        if not document:
            raise DocumentNotFound(tenant_id, document_id)
        return document

    async def list(self, tenant_id: str, kind: Optional[str] = None, status: Optional[str] = None,
                   party_id: Optional[str] = None, skip: int = 0, limit: int = 100) -> List[FinancialDocument]:
        query = {}
        if kind:
            query["kind"] = self._parse_kind(kind).value
        if status:
            query["status"] = self._parse_status(status).value
        if party_id:
            query["party_id"] = party_id
        return await self.documents.list(validate_tenant_id(tenant_id), query, skip=skip, limit=limit)

    async def update(self, tenant_id: str, document_id: str,
                     data: DocumentUpdate) -> Tuple[FinancialDocument, List[LedgerOutcome]]:
        """
        Apply a partial update and reconcile the party from the document as it
        was at the moment of the write. The write only lands while the fields
        the ledger reads are still what we read; otherwise re-read and retry.
        """
        tenant_id = validate_tenant_id(tenant_id)

        changes = data.model_dump(exclude_unset=True)
        # null leaves these fields unchanged
        for field in NON_NULLABLE_FIELDS:
            if field in changes and changes[field] is None:
                del changes[field]
        if "kind" in changes:
            changes["kind"] = self._parse_kind(changes["kind"]).value
        if "status" in changes:
            changes["status"] = self._parse_status(changes["status"]).value
        if "amount" in changes and (changes["amount"] is None or changes["amount"] < 0):
            raise ValidationError("Amount must be a non-negative number")
        if "party_id" in changes:
            changes["party_id"] = changes["party_id"] or None
        derive_balance = ("amount" in changes or "paid_amount" in changes) and "balance_amount" not in changes

        for _ in range(MAX_UPDATE_ATTEMPTS):
            current = await self.get(tenant_id, document_id)
            write = dict(changes)
            if derive_balance:
                write["balance_amount"] = (write.get("amount", current.amount)
                                           - write.get("paid_amount", current.paid_amount))

            if any(f in write and write[f] != getattr(current, f) for f in LEDGER_FIELDS):
                await self._check_party(tenant_id, current.party_id)
                if write.get("party_id", current.party_id) != current.party_id:
                    await self._check_party(tenant_id, write["party_id"])

            expected = {f: getattr(current, f) for f in LEDGER_FIELDS}
            if derive_balance:
                expected["paid_amount"] = current.paid_amount
            write["updated_at"] = datetime.utcnow()

            before = await self.documents.update_if_unchanged(tenant_id, document_id, expected, write)
            if before:
                break
            logger.info(f"Document {document_id} changed during update, retrying")
        else:
            raise ConcurrentUpdateLoss(document_id, MAX_UPDATE_ATTEMPTS)

        updated = FinancialDocument(id=before.id, **{**before.model_dump(), **write})
        if any(getattr(before, f) != getattr(updated, f) for f in BALANCE_FIELDS):
            outcome = await self._reconcile(self.ledger.on_edit(before, updated))
        elif before.status != updated.status:
            outcome = await self._reconcile(
                self.ledger.on_status_change(updated, before.status, updated.status)
            )
        else:
            outcome = []
        return updated, outcome

    async def delete(self, tenant_id: str, document_id: str) -> List[LedgerOutcome]:
        tenant_id = validate_tenant_id(tenant_id)
        current = await self.get(tenant_id, document_id)
        if self.ledger.effect_of(current) != 0:
            await self._check_party(tenant_id, current.party_id)

        # Reverse whatever was actually removed, not what we read above
        removed = await self.documents.take(tenant_id, document_id)
        if not removed:
            raise DocumentNotFound(tenant_id, document_id)

        logger.info(f"Deleted {removed.kind} {document_id} for {tenant_id}")
        return await self._reconcile(self.ledger.on_delete(removed))

    async def _check_party(self, tenant_id: str, party_id: Optional[str]):
        # Lenient mode lets the ledger warn later instead
        if self.strict and party_id and not await self.parties.get(tenant_id, party_id):
            raise PartyNotFound(tenant_id, party_id)

    async def _reconcile(self, pending: Awaitable[Union[LedgerOutcome, List[LedgerOutcome]]]) -> List[LedgerOutcome]:
        try:
            result = await pending
        except PyMongoError as e:
            logger.error(f"Ledger reconciliation failed, party balance is stale until repaired: {e}")
            return [LedgerOutcome(action=LedgerAction.FAILED, detail=str(e))]
        return result if isinstance(result, list) else [result]

    @staticmethod
    def _parse_kind(kind) -> DocumentKind:
        try:
            return DocumentKind(kind)
        except ValueError:
            raise ValidationError(f"Invalid document kind: {kind}")

    @staticmethod
    def _parse_status(status) -> DocumentStatus:
        try:
            return DocumentStatus(status)
        except ValueError:
            raise ValidationError(f"Invalid document status: {status}")

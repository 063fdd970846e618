import logging
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Mapping, Optional

from pydantic import BaseModel

from bizhub.errors import PartyNotFound, ValidationError
from bizhub.ledger.effects import KIND_SIGNS, effect
from bizhub.models.document import DocumentKind, DocumentStatus, FinancialDocument
from bizhub.models.party import Party
from bizhub.repositories.document import DocumentRepository
from bizhub.repositories.party import PartyRepository

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class LedgerAction(str, Enum):
    APPLIED = "applied"
    SKIPPED = "skipped"
    PARTY_MISSING = "party_missing"
    FAILED = "failed"


class LedgerOutcome(BaseModel):
    """What a single reconciliation did to a party."""
    action: LedgerAction
    party_id: Optional[str] = None
    delta: Decimal = ZERO
    balance: Optional[Decimal] = None
    detail: Optional[str] = None


class BalanceLedger:
    """
    Keeps Party.balance equal to the summed effect of the party's active
    documents by applying deltas on document create, status change and delete.

    Deltas go through PartyRepository.apply_delta, a single atomic update, so
    concurrent events on the same party cannot lose each other's increments.
    The ledger does not deduplicate events: callers report each real change once.
    """

    def __init__(self, parties: PartyRepository, documents: Optional[DocumentRepository] = None,
                 strict: bool = False, signs: Mapping[DocumentKind, int] = KIND_SIGNS):
        self.parties = parties
        self.documents = documents
        self.strict = strict
        self.signs = signs

    def effect_of(self, document: FinancialDocument, status: Optional[DocumentStatus] = None) -> Decimal:
        return effect(document.kind, status or document.status, document.amount, self.signs)

    async def on_create(self, document: FinancialDocument) -> LedgerOutcome:
        """Apply a freshly persisted document's contribution if it is active."""
        if not document.party_id or document.amount <= 0:
            return LedgerOutcome(action=LedgerAction.SKIPPED, party_id=document.party_id,
                                 detail="no party or zero amount")
        return await self._apply(document.tenant_id, document.party_id,
                                 self.effect_of(document), f"create {document.document_id}")

    async def on_status_change(self, document: FinancialDocument, previous_status,
                               new_status) -> LedgerOutcome:
        """Apply effect(new) - effect(previous). Same-status transitions change nothing."""
        previous_status = self._parse_status(previous_status)
        new_status = self._parse_status(new_status)

        if not document.party_id:
            return LedgerOutcome(action=LedgerAction.SKIPPED, detail="no party")

        delta = self.effect_of(document, new_status) - self.effect_of(document, previous_status)
        return await self._apply(
            document.tenant_id, document.party_id, delta,
            f"{document.document_id} {previous_status.value} -> {new_status.value}",
        )

    async def on_delete(self, document: FinancialDocument) -> LedgerOutcome:
        """Reverse the contribution of a document as it was just before deletion."""
        if not document.party_id:
            return LedgerOutcome(action=LedgerAction.SKIPPED, detail="no party")
        return await self._apply(document.tenant_id, document.party_id,
                                 -self.effect_of(document), f"delete {document.document_id}")

    async def on_edit(self, before: FinancialDocument, after: FinancialDocument) -> List[LedgerOutcome]:
        """
        Reconcile an edit that may change amount, kind, party and status at once:
        the old contribution is reversed on the old party and the new one applied
        to the new party. When the party is unchanged a single net delta is applied.
        """
        if before.party_id == after.party_id:
            if not after.party_id:
                return [LedgerOutcome(action=LedgerAction.SKIPPED, detail="no party")]
            delta = self.effect_of(after) - self.effect_of(before)
            return [await self._apply(after.tenant_id, after.party_id, delta,
                                      f"edit {after.document_id}")]

        outcomes = []
        if before.party_id:
            outcomes.append(await self._apply(before.tenant_id, before.party_id,
                                              -self.effect_of(before),
                                              f"move {before.document_id} away"))
        if after.party_id:
            outcomes.append(await self._apply(after.tenant_id, after.party_id,
                                              self.effect_of(after),
                                              f"move {after.document_id} in"))
        return outcomes

    async def recompute(self, tenant_id: str, party_id: str, reset_counter: bool = False) -> Party:
        """
        Rebuild a party's balance from every document that references it.
        Repairs drift left by failed reconciliations. Deltas applied while the
        recompute runs are overwritten, so run it when the party is quiet.
        """
        if self.documents is None:
            raise RuntimeError("recompute needs a DocumentRepository")

        party = await self.parties.get(tenant_id, party_id)
        if not party:
            raise PartyNotFound(tenant_id, party_id)

        documents = await self.documents.list_for_party(tenant_id, party_id)
        effects = [self.effect_of(d) for d in documents]
        balance = sum(effects, ZERO)
        counter = sum(1 for e in effects if e != 0) if reset_counter else None

        if balance != party.balance:
            logger.warning(
                f"Party {party_id} ({tenant_id}) balance drifted: stored {party.balance}, "
                f"recomputed {balance}"
            )
        return await self.parties.set_balance(tenant_id, party_id, balance, counter)

    async def _apply(self, tenant_id: str, party_id: str, delta: Decimal, event: str) -> LedgerOutcome:
        if delta == 0:
            return LedgerOutcome(action=LedgerAction.SKIPPED, party_id=party_id, detail="zero delta")

        try:
            party = await self.parties.apply_delta(tenant_id, party_id, delta, datetime.utcnow())
        except PartyNotFound as e:
            if self.strict:
                raise
            logger.warning(f"Ledger {event}: {e}; balance not updated")
            return LedgerOutcome(action=LedgerAction.PARTY_MISSING, party_id=party_id,
                                 delta=delta, detail=str(e))

        logger.info(f"Ledger {event}: party {party_id} {delta:+} -> {party.balance}")
        return LedgerOutcome(action=LedgerAction.APPLIED, party_id=party_id,
                             delta=delta, balance=party.balance)

    @staticmethod
    def _parse_status(status) -> DocumentStatus:
        try:
            return DocumentStatus(status)
        except ValueError:
            raise ValidationError(f"Invalid document status: {status}")

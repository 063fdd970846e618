import logging
import uuid
from typing import List

from pymongo.errors import DuplicateKeyError

from bizhub.errors import PartyInUse, PartyNotFound, ValidationError
from bizhub.ledger.balance import BalanceLedger
from bizhub.models.party import Party
from bizhub.repositories.document import DocumentRepository
from bizhub.repositories.party import PartyRepository
from bizhub.schemas import PartyCreate
from bizhub.tenancy import validate_tenant_id

logger = logging.getLogger(__name__)


class PartyService:
    def __init__(self, parties: PartyRepository, documents: DocumentRepository, ledger: BalanceLedger):
        self.parties = parties
        self.documents = documents
        self.ledger = ledger

    async def register(self, tenant_id: str, data: PartyCreate) -> Party:
        """Register a party. It starts at a zero balance; only documents move it."""
        party = Party(
            tenant_id=validate_tenant_id(tenant_id),
            party_id=data.party_id or f"PTY-{uuid.uuid4().hex[:8].upper()}",
            name=data.name,
            party_type=data.party_type,
            phone=data.phone,
            email=data.email,
        )
        try:
            await self.parties.create(party)
        except DuplicateKeyError:
            raise ValidationError(f"Party {party.party_id} already exists")
        return party

    async def get(self, tenant_id: str, party_id: str) -> Party:
        party = await self.parties.get(validate_tenant_id(tenant_id), party_id)
        if not party:
            raise PartyNotFound(tenant_id, party_id)
        return party

    async def list(self, tenant_id: str, skip: int = 0, limit: int = 100) -> List[Party]:
        return await self.parties.list(validate_tenant_id(tenant_id), skip=skip, limit=limit)

    async def delete(self, tenant_id: str, party_id: str):
        """Delete a party that no document references."""
        tenant_id = validate_tenant_id(tenant_id)
        references = await self.documents.count_for_party(tenant_id, party_id)
        if references:
            raise PartyInUse(party_id, references)
        if not await self.parties.delete(tenant_id, party_id):
            raise PartyNotFound(tenant_id, party_id)
        logger.info(f"Deleted party {party_id} for {tenant_id}")

    async def recompute(self, tenant_id: str, party_id: str, reset_counter: bool = False) -> Party:
        return await self.ledger.recompute(validate_tenant_id(tenant_id), party_id, reset_counter)

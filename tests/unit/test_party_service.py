import pytest
from decimal import Decimal
from bizhub.errors import PartyInUse, PartyNotFound
from bizhub.schemas import PartyCreate
from bizhub.services.parties import PartyService

TENANT = "9876543210"

@pytest.fixture
def service(parties, documents, ledger):
    return PartyService(parties, documents, ledger)

@pytest.mark.asyncio
async def test_register_starts_at_zero(service):
    party = await service.register(TENANT, PartyCreate(name="Metro Wholesale"))

    assert party.party_id.startswith("PTY-")
    assert party.balance == 0
    assert party.total_transactions == 0
    assert (await service.get(TENANT, party.party_id)).name == "Metro Wholesale"

@pytest.mark.asyncio
async def test_delete_rejected_while_referenced(service, documents, registered_supplier, make_document):
    await documents.create(make_document())

    with pytest.raises(PartyInUse):
        await service.delete(TENANT, "SUP-1")
    assert await service.get(TENANT, "SUP-1") is not None

@pytest.mark.asyncio
async def test_delete_unreferenced_party(service, registered_supplier):
    await service.delete(TENANT, "SUP-1")
    with pytest.raises(PartyNotFound):
        await service.get(TENANT, "SUP-1")

@pytest.mark.asyncio
async def test_recompute(service, documents, registered_supplier, make_document):
    await documents.create(make_document(amount="40"))

    party = await service.recompute(TENANT, "SUP-1")

    assert party.balance == Decimal("-40")

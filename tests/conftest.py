import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from bizhub.errors import PartyNotFound
from bizhub.ledger.balance import BalanceLedger
from bizhub.ledger.mirror import TransactionMirror
from bizhub.models.document import FinancialDocument
from bizhub.models.party import Party
from bizhub.models.sale import Sale, SaleItem

TENANT = "9876543210"


class InMemoryRepository:
    """Dict-backed stand-in for a tenant-scoped repository."""
    id_field = "id"

    def __init__(self):
        self.rows = {}

    def _key(self, tenant_id, id):
        return (tenant_id, id)

    async def get(self, tenant_id, id):
        row = self.rows.get(self._key(tenant_id, id))
        return row.model_copy(deep=True) if row else None

    async def list(self, tenant_id, filter=None, skip=0, limit=100):
        rows = [r for (t, _), r in self.rows.items() if t == tenant_id]
        for field, value in (filter or {}).items():
            rows = [r for r in rows if getattr(r, field) == value]
        return [r.model_copy(deep=True) for r in rows[skip:skip + limit]]

    async def create(self, model):
        self.rows[self._key(model.tenant_id, getattr(model, self.id_field))] = model.model_copy(deep=True)
        return model

    async def update(self, tenant_id, id, update_data):
        key = self._key(tenant_id, id)
        if key not in self.rows:
            return None
        self.rows[key] = self.rows[key].model_copy(update=update_data)
        return await self.get(tenant_id, id)

    async def delete(self, tenant_id, id):
        return self.rows.pop(self._key(tenant_id, id), None) is not None

    async def count(self, tenant_id, filter=None):
        return len(await self.list(tenant_id, filter, limit=10_000))


class InMemoryParties(InMemoryRepository):
    id_field = "party_id"

    async def apply_delta(self, tenant_id, party_id, delta, at=None):
        key = self._key(tenant_id, party_id)
        if key not in self.rows:
            raise PartyNotFound(tenant_id, party_id)
        party = self.rows[key]
        self.rows[key] = party.model_copy(update={
            "balance": party.balance + delta,
            "total_transactions": party.total_transactions + 1,
            "last_transaction_at": at or datetime.utcnow(),
        })
        return await self.get(tenant_id, party_id)

    async def set_balance(self, tenant_id, party_id, balance, total_transactions=None):
        key = self._key(tenant_id, party_id)
        if key not in self.rows:
            raise PartyNotFound(tenant_id, party_id)
        update = {"balance": balance}
        if total_transactions is not None:
            update["total_transactions"] = total_transactions
        self.rows[key] = self.rows[key].model_copy(update=update)
        return await self.get(tenant_id, party_id)


class InMemoryDocuments(InMemoryRepository):
    id_field = "document_id"

    async def update_if_unchanged(self, tenant_id, document_id, expected, changes):
        key = self._key(tenant_id, document_id)
        row = self.rows.get(key)
        if row is None or any(getattr(row, f) != v for f, v in expected.items()):
            return None
        self.rows[key] = FinancialDocument(id=row.id, **{**row.model_dump(), **changes})
        return row.model_copy(deep=True)

    async def take(self, tenant_id, document_id):
        return self.rows.pop(self._key(tenant_id, document_id), None)

    async def list_for_party(self, tenant_id, party_id):
        return await self.list(tenant_id, {"party_id": party_id}, limit=10_000)

    async def count_for_party(self, tenant_id, party_id):
        return len(await self.list_for_party(tenant_id, party_id))


class InMemorySales(InMemoryRepository):
    id_field = "sale_id"


class InMemoryTransactions(InMemoryRepository):
    id_field = "summary_id"


@pytest.fixture
def parties():
    return InMemoryParties()

@pytest.fixture
def documents():
    return InMemoryDocuments()

@pytest.fixture
def sales():
    return InMemorySales()

@pytest.fixture
def transactions():
    return InMemoryTransactions()

@pytest.fixture
def ledger(parties, documents):
    return BalanceLedger(parties, documents)

@pytest.fixture
def mirror(transactions):
    return TransactionMirror(transactions)

@pytest.fixture
def supplier():
    return Party(tenant_id=TENANT, party_id="SUP-1", name="Acme Supplies")

@pytest.fixture
def registered_supplier(parties, supplier):
    parties.rows[(TENANT, supplier.party_id)] = supplier
    return supplier

@pytest.fixture
def make_document():
    def _make(kind="purchase", amount="500", status="active", party_id="SUP-1", document_id="DOC-1"):
        return FinancialDocument(
            tenant_id=TENANT,
            document_id=document_id,
            kind=kind,
            party_id=party_id,
            amount=Decimal(amount),
            status=status,
        )
    return _make

@pytest.fixture
def sample_sale():
    return Sale(
        tenant_id=TENANT,
        sale_id="SALE-1",
        total_amount=Decimal("250"),
        payment_status="paid",
        counterparty_name="Walk-in Buyer",
        items=[
            SaleItem(item_name="Rice 5kg", quantity=Decimal("2"), unit_price=Decimal("100")),
            SaleItem(item_name="Sugar", quantity=Decimal("1"), unit_price=Decimal("50")),
        ],
    )

@pytest.fixture
def mock_collection():
    collection = MagicMock()
    collection.find_one = AsyncMock()
    collection.find_one_and_update = AsyncMock()
    collection.find_one_and_delete = AsyncMock()
    collection.insert_one = AsyncMock()
    collection.update_one = AsyncMock()
    collection.delete_one = AsyncMock()
    collection.count_documents = AsyncMock()
    return collection

from bizhub.models.sale import Sale, SalesTransactionSummary
from bizhub.repositories.base import BaseRepository

class SaleRepository(BaseRepository[Sale]):
    id_field = "sale_id"

class TransactionRepository(BaseRepository[SalesTransactionSummary]):
    """Append-only analytics table fed by the sales mirror."""
    id_field = "summary_id"

    async def list(self, tenant_id, filter=None, skip=0, limit=100):
        query = {**(filter or {}), "tenant_id": tenant_id}
        cursor = self.collection.find(query).sort("timestamp", -1).skip(skip).limit(limit)
        docs = await cursor.to_list(length=limit)
        return [self.model_cls.from_mongo(doc) for doc in docs]

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional
from bson import Decimal128
from pymongo import ReturnDocument
from bizhub.errors import PartyNotFound
from bizhub.models.party import Party
from bizhub.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

class PartyRepository(BaseRepository[Party]):
    id_field = "party_id"

    async def apply_delta(self, tenant_id: str, party_id: str, delta: Decimal,
                          at: Optional[datetime] = None) -> Party:
        """
        Add delta to the balance, bump the transaction counter and stamp the
        last transaction time in a single server-side update. Concurrent
        callers cannot overwrite each other's increments.
        """
        at = at or datetime.utcnow()
        doc = await self.collection.find_one_and_update(
            self._key(tenant_id, party_id),
            {
                "$inc": {"balance": Decimal128(delta), "total_transactions": 1},
                "$set": {"last_transaction_at": at, "updated_at": at},
            },
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            raise PartyNotFound(tenant_id, party_id)
        return self.model_cls.from_mongo(doc)

    async def set_balance(self, tenant_id: str, party_id: str, balance: Decimal,
                          total_transactions: Optional[int] = None) -> Party:
        """Overwrite the stored balance. Only the repair pass should call this."""
        fields = {"balance": Decimal128(balance), "updated_at": datetime.utcnow()}
        if total_transactions is not None:
            fields["total_transactions"] = total_transactions
        doc = await self.collection.find_one_and_update(
            self._key(tenant_id, party_id),
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        if not doc:
            raise PartyNotFound(tenant_id, party_id)
        return self.model_cls.from_mongo(doc)

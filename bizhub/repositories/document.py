from typing import Any, Dict, List, Optional
from pymongo import ReturnDocument
from bizhub.models.base import to_bson
from bizhub.models.document import FinancialDocument
from bizhub.repositories.base import BaseRepository

class DocumentRepository(BaseRepository[FinancialDocument]):
    id_field = "document_id"

    async def update_if_unchanged(self, tenant_id: str, document_id: str, expected: Dict[str, Any],
                                  changes: Dict[str, Any]) -> Optional[FinancialDocument]:
        """
        Apply changes only while the expected field values still hold.
        Returns the document as it was before the write, or None if nothing matched.
        """
        doc = await self.collection.find_one_and_update(
            {**to_bson(expected), **self._key(tenant_id, document_id)},
            {"$set": to_bson(changes)},
            return_document=ReturnDocument.BEFORE,
        )
        return self.model_cls.from_mongo(doc) if doc else None

    async def take(self, tenant_id: str, document_id: str) -> Optional[FinancialDocument]:
        """Delete a document and return it as it was at the moment of deletion."""
        doc = await self.collection.find_one_and_delete(self._key(tenant_id, document_id))
        return self.model_cls.from_mongo(doc) if doc else None

    async def list_for_party(self, tenant_id: str, party_id: str) -> List[FinancialDocument]:
        """Every document of the tenant that references the party, in any status."""
        cursor = self.collection.find({"tenant_id": tenant_id, "party_id": party_id})
        docs = await cursor.to_list(length=None)
        return [self.model_cls.from_mongo(doc) for doc in docs]

    async def count_for_party(self, tenant_id: str, party_id: str) -> int:
        return await self.count(tenant_id, {"party_id": party_id})

from typing import Generic, TypeVar, Any, Dict, List, Optional
from motor.motor_asyncio import AsyncIOMotorCollection
from bizhub.models.base import MongoModel, to_bson

T = TypeVar("T", bound=MongoModel)

class BaseRepository(Generic[T]):
    """
    Point CRUD over one collection. Every query is filtered by tenant_id;
    records are addressed by (tenant_id, <id_field>), never by Mongo _id.
    """
    id_field: str = "id"

    def __init__(self, collection: AsyncIOMotorCollection, model_cls: type[T]):
        self.collection = collection
        self.model_cls = model_cls

    def _key(self, tenant_id: str, id: str) -> Dict[str, Any]:
        return {"tenant_id": tenant_id, self.id_field: id}

    async def get(self, tenant_id: str, id: str) -> Optional[T]:
        """Get a record by its tenant-scoped ID."""
        doc = await self.collection.find_one(self._key(tenant_id, id))
        return self.model_cls.from_mongo(doc) if doc else None

    async def list(self, tenant_id: str, filter: Optional[Dict[str, Any]] = None,
                   skip: int = 0, limit: int = 100) -> List[T]:
        """List a tenant's records with optional filter and pagination."""
        query = {**(filter or {}), "tenant_id": tenant_id}
        cursor = self.collection.find(query).sort("created_at", -1).skip(skip).limit(limit)
        docs = await cursor.to_list(length=limit)
        return [self.model_cls.from_mongo(doc) for doc in docs]

    async def create(self, model: T) -> T:
        """Insert a new record."""
        result = await self.collection.insert_one(model.to_mongo())
        model.id = str(result.inserted_id)
        return model

    async def update(self, tenant_id: str, id: str, update_data: Dict[str, Any]) -> Optional[T]:
        """Partially update a record, returning the fresh copy or None if it is gone."""
        await self.collection.update_one(
            self._key(tenant_id, id),
            {"$set": to_bson(update_data)}
        )
        return await self.get(tenant_id, id)

    async def delete(self, tenant_id: str, id: str) -> bool:
        """Delete a record by its tenant-scoped ID."""
        result = await self.collection.delete_one(self._key(tenant_id, id))
        return result.deleted_count > 0

    async def count(self, tenant_id: str, filter: Optional[Dict[str, Any]] = None) -> int:
        """Count a tenant's records matching a filter."""
        return await self.collection.count_documents({**(filter or {}), "tenant_id": tenant_id})

from decimal import Decimal
from typing import Annotated, Any, Dict, Type, TypeVar
from pydantic import BaseModel, BeforeValidator, Field, ConfigDict
from bson import Decimal128, ObjectId

# Helper to handle ObjectId as string
PyObjectId = Annotated[str, BeforeValidator(str)]

T = TypeVar("T", bound="MongoModel")


def to_bson(value: Any) -> Any:
    if isinstance(value, Decimal):
        return Decimal128(value)
    if isinstance(value, dict):
        return {k: to_bson(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_bson(v) for v in value]
    return value


def from_bson(value: Any) -> Any:
    if isinstance(value, Decimal128):
        return value.to_decimal()
    if isinstance(value, dict):
        return {k: from_bson(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_bson(v) for v in value]
    return value


class MongoModel(BaseModel):
    """
    Base model for MongoDB documents with _id handling and serialization helpers.
    Decimals are stored as Decimal128 so balances never pass through binary floats.
    """
    id: PyObjectId | None = Field(default=None, alias="_id", exclude=True)

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        use_enum_values=True,
    )

    @classmethod
    def from_mongo(cls: Type[T], data: Dict[str, Any]) -> T:
        """Convert MongoDB document to Pydantic model."""
        if not data:
            return None
        data = from_bson(dict(data))
        id = data.pop("_id", None)
        return cls(id=id, **data)

    def to_mongo(self, exclude_none: bool = False) -> Dict[str, Any]:
        """Convert Pydantic model to MongoDB document."""
        data = self.model_dump(exclude_none=exclude_none)
        data.pop("id", None)
        return to_bson(data)

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List
from uuid import UUID

# Wire shapes for /receipts. Every receipt field is optional; nothing is
# validated beyond JSON types until the receipt is scored.
class Item(BaseModel):
    model_config = ConfigDict(frozen=True)

    shortDescription: str = ""
    price: str = ""

    @field_validator("shortDescription", "price", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        return "" if v is None else v

class Receipt(BaseModel):
    model_config = ConfigDict(frozen=True)

    retailer: str = ""
    purchaseDate: str = ""
    purchaseTime: str = ""
    total: str = ""
    items: List[Item] = Field(default_factory=list)

    @field_validator("retailer", "purchaseDate", "purchaseTime", "total", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        return "" if v is None else v

    @field_validator("items", mode="before")
    @classmethod
    def _null_as_no_items(cls, v):
        return [] if v is None else v

    def to_json_dict(self) -> dict:
        """Serialize with empty receipt fields omitted; items keep every field."""
        return {k: v for k, v in self.model_dump().items() if v}

class StoredReceipt(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    receipt: Receipt

class SubmitResponse(BaseModel):
    id: str

class PointsResponse(BaseModel):
    points: int

class HealthResponse(BaseModel):
    ok: bool
    receipts: int

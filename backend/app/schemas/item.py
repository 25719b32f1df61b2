from pydantic import BaseModel, Field, ConfigDict, field_validator

from app.core.time_source import TimeSource
from app.models.enums import Category


class ItemBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, examples=["wooden staff"])
    category: Category = Field(examples=[Category.STAFF])


class ItemCreate(ItemBase):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "wooden staff",
                "category": "Staff",
            }
        }
    )

    @field_validator("name")
    @classmethod
    def normalize_non_empty(cls, v: str) -> str:
        normalized = v.strip()
        if not normalized:
            raise ValueError("name must not be blank")
        return normalized

    def to_entity(self, time_source: TimeSource):
        from app.entities.item import ItemEntity

        return ItemEntity.new(self.name, str(self.category), time_source)


class ItemResponse(ItemBase):
    id: int
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "wooden staff",
                "category": "Staff",
            }
        },
    )


class ErrorResponse(BaseModel):
    error: str
    model_config = ConfigDict(
        json_schema_extra={"example": {"error": "Item already exists: wooden staff"}}
    )

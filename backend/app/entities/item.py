from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.core.errors import InvalidCategory
from app.core.time_source import TimeSource
from app.models.enums import Category
from app.schemas.item import ItemResponse


class ItemEntity(BaseModel):
    """Persistence-shaped item, before or after it is saved.

    ``id`` stays ``None`` until the repository has stored the row. Instances
    are frozen: every step of the create workflow builds a new one.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int | None = None
    name: str
    category: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def new(cls, name: str, category: str, time_source: TimeSource) -> "ItemEntity":
        now = time_source.now()
        return cls(id=None, name=name, category=category, created_at=now, updated_at=now)

    def category_of(self) -> Category | None:
        # Exact match only: "staff" or " Staff" are unknown categories.
        for category in Category:
            if category.value == self.category:
                return category
        return None

    def to_model(self) -> ItemResponse:
        if self.id is None:
            raise ValueError("to_model() requires a persisted entity")
        category = self.category_of()
        if category is None:
            raise InvalidCategory(self.category)
        return ItemResponse(id=self.id, name=self.name, category=category)

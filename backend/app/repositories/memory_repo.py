import threading
from typing import Dict, Optional

from app.entities.item import ItemEntity
from app.repositories.item_repo import DuplicateItemError, ItemRepository


class MemoryItemRepository(ItemRepository):
    """
    Simula BD en memoria.
    Same contract as SqlAlchemyItemRepository, including the unique name
    check on insert, so it can stand in for it locally and in tests.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._next_id = 1
        self.items: Dict[int, ItemEntity] = {}

    def find_by_name(self, name: str) -> Optional[ItemEntity]:
        with self._lock:
            for item in self.items.values():
                if item.name == name:
                    return item
        return None

    def insert(self, item: ItemEntity) -> int:
        if item.id is not None:
            raise ValueError("insert() expects an entity without id")
        with self._lock:
            if any(existing.name == item.name for existing in self.items.values()):
                raise DuplicateItemError(item.name)
            new_id = self._next_id
            self._next_id += 1
            self.items[new_id] = item.model_copy(update={"id": new_id})
        return new_id

    def find_by_id(self, item_id: int) -> Optional[ItemEntity]:
        with self._lock:
            return self.items.get(item_id)

from abc import ABC, abstractmethod

from app.entities.item import ItemEntity


class StoreError(Exception):
    """Failure reported by the persistence layer."""
    pass


class DuplicateItemError(StoreError):
    """The store rejected an insert because the name is already taken."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"duplicate item name: {name}")


class ItemRepository(ABC):
    """Storage operations used by the item service.

    Lookups return ``None`` when nothing matches; every other failure is
    raised as ``StoreError``.
    """

    @abstractmethod
    def find_by_name(self, name: str) -> ItemEntity | None:
        ...

    @abstractmethod
    def insert(self, item: ItemEntity) -> int:
        """Store ``item`` (which must not have an id yet) and return the generated id."""
        ...

    @abstractmethod
    def find_by_id(self, item_id: int) -> ItemEntity | None:
        ...

import logging

from app.core.errors import AddingItemError, ItemAlreadyExists, ItemNotFound
from app.core.time_source import TimeSource
from app.repositories.item_repo import DuplicateItemError, ItemRepository, StoreError
from app.schemas.item import ItemCreate, ItemResponse


logger = logging.getLogger(__name__)


class ItemService:
    """Create-item workflow over an injected repository and clock."""

    def __init__(self, repository: ItemRepository, time_source: TimeSource):
        self.repository = repository
        self.time_source = time_source

    def add(self, payload: ItemCreate) -> ItemResponse:
        """
        - rechazar nombres ya existentes
        - insertar el item nuevo
        - releer la fila insertada y devolverla como ItemResponse

        Raises ItemAlreadyExists, AddingItemError, ItemNotFound or
        InvalidCategory; store errors never escape unwrapped.
        """
        try:
            existing = self.repository.find_by_name(payload.name)
        except StoreError as exc:
            logger.error("Uniqueness check failed for %r: %s", payload.name, exc)
            raise AddingItemError(exc) from exc
        if existing is not None:
            raise ItemAlreadyExists(payload.name)

        entity = payload.to_entity(self.time_source)

        try:
            new_id = self.repository.insert(entity)
        except DuplicateItemError as exc:
            # Lost the race against a concurrent insert of the same name.
            raise ItemAlreadyExists(payload.name) from exc
        except StoreError as exc:
            logger.error("Insert failed for %r: %s", payload.name, exc)
            raise AddingItemError(exc) from exc
        if new_id is None:
            exc = StoreError("insert did not return an id")
            logger.error("Insert failed for %r: %s", payload.name, exc)
            raise AddingItemError(exc)

        try:
            stored = self.repository.find_by_id(new_id)
        except StoreError as exc:
            logger.error("Re-fetch of item %s failed: %s", new_id, exc)
            raise ItemNotFound(new_id) from exc
        if stored is None:
            logger.error("Item %s missing right after insert", new_id)
            raise ItemNotFound(new_id)

        item = stored.to_model()
        logger.info("Item created: id=%s name=%r category=%s", item.id, item.name, item.category)
        return item

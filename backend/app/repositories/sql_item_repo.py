import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.entities.item import ItemEntity
from app.models.item import Item
from app.repositories.item_repo import DuplicateItemError, ItemRepository, StoreError


logger = logging.getLogger(__name__)


class SqlAlchemyItemRepository(ItemRepository):
    """ItemRepository over SQLAlchemy; one session per operation."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    def find_by_name(self, name: str) -> ItemEntity | None:
        try:
            with self._session_factory() as db:
                row = db.scalar(select(Item).where(Item.name == name))
                return ItemEntity.model_validate(row) if row else None
        except SQLAlchemyError as exc:
            logger.error("Failed to find item by name %r: %s", name, exc)
            raise StoreError(str(exc)) from exc

    def insert(self, item: ItemEntity) -> int:
        if item.id is not None:
            raise ValueError("insert() expects an entity without id")
        row = Item(
            name=item.name,
            category=item.category,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )
        try:
            with self._session_factory() as db:
                db.add(row)
                try:
                    db.commit()
                except IntegrityError as exc:
                    db.rollback()
                    logger.error("Failed to insert item %r: %s", item.name, exc.orig)
                    raise DuplicateItemError(item.name) from exc
                db.refresh(row)
                new_id = row.id
        except SQLAlchemyError as exc:
            logger.error("Failed to insert item %r: %s", item.name, exc)
            raise StoreError(str(exc)) from exc

        if new_id is None:
            logger.error("Failed to insert item %r: id is missing", item.name)
            raise StoreError("insert did not return an id")
        return new_id

    def find_by_id(self, item_id: int) -> ItemEntity | None:
        try:
            with self._session_factory() as db:
                row = db.get(Item, item_id)
                return ItemEntity.model_validate(row) if row else None
        except SQLAlchemyError as exc:
            logger.error("Failed to find item by id %s: %s", item_id, exc)
            raise StoreError(str(exc)) from exc

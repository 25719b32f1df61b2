import pytest
from sqlalchemy.exc import OperationalError

from app.core.time_source import FixedTimeSource
from app.db import session as db_session
from app.entities.item import ItemEntity
from app.models.item import Item
from app.repositories.item_repo import DuplicateItemError, StoreError
from app.repositories.memory_repo import MemoryItemRepository
from app.repositories.sql_item_repo import SqlAlchemyItemRepository


def _entity(name="wooden staff", category="Staff") -> ItemEntity:
    return ItemEntity.new(name, category, FixedTimeSource())


@pytest.fixture()
def sql_repo(db):
    return SqlAlchemyItemRepository(db_session.SessionLocal)


@pytest.fixture(params=["memory", "sql"])
def repo(request):
    if request.param == "memory":
        return MemoryItemRepository()
    return request.getfixturevalue("sql_repo")


def test_insert_then_find(repo):
    new_id = repo.insert(_entity())

    by_id = repo.find_by_id(new_id)
    by_name = repo.find_by_name("wooden staff")

    assert by_id is not None
    assert by_id.id == new_id
    assert by_id.name == "wooden staff"
    assert by_id.category == "Staff"
    assert by_name.id == new_id


def test_generated_ids_are_distinct(repo):
    first = repo.insert(_entity("wooden staff"))
    second = repo.insert(_entity("iron sword", "Sword"))
    assert first != second


def test_missing_rows_are_none(repo):
    assert repo.find_by_name("nothing") is None
    assert repo.find_by_id(999) is None


def test_duplicate_name_is_rejected(repo):
    repo.insert(_entity())
    with pytest.raises(DuplicateItemError):
        repo.insert(_entity())


def test_insert_rejects_entity_with_id(repo):
    with pytest.raises(ValueError):
        repo.insert(_entity().model_copy(update={"id": 5}))


def test_sql_repo_keeps_unknown_category_text(sql_repo, db):
    db.add(Item(name="longbow", category="Bow"))
    db.commit()

    found = sql_repo.find_by_name("longbow")
    assert found.category == "Bow"
    assert found.category_of() is None


def test_sql_repo_wraps_driver_errors():
    class BrokenSession:
        def __enter__(self):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        def __exit__(self, *exc):
            return False

    repo = SqlAlchemyItemRepository(lambda: BrokenSession())

    with pytest.raises(StoreError):
        repo.find_by_name("wooden staff")
    with pytest.raises(StoreError):
        repo.insert(_entity())
    with pytest.raises(StoreError):
        repo.find_by_id(1)


def test_memory_repo_does_not_share_stored_instance():
    repo = MemoryItemRepository()
    entity = _entity()
    new_id = repo.insert(entity)

    assert entity.id is None
    assert repo.find_by_id(new_id).id == new_id

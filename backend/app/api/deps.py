from fastapi import Request

from app.core.time_source import SystemTimeSource
from app.db import session as db_session
from app.repositories.sql_item_repo import SqlAlchemyItemRepository
from app.services.item_service import ItemService


def build_item_service() -> ItemService:
    repository = SqlAlchemyItemRepository(db_session.SessionLocal)
    return ItemService(repository, SystemTimeSource())


def get_item_service(request: Request) -> ItemService:
    return request.app.state.item_service

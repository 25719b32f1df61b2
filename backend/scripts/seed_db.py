from app.api.deps import build_item_service
from app.core.errors import ItemAlreadyExists
from app.models.enums import Category
from app.schemas.item import ItemCreate


DEFAULT_ITEMS = [
    ("wooden staff", Category.STAFF),
    ("oak staff", Category.STAFF),
    ("crystal staff", Category.STAFF),
    ("iron sword", Category.SWORD),
    ("steel sword", Category.SWORD),
]


def run_seed():
    service = build_item_service()

    for name, category in DEFAULT_ITEMS:
        try:
            item = service.add(ItemCreate(name=name, category=category))
        except ItemAlreadyExists:
            print("- ya existe:", name)
            continue
        print("✅ Item creado:", item.id, item.name, item.category)


if __name__ == "__main__":
    run_seed()

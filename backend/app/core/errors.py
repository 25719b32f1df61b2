from fastapi import status


class ItemError(Exception):
    """Domain errors raised while creating an item.

    Each subclass carries its own context and the HTTP status it maps to;
    ``str(err)`` is the message returned to the caller.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class InvalidCategory(ItemError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Invalid category: {category}")


class ItemAlreadyExists(ItemError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Item already exists: {name}")


class AddingItemError(ItemError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Failed to add item: {cause}")


class ItemNotFound(ItemError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Item not found: {item_id}")

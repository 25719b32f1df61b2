import enum


class Category(enum.Enum):
    STAFF = "Staff"
    SWORD = "Sword"

    def __str__(self) -> str:
        return self.value

from abc import ABC, abstractmethod
from datetime import datetime, timezone


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class TimeSource(ABC):
    """Supplies the timestamps stamped on new entities."""

    @abstractmethod
    def now(self) -> datetime:
        ...


class SystemTimeSource(TimeSource):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedTimeSource(TimeSource):
    """Always returns the same instant (the Unix epoch unless told otherwise)."""

    def __init__(self, instant: datetime = EPOCH):
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class BaseRepository(ABC, Generic[T]):
    """Minimal repository interface."""

    @abstractmethod
    def find_by_id(self, entity_id: str) -> Optional[T]:
        ...

    @abstractmethod
    def find_all(self) -> List[T]:
        ...


__all__ = ["BaseRepository"]

"""Base repository with common CRUD operations over a document collection"""
import logging
from typing import Generic, TypeVar, Optional, List, Iterable

from pydantic import BaseModel

from taskdeck.errors import NotFoundError, ValidationError
from taskdeck.models.document import Document

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Base repository providing common list operations.

    A repository is bound to one loaded `Document` (the unit of work of a
    `DocumentStore.transaction()`); it mutates the in-memory copy and the
    store writes the whole document back when the transaction ends.
    """

    def __init__(self, document: Document, collection: str, kind: str):
        self._document = document
        self._collection = collection
        self._kind = kind

    @property
    def _items(self) -> List[T]:
        return getattr(self._document, self._collection)

    def _index_of(self, id: str) -> Optional[int]:
        for index, item in enumerate(self._items):
            if item.id == id:
                return index
        return None

    @staticmethod
    def _require_id(id: Optional[str]) -> str:
        if not id:
            raise ValidationError("id is required")
        return id

    def find_by_id(self, id: str) -> Optional[T]:
        """Find a single record by ID"""
        index = self._index_of(id)
        return None if index is None else self._items[index]

    def get(self, id: Optional[str]) -> T:
        """Find a single record by ID or raise NotFoundError"""
        id = self._require_id(id)
        item = self.find_by_id(id)
        if item is None:
            raise NotFoundError(self._kind, id)
        return item

    def find_all(self) -> List[T]:
        """All records in stored order"""
        return list(self._items)

    def find_by_ids(self, ids: Iterable[str]) -> List[T]:
        """Records for every id, in the given order; NotFoundError on the first unknown id"""
        return [self.get(id) for id in ids]

    def count(self) -> int:
        return len(self._items)

    def create(self, item: T) -> T:
        """Append a new record"""
        if self.find_by_id(item.id) is not None:
            raise ValidationError(f"{self._kind} {item.id} already exists")
        self._items.append(item)
        return item

    def update(self, item: T) -> T:
        """Replace a record by ID"""
        self._require_id(item.id)
        index = self._index_of(item.id)
        if index is None:
            raise NotFoundError(self._kind, item.id)
        self._items[index] = item
        return item

    def delete(self, id: Optional[str]) -> T:
        """Remove a record by ID and return it"""
        id = self._require_id(id)
        index = self._index_of(id)
        if index is None:
            raise NotFoundError(self._kind, id)
        return self._items.pop(index)

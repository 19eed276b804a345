"""Abstract document collection used by the User and Task services."""

from abc import ABC, abstractmethod
from typing import Any

Document = dict[str, Any]
SortSpec = list[tuple[str, int]]


class DocumentCollection(ABC):
    """A single collection of the document store.

    Implementations give per-document atomicity only: there is no
    transaction spanning several calls or several collections.

    Ids are passed as strings; a structurally invalid id never matches a
    document and never raises. Driver failures surface as
    ``StoreFailureError``; unique index violations as ``InvalidArgumentError``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Collection name."""
        ...

    @abstractmethod
    async def find_async(
        self,
        filter: Document | None = None,
        projection: Document | None = None,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int = 0,
    ) -> list[Document]:
        """Find documents. ``limit=0`` means unbounded."""
        ...

    @abstractmethod
    async def count_async(self, filter: Document | None = None) -> int:
        """Count documents matching ``filter``."""
        ...

    @abstractmethod
    async def get_async(self, id: str, projection: Document | None = None) -> Document | None:
        """Get a document by id."""
        ...

    @abstractmethod
    async def find_one_async(self, filter: Document) -> Document | None:
        """Get the first document matching ``filter``."""
        ...

    @abstractmethod
    async def insert_async(self, document: Document) -> Document:
        """Insert a document and return it with its store-assigned ``_id``."""
        ...

    @abstractmethod
    async def update_async(self, id: str, changes: Document) -> Document | None:
        """Set ``changes`` on a document and return the updated document, or None if missing."""
        ...

    @abstractmethod
    async def remove_async(self, id: str) -> Document | None:
        """Delete a document and return it, or None if missing."""
        ...

    @abstractmethod
    async def update_many_async(self, filter: Document, changes: Document) -> int:
        """Set ``changes`` on every matching document. Returns the modified count."""
        ...

    @abstractmethod
    async def add_to_set_async(self, id: str, field: str, value: Any) -> bool:
        """Add ``value`` to the array ``field`` unless present. Returns whether a document matched."""
        ...

    @abstractmethod
    async def pull_async(self, id: str, field: str, value: Any) -> bool:
        """Remove every occurrence of ``value`` from the array ``field``. Returns whether a document matched."""
        ...

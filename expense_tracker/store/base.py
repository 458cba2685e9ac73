"""Interface the rest of the app needs from a remote document store."""
from abc import ABC, abstractmethod
from collections.abc import Callable


class StoreError(Exception):
    """A remote operation failed (connectivity, permission, bad response)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class DocumentNotFoundError(StoreError):
    def __init__(self, doc_id: str):
        super().__init__(f"Document '{doc_id}' does not exist.")
        self.doc_id = doc_id


class Subscription(ABC):
    """Handle returned by DocumentStore.subscribe()."""

    @abstractmethod
    def close(self) -> None:
        """Stop delivering change notifications. Safe to call twice."""


class DocumentStore(ABC):
    """One collection of schemaless documents.

    Records are plain dicts. Records returned by fetch_all() carry their
    store-assigned identifier under the "id" key.
    """

    @abstractmethod
    def fetch_all(self) -> list[dict]:
        ...

    @abstractmethod
    def insert(self, record: dict) -> str:
        """Create a document and return its new id."""

    @abstractmethod
    def delete_by_id(self, doc_id: str) -> None:
        """Raises DocumentNotFoundError when doc_id is unknown."""

    @abstractmethod
    def subscribe(self, on_change: Callable[[], None]) -> Subscription:
        """Call on_change() asynchronously, at least once, whenever the
        collection changes. No payload: consumers reload the full set."""

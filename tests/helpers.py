"""Test doubles and builders shared across test modules."""

from collections.abc import Callable

from expense_tracker.models.transaction import Transaction
from expense_tracker.store.base import DocumentNotFoundError, DocumentStore, StoreError, Subscription


class FakeSubscription(Subscription):
    def __init__(self, store: "FakeStore", on_change: Callable[[], None]):
        self._store = store
        self.on_change = on_change
        self.closed = False

    def close(self) -> None:
        self.closed = True
        if self in self._store.subscriptions:
            self._store.subscriptions.remove(self)


class FakeStore(DocumentStore):
    """In-memory collection with switchable failures."""

    def __init__(self, records: list[dict] | None = None):
        self._docs: list[dict] = []
        self._next_id = 1
        self.fail_with: StoreError | None = None
        self.fail_fetch_with: StoreError | None = None
        self.subscriptions: list[FakeSubscription] = []
        self.fetch_count = 0
        for record in records or []:
            self.seed(record)

    def seed(self, record: dict) -> str:
        doc = dict(record)
        doc.setdefault("id", f"doc-{self._next_id}")
        self._next_id += 1
        self._docs.append(doc)
        return doc["id"]

    def ids(self) -> set[str]:
        return {doc["id"] for doc in self._docs}

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    def fetch_all(self) -> list[dict]:
        self._check()
        if self.fail_fetch_with is not None:
            raise self.fail_fetch_with
        self.fetch_count += 1
        return [dict(doc) for doc in self._docs]

    def insert(self, record: dict) -> str:
        self._check()
        doc_id = self.seed(record)
        self.notify()
        return doc_id

    def delete_by_id(self, doc_id: str) -> None:
        self._check()
        for doc in self._docs:
            if doc["id"] == doc_id:
                self._docs.remove(doc)
                self.notify()
                return
        raise DocumentNotFoundError(doc_id)

    def subscribe(self, on_change: Callable[[], None]) -> Subscription:
        sub = FakeSubscription(self, on_change)
        self.subscriptions.append(sub)
        return sub

    def notify(self):
        for sub in list(self.subscriptions):
            sub.on_change()


def make_record(
    amount: float,
    type_: str,
    category: str,
    date_str: str,
    description: str = "Test entry",
    **extra,
) -> dict:
    record = {
        "amount": amount,
        "type": type_,
        "category": category,
        "date": date_str,
        "description": description,
        "createdAt": "2025-01-01T00:00:00.000Z",
    }
    record.update(extra)
    return record


def make_tx(
    tx_id: str,
    amount: float,
    type_: str,
    category: str,
    date_str: str = "2025-01-01",
    description: str = "Test entry",
) -> Transaction:
    return Transaction(
        id=tx_id,
        amount=amount,
        type=type_,
        category=category,
        date=date_str,
        description=description,
    )

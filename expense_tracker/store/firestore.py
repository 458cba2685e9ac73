"""Cloud Firestore REST client for the transactions collection."""
import threading
from collections.abc import Callable
from typing import Any

import requests

from expense_tracker.store.base import (
    DocumentNotFoundError,
    DocumentStore,
    StoreError,
    Subscription,
)
from expense_tracker.utils.constants import COLLECTION_NAME
from expense_tracker.utils.logging_setup import get_logger

logger = get_logger(__name__)


def encode_value(value: Any) -> dict[str, Any]:
    """Wrap a Python value in Firestore's typed JSON representation."""
    # bool first: bool is a subclass of int
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    raise TypeError(f"Unsupported field type: {type(value).__name__}")


def decode_value(value: dict[str, Any]) -> Any:
    """Unwrap one Firestore typed value. Unknown kinds decode to None."""
    if "stringValue" in value:
        return value["stringValue"]
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "integerValue" in value:
        return int(value["integerValue"])
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "timestampValue" in value:
        return value["timestampValue"]
    return None


def encode_fields(record: dict[str, Any]) -> dict[str, Any]:
    return {key: encode_value(val) for key, val in record.items() if key != "id"}


def document_id(name: str) -> str:
    """'projects/p/databases/(default)/documents/transactions/abc' → 'abc'."""
    return name.rsplit("/", 1)[-1]


def decode_document(doc: dict[str, Any]) -> dict[str, Any]:
    record = {key: decode_value(val) for key, val in doc.get("fields", {}).items()}
    record["id"] = document_id(doc["name"])
    return record


class _PollingSubscription(Subscription):
    """Polls the collection and fires on_change when its contents differ."""

    JOIN_TIMEOUT = 2.0

    def __init__(
        self,
        list_documents: Callable[[], list[dict[str, Any]]],
        on_change: Callable[[], None],
        interval: float,
        on_stop: Callable[[], None] | None = None,
    ):
        self._list_documents = list_documents
        self._on_change = on_change
        self._interval = interval
        self._stop = threading.Event()
        self._last: frozenset | None = None
        self._thread: threading.Thread | None = None
        self._on_stop = on_stop

    def start(self) -> "_PollingSubscription":
        self._thread = threading.Thread(
            target=self._run, name="firestore-watch", daemon=True
        )
        self._thread.start()
        return self

    def _fingerprint(self) -> frozenset:
        return frozenset(
            (doc["name"], doc.get("updateTime", "")) for doc in self._list_documents()
        )

    def poll_once(self) -> bool:
        """Returns True when a change was detected (and on_change fired)."""
        current = self._fingerprint()
        changed = self._last is not None and current != self._last
        self._last = current
        if changed:
            self._on_change()
        return changed

    def _run(self):
        try:
            while not self._stop.is_set():
                try:
                    self.poll_once()
                except StoreError as e:
                    logger.error("Change watch failed, retrying in %ss: %s", self._interval, e)
                self._stop.wait(self._interval)
        finally:
            self._release()

    def _release(self):
        on_stop, self._on_stop = self._on_stop, None
        if on_stop is not None:
            on_stop()

    def close(self) -> None:
        """Stop polling and wait briefly for an in-flight poll to finish."""
        self._stop.set()
        thread = self._thread
        if thread is None:
            self._release()
        elif thread is not threading.current_thread():
            thread.join(timeout=self.JOIN_TIMEOUT)


class FirestoreStore(DocumentStore):
    """Client for one Firestore collection over the REST API."""

    BASE_URL = "https://firestore.googleapis.com/v1"
    PAGE_SIZE = 300

    def __init__(
        self,
        project_id: str,
        collection: str = COLLECTION_NAME,
        database: str = "(default)",
        api_key: str | None = None,
        timeout: float = 10.0,
        poll_interval: float = 5.0,
        session: requests.Session | None = None,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        if not project_id:
            raise ValueError("A Firestore project id is required.")
        self.project_id = project_id
        self.collection = collection
        self._api_key = api_key
        self._timeout = timeout
        self._poll_interval = poll_interval
        self._collection_url = (
            f"{self.BASE_URL}/projects/{project_id}/databases/{database}"
            f"/documents/{collection}"
        )
        self._session_factory = session_factory
        self._session = session or self._new_session()

    def _new_session(self) -> requests.Session:
        session = self._session_factory()
        session.headers.update({"Content-Type": "application/json"})
        return session

    def _request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        session: requests.Session | None = None,
    ) -> dict[str, Any]:
        """Make an API request; every failure surfaces as StoreError."""
        params = dict(params or {})
        if self._api_key:
            params["key"] = self._api_key
        try:
            response = (session or self._session).request(
                method, url, params=params, json=json, timeout=self._timeout
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise StoreError(f"{method} {self.collection} failed: {e}", status) from e
        except requests.RequestException as e:
            raise StoreError(f"{method} {self.collection} failed: {e}") from e
        if not response.content:
            return {}
        try:
            return response.json()  # type: ignore[no-any-return]
        except ValueError as e:
            raise StoreError(f"{method} {self.collection}: malformed response") from e

    def _list_documents(self, session: requests.Session | None = None) -> list[dict[str, Any]]:
        documents: list[dict[str, Any]] = []
        params: dict[str, Any] = {"pageSize": self.PAGE_SIZE}
        while True:
            result = self._request("GET", self._collection_url, params=params, session=session)
            documents.extend(result.get("documents", []))
            token = result.get("nextPageToken")
            if not token:
                return documents
            params = {"pageSize": self.PAGE_SIZE, "pageToken": token}

    def fetch_all(self) -> list[dict[str, Any]]:
        return [decode_document(doc) for doc in self._list_documents()]

    def insert(self, record: dict[str, Any]) -> str:
        result = self._request(
            "POST", self._collection_url, json={"fields": encode_fields(record)}
        )
        name = result.get("name")
        if not name:
            raise StoreError(f"POST {self.collection}: response has no document name")
        return document_id(name)

    def delete_by_id(self, doc_id: str) -> None:
        if not doc_id:
            raise DocumentNotFoundError(doc_id)
        try:
            self._request(
                "DELETE",
                f"{self._collection_url}/{doc_id}",
                params={"currentDocument.exists": "true"},
            )
        except StoreError as e:
            if e.status_code == 404:
                raise DocumentNotFoundError(doc_id) from e
            raise

    def subscribe(self, on_change: Callable[[], None]) -> Subscription:
        """The watcher polls on its own session; UI worker threads use the shared one."""
        watch_session = self._new_session()
        return _PollingSubscription(
            lambda: self._list_documents(watch_session),
            on_change,
            self._poll_interval,
            on_stop=watch_session.close,
        ).start()

from collections.abc import Callable

from expense_tracker.models.transaction import NewTransaction, Transaction
from expense_tracker.services.derivation import LedgerView, derive_view
from expense_tracker.store.base import DocumentStore, StoreError, Subscription
from expense_tracker.utils.constants import TRANSACTION_TYPES
from expense_tracker.utils.date_helpers import format_date, parse_date
from expense_tracker.utils.logging_setup import get_logger

logger = get_logger(__name__)

Listener = Callable[[LedgerView], None]


def record_to_model(record: dict) -> Transaction | None:
    """Map a store record to a Transaction; None if it is not a valid one.

    Dates written by other clients as 2025-1-5 or 2025/01/05 are rewritten
    to YYYY-MM-DD so they sort and filter like everything else.
    """
    try:
        amount = float(record["amount"])
        day = parse_date(str(record["date"]))
        if day is None:
            return None
        tx = Transaction(
            id=str(record["id"]),
            amount=amount,
            type=str(record["type"]),
            category=str(record.get("category") or ""),
            date=format_date(day),
            description=str(record.get("description") or ""),
            created_at=str(record.get("createdAt") or ""),
        )
    except (KeyError, TypeError, ValueError):
        return None
    if not tx.id or tx.amount <= 0 or tx.type not in TRANSACTION_TYPES:
        return None
    return tx


class TransactionRepository:
    """Owns the authoritative transaction set and the category filter.

    Every write goes to the store first and is followed by a full reload,
    so the in-memory set always mirrors the store as of the last fetch.
    A failed store call raises StoreError before any state changes. When a
    write succeeds but the reload after it fails, the write still counts:
    add/delete return normally and the reload failure is kept in load_error.

    The filter is reset only when a reload asks for it (the initial load);
    reloads after add, delete and remote changes keep the user's selection.
    """

    def __init__(self, store: DocumentStore):
        self._store = store
        self._transactions: list[Transaction] = []
        self._category: str | None = None
        self._view = derive_view([], None)
        self._listeners: list[Listener] = []
        self._subscription: Subscription | None = None
        self._load_error: StoreError | None = None

    # ── State ─────────────────────────────────────────────────────────────────

    @property
    def transactions(self) -> list[Transaction]:
        return list(self._transactions)

    @property
    def load_error(self) -> StoreError | None:
        """Failure of the most recent reload that followed a write, if any."""
        return self._load_error

    @property
    def category_filter(self) -> str | None:
        return self._category

    def view(self) -> LedgerView:
        return self._view

    def categories(self) -> list[str]:
        return sorted({tx.category for tx in self._transactions})

    def add_listener(self, listener: Listener):
        self._listeners.append(listener)

    def _recompute(self):
        self._view = derive_view(self._transactions, self._category)
        for listener in list(self._listeners):
            listener(self._view)

    # ── Reload ────────────────────────────────────────────────────────────────

    def fetch_snapshot(self) -> list[Transaction]:
        """Fetch and decode the whole collection, newest date first.

        Touches no state, so it is safe to call from a worker thread.
        Transactions sharing a date keep the order the store returned them in.
        """
        try:
            records = self._store.fetch_all()
        except StoreError:
            logger.exception("Error loading transactions")
            raise
        snapshot = []
        for record in records:
            tx = record_to_model(record)
            if tx is None:
                logger.warning("Skipping malformed document %r", record.get("id"))
                continue
            snapshot.append(tx)
        snapshot.sort(key=lambda t: t.date, reverse=True)
        return snapshot

    def apply_snapshot(self, snapshot: list[Transaction], reset_filter: bool = False) -> LedgerView:
        self._transactions = list(snapshot)
        self._load_error = None
        if reset_filter:
            self._category = None
        self._recompute()
        logger.info(
            "Loaded %d transactions (%d shown)",
            len(self._transactions), len(self._view.filtered),
        )
        return self._view

    def reload(self, reset_filter: bool = False) -> LedgerView:
        return self.apply_snapshot(self.fetch_snapshot(), reset_filter=reset_filter)

    # ── Mutations ─────────────────────────────────────────────────────────────

    def insert(self, candidate: NewTransaction) -> str:
        """Store-only half of add(); does not reload."""
        try:
            tx_id = self._store.insert(candidate.to_record())
        except StoreError:
            logger.exception("Error adding transaction")
            raise
        logger.info("Transaction added with id %s", tx_id)
        return tx_id

    def remove(self, tx_id: str):
        """Store-only half of delete(); does not reload."""
        try:
            self._store.delete_by_id(tx_id)
        except StoreError:
            logger.exception("Error deleting transaction %s", tx_id)
            raise
        logger.info("Transaction deleted: %s", tx_id)

    def _reload_after_write(self):
        try:
            self.reload()
        except StoreError as e:
            self._load_error = e

    def add(self, candidate: NewTransaction) -> str:
        """Insert a validated candidate, then reload to pick it up.

        Raises StoreError only when the insert itself fails.
        """
        tx_id = self.insert(candidate)
        self._reload_after_write()
        return tx_id

    def delete(self, tx_id: str):
        self.remove(tx_id)
        self._reload_after_write()

    def set_filter(self, category: str | None) -> LedgerView:
        self._category = category or None
        self._recompute()
        logger.debug("Filtered to %d transactions", len(self._view.filtered))
        return self._view

    # ── Session lifecycle ─────────────────────────────────────────────────────

    def start_sync(self, on_change: Callable[[], None]):
        """Subscribe to remote changes. on_change runs on the store's thread."""
        if self._subscription is None:
            self._subscription = self._store.subscribe(on_change)

    def close(self):
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None
        self._listeners.clear()

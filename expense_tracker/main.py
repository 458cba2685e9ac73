import sys

import customtkinter as ctk

from expense_tracker.services.export_service import ExportService
from expense_tracker.services.transaction_repository import TransactionRepository
from expense_tracker.store.firestore import FirestoreStore
from expense_tracker.ui.app_window import AppWindow
from expense_tracker.utils.app_config import config_path, get_app_config
from expense_tracker.utils.logging_setup import configure_logging, get_logger

logger = get_logger(__name__)


def main():
    # ── Bootstrap: config + logging ──────────────────────────────────────────
    config = get_app_config()
    configure_logging(config.log_level)

    if not config.project_id:
        logger.error("No Firestore project configured. Set \"project_id\" in %s", config_path())
        return 1

    # ── Store + repository ───────────────────────────────────────────────────
    store = FirestoreStore(
        project_id=config.project_id,
        collection=config.collection,
        database=config.database,
        api_key=config.api_key,
        timeout=config.request_timeout,
        poll_interval=config.poll_interval,
    )
    repository = TransactionRepository(store)

    # ── Appearance ───────────────────────────────────────────────────────────
    ctk.set_appearance_mode(config.appearance_mode)
    ctk.set_default_color_theme("blue")

    # ── Launch UI ────────────────────────────────────────────────────────────
    app = AppWindow(
        repository=repository,
        export_service=ExportService(date_format=config.date_format),
        currency_symbol=config.currency_symbol,
    )
    app.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())

import threading
from collections.abc import Callable
from typing import Any

from expense_tracker.store.base import StoreError
from expense_tracker.utils.logging_setup import get_logger

logger = get_logger(__name__)

Schedule = Callable[[Callable[[], None]], Any]


def run_in_background(
    schedule: Schedule,
    work: Callable[[], Any],
    on_done: Callable[[Any], None],
    on_error: Callable[[Exception], None],
) -> threading.Thread:
    """Run work() on a daemon thread and hand its outcome back via schedule().

    schedule(callback) must run callback on the UI thread (Tk: after(0, ...)).
    Exactly one of on_done(result) / on_error(exc) is scheduled per call,
    whatever work() raises.
    """

    def run():
        try:
            result = work()
        except StoreError as e:
            # already logged by the repository
            schedule(lambda e=e: on_error(e))
            return
        except Exception as e:
            logger.exception("Background task failed")
            schedule(lambda e=e: on_error(e))
            return
        schedule(lambda: on_done(result))

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return thread

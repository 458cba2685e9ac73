from datetime import date, datetime, timezone

from expense_tracker.utils.constants import DATE_FORMAT, DISPLAY_DATE_FORMAT

# ── Export date format options ────────────────────────────────────────────────

DATE_FORMAT_OPTIONS = ["DD/MM/YYYY", "MM/DD/YYYY", "YYYY-MM-DD", "DD.MM.YYYY"]

_STRFTIME_MAP = {
    "DD/MM/YYYY": "%d/%m/%Y",
    "MM/DD/YYYY": "%m/%d/%Y",
    "YYYY-MM-DD": "%Y-%m-%d",
    "DD.MM.YYYY": "%d.%m.%Y",
}


def today() -> date:
    return date.today()


def today_str() -> str:
    return date.today().strftime(DATE_FORMAT)


def now_iso() -> str:
    """UTC timestamp in ISO-8601, used for createdAt."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_date(date_str: str) -> date | None:
    """Parse a date string in YYYY-MM-DD format, returning None on failure."""
    if not date_str:
        return None
    for fmt in ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d"):
        try:
            return datetime.strptime(date_str.strip(), fmt).date()
        except ValueError:
            continue
    return None


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def is_future(d: date, reference: date | None = None) -> bool:
    """True when d is strictly after the reference day (defaults to today)."""
    return d > (reference or today())


def format_table_date(date_str: str) -> str:
    """'2025-12-26' → '26 Dec 2025'. Unparseable input is returned unchanged."""
    d = parse_date(date_str)
    if d is None:
        return date_str
    return d.strftime(DISPLAY_DATE_FORMAT)


def format_display_date(date_str: str, fmt_key: str = "DD/MM/YYYY") -> str:
    """Convert a YYYY-MM-DD storage string to the user-facing display format."""
    if not date_str:
        return date_str
    d = parse_date(date_str)
    if d is None:
        return date_str
    return d.strftime(_STRFTIME_MAP.get(fmt_key, "%d/%m/%Y"))

"""Bootstrap configuration. Only depends on the logging helpers.

Stores what must be known before the store is opened (Firestore project,
collection, polling cadence) plus display preferences. Config lives in
~/.expense-tracker/config.json unless EXPENSE_TRACKER_CONFIG points elsewhere.
"""
import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from expense_tracker.utils.constants import COLLECTION_NAME
from expense_tracker.utils.logging_setup import get_logger

logger = get_logger(__name__)

CONFIG_DIR = Path.home() / ".expense-tracker"
CONFIG_FILE = CONFIG_DIR / "config.json"
CONFIG_ENV_VAR = "EXPENSE_TRACKER_CONFIG"


@dataclass
class AppConfig:
    project_id: str = ""
    api_key: str | None = None
    database: str = "(default)"
    collection: str = COLLECTION_NAME
    poll_interval: float = 5.0
    request_timeout: float = 10.0
    currency_symbol: str = "₹"
    date_format: str = "DD/MM/YYYY"
    appearance_mode: str = "system"
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict) -> "AppConfig":
        """Unknown keys are ignored so older config files keep loading."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict:
        return asdict(self)


def config_path() -> Path:
    override = os.getenv(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_FILE


def load_config() -> dict:
    """Returns {} on a missing or corrupt file. Never raises."""
    path = config_path()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a JSON object", path)
        return {}
    return data


def save_config(config: dict) -> None:
    """Creates the config folder if needed; atomic write via .tmp + os.replace()."""
    path = config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(".tmp")
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


def get_app_config() -> AppConfig:
    return AppConfig.from_dict(load_config())


def update_config(**changes) -> AppConfig:
    """Merge changes into the saved config and return the result.

    None values are skipped. Unknown keys raise ValueError before anything is written.
    """
    known = {f.name for f in fields(AppConfig)}
    unknown = sorted(set(changes) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    config = load_config()
    config.update({k: v for k, v in changes.items() if v is not None})
    save_config(config)
    logger.info("Saved config to %s", config_path())
    return AppConfig.from_dict(config)

"""Runtime configuration read from the environment (and a local .env file)."""
import logging
import os
from pathlib import Path
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

# Values already present in the environment win over the .env file.
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
if _ENV_PATH.exists():
    load_dotenv(_ENV_PATH)

DB_PATH: str = os.getenv("INVENTORY_DB_PATH", "data/inventory_tracker.db")
TIMEZONE: ZoneInfo = ZoneInfo(os.getenv("INVENTORY_TZ", "UTC"))
DEFAULT_USER: str = os.getenv("INVENTORY_DEFAULT_USER", "Admin")
LOG_LEVEL: str = os.getenv("INVENTORY_LOG_LEVEL", "INFO")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging once; later calls only adjust the level."""
    root = logging.getLogger()
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    if not root.handlers:
        logging.basicConfig(level=resolved, format=LOG_FORMAT)
    else:
        root.setLevel(resolved)

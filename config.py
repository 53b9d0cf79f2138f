import logging
import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Month labels use pandas' English names unless a locale is set (e.g. "es_ES.UTF-8")
LABEL_LOCALE = os.getenv("FINANCE_LABEL_LOCALE") or None
LOG_LEVEL = os.getenv("FINANCE_LOG_LEVEL", "INFO").upper()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Attach a console handler (if none yet) and apply the configured level."""
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel((level or LOG_LEVEL).upper())

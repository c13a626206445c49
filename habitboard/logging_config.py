import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
QUIET_LOGGERS = ("urllib3", "requests", "watchdog")


def configure_logging():
    level_name = os.getenv("DASHBOARD_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("habitboard").setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

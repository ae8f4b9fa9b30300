import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Configure the root logger for the application.

    Uses `LOG_LEVEL` from settings unless an explicit level is given.
    Unknown level names fall back to INFO.
    """
    name = (level or settings.log_level).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        numeric = logging.INFO

    logging.basicConfig(level=numeric, format=LOG_FORMAT)
    logging.getLogger("app").setLevel(numeric)
    # httpx logs full request URLs at INFO, including the appid query parameter
    logging.getLogger("httpx").setLevel(logging.WARNING)

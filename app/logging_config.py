# app/logging_config.py
import logging

from rich.logging import RichHandler

LOG_FORMAT = "%(name)s | %(message)s"
LOG_DATE_FORMAT = "[%Y-%m-%d %H:%M:%S]"


def configure_logging(level: str = "INFO") -> None:
    """Route all application logging through rich. Never log bodies or secrets."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # the request middleware already logs each request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

import logging

from ari.core.config import settings

LOG_FORMAT = "[ARI] %(asctime)s %(levelname)s %(name)s - %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once for the whole application.

    Uvicorn's access log is kept at WARNING so request lines don't drown the
    service logs.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel((level or settings.LOG_LEVEL).upper())

    if not any(getattr(h, "_ari_handler", False) for h in root_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._ari_handler = True
        root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

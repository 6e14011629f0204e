import logging

from meritboard.core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
ROOT_LOGGER_NAME = "meritboard"


def setup_logging() -> logging.Logger:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Avoid duplicate console handlers on reload
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter(LOG_FORMAT))
        ch.setLevel(level)
        logger.addHandler(ch)

    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    base = logging.getLogger(ROOT_LOGGER_NAME)
    return base.getChild(name) if name else base


logger = setup_logging()

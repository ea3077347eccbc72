"""
Logging infrastructure.

Root logging setup for the service plus a helper for loggers handed to
third-party SDKs.
"""
import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once for the whole process.

    Args:
        level: Level name such as "DEBUG" or "INFO"
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for an SDK that expects its own logger object.

    Args:
        name: Logger name

    Returns:
        Logger instance that propagates to the root configuration
    """
    logger = logging.getLogger(name)
    if not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger

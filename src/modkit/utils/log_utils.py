"""Log file setup and the log-callback adapter used by ModInstaller."""
import logging
from pathlib import Path

from ..core.constants import LOG_FILE

LOG_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_file_logging(log_file=None, level=logging.INFO):
    """Attach a file handler to the ``modkit`` logger. Returns the handler."""
    log_file = Path(log_file) if log_file else LOG_FILE
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_file, encoding='utf-8')
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    logger = logging.getLogger("modkit")
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


def logger_callback(logger):
    """Adapt a ``logging.Logger`` to the ``log(message, error=..., info=..., debug=...)`` callback."""
    def log(message, error=False, info=False, warning=False, debug=False, success=False):
        if error:
            logger.error(message)
        elif warning:
            logger.warning(message)
        elif debug:
            logger.debug(message)
        else:
            logger.info(message)
    return log

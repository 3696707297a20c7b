import logging

from .config import Config

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


#-- initialize a logger that writes to stderr and, if configured, to a file
def setup_logger(name: str, log_file: str | None = Config.LOG_FILE, level: str = Config.LOG_LEVEL):
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT)

        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger

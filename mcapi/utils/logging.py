import logging
import os

logger = logging.getLogger('mcapi')
if not logger.handlers:
    handler = logging.StreamHandler()
    fmt = logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s')
    handler.setFormatter(fmt)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)


def get_logger():
    return logger


def configure_logging(log_file=None):
    """Log the package at INFO, also to ``log_file`` when given (stdout stays on)."""
    logger.setLevel(logging.INFO)
    if not log_file:
        return logger
    path = os.path.abspath(log_file)
    for h in logger.handlers:
        if isinstance(h, logging.FileHandler) and h.baseFilename == path:
            return logger
    fh = logging.FileHandler(path, encoding='utf-8')
    fh.setFormatter(logger.handlers[0].formatter)
    logger.addHandler(fh)
    return logger

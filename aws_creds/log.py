import logging
import os


logger = logging.getLogger('aws-creds')
logger.setLevel(logging.INFO)
logger.addHandler(logging.NullHandler())


def reset_logging():
    """drop every handler, leaving the audit log switched off"""

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.addHandler(logging.NullHandler())


def setup_logging(log_file):
    """send the audit log to log_file, replacing any earlier handler"""

    reset_logging()
    os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
    log_handler = logging.FileHandler(log_file, encoding='utf-8')
    log_handler.setFormatter(
        logging.Formatter('%(asctime)s %(levelname)s %(message)s')
    )
    logger.addHandler(log_handler)
    return log_handler

import logging

from fitleague.config import Environment, environment


def create_logger(level: int) -> logging.Logger:
    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(log_format))

    logger_ = logging.getLogger("fitleague")
    logger_.setLevel(level)
    if not logger_.handlers:
        logger_.addHandler(handler)
    return logger_


logger = create_logger(
    logging.DEBUG if environment is Environment.DEVELOPMENT else logging.INFO
)

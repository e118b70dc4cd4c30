import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def prepare_logger(logger_name: str, level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger(logger_name)
    # Calling twice for the same name must not duplicate output
    if not any(getattr(h, "_audit_client", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
        handler._audit_client = True
        logger.addHandler(handler)
    logger.setLevel(level.upper())
    return logger

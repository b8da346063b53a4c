import logging

LOGGER_NAME = "searchbridge"


def get_logger(name: str | None = None) -> logging.Logger:
    if name is None:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def warn(message: str, name: str | None = None) -> None:
    get_logger(name).warning(message)


def debug(message: str, name: str | None = None) -> None:
    get_logger(name).debug(message)

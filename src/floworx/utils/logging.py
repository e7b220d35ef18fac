# floworx/utils/logging.py
import logging
import sys

from pythonjsonlogger import jsonlogger

from ..config import Settings, get_settings


class ContextFilter(logging.Filter):
    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def filter(self, record):
        # Callers pass these through `extra=`; default to None if absent
        if not hasattr(record, "request_id"):
            record.request_id = None
        if not hasattr(record, "user_id"):
            record.user_id = None
        record.service = self.service_name
        return True


base_format = "%(asctime)s %(levelname)s %(service)s %(name)s %(message)s %(user_id)s %(request_id)s"
text_format = "%(asctime)s %(levelname)s [%(name)s] %(message)s (user_id=%(user_id)s)"

_HANDLER_NAME = "floworx-stdout"


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Install the stdout handler on the package logger. Safe to call repeatedly."""
    settings = settings or get_settings()

    logger = logging.getLogger("floworx")
    logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

    # Replace a previously installed handler instead of stacking duplicates
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.addFilter(ContextFilter(settings.service_name))
    if settings.log_json:
        handler.setFormatter(jsonlogger.JsonFormatter(base_format))
    else:
        handler.setFormatter(logging.Formatter(text_format))
    logger.addHandler(handler)

    return logger

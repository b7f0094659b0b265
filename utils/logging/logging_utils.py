"""
Logging configuration and structured event helpers.
"""
import json
import logging
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

# Attributes every LogRecord carries; anything else was passed via `extra`
_RESERVED_ATTRS = set(vars(logging.LogRecord('', 0, '', 0, '', None, None))) | {'message', 'asctime'}


class CustomJSONFormatter(logging.Formatter):
    """
    Format log records as single-line JSON documents.

    Values passed through ``extra`` are included as top-level keys.
    """

    def format(self, record):
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage()
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith('_'):
                payload[key] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def setup_logging(app):
    """
    Set up application logging from the Flask config.

    Uses LOG_LEVEL and LOG_FORMAT, and switches to JSON output when LOG_JSON is set.
    """
    log_level = str(app.config.get('LOG_LEVEL', 'INFO')).upper()
    log_format = app.config.get(
        'LOG_FORMAT',
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    handler = logging.StreamHandler()
    if app.config.get('LOG_JSON', False):
        handler.setFormatter(CustomJSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(log_format))

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, log_level, logging.INFO))

    logger.info(f"Logging initialized with level {log_level}")


def log_event(event_type, level=logging.INFO, **details):
    """
    Log a named application event with structured details.

    Args:
        event_type (str): Short event name, e.g. 'payroll_processed'
        level (int): Logging level
        **details: Extra fields attached to the record
    """
    extra = {"event_type": event_type}
    extra.update(details)
    logging.getLogger('payroll.events').log(level, event_type, extra=extra)

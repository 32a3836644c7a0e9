"""
Log setup for the web process and the scan script.

LOG_FORMAT=json emits one JSON object per line so a scan can be followed in a
log aggregator by scan_id, salesperson_id, lead_id or rule. Those fields come
from `extra=` on the scanner's log calls and are omitted when absent.
"""
import json
import logging
import os
import sys
from datetime import datetime, timezone

# Keys the scanner passes through `extra=`
CONTEXT_FIELDS = ('scan_id', 'salesperson_id', 'lead_id', 'rule')

# Request and driver chatter drowns out the per-lead lines at INFO
_QUIET_LOGGERS = ('urllib3', 'requests', 'sqlalchemy.engine', 'redis')

TEXT_FORMAT = '[%(asctime)s] %(levelname)s %(name)s — %(message)s'


class JSONFormatter(logging.Formatter):

    def format(self, record):
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value
        if record.exc_info and record.exc_info[0] is not None:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(app=None):
    """
    Replace the root handlers with one stderr handler.

    LOG_LEVEL (default INFO) and LOG_FORMAT ("text" or "json") are read on
    every call so the scan script and create_app() can both call it.
    """
    level = getattr(logging, os.getenv('LOG_LEVEL', 'INFO').upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if os.getenv('LOG_FORMAT', 'text').lower() == 'json':
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

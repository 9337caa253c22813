"""JSON log output for mmpolicy.

Each record becomes one JSON object on one line. Values passed with
``extra=`` are gathered under ``context``, except for the keys in
``PROMOTED_KEYS``, which are lifted to the top level so that all records of
one policy run can be selected with a single key.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes set on every LogRecord; anything else came from ``extra``
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", None, None))
) | {"message", "asctime"}

PROMOTED_KEYS = ("policy", "command")


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    A failed engine run is logged as::

        {"timestamp": "2026-10-18T09:12:03.512+00:00", "level": "ERROR",
         "logger": "mmpolicy.executor.mmapplypolicy", "policy": "size",
         "message": "mmapplypolicy returned non-zero exit code",
         "context": {"returncode": 2, "elapsed_seconds": 1.204}}

    Values that JSON cannot represent, such as paths, are written with
    ``str()``.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
        }

        context = _extra_fields(record)
        for key in PROMOTED_KEYS:
            if key in context:
                entry[key] = context.pop(key)

        entry["message"] = record.getMessage()
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack"] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=str)

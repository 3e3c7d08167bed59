"""
Access-log filter for uvicorn.

Hosting shells and tunnels poll /api/health continuously; those lines are
dropped from the access log.
"""

import logging

EXCLUDED_PATHS = frozenset({"/api/health", "/favicon.ico"})


class HealthCheckFilter(logging.Filter):
    """Drop uvicorn access records for EXCLUDED_PATHS."""

    def filter(self, record: logging.LogRecord) -> bool:
        return _request_path(record) not in EXCLUDED_PATHS


def _request_path(record: logging.LogRecord) -> str | None:
    """
    Path of the request an access record describes, without the query string.

    uvicorn passes (client, method, path, http_version, status) as args;
    other records fall back to the '"METHOD PATH PROTOCOL"' part of the message.
    """
    if isinstance(record.args, tuple) and len(record.args) == 5:
        path = str(record.args[2])
    else:
        request_line = record.getMessage().partition('"')[2].partition('"')[0]
        parts = request_line.split(" ")
        if len(parts) < 2:
            return None
        path = parts[1]

    return path.split("?", 1)[0]

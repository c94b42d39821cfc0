"""Unified logging utilities for stdout2prom.

stdout is the pass-through stream, so every console handler installed here
writes to stderr.
"""
from __future__ import annotations

import json
import logging
import os
import sys
import time

from .env_flags import is_truthy_env

DEFAULT_FORMAT = '%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s'
# Minimal console format (message only) used for cleaner terminal output.
MINIMAL_CONSOLE_FORMAT = '%(message)s'

SUPPRESSED_LOGGERS = [
    'urllib3', 'prometheus_client',
]


class JsonFormatter(logging.Formatter):
    """Single-line JSON records for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            'ts': getattr(record, 'created', time.time()),
            'level': record.levelname,
            'logger': record.name,
            'thread': record.threadName,
            'msg': record.getMessage(),
        }
        metric = getattr(record, 'metric', None)
        if metric is not None:
            payload['metric'] = metric
        if record.exc_info:
            payload['exc_info'] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _close_handlers(root: logging.Logger) -> None:
    for h in root.handlers[:]:
        root.removeHandler(h)
        try:
            h.flush()
            h.close()
        except (OSError, ValueError):
            pass


def setup_logging(level: str = 'INFO', log_file: str | None = None, fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """Configure root logging.

    Console handler: message-only format by default. STDOUT2PROM_VERBOSE_CONSOLE=1
    restores DEFAULT_FORMAT, STDOUT2PROM_JSON_LOGS=1 switches to one JSON object
    per record. An explicit fmt argument beats both env toggles.

    File handler (if enabled) always uses full DEFAULT_FORMAT for diagnostics.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(log_level)
    # Remove existing handlers to avoid duplication on re-init
    _close_handlers(root)

    if fmt != DEFAULT_FORMAT:
        console_fmt = fmt
    elif is_truthy_env('VERBOSE_CONSOLE'):
        console_fmt = DEFAULT_FORMAT
    else:
        console_fmt = MINIMAL_CONSOLE_FORMAT

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(log_level)
    if is_truthy_env('JSON_LOGS'):
        console.setFormatter(JsonFormatter())
    else:
        console.setFormatter(logging.Formatter(console_fmt))
    root.addHandler(console)

    if log_file:
        try:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            fh = logging.FileHandler(log_file, encoding='utf-8')
        except OSError as e:
            root.error("Failed to create log file handler for %s: %s", log_file, e)
        else:
            fh.setLevel(log_level)
            fh.setFormatter(logging.Formatter(DEFAULT_FORMAT))
            root.addHandler(fh)

    for name in SUPPRESSED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root

__all__ = ["setup_logging", "JsonFormatter", "DEFAULT_FORMAT", "MINIMAL_CONSOLE_FORMAT"]

"""
Structured logging helpers.

All pylogistic loggers hang under the 'pylogistic' logger, which gets one
stderr handler the first time get_logger() is called. stdout is left to the
CLI report.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import time
from typing import Any

PACKAGE_LOGGER = 'pylogistic'
DEBUG_ENV_VAR = 'PYLOGISTIC_DEBUG'


class _StderrHandler(logging.StreamHandler):
    """Writes to sys.stderr as it is at emit time, so redirection is honoured."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


def json_log(message: str, **extra: Any) -> str:
    """Render a log line as JSON with a timestamp."""
    payload = {'ts': round(time.time(), 3), 'msg': message, **extra}
    return json.dumps(payload, ensure_ascii=False, default=str)


def get_logger(name: str) -> logging.Logger:
    """
    Logger for module `name`.

    Level is DEBUG when PYLOGISTIC_DEBUG is set, INFO otherwise.
    """
    package = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(h, _StderrHandler) for h in package.handlers):
        handler = _StderrHandler()
        handler.setFormatter(logging.Formatter('%(message)s'))
        package.addHandler(handler)
        package.setLevel(logging.DEBUG if os.getenv(DEBUG_ENV_VAR) else logging.INFO)
    return logging.getLogger(name)

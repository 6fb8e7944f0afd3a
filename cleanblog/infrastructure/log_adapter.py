"""
Logger adapter.

Adapts a stdlib ``logging.Logger`` to the application's ``Logger`` port.
Structured fields are rendered as ``key=value`` pairs after the message
and are also attached to the record as ``record.fields``.
"""

import logging
from typing import Any, Dict, Optional

from ..application.ports import Logger


class StdlibLogger(Logger):
    """Logger port backed by the standard library."""

    def __init__(self, logger: logging.Logger, fields: Optional[Dict[str, Any]] = None):
        self._logger = logger
        self._fields = dict(fields or {})

    @property
    def fields(self) -> Dict[str, Any]:
        return dict(self._fields)

    def info(self, msg: str, **fields: Any) -> None:
        self.log(logging.INFO, msg, **fields)

    def warning(self, msg: str, **fields: Any) -> None:
        self.log(logging.WARNING, msg, **fields)

    def error(self, msg: str, **fields: Any) -> None:
        self.log(logging.ERROR, msg, **fields)

    def log(self, level: int, msg: str, **fields: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        merged = {**self._fields, **fields}
        rendered = " ".join(f"{key}={value}" for key, value in merged.items())
        self._logger.log(
            level,
            f"{msg} {rendered}" if rendered else msg,
            extra={"fields": merged},
        )

    def bind(self, **fields: Any) -> "StdlibLogger":
        return StdlibLogger(self._logger, {**self._fields, **fields})

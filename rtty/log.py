"""
Bridge from the (level, payload) logger callables used across the package
to the standard logging module.
"""
from __future__ import annotations

from typing import Callable, Optional
import json
import logging

LogFn = Callable[[str, object], None]

_LEVELS = {
    "debug": logging.DEBUG,
    "metric": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def stdlib_logger(logger: Optional[logging.Logger] = None) -> LogFn:
    target = logger or logging.getLogger("rtty")

    def _log(level: str, payload: object) -> None:
        lvl = _LEVELS.get(level, logging.INFO)
        if not target.isEnabledFor(lvl):
            return
        if isinstance(payload, dict):
            target.log(lvl, json.dumps(payload, default=str, sort_keys=True))
        else:
            target.log(lvl, str(payload))

    return _log


def configure(level: str = "WARNING") -> None:
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        level=getattr(logging, level.upper(), logging.WARNING),
    )


__all__ = ["LogFn", "configure", "stdlib_logger"]

"""JSON-line logging to stdout and rotating info/warn/error files."""

from __future__ import annotations

import json
import logging
import logging.handlers
import os
import sys
from dataclasses import dataclass
from datetime import datetime
from typing import Any

__all__ = ["Options", "TLog", "configure", "info", "debug", "error", "warn"]

_MAX_BYTES = 500 * 1024 * 1024
_BACKUPS = 3

_LEVEL_NAMES = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warn",
    logging.ERROR: "error",
    logging.CRITICAL: "fatal",
}


@dataclass
class Options:
    """Logging configuration: minimum level, log directory and caller reporting."""

    level: int = logging.INFO
    log_dir: str = ""
    line_num: bool = False


class _JsonFormatter(logging.Formatter):
    def __init__(self, line_num: bool) -> None:
        super().__init__()
        self._line_num = line_num

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "level": _LEVEL_NAMES.get(record.levelno, record.levelname.lower()),
            "time": datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S"),
        }
        if self._line_num:
            entry["linenum"] = f"{record.pathname}:{record.lineno}"
        entry["msg"] = record.getMessage()
        entry.update(getattr(record, "fields", {}))
        return json.dumps(entry, ensure_ascii=False, default=str)


class _StdoutHandler(logging.Handler):
    """Writes to whatever ``sys.stdout`` is at the time of the call."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            sys.stdout.write(self.format(record) + "\n")
            sys.stdout.flush()
        except Exception:
            self.handleError(record)


@dataclass
class _Loggers:
    main: logging.Logger
    error: logging.Logger
    warn: logging.Logger

    def close(self) -> None:
        for lg in (self.main, self.error, self.warn):
            for handler in list(lg.handlers):
                lg.removeHandler(handler)
                handler.close()


_loggers: _Loggers | None = None


def _build(name: str, level: int, line_num: bool, filename: str) -> logging.Logger:
    lg = logging.getLogger(name)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()
    lg.setLevel(level)
    lg.propagate = False
    formatter = _JsonFormatter(line_num)
    stdout = _StdoutHandler()
    stdout.setFormatter(formatter)
    rotating = logging.handlers.RotatingFileHandler(
        filename, maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8", delay=True
    )
    rotating.setFormatter(formatter)
    lg.addHandler(stdout)
    lg.addHandler(rotating)
    return lg


def configure(opts: Options) -> None:
    """(Re)build the info, error and warn loggers from ``opts``."""
    global _loggers
    if _loggers is not None:
        _loggers.close()
    if opts.log_dir:
        os.makedirs(opts.log_dir, exist_ok=True)
    _loggers = _Loggers(
        main=_build("merchlib.log.info", opts.level, opts.line_num, os.path.join(opts.log_dir, "info.log")),
        error=_build("merchlib.log.error", logging.ERROR, opts.line_num, os.path.join(opts.log_dir, "error.log")),
        warn=_build("merchlib.log.warn", logging.WARNING, opts.line_num, os.path.join(opts.log_dir, "warn.log")),
    )


def _current() -> _Loggers:
    if _loggers is None:
        configure(Options())
    assert _loggers is not None
    return _loggers


def _emit(lg: logging.Logger, level: int, msg: str, fields: dict[str, Any]) -> None:
    # Skip _emit and the public wrapper to report the wrapper's caller.
    lg.log(level, msg, extra={"fields": dict(fields)}, stacklevel=3)


def info(msg: str, **kwargs: Any) -> None:
    _emit(_current().main, logging.INFO, msg, kwargs)


def debug(msg: str, **kwargs: Any) -> None:
    _emit(_current().main, logging.DEBUG, msg, kwargs)


def error(msg: str, **kwargs: Any) -> None:
    _emit(_current().error, logging.ERROR, msg, kwargs)


def warn(msg: str, **kwargs: Any) -> None:
    _emit(_current().warn, logging.WARNING, msg, kwargs)


class TLog:
    """Logger that prefixes every message with ``【prefix】``."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix

    def _text(self, msg: str) -> str:
        return f"【{self.prefix}】{msg}"

    def info(self, msg: str, **kwargs: Any) -> None:
        _emit(_current().main, logging.INFO, self._text(msg), kwargs)

    def debug(self, msg: str, **kwargs: Any) -> None:
        _emit(_current().main, logging.DEBUG, self._text(msg), kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        _emit(_current().error, logging.ERROR, self._text(msg), kwargs)

    def warn(self, msg: str, **kwargs: Any) -> None:
        _emit(_current().warn, logging.WARNING, self._text(msg), kwargs)
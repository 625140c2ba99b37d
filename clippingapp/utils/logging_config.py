"""Root logger configuration for the render CLI and tests.

Library modules only call ``logging.getLogger(__name__)``; the entrypoint
calls setup_logging() once and every record then flows through the handlers
installed here.

Public API:
    setup_logging(log_level="INFO", log_file=None, json=False, context={"app": "render"})
    push_context(density=2.0, output="outputs/clipping.png")
    pop_context(keys=["output"])
    install_excepthook()

Line formats:
    human  2026-10-19T13:45:12.345Z | INFO     | app=render density=2.0 | ClippedView ready ...
    json   {"t": "2026-10-19T13:45:12.345000+00:00", "lvl": "INFO", "name": "...", "pid": 1, "msg": "...", "app": "render"}

Context fields live in a ContextVar, so threads and asyncio tasks each see
their own copy. Calling setup_logging() again swaps out the handlers it
installed before and leaves foreign handlers (pytest's caplog) alone.
"""

import contextvars
import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

_context_var: contextvars.ContextVar = contextvars.ContextVar('clippingapp_log_context', default={})

# Handlers owned by setup_logging()
_installed_handlers: List[logging.Handler] = []

_ANSI_RESET = '\033[0m'
_LEVEL_ANSI = {
    'DEBUG': '\033[36m',
    'INFO': '\033[32m',
    'WARNING': '\033[33m',
    'ERROR': '\033[31m',
    'CRITICAL': '\033[35m',
}


class ContextFormatter(logging.Formatter):
    """Render records as human lines or JSON objects, with context fields appended.

    Parameters
    ----------
    fmt_mode : str
        "human" or "json"
    use_color : bool
        Colorize the level name (human mode, only when stderr is a TTY)
    tz : str
        "UTC" or "local" timestamps
    """

    def __init__(self, fmt_mode: str = "human", use_color: bool = True, tz: str = "UTC"):
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"Unknown log format: {fmt_mode}")
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()
        self.tz = tz

    def _timestamp(self, record: logging.LogRecord) -> datetime:
        if self.tz == "UTC":
            return datetime.fromtimestamp(record.created, tz=timezone.utc)
        return datetime.fromtimestamp(record.created)

    def format(self, record: logging.LogRecord) -> str:
        ts = self._timestamp(record)
        fields = _context_var.get()
        if self.fmt_mode == "json":
            return self._as_json(record, ts, fields)
        return self._as_human(record, ts, fields)

    def _as_json(self, record: logging.LogRecord, ts: datetime, fields: dict) -> str:
        payload = {
            't': ts.isoformat(),
            'lvl': record.levelname,
            'name': record.name,
            'pid': os.getpid(),
            'msg': record.getMessage(),
            **fields,
        }
        if record.exc_info:
            payload['exc'] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)

    def _as_human(self, record: logging.LogRecord, ts: datetime, fields: dict) -> str:
        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{_LEVEL_ANSI.get(record.levelname, '')}{level}{_ANSI_RESET}"

        columns = [ts.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z', level]
        if fields:
            columns.append(' '.join(f"{k}={v}" for k, v in fields.items()))
        columns.append(record.getMessage())

        line = ' | '.join(columns)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    rotate: Optional[Dict[str, Any]] = None,
    tz: str = "UTC",
    capture_warnings: bool = True,
    quiet_libs: Optional[List[str]] = None,
    context: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Install console and file handlers on the root logger.

    Parameters
    ----------
    log_level : str
        "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL" (case-insensitive)
    log_file : str, optional
        Also log to this file; parent directories are created
    json : bool
        JSON lines in the file handler (the console stays human-readable)
    color : bool
        ANSI level colors on the console
    to_stderr : bool
        Install the console handler
    rotate : dict, optional
        File rotation, either
        {"mode": "size", "max_bytes": 10_000_000, "backup_count": 5} or
        {"mode": "time", "when": "D", "interval": 1, "backup_count": 7}
    tz : str
        "UTC" (default) or "local" timestamps
    capture_warnings : bool
        Route ``warnings.warn`` through logging
    quiet_libs : list[str], optional
        Loggers pinned to WARNING (e.g. ["PIL"])
    context : dict, optional
        Fields pushed with push_context() before returning

    Returns
    -------
    dict
        {"handlers": [...]} installed by this call

    Raises
    ------
    ValueError
        If log_level or the rotation mode is unknown
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    root = logging.getLogger()
    while _installed_handlers:
        old = _installed_handlers.pop()
        root.removeHandler(old)
        old.close()
    root.setLevel(level)

    handlers: List[logging.Handler] = []
    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ContextFormatter("human", use_color=color, tz=tz))
        handlers.append(console)
    if log_file:
        handlers.append(_create_file_handler(log_file, rotate, json, tz))

    for handler in handlers:
        root.addHandler(handler)
    _installed_handlers.extend(handlers)

    for lib in quiet_libs or []:
        logging.getLogger(lib).setLevel(logging.WARNING)
    if context:
        push_context(**context)
    if capture_warnings:
        route_warnings()

    return {'handlers': list(handlers)}


def _create_file_handler(
    log_file: str,
    rotate: Optional[Dict[str, Any]],
    json_format: bool,
    tz: str
) -> logging.Handler:
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    mode = rotate.get('mode', 'size') if rotate else None
    if mode is None:
        handler = logging.FileHandler(log_file, encoding='utf-8')
    elif mode == 'size':
        handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=rotate.get('max_bytes', 10_000_000),
            backupCount=rotate.get('backup_count', 5),
            encoding='utf-8',
        )
    elif mode == 'time':
        handler = logging.handlers.TimedRotatingFileHandler(
            log_file,
            when=rotate.get('when', 'D'),
            interval=rotate.get('interval', 1),
            backupCount=rotate.get('backup_count', 7),
            encoding='utf-8',
        )
    else:
        raise ValueError(f"Unknown rotation mode: {mode}. Use 'size' or 'time'.")

    handler.setFormatter(
        ContextFormatter("json" if json_format else "human", use_color=False, tz=tz)
    )
    return handler


def push_context(**kwargs) -> None:
    """Merge fields into the context of every later record (e.g. density=2.0)."""
    _context_var.set({**_context_var.get(), **kwargs})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Drop the given context fields, or all of them when keys is None."""
    if keys is None:
        _context_var.set({})
        return
    remaining = {k: v for k, v in _context_var.get().items() if k not in keys}
    _context_var.set(remaining)


def get_context() -> Dict[str, Any]:
    return dict(_context_var.get())


def install_excepthook() -> None:
    """Log uncaught exceptions at CRITICAL; Ctrl+C keeps the default hook."""
    def log_exception(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logging.getLogger(__name__).critical(
            "Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback)
        )

    sys.excepthook = log_exception


def route_warnings() -> None:
    logging.captureWarnings(True)
    logging.getLogger('py.warnings').setLevel(logging.WARNING)

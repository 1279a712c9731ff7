"""Logging setup for the ps2svg command and library callers.

One call configures the root logger for a conversion run:
    - stderr console handler (human format, optionally colored)
    - optional log file, plain or size/time rotated, human or JSON lines
    - context fields (app, input file) stamped on every record
    - Python warnings routed into logging
    - uncaught exceptions logged before exit

Public API:
    setup_logging("INFO", log_file="run.log", context={"app": "ps2svg"})
    push_context(input="fort.50")
    pop_context(keys=["input"])
    install_excepthook()
    shutdown()

Record formats:
    Human: 2026-10-19T13:45:12.345Z | INFO     | app=ps2svg input=fort.50 | Extracted 42 segments
    JSON:  {"t": "2026-10-19T13:45:12.345000+00:00", "lvl": "INFO", "name": "...", "msg": "...", "app": "ps2svg"}

Timestamps are always UTC.  Calling setup_logging() again replaces the
handlers it installed before and leaves foreign handlers alone.
"""

import contextvars
import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

_context_var: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    'ps2svg_log_context', default={}
)

# Handlers owned by setup_logging(); removed on the next call or shutdown()
_installed_handlers: List[logging.Handler] = []

_LEVEL_COLORS = {
    'DEBUG': '\033[36m',
    'INFO': '\033[32m',
    'WARNING': '\033[33m',
    'ERROR': '\033[31m',
    'CRITICAL': '\033[35m',
}
_RESET = '\033[0m'


class ContextFormatter(logging.Formatter):
    """Render a record with the current context fields.

    Parameters
    ----------
    json_lines : bool
        One JSON object per record instead of the ``|``-separated human line.
    color : bool
        Color the level name; ignored unless stderr is a terminal.
    """

    def __init__(self, json_lines: bool = False, color: bool = False):
        super().__init__()
        self.json_lines = json_lines
        self.color = color and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        context = _context_var.get()
        if self.json_lines:
            return self._json(record, ts, context)
        return self._human(record, ts, context)

    def _json(self, record: logging.LogRecord, ts: datetime, context: Mapping[str, Any]) -> str:
        payload: Dict[str, Any] = {
            't': ts.isoformat(),
            'lvl': record.levelname,
            'name': record.name,
            'pid': os.getpid(),
            'msg': record.getMessage(),
        }
        payload.update(context)
        if record.exc_info:
            payload['exc'] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)

    def _human(self, record: logging.LogRecord, ts: datetime, context: Mapping[str, Any]) -> str:
        level = f"{record.levelname:8s}"
        if self.color:
            level = f"{_LEVEL_COLORS.get(record.levelname, '')}{level}{_RESET}"

        fields = [ts.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z', level]
        if context:
            fields.append(' '.join(f"{k}={v}" for k, v in context.items()))
        fields.append(record.getMessage())

        text = ' | '.join(fields)
        if record.exc_info:
            text += '\n' + self.formatException(record.exc_info)
        return text


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json_lines: bool = False,
    color: bool = True,
    console: bool = True,
    rotate: Optional[Mapping[str, Any]] = None,
    context: Optional[Mapping[str, Any]] = None,
) -> List[logging.Handler]:
    """Configure the root logger for a conversion run.

    Parameters
    ----------
    level : str
        Root level name, case-insensitive.
    log_file : str, optional
        Also write records to this file (parent directories are created).
    json_lines : bool
        JSON lines in the log file; the console stays human-readable.
    color : bool
        Colored level names on the console.
    console : bool
        Attach the stderr handler.  Off for ``--quiet`` runs.
    rotate : Mapping, optional
        File rotation, the ``log.rotate`` config section::

            {"mode": "none"}
            {"mode": "size", "max_bytes": 5_000_000, "backup_count": 5}
            {"mode": "time", "when": "midnight", "interval": 1, "backup_count": 5}

    context : Mapping, optional
        Fields merged into the logging context (see push_context()).

    Returns
    -------
    list[logging.Handler]
        Handlers installed by this call.

    Raises
    ------
    ValueError
        On an unknown level name or rotation mode.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    root = logging.getLogger()
    _remove_installed(root)
    root.setLevel(numeric_level)

    handlers: List[logging.Handler] = []
    if console:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(ContextFormatter(color=color))
        handlers.append(stream_handler)
    if log_file:
        handlers.append(_file_handler(Path(log_file), rotate or {}, json_lines))

    for handler in handlers:
        root.addHandler(handler)
    _installed_handlers.extend(handlers)

    if context:
        push_context(**context)

    logging.captureWarnings(True)
    return handlers


def _file_handler(path: Path, rotate: Mapping[str, Any], json_lines: bool) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)

    mode = rotate.get('mode', 'none')
    if mode == 'none':
        handler: logging.Handler = logging.FileHandler(path, encoding='utf-8')
    elif mode == 'size':
        handler = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=rotate.get('max_bytes', 5_000_000),
            backupCount=rotate.get('backup_count', 5),
            encoding='utf-8',
        )
    elif mode == 'time':
        handler = logging.handlers.TimedRotatingFileHandler(
            path,
            when=rotate.get('when', 'midnight'),
            interval=rotate.get('interval', 1),
            backupCount=rotate.get('backup_count', 5),
            encoding='utf-8',
            utc=True,
        )
    else:
        raise ValueError(f"Unknown rotation mode: {mode}. Use 'none', 'size' or 'time'.")

    handler.setFormatter(ContextFormatter(json_lines=json_lines))
    return handler


def _remove_installed(root: logging.Logger) -> None:
    for handler in _installed_handlers:
        root.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()


def push_context(**fields: Any) -> None:
    """Stamp *fields* on every following record, e.g. ``push_context(input="fort.50")``."""
    _context_var.set({**_context_var.get(), **fields})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Drop the named context fields, or all of them when *keys* is None."""
    if keys is None:
        _context_var.set({})
        return
    _context_var.set({k: v for k, v in _context_var.get().items() if k not in keys})


def install_excepthook() -> None:
    """Log uncaught exceptions (Ctrl+C excepted) as CRITICAL before exit."""
    def _log_uncaught(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logging.getLogger(__name__).critical(
            "Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback)
        )

    sys.excepthook = _log_uncaught


def shutdown() -> None:
    """Flush and detach the handlers installed by setup_logging()."""
    root = logging.getLogger()
    for handler in _installed_handlers:
        handler.flush()
    _remove_installed(root)

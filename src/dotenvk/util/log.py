"""Structured logging for dotenvk.

Every module keeps a logger tagged with its ``service`` name. Events render
as ``kv``, ``json`` or ``pretty`` lines and go to stderr, to a per-run file
under the data dir, to both, or nowhere (the default).

Fields whose name suggests secret material (``value``, ``secret``, ...) are
masked before rendering, so a careless call site cannot leak a generated
secret into a terminal or log file.
"""

import json
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Optional, TextIO

from ..core.global_paths import GlobalPath

KEEP_LOG_FILES = 10
LOG_FILE_PREFIX = "dotenvk-"
DEV_LOG_FILE = "dev.log"

REDACTED = "<redacted>"
SECRET_FIELDS = frozenset({"value", "values", "secret", "password", "passphrase"})


class LogLevel(str, Enum):
    """Log severity levels, lowest first."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    @property
    def priority(self) -> int:
        return list(LogLevel).index(self)

    @classmethod
    def parse(cls, value: str | None) -> "LogLevel":
        """Parse a user-supplied level name. ``None`` means the default, WARN."""
        if value is None:
            return cls.WARN
        level = _LEVEL_NAMES.get(value.strip().lower())
        if level is None:
            raise ValueError(f"invalid log level: {value}")
        return level


_LEVEL_NAMES = {
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "warn": LogLevel.WARN,
    "warning": LogLevel.WARN,
    "error": LogLevel.ERROR,
}


class LogFormat(str, Enum):
    """Log output format."""

    KV = "kv"
    JSON = "json"
    PRETTY = "pretty"

    @classmethod
    def parse(cls, value: str | None) -> "LogFormat":
        if value is None:
            return cls.KV
        text = value.strip().lower()
        for member in cls:
            if member.value == text:
                return member
        raise ValueError(f"invalid log format: {value}")


@dataclass
class _Sinks:
    """Process-wide output state shared by every logger."""

    level: LogLevel = LogLevel.WARN
    format: LogFormat = LogFormat.KV
    console: bool = False
    handle: Optional[TextIO] = None
    last_event: float = field(default_factory=time.monotonic)

    def accepts(self, level: LogLevel) -> bool:
        if not self.console and self.handle is None:
            return False
        return level.priority >= self.level.priority

    def emit(self, line: str) -> None:
        if self.console:
            sys.stderr.write(line)
            sys.stderr.flush()
        if self.handle is not None:
            self.handle.write(line)
            self.handle.flush()


_sinks = _Sinks()


# -- Field rendering --

def _describe_error(error: BaseException, depth: int = 0) -> str:
    text = str(error)
    if error.__cause__ is not None and depth < 10:
        text += " Caused by: " + _describe_error(error.__cause__, depth + 1)
    return text


def _field(name: str, value: Any) -> Any:
    if name.lower() in SECRET_FIELDS:
        return REDACTED
    if isinstance(value, BaseException):
        return _describe_error(value)
    if isinstance(value, (dict, list, tuple, int, float, bool)):
        return value
    return str(value)


def _kv_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    text = "" if value is None else str(value)
    if text == "" or "=" in text or any(ch.isspace() for ch in text):
        return json.dumps(text, ensure_ascii=False)
    return text


def _fields_text(event: Dict[str, Any]) -> str:
    return " ".join(f"{name}={_kv_text(value)}" for name, value in event["fields"].items())


def _render_json(event: Dict[str, Any]) -> str:
    flat = {key: value for key, value in event.items() if key != "fields"}
    flat.update(event["fields"])
    return json.dumps(flat, ensure_ascii=False, separators=(",", ":")) + "\n"


def _render_kv(event: Dict[str, Any]) -> str:
    parts = [
        event["time"],
        f"+{event['delta_ms']}ms",
        f"level={event['level']}",
        f"msg={_kv_text(event['msg'])}",
        _fields_text(event),
    ]
    return " ".join(part for part in parts if part) + "\n"


def _render_pretty(event: Dict[str, Any]) -> str:
    pairs = _fields_text(event)
    suffix = f" ({pairs})" if pairs else ""
    return (
        f"{event['time']} {event['level'].upper()} {event['msg'] or ''}{suffix}"
        f" +{event['delta_ms']}ms\n"
    )


_RENDERERS: Dict[LogFormat, Callable[[Dict[str, Any]], str]] = {
    LogFormat.JSON: _render_json,
    LogFormat.KV: _render_kv,
    LogFormat.PRETTY: _render_pretty,
}


class Logger:
    """Logger carrying a fixed set of tags, usually just ``service``."""

    def __init__(self, tags: Optional[Dict[str, Any]] = None):
        self.tags = dict(tags or {})

    def _emit(self, level: LogLevel, message: Any, extra: Optional[Dict[str, Any]]) -> None:
        if not _sinks.accepts(level):
            return

        now = time.monotonic()
        delta_ms = int((now - _sinks.last_event) * 1000)
        _sinks.last_event = now

        merged = {**self.tags, **(extra or {})}
        event = {
            "time": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            "delta_ms": delta_ms,
            "level": level.value.lower(),
            "msg": None if message is None else _field("msg", message),
            "fields": {name: _field(name, value) for name, value in merged.items() if value is not None},
        }
        _sinks.emit(_RENDERERS[_sinks.format](event))

    def debug(self, message: Any = None, extra: Optional[Dict[str, Any]] = None) -> None:
        self._emit(LogLevel.DEBUG, message, extra)

    def info(self, message: Any = None, extra: Optional[Dict[str, Any]] = None) -> None:
        self._emit(LogLevel.INFO, message, extra)

    def warn(self, message: Any = None, extra: Optional[Dict[str, Any]] = None) -> None:
        self._emit(LogLevel.WARN, message, extra)

    def error(self, message: Any = None, extra: Optional[Dict[str, Any]] = None) -> None:
        self._emit(LogLevel.ERROR, message, extra)


class Log:
    """Logger factory and sink configuration."""

    _loggers: Dict[str, Logger] = {}

    @classmethod
    def create(cls, tags: Optional[Dict[str, Any]] = None) -> Logger:
        """Return the logger for ``tags["service"]``, creating it once.

        Loggers without a service name are not cached.
        """
        tags = tags or {}
        service = tags.get("service")
        if not isinstance(service, str) or not service:
            return Logger(tags)
        if service not in cls._loggers:
            cls._loggers[service] = Logger(tags)
        return cls._loggers[service]

    @classmethod
    def configure(
        cls,
        *,
        level: LogLevel | None = None,
        format: LogFormat | None = None,
        console: bool | None = None,
        file: bool = False,
        dev: bool = False,
    ) -> None:
        """Set level and format and (re)open the sinks.

        With ``file`` set, events also go to the log dir: ``dev.log`` (appended)
        when ``dev`` is set, otherwise a fresh timestamped file per run.
        """
        if level is not None:
            _sinks.level = level
        if format is not None:
            _sinks.format = format
        if console is not None:
            _sinks.console = console

        cls.close()
        if file:
            _sinks.handle = cls._open_file(dev)

    @classmethod
    def _open_file(cls, dev: bool) -> TextIO:
        log_dir = GlobalPath.ensure(GlobalPath.log())
        if dev:
            return (log_dir / DEV_LOG_FILE).open("a", encoding="utf-8")

        cls._prune(log_dir, keep=KEEP_LOG_FILES - 1)
        stamp = datetime.now().strftime("%Y%m%dT%H%M%S")
        return (log_dir / f"{LOG_FILE_PREFIX}{stamp}.log").open("w", encoding="utf-8")

    @staticmethod
    def _prune(log_dir: Path, keep: int) -> None:
        # Timestamped names sort chronologically.
        runs = sorted(log_dir.glob(f"{LOG_FILE_PREFIX}*.log"))
        for old in runs[: max(len(runs) - keep, 0)]:
            old.unlink(missing_ok=True)

    @classmethod
    def close(cls) -> None:
        """Close the log file, if one is open."""
        if _sinks.handle is not None:
            _sinks.handle.close()
            _sinks.handle = None

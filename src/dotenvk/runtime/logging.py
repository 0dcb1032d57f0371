"""Runtime logging bootstrap helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.config import ConfigManager
from ..util.log import Log, LogFormat, LogLevel


@dataclass(frozen=True)
class LogSettings:
    level: LogLevel
    format: LogFormat
    console: bool
    file: bool
    dev_file: bool


def resolve_log_settings(
    *,
    level: Optional[str] = None,
    format: Optional[str] = None,
    console: Optional[bool] = None,
    file: Optional[bool] = None,
    dev_file: Optional[bool] = None,
    use_config: bool = True,
) -> LogSettings:
    """Merge explicit arguments over the ``logging`` config section.

    With ``use_config`` off the config is not loaded and only the
    arguments and built-in defaults apply.
    """
    log = ConfigManager.get().logging if use_config else None

    lv = LogLevel.parse(level or (log.level if log else None))
    fm = LogFormat.parse(format or (log.format if log else None))

    use_console = console
    if use_console is None:
        if log and log.console is not None:
            use_console = log.console
        else:
            # An explicit level on the command line implies wanting to see it.
            use_console = level is not None

    use_file = file
    if use_file is None:
        use_file = log.file if log and log.file is not None else False

    use_dev = dev_file
    if use_dev is None:
        use_dev = log.dev_file if log and log.dev_file is not None else False

    return LogSettings(
        level=lv,
        format=fm,
        console=use_console,
        file=use_file,
        dev_file=use_dev,
    )


def bootstrap_logging(
    *,
    level: Optional[str] = None,
    format: Optional[str] = None,
    console: Optional[bool] = None,
    file: Optional[bool] = None,
    dev_file: Optional[bool] = None,
    use_config: bool = True,
) -> LogSettings:
    """Resolve config and initialize the process logger."""
    settings = resolve_log_settings(
        level=level,
        format=format,
        console=console,
        file=file,
        dev_file=dev_file,
        use_config=use_config,
    )
    Log.configure(
        level=settings.level,
        format=settings.format,
        console=settings.console,
        file=settings.file,
        dev=settings.dev_file,
    )
    return settings

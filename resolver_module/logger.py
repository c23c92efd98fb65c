"""
Centralized logger configuration for the DNS path resolver.

Provides:
- InterceptHandler: bridges stdlib logging to loguru
- LoguruCompat: safe, formatting-friendly wrapper around loguru logger
- configure_logging(app_name): sets up sinks and returns a bound app logger
"""
from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

from loguru import logger


class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        # forward to loguru, preserve exception info if present
        logger.opt(exception=record.exc_info).log(level, record.getMessage())


class LoguruCompat:
    def __init__(self, lg):
        self._lg = lg

    def _format_msg(self, *args, **kwargs) -> str:
        if not args:
            return str(kwargs) if kwargs else ""

        fmt = args[0]
        rest = args[1:]

        if not isinstance(fmt, str):
            return " ".join(map(str, args))

        # {} style first, then %-style, then a plain join
        if ("{" in fmt and "}" in fmt) or kwargs:
            try:
                return fmt.format(*rest, **kwargs)
            except (IndexError, KeyError, ValueError):
                pass
        if "%" in fmt:
            try:
                return fmt % rest
            except (TypeError, ValueError):
                pass
        if rest:
            return fmt + " " + " ".join(map(str, rest))
        return fmt

    def _emit(self, level: str, *args, **kwargs) -> None:
        msg = self._format_msg(*args, **kwargs)
        # message is pre-formatted; keep loguru from formatting it again
        getattr(self._lg.opt(depth=2), level)("{}", msg)

    def debug(self, *args, **kwargs):
        self._emit("debug", *args, **kwargs)

    def info(self, *args, **kwargs):
        self._emit("info", *args, **kwargs)

    def warning(self, *args, **kwargs):
        self._emit("warning", *args, **kwargs)

    def critical(self, *args, **kwargs):
        self._emit("critical", *args, **kwargs)

    def getChild(self, name: str) -> "LoguruCompat":
        return LoguruCompat(self._lg.bind(module=name))


def configure_logging(app_name: str = "dns_path", level: Optional[str] = None) -> LoguruCompat:
    """
    Configure loguru sinks and stdlib logging interception.

    The level comes from `level`, then DNS_APP_LOG_LEVEL, then INFO. A rotating
    file sink is added only when DNS_APP_LOG_FILE is set.
    Returns a bound `LoguruCompat` logger for the application.
    """
    logger.remove()
    log_level = (level or os.getenv("DNS_APP_LOG_LEVEL", "INFO")).upper()
    logger.add(sys.stderr, level=log_level, format="<green>{time}</green> <level>{level}</level> {message}")

    log_file = os.getenv("DNS_APP_LOG_FILE")
    if log_file:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            rotation = os.getenv("DNS_APP_LOG_ROTATION", "10 MB")
            retention = os.getenv("DNS_APP_LOG_RETENTION", "7 days")
            logger.add(
                log_file,
                level=log_level,
                enqueue=True,
                backtrace=True,
                diagnose=False,
                rotation=rotation,
                retention=retention,
                format="{time} | {level} | {message}",
            )
            logger.info("File logging enabled: {} (rotation={} retention={})", log_file, rotation, retention)
        except OSError as e:
            # stderr sink keeps working without the file
            logger.warning("Could not open log file {}: {}", log_file, e)

    # Bridge stdlib logging (uvicorn, dnspython) through loguru
    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(getattr(logging, log_level, logging.INFO))

    global _APP_LOGGER
    _APP_LOGGER = LoguruCompat(logger.bind(app=app_name))
    return _APP_LOGGER


_APP_LOGGER: LoguruCompat | None = None


def get_app_logger(app_name: str = "dns_path") -> LoguruCompat:
    """Return the configured application logger if available; otherwise bind a lightweight one."""
    if _APP_LOGGER is not None:
        return _APP_LOGGER
    return LoguruCompat(logger.bind(app=app_name))


def get_child_logger(name: str, app_name: str = "dns_path") -> LoguruCompat:
    """Convenience: return a child logger bound with module/name."""
    return get_app_logger(app_name).getChild(name)


__all__ = [
    "InterceptHandler",
    "LoguruCompat",
    "configure_logging",
    "get_app_logger",
    "get_child_logger",
]

"""
Categorised loggers for the records backend.

Each category (``store``, ``dispatch``, ``route`` ...) gets its own logger
named ``ors.<category>`` writing to a timed rotating file, plus an optional
shared console handler. Fields bound with :func:`log_context` are appended to
every line emitted while the block is active.
"""

from __future__ import annotations

import json
import logging
import os
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from flask import Flask, current_app

# attributes every LogRecord carries; anything else came in through ``extra``
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
    "taskName",
}

_context: ContextVar[Dict[str, Any]] = ContextVar("ors_log_context", default={})

DEFAULT_TEXT_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"


def get_log_context() -> Dict[str, Any]:
    return dict(_context.get())


def update_log_context(**fields: Any) -> None:
    """Bind fields for the rest of the current context; ``None`` unbinds."""

    merged = get_log_context()
    for key, value in fields.items():
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = value
    _context.set(merged)


def clear_log_context(*keys: str) -> None:
    if not keys:
        _context.set({})
        return
    _context.set({k: v for k, v in _context.get().items() if k not in keys})


@contextmanager
def log_context(**fields: Any):
    """Bind fields for the duration of the block; ``None`` values are skipped."""

    bound = get_log_context()
    bound.update((k, v) for k, v in fields.items() if v is not None)
    token = _context.set(bound)
    try:
        yield
    finally:
        _context.reset(token)


class ContextAwareFormatter(logging.Formatter):
    """Text lines with a ``| key=value`` suffix, or one JSON object per record."""

    def __init__(
        self,
        fmt: Optional[str] = None,
        datefmt: Optional[str] = None,
        *,
        json_format: bool = False,
        static_fields: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(fmt=fmt or DEFAULT_TEXT_FORMAT, datefmt=datefmt)
        self.json_format = json_format
        self.static_fields = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:
        if self.json_format:
            return json.dumps(self._as_dict(record), default=str, separators=(",", ":"))

        line = super().format(record)
        bound = _context.get()
        if not bound:
            return line
        return line + " | " + " ".join(f"{key}={bound[key]}" for key in sorted(bound))

    def _as_dict(self, record: logging.LogRecord) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **self.static_fields,
        }
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and not key.startswith("_") and key not in payload
        )
        bound = _context.get()
        if bound:
            payload["context"] = dict(bound)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return payload


@dataclass(frozen=True)
class LogCategory:
    name: str
    filename: str


DEFAULT_CATEGORIES: Dict[str, LogCategory] = {
    name: LogCategory(name, filename)
    for name, filename in (
        ("app", "app.log"),
        ("store", "store.log"),
        ("dispatch", "dispatch.log"),
        ("route", "route.log"),
        ("auth", "auth.log"),
        ("error", "errors.log"),
    )
}


def _current_app() -> Optional[Flask]:
    try:
        return current_app._get_current_object()  # type: ignore[attr-defined]
    except RuntimeError:
        return None


class LoggerManager:
    """Builds and caches one configured logger per category."""

    def __init__(
        self,
        *,
        base_dir: Optional[str] = None,
        rotation_when: str = "midnight",
        backup_count: int = 7,
        categories: Optional[Mapping[str, LogCategory]] = None,
        enable_category_files: bool = True,
        mirror_app_handlers: bool = True,
        default_level: int = logging.INFO,
        category_levels: Optional[Mapping[str, int]] = None,
        enable_console: bool = True,
        json_format: bool = False,
        text_format: Optional[str] = None,
    ) -> None:
        self._base_dir = base_dir
        self._rotation_when = rotation_when
        self._backup_count = backup_count
        self._categories: Dict[str, LogCategory] = dict(categories or DEFAULT_CATEGORIES)
        self._enable_category_files = enable_category_files
        self._mirror_app_handlers = mirror_app_handlers
        self._default_level = default_level
        self._category_levels = {k.lower(): v for k, v in (category_levels or {}).items()}
        self._enable_console = enable_console
        self._formatter = ContextAwareFormatter(fmt=text_format, json_format=json_format)
        self._loggers: Dict[str, logging.Logger] = {}
        self._console: Optional[logging.Handler] = None

    @property
    def base_dir(self) -> Path:
        if self._base_dir:
            return Path(self._base_dir)
        app = _current_app()
        configured = app.config.get("LOGGING_BASE_DIR") if app else None
        return Path(configured or os.getenv("LOGGING_BASE_DIR", "/tmp/ors_logs"))

    def register_category(self, name: str, filename: Optional[str] = None) -> LogCategory:
        key = name.strip().lower()
        category = LogCategory(key, filename or f"{key}.log")
        previous = self._categories.get(key)
        if previous is not None and previous.filename != category.filename:
            self._release(key)
        self._categories[key] = category
        return category

    def get_logger(self, category: str) -> logging.Logger:
        key = category.lower()
        cached = self._loggers.get(key)
        if cached is not None:
            return cached

        entry = self._categories.get(key) or self.register_category(key)
        level = self._category_levels.get(key, self._default_level)
        logger = logging.getLogger(f"ors.{entry.name}")
        logger.propagate = False
        logger.setLevel(level)
        for handler in self._handlers_for(entry, level):
            if handler not in logger.handlers:
                logger.addHandler(handler)

        self._loggers[key] = logger
        return logger

    def _handlers_for(self, entry: LogCategory, level: int) -> List[logging.Handler]:
        handlers: List[logging.Handler] = []
        if self._enable_category_files:
            directory = self.base_dir
            directory.mkdir(parents=True, exist_ok=True)
            file_handler = TimedRotatingFileHandler(
                directory / entry.filename,
                when=self._rotation_when,
                backupCount=self._backup_count,
                encoding="utf-8",
                utc=True,
                delay=True,
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(self._formatter)
            handlers.append(file_handler)

        if self._enable_console:
            if self._console is None:
                self._console = logging.StreamHandler()
                self._console.setLevel(self._default_level)
                self._console.setFormatter(self._formatter)
            handlers.append(self._console)

        app = _current_app()
        if self._mirror_app_handlers and app is not None:
            handlers.extend(app.logger.handlers)
        return handlers

    def log_files(self, categories: Optional[Iterable[str]] = None) -> List[Path]:
        directory = self.base_dir
        if not directory.exists():
            return []
        if categories is None:
            return sorted(directory.glob("*.log*"))
        found: List[Path] = []
        for name in categories:
            entry = self._categories.get(name.lower())
            if entry is not None:
                found.extend(sorted(directory.glob(f"{entry.filename}*")))
        return found

    def shutdown(self) -> None:
        for key in list(self._loggers):
            self._release(key)
        if self._console is not None:
            self._console.close()
            self._console = None

    def _release(self, key: str) -> None:
        logger = self._loggers.pop(key, None)
        if logger is None:
            return
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            # the console handler is shared; shutdown() closes it once
            if handler is not self._console:
                handler.close()


def _as_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return bool(value)


def _as_level(value: Any, default: int = logging.INFO) -> int:
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip():
        resolved = logging.getLevelName(value.strip().upper())
        if isinstance(resolved, int):
            return resolved
    return default


_manager: Optional[LoggerManager] = None


def init_logger(app: Flask) -> LoggerManager:
    """Replace the shared manager with one configured from ``app.config``."""

    global _manager

    cfg = app.config
    manager = LoggerManager(
        base_dir=cfg.get("LOGGING_BASE_DIR"),
        rotation_when=cfg.get("LOGGING_ROTATION_WHEN", "midnight"),
        backup_count=cfg.get("LOGGING_BACKUP_COUNT", 7),
        enable_category_files=_as_bool(cfg.get("LOGGING_ENABLE_CATEGORY_FILES"), True),
        mirror_app_handlers=_as_bool(cfg.get("LOGGING_MIRROR_APP_HANDLERS"), True),
        default_level=_as_level(cfg.get("LOG_LEVEL")),
        category_levels={
            str(name).lower(): _as_level(level)
            for name, level in (cfg.get("LOGGING_CATEGORY_LEVELS") or {}).items()
        },
        enable_console=_as_bool(cfg.get("LOGGING_CONSOLE_ENABLED"), True),
        json_format=_as_bool(cfg.get("LOGGING_JSON_FORMAT")),
        text_format=cfg.get("LOGGING_TEXT_FORMAT"),
    )
    shutdown_logger()
    _manager = manager
    return manager


def logger_manager() -> LoggerManager:
    """The shared manager; built from environment variables until init_logger runs."""

    global _manager
    if _manager is None:
        _manager = LoggerManager(
            enable_category_files=_as_bool(os.getenv("LOGGING_ENABLE_CATEGORY_FILES"), True),
            default_level=_as_level(os.getenv("LOG_LEVEL")),
            enable_console=_as_bool(os.getenv("LOGGING_CONSOLE_ENABLED"), True),
            json_format=_as_bool(os.getenv("LOGGING_JSON_FORMAT")),
        )
    return _manager


def shutdown_logger() -> None:
    global _manager
    if _manager is not None:
        _manager.shutdown()
        _manager = None


def get_logger(category: str) -> logging.Logger:
    return logger_manager().get_logger(category)


def register_category(name: str, filename: Optional[str] = None) -> LogCategory:
    return logger_manager().register_category(name, filename=filename)

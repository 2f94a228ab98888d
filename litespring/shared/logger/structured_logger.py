# litespring/shared/logger/structured_logger.py
import inspect
import logging
import os
from datetime import datetime, timezone
from typing import Dict, Optional, Tuple

import structlog
from colorama import Fore, Style, just_fix_windows_console

just_fix_windows_console()


class StructuredLogger:
    """
    structlog-backed logger with a coloured console line and an optional JSON file sink.
    Instances are cached per (name, log file, level) so components share handlers.
    """

    _logger_cache: Dict[Tuple[str, Optional[str], int], "StructuredLogger"] = {}

    LEVEL_NUMBERS = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
        "exception": logging.ERROR,
        "critical": logging.CRITICAL,
    }

    LEVEL_COLORS = {
        "DEBUG": Fore.CYAN,
        "INFO": Fore.GREEN,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Fore.MAGENTA + Style.BRIGHT,
    }

    def __init__(
        self,
        name: str = "litespring",
        log_file: Optional[str] = None,
        level: str = "INFO",
        context: Optional[dict] = None,
    ):
        self.name = name
        self.context = context or {}
        self.log_file = os.path.abspath(log_file) if log_file else None
        self.level = getattr(logging, level.upper(), logging.INFO)

        # Same name with another file or level gets its own entry.
        cache_key = (name, self.log_file, self.level)
        if cache_key in self._logger_cache:
            cached = self._logger_cache[cache_key]
            self.console_logger = cached.console_logger
            self.file_logger = cached.file_logger
            return

        # ----------------------------
        # Stack walker processor
        # ----------------------------
        def add_caller_stack(logger, method_name, event_dict):
            frame = inspect.currentframe()
            while frame:
                module_name = frame.f_globals.get("__name__")
                if (
                    module_name
                    and not module_name.startswith("structlog")
                    and not module_name.endswith("structured_logger")
                    and not module_name.startswith("logging")
                ):
                    event_dict["module"] = module_name
                    event_dict["function"] = frame.f_code.co_name
                    event_dict["lineno"] = frame.f_lineno
                    owner = frame.f_locals.get("self")
                    if owner is not None:
                        event_dict["class"] = owner.__class__.__name__
                    break
                frame = frame.f_back
            return event_dict

        # ----------------------------
        # Console processor
        # ----------------------------
        def console_processor(logger, method_name, event_dict):
            ts = event_dict.pop("timestamp", None) or datetime.now(timezone.utc).isoformat()
            level_name = event_dict.pop("level", method_name).upper()
            logger_name = event_dict.pop("logger", self.name)
            msg = event_dict.pop("event", "")
            exception = event_dict.pop("exception", None)

            module = event_dict.pop("module", "")
            func = event_dict.pop("function", "")
            lineno = event_dict.pop("lineno", "")
            event_dict.pop("class", None)

            # Caller info only for WARNING and above
            caller = ""
            if level_name in ("WARNING", "ERROR", "CRITICAL") and module and func:
                caller = f" ({module}.{func}:{lineno})"

            extras = " ".join(f"{key}={value}" for key, value in event_dict.items())
            line = f"{ts} [{logger_name}] {level_name}: {msg}"
            if extras:
                line = f"{line} {extras}"
            line = f"{line}{caller}"
            if exception:
                line = f"{line}\n{exception}"

            color = self.LEVEL_COLORS.get(level_name, "")
            return f"{color}{line}{Style.RESET_ALL}"

        # ----------------------------
        # Console logger
        # ----------------------------
        # Levels are filtered per instance in _emit.
        console_logger = logging.getLogger(f"{name}_console")
        console_logger.setLevel(logging.DEBUG)
        if not console_logger.hasHandlers():
            ch = logging.StreamHandler()
            ch.setFormatter(logging.Formatter("%(message)s"))
            console_logger.addHandler(ch)

        self.console_logger = structlog.wrap_logger(
            console_logger,
            processors=[
                structlog.processors.TimeStamper(fmt="ISO"),
                structlog.stdlib.add_log_level,
                add_caller_stack,
                structlog.processors.format_exc_info,
                console_processor,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        ).bind(logger=name, **self.context)

        # ----------------------------
        # File logger (JSON)
        # ----------------------------
        self.file_logger = None
        if self.log_file:
            file_logger = logging.getLogger(f"{name}_file:{self.log_file}")
            file_logger.setLevel(logging.DEBUG)
            file_logger.propagate = False
            if not any(isinstance(h, logging.FileHandler) for h in file_logger.handlers):
                fh = logging.FileHandler(self.log_file, encoding="utf-8")
                fh.setFormatter(logging.Formatter("%(message)s"))
                file_logger.addHandler(fh)

            self.file_logger = structlog.wrap_logger(
                file_logger,
                processors=[
                    structlog.processors.TimeStamper(fmt="ISO"),
                    structlog.stdlib.add_log_level,
                    structlog.processors.StackInfoRenderer(),
                    structlog.processors.format_exc_info,
                    add_caller_stack,
                    structlog.processors.UnicodeDecoder(),
                    structlog.processors.JSONRenderer(default=str),
                ],
                wrapper_class=structlog.stdlib.BoundLogger,
                cache_logger_on_first_use=True,
            ).bind(logger=name, **self.context)

        self._logger_cache[cache_key] = self

    def _emit(self, level: str, msg: str, **extra):
        if self.LEVEL_NUMBERS[level] < self.level:
            return
        getattr(self.console_logger, level)(msg, **extra)
        if self.file_logger is not None:
            getattr(self.file_logger, level)(msg, **extra)

    # ----------------------------
    # Logging methods
    # ----------------------------
    def debug(self, msg: str, **extra):
        self._emit("debug", msg, **extra)

    def info(self, msg: str, **extra):
        self._emit("info", msg, **extra)

    def warning(self, msg: str, **extra):
        self._emit("warning", msg, **extra)

    def error(self, msg: str, **extra):
        self._emit("error", msg, **extra)

    def critical(self, msg: str, **extra):
        self._emit("critical", msg, **extra)

    def exception(self, msg: str, **extra):
        self._emit("exception", msg, **extra)

    @classmethod
    def clear_cache(cls) -> None:
        cls._logger_cache.clear()

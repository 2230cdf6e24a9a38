"""Structured logging for infradrift. Log calls take an EventName declared on a
BaseLogEvent subclass plus arbitrary key/values, which are rendered as JSON lines (or
colored console output when DEV_LOG=1)."""
from contextlib import contextmanager
from dataclasses import dataclass
import logging
import os
import sys
import threading
from typing import cast, Any, Dict, Iterator, List, Optional, Tuple, Type

import structlog

QUIET_LOGGERS = ("botocore", "boto3", "urllib3", "google")


@dataclass(frozen=True)
class EventName:
    """Dataclass for log event names.

    Args:
        name: name of this event
    """

    name: str


class LogEventMeta(type):
    """Metaclass for LogEvents. Lets EventNames be declared on subclasses of BaseLogEvent
    as bare annotations, e.g.

        ReadManifestStart: EventName

    instead of

        ReadManifestStart = EventName("ReadManifestStart")
    """

    def __new__(
        mcs, name: str, bases: Tuple[Type, ...], namespace: Dict[str, Any]
    ) -> "LogEventMeta":
        for annotation in namespace.get("__annotations__", []):
            namespace[annotation] = EventName(annotation)
        return cast(LogEventMeta, super().__new__(mcs, name, bases, namespace))


@dataclass(frozen=True)
class BaseLogEvent(metaclass=LogEventMeta):
    """Base class for LogEvent classes"""


class Singleton(type):
    """Singleton Metaclass"""

    _instances: Dict[Type[Any], Any] = {}
    _lock = threading.Lock()

    def __call__(cls, *args: Any, **kwargs: Any) -> Any:
        with Singleton._lock:
            if cls not in cls._instances:
                cls._instances[cls] = super(Singleton, cls).__call__(*args, **kwargs)
        return cls._instances[cls]


class BaseLogger:
    """Provides contextmanager 'bind' which binds key/values to the logger for the
    duration of a 'with' block. Bindings are kept per thread so concurrent resource
    checks do not see each other's context. In general use Logger, not BaseLogger."""

    def __init__(self, log_tid: bool = True, level: Optional[str] = None) -> None:
        self._log_tid = log_tid
        self.logger_stack = threading.local()

        log_processors = [
            structlog.stdlib.add_log_level,
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]
        if os.environ.get("DEV_LOG", "0") == "1":
            log_processors.append(structlog.dev.ConsoleRenderer(colors=True))
        else:
            log_processors.append(structlog.processors.JSONRenderer(sort_keys=True))

        structlog.configure(
            logger_factory=structlog.stdlib.LoggerFactory(), processors=log_processors
        )

        logging.basicConfig(
            level=level or os.environ.get("LOG_LEVEL", "INFO"),
            stream=sys.stderr,
            format="%(message)s",
        )
        for quiet_logger in QUIET_LOGGERS:
            logging.getLogger(quiet_logger).setLevel(logging.ERROR)

    def _get_loggers(self) -> List[structlog.BoundLogger]:
        if not hasattr(self.logger_stack, "loggers"):
            self.logger_stack.loggers = []
        return self.logger_stack.loggers

    def _get_current_logger(self) -> structlog.BoundLogger:
        loggers = self._get_loggers()
        if not loggers:
            logger = structlog.get_logger()
            if self._log_tid:
                logger = logger.bind(tid=threading.get_ident())
            loggers.append(logger)
        return loggers[-1]

    def _log(self, level: str, event: EventName, **kwargs: Any) -> None:
        getattr(self._get_current_logger(), level)(event=event.name, **kwargs)

    def debug(self, event: EventName, **kwargs: Any) -> None:
        self._log("debug", event, **kwargs)

    def info(self, event: EventName, **kwargs: Any) -> None:
        self._log("info", event, **kwargs)

    def warning(self, event: EventName, **kwargs: Any) -> None:
        self._log("warning", event, **kwargs)

    def error(self, event: EventName, **kwargs: Any) -> None:
        self._log("error", event, **kwargs)

    @contextmanager
    def bind(self, **bindings: Any) -> Iterator[None]:
        """Context manager to bind a set of k/vs to the logger. The k/vs are removed
        when the with block exits."""
        new_logger = self._get_current_logger().bind(**bindings)
        loggers = self._get_loggers()
        loggers.append(new_logger)
        try:
            yield
        finally:
            loggers.pop()


class Logger(BaseLogger, metaclass=Singleton):
    """Singleton logger class"""

from __future__ import annotations

"""
Logging Core Orchestrator.

Owns the general log pipeline of one process. The core is constructed
explicitly at startup, configured exactly once, and shut down at exit.
Records are handed to a QueueListener so that producers never wait on
file I/O; the listener fans them out to the console and file sinks.
"""

import atexit
import logging
import queue
import sys
import threading
import weakref
from datetime import date
from logging.handlers import QueueHandler, QueueListener
from typing import Any, Callable, List, Optional

from splitlog.domain.errors import ConfigurationError
from splitlog.domain.events import LogEvent
from splitlog.domain.severity import Severity
from splitlog.infra.logging.config import LoggingConfig, RuntimeMode
from splitlog.infra.logging.handlers import (
    _is_our_handler,
    _tag_handler,
    create_console_handler,
    create_file_handler,
)

DEFAULT_LOGGER_NAME: str = "splitlog"

# Live cores by logger name. A logger has at most one owning core at a time.
_OWNERS: "weakref.WeakValueDictionary[str, LoggingCore]" = weakref.WeakValueDictionary()
_OWNERS_GUARD = threading.Lock()


class LoggingCore:
    """
    Process-wide facade of the general log stream.

    Until configure() is called every event is discarded. After shutdown()
    events are discarded again. Only one live core may own a logger name;
    the name is released by shutdown().
    """

    def __init__(
            self,
            name: str = DEFAULT_LOGGER_NAME,
            clock: Optional[Callable[[], date]] = None,
    ) -> None:
        self.name = name
        self._clock = clock
        self._config: Optional[LoggingConfig] = None
        self._minimum: Severity = Severity.FATAL
        self._queue: Optional[queue.Queue] = None
        self._listener: Optional[QueueListener] = None
        self._handlers: List[logging.Handler] = []
        self._closed = False
        self._lock = threading.Lock()

        with _OWNERS_GUARD:
            owner = _OWNERS.get(name)
            if owner is not None and not owner._closed:
                raise ConfigurationError(
                    f"Logger '{name}' is already owned by another logging core."
                )
            _OWNERS[name] = self

        self._logger = logging.getLogger(name)
        self._logger.propagate = False
        _remove_our_handlers(self._logger)
        self._discard = logging.NullHandler()
        _tag_handler(self._discard)
        self._logger.addHandler(self._discard)

    # ==========================================================================
    # LIFECYCLE
    # ==========================================================================

    @property
    def config(self) -> Optional[LoggingConfig]:
        return self._config

    @property
    def mode(self) -> Optional[RuntimeMode]:
        return self._config.mode if self._config else None

    @property
    def is_configured(self) -> bool:
        return self._config is not None

    @property
    def minimum_severity(self) -> Severity:
        return self._minimum

    def configure(self, cfg: LoggingConfig) -> None:
        """
        Build and start the pipeline described by the configuration.

        Args:
            cfg: Development or production configuration.

        Raises:
            ConfigurationError: If the core is already configured, or the
                                configuration is invalid.
        """
        with self._lock:
            if self._config is not None or self._closed:
                raise ConfigurationError("The logging core is already configured.")

            minimum = cfg.validate()
            level_int = int(minimum)

            handlers: List[logging.Handler] = []
            if cfg.console:
                handlers.append(create_console_handler(cfg, level_int))
            handlers.append(create_file_handler(cfg, level_int, clock=self._clock))

            log_queue: queue.Queue = queue.Queue(-1)
            queue_handler = QueueHandler(log_queue)
            _tag_handler(queue_handler)

            listener = QueueListener(log_queue, *handlers, respect_handler_level=True)
            listener.start()

            self._logger.removeHandler(self._discard)
            self._logger.addHandler(queue_handler)
            self._logger.setLevel(level_int)

            self._queue = log_queue
            self._listener = listener
            self._handlers = handlers
            self._minimum = minimum
            self._config = cfg

            atexit.register(self.shutdown)

    def flush(self) -> None:
        """Block until every queued record has reached its sinks."""
        if self._queue is None or self._listener is None:
            return
        self._queue.join()
        for h in self._handlers:
            h.flush()

    def shutdown(self) -> None:
        """Drain the queue, stop the listener and release every sink."""
        with self._lock:
            if self._closed:
                return
            self._closed = True

            listener, self._listener = self._listener, None
            _safe_stop_listener(listener)

            _remove_our_handlers(self._logger)
            for h in self._handlers:
                h.close()
            self._handlers = []
            self._logger.addHandler(self._discard)

            atexit.unregister(self.shutdown)

        with _OWNERS_GUARD:
            if _OWNERS.get(self.name) is self:
                del _OWNERS[self.name]

    # ==========================================================================
    # PRODUCER API
    # ==========================================================================

    def log(
            self,
            severity: Severity,
            template: str,
            *args: Any,
            exception: Optional[BaseException] = None,
    ) -> None:
        """
        Record an event on the general stream.

        Args:
            severity: Event severity.
            template: Message template with named holes ('{P1}').
            *args: Values for the template holes, in order.
            exception: Optional failure rendered beneath the message.
        """
        self.write(LogEvent(Severity(severity), template, tuple(args), exception))

    def write(self, event: LogEvent) -> None:
        """Hand a constructed event to the pipeline if it meets the threshold."""
        if self._config is None or self._closed or event.severity < self._minimum:
            return

        try:
            exc_info = None
            if event.exception is not None:
                exc = event.exception
                exc_info = (type(exc), exc, exc.__traceback__)

            record = self._logger.makeRecord(
                self.name, int(event.severity), "(unknown file)", 0,
                event.render(), (), exc_info,
            )
            record.created = event.timestamp.timestamp()
            record.msecs = event.timestamp.microsecond // 1000
            self._logger.handle(record)
        except Exception as e:
            sys.stderr.write(f"WARNING: Dropped log event '{event.template}': {e}\n")

    def verbose(self, template: str, *args: Any, exception: Optional[BaseException] = None) -> None:
        self.log(Severity.VERBOSE, template, *args, exception=exception)

    def debug(self, template: str, *args: Any, exception: Optional[BaseException] = None) -> None:
        self.log(Severity.DEBUG, template, *args, exception=exception)

    def information(self, template: str, *args: Any, exception: Optional[BaseException] = None) -> None:
        self.log(Severity.INFORMATION, template, *args, exception=exception)

    def warning(self, template: str, *args: Any, exception: Optional[BaseException] = None) -> None:
        self.log(Severity.WARNING, template, *args, exception=exception)

    def error(self, template: str, *args: Any, exception: Optional[BaseException] = None) -> None:
        self.log(Severity.ERROR, template, *args, exception=exception)

    def fatal(self, template: str, *args: Any, exception: Optional[BaseException] = None) -> None:
        self.log(Severity.FATAL, template, *args, exception=exception)

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """
        Acquire a stdlib logger whose records join this core's pipeline.

        Names already inside the core's namespace (e.g. 'splitlog.core.users'
        for the default core) are used as they are.

        Args:
            name: Child name (usually __name__). None returns the core logger.

        Returns:
            logging.Logger: The requested logger instance.
        """
        if not name or name == self.name:
            return self._logger
        if name.startswith(self.name + "."):
            return logging.getLogger(name)
        return self._logger.getChild(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _remove_our_handlers(target: logging.Logger) -> None:
    """Detach all core-managed handlers from a logger."""
    for h in list(target.handlers):
        if _is_our_handler(h):
            target.removeHandler(h)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """
    Stop a QueueListener, tolerating listeners that were never started or
    have already been joined.
    """
    if not listener:
        return

    if getattr(listener, "_thread", None) is not None:
        listener.stop()

"""
LogRouter: level-gated routing of formatted messages to console and file.

initialize() resolves, once, which sink each severity writes to. After that
every trace/info/warning/error call hands its message to the precomputed
channel for its severity without looking at the level mask again;
discarding is itself a sink.

Threading contract:
    - get_active_level() is safe to call at any time.
    - Call initialize() before starting concurrent writers. Re-initializing
      while other threads are logging is undefined as to which sinks an
      in-flight write observes.
    - Quiesce writers before stop().
"""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from .config import RouterFormatter, diagnostics_logger
from .severity import Severity, LEVEL_NONE, parse_level_mask
from .sinks import Sink, DiscardSink, ConsoleSink, FileSink, TeeSink, SinkHandler
from ..exceptions import DirectoryCreationError, FileCreationError, FileCloseError

DATE_DIRECTORY_FORMAT = "%Y-%m-%d"
FILE_STAMP_FORMAT = "%Y-%m-%dT%H-%M-%S"
FATAL_EXIT_STATUS = 1

# Frames between the caller and Logger.log: the public method, then _emit.
_CALLER_STACKLEVEL = 3


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def log_file_path(base_directory: Union[str, Path], now: datetime) -> Path:
    """Return {base}/{YYYY-MM-DD}/{YYYY-MM-DDTHH-MM-SS}.txt for the given UTC time."""
    date_directory = now.strftime(DATE_DIRECTORY_FORMAT)
    file_name = f"{now.strftime(FILE_STAMP_FORMAT)}.txt".replace(" ", "-")
    return Path(base_directory) / date_directory / file_name


def resolve_bindings(level_mask: int, file_sink: Optional[Sink] = None) -> Dict[Severity, Sink]:
    """
    Compute the sink for each severity from the level mask.

    Bits cascade towards higher severities: the Trace bit turns on console
    output for all four severities, Info for Info/Warning/Error, Warning for
    Warning/Error, Error for Error alone. Bits are ORed, so the lowest set bit
    acts as a verbosity floor. Console-bound severities are then teed with
    the file sink; discarded severities never reach the file.
    """
    console = {severity: None for severity in Severity}

    for floor in Severity:
        if level_mask & floor.bit:
            for severity in Severity:
                if severity.bit >= floor.bit:
                    console[severity] = ConsoleSink(severity.stream)

    bindings: Dict[Severity, Sink] = {}
    for severity, console_sink in console.items():
        if console_sink is None:
            bindings[severity] = DiscardSink()
        elif file_sink is not None:
            bindings[severity] = TeeSink(file_sink, console_sink)
        else:
            bindings[severity] = console_sink
    return bindings


class _Channel(logging.Logger):
    """Standalone logger gated only by its handler; ignores logging.disable()."""

    def isEnabledFor(self, level):
        return True


def _build_channel(severity: Severity, sink: Sink, show_caller: bool) -> logging.Logger:
    # Not registered with the logging manager.
    channel = _Channel(f"log-router.{severity.name.lower()}", level=1)
    channel.propagate = False
    if isinstance(sink, DiscardSink):
        handler = logging.NullHandler()
    else:
        handler = SinkHandler(sink)
        handler.setFormatter(RouterFormatter(severity.prefix, show_caller))
    channel.addHandler(handler)
    return channel


class LogRouter:
    """
    Routes leveled log calls to console streams and a per-run log file.

    Starts uninitialized: every severity discards and the active level is 0.
    Construct one at the application's entry point and pass it to whatever
    needs to log, or use the shared instance from get_router().
    """

    def __init__(
        self,
        show_caller: bool = True,
        clock: Optional[Callable[[], datetime]] = None,
        terminate: Optional[Callable[[int], None]] = None,
    ):
        self.show_caller = show_caller
        self._clock = clock or _utc_now
        self._terminate = terminate or os._exit
        self._level_mask = LEVEL_NONE
        self._file_sink: Optional[FileSink] = None
        self._log_path: Optional[Path] = None
        self._publish(resolve_bindings(LEVEL_NONE))

    @classmethod
    def from_settings(cls, settings, **kwargs) -> "LogRouter":
        """Create a router from RouterSettings and initialize it."""
        router = cls(show_caller=settings.show_caller, **kwargs)
        router.initialize(settings.level_mask, settings.base_directory)
        return router

    def _publish(self, bindings: Dict[Severity, Sink]) -> None:
        channels = {
            severity: _build_channel(severity, sink, self.show_caller)
            for severity, sink in bindings.items()
        }
        # Rebinding the dicts is a single reference swap; readers see old or new.
        self._sinks = bindings
        self._channels = channels

    @property
    def active_level(self) -> int:
        return self._level_mask

    @property
    def log_path(self) -> Optional[Path]:
        """Path of the log file opened by the last successful initialize()."""
        return self._log_path

    @property
    def is_initialized(self) -> bool:
        return self._log_path is not None

    def sink_for(self, severity: Severity) -> Sink:
        return self._sinks[severity]

    def get_active_level(self) -> int:
        return self._level_mask

    def initialize(self, level_mask, base_directory: Union[str, Path]) -> Path:
        """
        Create this run's log file and bind the sink for every severity.

        Args:
            level_mask: bitmask of LEVEL_* constants (or anything parse_level_mask accepts)
            base_directory: root under which the dated directory is created

        Returns:
            Path of the newly created log file

        Raises:
            DirectoryCreationError: the dated directory could not be created
            FileCreationError: the log file could not be created
            ValueError: the level mask is invalid

        On failure the previous bindings, level and file are left untouched.
        File names have one-second resolution: a second call within the same
        UTC second reuses the path and truncates what the first run wrote.
        """
        level_mask = parse_level_mask(level_mask)
        path = log_file_path(base_directory, self._clock())

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreationError(path.parent, e) from e

        try:
            handle = open(path, "w", encoding="utf-8")
        except OSError as e:
            raise FileCreationError(path, e) from e

        previous = self._file_sink
        file_sink = FileSink(handle)
        self._publish(resolve_bindings(level_mask, file_sink))
        self._file_sink = file_sink
        self._log_path = path
        self._level_mask = level_mask

        if previous is not None and not previous.closed:
            try:
                previous.close()
            except OSError as e:
                diagnostics_logger.warning(f"Failed to close previous log file: {e}", extra={
                    "router": {"operation": "reinitialize", "path": getattr(previous.handle, "name", None)}
                })

        diagnostics_logger.info("Log router initialized", extra={
            "router": {
                "operation": "initialize",
                "level_mask": level_mask,
                "log_path": str(path),
                "bindings": {s.name: repr(sink) for s, sink in self._sinks.items()}
            }
        })
        return path

    def stop(self) -> None:
        """
        Close the owned log file. A no-op when no file was ever opened.

        Sink bindings stay in place: console output keeps working and writes
        to the closed file are skipped.

        Raises:
            FileCloseError: closing the file failed
        """
        if self._file_sink is None or self._file_sink.closed:
            return
        try:
            self._file_sink.close()
        except OSError as e:
            raise FileCloseError(self._log_path, e) from e
        diagnostics_logger.info("Log router stopped", extra={
            "router": {"operation": "stop", "log_path": str(self._log_path)}
        })

    def _emit(self, severity: Severity, fmt: str, args) -> None:
        self._channels[severity].log(severity.levelno, fmt, *args, stacklevel=_CALLER_STACKLEVEL)

    def write(self, severity: Severity, fmt: str, *args) -> None:
        """Format fmt % args and write it to the sink bound to severity."""
        self._emit(severity, fmt, args)

    def trace(self, fmt: str, *args) -> None:
        self._emit(Severity.TRACE, fmt, args)

    def info(self, fmt: str, *args) -> None:
        self._emit(Severity.INFO, fmt, args)

    def warning(self, fmt: str, *args) -> None:
        self._emit(Severity.WARNING, fmt, args)

    def error(self, fmt: str, *args) -> None:
        self._emit(Severity.ERROR, fmt, args)

    def fatal(self, fmt: str, *args) -> None:
        """
        Write fmt % args as an Error, then terminate the process with status 1.

        Only the Error sink is flushed; nothing else in the process is.
        """
        self._emit(Severity.ERROR, fmt, args)
        for handler in self._channels[Severity.ERROR].handlers:
            handler.flush()
        self._terminate(FATAL_EXIT_STATUS)

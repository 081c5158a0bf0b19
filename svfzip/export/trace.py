"""
Export trace - structured log lines captured during one export call
"""
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterator, Optional, Union
import logging

logger = logging.getLogger(__name__)

TraceSink = Callable[[str], None]


class TraceChannel:
    """
    Trace handle carried by an ExportConfig.

    Lines are forwarded to the sink only while the channel is open; the
    orchestrator opens it for the duration of the engine call. Sink errors
    are logged and never reach the engine.
    """

    def __init__(self, sink: Optional[TraceSink] = None):
        self._sink = sink
        self._open = False
        self.close_count = 0

    @property
    def is_open(self) -> bool:
        return self._open

    def __call__(self, line: str):
        if not self._open:
            logger.debug(f"Trace line dropped outside export: {line}")
            return
        if self._sink is None:
            return
        try:
            self._sink(line)
        except Exception as e:
            logger.warning(f"Trace sink failed: {e}")

    def open(self):
        self._open = True

    def close(self):
        if not self._open:
            return
        self._open = False
        self.close_count += 1
        close = getattr(self._sink, "close", None)
        if callable(close):
            try:
                close()
            except Exception as e:
                logger.warning(f"Trace sink close failed: {e}")


@contextmanager
def trace_context(channel: TraceChannel) -> Iterator[TraceChannel]:
    """Open the channel and close it on every exit path"""
    channel.open()
    try:
        yield channel
    finally:
        channel.close()


class RuntimeLog:
    """
    Trace sink writing timestamped lines to a per-export log file.

    Lines are mirrored to the module logger at DEBUG level.
    """

    def __init__(self, log_dir: Union[str, Path], name: Optional[str] = None):
        self.log_dir = Path(log_dir)
        stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        self.path = self.log_dir / f"{name or 'export'}-{stamp}.log"
        self._file = None

    def __call__(self, line: str):
        if self._file is None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self._file = open(self.path, "a", encoding="utf-8")
        self._file.write(f"{datetime.now().isoformat(timespec='seconds')} {line}\n")
        logger.debug(line)

    def close(self):
        if self._file is not None:
            self._file.close()
            self._file = None

"""
Export Orchestrator - Runs one export and classifies the outcome

Protocol:
1. Open the trace context bound to the config's trace channel
2. Start a monotonic timer
3. Call the engine once (no retries)
4. Stop the timer, close the trace, return an ExportOutcome

Engine failures never propagate past `run`.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any, Callable
import logging
import time
import traceback

from ..errors import EngineFailureKind, ExportEngineError
from .config import ExportConfig
from .engine import ExportEngine
from .trace import trace_context

logger = logging.getLogger(__name__)


class ExportState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class OutcomeKind(Enum):
    SUCCESS = "success"
    RECOVERABLE_FAILURE = "recoverable_failure"
    HOST_FAILURE = "host_failure"
    UNKNOWN_FAILURE = "unknown_failure"


@dataclass(frozen=True)
class ExportOutcome(ABC):
    """Result of one export attempt"""
    kind = None
    exit_code = 1

    @property
    def succeeded(self) -> bool:
        return self.kind == OutcomeKind.SUCCESS

    @property
    @abstractmethod
    def message(self) -> str:
        """User-facing description of the outcome"""
        pass


@dataclass(frozen=True)
class Success(ExportOutcome):
    duration: timedelta
    kind = OutcomeKind.SUCCESS
    exit_code = 0

    @property
    def message(self) -> str:
        return f"Export succeeded in {self.duration}"


@dataclass(frozen=True)
class RecoverableFailure(ExportOutcome):
    """I/O-class failure; the user may retry with another path"""
    reason: str
    kind = OutcomeKind.RECOVERABLE_FAILURE
    exit_code = 1

    @property
    def message(self) -> str:
        return f"Failed to save file: {self.reason}"


@dataclass(frozen=True)
class HostFailure(ExportOutcome):
    kind = OutcomeKind.HOST_FAILURE
    exit_code = 3

    @property
    def message(self) -> str:
        return "The host application could not complete the export, please try again later"


@dataclass(frozen=True)
class UnknownFailure(ExportOutcome):
    detail: str
    kind = OutcomeKind.UNKNOWN_FAILURE
    exit_code = 4

    @property
    def message(self) -> str:
        return self.detail


class ExportOrchestrator:
    """
    Invokes the export engine for one view.

    Callers must not start a second `run` while one is in flight; the
    state is exposed for the caller to enforce that (e.g. by disabling
    the control that triggers the export).
    """

    def __init__(self, view: Any = None, clock: Callable[[], float] = time.monotonic):
        self.view = view
        self._clock = clock
        self.state = ExportState.IDLE
        self.elapsed: float = 0.0

    def run(self, config: ExportConfig, engine: ExportEngine) -> ExportOutcome:
        """
        Run the export.

        Returns:
            Success with the duration truncated to whole seconds, or the
            failure outcome matching the engine error
        """
        self.state = ExportState.RUNNING
        logger.info(f"Starting export to {config.target_path or '<stream>'} ({config.export_type.value})")

        start = self._clock()
        try:
            with trace_context(config.trace):
                engine.export_to_svf(self.view, config)
        except Exception as e:
            self.elapsed = self._clock() - start
            self.state = ExportState.FAILED
            outcome = self._classify(e)
            logger.error(f"Export failed after {self.elapsed:.1f}s: {outcome.kind.value}: {e}")
            return outcome

        self.elapsed = self._clock() - start
        self.state = ExportState.SUCCEEDED
        duration = timedelta(seconds=int(self.elapsed))
        logger.info(f"Export completed in {duration}")
        return Success(duration=duration)

    @staticmethod
    def _classify(error: Exception) -> ExportOutcome:
        if isinstance(error, ExportEngineError):
            kind = error.kind
        elif isinstance(error, OSError):
            kind = EngineFailureKind.IO
        else:
            kind = EngineFailureKind.UNKNOWN

        if kind == EngineFailureKind.IO:
            return RecoverableFailure(reason=str(error))
        if kind == EngineFailureKind.HOST:
            return HostFailure()
        detail = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        return UnknownFailure(detail=detail)

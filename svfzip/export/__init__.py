# Export module
# Builds immutable export configurations and runs them through an
# SVF export engine:
# - ExportConfigBuilder: feature selection -> ExportConfig
# - ExportOrchestrator: engine call, timing, outcome classification
# - RuntimeLog: per-export trace file

from .config import (
    ExportConfig,
    ExportConfigBuilder,
    ExportType,
    SVFZIP_EXTENSION,
    normalize_target_path,
    resolve_export_type,
)
from .engine import ExportEngine, DryRunEngine, load_engine
from .orchestrator import (
    ExportOrchestrator,
    ExportOutcome,
    ExportState,
    OutcomeKind,
    Success,
    RecoverableFailure,
    HostFailure,
    UnknownFailure,
)
from .trace import TraceChannel, RuntimeLog, trace_context

__all__ = [
    "ExportConfig",
    "ExportConfigBuilder",
    "ExportType",
    "SVFZIP_EXTENSION",
    "normalize_target_path",
    "resolve_export_type",
    "ExportEngine",
    "DryRunEngine",
    "load_engine",
    "ExportOrchestrator",
    "ExportOutcome",
    "ExportState",
    "OutcomeKind",
    "Success",
    "RecoverableFailure",
    "HostFailure",
    "UnknownFailure",
    "TraceChannel",
    "RuntimeLog",
    "trace_context",
]

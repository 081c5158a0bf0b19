"""
Exception hierarchy for the SVF export core
"""
from enum import Enum


class SvfExportError(Exception):
    """Base class for all export errors"""


class ConfigErrorKind(Enum):
    EMPTY_TARGET_PATH = "empty_target_path"
    UNSUPPORTED_EXPORT_TYPE = "unsupported_export_type"


class ConfigError(SvfExportError):
    """Export configuration rejected before the engine is invoked"""

    def __init__(self, kind: ConfigErrorKind, message: str = ""):
        self.kind = kind
        super().__init__(message or kind.value)


class EngineFailureKind(Enum):
    IO = "io"             # Target unwritable, disk full, invalid path
    HOST = "host"         # Host application failed for this operation
    UNKNOWN = "unknown"


class ExportEngineError(SvfExportError):
    """
    Raised by export engines.

    Engines translate their own failures into one of the closed
    EngineFailureKind values; the orchestrator maps the kind to an outcome.
    """

    def __init__(self, kind: EngineFailureKind, message: str = ""):
        self.kind = kind
        super().__init__(message)


class SettingsStoreError(SvfExportError):
    """Persisted settings could not be written"""

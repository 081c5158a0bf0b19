# SVF export core
# Turns feature selections into an immutable export configuration,
# dispatches it to a scene-export engine and classifies the outcome.

from .errors import (
    SvfExportError,
    ConfigError,
    ConfigErrorKind,
    ExportEngineError,
    EngineFailureKind,
    SettingsStoreError,
)
from .session import ExportSession

__all__ = [
    "SvfExportError",
    "ConfigError",
    "ConfigErrorKind",
    "ExportEngineError",
    "EngineFailureKind",
    "SettingsStoreError",
    "ExportSession",
]

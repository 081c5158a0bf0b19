"""
Export Engine - Boundary to the scene-export engine

The geometry tessellation and SVF encoding live in an external engine.
Engines implement `export_to_svf(view, config)` and report failures by
raising ExportEngineError with one of the EngineFailureKind values.
"""
from importlib import import_module
from pathlib import Path
from typing import Any, Protocol
import json
import logging
import zipfile

from ..errors import EngineFailureKind, ExportEngineError
from .config import ExportConfig, ExportType

logger = logging.getLogger(__name__)

MANIFEST_NAME = "manifest.json"


class ExportEngine(Protocol):
    def export_to_svf(self, view: Any, config: ExportConfig) -> None:
        ...


class DryRunEngine:
    """
    Reference engine that packages a manifest of the configuration.

    No geometry is produced; the package layout (zip or folder) and the
    failure reporting match what a real engine does, so sessions and the
    CLI can run without a host CAD application.
    """

    def export_to_svf(self, view: Any, config: ExportConfig) -> None:
        manifest = {"view": str(view) if view is not None else None, **config.to_dict()}
        payload = json.dumps(manifest, indent=2)
        config.trace(f"Exporting view {manifest['view']} to {config.target_path}")

        try:
            if config.export_type == ExportType.FOLDER:
                self._write_folder(Path(config.target_path), payload)
            elif config.output_stream is not None:
                self._write_zip(config.output_stream, payload)
            else:
                target = Path(config.target_path)
                target.parent.mkdir(parents=True, exist_ok=True)
                self._write_zip(target, payload)
        except OSError as e:
            raise ExportEngineError(EngineFailureKind.IO, str(e)) from e

        config.trace(f"Wrote {len(config.active_features)} features to manifest")

    def _write_zip(self, target, payload: str):
        with zipfile.ZipFile(target, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            zf.writestr(MANIFEST_NAME, payload)

    def _write_folder(self, target: Path, payload: str):
        target.mkdir(parents=True, exist_ok=True)
        (target / MANIFEST_NAME).write_text(payload, encoding="utf-8")


def load_engine(path: str) -> ExportEngine:
    """
    Instantiate an engine from a "module:attr" path.

    The attribute may be a class or a zero-argument factory.
    """
    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        raise ValueError(f"Invalid engine path: {path!r} (expected 'module:attr')")

    factory = getattr(import_module(module_name), attr)
    engine = factory()
    if not hasattr(engine, "export_to_svf"):
        raise TypeError(f"{path} does not provide export_to_svf")
    logger.info(f"Loaded export engine: {path}")
    return engine

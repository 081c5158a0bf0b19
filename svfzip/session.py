"""
Export Session - The export dialog workflow without the widgets

1. Load the last target path and feature selection
2. Apply the user's toggles
3. Build the export configuration
4. Run the export
5. Save the target path and selection, whatever the outcome
"""
from datetime import timedelta
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Union
import logging

from .errors import SettingsStoreError
from .export import (
    ExportConfigBuilder,
    ExportEngine,
    ExportOrchestrator,
    ExportOutcome,
    ExportType,
    RuntimeLog,
    SVFZIP_EXTENSION,
    normalize_target_path,
    resolve_export_type,
)
from .features import (
    FeatureSet,
    FeatureType,
    apply_interactive_toggle,
    create_default_catalog,
    seed_from_persisted,
    snapshot_selected_types,
)
from .storage import SettingsGateway

logger = logging.getLogger(__name__)


class ExportSession:
    """
    One export dialog session for a single view.

    The feature set is owned by the session; all selection changes go
    through `toggle`.
    """

    def __init__(
        self,
        gateway: SettingsGateway,
        engine: ExportEngine,
        view: Any = None,
        element_ids: Optional[Iterable[int]] = None,
        export_type: Union[ExportType, str] = ExportType.ZIP,
        use_share_texture: bool = False,
        runtime_log_dir: Optional[Union[str, Path]] = None,
        default_extension: str = SVFZIP_EXTENSION,
        orchestrator: Optional[ExportOrchestrator] = None,
        progress_callback: Optional[Callable[[str], None]] = None,
    ):
        self.gateway = gateway
        self.engine = engine
        self.view = view
        self.element_ids = frozenset(element_ids or ())
        self.export_type = resolve_export_type(export_type)
        self.use_share_texture = use_share_texture
        self.runtime_log_dir = Path(runtime_log_dir) if runtime_log_dir else None
        self.default_extension = default_extension
        self.orchestrator = orchestrator or ExportOrchestrator(view)
        self._progress_callback = progress_callback
        self._builder = ExportConfigBuilder()

        self.export_duration: Optional[timedelta] = None
        self.last_outcome: Optional[ExportOutcome] = None

        last = gateway.load_last_config()
        self.target_path: str = last.target_path
        self.features: FeatureSet = create_default_catalog()
        if not self.element_ids:
            self.features.set_available(FeatureType.ONLY_SELECTED, False)
        seed_from_persisted(self.features, last.feature_types)

    def toggle(self, feature_type, selected: bool):
        apply_interactive_toggle(self.features, feature_type, selected)

    def selected_types(self):
        return snapshot_selected_types(self.features)

    def export(self, target_path: Optional[Union[str, Path]] = None) -> ExportOutcome:
        """
        Build the configuration and run the export.

        Raises:
            ConfigError: before anything is exported or saved
        """
        if target_path is not None:
            self.target_path = str(target_path)

        trace_sink = RuntimeLog(self.runtime_log_dir) if self.runtime_log_dir else None
        config = self._builder.build(
            target_path=normalize_target_path(self.target_path, self.export_type, self.default_extension),
            export_type=self.export_type,
            feature_set=self.features,
            restricted_element_ids=self.element_ids,
            use_share_texture=self.use_share_texture,
            trace_sink=trace_sink,
        )
        self.target_path = config.target_path

        self._report_progress("Exporting...")
        outcome = self.orchestrator.run(config, self.engine)
        self.last_outcome = outcome
        if outcome.succeeded:
            self.export_duration = outcome.duration

        self._save()
        self._report_progress(outcome.message)
        return outcome

    def _save(self):
        try:
            self.gateway.save_last_config(self.target_path, self.selected_types())
        except SettingsStoreError as e:
            logger.error(f"Export settings not saved: {e}")

    def _report_progress(self, message: str):
        if self._progress_callback:
            self._progress_callback(message)

"""
Export Config - Immutable configuration handed to the export engine
"""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, BinaryIO, FrozenSet, Iterable, Mapping, Optional, Union
import logging

from ..errors import ConfigError, ConfigErrorKind
from ..features import FeatureSet, FeatureType
from .trace import TraceChannel, TraceSink

logger = logging.getLogger(__name__)

SVFZIP_EXTENSION = ".svfzip"


class ExportType(Enum):
    ZIP = "zip"           # Single .svfzip package
    FOLDER = "folder"     # Unpacked SVF folder


@dataclass(frozen=True)
class ExportConfig:
    """Export parameters; read-only once built"""
    target_path: str
    export_type: ExportType
    use_share_texture: bool
    active_features: Mapping[FeatureType, bool]
    trace: TraceChannel
    element_ids: Optional[FrozenSet[int]] = None
    output_stream: Optional[BinaryIO] = None

    def has_feature(self, feature_type: FeatureType) -> bool:
        return self.active_features.get(feature_type, False)

    def to_dict(self) -> dict:
        return {
            "target_path": self.target_path,
            "export_type": self.export_type.value,
            "use_share_texture": self.use_share_texture,
            "features": [t.value for t in self.active_features],
            "element_ids": sorted(self.element_ids) if self.element_ids is not None else None,
            "output_stream": self.output_stream is not None,
        }


def normalize_target_path(
    target_path: Union[str, Path],
    export_type: ExportType = ExportType.ZIP,
    extension: str = SVFZIP_EXTENSION,
) -> str:
    """Append the package extension to zip targets that have none"""
    target_path = str(target_path).strip()
    if target_path and export_type == ExportType.ZIP and not Path(target_path).suffix:
        target_path += extension if extension.startswith(".") else f".{extension}"
    return target_path


def resolve_export_type(export_type: Any) -> ExportType:
    if isinstance(export_type, ExportType):
        return export_type
    try:
        return ExportType(str(export_type).lower())
    except ValueError:
        raise ConfigError(
            ConfigErrorKind.UNSUPPORTED_EXPORT_TYPE, f"Unsupported export type: {export_type}"
        )


class ExportConfigBuilder:
    """Assembles an ExportConfig from the session's choices"""

    def build(
        self,
        target_path: Union[str, Path, None],
        export_type: Union[ExportType, str],
        feature_set: FeatureSet,
        restricted_element_ids: Optional[Iterable[int]] = None,
        use_share_texture: bool = False,
        trace_sink: Optional[TraceSink] = None,
        output_stream: Optional[BinaryIO] = None,
    ) -> ExportConfig:
        """
        Build the configuration.

        Args:
            target_path: Output file path (advisory when output_stream is given)
            export_type: Package variant
            feature_set: Session feature set; only selected and enabled features are active
            restricted_element_ids: Element ids used when OnlySelected is active, ignored otherwise
            use_share_texture: Share texture files between exports
            trace_sink: Callable receiving trace lines during the export
            output_stream: Optional alternate sink for the package

        Raises:
            ConfigError: configuration cannot be exported
        """
        export_type = resolve_export_type(export_type)

        target_path = str(target_path).strip() if target_path is not None else ""
        if not target_path and output_stream is None:
            raise ConfigError(ConfigErrorKind.EMPTY_TARGET_PATH, "Select an output path first")

        active = {t: True for t in feature_set.active_types()}

        element_ids = None
        if active.get(FeatureType.ONLY_SELECTED, False):
            element_ids = frozenset(restricted_element_ids or ())
        elif restricted_element_ids:
            logger.debug("Restricted element ids ignored: OnlySelected is not active")

        return ExportConfig(
            target_path=target_path,
            export_type=export_type,
            use_share_texture=bool(use_share_texture),
            active_features=MappingProxyType(active),
            trace=TraceChannel(trace_sink),
            element_ids=element_ids,
            output_stream=output_stream,
        )


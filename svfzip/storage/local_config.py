"""
Local export settings - last target path and selected features
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Protocol, Union
import logging

from pydantic import BaseModel, Field, ValidationError

from ..errors import SettingsStoreError
from ..features import FeatureType

logger = logging.getLogger(__name__)


class LocalConfig(BaseModel):
    """Persisted record; feature codes are kept raw so unknown ones survive loading"""
    last_target_path: str = ""
    features: List[Union[str, int]] = Field(default_factory=list)


@dataclass
class LastExportConfig:
    target_path: str = ""
    feature_types: list = field(default_factory=list)


class SettingsGateway(Protocol):
    def load_last_config(self) -> LastExportConfig:
        ...

    def save_last_config(self, target_path: str, feature_types: Iterable) -> None:
        ...


class JsonSettingsGateway:
    """Stores LocalConfig as a JSON file"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load_last_config(self) -> LastExportConfig:
        if not self.path.exists():
            return LastExportConfig()

        try:
            record = LocalConfig.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable settings file {self.path}: {e}")
            return LastExportConfig()

        return LastExportConfig(
            target_path=record.last_target_path,
            feature_types=list(record.features),
        )

    def save_last_config(self, target_path: str, feature_types: Iterable) -> None:
        codes = [t.value if isinstance(t, FeatureType) else t for t in feature_types]
        record = LocalConfig(last_target_path=target_path or "", features=codes)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(record.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            raise SettingsStoreError(f"Failed to save settings to {self.path}: {e}") from e
        logger.debug(f"Saved export settings to {self.path}")

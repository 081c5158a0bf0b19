"""
Application settings and configuration
"""
from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application configuration"""

    # Paths
    base_dir: Path = Path(__file__).parent.parent
    data_dir: Path = Field(default_factory=lambda: Path(__file__).parent.parent / "data")
    local_config_file: Optional[Path] = None  # Defaults to data_dir/local_config.json
    runtime_log_dir: Optional[Path] = None    # Defaults to data_dir/logs

    # Export defaults
    default_export_type: str = "zip"
    default_extension: str = ".svfzip"
    use_share_texture: bool = False

    # Engine factory as "module:attr"
    engine: str = "svfzip.export.engine:DryRunEngine"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    class Config:
        env_prefix = "SVFZIP_"
        env_file = ".env"

    def local_config_path(self) -> Path:
        return self.local_config_file or self.data_dir / "local_config.json"

    def runtime_log_path(self) -> Path:
        return self.runtime_log_dir or self.data_dir / "logs"


settings = Settings()

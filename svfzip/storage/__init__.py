# Storage module
# Persists the last export target and feature selection

from .local_config import LocalConfig, LastExportConfig, SettingsGateway, JsonSettingsGateway

__all__ = ["LocalConfig", "LastExportConfig", "SettingsGateway", "JsonSettingsGateway"]

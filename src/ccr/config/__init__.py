"""Router configuration — schema and loader."""

from ccr.config.errors import ConfigError
from ccr.config.loader import DEFAULT_CONFIG_PATH, SettingsLoader
from ccr.config.models import ProxySettings, RouterSettings, TelemetrySettings

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ConfigError",
    "ProxySettings",
    "RouterSettings",
    "SettingsLoader",
    "TelemetrySettings",
]

"""
Configuration management for Currency Rates.
Loads optional user settings (API endpoint, refresh period, proxy, appearance).
"""

import json
import logging
import math
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

APP_DIR_NAME = "currency-rates"


def default_config_dir() -> Path:
    """Per-user configuration directory for the app."""
    if os.name == "nt":  # Windows
        return Path(os.environ.get("APPDATA", "")) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


@dataclass
class ProxyConfig:
    """Proxy configuration settings."""
    enabled: bool = False
    type: str = "http"  # "http" or "socks5"
    host: str = "127.0.0.1"
    port: int = 7890
    username: str = ""
    password: str = ""

    def get_proxy_url(self) -> Optional[str]:
        """Get proxy URL string for requests."""
        if not self.enabled:
            return None

        auth = ""
        if self.username and self.password:
            auth = f"{self.username}:{self.password}@"

        protocol = "socks5" if self.type == "socks5" else "http"
        return f"{protocol}://{auth}{self.host}:{self.port}"


@dataclass
class AppSettings:
    """Application settings."""
    api_url: str = "https://economia.awesomeapi.com.br/last"
    update_period_seconds: float = 60
    request_timeout: float = 10

    theme_mode: str = "light"  # "light" or "dark"
    always_on_top: bool = False

    proxy: ProxyConfig = field(default_factory=ProxyConfig)


class SettingsManager:
    """Loads application settings from the user's config directory."""

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            config_dir = default_config_dir()

        self.config_dir = config_dir
        self.config_file = config_dir / "settings.json"
        self.settings = AppSettings()

    def load(self) -> AppSettings:
        """
        Load settings from file.

        A missing file yields the defaults. An unreadable or malformed file is
        logged and also yields the defaults.

        Returns:
            Loaded settings
        """
        if not self.config_file.exists():
            logger.debug(f"No settings file at {self.config_file}, using defaults")
            self.settings = AppSettings()
            return self.settings

        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                data = json.load(f)

            if not isinstance(data, dict):
                raise TypeError("settings root must be an object")

            proxy_data = data.pop("proxy", {})
            if not isinstance(proxy_data, dict):
                proxy_data = {}
            proxy_config = ProxyConfig(**proxy_data)

            # Only keep recognized fields in data
            recognized_fields = {f.name for f in fields(AppSettings)} - {"proxy"}
            filtered_data = {k: v for k, v in data.items() if k in recognized_fields}

            settings = AppSettings(proxy=proxy_config, **filtered_data)
            self._validate(settings)
            self.settings = settings
        except (OSError, json.JSONDecodeError, TypeError, ValueError) as e:
            logger.error(f"Error loading settings from {self.config_file}: {e}")
            logger.warning("Using default settings")
            self.settings = AppSettings()

        return self.settings

    @staticmethod
    def _is_number(value) -> bool:
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    @classmethod
    def _validate(cls, settings: AppSettings) -> None:
        for name in ("update_period_seconds", "request_timeout"):
            value = getattr(settings, name)
            if not cls._is_number(value):
                raise TypeError(f"{name} must be a number, got {type(value).__name__}")
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be positive")
        if not isinstance(settings.api_url, str) or not settings.api_url:
            raise ValueError("api_url must be a non-empty string")
        if not isinstance(settings.theme_mode, str):
            raise TypeError("theme_mode must be a string")
        if not isinstance(settings.always_on_top, bool):
            raise TypeError("always_on_top must be true or false")

        proxy = settings.proxy
        if not isinstance(proxy.enabled, bool):
            raise TypeError("proxy.enabled must be true or false")
        if proxy.type not in ("http", "socks5"):
            raise ValueError(f"Unsupported proxy type: {proxy.type!r}")
        if not isinstance(proxy.port, int) or isinstance(proxy.port, bool):
            raise TypeError("proxy.port must be an integer")
        for name in ("host", "username", "password"):
            if not isinstance(getattr(proxy, name), str):
                raise TypeError(f"proxy.{name} must be a string")


# Global settings instance
_settings_manager: Optional[SettingsManager] = None


def get_settings_manager() -> SettingsManager:
    """Get the global settings manager instance."""
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
        _settings_manager.load()
    return _settings_manager

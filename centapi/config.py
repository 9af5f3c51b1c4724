"""
Configuration management for the Centrifugo API client.

Settings are stored as JSON in ~/.centapi/config.json (or the directory
given by CENT_CONFIG_DIR) and can be overridden by environment variables:

    CENT_SERVER_URL   - Server URL (default: http://localhost:8000)
    CENT_SECRET       - Project secret used to sign API requests
    CENT_TIMEOUT      - Request timeout in seconds
    CENT_INSECURE     - "1"/"true" to skip request signing
"""

import json
import logging
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_SERVER_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 5
DEFAULT_POOL_SIZE = 1024
CONFIG_FILE_NAME = "config.json"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class CentConfig:
    """Client configuration."""
    server_url: str = DEFAULT_SERVER_URL
    secret: str = ""
    timeout: float = DEFAULT_TIMEOUT
    insecure: bool = False  # Skip X-API-Sign, for endpoints protected at network level
    verify_ssl: bool = True
    pool_connections: int = DEFAULT_POOL_SIZE
    pool_maxsize: int = DEFAULT_POOL_SIZE
    connect_retries: int = 0

    def is_configured(self) -> bool:
        """Check whether the client has enough settings to talk to a server."""
        if not self.server_url:
            return False
        return self.insecure or bool(self.secret)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CentConfig":
        """Build a config, ignoring keys this version doesn't know."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


class ConfigManager:
    """Loads, caches and persists the client configuration."""

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            env_dir = os.environ.get("CENT_CONFIG_DIR")
            config_dir = Path(env_dir) if env_dir else Path.home() / ".centapi"
        self.config_dir = Path(config_dir)
        self._config: Optional[CentConfig] = None

    def get_config_path(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    def load(self) -> CentConfig:
        """Load configuration from disk and apply environment overrides."""
        path = self.get_config_path()
        data: Dict[str, Any] = {}

        if path.exists():
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as e:
                raise ConfigurationError(
                    f"Cannot read configuration file {path}",
                    details=str(e)
                )
            if not isinstance(data, dict):
                raise ConfigurationError(f"Invalid configuration file {path}")

        config = CentConfig.from_dict(data)
        self._apply_env(config)
        self._config = config
        return config

    def _apply_env(self, config: CentConfig) -> None:
        server_url = os.environ.get("CENT_SERVER_URL")
        if server_url:
            config.server_url = server_url

        secret = os.environ.get("CENT_SECRET")
        if secret:
            config.secret = secret

        timeout = os.environ.get("CENT_TIMEOUT")
        if timeout:
            try:
                config.timeout = float(timeout)
            except ValueError:
                raise ConfigurationError(f"Invalid CENT_TIMEOUT value: {timeout!r}")

        insecure = os.environ.get("CENT_INSECURE")
        if insecure:
            config.insecure = insecure.strip().lower() in _TRUE_VALUES

    def get(self) -> CentConfig:
        """Get the cached configuration, loading it on first use."""
        if self._config is None:
            return self.load()
        return self._config

    def save(self, config: CentConfig) -> None:
        """Persist configuration to disk."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        path = self.get_config_path()
        path.write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
        try:
            # The file holds the project secret
            path.chmod(0o600)
        except OSError as e:
            logger.debug(f"Could not restrict permissions on {path}: {e}")
        self._config = config

    def update(self, **kwargs: Any) -> CentConfig:
        """Update selected settings and save."""
        config = self.get()
        for key, value in kwargs.items():
            if not hasattr(config, key):
                raise ConfigurationError(f"Unknown configuration key: {key}")
            setattr(config, key, value)
        self.save(config)
        return config

    def clear(self) -> None:
        """Remove the stored configuration file."""
        path = self.get_config_path()
        if path.exists():
            path.unlink()
        self._config = None


_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_dir: Optional[Path] = None) -> ConfigManager:
    """Get the global configuration manager (a new one if config_dir is given)."""
    global _config_manager
    if config_dir is not None:
        _config_manager = ConfigManager(config_dir)
    elif _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def get_config() -> CentConfig:
    """Get the global configuration."""
    return get_config_manager().get()

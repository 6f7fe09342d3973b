"""Configuration management for the log-cache CLI."""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from ..core.constants import EnvVars
from ..core.exceptions import ConfigurationError
from ..io.directories import get_config_file
from ..io.logger import get_logger
from .schema import EndpointConfig, LogCacheConfig, MetaSettings, TailSettings

logger = get_logger("config")


class Config:
    """Configuration manager for the log-cache CLI.

    Values are layered: built-in defaults, then the YAML file, then
    environment variables. Command-line flags are applied by the caller with
    :meth:`set`.
    """

    DEFAULT_CONFIG = {
        "endpoint": {
            "addr": None,
            "api_addr": None,
            "access_token": None,
            "skip_auth": False,
        },
        "tail": {
            "timeout": 5.0,
            "poll_interval": 1.0,
            "lines": 10,
            "retention": 5.0,
        },
        "meta": {
            "timeout": 10.0,
            "batch_size": 50,
            "scope": "all",
        },
        "logging": {
            "level": "WARNING",
            "file": None,
        },
    }

    def __init__(
        self,
        config_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.config = self._validate(self.DEFAULT_CONFIG, source="defaults")
        self.config_path = None

        if config_path:
            self.load_from_file(Path(config_path))
        else:
            default_path = get_config_file()
            if default_path.exists():
                logger.debug(f"Loading config from: {default_path}")
                self.load_from_file(default_path)

        self.apply_environment(os.environ if environ is None else environ)

    def _validate(self, data: Dict[str, Any], source: str) -> Dict[str, Any]:
        try:
            return LogCacheConfig(**data).model_dump()
        except ValidationError as e:
            logger.error(f"Configuration validation failed: {source}")
            problems = "; ".join(
                f"{' → '.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigurationError(
                f"Invalid configuration in {source}: {problems}"
            ) from e

    def load_from_file(self, path: Path):
        """Load configuration from YAML file."""
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")

        try:
            with open(path) as f:
                user_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Config file {path} is not valid YAML: {e}") from e

        if user_config:
            if not isinstance(user_config, dict):
                raise ConfigurationError(f"Config file {path} must contain a mapping")
            merged_config = self._deep_merge(self.config, user_config)
            self.config = self._validate(merged_config, source=str(path))
            self.config_path = path

    def apply_environment(self, environ: Mapping[str, str]):
        """Apply endpoint and auth overrides from environment variables."""
        overrides: Dict[str, Any] = {}
        if environ.get(EnvVars.ADDR):
            overrides["addr"] = environ[EnvVars.ADDR]
        if environ.get(EnvVars.API_ADDR):
            overrides["api_addr"] = environ[EnvVars.API_ADDR]
        if environ.get(EnvVars.TOKEN):
            overrides["access_token"] = environ[EnvVars.TOKEN]
        if EnvVars.SKIP_AUTH in environ:
            overrides["skip_auth"] = environ[EnvVars.SKIP_AUTH].strip().lower() == "true"

        if overrides:
            logger.debug(f"Environment overrides: {sorted(overrides)}")
            merged_config = self._deep_merge(self.config, {"endpoint": overrides})
            self.config = self._validate(merged_config, source="environment")

    def _deep_merge(self, base: Dict, update: Dict) -> Dict:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in update.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get config value using dot notation (e.g., 'tail.timeout')."""
        keys = key_path.split(".")
        value = self.config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, key_path: str, value: Any):
        """Set config value using dot notation, validating the result."""
        update: Dict[str, Any] = {}
        node = update
        keys = key_path.split(".")
        for key in keys[:-1]:
            node[key] = {}
            node = node[key]
        node[keys[-1]] = value

        merged_config = self._deep_merge(self.config, update)
        self.config = self._validate(merged_config, source=key_path)

    def endpoint(self, require_api: bool = False) -> EndpointConfig:
        """Resolve the endpoint configuration handed to clients.

        When no log-cache address is configured it is derived from the API
        address by replacing the first ``api`` with ``log-cache``.

        Args:
            require_api: Fail when no inventory API address is available

        Raises:
            ConfigurationError: If an address or the access token is missing
        """
        endpoint = EndpointConfig(**self.config["endpoint"])

        if endpoint.addr is None and endpoint.api_addr:
            endpoint = endpoint.model_copy(
                update={"addr": endpoint.api_addr.replace("api", "log-cache", 1)}
            )

        if endpoint.addr is None:
            raise ConfigurationError(
                f"Could not determine Log Cache endpoint: set {EnvVars.ADDR} "
                f"or {EnvVars.API_ADDR}"
            )
        if require_api and endpoint.api_addr is None:
            raise ConfigurationError(
                f"Could not determine API endpoint: set {EnvVars.API_ADDR}"
            )
        if not endpoint.skip_auth and not endpoint.access_token:
            raise ConfigurationError(
                f"Unable to get access token: set {EnvVars.TOKEN} "
                f"or {EnvVars.SKIP_AUTH}=true"
            )

        return endpoint

    def tail_settings(self) -> TailSettings:
        return TailSettings(**self.config["tail"])

    def meta_settings(self) -> MetaSettings:
        return MetaSettings(**self.config["meta"])

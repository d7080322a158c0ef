"""Provides loading and access to configuration settings.

Supports loading from .env files, environment variables, and a YAML
configuration file (e.g., ~/.ghfetch/config.yaml).
Implements the ConfigurationProvider interface.
"""

import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from dotenv import load_dotenv
import yaml

from ghfetch.domain.exceptions import ConfigError
from ghfetch.domain.interfaces.config import ConfigurationProvider

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".ghfetch"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_FILE_NAME = ".env"
ENV_PREFIX = "GHFETCH_"

NO_ATTACH_IP = "0.0.0.0"

DEFAULTS: Dict[str, Any] = {
    'mirror.cache_mode': 'dev',
    'mirror.reqrate': 80,
    'mirror.attach_ip': NO_ATTACH_IP,
    'mirror.cache_dir': str(DEFAULT_CONFIG_DIR / "cache"),
    'mirror.cache_stale_age': 7 * 24 * 60 * 60, # 7 days
    'mirror.token': None,
    'mirror.user_agent': 'ghfetch',
    'mirror.timeout': 30,
    'logging.level': 'INFO',
    'logging.file': None,
    'logging.format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
}


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None


def _coerce_env_value(value: str) -> Any:
    """Converts an environment string to bool/int/float where it looks like one."""
    if value.lower() == 'true':
        return True
    elif value.lower() == 'false':
        return False
    try:
        if '.' in value:
            return float(value)
        else:
            return int(value)
    except (ValueError, TypeError):
        return value


def _lookup_dotted(config: Dict[str, Any], key: str) -> Any:
    """Resolves 'a.b.c' against nested mappings, falling back to a flat key."""
    if key in config:
        return config[key]
    node: Any = config
    for part in key.split('.'):
        if not isinstance(node, dict) or part not in node:
            raise KeyError(key)
        node = node[part]
    return node


class Settings(ConfigurationProvider):
    """Layered configuration: test overrides, environment, .env, YAML, defaults."""

    def __init__(self, config_file: Path = DEFAULT_CONFIG_FILE, env_file: Optional[Path] = None):
        """Initializes and loads the settings.

        Args:
            config_file: Path to the YAML configuration file.
            env_file: Path to the .env file (searches upwards from cwd if None).
        """
        self.config_file = Path(config_file)
        self.env_file = env_file
        self._config: Dict[str, Any] = {}
        self._test_config: Dict[str, Any] = {}
        self.load_config()

    def load_config(self) -> None:
        """Loads configuration from the YAML file and the .env file.

        Priority order (highest to lowest):
        1. Test overrides
        2. Environment Variables
        3. .env file
        4. YAML configuration file
        5. Built-in defaults
        """
        self._config = {}

        # 1. Load from YAML file (lowest priority after defaults)
        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    yaml_config = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                raise ConfigError(f"Failed to load or parse YAML config {self.config_file}: {e}") from e
            if isinstance(yaml_config, dict):
                self._config.update(yaml_config)
                logger.info(f"Loaded configuration from YAML: {self.config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {self.config_file} did not contain a dictionary.")
        else:
            logger.debug(f"YAML config file not found: {self.config_file}")

        # 2. Load from .env file; override=False so real environment variables win
        dotenv_path = self.env_file or find_dotenv_path()
        if dotenv_path:
            if load_dotenv(dotenv_path=dotenv_path, override=False):
                logger.info(f"Loaded environment variables from: {dotenv_path}")
        else:
            logger.debug("No .env file found at or above current directory.")

    def get(self, key: str, default: Any = None) -> Any:
        """Gets a configuration value by dotted key.

        Args:
            key: The configuration key, e.g. 'mirror.reqrate'.
            default: Value returned when the key is set nowhere; when None,
                the built-in default for the key is used.

        Returns:
            The configuration value.
        """
        if key in self._test_config:
            return self._test_config[key]

        env_key = ENV_PREFIX + key.upper().replace('.', '_')
        if env_key in os.environ:
            return _coerce_env_value(os.environ[env_key])

        try:
            return _lookup_dotted(self._config, key)
        except KeyError:
            pass

        if default is not None:
            return default
        logger.debug(f"Config key '{key}' not set, using built-in default.")
        return DEFAULTS.get(key)

    def set_for_testing(self, values: Dict[str, Any]) -> None:
        """Sets override values that take precedence over every other source."""
        self._test_config.update(values)
        logger.debug(f"Set testing configuration: {values}")

    def clear_test_config(self) -> None:
        """Clears all testing override values."""
        self._test_config = {}

    # --- Typed Accessors ---

    def cache_mode(self) -> str:
        return str(self.get('mirror.cache_mode'))

    def _positive_number(self, key: str, convert: Callable[[Any], Any], kind: str) -> Any:
        """Converts a numeric setting, raising ConfigError when it is unusable."""
        value = self.get(key)
        try:
            number = convert(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{key} must be {kind}, got {value!r}") from e
        if number <= 0:
            raise ConfigError(f"{key} must be positive, got {number}")
        return number

    def reqrate(self) -> int:
        """Gets the number of live calls allowed per 60-second window."""
        return self._positive_number('mirror.reqrate', int, "an integer")

    def attach_ip(self) -> Optional[str]:
        """Gets the local source address, or None when no binding is configured."""
        value = self.get('mirror.attach_ip')
        if value is None or str(value) == NO_ATTACH_IP:
            return None
        return str(value)

    def cache_dir(self) -> Path:
        return Path(str(self.get('mirror.cache_dir'))).expanduser()

    def cache_stale_age(self) -> int:
        return self._positive_number('mirror.cache_stale_age', int, "an integer")

    def token(self) -> Optional[str]:
        token = self.get('mirror.token')
        return str(token) if token else None

    def user_agent(self) -> str:
        return str(self.get('mirror.user_agent'))

    def timeout(self) -> float:
        return self._positive_number('mirror.timeout', float, "a number")

"""Configuration management: YAML config file plus environment secrets."""

import os
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, SecretStr, ValidationError

from .errors import ConfigurationError
from .paths import get_data_dir

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = get_data_dir() / "config"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.yaml"

_DEFAULT_CONFIG_TEMPLATE = """# Auto-generated default configuration for taxcat
azure:
  endpoint: "https://westus.api.cognitive.microsoft.com"
  path: "/text/analytics/v2.1/entities"
  api_key_env: "AZURE_ACCESS_KEY"
  language: "en"
  max_text_length: 5000
  min_text_length: 50

watson:
  endpoint: "https://gateway.watsonplatform.net"
  path: "/natural-language-understanding/api/v1/analyze?version=2018-11-16"
  api_key_env: "WATSON_ACCESS_KEY"
  username: "apikey"
  entity_limit: 50
  concept_limit: 8

wordpress:
  wp_cli: "wp"
  path: null
  url: null
  allow_root: false

report:
  results_file: "results.txt"
  header: "Results Below"

http:
  timeout: null
"""

_REQUIRED_KEYS = {
    "azure": ["endpoint", "path", "api_key_env"],
    "watson": ["endpoint", "path", "api_key_env"],
    "wordpress": ["wp_cli"],
    "report": ["results_file"],
}


def _write_template(path: Path, content: str) -> None:
    """Write templated YAML content to disk with a trailing newline."""
    path.write_text(content.strip() + "\n", encoding="utf-8")


class AzureSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    endpoint: str
    path: str
    access_key: SecretStr
    language: str = "en"
    max_text_length: int = 5000
    min_text_length: int = 50


class WatsonSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    endpoint: str
    path: str
    access_key: SecretStr
    username: str = "apikey"
    entity_limit: int = 50
    concept_limit: int = 8


class WordPressSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    wp_cli: str = "wp"
    path: Optional[str] = None
    url: Optional[str] = None
    allow_root: bool = False


class ReportSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    results_file: str = "results.txt"
    header: str = "Results Below"


class Settings(BaseModel):
    """Validated runtime settings for one run, secrets included."""

    model_config = ConfigDict(frozen=True)

    azure: AzureSettings
    watson: WatsonSettings
    wordpress: WordPressSettings = WordPressSettings()
    report: ReportSettings = ReportSettings()
    http_timeout: Optional[float] = None


class ConfigManager:
    """Manages loading and validation of the YAML configuration file."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize the manager and ensure a baseline config file exists."""
        path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
        if not path.is_absolute():
            path = path.resolve()
        self.config_path = str(path)
        self.base_dir = str(path.parent)
        self._config = None
        self._ensure_default_config()

    def _ensure_default_config(self) -> None:
        """Create the default configuration file if it is missing."""
        config_file = Path(self.config_path)
        config_file.parent.mkdir(parents=True, exist_ok=True)
        if not config_file.exists():
            _write_template(config_file, _DEFAULT_CONFIG_TEMPLATE)
            logger.info("Created default config.yaml at %s", config_file)

    def load_config(self) -> Dict[str, Any]:
        """Load the main configuration file."""
        if self._config is None:
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    self._config = yaml.safe_load(f) or {}
                logger.info(f"Loaded configuration from {self.config_path}")
            except Exception as e:
                logger.error(f"Failed to load config from {self.config_path}: {e}")
                raise

        return self._config

    def validate_config(self) -> bool:
        """Validate the structure of the configuration file."""
        try:
            config = self.load_config()
            if not isinstance(config, dict):
                logger.error("Config root must be a mapping")
                return False

            for section, keys in _REQUIRED_KEYS.items():
                section_cfg = config.get(section)
                if not isinstance(section_cfg, dict):
                    logger.error(f"Missing required section '{section}' in main config")
                    return False
                for key in keys:
                    if key not in section_cfg:
                        logger.error(f"Missing required key '{section}.{key}'")
                        return False

            for section, key in (("azure", "max_text_length"), ("azure", "min_text_length"),
                                 ("watson", "entity_limit"), ("watson", "concept_limit")):
                value = config[section].get(key)
                if value is not None and (not isinstance(value, int) or value < 0):
                    logger.error(f"'{section}.{key}' must be a non-negative integer")
                    return False

            timeout = (config.get('http') or {}).get('timeout')
            if timeout is not None and not isinstance(timeout, (int, float)):
                logger.error("'http.timeout' must be a number (int/float) or null")
                return False

            logger.info("Configuration validation passed")
            return True

        except Exception as e:
            logger.error(f"Configuration validation failed: {e}")
            return False

    def load_env_files(self) -> List[Path]:
        """Load .env files from the working directory and the config directory.

        Variables already present in the process environment win.
        """
        loaded = []
        for env_file in (Path.cwd() / ".env", Path(self.base_dir) / ".env"):
            if env_file.is_file():
                load_dotenv(env_file, override=False)
                loaded.append(env_file)
                logger.debug("Loaded environment from %s", env_file)
        return loaded

    def key_env_names(self) -> Dict[str, str]:
        """Return the environment variable names holding each service key."""
        config = self.load_config()
        return {
            'azure': (config.get('azure') or {}).get('api_key_env') or 'AZURE_ACCESS_KEY',
            'watson': (config.get('watson') or {}).get('api_key_env') or 'WATSON_ACCESS_KEY',
        }

    @staticmethod
    def has_secret(env_name: str, environ: Optional[Mapping[str, str]] = None) -> bool:
        """Return True when ``env_name`` holds a non-blank value."""
        environ = os.environ if environ is None else environ
        return bool((environ.get(env_name) or '').strip())

    def load_settings(self, environ: Optional[Mapping[str, str]] = None) -> Settings:
        """Build validated settings, reading both API keys from the environment.

        Args:
            environ: Mapping to read secrets from. Defaults to ``os.environ``
                after loading any .env files.

        Raises:
            ConfigurationError: If the config file is invalid or either key is
                missing or empty.
        """
        if not self.validate_config():
            raise ConfigurationError(
                f"Invalid configuration at {self.config_path}. Run 'taxcat status' for details."
            )
        if environ is None:
            self.load_env_files()
            environ = os.environ

        env_names = self.key_env_names()
        missing = [name for name in env_names.values() if not self.has_secret(name, environ)]
        if missing:
            raise ConfigurationError(
                "Missing or empty required environment variable(s): " + ", ".join(missing)
            )

        config = self.load_config()
        azure_cfg = dict(config['azure'])
        watson_cfg = dict(config['watson'])
        for cfg in (azure_cfg, watson_cfg):
            cfg.pop('api_key_env', None)
        try:
            settings = Settings(
                azure=AzureSettings(
                    access_key=environ[env_names['azure']].strip(), **_drop_none(azure_cfg)
                ),
                watson=WatsonSettings(
                    access_key=environ[env_names['watson']].strip(), **_drop_none(watson_cfg)
                ),
                wordpress=WordPressSettings(**_drop_none(config.get('wordpress') or {})),
                report=ReportSettings(**_drop_none(config.get('report') or {})),
                http_timeout=(config.get('http') or {}).get('timeout'),
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration at {self.config_path}: {e}") from e
        logger.debug("Settings loaded: %s", settings)
        return settings


def _drop_none(section: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in section.items() if value is not None}


__all__ = [
    "ConfigManager",
    "Settings",
    "AzureSettings",
    "WatsonSettings",
    "WordPressSettings",
    "ReportSettings",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_CONFIG_DIR",
]

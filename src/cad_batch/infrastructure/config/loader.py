"""Configuration loading and validation."""

import os
import yaml
from pathlib import Path
from typing import Optional, Dict, Any, Iterable
from dataclasses import dataclass

from cad_batch.domain.exceptions import ConfigurationError
from cad_batch.shared.logging import get_logger
from cad_batch.shared.types import Extensions

DEFAULT_ENGINE_PATH = Path(r"C:\Program Files\Autodesk\AutoCAD 2024\accoreconsole.exe")
DEFAULT_SCRIPT_FILE = Path(r"C:\CAD\Scripts\batch_process.scr")
DEFAULT_TIMEOUT_SECONDS = 25
DEFAULT_EXTENSIONS: Extensions = (".dwg",)
DEFAULT_LOG_NAME = "Process_Log.txt"
DEFAULT_CONFIG_FILE = Path("cad_batch.yaml")


def normalize_extensions(values: Iterable[str]) -> Extensions:
    """Lower-case suffixes and make sure each starts with a dot."""
    result = []
    for value in values:
        value = str(value).strip().lower()
        if not value:
            continue
        if not value.startswith("."):
            value = "." + value
        if value not in result:
            result.append(value)
    return tuple(result)


@dataclass
class BatchConfig:
    """Configuration for a batch run."""

    # Target
    folder: Optional[Path] = None
    extensions: Extensions = DEFAULT_EXTENSIONS

    # Engine
    script_file: Path = DEFAULT_SCRIPT_FILE
    engine_path: Path = DEFAULT_ENGINE_PATH
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS

    # Output
    log_name: str = DEFAULT_LOG_NAME

    def __post_init__(self):
        """Coerce types and validate configuration after initialization."""
        if self.folder is not None and str(self.folder).strip() == "":
            self.folder = None
        if self.folder is not None:
            self.folder = Path(self.folder)
        self.script_file = Path(self.script_file)
        self.engine_path = Path(self.engine_path)
        if isinstance(self.extensions, str):
            self.extensions = self.extensions.split(",")
        self.extensions = normalize_extensions(self.extensions)
        self._validate()

    def _validate(self):
        """Validate configuration values."""
        if isinstance(self.timeout_seconds, bool) or not isinstance(self.timeout_seconds, int):
            raise ConfigurationError(f"Timeout must be an integer, got: {self.timeout_seconds!r}")

        if self.timeout_seconds <= 0:
            raise ConfigurationError(f"Timeout must be positive, got: {self.timeout_seconds}")

        if not self.extensions:
            raise ConfigurationError("At least one drawing extension is required")

        if not self.log_name or Path(self.log_name).name != self.log_name:
            raise ConfigurationError(f"Invalid log file name: {self.log_name!r}")


class ConfigLoader:
    """Loads and validates configuration from YAML files and environment variables."""

    VALID_FIELDS = {
        'folder', 'extensions', 'script_file', 'engine_path', 'timeout_seconds', 'log_name'
    }

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config loader.

        Args:
            config_path: Optional path to YAML config file
        """
        self._explicit = config_path is not None
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_FILE
        self._logger = get_logger(__name__)

    def load(self, overrides: Optional[Dict[str, Any]] = None) -> BatchConfig:
        """
        Load configuration from file and environment.

        Environment variables take precedence over the config file, and
        overrides (from the CLI) take precedence over both.

        Returns:
            BatchConfig instance

        Raises:
            ConfigurationError: If configuration is invalid
        """
        config_dict: Dict[str, Any] = {}

        # Load from YAML if exists
        if self.config_path.exists():
            self._logger.info(f"Loading config from {self.config_path}")
            config_dict.update(self._load_yaml())
        elif self._explicit:
            raise ConfigurationError(f"Config file not found: {self.config_path}")
        else:
            self._logger.debug(f"No config file at {self.config_path}, using defaults")

        # Override with environment variables
        config_dict.update(self._load_from_env())

        # Apply runtime overrides (from CLI) if provided
        if overrides:
            for k, v in overrides.items():
                if v is None:
                    continue
                config_dict[k] = v

        unknown = set(config_dict) - self.VALID_FIELDS
        if unknown:
            self._logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")

        filtered_config = {k: v for k, v in config_dict.items() if k in self.VALID_FIELDS}

        try:
            return BatchConfig(**filtered_config)
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")

    def _load_yaml(self) -> Dict[str, Any]:
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}")

        if not isinstance(yaml_config, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {self.config_path}")

        # Accept dashed keys as written on the command line
        return {str(k).replace('-', '_'): v for k, v in yaml_config.items()}

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config: Dict[str, Any] = {}

        if folder := os.getenv("CAD_BATCH_FOLDER"):
            env_config["folder"] = Path(folder)

        if script := os.getenv("CAD_BATCH_SCRIPT"):
            env_config["script_file"] = Path(script)

        if engine := os.getenv("CAD_BATCH_ENGINE"):
            env_config["engine_path"] = Path(engine)

        if timeout := os.getenv("CAD_BATCH_TIMEOUT"):
            try:
                env_config["timeout_seconds"] = int(timeout)
            except ValueError:
                self._logger.warning(f"Invalid CAD_BATCH_TIMEOUT value: {timeout}")

        if extensions := os.getenv("CAD_BATCH_EXTENSIONS"):
            env_config["extensions"] = extensions.split(",")

        if log_name := os.getenv("CAD_BATCH_LOG_NAME"):
            env_config["log_name"] = log_name

        return env_config

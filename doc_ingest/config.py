"""
Configuration management for doc-ingest.

Loads config.yaml with validation, environment overrides, and defaults.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from dotenv import load_dotenv

from doc_ingest.chunker import InvalidParameters, validate_parameters


CONFIG_ENV_VAR = "DOC_INGEST_CONFIG_PATH"
DEFAULT_CONFIG_PATH = "./configs/config.yaml"

DEFAULTS: Dict[str, Any] = {
    'chunking': {
        'chunk_size': 40,
        'overlap_size': 5,
    },
    'document_ingestion': {
        'render_markdown': True,
        'encoding': 'utf-8',
    },
    'audit_log': {
        'enabled': False,
        'file': './audit.log',
        'level': 'INFO',
    },
    'logging': {
        'level': 'WARNING',
    },
}

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigError(Exception):
    """Raised when configuration is invalid."""
    pass


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class IngestConfig:
    """
    Configuration manager with strict validation.

    Enforces:
    - Known section types
    - Valid chunk sizing
    - Valid log levels
    """

    def __init__(self, config_path: Optional[str] = None,
                 data: Optional[Dict[str, Any]] = None):
        """
        Load and validate configuration.

        Args:
            config_path: Path to config.yaml. Defaults to $DOC_INGEST_CONFIG_PATH,
                then ./configs/config.yaml (defaults used if that is missing)
            data: Inline config dict, used instead of a file

        Raises:
            ConfigError: If config invalid or an explicit path is missing
        """
        if data is not None:
            self.config_path = None
            self.data = _merge(DEFAULTS, data)
            self._validate()
            return

        load_dotenv()
        explicit = config_path or os.getenv(CONFIG_ENV_VAR)
        self.config_path = Path(explicit or DEFAULT_CONFIG_PATH)

        if not self.config_path.exists():
            if explicit:
                raise ConfigError(f"Config file not found: {self.config_path}")
            self.data = copy.deepcopy(DEFAULTS)
            return

        try:
            with open(self.config_path, 'r') as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}")

        if not isinstance(loaded, dict):
            raise ConfigError(f"Config root must be a mapping: {self.config_path}")

        self.data = _merge(DEFAULTS, loaded)
        self._validate()

    def _validate(self):
        """Validate configuration structure and values."""
        for section in DEFAULTS:
            if not isinstance(self.data.get(section), dict):
                raise ConfigError(f"Config section '{section}' must be a mapping")

        chunking = self.data['chunking']
        try:
            validate_parameters(chunking.get('chunk_size'), chunking.get('overlap_size'))
        except InvalidParameters as e:
            raise ConfigError(f"Invalid chunking config: {e}")

        for section in ('audit_log', 'logging'):
            level = str(self.data[section].get('level', '')).upper()
            if level not in LOG_LEVELS:
                raise ConfigError(f"Invalid {section}.level: {self.data[section].get('level')}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get config value by dot-notation path.

        Args:
            key: Key path (e.g., 'chunking.chunk_size')
            default: Default value if not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self.data

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    def get_chunking_config(self) -> Dict[str, Any]:
        """Get chunking configuration section."""
        return self.data['chunking']

    def get_document_ingestion_config(self) -> Dict[str, Any]:
        """Get document ingestion configuration."""
        return self.data['document_ingestion']

    def get_audit_config(self) -> Dict[str, Any]:
        """Get audit logging configuration section."""
        return self.data['audit_log']

    def get_log_level(self) -> str:
        return str(self.data['logging'].get('level', 'WARNING')).upper()


# Global config instance (lazy-loaded)
_config_instance: Optional[IngestConfig] = None


def load_config(config_path: Optional[str] = None) -> IngestConfig:
    """
    Load or retrieve cached configuration.

    Args:
        config_path: Optional override path

    Returns:
        IngestConfig instance
    """
    global _config_instance
    if _config_instance is None or config_path is not None:
        _config_instance = IngestConfig(config_path)
    return _config_instance


def get_config() -> IngestConfig:
    """Get currently loaded config (must be initialized)."""
    global _config_instance
    if _config_instance is None:
        raise RuntimeError("Config not loaded. Call load_config() first.")
    return _config_instance

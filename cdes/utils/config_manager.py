"""
Configuration management for profile analysis.

Handles loading, updating, and persisting ranking and scoring parameters
from YAML.
"""

import copy
import logging
from pathlib import Path
from typing import Any, List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "analysis_config.yaml"


class ConfigManager:
    """
    Manages analysis configuration: similarity ranking and scoring bonuses.

    Values missing from the YAML file fall back to DEFAULT_CONFIG.
    """

    DEFAULT_CONFIG = {
        'ranking': {
            'limit': 5,
            'min_similarity': 50.0,
            'distance_threshold': 5.0,
            'decay_scale': 10.0,
        },
        'completeness': {
            'bonus_key_count': 7,
            'bonus_total': 10.0,
        },
    }

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to YAML configuration file
        """
        self.config_path = config_path
        self.config: dict[str, Any] = {}

        if config_path and config_path.exists():
            self.load_config(config_path)
        else:
            logger.info("No config file found, using defaults")
            self.config = copy.deepcopy(self.DEFAULT_CONFIG)

    @classmethod
    def from_default_path(cls) -> 'ConfigManager':
        """Load the packaged cdes/config/analysis_config.yaml, if present."""
        return cls(DEFAULT_CONFIG_PATH)

    def load_config(self, path: Path) -> dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            path: Path to configuration file

        Returns:
            Loaded configuration dictionary

        Raises:
            FileNotFoundError: If config file does not exist
            yaml.YAMLError: If config file is invalid
        """
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise

        if not loaded_config:
            logger.warning(f"Empty config file at {path}, using defaults")
            self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        else:
            self.config = self._merge_with_defaults(loaded_config)

        self.config_path = path
        logger.info(f"Loaded configuration from {path}")
        return self.config

    def _get(self, section: str, name: str) -> Any:
        if name not in self.config.get(section, {}):
            raise KeyError(f"{section.capitalize()} parameter '{name}' not found in configuration")
        return self.config[section][name]

    def get_ranking_param(self, name: str) -> Any:
        """
        Get a ranking parameter by name.

        Args:
            name: Parameter name (e.g., 'limit', 'min_similarity')

        Returns:
            Parameter value

        Raises:
            KeyError: If parameter not found
        """
        return self._get('ranking', name)

    def get_completeness_param(self, name: str) -> Any:
        """
        Get a completeness scoring parameter by name.

        Raises:
            KeyError: If parameter not found
        """
        return self._get('completeness', name)

    def update_ranking_param(self, name: str, value: float) -> None:
        """
        Update a ranking parameter.

        Args:
            name: Parameter name
            value: New value

        Raises:
            ValueError: If value is out of range for the parameter
        """
        error = self._check_ranking_value(name, value)
        if error:
            raise ValueError(error)

        ranking = self.config.setdefault('ranking', {})
        old_value = ranking.get(name)
        ranking[name] = value

        logger.info(f"Updated ranking parameter '{name}': {old_value} -> {value}")

    def save_config(self, path: Optional[Path] = None) -> None:
        """
        Save configuration to YAML file.

        Args:
            path: Path to save to (uses self.config_path if not provided)

        Raises:
            ValueError: If no path provided and no config_path set
        """
        save_path = path or self.config_path

        if not save_path:
            raise ValueError("No path provided and no config_path set")

        save_path.parent.mkdir(parents=True, exist_ok=True)

        with open(save_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(
                self.config,
                f,
                default_flow_style=False,
                sort_keys=False,
                indent=2
            )

        logger.info(f"Saved configuration to {save_path}")

    def get_all_config(self) -> dict[str, Any]:
        """Get a copy of the complete configuration dictionary."""
        return copy.deepcopy(self.config)

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        logger.info("Configuration reset to defaults")

    def _merge_with_defaults(self, loaded_config: dict) -> dict:
        """Merge loaded config with defaults to ensure all keys exist."""
        merged = copy.deepcopy(self.DEFAULT_CONFIG)

        for section, values in loaded_config.items():
            if section in merged and isinstance(values, dict):
                merged[section].update(values)
            else:
                merged[section] = values

        return merged

    @staticmethod
    def _check_ranking_value(name: str, value: Any) -> Optional[str]:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return f"Ranking parameter '{name}' must be numeric, got {type(value).__name__}"
        if name == 'limit' and (not isinstance(value, int) or value < 1):
            return "limit must be a positive integer"
        if name == 'min_similarity' and not 0.0 <= value <= 100.0:
            return f"min_similarity must be between 0 and 100, got {value}"
        if name in ('distance_threshold', 'decay_scale') and value <= 0:
            return f"{name} must be positive, got {value}"
        return None

    def validate_config(self) -> List[str]:
        """
        Validate the current configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        for name, value in self.config.get('ranking', {}).items():
            error = self._check_ranking_value(name, value)
            if error:
                errors.append(error)

        completeness = self.config.get('completeness', {})
        key_count = completeness.get('bonus_key_count')
        if not isinstance(key_count, int) or isinstance(key_count, bool) or key_count < 1:
            errors.append("bonus_key_count must be a positive integer")

        bonus_total = completeness.get('bonus_total')
        if isinstance(bonus_total, bool) or not isinstance(bonus_total, (int, float)):
            errors.append("bonus_total must be numeric")

        return errors

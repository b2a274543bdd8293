"""
Verifier Configuration - Centralized Settings
=============================================

All configurable thresholds in one place.
Supports environment variable overrides and JSON/YAML config files.

Usage:
    from label_verify.config import get_config
    config = get_config()
    print(config.matching.verbage_match_threshold)

Environment Variables:
    LABEL_VERBAGE_WORD_SIM=0.8
    LABEL_INGREDIENT_SIM=0.7
    LABEL_LOW_OCR_CONFIDENCE=0.8
    LABEL_LOG_LEVEL=DEBUG
"""

import os
import json
import logging
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional, Dict, Any, Union

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def _get_env_float(key: str, default: float) -> float:
    """Get float from environment variable."""
    value = os.environ.get(key)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            logger.warning(f"Invalid float for {key}: {value}, using default {default}")
    return default


def _get_env_int(key: str, default: int) -> int:
    """Get int from environment variable."""
    value = os.environ.get(key)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            logger.warning(f"Invalid int for {key}: {value}, using default {default}")
    return default


def _get_env_str(key: str, default: str) -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default)


@dataclass
class MatchingConfig:
    """Fuzzy matching thresholds."""
    
    # Tokens shorter than this are never compared
    min_token_length: int = field(
        default_factory=lambda: _get_env_int('LABEL_MIN_TOKEN_LENGTH', 3)
    )
    
    # Verbage: per-word similarity (strictly greater) and overall verdict
    verbage_word_similarity: float = field(
        default_factory=lambda: _get_env_float('LABEL_VERBAGE_WORD_SIM', 0.8)
    )
    verbage_match_threshold: float = field(
        default_factory=lambda: _get_env_float('LABEL_VERBAGE_MATCH', 0.8)
    )
    
    # Ingredients: per-ingredient similarity (strictly greater) and overall verdict
    ingredient_similarity: float = field(
        default_factory=lambda: _get_env_float('LABEL_INGREDIENT_SIM', 0.7)
    )
    ingredient_match_threshold: float = field(
        default_factory=lambda: _get_env_float('LABEL_INGREDIENT_MATCH', 0.7)
    )
    
    # Minimum ingredient confidence for a product to be ranked
    ranking_min_score: float = field(
        default_factory=lambda: _get_env_float('LABEL_RANKING_MIN_SCORE', 0.7)
    )


@dataclass
class ScanConfig:
    """Scan verdict settings."""
    
    # OCR confidence below this adds an ocr_quality discrepancy
    low_ocr_confidence: float = field(
        default_factory=lambda: _get_env_float('LABEL_LOW_OCR_CONFIDENCE', 0.8)
    )
    
    # Runner-up products reported after the best ingredient match
    max_alternatives: int = field(
        default_factory=lambda: _get_env_int('LABEL_MAX_ALTERNATIVES', 3)
    )


@dataclass 
class LoggingConfig:
    """Logging configuration."""
    
    level: str = field(
        default_factory=lambda: _get_env_str('LABEL_LOG_LEVEL', 'INFO')
    )
    format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    date_format: str = '%Y-%m-%d %H:%M:%S'
    
    # File logging (optional)
    log_file: Optional[str] = field(
        default_factory=lambda: os.environ.get('LABEL_LOG_FILE')
    )


_UNIT_INTERVAL_KEYS = (
    ('matching', 'verbage_word_similarity'),
    ('matching', 'verbage_match_threshold'),
    ('matching', 'ingredient_similarity'),
    ('matching', 'ingredient_match_threshold'),
    ('matching', 'ranking_min_score'),
    ('scan', 'low_ocr_confidence'),
)


@dataclass
class VerifierConfig:
    """Complete verifier configuration."""
    
    matching: MatchingConfig = field(default_factory=MatchingConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
    
    def validate(self) -> 'VerifierConfig':
        """
        Check value ranges.
        
        Raises:
            ConfigurationError: If a threshold is outside [0, 1], a count is
                out of range, or a logging setting is not a string
        """
        for section, key in _UNIT_INTERVAL_KEYS:
            value = getattr(getattr(self, section), key)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
                raise ConfigurationError(
                    f"{section}.{key}={value} is out of range",
                    config_key=f"{section}.{key}",
                    expected="a number between 0 and 1",
                )
        
        if not isinstance(self.matching.min_token_length, int) or self.matching.min_token_length < 1:
            raise ConfigurationError(
                f"matching.min_token_length={self.matching.min_token_length} is out of range",
                config_key="matching.min_token_length",
                expected="a positive integer",
            )
        
        if not isinstance(self.scan.max_alternatives, int) or self.scan.max_alternatives < 0:
            raise ConfigurationError(
                f"scan.max_alternatives={self.scan.max_alternatives} is out of range",
                config_key="scan.max_alternatives",
                expected="a non-negative integer",
            )
        
        for key in ('level', 'format', 'date_format'):
            value = getattr(self.logging, key)
            if not isinstance(value, str):
                raise ConfigurationError(
                    f"logging.{key}={value!r} is not a string",
                    config_key=f"logging.{key}",
                    expected="a string",
                )
        
        if self.logging.log_file is not None and not isinstance(self.logging.log_file, str):
            raise ConfigurationError(
                f"logging.log_file={self.logging.log_file!r} is not a path",
                config_key="logging.log_file",
                expected="a file path or null",
            )
        
        return self
    
    def save(self, path: Union[str, Path]):
        """Save configuration to JSON file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
    
    @classmethod
    def load(cls, path: Union[str, Path]) -> 'VerifierConfig':
        """
        Load configuration from a JSON or YAML file.
        
        The format is chosen by suffix (``.yaml``/``.yml`` for YAML, anything
        else JSON). Unknown keys are ignored; missing keys keep defaults.
        
        Raises:
            ConfigurationError: If the file cannot be read or parsed, a
                section is not a mapping, or a value fails validation
        """
        path = Path(path)
        try:
            with open(path) as f:
                if path.suffix.lower() in ('.yaml', '.yml'):
                    data = yaml.safe_load(f) or {}
                else:
                    data = json.load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read {path}: {e}", config_key=str(path)) from e
        
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"{path} must contain a mapping",
                config_key=str(path),
                expected="mapping of sections",
            )
        
        config = cls()
        
        for section in ('matching', 'scan', 'logging'):
            values = data.get(section)
            if values is None:
                continue
            if not isinstance(values, dict):
                raise ConfigurationError(
                    f"section '{section}' in {path} must be a mapping",
                    config_key=section,
                    expected="mapping",
                )
            target = getattr(config, section)
            for key, value in values.items():
                if hasattr(target, key):
                    setattr(target, key, value)
                else:
                    logger.warning(f"Unknown config key {section}.{key} in {path}")
        
        return config.validate()


# Global configuration instance (singleton pattern)
_config: Optional[VerifierConfig] = None


def get_config() -> VerifierConfig:
    """
    Get the global configuration instance.
    
    Creates a new instance on first call, returns cached instance thereafter.
    """
    global _config
    if _config is None:
        _config = VerifierConfig().validate()
        _setup_logging(_config.logging)
    return _config


def set_config(config: VerifierConfig) -> VerifierConfig:
    """Install a configuration (e.g. one loaded from a file) as the global instance."""
    global _config
    _config = config.validate()
    _setup_logging(_config.logging)
    return _config


def reset_config():
    """Reset configuration to defaults (useful for testing)."""
    global _config
    _config = None


def _setup_logging(config: LoggingConfig):
    """Configure logging based on settings."""
    level = getattr(logging, config.level.upper(), logging.INFO)
    
    handlers = [logging.StreamHandler()]
    
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))
    
    logging.basicConfig(
        level=level,
        format=config.format,
        datefmt=config.date_format,
        handlers=handlers,
    )

"""
Utility functions for receipt parsing: configuration and logging
"""

import os
import sys
from copy import deepcopy
from pathlib import Path
from typing import Dict, Optional

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "parser_config.yaml"

_DEFAULT_CONFIG: Dict = {
    'parser': {
        'label_window': 20,        # lines scanned after a header anchor
        'value_window': 10,        # lines scanned for dates / customer values
        'totals_tolerance': 0.01,
    },
    'api': {
        'max_text_length': 200_000,
    },
    'logging': {
        'level': 'INFO',
        'log_file': 'logs/receipt_parser.log',
    },
}


def default_config() -> Dict:
    """Return default configuration"""
    return deepcopy(_DEFAULT_CONFIG)


def load_config(config_path: Optional[str] = None) -> Dict:
    """
    Load configuration from YAML file

    Sections missing from the file keep their defaults.

    Args:
        config_path: Path to YAML file (default: config/parser_config.yaml)

    Returns:
        Configuration dictionary
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not os.path.exists(config_path):
        logger.warning(f"Config file not found: {config_path}, using defaults")
        return default_config()

    with open(config_path, 'r', encoding='utf-8') as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        logger.warning(f"Config file {config_path} is not a mapping, using defaults")
        return default_config()

    config = default_config()
    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values
    return config


def ensure_directory(dir_path: str) -> str:
    """
    Ensure directory exists, create if it doesn't

    Args:
        dir_path: Directory path

    Returns:
        Absolute path to directory
    """
    path = Path(dir_path)
    path.mkdir(parents=True, exist_ok=True)
    return str(path.absolute())


def setup_logging(log_file: str = "logs/receipt_parser.log", level: str = "INFO"):
    """
    Setup logging configuration

    Args:
        log_file: Path to log file
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    # Remove default handler
    logger.remove()

    # Add console handler
    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=level
    )

    # Add file handler
    ensure_directory(os.path.dirname(log_file) or ".")
    logger.add(
        log_file,
        rotation="10 MB",
        retention="30 days",
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    )

    logger.info("Logging initialized")

"""
Configuration for the simulation runner.

Parameters are persisted as a flat YAML mapping of field names. Reading the
default config file never fails: a missing, unreadable or malformed file is
reported as a warning and the built-in defaults are used. A file named
explicitly by the operator must exist and parse, otherwise ConfigIOError is
raised.
"""

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional, Dict, Any, Union
import os

import yaml

from ..exceptions import ConfigIOError
from ..simulation import SimulationParameters
from ..utils.logger import get_logger

DEFAULT_CONFIG_FILENAME = "salesim-config.yaml"
CONFIG_ENV_VAR = "SALESIM_CONFIG"

logger = get_logger(__name__)


def default_config_path() -> Path:
    """Config file location when none is given: $SALESIM_CONFIG or the home directory."""
    if os.getenv(CONFIG_ENV_VAR):
        return Path(os.getenv(CONFIG_ENV_VAR)).expanduser()
    return Path.home() / DEFAULT_CONFIG_FILENAME


def _read_parameters(config_path: Path) -> SimulationParameters:
    with open(config_path, 'r') as f:
        values = yaml.safe_load(f)

    if values is None:
        return SimulationParameters()
    if not isinstance(values, dict):
        raise ValueError(f"expected a mapping, got {type(values).__name__}")

    unknown = sorted(set(values) - set(SimulationParameters.field_names()))
    if unknown:
        logger.warning(f"⚠️ Ignoring unknown keys in {config_path}: {', '.join(map(str, unknown))}")

    return SimulationParameters.from_dict(values)


def load_parameters(path: Optional[Union[str, Path]] = None) -> SimulationParameters:
    """
    Load simulation parameters from a YAML file.

    Args:
        path: Config file named by the operator. When None the default
              location is used and any problem falls back to defaults.

    Returns:
        SimulationParameters, missing keys taking their default values

    Raises:
        ConfigIOError: If an explicit path does not exist or cannot be parsed
    """
    explicit = path is not None
    config_path = Path(path).expanduser() if explicit else default_config_path()

    if not config_path.exists():
        if explicit:
            raise ConfigIOError(f"Configuration file not found: {config_path}")
        logger.debug(f"No configuration file at {config_path}, using defaults")
        return SimulationParameters()

    try:
        parameters = _read_parameters(config_path)
    except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
        if explicit:
            raise ConfigIOError(f"Failed to read configuration file {config_path}: {e}") from e
        logger.warning(f"⚠️ Failed to read configuration file {config_path}: {e}. Using defaults")
        return SimulationParameters()

    logger.debug(f"Loaded parameters from {config_path}")
    return parameters


def save_parameters(parameters: SimulationParameters,
                    path: Optional[Union[str, Path]] = None) -> Path:
    """
    Write simulation parameters to a YAML file.

    Args:
        parameters: Parameters to persist
        path: Target file (default location if None)

    Returns:
        Path of the written file

    Raises:
        ConfigIOError: If the file cannot be written
    """
    config_path = Path(path).expanduser() if path is not None else default_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w') as f:
            yaml.safe_dump(parameters.to_dict(), f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise ConfigIOError(f"Failed to write configuration file {config_path}: {e}") from e

    logger.debug(f"Saved parameters to {config_path}")
    return config_path


@dataclass
class RunnerConfig:
    """Settings of the runner that are not simulation parameters."""

    # Config file named by the operator, None for the default location
    config_path: Optional[Path] = None

    # Output paths, None when not configured
    output_dir: Optional[Path] = None  # CSV trajectory written here
    log_dir: Optional[Path] = None  # timestamped run log written here

    # Presentation
    currency: str = "Euro"
    start_date: Optional[date] = None  # today if None

    # Logging settings
    log_level: str = "INFO"

    def resolve_start_date(self) -> date:
        """Date of day 0, today unless one was configured."""
        return self.start_date or date.today()

    def load_parameters(self) -> SimulationParameters:
        return load_parameters(self.config_path)

    def save_parameters(self, parameters: SimulationParameters) -> Path:
        return save_parameters(parameters, self.config_path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for logging."""
        return {
            'config_path': str(self.config_path or default_config_path()),
            'output_dir': str(self.output_dir) if self.output_dir else None,
            'log_dir': str(self.log_dir) if self.log_dir else None,
            'currency': self.currency,
            'start_date': self.start_date.isoformat() if self.start_date else None,
            'log_level': self.log_level
        }


def create_config_from_env() -> RunnerConfig:
    """Create configuration from environment variables."""
    config = RunnerConfig()

    if os.getenv('SALESIM_OUTPUT_DIR'):
        config.output_dir = Path(os.getenv('SALESIM_OUTPUT_DIR'))

    if os.getenv('SALESIM_LOG_DIR'):
        config.log_dir = Path(os.getenv('SALESIM_LOG_DIR'))

    if os.getenv('SALESIM_CURRENCY'):
        config.currency = os.getenv('SALESIM_CURRENCY')

    if os.getenv('SALESIM_START_DATE'):
        config.start_date = date.fromisoformat(os.getenv('SALESIM_START_DATE'))

    if os.getenv('SALESIM_LOG_LEVEL'):
        config.log_level = os.getenv('SALESIM_LOG_LEVEL')

    return config

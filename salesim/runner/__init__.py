"""
Runner configuration and session handling for the simulation front ends.
"""

from .config import (
    RunnerConfig,
    create_config_from_env,
    default_config_path,
    load_parameters,
    save_parameters
)
from .session import SimulationSession

__all__ = [
    'RunnerConfig',
    'create_config_from_env',
    'default_config_path',
    'load_parameters',
    'save_parameters',
    'SimulationSession'
]

"""
Utility modules for the salesim package.
"""

from .logger import (
    SimLogger,
    get_logger,
    setup_logging,
    configure_workflow_logging
)

__all__ = [
    'SimLogger',
    'get_logger',
    'setup_logging',
    'configure_workflow_logging'
]

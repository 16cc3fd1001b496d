"""
Custom exceptions for simulation and configuration handling.
"""


class SimulationError(Exception):
    """Base exception for simulation errors"""
    pass


class InvalidParametersError(SimulationError, ValueError):
    """Raised when simulation parameters are rejected before a run"""
    pass


class ShipmentOrderError(SimulationError):
    """Raised when a shipment would break the arrival order of the queue"""
    pass


class ConfigIOError(Exception):
    """Raised when a configuration file cannot be read or written"""
    pass

"""
salesim package: daily stock and cash simulation for a single-product reseller.
"""

from .exceptions import SimulationError, InvalidParametersError, ShipmentOrderError, ConfigIOError
from .simulation import *

__version__ = "1.0.0"

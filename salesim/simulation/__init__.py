"""
Sales Simulation Suite

Daily simulation of stock and cash for a reseller buying fixed-size batches
with a fixed shipping delay.
"""

from .parameters import SimulationParameters, MAX_DURATION_DAYS, DAYS_PER_MONTH
from .shipments import Shipment, ShipmentQueue
from .order_policies import OrderPolicy, RunwayReorderPolicy, OrderPolicyFactory
from .ledger import DailyLedger, DailyRecord
from .simulator import Simulation, SalesSimulator, run_simulation

__all__ = [
    'SimulationParameters',
    'MAX_DURATION_DAYS',
    'DAYS_PER_MONTH',
    'Shipment',
    'ShipmentQueue',
    'OrderPolicy',
    'RunwayReorderPolicy',
    'OrderPolicyFactory',
    'DailyLedger',
    'DailyRecord',
    'Simulation',
    'SalesSimulator',
    'run_simulation'
]

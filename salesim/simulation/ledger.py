"""
Daily cash and stock bookkeeping.
"""

from dataclasses import dataclass
from datetime import date
from typing import List

from .order_policies import OrderPolicy
from .parameters import SimulationParameters
from .shipments import Shipment, ShipmentQueue


@dataclass(frozen=True)
class DailyRecord:
    """State at the start of a day, before any of that day's changes."""
    day: int
    date: date
    stock: float
    cash: float


class DailyLedger:
    """
    Cash, stock and shipments of one run, advanced one day at a time.

    A day is closed in a fixed order: snapshot, storage cost, orders,
    arrivals, sales. Orders come before arrivals, so a shipment with no lead
    time is on the shelf for the same day's sales.
    """

    def __init__(self, parameters: SimulationParameters, order_policy: OrderPolicy):
        self.parameters = parameters
        self.order_policy = order_policy
        self.stock = float(parameters.initial_stock)
        self.cash = parameters.initial_cash
        self.shipments = ShipmentQueue()
        self.orders: List[Shipment] = []
        self.units_received = 0

    def close_day(self, day: int, day_date: date) -> DailyRecord:
        """
        Record the opening state of a day, then apply the day's changes.

        Args:
            day: Day index, counted from 0
            day_date: Calendar date of the day

        Returns:
            Snapshot taken before the changes
        """
        record = DailyRecord(day=day, date=day_date, stock=self.stock, cash=self.cash)

        self._charge_storage()
        self._place_orders(day)
        self._receive_shipments(day)
        self._sell()

        return record

    def _charge_storage(self):
        unit_daily_storage = self.parameters.unit_daily_storage
        if unit_daily_storage:
            self.cash -= self.stock * unit_daily_storage

    def _place_orders(self, day: int) -> List[Shipment]:
        orders = self.order_policy.calculate_orders(
            day, self.cash, self.stock, self.shipments.pending_quantity, self.parameters
        )
        batch_cost = self.parameters.batch_cost
        for shipment in orders:
            self.shipments.enqueue(shipment)
            self.cash -= batch_cost
        self.orders.extend(orders)
        return orders

    def _receive_shipments(self, day: int):
        for shipment in self.shipments.release_due(day):
            self.stock += float(shipment.quantity)
            self.units_received += shipment.quantity

    def _sell(self):
        sell_rate = self.parameters.sell_rate
        # Each unit sold brings back its cost plus the margin
        unit_gain = self.parameters.unit_cost + self.parameters.unit_benefit

        if self.stock > sell_rate:
            self.stock -= sell_rate
            self.cash += sell_rate * unit_gain
        else:
            self.cash += self.stock * unit_gain
            self.stock = 0.0

"""
Shipments in flight.
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, List

from ..exceptions import ShipmentOrderError


@dataclass(frozen=True)
class Shipment:
    """A batch ordered on some day, due on arrival_day."""
    arrival_day: int
    quantity: int


class ShipmentQueue:
    """
    FIFO of ordered shipments.

    Arrival days never decrease from front to back, so the shipments due on a
    given day are always at the front of the queue.
    """

    def __init__(self):
        self._shipments: Deque[Shipment] = deque()
        self._pending_quantity = 0

    def enqueue(self, shipment: Shipment):
        """
        Append a shipment behind every shipment already ordered.

        Raises:
            ShipmentOrderError: If the shipment is due before the last queued one
        """
        if self._shipments and shipment.arrival_day < self._shipments[-1].arrival_day:
            raise ShipmentOrderError(
                f"Shipment due on day {shipment.arrival_day} cannot be queued after "
                f"one due on day {self._shipments[-1].arrival_day}"
            )
        self._shipments.append(shipment)
        self._pending_quantity += shipment.quantity

    def release_due(self, day: int) -> List[Shipment]:
        """
        Remove and return the shipments arriving on the given day.

        Args:
            day: Current simulation day

        Returns:
            Shipments taken from the front of the queue, in order
        """
        released = []
        while self._shipments and self._shipments[0].arrival_day == day:
            shipment = self._shipments.popleft()
            self._pending_quantity -= shipment.quantity
            released.append(shipment)
        return released

    @property
    def pending_quantity(self) -> int:
        """Units ordered but not arrived yet."""
        return self._pending_quantity

    def __len__(self) -> int:
        return len(self._shipments)

    def __iter__(self) -> Iterator[Shipment]:
        return iter(self._shipments)

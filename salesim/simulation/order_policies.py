"""
Order policies for the sales simulation.

Defines the strategies deciding how many batches to buy on a given day.
"""

from abc import ABC, abstractmethod
from typing import List

from .parameters import SimulationParameters
from .shipments import Shipment


class OrderPolicy(ABC):
    """
    Abstract base class for order policies.

    All order policies must implement the calculate_orders method.
    """

    @abstractmethod
    def calculate_orders(self, day: int, cash: float, stock: float,
                         pending_quantity: int,
                         parameters: SimulationParameters) -> List[Shipment]:
        """
        Decide the shipments to order on a given day.

        Every returned shipment costs parameters.batch_cost, debited by the
        caller in the order the shipments are returned.

        Args:
            day: Current simulation day
            cash: Cash available before ordering
            stock: Units on hand
            pending_quantity: Units ordered but not arrived yet
            parameters: Parameters of the run

        Returns:
            Shipments to place, arrival days non-decreasing
        """
        pass


class RunwayReorderPolicy(OrderPolicy):
    """
    Reorder-point policy keeping two lead times of demand covered.

    Keeps buying one batch at a time while cash covers a batch and stock plus
    pending shipments stays below the runway (sell rate x lead time x 2).
    Several batches can be bought on the same day.
    """

    def __init__(self, coverage_factor: float = 2.0):
        """
        Args:
            coverage_factor: Number of lead times of demand to keep covered
        """
        self.coverage_factor = coverage_factor

    def runway(self, parameters: SimulationParameters) -> float:
        """Target stock position in units."""
        return parameters.sell_rate * float(parameters.shipment_delay) * self.coverage_factor

    def calculate_orders(self, day: int, cash: float, stock: float,
                         pending_quantity: int,
                         parameters: SimulationParameters) -> List[Shipment]:
        batch_cost = parameters.batch_cost
        runway = self.runway(parameters)

        orders = []
        while cash >= batch_cost and stock + pending_quantity < runway:
            orders.append(Shipment(
                arrival_day=day + parameters.shipment_delay,
                quantity=parameters.batch_size
            ))
            cash -= batch_cost
            pending_quantity += parameters.batch_size

        return orders


class OrderPolicyFactory:
    """
    Factory for creating order policies.
    """

    _policies = {
        'runway': RunwayReorderPolicy
    }

    @classmethod
    def create_policy(cls, policy_name: str, **kwargs) -> OrderPolicy:
        """
        Create an order policy by name.

        Args:
            policy_name: Name of the policy to create
            **kwargs: Additional arguments for the policy constructor

        Returns:
            OrderPolicy instance

        Raises:
            ValueError: If policy name is not recognized
        """
        if policy_name not in cls._policies:
            available_policies = list(cls._policies.keys())
            raise ValueError(f"Unknown policy '{policy_name}'. Available policies: {available_policies}")

        policy_class = cls._policies[policy_name]
        return policy_class(**kwargs)

    @classmethod
    def register_policy(cls, name: str, policy_class: type):
        """
        Register a new order policy.

        Args:
            name: Name for the policy
            policy_class: Policy class (must inherit from OrderPolicy)
        """
        if not isinstance(policy_class, type) or not issubclass(policy_class, OrderPolicy):
            raise ValueError("Policy class must inherit from OrderPolicy")

        cls._policies[name] = policy_class

    @classmethod
    def list_policies(cls) -> list:
        """Names of the registered policies."""
        return list(cls._policies.keys())

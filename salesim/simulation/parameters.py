"""
Simulation parameters.

One immutable record holds every input of a run. Optional fields default to
neutral values so the same engine covers runs with or without storage cost
and starting stock.
"""

from dataclasses import dataclass, asdict, fields
import math
from typing import Dict, Any, List

from ..exceptions import InvalidParametersError

# Upper bound on the horizon, 100 years of days
MAX_DURATION_DAYS = 36500

DAYS_PER_MONTH = 30


@dataclass(frozen=True)
class SimulationParameters:
    """
    Inputs of one simulation run.

    Attributes:
        initial_cash: Starting cash balance
        initial_stock: Units on hand at day 0
        batch_size: Units per shipment order
        unit_cost: Purchase cost per unit
        unit_benefit: Margin per unit sold
        unit_monthly_storage: Holding cost per unit per 30 days
        weekly_sales: Average demand in units per week
        shipment_delay: Days between placing an order and its arrival
        duration_days: Number of simulated days
    """

    initial_cash: float = 1000.0
    initial_stock: int = 0
    batch_size: int = 20
    unit_cost: float = 25.0
    unit_benefit: float = 10.0
    unit_monthly_storage: float = 0.0
    weekly_sales: float = 7.0
    shipment_delay: int = 14
    duration_days: int = 12 * DAYS_PER_MONTH

    @property
    def sell_rate(self) -> float:
        """Units sold per day."""
        return self.weekly_sales / 7.0

    @property
    def batch_cost(self) -> float:
        """Cash spent on one shipment order."""
        return float(self.batch_size) * self.unit_cost

    @property
    def unit_daily_storage(self) -> float:
        return self.unit_monthly_storage / DAYS_PER_MONTH

    def validation_errors(self) -> List[str]:
        """
        Check every field and collect the problems found.

        Returns:
            List of human readable messages, empty when the parameters are valid
        """
        errors = []

        for name in ('initial_stock', 'batch_size', 'shipment_delay', 'duration_days'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                errors.append(f"{name} must be an integer, got {value!r}")

        for name in ('initial_cash', 'unit_cost', 'unit_benefit', 'unit_monthly_storage', 'weekly_sales'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(f"{name} must be a number, got {value!r}")
            elif not math.isfinite(value):
                errors.append(f"{name} must be finite, got {value!r}")

        if errors:
            return errors

        if self.duration_days <= 0:
            errors.append(f"duration_days must be positive, got {self.duration_days}")
        elif self.duration_days > MAX_DURATION_DAYS:
            errors.append(f"duration_days must not exceed {MAX_DURATION_DAYS}, got {self.duration_days}")
        if self.batch_size <= 0:
            errors.append(f"batch_size must be positive, got {self.batch_size}")
        if self.shipment_delay < 0:
            errors.append(f"shipment_delay must not be negative, got {self.shipment_delay}")
        if self.unit_cost <= 0:
            # A free batch would let the order loop run forever
            errors.append(f"unit_cost must be positive, got {self.unit_cost}")
        if self.initial_stock < 0:
            errors.append(f"initial_stock must not be negative, got {self.initial_stock}")
        if self.weekly_sales < 0:
            errors.append(f"weekly_sales must not be negative, got {self.weekly_sales}")
        if self.unit_monthly_storage < 0:
            errors.append(f"unit_monthly_storage must not be negative, got {self.unit_monthly_storage}")

        return errors

    def validate(self) -> 'SimulationParameters':
        """
        Raise InvalidParametersError unless every field is usable.

        Returns:
            self, so calls can be chained
        """
        errors = self.validation_errors()
        if errors:
            raise InvalidParametersError("; ".join(errors))
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Flat mapping of field name to value."""
        return asdict(self)

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'SimulationParameters':
        """
        Build parameters from a flat mapping, falling back to defaults for missing keys.

        Numbers are coerced to the field's type; integer fields only accept whole numbers.

        Args:
            values: Mapping of field name to value. Unknown keys are ignored.

        Returns:
            SimulationParameters instance

        Raises:
            TypeError, ValueError: If a value cannot be converted
        """
        kwargs = {}
        for f in fields(cls):
            if f.name not in values or values[f.name] is None:
                continue
            kwargs[f.name] = _coerce(f.name, f.type, values[f.name])
        return cls(**kwargs)


def _coerce(name: str, type_name, value):
    if isinstance(value, bool):
        raise TypeError(f"{name} must be a number, got {value!r}")

    if type_name in (int, 'int'):
        number = float(value)
        if not number.is_integer():
            raise ValueError(f"{name} must be a whole number, got {value!r}")
        return int(number)

    return float(value)

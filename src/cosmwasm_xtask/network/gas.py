"""Gas price and fee settings."""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from ..errors import ConfigurationError

_PRICE_RE = re.compile(r"^\s*(?P<amount>\d+(?:\.\d+)?)\s*(?P<denom>[a-zA-Z][a-zA-Z0-9/:._-]{1,127})\s*$")

GasUnits = Union[int, str]


@dataclass(frozen=True)
class GasPrice:
    amount: Decimal
    denom: str

    @classmethod
    def of(cls, amount: Union[int, float, str, Decimal], denom: str) -> "GasPrice":
        try:
            value = Decimal(str(amount))
        except InvalidOperation:
            raise ConfigurationError(f"Invalid gas price amount: {amount!r}") from None
        if value < 0:
            raise ConfigurationError(f"Gas price must not be negative: {amount!r}")
        if not denom:
            raise ConfigurationError("Gas price denom must not be empty")
        return cls(value, denom)

    @classmethod
    def parse(cls, text: str) -> "GasPrice":
        """Parse ``<amount><denom>`` text such as ``0.025untrn``."""
        match = _PRICE_RE.match(text)
        if match is None:
            raise ConfigurationError(f"Malformed gas price: {text!r}")
        return cls.of(match.group("amount"), match.group("denom"))

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


@dataclass(frozen=True)
class GasConfig:
    """
    Fee settings of a network.

    Attributes:
        price: Gas price passed as ``--gas-prices``
        adjustment: Multiplier applied to simulated gas (``--gas-adjustment``)
        units: Fixed gas limit or ``"auto"`` (``--gas``)
    """

    price: GasPrice
    adjustment: Optional[float] = None
    units: Optional[GasUnits] = None

    def __post_init__(self) -> None:
        if self.adjustment is not None and self.adjustment <= 0:
            raise ConfigurationError(f"Gas adjustment must be positive: {self.adjustment}")
        if isinstance(self.units, str):
            if self.units != "auto":
                raise ConfigurationError(f"Gas units must be an integer or 'auto': {self.units!r}")
        elif self.units is not None and self.units <= 0:
            raise ConfigurationError(f"Gas units must be positive: {self.units}")


def parse_gas_units(text: str) -> GasUnits:
    value = text.strip().lower()
    if value == "auto":
        return value
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"Gas units must be an integer or 'auto': {text!r}") from None

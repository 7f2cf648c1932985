"""Shared enumerations for the plant simulation.

Values are the strings persisted in the configuration snapshot, so they must
stay stable across releases.
"""

from enum import Enum


class PlantStatus(str, Enum):
    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"
    MAINTENANCE = "MAINTENANCE"


class FuelMode(str, Enum):
    """Fuel operating modes, including the two flex-fuel blends."""
    NATURAL_GAS = "NATURAL_GAS"
    ETHANOL = "ETHANOL"
    BIODIESEL = "BIODIESEL"
    FLEX_NG_H2 = "FLEX_NG_H2"                          # natural gas + hydrogen
    FLEX_ETHANOL_BIODIESEL = "FLEX_ETHANOL_BIODIESEL"  # ethanol + biodiesel


class TurbineStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ERROR = "error"


class TurbineType(str, Enum):
    COMBINED_CYCLE = "combined_cycle"
    RANKINE_CYCLE = "rankine_cycle"


class Resource(str, Enum):
    WATER = "water"
    GAS = "gas"
    ETHANOL = "ethanol"
    BIODIESEL = "biodiesel"
    H2 = "h2"


class AlertLevel(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"

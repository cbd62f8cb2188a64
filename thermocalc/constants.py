"""Fixed physical and design constants.

UNITS:
- Temperature: °C
- Power: W (kWh/yr for annual energy)
- Air flow: m³/h
- Irradiation: kWh/m²/yr
- Angles: degrees

Every constant here is a default. The calculation functions accept an
override through keyword arguments, e.g. a different climate zone passes its
own ``LoadDesign`` or ``base_irradiation``.
"""
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class AirProperties:
    density: float = 1.2  # kg/m³
    specific_heat: float = 1005.0  # J/(kg·K)


@dataclass(frozen=True)
class LoadDesign:
    comfort_temperature: float  # indoor set point [°C]
    gain_per_occupant: float = 80.0  # W/person
    gain_per_floor_area: float = 5.0  # W/m² (equipment)


AIR = AirProperties()

WINTER_DESIGN = LoadDesign(comfort_temperature=19.0)
SUMMER_DESIGN = LoadDesign(comfort_temperature=26.0)

SECONDS_PER_HOUR = 3600.0

# Yield correction per orientation, south = 1
ORIENTATION_FACTORS = MappingProxyType({
    'south': 1.0,
    'south-east': 0.95,
    'south-west': 0.95,
    'east': 0.85,
    'west': 0.85,
    'north': 0.65,
})

OPTIMAL_TILT_DEG = 33.0
BASE_IRRADIATION = 1100.0  # kWh/m²/yr
INSTALLATION_MARKUP = 1.5  # panel price + 50 % for installation
DEFAULT_ELECTRICITY_RATE = 0.25  # per kWh

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class SurfaceResistance:
    interior: float  # Rsi [m²K/W]
    exterior: float  # Rse [m²K/W]


@dataclass(frozen=True)
class MaterialLayer:
    name: str
    thermal_conductivity: float  # λ [W/mK]
    thickness: float  # d [m]
    thermal_resistance: Optional[float] = None  # display annotation only, never read back
    surface_resistance: Optional[SurfaceResistance] = None  # not part of u_value()


@dataclass(frozen=True)
class SolarMask:
    angle: float  # [°]
    distance: float  # [m]


@dataclass(frozen=True)
class ThermalBridge:
    kind: str  # 'linear' or 'point'
    value: float  # [W/K]
    length: Optional[float] = None  # [m], linear bridges only


@dataclass
class Wall:
    """One planar envelope element (wall, floor, roof, window or door)."""
    area: float  # [m²]
    materials: List[MaterialLayer]
    orientation: str = 'south'
    type: str = 'wall'
    tilt: Optional[float] = None  # [°]
    solar_mask: Optional[SolarMask] = None
    thermal_bridges: List[ThermalBridge] = field(default_factory=list)


@dataclass
class ClimateInput:
    exterior_temperature: float  # θe [°C]
    solar_gains: float = 0.0  # [W]


@dataclass
class ClimateData:
    exterior_temperature: float  # [°C]
    humidity: float = 0.0  # [%]
    solar_radiation: float = 0.0  # [W/m²]
    wind_speed: float = 0.0  # [m/s]
    wind_direction: float = 0.0  # [°]


@dataclass
class HeatingResult:
    transmission_loss: float  # [W]
    ventilation_loss: float  # [W]
    internal_gains: float  # [W]
    total_heating_power: float  # [W], negative when gains cover the losses


@dataclass
class CoolingResult:
    transmission_gain: float  # [W]
    ventilation_gain: float  # [W]
    internal_gains: float  # [W]
    solar_gains: float  # [W]
    total_cooling_power: float  # [W]


@dataclass(frozen=True)
class SolarPanelSpec:
    rated_power: float  # [Wc]
    efficiency: float  # [%]
    area: float  # [m²]
    price: float
    brand: str = ''
    model: str = ''
    technology: str = 'monocrystalline'


@dataclass
class SolarSizingResult:
    required_peak_power: float  # [Wc]
    panel_count: int
    required_area: float  # [m²]
    annual_yield: float  # [kWh/yr]
    payback_period: float  # [years]
    yield_per_watt: float  # [Wh/Wc/yr]
    install_cost: float
    annual_savings: float  # per year


@dataclass
class Envelope:
    walls: List[Wall] = field(default_factory=list)
    floors: List[Wall] = field(default_factory=list)
    roofs: List[Wall] = field(default_factory=list)
    openings: List[Wall] = field(default_factory=list)  # windows and doors


@dataclass
class VentilationSystem:
    type: str  # 'single-flow', 'double-flow', 'natural' or 'mechanical'
    air_flow: float  # [m³/h]
    heat_recovery_efficiency: Optional[float] = None  # double-flow only


@dataclass
class Occupancy:
    occupants: int
    internal_heat_gains: float = 0.0  # [W/m²]


@dataclass
class Building:
    name: str
    floor_area: float  # heated floor area [m²]
    volume: float = 0.0  # [m³]
    ceiling_height: float = 2.5  # [m]
    climate_zone: Optional[str] = None
    envelope: Envelope = field(default_factory=Envelope)
    ventilation: Optional[VentilationSystem] = None
    occupancy: Optional[Occupancy] = None


@dataclass
class BuildingLoads:
    heating: HeatingResult
    cooling: CoolingResult

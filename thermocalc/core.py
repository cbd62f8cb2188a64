from .dataclasses import (
    MaterialLayer, Wall, Envelope, Building, ClimateInput,
    HeatingResult, CoolingResult, BuildingLoads,
)
from .constants import (
    AIR, WINTER_DESIGN, SUMMER_DESIGN, SECONDS_PER_HOUR, AirProperties, LoadDesign,
)
from .errors import InvalidMaterial, EmptyAssembly
from typing import Iterable, List, Sequence
import logging
import math

logger = logging.getLogger(__name__)


def resistance(layer: MaterialLayer) -> float:
    """Thermal resistance R = d/λ of a single layer in m²K/W."""
    if not 0 < layer.thermal_conductivity < math.inf:
        logger.warning("Layer %r has unusable conductivity %s", layer.name, layer.thermal_conductivity)
        raise InvalidMaterial(
            f"Thermal conductivity of {layer.name!r} must be positive and finite, got {layer.thermal_conductivity}"
        )
    if not 0 < layer.thickness < math.inf:
        logger.warning("Layer %r has unusable thickness %s", layer.name, layer.thickness)
        raise InvalidMaterial(f"Thickness of {layer.name!r} must be positive and finite, got {layer.thickness}")
    return layer.thickness / layer.thermal_conductivity


def u_value(layers: Sequence[MaterialLayer]) -> float:
    """Return U = 1/ΣR over the layers in W/m²K.

    Surface film resistances (Rsi, Rse) are not added, even when a layer
    carries them. Raises ``EmptyAssembly`` for an empty layer sequence.
    """
    if not layers:
        logger.warning("U-value requested for an assembly without layers")
        raise EmptyAssembly("An assembly needs at least one layer to have a U-value")
    R_total = sum(resistance(layer) for layer in layers)
    U = 1.0 / R_total
    logger.debug("U-value of %d layers: R_total=%.4f m²K/W, U=%.4f W/m²K", len(layers), R_total, U)
    return U


def heat_flow(u: float, area: float, temp_diff: float) -> float:
    """Transmission heat flow Φ = U·A·Δθ in W.

    ``temp_diff`` must already carry the seasonal sign: θi − θe in winter,
    θe − θi in summer.
    """
    return u * area * temp_diff


def vent_flow(
    air_flow: float,
    temp_diff: float,
    air_density: float = AIR.density,
    specific_heat: float = AIR.specific_heat,
) -> float:
    """Ventilation heat flow in W for an air flow in m³/h."""
    air_flow_per_second = air_flow / SECONDS_PER_HOUR
    return air_flow_per_second * air_density * specific_heat * temp_diff


def _contributes(element: Wall) -> bool:
    # Elements without area or layers add nothing to the envelope sum.
    return element.area != 0 and bool(element.materials)


def _transmission(elements: Iterable[Wall], temp_diff: float) -> float:
    total = 0.0
    for element in elements:
        if not _contributes(element):
            logger.debug("Skipping %s element with area=%s and %d layers",
                         element.type, element.area, len(element.materials))
            continue
        total += heat_flow(u_value(element.materials), element.area, temp_diff)
    return total


def internal_gains(occupants: float, floor_area: float, design: LoadDesign = WINTER_DESIGN) -> float:
    """Heat released by occupants and equipment in W."""
    return occupants * design.gain_per_occupant + floor_area * design.gain_per_floor_area


def heating_load(
    elements: Sequence[Wall],
    air_flow: float,
    occupants: float,
    floor_area: float,
    exterior_temp: float,
    design: LoadDesign = WINTER_DESIGN,
    air: AirProperties = AIR,
) -> HeatingResult:
    """Winter heating power demand.

    Internal gains offset the transmission and ventilation losses. The total
    is not clamped: a negative value means no heating is needed.
    """
    dT = design.comfort_temperature - exterior_temp
    transmission_loss = _transmission(elements, dT)
    ventilation_loss = vent_flow(air_flow, dT, air.density, air.specific_heat)
    gains = internal_gains(occupants, floor_area, design)
    result = HeatingResult(
        transmission_loss=transmission_loss,
        ventilation_loss=ventilation_loss,
        internal_gains=gains,
        total_heating_power=transmission_loss + ventilation_loss - gains,
    )
    logger.debug("Heating load at θe=%s °C: %s", exterior_temp, result)
    return result


def cooling_load(
    elements: Sequence[Wall],
    air_flow: float,
    occupants: float,
    floor_area: float,
    exterior_temp: float,
    solar_gains: float,
    design: LoadDesign = SUMMER_DESIGN,
    air: AirProperties = AIR,
) -> CoolingResult:
    """Summer cooling power demand.

    Every contribution adds to the load; internal and solar gains never
    reduce it.
    """
    dT = exterior_temp - design.comfort_temperature
    transmission_gain = _transmission(elements, dT)
    ventilation_gain = vent_flow(air_flow, dT, air.density, air.specific_heat)
    gains = internal_gains(occupants, floor_area, design)
    result = CoolingResult(
        transmission_gain=transmission_gain,
        ventilation_gain=ventilation_gain,
        internal_gains=gains,
        solar_gains=solar_gains,
        total_cooling_power=transmission_gain + ventilation_gain + gains + solar_gains,
    )
    logger.debug("Cooling load at θe=%s °C: %s", exterior_temp, result)
    return result


def total_heat_loss(walls: Sequence[Wall], interior_temp: float, exterior_temp: float) -> float:
    """Transmission loss in W through ``walls`` for an arbitrary set point."""
    return _transmission(walls, interior_temp - exterior_temp)


def envelope_elements(envelope: Envelope) -> List[Wall]:
    """Flatten an envelope: walls, floors, roofs, then openings."""
    return [*envelope.walls, *envelope.floors, *envelope.roofs, *envelope.openings]


def building_loads(building: Building, climate: ClimateInput) -> BuildingLoads:
    """Heating and cooling loads of a whole building at one climate point.

    Without a ventilation system the air flow is 0; without occupancy data
    one occupant is assumed.
    """
    elements = envelope_elements(building.envelope)
    air_flow = building.ventilation.air_flow if building.ventilation is not None else 0.0
    occupants = building.occupancy.occupants if building.occupancy is not None else 1
    logger.debug("Building %r: %d envelope elements, %s m³/h, %s occupants",
                 building.name, len(elements), air_flow, occupants)
    heating = heating_load(elements, air_flow, occupants, building.floor_area, climate.exterior_temperature)
    cooling = cooling_load(
        elements, air_flow, occupants, building.floor_area,
        climate.exterior_temperature, climate.solar_gains,
    )
    return BuildingLoads(heating=heating, cooling=cooling)

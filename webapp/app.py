from flask import Flask, request, jsonify
from dataclasses import asdict
import sys
from pathlib import Path

# Ensure repository root is on sys.path for package import
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from thermocalc.core import u_value, heating_load, cooling_load
from thermocalc.solar import size_solar_array
from thermocalc.catalog import load_materials, load_panels, find_panel
from thermocalc.constants import DEFAULT_ELECTRICITY_RATE, BASE_IRRADIATION
from thermocalc.dataclasses import MaterialLayer, Wall, SolarPanelSpec
from thermocalc.errors import CalculationError
from thermocalc.log import ModuleLogger

app = Flask(__name__)
logger = ModuleLogger.get_logger('thermocalc')

USAGE = {
    '/u-value': {
        'layers': [{'name': 'Glass Wool', 'thermal_conductivity': 0.035, 'thickness': 0.1}],
    },
    '/heating': {
        'elements': [{'area': 20, 'layers': [{'name': 'Solid Brick', 'thermal_conductivity': 1.0, 'thickness': 0.2}]}],
        'air_flow': 100, 'occupants': 2, 'floor_area': 80, 'exterior_temp': -5,
    },
    '/cooling': {
        'elements': [{'area': 20, 'layers': [{'name': 'Solid Brick', 'thermal_conductivity': 1.0, 'thickness': 0.2}]}],
        'air_flow': 100, 'occupants': 2, 'floor_area': 80, 'exterior_temp': 32, 'solar_gains': 500,
    },
    '/solar': {
        'consumption': 4500, 'orientation': 'south', 'tilt': 30, 'shading': 0,
        'panel': {'brand': 'Meyer Burger', 'model': 'White'}, 'electricity_rate': DEFAULT_ELECTRICITY_RATE,
    },
}


class BadRequest(Exception):
    pass


def _layer(L: dict, idx: int) -> MaterialLayer:
    try:
        return MaterialLayer(
            name=str(L.get('name', f'Layer {idx+1}')),
            thermal_conductivity=float(L['thermal_conductivity']),
            thickness=float(L['thickness']),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise BadRequest(f'Invalid layer at index {idx}: {e}') from e


def _layers(items) -> list[MaterialLayer]:
    if not isinstance(items, list):
        raise BadRequest('layers must be a list')
    return [_layer(L, idx) for idx, L in enumerate(items)]


def _elements(items) -> list[Wall]:
    if not isinstance(items, list):
        raise BadRequest('elements must be a list')
    walls: list[Wall] = []
    for idx, E in enumerate(items):
        try:
            walls.append(Wall(
                area=float(E['area']),
                materials=_layers(E.get('layers', [])),
                orientation=str(E.get('orientation', 'south')),
                type=str(E.get('type', 'wall')),
            ))
        except (KeyError, TypeError, ValueError) as e:
            raise BadRequest(f'Invalid element at index {idx}: {e}') from e
    return walls


def _panel(P) -> SolarPanelSpec:
    if not isinstance(P, dict):
        raise BadRequest('panel must be an object')
    if 'rated_power' not in P:
        try:
            return find_panel(str(P.get('brand', '')), str(P.get('model', '')))
        except KeyError as e:
            raise BadRequest(f'Unknown catalog panel {e}') from e
    try:
        return SolarPanelSpec(
            rated_power=float(P['rated_power']),
            efficiency=float(P['efficiency']),
            area=float(P['area']),
            price=float(P.get('price', 0.0)),
            brand=str(P.get('brand', '')),
            model=str(P.get('model', '')),
            technology=str(P.get('technology', 'monocrystalline')),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise BadRequest(f'Invalid custom panel: {e}') from e


def _number(data: dict, key: str, default: float | None = None) -> float:
    value = data.get(key, default)
    if value is None:
        raise BadRequest(f'Missing value for {key!r}')
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise BadRequest(f'Invalid number for {key!r}: {value}') from e


def _handle(compute):
    if request.method == 'GET':
        return jsonify({'ok': True, 'usage': 'POST JSON to this endpoint', 'example': USAGE[request.path]})
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'ok': False, 'error': 'Request body must be a JSON object'}), 400
    try:
        return jsonify({'ok': True, 'result': compute(data)})
    except BadRequest as e:
        return jsonify({'ok': False, 'error': str(e)}), 400
    except CalculationError as e:
        logger.info('%s rejected: %s', request.path, e)
        return jsonify({'ok': False, 'error': e.kind, 'message': str(e)}), 422


@app.route('/u-value', methods=['GET', 'POST'])
def u_value_api():
    def compute(data):
        layers = _layers(data.get('layers'))
        return {'u_value': u_value(layers)}
    return _handle(compute)


@app.route('/heating', methods=['GET', 'POST'])
def heating_api():
    def compute(data):
        result = heating_load(
            _elements(data.get('elements', [])),
            _number(data, 'air_flow', 0.0),
            _number(data, 'occupants', 1),
            _number(data, 'floor_area'),
            _number(data, 'exterior_temp'),
        )
        return asdict(result)
    return _handle(compute)


@app.route('/cooling', methods=['GET', 'POST'])
def cooling_api():
    def compute(data):
        result = cooling_load(
            _elements(data.get('elements', [])),
            _number(data, 'air_flow', 0.0),
            _number(data, 'occupants', 1),
            _number(data, 'floor_area'),
            _number(data, 'exterior_temp'),
            _number(data, 'solar_gains', 0.0),
        )
        return asdict(result)
    return _handle(compute)


@app.route('/solar', methods=['GET', 'POST'])
def solar_api():
    def compute(data):
        result = size_solar_array(
            _number(data, 'consumption'),
            str(data.get('orientation', 'south')),
            _number(data, 'tilt', 30.0),
            _number(data, 'shading', 0.0),
            _panel(data.get('panel')),
            _number(data, 'electricity_rate', DEFAULT_ELECTRICITY_RATE),
            _number(data, 'base_irradiation', BASE_IRRADIATION),
        )
        return asdict(result)
    return _handle(compute)


@app.route('/materials', methods=['GET'])
def materials_api():
    catalog = load_materials()
    q = request.args.get('q')
    out = {}
    for category, layers in catalog.items():
        items = [asdict(layer) for layer in layers]
        if q:
            items = [m for m in items if q.lower() in m['name'].lower()]
        if items:
            out[category] = items
    return jsonify({'ok': True, 'materials': out})


@app.route('/panels', methods=['GET'])
def panels_api():
    return jsonify({'ok': True, 'panels': [asdict(p) for p in load_panels()]})


@app.errorhandler(405)
def handle_405(e):
    return jsonify({'ok': False, 'error': 'Method Not Allowed', 'hint': 'POST JSON to a calculation endpoint'}), 405


if __name__ == '__main__':
    app.run(debug=True)

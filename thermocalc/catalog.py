from __future__ import annotations

from pathlib import Path
import csv
from typing import Dict, List

from .dataclasses import MaterialLayer, SolarPanelSpec

CONTEXT = Path(__file__).resolve().parent / 'context'
MATERIALS_CSV = CONTEXT / 'materials.csv'
PANELS_CSV = CONTEXT / 'panels.csv'


def _require_float(s: str | float | int | None, field: str, row: int) -> float:
    """Parse *s* as float or raise ``ValueError`` with row context."""
    if s is None or str(s).strip() == "":
        raise ValueError(f"Missing value for {field!r} in row {row}")
    if isinstance(s, (int, float)):
        return float(s)
    txt = str(s).strip().replace("\u00a0", " ").replace(" ", "").replace(",", ".")
    try:
        return float(txt)
    except ValueError as exc:
        raise ValueError(f"Invalid number for {field!r} in row {row}: {s}") from exc


def _require_text(s: str | None, field: str, row: int) -> str:
    txt = (s or '').strip()
    if not txt:
        raise ValueError(f"Missing value for {field!r} in row {row}")
    return txt


def _rows(path: Path):
    with path.open('r', encoding='utf-8') as f:
        rdr = csv.DictReader(f)
        for idx, row in enumerate(rdr, start=2):  # header is row 1
            if not any((v or '').strip() for v in row.values()):
                continue
            yield idx, {(k or '').strip().lower(): v for k, v in row.items()}


def load_materials() -> Dict[str, List[MaterialLayer]]:
    """Load the material catalog from context/materials.csv, grouped by category.

    Expected columns (case-insensitive, flexible order):
    category, name, lambda, thickness
    """
    if not MATERIALS_CSV.exists():
        return {}
    out: Dict[str, List[MaterialLayer]] = {}
    for idx, row in _rows(MATERIALS_CSV):
        try:
            category = _require_text(row.get('category'), 'category', idx)
            layer = MaterialLayer(
                name=_require_text(row.get('name'), 'name', idx),
                thermal_conductivity=_require_float(row.get('lambda') or row.get('lambda_'), 'lambda', idx),
                thickness=_require_float(row.get('thickness') or row.get('d'), 'thickness', idx),
            )
        except ValueError as exc:
            raise ValueError(f"Error parsing materials.csv: {exc}") from exc
        out.setdefault(category, []).append(layer)
    return out


def load_panels() -> List[SolarPanelSpec]:
    """Load the solar panel catalog from context/panels.csv.

    Expected columns: brand, model, technology, power, efficiency, area, price
    """
    if not PANELS_CSV.exists():
        return []
    out: List[SolarPanelSpec] = []
    for idx, row in _rows(PANELS_CSV):
        try:
            out.append(SolarPanelSpec(
                brand=_require_text(row.get('brand'), 'brand', idx),
                model=_require_text(row.get('model'), 'model', idx),
                technology=(row.get('technology') or 'monocrystalline').strip(),
                rated_power=_require_float(row.get('power'), 'power', idx),
                efficiency=_require_float(row.get('efficiency'), 'efficiency', idx),
                area=_require_float(row.get('area'), 'area', idx),
                price=_require_float(row.get('price'), 'price', idx),
            ))
        except ValueError as exc:
            raise ValueError(f"Error parsing panels.csv: {exc}") from exc
    return out


def find_material(name: str) -> MaterialLayer:
    """Return the catalog layer called ``name`` (case-insensitive)."""
    wanted = name.strip().lower()
    for layers in load_materials().values():
        for layer in layers:
            if layer.name.lower() == wanted:
                return layer
    raise KeyError(name)


def find_panel(brand: str, model: str) -> SolarPanelSpec:
    """Return the catalog panel matching ``brand`` and ``model`` (case-insensitive)."""
    for panel in load_panels():
        if panel.brand.lower() == brand.strip().lower() and panel.model.lower() == model.strip().lower():
            return panel
    raise KeyError(f"{brand} {model}")

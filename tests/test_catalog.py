import sys
from pathlib import Path
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from thermocalc import catalog
from thermocalc.dataclasses import MaterialLayer, SolarPanelSpec


def test_load_materials_parses_csv(tmp_path, monkeypatch):
    csv_text = (
        "category,name,lambda,thickness\n"
        "insulation,Sample,\"0,035\",0.1\n"
        "\n"
        "masonry,Brick,1.0,0.2\n"
    )
    f = tmp_path / "materials.csv"
    f.write_text(csv_text, encoding="utf-8")
    monkeypatch.setattr(catalog, "MATERIALS_CSV", f)
    data = catalog.load_materials()
    assert data == {
        "insulation": [MaterialLayer("Sample", thermal_conductivity=0.035, thickness=0.1)],
        "masonry": [MaterialLayer("Brick", thermal_conductivity=1.0, thickness=0.2)],
    }


def test_load_materials_raises_on_bad_row(tmp_path, monkeypatch):
    csv_text = (
        "category,name,lambda,thickness\n"
        "insulation,Bad,not_a_number,0.1\n"
    )
    f = tmp_path / "materials.csv"
    f.write_text(csv_text, encoding="utf-8")
    monkeypatch.setattr(catalog, "MATERIALS_CSV", f)
    with pytest.raises(ValueError, match="row 2"):
        catalog.load_materials()


def test_missing_catalog_files_are_empty(tmp_path, monkeypatch):
    monkeypatch.setattr(catalog, "MATERIALS_CSV", tmp_path / "nope.csv")
    monkeypatch.setattr(catalog, "PANELS_CSV", tmp_path / "nope.csv")
    assert catalog.load_materials() == {}
    assert catalog.load_panels() == []


def test_shipped_material_catalog():
    data = catalog.load_materials()
    assert list(data) == ["masonry", "insulation", "wood", "finishes", "glazing"]
    assert all(layer.thermal_conductivity > 0 and layer.thickness > 0
               for layers in data.values() for layer in layers)
    assert catalog.find_material("glass wool") == MaterialLayer("Glass Wool", 0.035, 0.1)


def test_shipped_panel_catalog():
    panels = catalog.load_panels()
    assert len(panels) == 5
    assert catalog.find_panel("LONGi", "Hi-MO5") == SolarPanelSpec(
        rated_power=540, efficiency=21.3, area=2.56, price=580,
        brand="LONGi", model="Hi-MO5", technology="bifacial",
    )


def test_unknown_entries_raise_key_error():
    with pytest.raises(KeyError):
        catalog.find_material("Unobtainium")
    with pytest.raises(KeyError):
        catalog.find_panel("Acme", "X1")

import pytest

from materialsanalysis.model.materials import (
    ElectricalRequirement, MaterialCategory, MaterialLibrary, MaterialProperty, MaterialRecord,
    SelectionCriteria, match_score, rank_materials
)


@pytest.fixture
def library() -> MaterialLibrary:
    return MaterialLibrary()


def test_default_library(library) -> None:
    assert len(library.get_names()) == 10
    steel = library.get_material("Steel 304")
    assert steel.get(MaterialProperty.YIELD_STRENGTH) == 215
    assert steel.category == MaterialCategory.METALS
    assert [m.name for m in library.by_category(MaterialCategory.POLYMERS)] == ["PEEK", "HDPE"]


def test_full_match_scores_100(library) -> None:
    assert match_score(library.get_material("Steel 304"), SelectionCriteria()) == 100


def test_partial_match(library) -> None:
    criteria = SelectionCriteria(electrical=ElectricalRequirement.CONDUCTOR)

    # melting point 343 of 1000 °C, not a conductor
    assert match_score(library.get_material("PEEK"), criteria) == 59
    assert match_score(library.get_material("Copper"), criteria) == 100


def test_score_rounds_half_up() -> None:
    material = MaterialRecord(name="Test", yield_strength=50, density=1, melting_point=0)

    assert match_score(material, SelectionCriteria(min_yield=100)) == 63


def test_rank_is_descending_and_stable(library) -> None:
    ranked = library.rank(SelectionCriteria(min_yield=300, max_density=5))

    scores = [score for _, score in ranked]
    assert scores == sorted(scores, reverse=True)
    assert [m.name for m, _ in ranked[:3]] == ["Ti-6Al-4V", "Carbon Fiber Composite", "Silicon"]
    assert rank_materials([], SelectionCriteria()) == []


def test_json_round_trip(library, tmp_path) -> None:
    path = tmp_path / "materials.json"
    library.add_material(MaterialRecord(name="Custom", category=MaterialCategory.BIOMATERIALS, density=1.1))
    library.remove_material("HDPE")

    library.to_json(str(path))
    loaded = MaterialLibrary.from_json(str(path))

    assert loaded.get_names() == library.get_names()
    assert loaded.get_material("Custom") == library.get_material("Custom")
    assert loaded.get_material("HDPE") is None


def test_read_missing_file(tmp_path) -> None:
    with pytest.raises(IOError):
        MaterialLibrary.read_json(str(tmp_path / "missing.json"))


def test_record_needs_name() -> None:
    with pytest.raises(ValueError):
        MaterialRecord.from_dict({"density": 1.0})


def test_format_property_uses_metadata(library) -> None:
    aluminium = library.get_material("Aluminum 6061")

    assert aluminium.format_property(MaterialProperty.DENSITY) == "Density: 2.7 g/cm³"
    assert aluminium.format_property(MaterialProperty.YIELD_STRENGTH) == "Yield Strength: 276 MPa"
    assert aluminium.format_property(MaterialProperty.POISSON_RATIO) == "Poisson's Ratio: 0.33"

"""
Material Library & Selection
============================
Reference property records for common engineering materials and the
criteria-based ranking used to shortlist candidates.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict
from enum import StrEnum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from materialsanalysis.calculations.physical import (
    CONDUCTOR_RESISTIVITY, INSULATOR_RESISTIVITY
)
from materialsanalysis.config import DEFAULT_MATS_PATH
from materialsanalysis.utils import round_half_up

logger = logging.getLogger(__name__)


class MaterialCategory(StrEnum):
    METALS = "Metals & Alloys"
    POLYMERS = "Polymers"
    CERAMICS = "Ceramics"
    COMPOSITES = "Composites"
    SEMICONDUCTORS = "Semiconductors"
    BIOMATERIALS = "Biomaterials"


class MaterialProperty(StrEnum):
    DENSITY = "density"
    YIELD_STRENGTH = "yield_strength"
    UTS = "uts"
    YOUNGS_MODULUS = "youngs_modulus"
    HARDNESS = "hardness"
    MELTING_POINT = "melting_point"
    THERMAL_CONDUCTIVITY = "thermal_conductivity"
    ELECTRICAL_RESISTIVITY = "electrical_resistivity"
    POISSON_RATIO = "poisson_ratio"
    ELONGATION = "elongation"


@dataclass
class PropertyMetadata:
    label: str
    unit: str


PROPERTY_METADATA: Dict[MaterialProperty, PropertyMetadata] = {
    MaterialProperty.DENSITY: PropertyMetadata(label="Density", unit="g/cm³"),
    MaterialProperty.YIELD_STRENGTH: PropertyMetadata(label="Yield Strength", unit="MPa"),
    MaterialProperty.UTS: PropertyMetadata(label="Ultimate Tensile Strength", unit="MPa"),
    MaterialProperty.YOUNGS_MODULUS: PropertyMetadata(label="Young's Modulus", unit="GPa"),
    MaterialProperty.HARDNESS: PropertyMetadata(label="Hardness", unit="HV"),
    MaterialProperty.MELTING_POINT: PropertyMetadata(label="Melting Point", unit="°C"),
    MaterialProperty.THERMAL_CONDUCTIVITY: PropertyMetadata(label="Thermal Conductivity", unit="W/(m·K)"),
    MaterialProperty.ELECTRICAL_RESISTIVITY: PropertyMetadata(label="Electrical Resistivity", unit="Ω·m"),
    MaterialProperty.POISSON_RATIO: PropertyMetadata(label="Poisson's Ratio", unit=""),
    MaterialProperty.ELONGATION: PropertyMetadata(label="Elongation", unit="%"),
}


@dataclass(kw_only=True)
class MaterialRecord:
    """Room temperature reference properties of one material."""
    name: str
    category: MaterialCategory = MaterialCategory.METALS
    density: float = 0.0
    yield_strength: float = 0.0
    uts: float = 0.0
    youngs_modulus: float = 0.0
    hardness: float = 0.0
    melting_point: float = 0.0
    thermal_conductivity: float = 0.0
    electrical_resistivity: float = 0.0
    poisson_ratio: float = 0.0
    elongation: float = 0.0
    notes: str = ""

    def get(self, prop: MaterialProperty) -> float:
        return getattr(self, prop.value)

    def format_property(self, prop: MaterialProperty) -> str:
        """Labelled value with its unit, e.g. ``"Density: 2.7 g/cm³"``."""
        meta = PROPERTY_METADATA[prop]
        return f"{meta.label}: {self.get(prop):g} {meta.unit}".rstrip()

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["category"] = self.category.value
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> MaterialRecord:
        if "name" not in data:
            raise ValueError("Material record needs a name.")
        values = {p.value: float(data.get(p.value, 0.0)) for p in MaterialProperty}
        return MaterialRecord(
            name=data["name"],
            category=MaterialCategory(data.get("category", MaterialCategory.METALS)),
            notes=data.get("notes", ""),
            **values
        )


class ElectricalRequirement(StrEnum):
    ANY = "any"
    CONDUCTOR = "conductor"
    INSULATOR = "insulator"


@dataclass
class SelectionCriteria:
    """
    Attributes:
        min_yield: Minimum yield strength in MPa.
        max_density: Maximum density in g/cm³.
        max_temperature: Service temperature in °C the melting point should exceed.
        electrical: Required electrical behaviour.
    """
    min_yield: float = 0.0
    max_density: float = 20.0
    max_temperature: float = 1000.0
    electrical: ElectricalRequirement = ElectricalRequirement.ANY


def match_score(material: MaterialRecord, criteria: SelectionCriteria) -> int:
    """
    Percentage match of `material` against `criteria`.

    Each of the four criteria scores 1 when met; unmet strength, density and
    temperature criteria score the achieved fraction instead.
    """
    score = 0.0

    if material.yield_strength >= criteria.min_yield:
        score += 1
    elif criteria.min_yield > 0:
        score += max(0.0, material.yield_strength / criteria.min_yield)

    if material.density <= criteria.max_density:
        score += 1
    elif material.density > 0:
        score += max(0.0, criteria.max_density / material.density)

    if material.melting_point >= criteria.max_temperature:
        score += 1
    elif criteria.max_temperature > 0:
        score += max(0.0, material.melting_point / criteria.max_temperature)

    if criteria.electrical == ElectricalRequirement.ANY:
        score += 1
    else:
        is_conductor = material.electrical_resistivity < CONDUCTOR_RESISTIVITY
        is_insulator = material.electrical_resistivity > INSULATOR_RESISTIVITY
        if (criteria.electrical == ElectricalRequirement.CONDUCTOR and is_conductor) or \
                (criteria.electrical == ElectricalRequirement.INSULATOR and is_insulator):
            score += 1

    return round_half_up(score / 4 * 100)


class MaterialLibrary:
    """
    Manages a library of materials, including loading from files
    and retrieving material records.
    """
    def __init__(self, load_defaults: bool = True) -> None:
        self.materials: Dict[str, MaterialRecord] = {}
        if load_defaults:
            self._init_defaults()

    def _init_defaults(self) -> None:
        for material in self.read_json(DEFAULT_MATS_PATH):
            self.materials[material.name] = material

    @staticmethod
    def read_json(filepath: str) -> List[MaterialRecord]:
        try:
            with open(filepath, mode='r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Material library import failed: {e}")
            raise IOError(f"Failed to read material library: {e}")
        materials = [MaterialRecord.from_dict(item) for item in data]
        logger.info(f"Loaded {len(materials)} materials from {filepath}")
        return materials

    @classmethod
    def from_json(cls, filepath: str) -> MaterialLibrary:
        library = cls(load_defaults=False)
        for material in cls.read_json(filepath):
            library.add_material(material)
        return library

    def to_json(self, filepath: str) -> None:
        with open(filepath, mode='w', encoding='utf-8') as f:
            json.dump([m.to_dict() for m in self.materials.values()], f, indent=2, ensure_ascii=False)

    def add_material(self, material: MaterialRecord) -> None:
        """Add or update a material in the library."""
        self.materials[material.name] = material

    def remove_material(self, name: str) -> None:
        self.materials.pop(name, None)

    def get_material(self, name: str) -> Optional[MaterialRecord]:
        """Retrieve a material by name."""
        return self.materials.get(name)

    def get_names(self) -> List[str]:
        """List all material names in the library."""
        return list(self.materials.keys())

    def by_category(self, category: MaterialCategory) -> List[MaterialRecord]:
        return [m for m in self.materials.values() if m.category == category]

    def rank(self, criteria: SelectionCriteria) -> List[Tuple[MaterialRecord, int]]:
        return rank_materials(self.materials.values(), criteria)


def rank_materials(
    materials: Iterable[MaterialRecord],
    criteria: SelectionCriteria
) -> List[Tuple[MaterialRecord, int]]:
    """Materials with their match percentage, best first (stable for ties)."""
    scored = [(m, match_score(m, criteria)) for m in materials]
    return sorted(scored, key=lambda item: item[1], reverse=True)

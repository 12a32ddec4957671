"""
Failure Analysis
================
A short questionnaire that votes for the most likely failure mode and
suggests follow-up tests and preventive measures.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import StrEnum
from typing import Dict, Mapping, Tuple

from materialsanalysis.result import Err, ErrorKind, Ok, Result


class FailureMode(StrEnum):
    FATIGUE = "Fatigue"
    YIELDING = "Yielding"
    BRITTLE_FRACTURE = "Brittle Fracture"
    CREEP = "Creep"
    CORROSION = "Corrosion"
    THERMAL_SHOCK = "Thermal Shock"


@dataclass(frozen=True)
class Question:
    id: str
    text: str
    options: Tuple[Tuple[str, FailureMode], ...]


@dataclass(frozen=True)
class Recommendation:
    tests: str
    prevention: str


@dataclass(frozen=True)
class FailureDiagnosis:
    mode: FailureMode
    votes: int
    recommendation: Recommendation


QUESTIONS: Tuple[Question, ...] = (
    Question("surface", "What does the fracture surface look like?", (
        ("Beach marks / Striations (smooth origin, rough final)", FailureMode.FATIGUE),
        ("Dimpled / Cup-and-cone (significant deformation)", FailureMode.YIELDING),
        ("Cleavage / Granular / Shiny (flat, little deformation)", FailureMode.BRITTLE_FRACTURE),
        ("Intergranular / Oxidized / Voids", FailureMode.CREEP),
    )),
    Question("loading", "What was the primary loading condition?", (
        ("Cyclic / Vibration / Repeated bending", FailureMode.FATIGUE),
        ("Constant high load over long time", FailureMode.CREEP),
        ("Sudden impact / Shock", FailureMode.BRITTLE_FRACTURE),
        ("Overload / Exceeded design stress", FailureMode.YIELDING),
    )),
    Question("environment", "What was the operating environment?", (
        ("High temperature (> 0.4 Tm)", FailureMode.CREEP),
        ("Corrosive / Chemical exposure", FailureMode.CORROSION),
        ("Low temperature (below DBTT)", FailureMode.BRITTLE_FRACTURE),
        ("Rapid temperature changes", FailureMode.THERMAL_SHOCK),
        ("Room temperature / Normal", FailureMode.YIELDING),
    )),
)

RECOMMENDATIONS: Dict[FailureMode, Recommendation] = {
    FailureMode.FATIGUE: Recommendation(
        "SEM fractography, S-N curve testing, NDT (ultrasonic/dye penetrant)",
        "Reduce stress concentrations, improve surface finish, shot peening, "
        "use materials with higher endurance limit."),
    FailureMode.YIELDING: Recommendation(
        "Tensile testing, Hardness testing, Dimensional inspection",
        "Increase cross-sectional area, select material with higher yield strength, reduce applied loads."),
    FailureMode.BRITTLE_FRACTURE: Recommendation(
        "Charpy V-notch impact test, Fracture toughness (KIC) test",
        "Operate above DBTT, reduce flaw sizes, use materials with higher fracture toughness, "
        "avoid impact loads."),
    FailureMode.CREEP: Recommendation(
        "Creep rupture testing, Microstructural analysis (voids)",
        "Lower operating temperature, reduce constant stress, use superalloys or materials "
        "with larger grain sizes."),
    FailureMode.CORROSION: Recommendation(
        "EDS/XRD for corrosion products, Salt spray testing",
        "Apply protective coatings, use corrosion-resistant alloys, implement cathodic protection, "
        "alter environment."),
    FailureMode.THERMAL_SHOCK: Recommendation(
        "Thermal cycling tests, CTE measurement",
        "Use materials with low CTE and high thermal conductivity, reduce rate of temperature change, "
        "avoid sharp corners."),
}


def diagnose(answers: Mapping[str, FailureMode]) -> Result[FailureDiagnosis]:
    """
    Majority vote over the answered questions.

    Ties go to the mode that was answered first.
    """
    unanswered = [q.id for q in QUESTIONS if q.id not in answers]
    if unanswered:
        return Err(ErrorKind.INSUFFICIENT_DATA, f"Unanswered questions: {', '.join(unanswered)}")

    votes = Counter(FailureMode(mode) for mode in answers.values())
    # Counter keeps first-insertion order, max() returns the first maximum
    mode = max(votes, key=lambda m: votes[m])
    return Ok(FailureDiagnosis(mode=mode, votes=votes[mode], recommendation=RECOMMENDATIONS[mode]))

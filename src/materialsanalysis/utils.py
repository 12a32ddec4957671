import math

ABSOLUTE_ZERO_CELSIUS = -273.15


def celsius_to_kelvin(celsius: float) -> float:
    return celsius - ABSOLUTE_ZERO_CELSIUS


def kelvin_to_celsius(kelvin: float) -> float:
    return kelvin + ABSOLUTE_ZERO_CELSIUS


def clamp(value: float, lower: float, upper: float) -> float:
    """Limit `value` to the closed interval [lower, upper]."""
    return max(lower, min(upper, value))


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2).

    Used for displayed percentages and hardness numbers; the built-in
    ``round`` rounds halves to even.
    """
    return int(math.floor(value + 0.5))

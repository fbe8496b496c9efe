"""Weight unit conversion between kilograms and pounds."""

from __future__ import annotations

KG_TO_LBS = 2.20462
LBS_TO_KG = 0.453592

WEIGHT_UNITS = ("kg", "lbs")


def kg_to_lbs(kg: float) -> float:
    """
    Convert kilograms to pounds.

    Example:
        >>> round(kg_to_lbs(100), 3)
        220.462
    """
    return kg * KG_TO_LBS


def lbs_to_kg(lbs: float) -> float:
    """Convert pounds to kilograms."""
    return lbs * LBS_TO_KG


def convert_weight(value: float, from_unit: str, to_unit: str) -> float:
    """
    Convert a weight between ``kg`` and ``lbs``.

    Args:
        value: Weight expressed in ``from_unit``
        from_unit: Source unit ("kg" or "lbs")
        to_unit: Target unit ("kg" or "lbs")

    Returns:
        The weight expressed in ``to_unit`` (unchanged if units match)

    Raises:
        ValueError: If either unit is not supported
    """
    for unit in (from_unit, to_unit):
        if unit not in WEIGHT_UNITS:
            raise ValueError(
                f"Unsupported weight unit '{unit}'. Use one of: {', '.join(WEIGHT_UNITS)}"
            )

    if from_unit == to_unit:
        return value
    if from_unit == "kg":
        return kg_to_lbs(value)
    return lbs_to_kg(value)

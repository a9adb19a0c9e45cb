"""
Physics Constants Tool

Case-insensitive lookup of common physical constants for the Physics agent.
Values are the CODATA 2018 recommended values in SI units.
"""

import logging
from typing import Dict, Optional

logger = logging.getLogger(__name__)

CONSTANT_NOT_FOUND = "Constant not found"

# Keyed by lowercase common name
PHYSICAL_CONSTANTS: Dict[str, Dict[str, str]] = {
    "speed of light": {
        "name": "Speed of Light (c)",
        "value": "299792458",
        "unit": "m/s",
    },
    "gravitational constant": {
        "name": "Gravitational Constant (G)",
        "value": "6.6743e-11",
        "unit": "N·m²/kg²",
    },
    "planck constant": {
        "name": "Planck Constant (h)",
        "value": "6.62607015e-34",
        "unit": "J·s",
    },
    "boltzmann constant": {
        "name": "Boltzmann Constant (k)",
        "value": "1.380649e-23",
        "unit": "J/K",
    },
    "elementary charge": {
        "name": "Elementary Charge (e)",
        "value": "1.602176634e-19",
        "unit": "C",
    },
}


def lookup_constant(name: str) -> Dict[str, Optional[str]]:
    """
    Look up a physical constant by its common name.

    Matching ignores case and surrounding whitespace. Unknown names are not
    an error: the name is echoed back with value "Constant not found".

    Args:
        name: Common name of the constant (e.g. "Speed of Light")

    Returns:
        Dictionary with:
            - name (str): Official name, or the name as given if unknown
            - value (str): Value as a string, or "Constant not found"
            - unit (str | None): SI unit, None if unknown

    Example:
        >>> lookup_constant("PLANCK CONSTANT")["value"]
        '6.62607015e-34'
    """
    key = name.strip().lower() if isinstance(name, str) else ""
    constant = PHYSICAL_CONSTANTS.get(key)

    if constant:
        logger.info(f"🔭 Found constant: {constant['name']}")
        return dict(constant)

    logger.info(f"🔭 Constant not in table: {name!r}")
    return {"name": name, "value": CONSTANT_NOT_FOUND, "unit": None}


def physics_constants_lookup(constantName: str) -> Dict[str, Optional[str]]:
    """Function-calling entry point; the argument name mirrors the tool declaration."""
    return lookup_constant(constantName)

"""
SFI Group System helpers: code format check and the standard group catalogue.
"""

import re
from typing import Optional

from core.errors import ValidationError

# Main group (1 digit), group (2), sub-group (3), and up to two
# equipment-level digits below that (e.g. "6001", "60011").
_SFI_CODE = re.compile(r"^[0-9]{1,5}$")


def normalize_sfi_code(code: Optional[str]) -> Optional[str]:
    """Return the trimmed code, None for blank, or raise ValidationError."""
    if code is None:
        return None
    code = code.strip()
    if not code:
        return None
    if not _SFI_CODE.match(code):
        raise ValidationError(f"Invalid SFI code format: {code!r}")
    return code


def parent_code(code: str) -> Optional[str]:
    return code[:-1] or None


MAIN_GROUPS = [
    {"code": "1", "name": "Ship General", "description": "General ship systems and components"},
    {"code": "2", "name": "Hull", "description": "Hull structure and related components"},
    {"code": "3", "name": "Equipment for Cargo", "description": "Cargo handling equipment"},
    {"code": "4", "name": "Ship Equipment", "description": "General ship equipment"},
    {"code": "5", "name": "Equipment for Crew and Passengers", "description": "Accommodation and related systems"},
    {"code": "6", "name": "Machinery Main Components", "description": "Main engine and related systems"},
    {"code": "7", "name": "Systems for Machinery Main Components", "description": "Supporting systems for main engine"},
    {"code": "8", "name": "Ship Common Systems", "description": "Common ship systems"},
]

SUB_GROUPS = [
    {"code": "60", "name": "Diesel Engine for Propulsion"},
    {"code": "61", "name": "Gas Turbine for Propulsion"},
    {"code": "62", "name": "Gear and Clutches"},
    {"code": "63", "name": "Propeller, Propeller Shaft"},
    {"code": "70", "name": "Fuel Oil System"},
    {"code": "71", "name": "Lube Oil System"},
    {"code": "72", "name": "Cooling System"},
    {"code": "80", "name": "Ballast and Bilge System"},
    {"code": "81", "name": "Fire and Wash Deck System"},
]

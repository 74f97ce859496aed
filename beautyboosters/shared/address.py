"""Danish address helpers"""

import re
from typing import Optional

# "Vesterbrogade 10, 1620 København V"
ADDRESS_PATTERN = re.compile(r"^\s*(?P<street>[^,]+?)\s*,\s*(?P<zipcode>\d{4})\s+(?P<city>.+?)\s*$")


def parse_address(address: Optional[str]) -> Optional[dict]:
    """
    Split "<street>, <4-digit zip> <city>" into its parts.

    Returns None when the text does not have that shape.
    """
    if not address:
        return None
    match = ADDRESS_PATTERN.match(address)
    if not match:
        return None
    return {
        "street": match.group("street"),
        "zipcode": match.group("zipcode"),
        "city": match.group("city"),
    }


def city_of(location: Optional[str]) -> Optional[str]:
    """City of a full address, else the first comma-separated part"""
    if not location or not location.strip():
        return None
    parsed = parse_address(location)
    if parsed:
        return parsed["city"]
    return location.split(",")[0].strip() or None


def same_area(city: Optional[str], location: Optional[str]) -> bool:
    """Case-insensitive match where either name may contain the other ("København V" / "København")"""
    if not city or not location:
        return False
    a, b = city.strip().lower(), location.strip().lower()
    return bool(a and b) and (a in b or b in a)

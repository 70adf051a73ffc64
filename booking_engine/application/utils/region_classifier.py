from __future__ import annotations

import re

from booking_engine.domain.entities.geo import RegionId

# Two-digit postal sector prefixes grouped by service region.
POSTAL_SECTORS: dict[RegionId, frozenset[str]] = {
    RegionId.CENTRAL: frozenset(f"{n:02d}" for n in [*range(1, 11), *range(14, 38)]),
    RegionId.WEST: frozenset(f"{n:02d}" for n in [11, 12, 13, *range(58, 72)]),
    RegionId.NORTH: frozenset(f"{n:02d}" for n in [72, 73, 75, 76, 77, 78]),
    RegionId.NORTHEAST: frozenset(f"{n:02d}" for n in [53, 54, 55, 56, 57, 79, 80, 82]),
    RegionId.EAST: frozenset(f"{n:02d}" for n in [*range(38, 53), 81]),
}

_POSTAL_CODE_RE = re.compile(r"\b(\d{6})\b")


def region_from_postal_code(postal_code: str) -> RegionId | None:
    if not postal_code or len(postal_code) < 2 or not postal_code[:2].isdigit():
        return None
    prefix = postal_code[:2]
    for region, sectors in POSTAL_SECTORS.items():
        if prefix in sectors:
            return region
    return None


def extract_postal_code(address: str) -> str | None:
    match = _POSTAL_CODE_RE.search(address or "")
    return match.group(1) if match else None


# Checked in order; the first region with a matching keyword wins.
REGION_KEYWORDS: tuple[tuple[RegionId, tuple[str, ...]], ...] = (
    (RegionId.CENTRAL, ("orchard", "novena", "newton", "sentosa", "harbourfront", "marina")),
    (RegionId.EAST, ("tampines", "bedok", "pasir ris")),
    (RegionId.WEST, ("jurong", "clementi", "bukit batok")),
    (RegionId.NORTH, ("woodlands", "yishun", "sembawang")),
    (RegionId.NORTHEAST, ("hougang", "sengkang", "punggol", "serangoon")),
)


def guess_region_from_address(address: str) -> RegionId | None:
    lowered = (address or "").lower()
    for region, keywords in REGION_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return region
    return None


def region_hint(address: str) -> RegionId | None:
    """Best-effort region from the address text: postal sector first, then place names."""
    postal_code = extract_postal_code(address)
    if postal_code:
        return region_from_postal_code(postal_code)
    return guess_region_from_address(address)

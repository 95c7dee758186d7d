"""Static region geocoding used by the regional bubble map."""

from __future__ import annotations

REGION_COORDINATES: dict[str, tuple[float, float]] = {
    "Abu Dhabi": (24.4667, 54.3667),
    "Dubai": (25.2048, 55.2708),
    "Sharjah": (25.3575, 55.3995),
    "Riyadh": (24.7136, 46.6753),
    "Doha": (25.2854, 51.5310),
    "Kuwait City": (29.3759, 47.9774),
    "Manama": (26.2285, 50.5860),
}
DEFAULT_COORDINATES: tuple[float, float] = (25.0, 50.0)


def region_coordinates(region: str) -> tuple[float, float]:
    """Return (lat, lon) for a region name; unknown regions map to DEFAULT_COORDINATES."""
    return REGION_COORDINATES.get(str(region or "").strip(), DEFAULT_COORDINATES)

"""
Map Links.

Builds web-map URLs for a WGS84 point and opens them in the default
browser. Opening a map is best-effort: a failure is logged and reported
to the caller as ``False``, never raised.

Numbers are written with ``repr`` of the float so the decimal point is
always ``.`` whatever the locale.
"""

import webbrowser
from enum import Enum
from typing import Callable, Iterable, Optional

from common.logging_config import get_logger
from geodesy.coordinate_models import WGS84Coordinate


logger = get_logger(__name__)

STATIC_MAP_BASE = "http://maps.google.com/maps/api/staticmap?size=640x640"
SINGLE_POINT_ZOOM = 15


class MapProvider(Enum):
    """Supported map servers keyed by their one-letter code."""

    BING = ("B", "Bing", "https://bing.com/maps/default.aspx?sp=point.{lat}_{lon}")
    OSM = ("O", "OSM", "https://www.openstreetmap.org/?mlat={lat}&mlon={lon}#map=16/{lat}/{lon}")
    SEZNAM = ("S", "Seznam", "https://mapy.cz/zakladni?x={lon}&y={lat}&z=16&source=coor&id={lon}%2C{lat}")
    GOOGLE = ("G", "Google", "https://maps.google.com/maps?q={lat},{lon}")

    def __init__(self, code: str, label: str, template: str):
        self.code = code
        self.label = label
        self.template = template

    @classmethod
    def from_code(cls, code: str) -> "MapProvider":
        """Look a provider up by its letter (case-insensitive).

        Raises
        ------
        ValueError
            If no provider uses ``code``.
        """
        key = (code or "").strip().upper()
        for provider in cls:
            if provider.code == key:
                return provider
        raise ValueError(f"Unknown map provider code: {code!r}")

    def url(self, coordinate: WGS84Coordinate) -> str:
        return self.template.format(lat=repr(float(coordinate.latitude)), lon=repr(float(coordinate.longitude)))


def build_map_url(coordinate: WGS84Coordinate, code: Optional[str] = "G") -> str:
    """URL showing ``coordinate`` on the provider named by ``code``.

    Unknown codes fall back to Google Maps.
    """
    try:
        provider = MapProvider.from_code(code)
    except ValueError:
        provider = MapProvider.GOOGLE
    return provider.url(coordinate)


def open_map(
    coordinate: WGS84Coordinate,
    code: Optional[str] = "G",
    opener: Callable[[str], bool] = webbrowser.open
) -> bool:
    """Open ``coordinate`` in the default web browser.

    Parameters
    ----------
    coordinate : WGS84Coordinate
        Point to show.
    code : str
        Provider letter (B, O, S or G).
    opener : callable
        Receives the URL; ``webbrowser.open`` unless replaced.

    Returns
    -------
    bool
        True when the opener reported success.
    """
    url = build_map_url(coordinate, code)
    logger.info("Opening map: %s", url)
    try:
        opened = bool(opener(url))
    except (webbrowser.Error, OSError) as exc:
        logger.warning("Could not open browser for %s: %s", url, exc)
        return False
    if not opened:
        logger.warning("Browser did not accept %s", url)
    return opened


def _point_list(coordinates: Iterable[WGS84Coordinate]) -> str:
    return "".join(f"|{c.latitude!r},{c.longitude!r}" for c in coordinates)


def static_map_points_url(coordinates: Iterable[WGS84Coordinate]) -> str:
    """Google static-map URL with a yellow marker per point.

    A single point is zoomed in; several points let the server fit the view.
    """
    coordinates = list(coordinates)
    zoom = f"&zoom={SINGLE_POINT_ZOOM}" if len(coordinates) == 1 else ""
    return f"{STATIC_MAP_BASE}{zoom}&sensor=false&markers=color:yellow{_point_list(coordinates)}"


def static_map_trace_url(coordinates: Iterable[WGS84Coordinate]) -> str:
    """Google static-map URL drawing the points as a blue path with small markers."""
    points = _point_list(coordinates)
    return (
        f"{STATIC_MAP_BASE}&sensor=false"
        f"&path=color:0x0000ff90|weight:3{points}"
        f"&markers=color:yellow|size:small{points}"
    )

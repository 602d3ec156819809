"""
Command-line front end: convert a projected point to WGS84 and show it on a map.

Usage::

    show-in-map <source type> <X> <Y> [B|G|O|S]
    show-in-map JTSK5514 -820800.60 -1068738.00 G
"""

import argparse
import sys
from typing import List, Optional

from common.logging_config import get_logger
from geodesy import __version__
from geodesy.coordinate_models import JTSK2065Coordinate, JTSK5514Coordinate, S42Coordinate
from geodesy.map_links import MapProvider, open_map


logger = get_logger(__name__)

PROGRAM_NAME = "show-in-map"

SOURCE_TYPES = {
    "JTSK2065": (JTSK2065Coordinate, "EPSG 2065 S-JTSK/Krovak South-West, positive coordinates"),
    "JTSK5514": (JTSK5514Coordinate, "EPSG 5514 S-JTSK/Krovak East-North, negative coordinates"),
    "S42": (S42Coordinate, "EPSG 28403 Pulkovo 1942/Gauss-Krüger zone 3"),
}

PROVIDER_HELP = {
    MapProvider.BING: "Bing maps",
    MapProvider.GOOGLE: "Google maps",
    MapProvider.OSM: "Open Street Map",
    MapProvider.SEZNAM: "Seznam maps",
}


def _epilog() -> str:
    lines = [" Source type"]
    lines += [f"  {name:<14} - {description}" for name, (_, description) in SOURCE_TYPES.items()]
    lines += [
        "",
        " X, Y            - Source coordinates. Automatic decimal point replacement.",
        "                   Example: -820800,60 -1068738,00 -> -820800.60 -1068738.00",
        "",
    ]
    lines += [
        f" {provider.code:<15} - Open internet browser and show coordinates in {label}"
        for provider, label in PROVIDER_HELP.items()
    ]
    lines += ["", "Example", f" {PROGRAM_NAME} JTSK5514 -820800.60 -1068738.00 G"]
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description="Convert S-JTSK or S-42 coordinates to WGS84 and optionally show them on a web map.",
        epilog=_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("source_type", metavar="source_type", help="JTSK2065, JTSK5514 or S42")
    parser.add_argument("x", metavar="X", help="first source coordinate")
    parser.add_argument("y", metavar="Y", help="second source coordinate")
    parser.add_argument("map_provider", nargs="?", metavar="B|G|O|S", help="map server to open")
    parser.add_argument("--version", action="version", version=f"%(prog)s ver. {__version__}")
    return parser


def normalize_decimal_separators(argv: List[str]) -> List[str]:
    """Replace decimal commas with points, ``-820800,60`` -> ``-820800.60``.

    Runs before argparse sees the arguments so that negative values are
    recognised as numbers rather than options.
    """
    return [argument.replace(",", ".") for argument in argv]


def main(argv: Optional[List[str]] = None) -> int:
    argv = normalize_decimal_separators(sys.argv[1:] if argv is None else list(argv))
    parser = build_parser()

    print(f"{PROGRAM_NAME} ver. {__version__}")
    args = parser.parse_args(argv)

    try:
        x = float(args.x)
    except ValueError:
        print("Invalid parsing X value.\n")
        parser.print_help()
        return 1
    try:
        y = float(args.y)
    except ValueError:
        print("Invalid parsing Y value.\n")
        parser.print_help()
        return 1

    source_type = args.source_type.upper()
    if source_type not in SOURCE_TYPES:
        print("Invalid parsing source type.")
        parser.print_help()
        return 1

    coordinate_type, _ = SOURCE_TYPES[source_type]
    wgs84 = coordinate_type(x, y).wgs84
    print(f" IN ({source_type}): x={x}; y={y}")
    print(f" OUT: Lat: {wgs84.latitude:.6f}; Lng: {wgs84.longitude:.6f}")

    if args.map_provider is not None:
        try:
            provider = MapProvider.from_code(args.map_provider)
        except ValueError:
            print(" Unknown map server.")
        else:
            print(f" Opening {provider.label} map in default internet browser...")
            if not open_map(wgs84, provider.code):
                logger.warning("Map view for %s could not be opened", wgs84)

    return 0


if __name__ == "__main__":
    sys.exit(main())

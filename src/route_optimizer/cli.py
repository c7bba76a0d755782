"""Route optimizer command line.

Reads a csv of decimal-degree lat/long coordinates, solves the tour with
Christofides + 2-opt and writes a KML file of the route.

CLI examples:
    route-optimizer stops.csv
    route-optimizer stops.csv --distance haversine --matching exact -v
    route-optimizer stops.csv --json --output /tmp/route.kml
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from typing import List, Optional

from .kml import kml_path_for, write_kml
from .navigation import (DEFAULT_MAX_SCALE, DISTANCES, NM_PER_KM, DuplicateCoordinatesError, ScalingError,
                         build_cost_matrix)
from .parsers import CoordinateFileError, read_coordinates, remove_duplicates
from .tsp import MATCHING_STRATEGIES, TSPConfigError, TSPSolver

logger = logging.getLogger(__name__)


def configure_logging(verbosity: int) -> None:
    """-v for INFO, -vv for DEBUG, WARNING otherwise."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="[%(levelname)s] %(name)s: %(message)s")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog='route-optimizer',
        description="Christofides + 2-opt route optimizer. Input is a comma delimited file of decimal "
                    "degree latitude/longitude coordinates; output is a kml file of the optimized route.")
    ap.add_argument('input', help='csv file of lat,lon rows')
    ap.add_argument('--output', help='kml output path (default: input path with .kml extension)')
    ap.add_argument('--distance', choices=sorted(DISTANCES), default='rhumbline')
    ap.add_argument('--matching', choices=MATCHING_STRATEGIES, default='greedy',
                    help='Odd-vertex pairing: greedy nearest partner or exact minimum-weight matching')
    ap.add_argument('--no-2opt', dest='refine', action='store_false', help='Skip 2-opt refinement')
    ap.add_argument('--max-scale', type=float, default=DEFAULT_MAX_SCALE,
                    help='Largest distance scaling factor tried when points are very close')
    ap.add_argument('--json', action='store_true', help='Emit a JSON object instead of the text report')
    ap.add_argument('-v', '--verbose', action='count', default=0)
    return ap


def run(args: argparse.Namespace) -> int:
    start_t = time.perf_counter()
    coordinates = read_coordinates(args.input)
    if not coordinates:
        raise CoordinateFileError(f"No coordinates in \"{args.input}\"")
    num_coords = len(coordinates)
    coordinates = remove_duplicates(coordinates)
    n = len(coordinates)
    removed = num_coords - n
    if removed and not args.json:
        print(f"{removed} duplicate coordinates removed.")

    dist, scale = build_cost_matrix(coordinates, max_scale=args.max_scale, distance=DISTANCES[args.distance])
    solver = TSPSolver(n, matching=args.matching, refine=args.refine)
    tour = solver(dist)
    if not len(tour):
        raise RuntimeError("Solver returned no tour")

    out_path = write_kml(args.output or kml_path_for(args.input), coordinates, tour.path)
    elapsed_ms = (time.perf_counter() - start_t) * 1000.0
    distance_nm = (tour.cost / scale) * NM_PER_KM

    if args.json:
        print(json.dumps({
            'input': args.input,
            'coordinates': n,
            'duplicates_removed': removed,
            'scale': scale,
            'cost': tour.cost,
            'distance_nm': round(distance_nm, 1),
            'path': [v + 1 for v in tour.closed_path()],
            'improvements': tour.improvements,
            'passes': tour.passes,
            'kml': str(out_path),
            'elapsed_ms': elapsed_ms,
        }))
        return 0

    if scale != 1.0:
        print(f"{scale:g}x distance scaling applied.")
    print(f"Number of coordinates: {n}")
    print(f"Total distance: {distance_nm:.1f}nm")
    print("Tour path: " + " ".join(str(v + 1) for v in tour.closed_path()))
    print(f"Route written to {out_path}")
    print(f"Elapsed time: {elapsed_ms:.1f}ms.")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    try:
        return run(args)
    except (CoordinateFileError, DuplicateCoordinatesError, ScalingError, TSPConfigError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':  # pragma: no cover - CLI
    sys.exit(main())

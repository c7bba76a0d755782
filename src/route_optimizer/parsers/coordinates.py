"""Read decimal-degree ``lat,lon`` coordinates from a comma-delimited file."""
import os
from typing import Hashable, List, Sequence, Tuple, TypeVar

Point = Tuple[float, float]
T = TypeVar('T', bound=Hashable)


class CoordinateFileError(ValueError):
    """Coordinate file missing or malformed."""


def parse_coordinate_line(line: str, filename: str = '<input>', lineno: int = 0) -> Point:
    parts = [p.strip() for p in line.split(',')]
    if len(parts) != 2:
        raise CoordinateFileError(f"{filename}:{lineno}: expected 'lat,lon', got {line!r}")
    try:
        lat = float(parts[0])
        lon = float(parts[1])
    except ValueError as e:
        raise CoordinateFileError(f"{filename}:{lineno}: non-numeric coordinate in {line!r}") from e
    if not -90.0 <= lat <= 90.0:
        raise CoordinateFileError(f"{filename}:{lineno}: latitude {lat} out of range")
    if not -180.0 <= lon <= 180.0:
        raise CoordinateFileError(f"{filename}:{lineno}: longitude {lon} out of range")
    return lat, lon


def read_coordinates(path: str) -> List[Point]:
    """Parse a UTF-8 csv of exactly ``lat,lon`` per row. Blank lines and ``#`` comments are skipped."""
    if not os.path.isfile(path):
        raise CoordinateFileError(f"Unable to read file \"{path}\"")
    points: List[Point] = []
    try:
        with open(path, 'r', encoding='utf-8') as f:
            for lineno, line in enumerate(f, start=1):
                line = line.strip()
                if not line or line.startswith('#'):
                    continue
                points.append(parse_coordinate_line(line, path, lineno))
    except UnicodeDecodeError as e:
        raise CoordinateFileError(f"{path}: not a UTF-8 text file ({e.reason})") from e
    return points


def remove_duplicates(items: Sequence[T]) -> List[T]:
    """Drop repeated items, keeping the first occurrence of each."""
    seen = set()
    unique: List[T] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique

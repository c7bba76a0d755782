"""Great-circle / rhumbline distances and the integer cost matrix built from them.

Distances are in kilometres. The distance functions accept scalars or
numpy arrays for the second point, so a whole matrix row is one call.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

# Kilometres
KM_PER_NM = 1.852
KM_PER_SM = 1.609347
# Statute miles
SM_PER_KM = 1.0 / 1.609347
SM_PER_NM = 1.150778974
# Nautical miles
NM_PER_KM = 1.0 / 1.852
NM_PER_SM = 1.0 / 1.150778974

EARTH_RADIUS_KM = 6372.8

DEFAULT_MAX_SCALE = 64.0


class DuplicateCoordinatesError(ValueError):
    """Two points share the same coordinates."""


class ScaleTooSmallError(ValueError):
    """A distinct pair of points truncates to a zero cost at the current scale."""


class ScalingError(RuntimeError):
    """No scale up to the maximum separates every pair of points."""


def rhumbline(lat1, lon1, lat2, lon2):
    """Rhumbline (constant bearing) distance in km."""
    phi1 = np.radians(lat1)
    phi2 = np.radians(lat2)
    with np.errstate(divide='ignore', invalid='ignore'):
        # true course
        tc = np.mod(np.arctan2(np.radians(lon1 - lon2),
                               np.log(np.tan(phi2 / 2.0 + np.pi / 4.0) / np.tan(phi1 / 2.0 + np.pi / 4.0))),
                    2.0 * np.pi)
        east_west = ((tc > 1.570795) & (tc < 1.570797)) | ((tc > 4.71238) & (tc < 4.71239))
        d = np.where(east_west,
                     60.0 * np.abs(lon2 - lon1) * np.cos(phi1),
                     60.0 * ((lat2 - lat1) / np.cos(tc)))
    d = d * KM_PER_NM
    return float(d) if np.ndim(d) == 0 else d


def haversine(lat1, lon1, lat2, lon2):
    """Great-circle distance in km."""
    phi1 = np.radians(lat1)
    phi2 = np.radians(lat2)
    dphi = phi2 - phi1
    dlam = np.radians(lon2) - np.radians(lon1)
    a = np.sin(dphi / 2) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(dlam / 2) ** 2
    d = 2.0 * EARTH_RADIUS_KM * np.arcsin(np.sqrt(a))
    return float(d) if np.ndim(d) == 0 else d


DISTANCES: Dict[str, Callable] = {
    'rhumbline': rhumbline,
    'haversine': haversine,
}


def fill_matrix(points: Sequence[Tuple[float, float]], scale: float = 1.0,
                distance: Callable = rhumbline) -> np.ndarray:
    """Integer cost matrix ``int(distance * scale)`` for every pair of points."""
    coords = np.asarray(points, dtype=float).reshape(-1, 2)
    n = coords.shape[0]
    lat = coords[:, 0]
    lon = coords[:, 1]
    am = np.zeros((n, n), dtype=np.int64)
    for r in range(n - 1):
        d = np.asarray(distance(lat[r], lon[r], lat[r + 1:], lon[r + 1:]), dtype=float) * scale
        row = np.trunc(d).astype(np.int64)
        bad = np.flatnonzero(row <= 0)
        if bad.size:
            c = r + 1 + int(bad[0])
            if lat[r] == lat[c] and lon[r] == lon[c]:
                raise DuplicateCoordinatesError(f"Duplicate coordinates at points {r + 1} and {c + 1}")
            raise ScaleTooSmallError(f"Points {r + 1} and {c + 1} are too close at scale {scale:g}")
        am[r, r + 1:] = row
        am[r + 1:, r] = row
    return am


def build_cost_matrix(points: Sequence[Tuple[float, float]], scale: float = 1.0,
                      max_scale: float = DEFAULT_MAX_SCALE,
                      distance: Callable = rhumbline) -> Tuple[np.ndarray, float]:
    """Fill the cost matrix, doubling ``scale`` while distinct points collapse to zero.

    Returns ``(matrix, scale_used)``.
    """
    while True:
        try:
            return fill_matrix(points, scale, distance), scale
        except ScaleTooSmallError as e:
            scale *= 2
            if scale > max_scale:
                raise ScalingError("Insufficient distance between coordinates") from e
            logger.info("%s; retrying at %gx", e, scale)

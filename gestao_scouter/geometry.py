"""Point-in-polygon selection over geotagged lead points.

Coordinates are plain degrees; edges are treated as straight lines in the
lat/lng plane, which is what a drawn map selection looks like on screen.
Points on a polygon edge or vertex count as inside.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

from .models import Bounds, DrawnArea, GeoPoint, LatLng, SelectionResult

logger = logging.getLogger(__name__)

_EPSILON = 1e-12
EARTH_RADIUS_M = 6378137.0


def is_eligible(point: GeoPoint) -> bool:
    lat, lng = point.lat, point.lng
    if lat is None or lng is None:
        return False
    try:
        return math.isfinite(lat) and math.isfinite(lng)
    except TypeError:
        return False


def close_ring(vertices: Iterable[LatLng]) -> list[LatLng]:
    """Return the ring without a repeated closing vertex."""
    ring = list(vertices)
    if len(ring) > 1 and ring[0] == ring[-1]:
        ring.pop()
    return ring


def shoelace(ring: Sequence[LatLng]) -> float:
    """Twice the signed planar area of the ring, in square degrees."""
    total = 0.0
    for i, vi in enumerate(ring):
        vj = ring[(i + 1) % len(ring)]
        total += vi.lng * vj.lat - vj.lng * vi.lat
    return total


def is_degenerate(ring: Sequence[LatLng]) -> bool:
    # fewer than 3 distinct vertices, or all of them on one line
    return len(set(ring)) < 3 or abs(shoelace(ring)) <= _EPSILON


def polygon_area(vertices: Sequence[LatLng]) -> float:
    """Area of the ring on a spherical Earth, in square meters."""
    ring = close_ring(vertices)
    if is_degenerate(ring):
        return 0.0
    n = len(ring)
    total = 0.0
    for i in range(n):
        lower, middle, upper = ring[i], ring[(i + 1) % n], ring[(i + 2) % n]
        total += (math.radians(upper.lng) - math.radians(lower.lng)) * math.sin(math.radians(middle.lat))
    return abs(total * EARTH_RADIUS_M * EARTH_RADIUS_M / 2.0)


def total_area(areas: Iterable[DrawnArea]) -> float:
    """Sum of the areas' sizes in square meters; overlaps count once per area."""
    return sum(polygon_area(area.vertices) for area in areas)


def bounds_of(vertices: Iterable[LatLng]) -> Bounds:
    ring = list(vertices)
    if not ring:
        raise ValueError("Cannot compute bounds of an empty vertex list")
    lats = [v.lat for v in ring]
    lngs = [v.lng for v in ring]
    return Bounds(south=min(lats), west=min(lngs), north=max(lats), east=max(lngs))


def combined_bounds(areas: Iterable[DrawnArea]) -> Bounds | None:
    boxes = [area.bounds for area in areas]
    if not boxes:
        return None
    return Bounds(
        south=min(b.south for b in boxes),
        west=min(b.west for b in boxes),
        north=max(b.north for b in boxes),
        east=max(b.east for b in boxes),
    )


def rectangle_vertices(corner_a: LatLng, corner_b: LatLng) -> list[LatLng]:
    south, north = sorted((corner_a.lat, corner_b.lat))
    west, east = sorted((corner_a.lng, corner_b.lng))
    return [
        LatLng(south, west),
        LatLng(north, west),
        LatLng(north, east),
        LatLng(south, east),
    ]


def bbox_filter(points: Iterable[GeoPoint], bounds: Bounds) -> list[GeoPoint]:
    return [p for p in points if is_eligible(p) and bounds.contains(p.lat, p.lng)]


def _on_segment(lat: float, lng: float, a: LatLng, b: LatLng) -> bool:
    cross = (b.lng - a.lng) * (lat - a.lat) - (b.lat - a.lat) * (lng - a.lng)
    if abs(cross) > _EPSILON:
        return False
    return (
        min(a.lng, b.lng) - _EPSILON <= lng <= max(a.lng, b.lng) + _EPSILON
        and min(a.lat, b.lat) - _EPSILON <= lat <= max(a.lat, b.lat) + _EPSILON
    )


def point_in_polygon(lat: float, lng: float, polygon: Sequence[LatLng]) -> bool:
    """Even-odd ray casting test; boundary points are inside."""
    ring = close_ring(polygon)
    if is_degenerate(ring):
        return False

    inside = False
    j = len(ring) - 1
    for i, vi in enumerate(ring):
        vj = ring[j]
        if _on_segment(lat, lng, vj, vi):
            return True
        if (vi.lat > lat) != (vj.lat > lat):
            crossing = (vj.lng - vi.lng) * (lat - vi.lat) / (vj.lat - vi.lat) + vi.lng
            if lng < crossing:
                inside = not inside
        j = i
    return inside


def points_in_polygon(candidates: Iterable[GeoPoint], polygon: Sequence[LatLng]) -> list[GeoPoint]:
    ring = close_ring(polygon)
    if is_degenerate(ring):
        return []
    return [p for p in candidates if is_eligible(p) and point_in_polygon(p.lat, p.lng, ring)]


def points_in_any_polygon(points: Iterable[GeoPoint], polygons: Sequence[Sequence[LatLng]]) -> list[GeoPoint]:
    points = list(points)
    if not polygons:
        return points
    rings = [close_ring(poly) for poly in polygons]
    return [
        p
        for p in points
        if is_eligible(p) and any(point_in_polygon(p.lat, p.lng, ring) for ring in rings)
    ]


def select_points(points: Iterable[GeoPoint], area: DrawnArea) -> SelectionResult:
    eligible = [p for p in points if is_eligible(p)]
    candidates = bbox_filter(eligible, area.bounds)
    matched = points_in_polygon(candidates, area.vertices)
    logger.debug(
        "Area %s: %d eligible, %d in bbox, %d matched",
        area.id,
        len(eligible),
        len(candidates),
        len(matched),
    )
    return SelectionResult(area_id=area.id, matched_points=matched, area_m2=polygon_area(area.vertices))

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .geometry import bounds_of, close_ring, is_degenerate, select_points
from .models import DrawnArea, GeoPoint, LatLng, SelectionResult

logger = logging.getLogger(__name__)

AREA_KINDS = ("polygon", "rectangle")


def make_area(area_id: str, kind: str, vertices: Sequence[LatLng]) -> DrawnArea:
    if kind not in AREA_KINDS:
        raise ValueError(f"Unknown area kind: {kind}")
    ring = tuple(close_ring(vertices))
    if is_degenerate(ring):
        raise ValueError("An area needs at least 3 vertices enclosing a region")
    return DrawnArea(id=area_id, kind=kind, vertices=ring, bounds=bounds_of(ring))


class AreaStore:
    def __init__(self, points: Iterable[GeoPoint] | None = None) -> None:
        self.points: list[GeoPoint] = list(points or [])
        self.areas: dict[str, DrawnArea] = {}
        self.results: dict[str, SelectionResult] = {}
        self._sequence = 0

    def set_points(self, points: Iterable[GeoPoint]) -> None:
        self.points = list(points)
        for area in self.areas.values():
            self.results[area.id] = select_points(self.points, area)

    def add_area(self, kind: str, vertices: Sequence[LatLng]) -> DrawnArea:
        self._sequence += 1
        area = make_area(f"area-{self._sequence}", kind, vertices)
        self.areas[area.id] = area
        self.results[area.id] = select_points(self.points, area)
        logger.info("Created %s %s with %d points", area.kind, area.id, self.results[area.id].count)
        return area

    def get_area(self, area_id: str) -> DrawnArea:
        area = self.areas.get(area_id)
        if not area:
            raise ValueError(f"Unknown area {area_id}")
        return area

    def result_for(self, area_id: str) -> SelectionResult:
        self.get_area(area_id)
        return self.results[area_id]

    def delete_area(self, area_id: str) -> None:
        if self.areas.pop(area_id, None) is None:
            return
        self.results.pop(area_id, None)
        logger.info("Deleted %s", area_id)

    def clear(self) -> None:
        self.areas.clear()
        self.results.clear()

    def selected_points(self) -> list[GeoPoint]:
        """Points matched by any area, in load order."""
        matched = {id(p) for result in self.results.values() for p in result.matched_points}
        return [p for p in self.points if id(p) in matched]

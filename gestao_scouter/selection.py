from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .geometry import bbox_filter, bounds_of, is_degenerate, points_in_polygon, rectangle_vertices
from .models import GeoPoint, LatLng, SelectionResult
from .store import AREA_KINDS, AreaStore

logger = logging.getLogger(__name__)

IDLE = "idle"
DRAWING = "drawing"
FINALIZED = "finalized"


@dataclass
class DrawSession:
    """Draw interaction over an ``AreaStore``.

    IDLE -> DRAWING on ``start``; DRAWING -> FINALIZED on ``finish``;
    DRAWING -> IDLE on ``cancel``. While drawing, ``preview`` returns the
    live candidate set. Above ``live_preview_threshold`` points the preview
    is only the bounding-box match; the exact polygon test runs on finish.
    """

    store: AreaStore
    live_preview_threshold: int = 5000
    state: str = IDLE
    kind: str | None = None
    vertices: list[LatLng] = field(default_factory=list)
    result: SelectionResult | None = None

    @property
    def is_map_locked(self) -> bool:
        return self.state == DRAWING

    def start(self, kind: str) -> None:
        if self.state == DRAWING:
            raise ValueError("draw_in_progress")
        if kind not in AREA_KINDS:
            raise ValueError(f"Unknown area kind: {kind}")
        self.state = DRAWING
        self.kind = kind
        self.vertices = []
        self.result = None
        logger.debug("Started %s drawing", kind)

    def add_vertex(self, vertex: LatLng) -> None:
        if self.state != DRAWING:
            raise ValueError("not_drawing")
        if self.kind == "rectangle" and len(self.vertices) == 2:
            # dragging moves the opposite corner
            self.vertices[1] = vertex
        else:
            self.vertices.append(vertex)

    def ring(self) -> list[LatLng]:
        if self.kind == "rectangle":
            if len(self.vertices) < 2:
                return list(self.vertices)
            return rectangle_vertices(self.vertices[0], self.vertices[1])
        return list(self.vertices)

    def preview(self) -> list[GeoPoint]:
        ring = self.ring()
        if self.state != DRAWING or not ring:
            return []
        candidates = bbox_filter(self.store.points, bounds_of(ring))
        if len(self.store.points) > self.live_preview_threshold:
            return candidates
        return points_in_polygon(candidates, ring)

    def finish(self) -> SelectionResult | None:
        if self.state != DRAWING:
            raise ValueError("not_drawing")
        ring = self.ring()
        if is_degenerate(ring):
            logger.warning("%s needs at least 3 non-collinear vertices, keeping draw open", self.kind)
            return None
        area = self.store.add_area(self.kind, ring)
        self.result = self.store.result_for(area.id)
        self.state = FINALIZED
        return self.result

    def cancel(self) -> None:
        if self.state != DRAWING:
            return
        logger.debug("Cancelled %s drawing", self.kind)
        self.state = IDLE
        self.kind = None
        self.vertices = []

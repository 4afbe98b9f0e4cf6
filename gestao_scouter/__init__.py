"""Lead messaging window and map area selection for Gestão Scouter."""

from .analysis import generate_analysis
from .app import ScouterApp
from .geometry import bbox_filter, point_in_polygon, points_in_polygon
from .models import AnalysisSummary, Bounds, DrawnArea, GeoPoint, LatLng, MessageWindow, SelectionResult
from .selection import DrawSession
from .window import compute_status, format_remaining

__all__ = [
    "ScouterApp",
    "DrawSession",
    "AnalysisSummary",
    "Bounds",
    "DrawnArea",
    "GeoPoint",
    "LatLng",
    "MessageWindow",
    "SelectionResult",
    "bbox_filter",
    "compute_status",
    "format_remaining",
    "generate_analysis",
    "point_in_polygon",
    "points_in_polygon",
]

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

DEFAULT_WINDOW = timedelta(hours=24)


@dataclass(frozen=True)
class MessageWindow:
    last_inbound_at: datetime | None
    is_open: bool
    remaining_seconds: int
    length: timedelta = DEFAULT_WINDOW

    @property
    def expires_at(self) -> datetime | None:
        if self.last_inbound_at is None:
            return None
        return self.last_inbound_at + self.length

    @property
    def hours_remaining(self) -> int:
        return self.remaining_seconds // 3600

    @property
    def minutes_remaining(self) -> int:
        return (self.remaining_seconds % 3600) // 60


@dataclass(frozen=True)
class LatLng:
    lat: float
    lng: float


@dataclass(frozen=True)
class Bounds:
    south: float
    west: float
    north: float
    east: float

    def contains(self, lat: float, lng: float) -> bool:
        return self.south <= lat <= self.north and self.west <= lng <= self.east


@dataclass
class GeoPoint:
    id: Any
    lat: float
    lng: float
    fields: dict = field(default_factory=dict)


@dataclass(frozen=True)
class DrawnArea:
    id: str
    kind: str
    vertices: tuple[LatLng, ...]
    bounds: Bounds


@dataclass
class SelectionResult:
    area_id: str
    matched_points: list[GeoPoint] = field(default_factory=list)
    area_m2: float = 0.0

    @property
    def count(self) -> int:
        return len(self.matched_points)


@dataclass
class AnalysisSummary:
    total: int = 0
    by_project: dict[str, int] = field(default_factory=dict)
    by_scouter: dict[str, int] = field(default_factory=dict)
    by_stage: dict[str, int] = field(default_factory=dict)
    confirmed: int = 0
    unconfirmed: int = 0
    age_count: int = 0
    age_sum: float = 0.0
    value_count: int = 0
    value_total: float = 0.0

    @property
    def age_average(self) -> float | None:
        if not self.age_count:
            return None
        return self.age_sum / self.age_count

    @property
    def value_average(self) -> float | None:
        if not self.value_count:
            return None
        return self.value_total / self.value_count

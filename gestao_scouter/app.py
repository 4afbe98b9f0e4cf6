from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Mapping

from .analysis import generate_analysis
from .config import Settings, get_settings
from .export import analysis_to_csv, selection_to_csv
from .geometry import total_area
from .models import AnalysisSummary, GeoPoint, LatLng, MessageWindow, SelectionResult
from .normalize import normalize_points
from .policy import PolicyEngine, SendDecision
from .selection import DrawSession
from .store import AreaStore
from .templates import render_template
from .window import compute_status, is_expiring_soon


def _as_utc(value: datetime) -> datetime:
    # naive timestamps are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class ScouterApp:
    settings: Settings = field(default_factory=get_settings)
    store: AreaStore = field(default_factory=AreaStore)
    session: DrawSession | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = DrawSession(self.store, self.settings.live_preview_threshold)

    @property
    def window_length(self) -> timedelta:
        return timedelta(hours=self.settings.whatsapp_window_hours)

    def load_leads(self, records: Iterable[Mapping[str, Any]]) -> list[GeoPoint]:
        points = normalize_points(records)
        self.store.set_points(points)
        return points

    def window_for(self, last_inbound_at: datetime | None, now: datetime | None = None) -> MessageWindow:
        now = _as_utc(now or datetime.now(timezone.utc))
        if last_inbound_at is not None:
            last_inbound_at = _as_utc(last_inbound_at)
        return compute_status(last_inbound_at, now, self.window_length)

    def send_decision(
        self,
        last_inbound_at: datetime | None,
        message_type: str = PolicyEngine.SESSION_TEXT,
        now: datetime | None = None,
    ) -> SendDecision:
        return PolicyEngine.evaluate_send(self.window_for(last_inbound_at, now), message_type)

    def needs_proactive_message(self, last_inbound_at: datetime | None, now: datetime | None = None) -> bool:
        threshold = timedelta(hours=self.settings.window_proactive_hours)
        return is_expiring_soon(self.window_for(last_inbound_at, now), threshold)

    def compose_message(
        self,
        last_inbound_at: datetime | None,
        text: str,
        fallback_template: str,
        now: datetime | None = None,
        **variables: str,
    ) -> tuple[str, str]:
        """Return ``(message_type, content)``: free text while the window is open, otherwise the template."""
        decision = self.send_decision(last_inbound_at, PolicyEngine.SESSION_TEXT, now)
        if decision.allowed:
            return PolicyEngine.SESSION_TEXT, text
        return PolicyEngine.TEMPLATE, render_template(fallback_template, **variables)

    def start_draw(self, kind: str) -> None:
        self.session.start(kind)

    def add_vertex(self, lat: float, lng: float) -> list[GeoPoint]:
        self.session.add_vertex(LatLng(lat, lng))
        return self.session.preview()

    def finish_draw(self) -> SelectionResult | None:
        return self.session.finish()

    def cancel_draw(self) -> None:
        self.session.cancel()

    def selected_area_m2(self) -> float:
        return total_area(self.store.areas.values())

    def analyze_area(self, area_id: str) -> AnalysisSummary:
        return generate_analysis(
            self.store.result_for(area_id).matched_points,
            self.settings.age_min,
            self.settings.age_max,
        )

    def export_area(self, area_id: str) -> tuple[str, str]:
        """Return ``(points_csv, summary_csv)`` for an area."""
        result = self.store.result_for(area_id)
        return selection_to_csv(result), analysis_to_csv(self.analyze_area(area_id))

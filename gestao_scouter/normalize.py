"""Adapter from raw lead rows to ``GeoPoint``.

Lead rows come from more than one table and do not agree on coordinate
column names (``lat``/``latitude``, ``lng``/``longitude``/``lon``). They are
reconciled here so the geometry code only ever sees ``GeoPoint``.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, Mapping

from .models import GeoPoint

logger = logging.getLogger(__name__)

LAT_KEYS = ("lat", "latitude")
LNG_KEYS = ("lng", "longitude", "lon")

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "project": ("project", "projeto", "projeto_comercial"),
    "scouter": ("scouter",),
    "stage": ("stage", "etapa"),
    "confirmed": ("confirmed", "ficha_confirmada"),
    "age": ("age", "idade"),
    "value": ("value", "valor_ficha", "valor"),
}


def parse_coordinate(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _first(record: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None


def normalize_point(record: Mapping[str, Any]) -> GeoPoint | None:
    lat = parse_coordinate(_first(record, LAT_KEYS))
    lng = parse_coordinate(_first(record, LNG_KEYS))
    if lat is None or lng is None:
        return None
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
        return None

    fields = {
        key: value
        for key, value in record.items()
        if key not in LAT_KEYS and key not in LNG_KEYS and key != "id"
    }
    for canonical, aliases in FIELD_ALIASES.items():
        if canonical not in fields:
            value = _first(record, aliases)
            if value is not None:
                fields[canonical] = value
    return GeoPoint(id=record.get("id"), lat=lat, lng=lng, fields=fields)


def normalize_points(records: Iterable[Mapping[str, Any]]) -> list[GeoPoint]:
    points: list[GeoPoint] = []
    skipped = 0
    for record in records:
        point = normalize_point(record)
        if point is None:
            skipped += 1
            continue
        points.append(point)
    if skipped:
        logger.info("Skipped %d lead rows without usable coordinates", skipped)
    return points

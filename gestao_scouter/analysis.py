from __future__ import annotations

import math
import re
from typing import Any, Iterable

from .models import AnalysisSummary, GeoPoint

UNKNOWN = "Não informado"

_TRUE_VALUES = {"true", "1", "sim", "s", "yes", "y", "confirmada", "confirmado"}
_CURRENCY = re.compile(r"[^\d,.\-]")
_THOUSANDS = re.compile(r"^-?\d{1,3}(\.\d{3})+$")


def parse_number(value: Any) -> float | None:
    """Parse ints, floats and Brazilian or plain decimal strings."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = _CURRENCY.sub("", value)
        if not text:
            return None
        if "," in text and "." in text:
            # 1.234,56
            text = text.replace(".", "").replace(",", ".")
        elif _THOUSANDS.match(text):
            # 2.500 or 1.234.567
            text = text.replace(".", "")
        else:
            text = text.replace(",", ".")
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def parse_age(value: Any, age_min: int = 1, age_max: int = 119) -> int | None:
    number = parse_number(value)
    if number is None:
        return None
    age = int(number)
    if age < age_min or age > age_max:
        return None
    return age


def is_confirmed(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_VALUES
    return False


def _category(fields: dict, key: str) -> str:
    value = fields.get(key)
    if value is None or value == "":
        return UNKNOWN
    return str(value)


def _bump(counter: dict[str, int], key: str) -> None:
    counter[key] = counter.get(key, 0) + 1


def generate_analysis(
    points: Iterable[GeoPoint],
    age_min: int = 1,
    age_max: int = 119,
) -> AnalysisSummary:
    summary = AnalysisSummary()
    for point in points:
        fields = point.fields
        summary.total += 1
        _bump(summary.by_project, _category(fields, "project"))
        _bump(summary.by_scouter, _category(fields, "scouter"))
        _bump(summary.by_stage, _category(fields, "stage"))

        if is_confirmed(fields.get("confirmed")):
            summary.confirmed += 1
        else:
            summary.unconfirmed += 1

        age = parse_age(fields.get("age"), age_min, age_max)
        if age is not None:
            summary.age_count += 1
            summary.age_sum += age

        value = parse_number(fields.get("value"))
        if value is not None and value >= 0:
            summary.value_count += 1
            summary.value_total += value
    return summary

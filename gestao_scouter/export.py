from __future__ import annotations

import csv
import io
from typing import Sequence

from .models import AnalysisSummary, SelectionResult

DEFAULT_COLUMNS = ("id", "lat", "lng", "project", "scouter", "stage", "confirmed", "age", "value")


def selection_to_csv(result: SelectionResult, columns: Sequence[str] = DEFAULT_COLUMNS) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(columns)
    for point in result.matched_points:
        base = {"id": point.id, "lat": point.lat, "lng": point.lng}
        writer.writerow([base[c] if c in base else point.fields.get(c, "") for c in columns])
    return buf.getvalue()


def analysis_to_rows(summary: AnalysisSummary) -> list[tuple[str, str, object]]:
    rows: list[tuple[str, str, object]] = [("total", "", summary.total)]
    for section, counts in (
        ("project", summary.by_project),
        ("scouter", summary.by_scouter),
        ("stage", summary.by_stage),
    ):
        for key in sorted(counts):
            rows.append((section, key, counts[key]))
    rows.append(("confirmed", "yes", summary.confirmed))
    rows.append(("confirmed", "no", summary.unconfirmed))
    rows.append(("age", "average", "" if summary.age_average is None else round(summary.age_average, 1)))
    rows.append(("value", "total", round(summary.value_total, 2)))
    rows.append(("value", "average", "" if summary.value_average is None else round(summary.value_average, 2)))
    return rows


def analysis_to_csv(summary: AnalysisSummary) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(("metric", "key", "value"))
    writer.writerows(analysis_to_rows(summary))
    return buf.getvalue()

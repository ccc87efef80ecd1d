from __future__ import annotations

import csv
import io
from datetime import date
from typing import Optional

from ..common.datetime_utils import now_local, to_date_key
from ..core.constants import CSV_FILENAME_PREFIX
from .document import AttendanceDocument


def export_filename(today: Optional[date] = None) -> str:
    today = today or now_local().date()
    return f"{CSV_FILENAME_PREFIX}{to_date_key(today)}.csv"


def render_csv(document: AttendanceDocument) -> str:
    """Header + one row per roster name.

    csv.writer doubles embedded quote characters in note cells.
    """

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(document.csv_header())
    writer.writerows(document.to_csv_rows())
    return out.getvalue()

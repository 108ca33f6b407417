"""
CSV export of (filtered) requirement records.
"""
import csv
import io
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from django.conf import settings
from django.http import HttpResponse
from django.utils import timezone
from django.utils.formats import date_format

from leads.schemas import CustomerRequirement

EXPORT_HEADERS = ["Name", "Mobile", "Email", "Budget", "Location", "Preferred", "Status", "Date"]


class NothingToExport(Exception):
    """Raised when an export is requested for an empty record set."""

    def __init__(self, message: str = "No data to export"):
        super().__init__(message)


def plain_number(value: Decimal) -> str:
    """Render 7500000.00 as '7500000' and 1200.50 as '1200.5'."""
    return format(value.normalize(), "f")


def export_row(record: CustomerRequirement) -> List[str]:
    created = timezone.localtime(record.created_at) if timezone.is_aware(record.created_at) else record.created_at
    return [
        record.name,
        record.mobile,
        record.email,
        plain_number(record.budget),
        record.current_location,
        record.preferred_location,
        record.status,
        date_format(created.date(), "SHORT_DATE_FORMAT"),
    ]


def export_requirements_csv(records: Iterable[CustomerRequirement]) -> str:
    records = list(records)
    if not records:
        raise NothingToExport()

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for record in records:
        writer.writerow(export_row(record))
    return buffer.getvalue()


def export_filename(day: Optional[date] = None) -> str:
    day = day or timezone.localdate()
    return f"{settings.LEADS_EXPORT_PREFIX}_{day.isoformat()}.csv"


def build_csv_response(records: Iterable[CustomerRequirement]) -> HttpResponse:
    content = export_requirements_csv(records)
    response = HttpResponse(content.encode("utf-8"), content_type="text/csv; charset=utf-8")
    response["Content-Disposition"] = f'attachment; filename="{export_filename()}"'
    return response

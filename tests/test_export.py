"""
Tests for CSV export
"""
import csv
import io
import pytest
from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal

from leads.export import (
    EXPORT_HEADERS,
    NothingToExport,
    build_csv_response,
    export_filename,
    export_requirements_csv,
    plain_number,
)


def parse_csv(text):
    return list(csv.reader(io.StringIO(text)))


class TestExportRequirementsCsv:
    """Test CSV serialization"""

    def test_header_and_rows(self, make_record):
        records = [make_record(name='Ann Lee', budget=Decimal('7500000')), make_record()]
        rows = parse_csv(export_requirements_csv(records))

        assert rows[0] == EXPORT_HEADERS
        assert len(rows) == len(records) + 1
        assert rows[1][:4] == ['Ann Lee', '9876543210', records[0].email, '7500000']
        assert rows[1][6] == 'New'

    def test_round_trip_with_awkward_text(self, make_record):
        """Commas, quotes and newlines survive a standard CSV reader"""
        records = [
            make_record(name='Lee, Ann', current_location='"Prestige" Towers', preferred_location='HSR\nSector 2'),
            make_record(name='O\'Brien "Bob"', current_location='a,b,"c"', preferred_location=''),
        ]
        rows = parse_csv(export_requirements_csv(records))[1:]

        assert len(rows) == 2
        for row, record in zip(rows, records):
            assert row[0] == record.name
            assert row[4] == record.current_location
            assert row[5] == record.preferred_location
            assert len(row) == len(EXPORT_HEADERS)

    def test_date_column_is_calendar_date(self, make_record, settings):
        settings.TIME_ZONE = 'UTC'
        created = datetime(2025, 1, 31, 23, 30, tzinfo=dt_timezone.utc)
        rows = parse_csv(export_requirements_csv([make_record(created_at=created)]))

        assert rows[1][7] == '01/31/2025'

    def test_empty_export_rejected(self):
        with pytest.raises(NothingToExport) as exc:
            export_requirements_csv([])
        assert str(exc.value) == 'No data to export'

    def test_plain_number(self):
        assert plain_number(Decimal('7500000.00')) == '7500000'
        assert plain_number(Decimal('1200.50')) == '1200.5'
        assert plain_number(Decimal('42')) == '42'


class TestExportFile:
    """Test the downloadable artifact"""

    def test_filename(self):
        assert export_filename(date(2026, 10, 19)) == 'ilandspaces_leads_2026-10-19.csv'

    def test_filename_prefix_setting(self, settings):
        settings.LEADS_EXPORT_PREFIX = 'leads'
        assert export_filename(date(2026, 1, 2)) == 'leads_2026-01-02.csv'

    def test_response(self, make_record):
        response = build_csv_response([make_record(name='Zoë')])

        assert response['Content-Type'] == 'text/csv; charset=utf-8'
        assert response['Content-Disposition'].startswith('attachment; filename="ilandspaces_leads_')
        assert 'Zoë' in response.content.decode('utf-8')

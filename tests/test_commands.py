"""
Tests for the import/export management commands
"""
import csv
import json
import pytest
from decimal import Decimal
from io import StringIO

from django.core.management import call_command

from leads.export import export_filename


@pytest.mark.django_db
class TestExportLeadsCommand:
    """Test exporting requirements to a file"""

    def test_writes_dated_csv(self, tmp_path, memory_store, make_record):
        memory_store.insert(make_record(name='Kiran', budget=Decimal('5500000')))
        memory_store.insert(make_record(name='Asha', budget=Decimal('9500000')))
        out = StringIO()

        call_command('export_leads', '--output-dir', str(tmp_path), '--max-budget', '6000000', stdout=out)

        path = tmp_path / export_filename()
        with open(path, newline='', encoding='utf-8') as f:
            rows = list(csv.reader(f))
        assert [row[0] for row in rows[1:]] == ['Kiran']
        assert 'Exported 1 requirements' in out.getvalue()

    def test_nothing_to_export(self, tmp_path, memory_store):
        out = StringIO()
        call_command('export_leads', '--output-dir', str(tmp_path), stdout=out)

        assert 'No data to export' in out.getvalue()
        assert list(tmp_path.iterdir()) == []


@pytest.mark.django_db
class TestImportLeadsCommand:
    """Test importing a key-value store dump"""

    def dump(self, tmp_path, items):
        path = tmp_path / 'leads.json'
        path.write_text(json.dumps(items), encoding='utf-8')
        return str(path)

    def browser_record(self, record_id, name, created_at, **extra):
        item = {
            'id': record_id,
            'name': name,
            'mobile': '9876543210',
            'email': f'{record_id}@example.com',
            'budget': 7500000,
            'requirement': 'balcony',
            'currentLocation': 'HSR',
            'preferredLocation': 'Sarjapur',
            'direction': 'North',
            'floorPreference': 4,
            'flatSize': 1200,
            'lookingFor': 'Gated',
            'createdAt': created_at,
            'status': 'New',
        }
        item.update(extra)
        return item

    def test_import_preserves_order_and_fields(self, tmp_path, memory_store):
        path = self.dump(tmp_path, [
            self.browser_record('b2', 'Newer', '2025-02-02T10:00:00.000Z', status='Contacted', altMobile='7012345678'),
            self.browser_record('b1', 'Older', '2025-01-01T10:00:00.000Z'),
        ])
        out = StringIO()

        call_command('import_leads', path, stdout=out)

        records = memory_store.list()
        assert [r.id for r in records] == ['b2', 'b1']
        assert records[0].status == 'Contacted'
        assert records[0].alt_mobile == '7012345678'
        assert records[0].flat_size == Decimal('1200')
        assert 'Import complete: 2 created, 0 skipped, 0 errors' in out.getvalue()

    def test_import_skips_existing_and_reports_invalid(self, tmp_path, memory_store):
        path = self.dump(tmp_path, [
            self.browser_record('b1', 'Dup', '2025-01-01T10:00:00.000Z'),
            {'id': 'broken'},
        ])
        call_command('import_leads', path, stdout=StringIO())
        out = StringIO()

        call_command('import_leads', path, stdout=out)

        assert len(memory_store.list()) == 1
        assert 'Import complete: 0 created, 1 skipped, 1 errors' in out.getvalue()

    def test_missing_file(self, tmp_path):
        out = StringIO()
        call_command('import_leads', str(tmp_path / 'missing.json'), stdout=out)
        assert 'not found' in out.getvalue()

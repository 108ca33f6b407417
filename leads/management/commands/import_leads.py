import json
from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand
from pydantic import ValidationError

from leads.schemas import CustomerRequirement
from leads.store import SubmissionError, get_requirement_store

# Keys used by the browser key-value store dump
CAMEL_CASE_KEYS = {
    "altMobile": "alt_mobile",
    "flatSize": "flat_size",
    "currentLocation": "current_location",
    "preferredLocation": "preferred_location",
    "floorPreference": "floor_preference",
    "lookingFor": "looking_for",
    "createdAt": "created_at",
}


def normalize_keys(item: dict) -> dict:
    """Map camelCase dump keys onto record field names"""
    return {CAMEL_CASE_KEYS.get(key, key): value for key, value in item.items()}


class Command(BaseCommand):
    help = "Import requirement records from a JSON array dump"

    def add_arguments(self, parser):
        parser.add_argument(
            "path",
            nargs="?",
            help="JSON file holding an array of records (default: data/leads.json)",
        )

    def handle(self, *args, **options):
        json_path = Path(options.get("path") or Path(settings.BASE_DIR) / "data" / "leads.json")

        if not json_path.exists():
            self.stdout.write(
                self.style.ERROR(f"Leads JSON file not found at {json_path}")
            )
            return

        with open(json_path, "r", encoding="utf-8") as f:
            leads_data = json.load(f)

        store = get_requirement_store()
        created_count = 0
        skipped_count = 0
        error_count = 0

        # Dumps are newest first; insert oldest first so prepending keeps that order
        for item in reversed(leads_data):
            try:
                record = CustomerRequirement.model_validate(normalize_keys(item))
            except (ValidationError, AttributeError) as e:
                self.stdout.write(
                    self.style.ERROR(f"Invalid record {item.get('id', 'unknown') if isinstance(item, dict) else item}: {e}")
                )
                error_count += 1
                continue

            if store.get(record.id) is not None:
                skipped_count += 1
                continue

            try:
                store.insert(record)
                created_count += 1
            except SubmissionError as e:
                self.stdout.write(self.style.ERROR(f"Error storing record {record.id}: {e}"))
                error_count += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Import complete: {created_count} created, {skipped_count} skipped, {error_count} errors"
            )
        )

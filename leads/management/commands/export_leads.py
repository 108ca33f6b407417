from pathlib import Path

from django.core.management.base import BaseCommand

from leads.export import NothingToExport, export_filename, export_requirements_csv
from leads.filtering import filter_requirements
from leads.schemas import RequirementFilterSchema
from leads.store import get_requirement_store


class Command(BaseCommand):
    help = "Export requirements to a dated CSV file"

    def add_arguments(self, parser):
        parser.add_argument("--output-dir", default=".", help="Directory to write the CSV file into")
        parser.add_argument("--search", default="")
        parser.add_argument("--status", default="")
        parser.add_argument("--looking-for", default="")
        parser.add_argument("--min-budget", default="")
        parser.add_argument("--max-budget", default="")

    def handle(self, *args, **options):
        criteria = RequirementFilterSchema(
            search=options["search"],
            status=options["status"],
            looking_for=options["looking_for"],
            min_budget=options["min_budget"],
            max_budget=options["max_budget"],
        )
        records = filter_requirements(get_requirement_store().list(), criteria)

        try:
            content = export_requirements_csv(records)
        except NothingToExport as e:
            self.stdout.write(self.style.WARNING(str(e)))
            return

        output_dir = Path(options["output_dir"])
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / export_filename()
        output_path.write_text(content, encoding="utf-8")

        self.stdout.write(
            self.style.SUCCESS(f"Exported {len(records)} requirements to {output_path}")
        )

import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Lead",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("lead_id", models.CharField(max_length=32, unique=True)),
                ("name", models.CharField(max_length=255)),
                ("mobile", models.CharField(max_length=10)),
                ("alt_mobile", models.CharField(blank=True, max_length=10)),
                ("email", models.EmailField(max_length=254)),
                ("budget", models.DecimalField(decimal_places=2, max_digits=15)),
                ("flat_size", models.DecimalField(decimal_places=2, max_digits=10)),
                ("current_location", models.CharField(max_length=255)),
                ("preferred_location", models.CharField(max_length=255)),
                (
                    "direction",
                    models.CharField(
                        choices=[("North", "North"), ("South", "South"), ("East", "East"), ("West", "West")],
                        default="North",
                        max_length=8,
                    ),
                ),
                ("floor_preference", models.PositiveIntegerField()),
                (
                    "looking_for",
                    models.CharField(
                        choices=[("Gated", "Gated"), ("Semi-gated", "Semi-gated"), ("Standalone", "Standalone")],
                        default="Gated",
                        max_length=16,
                    ),
                ),
                ("requirement", models.TextField()),
                (
                    "status",
                    models.CharField(
                        choices=[("New", "New"), ("Contacted", "Contacted"), ("Closed", "Closed"), ("Spam", "Spam")],
                        default="New",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]

from django.db import models
from django.utils import timezone


class RequirementStatus(models.TextChoices):
    NEW = "New", "New"
    CONTACTED = "Contacted", "Contacted"
    CLOSED = "Closed", "Closed"
    # No flow assigns Spam yet; reserved for moderation.
    SPAM = "Spam", "Spam"


class Direction(models.TextChoices):
    NORTH = "North", "North"
    SOUTH = "South", "South"
    EAST = "East", "East"
    WEST = "West", "West"


class LookingFor(models.TextChoices):
    GATED = "Gated", "Gated"
    SEMI_GATED = "Semi-gated", "Semi-gated"
    STANDALONE = "Standalone", "Standalone"


ALLOWED_TRANSITIONS = {
    RequirementStatus.NEW.value: {RequirementStatus.CONTACTED.value, RequirementStatus.CLOSED.value},
    RequirementStatus.CONTACTED.value: {RequirementStatus.CLOSED.value},
    RequirementStatus.CLOSED.value: set(),
    RequirementStatus.SPAM.value: set(),
}


def can_transition(current: str, new: str) -> bool:
    """Return True if a lead may move from ``current`` to ``new`` status."""
    return str(new) in ALLOWED_TRANSITIONS.get(str(current), set())


class Lead(models.Model):
    """A customer's submitted housing requirement."""

    lead_id = models.CharField(max_length=32, unique=True)
    name = models.CharField(max_length=255)
    mobile = models.CharField(max_length=10)
    alt_mobile = models.CharField(max_length=10, blank=True)
    email = models.EmailField()
    budget = models.DecimalField(max_digits=15, decimal_places=2)
    flat_size = models.DecimalField(max_digits=10, decimal_places=2)
    current_location = models.CharField(max_length=255)
    preferred_location = models.CharField(max_length=255)
    direction = models.CharField(max_length=8, choices=Direction.choices, default=Direction.NORTH)
    floor_preference = models.PositiveIntegerField()
    looking_for = models.CharField(max_length=16, choices=LookingFor.choices, default=LookingFor.GATED)
    requirement = models.TextField()
    status = models.CharField(max_length=16, choices=RequirementStatus.choices, default=RequirementStatus.NEW)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        # Newest first; id breaks ties between identical timestamps
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"{self.lead_id} - {self.name}"

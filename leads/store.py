"""
Persistence facade for customer requirement records.

Every store returns records newest first and treats status updates or deletes
of unknown ids as no-ops. The active implementation is configured with the
``REQUIREMENT_STORE`` setting.
"""
import json
import logging
from typing import Dict, List, Optional

from django.conf import settings
from django.core.cache import caches
from django.db import DatabaseError, transaction
from django.utils.module_loading import import_string

from leads.models import Lead
from leads.schemas import CustomerRequirement

logger = logging.getLogger(__name__)

REQUIREMENTS_KEY = "ilandspaces_customers_v3"


class SubmissionError(Exception):
    """Raised when a record could not be written to the store."""


class RequirementStore:
    """Interface shared by all requirement stores."""

    def list(self) -> List[CustomerRequirement]:
        raise NotImplementedError

    def get(self, requirement_id: str) -> Optional[CustomerRequirement]:
        for record in self.list():
            if record.id == requirement_id:
                return record
        return None

    def insert(self, record: CustomerRequirement) -> None:
        raise NotImplementedError

    def set_status(self, requirement_id: str, status: str) -> bool:
        raise NotImplementedError

    def delete(self, requirement_id: str) -> bool:
        raise NotImplementedError


def lead_to_record(lead: Lead) -> CustomerRequirement:
    return CustomerRequirement(
        id=lead.lead_id,
        name=lead.name,
        mobile=lead.mobile,
        alt_mobile=lead.alt_mobile or None,
        email=lead.email,
        budget=lead.budget,
        flat_size=lead.flat_size,
        current_location=lead.current_location,
        preferred_location=lead.preferred_location,
        direction=lead.direction,
        floor_preference=lead.floor_preference,
        looking_for=lead.looking_for,
        requirement=lead.requirement,
        created_at=lead.created_at,
        status=lead.status,
    )


class DatabaseRequirementStore(RequirementStore):
    """Stores requirements in the ``Lead`` table."""

    def list(self) -> List[CustomerRequirement]:
        return [lead_to_record(lead) for lead in Lead.objects.all()]

    def get(self, requirement_id: str) -> Optional[CustomerRequirement]:
        lead = Lead.objects.filter(lead_id=requirement_id).first()
        return lead_to_record(lead) if lead else None

    def insert(self, record: CustomerRequirement) -> None:
        try:
            with transaction.atomic():
                Lead.objects.create(
                    lead_id=record.id,
                    name=record.name,
                    mobile=record.mobile,
                    alt_mobile=record.alt_mobile or "",
                    email=record.email,
                    budget=record.budget,
                    flat_size=record.flat_size,
                    current_location=record.current_location,
                    preferred_location=record.preferred_location,
                    direction=record.direction,
                    floor_preference=record.floor_preference,
                    looking_for=record.looking_for,
                    requirement=record.requirement,
                    created_at=record.created_at,
                    status=record.status,
                )
        except DatabaseError as e:
            logger.error(f"Failed to store requirement {record.id}: {e}", exc_info=True)
            raise SubmissionError("Could not save the requirement") from e

    def set_status(self, requirement_id: str, status: str) -> bool:
        return Lead.objects.filter(lead_id=requirement_id).update(status=status) > 0

    def delete(self, requirement_id: str) -> bool:
        deleted, _ = Lead.objects.filter(lead_id=requirement_id).delete()
        return deleted > 0


class CacheRequirementStore(RequirementStore):
    """
    Keeps the whole record list as one JSON array under a versioned key in a
    Django cache. Changing the record shape needs a new key.
    """

    def __init__(self, alias: Optional[str] = None, key: str = REQUIREMENTS_KEY):
        self.cache = caches[alias or settings.REQUIREMENT_CACHE_ALIAS]
        self.key = key

    def _save(self, records: List[CustomerRequirement]) -> None:
        payload = json.dumps([record.model_dump(mode="json") for record in records])
        self.cache.set(self.key, payload, timeout=None)

    def list(self) -> List[CustomerRequirement]:
        stored = self.cache.get(self.key)
        if stored is None:
            self._save([])
            return []
        return [CustomerRequirement.model_validate(item) for item in json.loads(stored)]

    def insert(self, record: CustomerRequirement) -> None:
        records = self.list()
        try:
            self._save([record] + records)
        except Exception as e:
            logger.error(f"Failed to store requirement {record.id}: {e}", exc_info=True)
            raise SubmissionError("Could not save the requirement") from e

    def set_status(self, requirement_id: str, status: str) -> bool:
        records = self.list()
        updated = False
        for index, record in enumerate(records):
            if record.id == requirement_id:
                records[index] = record.model_copy(update={"status": status})
                updated = True
        if updated:
            self._save(records)
        return updated

    def delete(self, requirement_id: str) -> bool:
        records = self.list()
        remaining = [record for record in records if record.id != requirement_id]
        if len(remaining) == len(records):
            return False
        self._save(remaining)
        return True


class InMemoryRequirementStore(RequirementStore):
    """Mapping keyed by id; insertion order gives the newest-first listing."""

    def __init__(self):
        self._records: Dict[str, CustomerRequirement] = {}

    def list(self) -> List[CustomerRequirement]:
        return [record.model_copy() for record in reversed(list(self._records.values()))]

    def get(self, requirement_id: str) -> Optional[CustomerRequirement]:
        record = self._records.get(requirement_id)
        return record.model_copy() if record else None

    def insert(self, record: CustomerRequirement) -> None:
        if record.id in self._records:
            raise SubmissionError(f"Duplicate requirement id {record.id}")
        self._records[record.id] = record.model_copy()

    def set_status(self, requirement_id: str, status: str) -> bool:
        if requirement_id not in self._records:
            return False
        self._records[requirement_id] = self._records[requirement_id].model_copy(update={"status": status})
        return True

    def delete(self, requirement_id: str) -> bool:
        return self._records.pop(requirement_id, None) is not None


# Global instance
_store_instance: Optional[RequirementStore] = None


def get_requirement_store() -> RequirementStore:
    """Return the configured store, creating it on first use."""
    global _store_instance
    if _store_instance is None:
        store_class = import_string(settings.REQUIREMENT_STORE)
        _store_instance = store_class()
    return _store_instance

from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Optional

from leads.schemas import CustomerRequirement, RequirementFilterSchema

SORT_FIELDS = ("created_at", "budget", "flat_size")


def parse_budget_bound(value: Any) -> Optional[Decimal]:
    """Parse a min/max budget bound; blank or non-numeric input means no bound."""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        bound = Decimal(text)
    except (InvalidOperation, ValueError):
        return None
    return bound if bound.is_finite() else None


def matches(record: CustomerRequirement, criteria: RequirementFilterSchema) -> bool:
    if criteria.search:
        needle = criteria.search.lower()
        haystacks = (record.name, record.current_location, record.preferred_location)
        if not any(needle in text.lower() for text in haystacks):
            return False

    if criteria.status and record.status != criteria.status:
        return False

    if criteria.looking_for and record.looking_for != criteria.looking_for:
        return False

    min_budget = parse_budget_bound(criteria.min_budget)
    if min_budget is not None and record.budget < min_budget:
        return False

    max_budget = parse_budget_bound(criteria.max_budget)
    if max_budget is not None and record.budget > max_budget:
        return False

    return True


def filter_requirements(
    records: Iterable[CustomerRequirement],
    criteria: Optional[RequirementFilterSchema] = None,
) -> List[CustomerRequirement]:
    """
    Return the records matching every set criterion, in their original order.

    ``search`` is a case-insensitive substring match against name, current
    location or preferred location. ``status`` and ``looking_for`` match
    exactly. Budget bounds are inclusive.
    """
    if criteria is None:
        return list(records)
    return [record for record in records if matches(record, criteria)]


def sort_requirements(
    records: Iterable[CustomerRequirement],
    sort_by: Optional[str] = None,
    order: Optional[str] = "desc",
) -> List[CustomerRequirement]:
    """Stable sort by created_at, budget or flat_size; anything else keeps store order."""
    records = list(records)
    if sort_by not in SORT_FIELDS:
        return records
    return sorted(records, key=lambda record: getattr(record, sort_by), reverse=(order or "desc").lower() != "asc")

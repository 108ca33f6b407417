"""
Field validation for public requirement submissions.

``validate_requirement`` takes the raw values the visitor typed plus the
outstanding captcha challenge and either builds a normalized
``CustomerRequirement`` (new id, creation time, status ``New``) or returns a
mapping of field name to a human readable message.
"""
import re
import uuid
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional

from django.utils import timezone

from leads.captcha import CaptchaChallenge, is_correct
from leads.models import Direction, Lead, LookingFor, RequirementStatus
from leads.schemas import CustomerRequirement

MOBILE_RE = re.compile(r"^[6-9]\d{9}$")
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Upper bound of PositiveIntegerField on every supported backend
MAX_FLOOR = 2147483647

ERROR_MESSAGES = {
    "name": "Name must be at least 2 characters",
    "mobile": "Enter a valid 10-digit Indian mobile number",
    "alt_mobile": "Enter a valid 10-digit mobile number",
    "email": "Enter a valid email address",
    "budget": "Please enter a valid positive budget amount",
    "flat_size": "Enter a valid positive size",
    "current_location": "Current location is required",
    "preferred_location": "Preferred location is required",
    "direction": "Choose a direction: North, South, East or West",
    "floor_preference": "Enter a valid positive integer floor number",
    "looking_for": "Choose Gated, Semi-gated or Standalone",
    "requirement": "Please describe your requirement",
    "captcha": "Incorrect calculation",
}


@dataclass
class ValidationResult:
    record: Optional[CustomerRequirement] = None
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return self.record is not None and not self.errors


def generate_requirement_id() -> str:
    return uuid.uuid4().hex


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _is_blank(value: Any) -> bool:
    return _text(value).strip() == ""


def parse_positive_number(
    value: Any,
    max_digits: Optional[int] = None,
    decimal_places: Optional[int] = None,
) -> Optional[Decimal]:
    """
    Parse '7500000', 1200 or 1200.5 into a positive Decimal, else None.

    With ``max_digits``/``decimal_places`` the number must also fit a decimal
    column of that shape without rounding.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(_text(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite() or number <= 0:
        return None
    if decimal_places is not None and number.normalize().as_tuple().exponent < -decimal_places:
        return None
    if max_digits is not None:
        whole_digits = max_digits - (decimal_places or 0)
        if number.adjusted() + 1 > whole_digits:
            return None
    return number


def _column_shape(field_name: str):
    column = Lead._meta.get_field(field_name)
    return column.max_digits, column.decimal_places


def parse_floor(value: Any) -> Optional[int]:
    """Parse a whole floor number from 0 to MAX_FLOOR ('4', 4 or 4.0), else None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(_text(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite() or number < 0 or number > MAX_FLOOR:
        return None
    if number != number.to_integral_value():
        return None
    return int(number)


def validate_requirement(
    raw: Mapping[str, Any],
    challenge: Optional[CaptchaChallenge],
    captcha_answer: Any,
) -> ValidationResult:
    errors: Dict[str, str] = {}

    name = _text(raw.get("name"))
    if len(name.strip()) < 2:
        errors["name"] = ERROR_MESSAGES["name"]

    mobile = _text(raw.get("mobile"))
    if not MOBILE_RE.fullmatch(mobile):
        errors["mobile"] = ERROR_MESSAGES["mobile"]

    alt_mobile = _text(raw.get("alt_mobile"))
    if alt_mobile and not MOBILE_RE.fullmatch(alt_mobile):
        errors["alt_mobile"] = ERROR_MESSAGES["alt_mobile"]

    email = _text(raw.get("email"))
    if not EMAIL_RE.fullmatch(email):
        errors["email"] = ERROR_MESSAGES["email"]

    budget = parse_positive_number(raw.get("budget"), *_column_shape("budget"))
    if budget is None:
        errors["budget"] = ERROR_MESSAGES["budget"]

    flat_size = parse_positive_number(raw.get("flat_size"), *_column_shape("flat_size"))
    if flat_size is None:
        errors["flat_size"] = ERROR_MESSAGES["flat_size"]

    for location_field in ("current_location", "preferred_location"):
        if _is_blank(raw.get(location_field)):
            errors[location_field] = ERROR_MESSAGES[location_field]

    # Blank selects fall back to the form defaults
    direction = _text(raw.get("direction")) or Direction.NORTH.value
    if direction not in Direction.values:
        errors["direction"] = ERROR_MESSAGES["direction"]

    looking_for = _text(raw.get("looking_for")) or LookingFor.GATED.value
    if looking_for not in LookingFor.values:
        errors["looking_for"] = ERROR_MESSAGES["looking_for"]

    floor_preference = parse_floor(raw.get("floor_preference"))
    if floor_preference is None:
        errors["floor_preference"] = ERROR_MESSAGES["floor_preference"]

    if _is_blank(raw.get("requirement")):
        errors["requirement"] = ERROR_MESSAGES["requirement"]

    if not is_correct(challenge, captcha_answer):
        errors["captcha"] = ERROR_MESSAGES["captcha"]

    if errors:
        return ValidationResult(errors=errors)

    record = CustomerRequirement(
        id=generate_requirement_id(),
        name=name,
        mobile=mobile,
        alt_mobile=alt_mobile or None,
        email=email,
        budget=budget,
        flat_size=flat_size,
        current_location=_text(raw.get("current_location")),
        preferred_location=_text(raw.get("preferred_location")),
        direction=direction,
        floor_preference=floor_preference,
        looking_for=looking_for,
        requirement=_text(raw.get("requirement")),
        created_at=timezone.now(),
        status=RequirementStatus.NEW.value,
    )
    return ValidationResult(record=record)

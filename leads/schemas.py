from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Union

from ninja import Schema


class CustomerRequirement(Schema):
    """A stored lead. Only ``status`` changes after creation."""
    id: str
    name: str
    mobile: str
    alt_mobile: Optional[str] = None
    email: str
    budget: Decimal
    flat_size: Decimal
    current_location: str
    preferred_location: str
    direction: str
    floor_preference: int
    looking_for: str
    requirement: str
    created_at: datetime
    status: str


class RequirementSubmissionSchema(Schema):
    """Raw values from the public requirement form"""
    name: Optional[str] = None
    mobile: Optional[str] = None
    alt_mobile: Optional[str] = None
    email: Optional[str] = None
    budget: Optional[Union[int, float, str]] = None
    flat_size: Optional[Union[int, float, str]] = None
    current_location: Optional[str] = None
    preferred_location: Optional[str] = None
    direction: Optional[str] = None
    floor_preference: Optional[Union[int, float, str]] = None
    looking_for: Optional[str] = None
    requirement: Optional[str] = None
    captcha_answer: Optional[Union[int, str]] = None


class CaptchaSchema(Schema):
    num1: int
    num2: int
    prompt: str


class SubmissionErrorSchema(Schema):
    error: str
    errors: Dict[str, str] = {}
    captcha: Optional[CaptchaSchema] = None


class RequirementFilterSchema(Schema):
    """Schema for filtering requirements. Blank values are ignored."""
    search: Optional[str] = None
    status: Optional[str] = None
    looking_for: Optional[str] = None
    min_budget: Optional[str] = None
    max_budget: Optional[str] = None


class RequirementListQuerySchema(RequirementFilterSchema):
    sort_by: Optional[str] = None
    order: Optional[str] = None


class RequirementListResponseSchema(Schema):
    count: int
    requirements: List[CustomerRequirement]


class StatusUpdateSchema(Schema):
    status: str
    confirm: bool = False


class StatusUpdateResponseSchema(Schema):
    id: str
    status: Optional[str] = None
    updated: bool


class DeleteResponseSchema(Schema):
    id: str
    deleted: bool


class ChoicesResponseSchema(Schema):
    statuses: List[str]
    directions: List[str]
    looking_for: List[str]
    sort_fields: List[str]

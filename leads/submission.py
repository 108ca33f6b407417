import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from leads.captcha import CaptchaChallenge, ChallengeStore
from leads.schemas import CustomerRequirement
from leads.store import RequirementStore
from leads.validation import validate_requirement

logger = logging.getLogger(__name__)


@dataclass
class SubmissionOutcome:
    record: Optional[CustomerRequirement] = None
    errors: Dict[str, str] = field(default_factory=dict)
    captcha: Optional[CaptchaChallenge] = None

    @property
    def accepted(self) -> bool:
        return self.record is not None


def submit_requirement(
    data: Mapping[str, Any],
    challenges: ChallengeStore,
    store: RequirementStore,
) -> SubmissionOutcome:
    """
    Validate a public submission and store it.

    Any validation failure issues a fresh challenge and stores nothing. A
    store failure raises SubmissionError and keeps the current challenge so the
    same data can be retried.
    """
    result = validate_requirement(data, challenges.current(), data.get("captcha_answer"))
    if not result.is_valid:
        logger.info(f"Rejected requirement submission: {sorted(result.errors)}")
        return SubmissionOutcome(errors=result.errors, captcha=challenges.issue())

    store.insert(result.record)
    logger.info(f"Stored requirement {result.record.id} from {result.record.email}")
    return SubmissionOutcome(record=result.record, captcha=challenges.issue())

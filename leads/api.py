import logging

from ninja import Query, Router

from authentication.session_auth import admin_session_auth
from leads.captcha import REQUIREMENT_CAPTCHA_KEY, ChallengeStore
from leads.export import NothingToExport, build_csv_response
from leads.filtering import SORT_FIELDS, filter_requirements, sort_requirements
from leads.models import Direction, LookingFor, RequirementStatus, can_transition
from leads.schemas import (
    CaptchaSchema,
    ChoicesResponseSchema,
    CustomerRequirement,
    DeleteResponseSchema,
    RequirementFilterSchema,
    RequirementListQuerySchema,
    RequirementListResponseSchema,
    RequirementSubmissionSchema,
    StatusUpdateResponseSchema,
    StatusUpdateSchema,
    SubmissionErrorSchema,
)
from leads.store import SubmissionError, get_requirement_store
from leads.submission import submit_requirement

logger = logging.getLogger(__name__)

router = Router(auth=admin_session_auth)

CONFIRM_PROMPTS = {
    RequirementStatus.CONTACTED.value: "Are you sure you want to mark this lead as contacted?",
    RequirementStatus.CLOSED.value: "Are you sure you want to close this lead?",
}
DELETE_PROMPT = "Are you sure you want to delete this record? This action cannot be undone."


@router.get("/captcha", response=CaptchaSchema, auth=None)
def requirement_captcha(request):
    """Return the outstanding challenge for the requirement form, issuing one if needed"""
    return ChallengeStore(request.session, REQUIREMENT_CAPTCHA_KEY).current_or_issue().to_dict()


@router.get("/choices", response=ChoicesResponseSchema, auth=None)
def get_choices(request):
    """Get the allowed values for the select fields"""
    return {
        "statuses": list(RequirementStatus.values),
        "directions": list(Direction.values),
        "looking_for": list(LookingFor.values),
        "sort_fields": list(SORT_FIELDS),
    }


@router.post(
    "",
    response={201: CustomerRequirement, 400: SubmissionErrorSchema, 503: SubmissionErrorSchema},
    auth=None,
)
def create_requirement(request, data: RequirementSubmissionSchema):
    """
    Submit a customer requirement from the public form.

    Requires a correct answer to the challenge from ``GET /captcha``. On
    validation failure the response lists the offending fields and carries a
    new challenge.
    """
    challenges = ChallengeStore(request.session, REQUIREMENT_CAPTCHA_KEY)
    try:
        outcome = submit_requirement(data.dict(), challenges, get_requirement_store())
    except SubmissionError:
        return 503, {
            "error": "We could not save your requirement. Please try again.",
            "captcha": challenges.current_or_issue().to_dict(),
        }

    if not outcome.accepted:
        return 400, {
            "error": "Please correct the highlighted fields.",
            "errors": outcome.errors,
            "captcha": outcome.captcha.to_dict(),
        }
    return 201, outcome.record


@router.get("", response=RequirementListResponseSchema)
def list_requirements(request, query: Query[RequirementListQuerySchema]):
    """List requirements matching the filters, newest first unless sorted"""
    records = filter_requirements(get_requirement_store().list(), query)
    records = sort_requirements(records, query.sort_by, query.order)
    return {"count": len(records), "requirements": records}


@router.get("/export", response={400: dict})
def export_requirements(request, filters: Query[RequirementFilterSchema]):
    """Download the filtered requirements as CSV"""
    records = filter_requirements(get_requirement_store().list(), filters)
    try:
        response = build_csv_response(records)
    except NothingToExport as e:
        return 400, {"error": str(e)}
    logger.info(f"Admin {request.auth.email} exported {len(records)} requirements")
    return response


@router.patch(
    "/{requirement_id}",
    response={200: StatusUpdateResponseSchema, 400: dict, 409: dict},
)
def update_status(request, requirement_id: str, data: StatusUpdateSchema):
    """
    Change a requirement's status.

    Allowed moves are New -> Contacted, New -> Closed and Contacted -> Closed.
    The change must be confirmed. Unknown ids are a no-op.
    """
    if data.status not in RequirementStatus.values:
        return 400, {"error": f"Unknown status '{data.status}'"}

    store = get_requirement_store()
    record = store.get(requirement_id)
    if record is None:
        return {"id": requirement_id, "status": None, "updated": False}

    if not can_transition(record.status, data.status):
        return 400, {"error": f"Cannot change status from {record.status} to {data.status}"}

    if not data.confirm:
        return 409, {"error": "Confirmation required", "confirm": CONFIRM_PROMPTS[data.status]}

    updated = store.set_status(requirement_id, data.status)
    if updated:
        logger.info(f"Admin {request.auth.email} moved requirement {requirement_id} to {data.status}")
    return {"id": requirement_id, "status": data.status if updated else None, "updated": updated}


@router.delete("/{requirement_id}", response={200: DeleteResponseSchema, 409: dict})
def delete_requirement(request, requirement_id: str, confirm: bool = False):
    """Delete a requirement. Must be confirmed; unknown ids are a no-op."""
    if not confirm:
        return 409, {"error": "Confirmation required", "confirm": DELETE_PROMPT}

    deleted = get_requirement_store().delete(requirement_id)
    if deleted:
        logger.info(f"Admin {request.auth.email} deleted requirement {requirement_id}")
    return {"id": requirement_id, "deleted": deleted}

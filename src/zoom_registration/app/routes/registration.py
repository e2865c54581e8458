"""Zoom Registration Routes.

Meeting and webinar registration endpoints, single and batch. Required
fields are checked here; everything past this point receives well formed
RegistrationRequest values and answers with a ServiceEnvelope.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ...registration.batch import EMPTY_BATCH_MESSAGE
from ...registration.service import RegistrationService
from ...types import RegistrationRequest, ResourceKind, ServiceEnvelope

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Email, first name, and last name are required fields"

MISSING_ID_MESSAGES = {
    "meeting": "Meeting ID is required",
    "webinar": "Webinar ID is required",
}


class CustomQuestionBody(BaseModel):
    """Custom question answer."""

    title: str
    value: str


class RegistrantBody(BaseModel):
    """Registrant as posted by callers. Required fields are checked by hand."""

    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    zip: Optional[str] = None
    state: Optional[str] = None
    phone: Optional[str] = None
    industry: Optional[str] = None
    org: Optional[str] = None
    job_title: Optional[str] = None
    custom_questions: Optional[List[CustomQuestionBody]] = None

    def has_required_fields(self) -> bool:
        return bool(self.email and self.first_name and self.last_name)

    def to_request(self) -> RegistrationRequest:
        return RegistrationRequest.from_dict(self.model_dump())


class AccountsResponse(BaseModel):
    """Configured accounts."""

    accounts: List[str]
    default: str


router = APIRouter()


def get_registration_service(request: Request) -> RegistrationService:
    """Dependency to get the service built in the app lifespan."""
    return request.app.state.registration_service


def _respond(envelope: ServiceEnvelope) -> JSONResponse:
    return JSONResponse(status_code=envelope.status_code, content=envelope.to_dict())


def _bad_request(message: str) -> JSONResponse:
    return _respond(ServiceEnvelope.fail(message, 400))


def _parse_registrant(payload: Any) -> Optional[RegistrantBody]:
    """Validate one registrant; None when it is unusable or lacks required fields."""
    if not isinstance(payload, dict):
        return None
    try:
        body = RegistrantBody.model_validate(payload)
    except PydanticValidationError:
        return None
    return body if body.has_required_fields() else None


async def _register(
    kind: ResourceKind,
    resource_id: str,
    payload: Any,
    account: Optional[str],
    service: RegistrationService,
) -> JSONResponse:
    if not resource_id.strip():
        return _bad_request(MISSING_ID_MESSAGES[kind])

    body = _parse_registrant(payload)
    if body is None:
        logger.debug(f"_register: Rejected {kind} {resource_id} registration, required fields missing")
        return _bad_request(REQUIRED_FIELDS_MESSAGE)

    envelope = await service.register(kind, resource_id, body.to_request(), account=account)
    return _respond(envelope)


async def _register_batch(
    kind: ResourceKind,
    resource_id: str,
    payload: Any,
    account: Optional[str],
    service: RegistrationService,
) -> JSONResponse:
    if not resource_id.strip():
        return _bad_request(MISSING_ID_MESSAGES[kind])

    registrants = payload.get("registrants") if isinstance(payload, dict) else None
    if not isinstance(registrants, list) or not registrants:
        return _bad_request(EMPTY_BATCH_MESSAGE)

    # Reject the whole batch before any registrant is submitted
    requests: List[RegistrationRequest] = []
    for index, item in enumerate(registrants):
        body = _parse_registrant(item)
        if body is None:
            logger.debug(f"_register_batch: Registrant {index} for {kind} {resource_id} is invalid")
            return _bad_request(
                f"Registrant at index {index} is missing required fields (email, first_name, last_name)"
            )
        requests.append(body.to_request())

    envelope = await service.register_batch(kind, resource_id, requests, account=account)
    return _respond(envelope)


@router.post("/meetings/{meeting_id}/register")
async def register_meeting(
    meeting_id: str,
    payload: Any = Body(None),
    account: Optional[str] = None,
    service: RegistrationService = Depends(get_registration_service),
) -> JSONResponse:
    """Register a participant for a Zoom meeting."""
    return await _register("meeting", meeting_id, payload, account, service)


@router.post("/webinars/{webinar_id}/register")
async def register_webinar(
    webinar_id: str,
    payload: Any = Body(None),
    account: Optional[str] = None,
    service: RegistrationService = Depends(get_registration_service),
) -> JSONResponse:
    """Register a participant for a Zoom webinar."""
    return await _register("webinar", webinar_id, payload, account, service)


@router.post("/meetings/{meeting_id}/batch-register")
async def batch_register_meeting(
    meeting_id: str,
    payload: Any = Body(None),
    account: Optional[str] = None,
    service: RegistrationService = Depends(get_registration_service),
) -> JSONResponse:
    """
    Register several participants for a Zoom meeting.

    Items are submitted one at a time; the response lists every registrant
    in request order with its result or error.
    """
    return await _register_batch("meeting", meeting_id, payload, account, service)


@router.post("/webinars/{webinar_id}/batch-register")
async def batch_register_webinar(
    webinar_id: str,
    payload: Any = Body(None),
    account: Optional[str] = None,
    service: RegistrationService = Depends(get_registration_service),
) -> JSONResponse:
    """Register several participants for a Zoom webinar."""
    return await _register_batch("webinar", webinar_id, payload, account, service)


@router.get("/accounts", response_model=AccountsResponse)
async def list_accounts(
    service: RegistrationService = Depends(get_registration_service),
) -> Dict[str, Any]:
    """List configured Zoom account names and the default."""
    return service.accounts()

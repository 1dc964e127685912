"""
Registration request review controller.

Holds the list of pending registration requests shown to the operator,
loads it from the backend and dispatches approve/reject decisions.
Confirmations and failures are published on the EventBus; the controller
knows nothing about how they are displayed.
"""
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from .constants import (
    ENDPOINT_REGISTER_REQUESTS,
    ENDPOINT_PROCESS_REQUEST,
    ENDPOINT_SUBMIT_REQUEST,
    EVENT_REQUESTS_LOADED,
    EVENT_REQUESTS_LOAD_FAILED,
    EVENT_REQUEST_APPROVED,
    EVENT_REQUEST_REJECTED,
    EVENT_REQUEST_FAILED,
    EVENT_REQUEST_SUBMITTED,
    MESSAGE_APPROVED,
    MESSAGE_REJECTED,
    MESSAGE_SUBMITTED,
    LEVEL_INFO,
    LEVEL_ERROR,
)
from .event_bus import EventBus
from .exceptions import BackendError, RequestNotFoundError, ReviewError, ValidationError
from .models import (
    ProcessDecision,
    RegisterRequestsPage,
    RegistrationRequest,
    RequestRef,
    SubmitRequest,
    username_of,
)
from .utils.http_client import BackendClient

logger = logging.getLogger(__name__)


class RegisterRequestsController:
    """Page-level state and actions for the registration request review.

    ``requests`` is only ever replaced as a whole: a successful action
    computes a filtered copy of whatever list is current when the backend
    answers, so concurrent actions all end up reflected.

    Usage:
        controller = RegisterRequestsController(client, event_bus)
        await controller.load()
        await controller.approve_request(controller.requests[0])
    """

    def __init__(self, client: BackendClient, event_bus: EventBus) -> None:
        self.client = client
        self.event_bus = event_bus
        self.requests: List[RegistrationRequest] = []

    # ============= Request List Loader =============

    async def load(self) -> List[RegistrationRequest]:
        """Fetch pending requests and replace the displayed list."""
        try:
            payload = await self.client.get_json(ENDPOINT_REGISTER_REQUESTS)
            page = RegisterRequestsPage.model_validate(payload or {})
        except PydanticValidationError as e:
            error = BackendError(f"Unexpected register_requests payload: {e.error_count()} error(s)")
            await self._notify_failure(EVENT_REQUESTS_LOAD_FAILED, error)
            raise error from e
        except BackendError as e:
            await self._notify_failure(EVENT_REQUESTS_LOAD_FAILED, e)
            raise

        self.requests = list(page.requests)
        logger.info(f"📥 Loaded {len(self.requests)} registration request(s)")
        await self.event_bus.emit(EVENT_REQUESTS_LOADED, {
            "count": len(self.requests),
            "message": f"Loaded {len(self.requests)} request(s)",
            "level": LEVEL_INFO,
        })
        return self.requests

    async def reload(self) -> List[RegistrationRequest]:
        return await self.load()

    # ============= Request Action Dispatcher =============

    async def approve_request(self, request: RequestRef) -> None:
        await self._process(request, approve=True)

    async def reject_request(self, request: RequestRef) -> None:
        await self._process(request, approve=False)

    async def approve_displayed(self, username: str) -> None:
        await self._process_displayed(username, approve=True)

    async def reject_displayed(self, username: str) -> None:
        await self._process_displayed(username, approve=False)

    async def _process_displayed(self, username: str, approve: bool) -> None:
        """Act on the displayed row for ``username``; unknown rows are reported, not sent."""
        try:
            request = self.find(username)
        except RequestNotFoundError as e:
            await self._notify_failure(EVENT_REQUEST_FAILED, e, username=username,
                                       action="approve" if approve else "reject")
            raise
        await self._process(request, approve)

    async def _process(self, request: RequestRef, approve: bool) -> None:
        username = username_of(request)
        decision = ProcessDecision(username=username, approve=approve)
        action = "approve" if approve else "reject"

        try:
            await self.client.post_json(ENDPOINT_PROCESS_REQUEST, decision.model_dump())
        except BackendError as e:
            # Заявка остаётся в списке, подтверждения нет
            await self._notify_failure(EVENT_REQUEST_FAILED, e, username=username, action=action)
            raise

        await self.event_bus.emit(
            EVENT_REQUEST_APPROVED if approve else EVENT_REQUEST_REJECTED,
            {
                "username": username,
                "message": MESSAGE_APPROVED if approve else MESSAGE_REJECTED,
                "level": LEVEL_INFO,
            },
        )
        self.requests = [r for r in self.requests if r.username != username]

    # ============= Submission =============

    async def submit_request(self, username: str, email: str) -> None:
        """Send a new registration request to the backend sign-up queue."""
        username = (username or "").strip()
        email = (email or "").strip()
        if not username:
            raise ValidationError("username must not be blank")
        if not email:
            raise ValidationError("email must not be blank")

        form = SubmitRequest(username=username, email=email)
        await self.client.post_form(ENDPOINT_SUBMIT_REQUEST, form.model_dump())
        await self.event_bus.emit(EVENT_REQUEST_SUBMITTED, {
            "username": username,
            "message": MESSAGE_SUBMITTED,
            "level": LEVEL_INFO,
        })

    # ============= Helpers =============

    def find(self, username: str) -> RegistrationRequest:
        for request in self.requests:
            if request.username == username:
                return request
        raise RequestNotFoundError(f"No pending request for '{username}'")

    def to_list(self) -> List[Dict[str, Any]]:
        return [r.to_dict() for r in self.requests]

    async def _notify_failure(self, event_name: str, error: ReviewError,
                              username: Optional[str] = None, action: Optional[str] = None) -> None:
        data: Dict[str, Any] = {
            "message": error.detail,
            "status_code": error.status_code,
            "level": LEVEL_ERROR,
        }
        if username is not None:
            data["username"] = username
            data["message"] = f"Failed to {action} request for {username}: {error.detail}"
        await self.event_bus.emit(event_name, data)

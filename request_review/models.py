"""
Pydantic models for data exchanged with the backend.
"""
from typing import Any, Dict, List, Mapping, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ValidationError


class RegistrationRequest(BaseModel):
    """Pending registration request as returned by the backend.

    Fields other than ``username`` and ``email`` are kept as-is so the page
    can show whatever the backend sends.
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    username: str
    email: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        # Явные null от backend сохраняются, неотправленный email - нет
        return self.model_dump(exclude_unset=True)


class RegisterRequestsPage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    requests: List[RegistrationRequest] = Field(default_factory=list)


class ProcessDecision(BaseModel):
    username: str
    approve: bool


class SubmitRequest(BaseModel):
    username: str
    email: str


# Всё, что можно передать в approve/reject
RequestRef = Union[RegistrationRequest, Mapping[str, Any], str]


def username_of(request: RequestRef) -> str:
    """Extract the username from a request, a mapping or a plain string."""
    if isinstance(request, RegistrationRequest):
        username = request.username
    elif isinstance(request, str):
        username = request
    else:
        username = request.get("username")
    if not isinstance(username, str) or not username:
        raise ValidationError(f"Request has no valid username: {username!r}")
    return username

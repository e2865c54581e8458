"""
Type definitions for zoom_registration.

Value objects exchanged between the account resolver, token provider,
registration client and batch orchestrator. Everything here except
AccountCredential is transient and lives for a single call.
"""
from dataclasses import dataclass, field
from typing import (
    Any,
    Dict,
    Generic,
    List,
    Literal,
    Optional,
    TypedDict,
    TypeVar,
)

# Resource kinds - same payload shape, different upstream endpoint
ResourceKind = Literal["meeting", "webinar"]

RESOURCE_KINDS = frozenset({"meeting", "webinar"})

# Registrant approval states reported by the provider
RegistrationStatus = Literal["approved", "pending", "denied"]

REGISTRATION_STATUSES = frozenset({"approved", "pending", "denied"})

# HTTP methods used against the provider
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

T = TypeVar("T")


def _mask_sensitive(value: Optional[str], visible_chars: int = 4) -> str:
    """Mask sensitive value for safe repr/logging."""
    if value is None:
        return "<None>"
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)


class FetchResponse(TypedDict):
    """Response from ProviderHttpClient."""

    status: int
    status_text: str
    headers: Dict[str, str]
    data: Any
    ok: bool


@dataclass(frozen=True)
class AccountCredential:
    """
    Credential set for one Zoom account (tenant).

    Loaded once at startup and never mutated. The client_secret is masked
    in repr so credentials can be logged safely.
    """

    name: str
    client_id: str
    client_secret: str
    account_id: str

    def __repr__(self) -> str:
        return (
            f"AccountCredential(name={self.name!r}, "
            f"client_id={_mask_sensitive(self.client_id)!r}, "
            f"client_secret={_mask_sensitive(self.client_secret, 0)!r}, "
            f"account_id={self.account_id!r})"
        )


@dataclass
class CustomQuestion:
    """Custom registration question and its answer."""

    title: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "value": self.value}


# Optional profile fields forwarded to the provider when set
PROFILE_FIELDS = (
    "address",
    "city",
    "country",
    "zip",
    "state",
    "phone",
    "industry",
    "org",
    "job_title",
)


@dataclass
class RegistrationRequest:
    """Person to register for a meeting or webinar."""

    email: str
    first_name: str
    last_name: str
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    zip: Optional[str] = None
    state: Optional[str] = None
    phone: Optional[str] = None
    industry: Optional[str] = None
    org: Optional[str] = None
    job_title: Optional[str] = None
    custom_questions: Optional[List[CustomQuestion]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RegistrationRequest":
        """Build a request from a JSON-like mapping, ignoring unknown keys."""
        questions = data.get("custom_questions")
        return cls(
            email=data.get("email"),
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            custom_questions=(
                [CustomQuestion(title=q["title"], value=q["value"]) for q in questions]
                if questions is not None
                else None
            ),
            **{name: data.get(name) for name in PROFILE_FIELDS},
        )

    def to_payload(self) -> Dict[str, Any]:
        """Provider request body. Unset optional fields are omitted."""
        payload: Dict[str, Any] = {
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
        }
        for name in PROFILE_FIELDS:
            value = getattr(self, name)
            if value is not None:
                payload[name] = value
        if self.custom_questions is not None:
            payload["custom_questions"] = [q.to_dict() for q in self.custom_questions]
        return payload


@dataclass
class RegistrationResult:
    """
    Registrant record returned by the provider.

    Passed through untouched apart from status validation: extra keys the
    provider sends are kept in ``raw`` and returned by ``to_dict``.
    """

    id: Optional[str] = None
    meeting_id: Optional[str] = None
    topic: Optional[str] = None
    create_time: Optional[str] = None
    status: Optional[RegistrationStatus] = None
    join_url: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "RegistrationResult":
        """
        Parse a provider response body.

        Raises:
            ValueError: body is not an object, or status is outside
                approved/pending/denied
        """
        if not isinstance(data, dict):
            raise ValueError(
                f"Expected registrant object, got {type(data).__name__}"
            )
        status = data.get("status")
        if status is not None and status not in REGISTRATION_STATUSES:
            raise ValueError(f"Invalid registration status: {status!r}")

        def _str(key: str) -> Optional[str]:
            value = data.get(key)
            return None if value is None else str(value)

        return cls(
            id=_str("id"),
            meeting_id=_str("meeting_id"),
            topic=_str("topic"),
            create_time=_str("create_time"),
            status=status,
            join_url=_str("join_url"),
            email=_str("email"),
            first_name=_str("first_name"),
            last_name=_str("last_name"),
            raw=dict(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.raw)


@dataclass
class ServiceEnvelope(Generic[T]):
    """
    Uniform result of every provider interaction.

    status_code is the HTTP status to propagate outward, even when the
    failure never reached the network.
    """

    success: bool
    status_code: int
    data: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: T, status_code: int = 200) -> "ServiceEnvelope[T]":
        return cls(success=True, status_code=status_code, data=data)

    @classmethod
    def fail(cls, error: str, status_code: int = 500) -> "ServiceEnvelope[T]":
        return cls(success=False, status_code=status_code, error=error)

    def to_dict(self) -> Dict[str, Any]:
        """Response body: success, data and error (status goes on the HTTP response)."""
        data = self.data
        if hasattr(data, "to_dict"):
            data = data.to_dict()
        return {"success": self.success, "data": data, "error": self.error}


@dataclass
class BatchItem:
    """Outcome for one registrant of a batch."""

    email: Optional[str]
    result: Optional[RegistrationResult] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        item: Dict[str, Any] = {
            "result": self.result.to_dict() if self.result is not None else None,
            "email": self.email,
        }
        if self.error is not None:
            item["error"] = self.error
        return item


@dataclass
class BatchReport:
    """Per-registrant outcomes, in input order, with counters."""

    registrants: List[BatchItem] = field(default_factory=list)
    successful_count: int = 0
    failed_count: int = 0

    def add_success(self, email: Optional[str], result: RegistrationResult) -> None:
        self.registrants.append(BatchItem(email=email, result=result))
        self.successful_count += 1

    def add_failure(self, email: Optional[str], error: str) -> None:
        self.registrants.append(BatchItem(email=email, error=error))
        self.failed_count += 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "registrants": [item.to_dict() for item in self.registrants],
            "successful_count": self.successful_count,
            "failed_count": self.failed_count,
        }

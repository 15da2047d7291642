"""
Bugsink models for projects, teams, issues, events and releases
"""

from enum import Enum
from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator

T = TypeVar("T")


class ProjectVisibility(str, Enum):
    JOINABLE = "joinable"
    DISCOVERABLE = "discoverable"
    TEAM_MEMBERS = "team_members"


class TeamVisibility(str, Enum):
    JOINABLE = "joinable"
    DISCOVERABLE = "discoverable"
    HIDDEN = "hidden"


class Page(BaseModel, Generic[T]):
    """One page of a Bugsink list endpoint"""

    next: str | None = None
    previous: str | None = None
    results: list[T] = []


class Project(BaseModel):
    """Represents a Bugsink project"""

    id: int
    team: str | None = None
    name: str
    slug: str = ""
    dsn: str = ""
    digested_event_count: int = 0
    stored_event_count: int = 0
    alert_on_new_issue: bool = True
    alert_on_regression: bool = True
    alert_on_unmute: bool = True
    visibility: str = ""
    retention_max_event_count: int | None = None


class Team(BaseModel):
    id: str
    name: str
    visibility: str = ""


class Issue(BaseModel):
    """Represents a Bugsink issue (a group of events sharing a fingerprint)"""

    id: str
    project: int | None = None
    digest_order: int | None = None
    first_seen: str = ""
    last_seen: str = ""
    digested_event_count: int = 0
    stored_event_count: int = 0
    calculated_type: str = ""
    calculated_value: str = ""
    transaction: str | None = None
    is_resolved: bool = False
    is_resolved_by_next_release: bool = False
    is_muted: bool = False

    @property
    def status(self) -> str:
        if self.is_resolved:
            return "resolved"
        if self.is_muted:
            return "muted"
        return "unresolved"


class StackFrame(BaseModel):
    filename: str | None = None
    abs_path: str | None = None
    function: str | None = None
    module: str | None = None
    lineno: int | None = None
    colno: int | None = None
    in_app: bool | None = None
    context_line: str | None = None
    pre_context: list[str] | None = None
    post_context: list[str] | None = None


class Stacktrace(BaseModel):
    frames: list[StackFrame] | None = None


class ExceptionValue(BaseModel):
    type: str | None = None
    value: str | None = None
    stacktrace: Stacktrace | None = None


class ExceptionInfo(BaseModel):
    values: list[ExceptionValue] | None = None


class RequestInfo(BaseModel):
    url: str | None = None
    method: str | None = None
    headers: Any = None


class ClientInfo(BaseModel):
    """Browser or operating system reported with an event"""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str | None = None
    version: str | None = None


class EventData(BaseModel):
    """The (partial) event payload as sent by the SDK"""

    exception: ExceptionInfo | None = None
    # A plain string or an object such as {"formatted": ..., "params": [...]}
    message: str | dict[str, Any] | None = None
    logentry: dict[str, Any] | None = None
    level: str | None = None
    platform: str | None = None
    # SDKs send tags either as an object or as a list of pairs
    tags: dict[str, Any] | list[Any] | None = None
    contexts: dict[str, Any] | None = None
    request: RequestInfo | None = None
    browser: ClientInfo | None = None
    os: ClientInfo | None = None

    @field_validator("exception", mode="before")
    @classmethod
    def _wrap_exception_list(cls, value: Any) -> Any:
        # Older SDKs send the exception values as a bare list
        if isinstance(value, list):
            return {"values": value}
        return value

    @property
    def message_text(self) -> str | None:
        message = self.message or self.logentry
        if isinstance(message, dict):
            return message.get("formatted") or message.get("message")
        return message


class Event(BaseModel):
    """Represents one occurrence of an issue"""

    id: str
    event_id: str = ""
    issue: str | None = None
    project: int | None = None
    timestamp: str = ""
    ingested_at: str = ""
    digested_at: str = ""
    digest_order: int | None = None
    grouping: int | None = None
    data: EventData | None = None


class Release(BaseModel):
    id: str
    project: int | None = None
    version: str = ""
    date_released: str | None = None
    semver: str | None = None
    is_semver: bool | None = None


class ConnectionResult(BaseModel):
    success: bool
    message: str


class IssueListFilter(BaseModel):
    """Filters for listing issues; unset fields are not sent"""

    status: str | None = None
    limit: int | None = None
    sort: Literal["digest_order", "last_seen"] | None = None
    order: Literal["asc", "desc"] | None = None

    def to_params(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class EventListFilter(BaseModel):
    limit: int | None = None

    def to_params(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ProjectCreate(BaseModel):
    team: str
    name: str
    visibility: ProjectVisibility = ProjectVisibility.TEAM_MEMBERS
    alert_on_new_issue: bool = True
    alert_on_regression: bool = True
    alert_on_unmute: bool = True

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class ProjectUpdate(BaseModel):
    """Partial project update; only explicitly supplied fields are sent"""

    name: str | None = None
    visibility: ProjectVisibility | None = None
    alert_on_new_issue: bool | None = None
    alert_on_regression: bool | None = None
    alert_on_unmute: bool | None = None
    retention_max_event_count: int | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True, exclude_none=True)


class TeamCreate(BaseModel):
    name: str
    visibility: TeamVisibility = TeamVisibility.DISCOVERABLE

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class TeamUpdate(BaseModel):
    name: str | None = None
    visibility: TeamVisibility | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True, exclude_none=True)


class ReleaseCreate(BaseModel):
    project: int
    version: str
    timestamp: str | None = None  # ISO 8601, server defaults to now

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)

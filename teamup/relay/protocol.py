"""
Realtime wire protocol.

Frames are JSON objects discriminated by `type`:

    client -> server  {"type": "join_project", "projectId": 7}
    client -> server  {"type": "send_message", "projectId": 7, "userId": 3, "content": "hi"}
    server -> client  {"type": "joined", "projectId": 7}
    server -> client  {"type": "new_message", "message": {...}}
    server -> client  {"type": "error", "detail": "..."}
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from teamup.constants import WS_ERROR, WS_JOINED, WS_NEW_MESSAGE
from teamup.exceptions import ValidationError

ProjectId = Union[int, str]


class _ClientFrame(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class JoinProjectFrame(_ClientFrame):
    type: Literal["join_project"]
    project_id: ProjectId = Field(alias="projectId")

    @field_validator("project_id")
    @classmethod
    def validate_project_id(cls, v: ProjectId) -> ProjectId:
        if isinstance(v, str) and not v.strip():
            raise ValueError("projectId must not be empty")
        return v


class SendMessageFrame(_ClientFrame):
    type: Literal["send_message"]
    project_id: int = Field(alias="projectId")
    user_id: int = Field(alias="userId")
    content: str = Field(min_length=1)


ClientFrame = Annotated[Union[JoinProjectFrame, SendMessageFrame], Field(discriminator="type")]

_client_frame_adapter: TypeAdapter = TypeAdapter(ClientFrame)


def _describe(exc: PydanticValidationError) -> str:
    """Flatten pydantic errors into one line for the error frame."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "Invalid frame: " + "; ".join(parts)


def parse_client_frame(raw: str | bytes | dict[str, Any]) -> JoinProjectFrame | SendMessageFrame:
    """
    Validate an incoming frame.

    Raises:
        ValidationError: Malformed JSON, unknown type or missing fields.
    """
    try:
        if isinstance(raw, (str, bytes)):
            return _client_frame_adapter.validate_json(raw)
        return _client_frame_adapter.validate_python(raw)
    except PydanticValidationError as exc:
        raise ValidationError(_describe(exc)) from exc


def room_key(project_id: ProjectId) -> str:
    """Normalize a project identifier to its room key, so 7 and "7" share a room."""
    if project_id is None:
        raise ValidationError("Project ID is required")
    key = str(project_id).strip()
    if not key:
        raise ValidationError("Project ID is required")
    return key


def joined_frame(project_id: ProjectId) -> dict:
    return {"type": WS_JOINED, "projectId": project_id}


def new_message_frame(message: dict) -> dict:
    return {"type": WS_NEW_MESSAGE, "message": message}


def error_frame(detail: str) -> dict:
    return {"type": WS_ERROR, "detail": detail}

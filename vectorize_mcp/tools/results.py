"""Tool results and the response envelope returned to agents."""

import json
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field

MISSING_ACCOUNT_MESSAGE = (
    "No currently active account ID. List your accounts and set an active "
    "account before using this tool."
)


class ToolResultKind(str, Enum):
    """How a tool invocation ended."""

    SUCCESS = "success"
    NOTICE = "notice"
    NOT_FOUND = "not_found"
    MISSING_ACCOUNT = "missing_account"
    ERROR = "error"


class TextContent(BaseModel):
    """A single text block of a tool response."""

    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Envelope returned for every tool call.

    Always a single text block. Failures are recognizable only by the
    ``Error`` prefix of the text.
    """

    content: list[TextContent] = Field(min_length=1, max_length=1)

    @property
    def text(self) -> str:
        return self.content[0].text


class ToolResult(BaseModel):
    """Outcome of one tool invocation.

    Attributes:
        kind: How the invocation ended.
        text: Rendered text: JSON for successes, a sentence otherwise.
    """

    kind: ToolResultKind
    text: str

    @classmethod
    def success(cls, payload: Any) -> "ToolResult":
        """Serialize a remote result as the success payload."""
        return cls(kind=ToolResultKind.SUCCESS, text=json.dumps(payload, default=str))

    @classmethod
    def notice(cls, message: str) -> "ToolResult":
        """Fallback text for a successful call that produced nothing to show."""
        return cls(kind=ToolResultKind.NOTICE, text=message)

    @classmethod
    def not_found(cls, message: str) -> "ToolResult":
        return cls(kind=ToolResultKind.NOT_FOUND, text=message)

    @classmethod
    def missing_account(cls) -> "ToolResult":
        return cls(kind=ToolResultKind.MISSING_ACCOUNT, text=MISSING_ACCOUNT_MESSAGE)

    @classmethod
    def error(cls, action: str, exc: BaseException) -> "ToolResult":
        """Describe a failure as ``Error <action>: <exception message>``."""
        reason = str(exc) or exc.__class__.__name__
        return cls(kind=ToolResultKind.ERROR, text=f"Error {action}: {reason}")

    @property
    def is_error(self) -> bool:
        return self.kind == ToolResultKind.ERROR

    def to_response(self) -> ToolResponse:
        """Wrap the result in the single-text-block envelope."""
        return ToolResponse(content=[TextContent(text=self.text)])

"""Data contracts shared by the classification and dispatch pipeline.

Architectural role:
    Defines the verdict produced by `fileai.multimodal.classifier`, the
    request/response shapes exchanged with the gateway client, and the final
    result surfaced to the CLI.

Control-flow interaction:
    `engine.Dispatcher.analyze` maps a `ClassificationVerdict` to a payload
    path, builds an `AnalysisRequest` via `fileai.llm.service`, and wraps the
    gateway text in an `AnalysisResult`.

Determinism:
    All types are immutable value objects. Nothing here performs I/O.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class ClassificationVerdict(Enum):
    """Content kind decided once per file."""

    TEXT = "text"
    IMAGE = "image"
    UNKNOWN = "unknown"


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class DispatchState(Enum):
    """Dispatcher lifecycle; `SUCCEEDED` and `FAILED` are terminal."""

    START = "start"
    CLASSIFIED = "classified"
    PAYLOAD_READY = "payload_ready"
    GATEWAY_INVOKED = "gateway_invoked"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class ConversationMessage:
    """One conversation turn.

    When `image_url` is set the message is rendered as a content-parts list
    (text part, then `image_url` part) so vision models receive the image
    itself rather than its encoding as text.
    """

    role: Role
    content: str
    image_url: str | None = None

    def to_dict(self) -> dict:
        role = Role(self.role).value
        if self.image_url is None:
            return {"role": role, "content": self.content}
        return {
            "role": role,
            "content": [
                {"type": "text", "text": self.content},
                {"type": "image_url", "image_url": {"url": self.image_url}},
            ],
        }


@dataclass(frozen=True)
class AnalysisRequest:
    """One chat-completions request.

    Attributes:
        model: Model identifier forwarded verbatim.
        messages: Ordered conversation; order is preserved on the wire.
        max_tokens: Optional completion cap, omitted from the payload when `None`.

    Raises:
        ValueError: If `messages` is empty.
    """

    model: str
    messages: Tuple[ConversationMessage, ...]
    max_tokens: int | None = None

    def __post_init__(self):
        # Accept any iterable but store a tuple so the request stays immutable.
        object.__setattr__(self, "messages", tuple(self.messages))
        if not self.messages:
            raise ValueError("AnalysisRequest requires at least one message")

    def to_payload(self) -> dict:
        payload = {
            "model": self.model,
            "messages": [message.to_dict() for message in self.messages],
        }
        if self.max_tokens is not None:
            payload["max_tokens"] = self.max_tokens
        return payload


@dataclass(frozen=True)
class AnalysisResult:
    """Externally visible outcome of a successful analysis."""

    source_path: str
    summary_or_description: str
    verdict: ClassificationVerdict

    def to_envelope(self) -> dict:
        return {
            "filename": self.source_path,
            "description": self.summary_or_description,
        }

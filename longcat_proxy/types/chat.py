"""Types for the OpenAI-compatible chat surface exposed by the gateway.

Only the subset of the OpenAI chat completion schema the gateway reads or
writes is modelled here.
"""

from typing_extensions import TypedDict


class ContentPart(TypedDict, total=False):
    """A content part for multi-modal messages (OpenAI format).

    Attributes:
        type: Type of content part ("text", "image_url", ...).
        text: Text content (for "text" type).
    """
    type: str
    text: str | None


class ChatMessage(TypedDict, total=False):
    """A message in an incoming chat request.

    Attributes:
        role: Role of the message sender ("user", "assistant", "system").
        content: Either a plain string or a list of ContentPart.
    """
    role: str
    content: str | list[ContentPart] | None


class Delta(TypedDict, total=False):
    """A streamed delta of a choice (OpenAI format).

    Attributes:
        role: Role indicator, only set on the first chunk.
        content: Incremental answer text.
        reasoning_content: Incremental reasoning text, including formatted
            search blocks.
    """
    role: str
    content: str
    reasoning_content: str


class StreamChoice(TypedDict):
    index: int
    delta: Delta
    finish_reason: str | None


class ChatCompletionChunk(TypedDict):
    """A single ``chat.completion.chunk`` streamed to the client."""
    id: str
    object: str
    created: int
    model: str
    choices: list[StreamChoice]


class CompletionMessage(TypedDict, total=False):
    role: str
    content: str
    reasoning_content: str


class CompletionChoice(TypedDict):
    index: int
    message: CompletionMessage
    finish_reason: str | None


class ChatCompletion(TypedDict):
    """A non-streaming ``chat.completion`` response."""
    id: str
    object: str
    created: int
    model: str
    choices: list[CompletionChoice]


class ModelCard(TypedDict):
    id: str
    object: str
    created: int
    owned_by: str


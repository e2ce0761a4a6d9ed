"""Type definitions for the gateway's inbound and upstream protocols."""

from .chat import (
    ChatCompletion,
    ChatCompletionChunk,
    ChatMessage,
    CompletionChoice,
    CompletionMessage,
    ContentPart,
    Delta,
    ModelCard,
    StreamChoice,
)
from .longcat import (
    EVENT_CONTENT,
    EVENT_FINISH,
    EVENT_OTHER,
    EVENT_SEARCH,
    EVENT_THINK,
    STATUS_FINISHED,
    STATUS_LOADING,
    SearchResult,
    UpstreamEvent,
    UpstreamMessage,
    UpstreamPayload,
)

__all__ = [
    "ChatCompletion",
    "ChatCompletionChunk",
    "ChatMessage",
    "CompletionChoice",
    "CompletionMessage",
    "ContentPart",
    "Delta",
    "ModelCard",
    "StreamChoice",
    "EVENT_CONTENT",
    "EVENT_FINISH",
    "EVENT_OTHER",
    "EVENT_SEARCH",
    "EVENT_THINK",
    "STATUS_FINISHED",
    "STATUS_LOADING",
    "SearchResult",
    "UpstreamEvent",
    "UpstreamMessage",
    "UpstreamPayload",
]

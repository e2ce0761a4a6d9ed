"""Types for the LongCat upstream protocol.

The LongCat chat backend streams ``data:`` lines, each holding a JSON record
with an ``event`` object:

    data: {"event": {"type": "think", "content": "Let me"}}
    data: {"event": {"type": "think", "content": "Let me check"}}
    data: {"event": {"type": "search", "content": {"query": "weather"}}}
    data: {"event": {"type": "content", "content": "It is"}}
    data: {"event": {"type": "content", "content": "It is sunny."}}
    data: {"event": {"type": "finish"}}

Text events are cumulative: every ``content``/``think`` value repeats the full
text generated so far on that channel.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from typing_extensions import TypedDict


EVENT_CONTENT = "content"
EVENT_THINK = "think"
EVENT_SEARCH = "search"
EVENT_FINISH = "finish"
EVENT_OTHER = "other"

KNOWN_EVENT_KINDS = frozenset({EVENT_CONTENT, EVENT_THINK, EVENT_SEARCH, EVENT_FINISH})

STATUS_FINISHED = "FINISHED"
STATUS_LOADING = "LOADING"


@dataclass(frozen=True)
class UpstreamEvent:
    """A single decoded upstream event.

    Attributes:
        kind: One of ``content``, ``think``, ``search``, ``finish`` or ``other``.
        content: The raw ``content`` field. A cumulative string for text
            events, a mapping for search events, ``None`` for finish.
        raw_type: The ``type`` value as sent by upstream (kept for logging
            when ``kind`` is ``other``).
    """

    kind: str
    content: Any = None
    raw_type: Optional[str] = None

    @classmethod
    def from_record(cls, event: Mapping[str, Any]) -> "UpstreamEvent":
        raw_type = event.get("type")
        if isinstance(raw_type, str) and raw_type in KNOWN_EVENT_KINDS:
            kind = raw_type
        else:
            kind = EVENT_OTHER
        return cls(
            kind=kind,
            content=event.get("content"),
            raw_type=raw_type if isinstance(raw_type, str) else None,
        )


class SearchResult(TypedDict, total=False):
    """One entry of a search event's ``resultList``."""
    title: str
    url: str
    snippet: str


class UserMessageEvent(TypedDict):
    type: str
    content: str
    status: str


class UpstreamMessage(TypedDict, total=False):
    """A message entry in the upstream request payload."""
    role: str
    content: str
    events: list[UserMessageEvent]
    chatStatus: str
    messageId: int
    idType: str


class UpstreamPayload(TypedDict):
    """Request body sent to the LongCat chat-completion endpoint."""
    content: str
    agentId: str
    messages: list[UpstreamMessage]
    reasonEnabled: int
    searchEnabled: int
    regenerate: int

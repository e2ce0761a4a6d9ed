"""Map LongCat upstream events onto OpenAI chat-completion deltas.

Answer and reasoning text arrive as cumulative snapshots and go through the
delta tracker. Search payloads have no prefix relationship between
successive events, so they are rendered to text and appended to the
reasoning channel as whole blocks.
"""

import enum
import logging
from typing import Any, Mapping, Optional, Union

from ..types.chat import Delta
from ..types.longcat import (
    EVENT_CONTENT,
    EVENT_FINISH,
    EVENT_SEARCH,
    EVENT_THINK,
    UpstreamEvent,
)
from .delta import CHANNEL_CONTENT, CHANNEL_REASONING, ChannelState

logger = logging.getLogger("longcat-proxy")

MAX_SEARCH_RESULTS = 5


class Signal(enum.Enum):
    FINISH = "finish"


FINISH = Signal.FINISH

Translation = Optional[Union[Delta, Signal]]


def format_search_block(payload: Any) -> str:
    """Render a search payload as markdown for the reasoning channel."""
    if not isinstance(payload, Mapping) or not payload:
        return ""

    query = payload.get("query")
    if query:
        return f"\n🔍 **Searching:** {query}\n\n"

    results = payload.get("resultList")
    if not isinstance(results, list):
        return ""

    entries = [item for item in results if isinstance(item, Mapping)]
    lines: list[str] = []
    for index, item in enumerate(entries[:MAX_SEARCH_RESULTS], start=1):
        url = item.get("url") or ""
        title = item.get("title") or url
        lines.append(f"> {index}. [{title}]({url})\n")
        snippet = item.get("snippet")
        if snippet:
            lines.append(f">    {snippet}\n")
    if not lines:
        return ""
    lines.append("\n---\n")
    return "".join(lines)


def translate_event(event: UpstreamEvent, state: ChannelState) -> Translation:
    """Translate one upstream event.

    Returns a delta to emit, ``FINISH`` when the upstream signalled the end
    of the response, or ``None`` when there is nothing to send.
    """
    if event.kind == EVENT_CONTENT:
        if not isinstance(event.content, str):
            return None
        delta = state.advance(CHANNEL_CONTENT, event.content)
        return {"content": delta} if delta else None

    if event.kind == EVENT_THINK:
        if not isinstance(event.content, str):
            return None
        delta = state.advance(CHANNEL_REASONING, event.content)
        return {"reasoning_content": delta} if delta else None

    if event.kind == EVENT_SEARCH:
        block = format_search_block(event.content)
        if not block:
            return None
        logger.debug("Forwarding search event (%d chars)", len(block))
        return {"reasoning_content": block}

    if event.kind == EVENT_FINISH:
        return FINISH

    logger.debug("Ignoring upstream event of type %r", event.raw_type)
    return None

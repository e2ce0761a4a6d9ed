"""SSE (Server-Sent Events) framing for the LongCat upstream and the client.

Upstream frames are decoded line by line: anything that is not a ``data:``
line is a keep-alive or comment and is dropped, and a line whose JSON does
not parse is skipped without disturbing the rest of the stream.
"""

import codecs
import json
import logging
from typing import Any, AsyncIterator, Mapping, Optional

from ..types.longcat import UpstreamEvent

logger = logging.getLogger("longcat-proxy")

DATA_PREFIX = "data:"
DONE_MARKER = "[DONE]"
DONE_EVENT = b"data: [DONE]\n\n"


class FrameParser:
    """Incremental decoder turning raw upstream bytes into UpstreamEvents.

    State is only the carry-over buffer (plus the UTF-8 decoder's pending
    bytes), so ``feed`` can be called with arbitrarily sized chunks.
    """

    def __init__(self) -> None:
        self._buffer = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self.skipped_lines = 0

    def feed(self, chunk: bytes) -> list[UpstreamEvent]:
        if not chunk:
            return []
        self._buffer += self._decoder.decode(chunk)
        lines = self._buffer.split("\n")
        self._buffer = lines.pop()
        events: list[UpstreamEvent] = []
        for line in lines:
            event = self._parse_line(line)
            if event is not None:
                events.append(event)
        return events

    def flush(self) -> list[UpstreamEvent]:
        """Parse whatever is left once the connection hit EOF."""
        leftover = self._buffer + self._decoder.decode(b"", final=True)
        self._buffer = ""
        if not leftover.strip():
            return []
        event = self._parse_line(leftover)
        return [event] if event is not None else []

    def _parse_line(self, line: str) -> Optional[UpstreamEvent]:
        line = line.strip()
        if not line.startswith(DATA_PREFIX):
            return None
        data_str = line[len(DATA_PREFIX):].strip()
        if not data_str:
            return None
        try:
            record = json.loads(data_str)
        except json.JSONDecodeError:
            self.skipped_lines += 1
            logger.debug("Skipping malformed upstream line: %s", data_str[:50])
            return None
        if not isinstance(record, Mapping):
            return None
        event = record.get("event")
        if not isinstance(event, Mapping):
            return None
        return UpstreamEvent.from_record(event)


async def iter_upstream_events(
    byte_stream: AsyncIterator[bytes],
) -> AsyncIterator[UpstreamEvent]:
    """Lazily yield UpstreamEvents from a live byte stream.

    Each byte chunk is fully parsed before the next one is pulled. The
    sequence is finite per connection and cannot be restarted.
    """
    parser = FrameParser()
    async for chunk in byte_stream:
        for event in parser.feed(chunk):
            yield event
    for event in parser.flush():
        yield event


def encode_sse(payload: Mapping[str, Any]) -> bytes:
    """Serialize one outgoing chunk as an SSE ``data:`` event."""
    data = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    return f"data: {data}\n\n".encode("utf-8")

"""Output framing: turn upstream events into an OpenAI chat-completion stream.

Emitted sequence for a completed response:

    data: {"choices":[{"delta":{"role":"assistant","content":""},...}]}
    data: {"choices":[{"delta":{"reasoning_content":"..."},...}]}
    data: {"choices":[{"delta":{"content":"..."},...}]}
    data: {"choices":[{"delta":{},"finish_reason":"stop",...}]}
    data: [DONE]

If the upstream fails or closes before ``finish`` the stream simply ends
after the last delta; no synthetic finish chunk is produced.
"""

import enum
import logging
import time
import uuid
from typing import AsyncIterator, Optional

from ..types.chat import ChatCompletion, ChatCompletionChunk, CompletionMessage, Delta
from ..types.longcat import UpstreamEvent
from .delta import ChannelState
from .multiplexer import FINISH, translate_event
from .sse import DONE_EVENT, encode_sse

logger = logging.getLogger("longcat-proxy")

FINISH_REASON_STOP = "stop"


class StreamState(enum.Enum):
    START = "start"
    STREAMING = "streaming"
    FINISHED = "finished"
    ABORTED = "aborted"


def generate_completion_id() -> str:
    return f"chatcmpl-{uuid.uuid4().hex}"


async def _close_iterator(events: AsyncIterator[UpstreamEvent]) -> None:
    aclose = getattr(events, "aclose", None)
    if aclose is not None:
        await aclose()


class ChatCompletionStreamFramer:
    """Frames one response stream.

    A framer instance is single-use: it owns the ChannelState of the
    response and walks ``START -> STREAMING -> FINISHED | ABORTED`` exactly
    once.
    """

    def __init__(self, completion_id: str, model: str) -> None:
        self.completion_id = completion_id
        self.model = model
        self.channels = ChannelState()
        self.state = StreamState.START
        self.deltas_sent = 0

    def build_chunk(
        self, delta: Delta, finish_reason: Optional[str] = None
    ) -> ChatCompletionChunk:
        return {
            "id": self.completion_id,
            "object": "chat.completion.chunk",
            "created": int(time.time()),
            "model": self.model,
            "choices": [
                {"index": 0, "delta": delta, "finish_reason": finish_reason}
            ],
        }

    async def adapt_stream(
        self, events: AsyncIterator[UpstreamEvent]
    ) -> AsyncIterator[bytes]:
        """Consume upstream events and yield SSE-encoded chunks.

        Errors raised while pulling ``events`` end the stream quietly;
        cancellation propagates after the upstream iterator is closed.
        """
        if self.state is not StreamState.START:
            raise RuntimeError("ChatCompletionStreamFramer can only be used once")

        self.state = StreamState.STREAMING
        yield encode_sse(self.build_chunk({"role": "assistant", "content": ""}))
        logger.debug("Stream %s started", self.completion_id)

        try:
            async for event in events:
                translation = translate_event(event, self.channels)
                if translation is None:
                    continue
                if translation is FINISH:
                    self.state = StreamState.FINISHED
                    logger.info(
                        "Stream %s finished after %d deltas",
                        self.completion_id,
                        self.deltas_sent,
                    )
                    yield encode_sse(self.build_chunk({}, FINISH_REASON_STOP))
                    yield DONE_EVENT
                    return
                self.deltas_sent += 1
                yield encode_sse(self.build_chunk(translation))
            logger.warning(
                "Upstream closed stream %s without a finish event",
                self.completion_id,
            )
        except Exception as exc:
            logger.error(
                "Error reading upstream for stream %s: %s (type: %s)",
                self.completion_id,
                exc,
                exc.__class__.__name__,
            )
        finally:
            if self.state is StreamState.STREAMING:
                self.state = StreamState.ABORTED
            await _close_iterator(events)
            logger.debug("Stream %s closed (%s)", self.completion_id, self.state.value)


async def collect_completion(
    events: AsyncIterator[UpstreamEvent],
    completion_id: str,
    model: str,
) -> ChatCompletion:
    """Accumulate a whole response for non-streaming requests.

    Stops at ``finish`` or when the upstream closes; read errors propagate.
    """
    channels = ChannelState()
    content_parts: list[str] = []
    reasoning_parts: list[str] = []
    finished = False
    try:
        async for event in events:
            translation = translate_event(event, channels)
            if translation is None:
                continue
            if translation is FINISH:
                finished = True
                break
            if "content" in translation:
                content_parts.append(translation["content"])
            if "reasoning_content" in translation:
                reasoning_parts.append(translation["reasoning_content"])
    finally:
        await _close_iterator(events)

    if not finished:
        logger.warning("Upstream closed completion %s without a finish event", completion_id)

    message: CompletionMessage = {"role": "assistant", "content": "".join(content_parts)}
    reasoning = "".join(reasoning_parts)
    if reasoning:
        message["reasoning_content"] = reasoning
    return {
        "id": completion_id,
        "object": "chat.completion",
        "created": int(time.time()),
        "model": model,
        "choices": [
            {"index": 0, "message": message, "finish_reason": FINISH_REASON_STOP}
        ],
    }

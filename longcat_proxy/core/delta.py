"""Reconstruct incremental deltas from cumulative upstream snapshots."""

import logging
from dataclasses import dataclass
from typing import NamedTuple

logger = logging.getLogger("longcat-proxy")

CHANNEL_CONTENT = "content"
CHANNEL_REASONING = "reasoning"


class DeltaResult(NamedTuple):
    delta: str
    last_seen: str


def compute_delta(last_seen: str, cumulative: str) -> DeltaResult:
    """Return the text to emit for ``cumulative`` and the new last-seen value.

    - A snapshot shorter than ``last_seen`` means upstream restarted the
      channel; diffing starts again from an empty string.
    - A snapshot that extends ``last_seen`` yields the appended suffix.
    - A snapshot with no common prefix is emitted whole. Clients may see
      duplicated text in that case.

    ``last_seen`` only advances when the delta is non-empty.
    """
    if len(cumulative) < len(last_seen):
        logger.debug(
            "Cumulative text shrank (%d < %d), resetting channel",
            len(cumulative),
            len(last_seen),
        )
        last_seen = ""

    if cumulative.startswith(last_seen):
        delta = cumulative[len(last_seen):]
    else:
        logger.debug("Cumulative text prefix mismatch, emitting full snapshot")
        delta = cumulative

    if delta:
        return DeltaResult(delta, cumulative)
    return DeltaResult("", last_seen)


@dataclass
class ChannelState:
    """Last-seen cumulative text per channel for a single response stream."""

    content: str = ""
    reasoning: str = ""

    def advance(self, channel: str, cumulative: str) -> str:
        if channel == CHANNEL_CONTENT:
            result = compute_delta(self.content, cumulative)
            self.content = result.last_seen
        elif channel == CHANNEL_REASONING:
            result = compute_delta(self.reasoning, cumulative)
            self.reasoning = result.last_seen
        else:
            raise ValueError(f"Unknown channel: {channel}")
        return result.delta

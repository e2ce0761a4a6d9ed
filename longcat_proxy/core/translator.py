"""Translate OpenAI-style chat requests into LongCat upstream payloads."""

import logging
import random
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from ..types.longcat import STATUS_FINISHED, STATUS_LOADING, UpstreamPayload

logger = logging.getLogger("longcat-proxy")

DEFAULT_MODEL = "longcat-flash"
AGENT_ID = "1"

_REASONING_MARKERS = ("think", "reason")
_SEARCH_MARKERS = ("search", "online")

_MESSAGE_ID_MIN = 10_000_000
_MESSAGE_ID_MAX = 99_999_999


@dataclass(frozen=True)
class FeatureFlags:
    reasoning: bool = False
    search: bool = False


def derive_feature_flags(model_name: str) -> FeatureFlags:
    """Derive upstream feature toggles from substrings of the model name."""
    lower = (model_name or "").lower()
    return FeatureFlags(
        reasoning=any(marker in lower for marker in _REASONING_MARKERS),
        search=any(marker in lower for marker in _SEARCH_MARKERS),
    )


def resolve_model_name(payload: Mapping[str, Any]) -> str:
    model = payload.get("model")
    if isinstance(model, str) and model.strip():
        return model.strip()
    return DEFAULT_MODEL


def _content_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        texts = [
            part.get("text") or ""
            for part in content
            if isinstance(part, Mapping) and part.get("type") == "text"
        ]
        return "\n".join(text for text in texts if text)
    return ""


def extract_last_message_content(messages: Any) -> str:
    """Return the text of the last message, or an empty string."""
    if not isinstance(messages, Sequence) or isinstance(messages, (str, bytes)):
        return ""
    if not messages:
        return ""
    last = messages[-1]
    if not isinstance(last, Mapping):
        return ""
    return _content_text(last.get("content"))


def generate_message_ids(rng: random.Random | None = None) -> tuple[int, int]:
    """Two distinct 8-digit identifiers for the user/assistant entries."""
    rng = rng or random.SystemRandom()
    user_id, assistant_id = rng.sample(range(_MESSAGE_ID_MIN, _MESSAGE_ID_MAX + 1), 2)
    return user_id, assistant_id


def translate_request(
    payload: Mapping[str, Any], rng: random.Random | None = None
) -> UpstreamPayload:
    """Build the LongCat request body for an incoming chat request.

    Only the last message is forwarded; the upstream keeps no multi-turn
    context. The placeholder assistant entry in LOADING state is what makes
    the upstream start streaming.
    """
    model = resolve_model_name(payload)
    flags = derive_feature_flags(model)
    content = extract_last_message_content(payload.get("messages"))
    user_id, assistant_id = generate_message_ids(rng)

    logger.debug(
        "Translated request for %s (reasoning=%s, search=%s, %d chars)",
        model,
        flags.reasoning,
        flags.search,
        len(content),
    )
    return {
        "content": content,
        "agentId": AGENT_ID,
        "messages": [
            {
                "role": "user",
                "events": [
                    {"type": "userMsg", "content": content, "status": STATUS_FINISHED}
                ],
                "chatStatus": STATUS_FINISHED,
                "messageId": user_id,
                "idType": "custom",
            },
            {
                "role": "assistant",
                "content": "",
                "events": [],
                "chatStatus": STATUS_LOADING,
                "messageId": assistant_id,
                "idType": "custom",
            },
        ],
        "reasonEnabled": 1 if flags.reasoning else 0,
        "searchEnabled": 1 if flags.search else 0,
        "regenerate": 0,
    }

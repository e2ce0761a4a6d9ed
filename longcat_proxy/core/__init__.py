"""Core module initialization."""

from .backend import build_upstream_headers, format_httpx_error, safe_headers_for_log
from .delta import ChannelState, DeltaResult, compute_delta
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    InvalidRequestError,
    ProxyError,
    StreamReadError,
    UpstreamRejectedError,
)
from .framer import ChatCompletionStreamFramer, StreamState, collect_completion
from .gateway import LongcatGateway
from .multiplexer import FINISH, format_search_block, translate_event
from .sse import FrameParser, encode_sse, iter_upstream_events
from .translator import FeatureFlags, derive_feature_flags, translate_request

__all__ = [
    "AuthenticationError",
    "ChannelState",
    "ChatCompletionStreamFramer",
    "ConfigurationError",
    "DeltaResult",
    "FINISH",
    "FeatureFlags",
    "FrameParser",
    "InvalidRequestError",
    "LongcatGateway",
    "ProxyError",
    "StreamReadError",
    "StreamState",
    "UpstreamRejectedError",
    "build_upstream_headers",
    "collect_completion",
    "compute_delta",
    "derive_feature_flags",
    "encode_sse",
    "format_httpx_error",
    "format_search_block",
    "iter_upstream_events",
    "safe_headers_for_log",
    "translate_event",
    "translate_request",
]

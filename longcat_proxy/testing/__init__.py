"""Testing utilities for in-process gateway simulations."""

from .fake_upstream import FakeEventStream, FakeLongcatUpstream, UpstreamResponse
from .proxy_harness import TEST_UPSTREAM_URL, GatewayHarness
from .response_builders import (
    build_chat_request,
    build_search_results,
    content_event,
    cumulative_events,
    encode_upstream_event,
    finish_event,
    search_query_event,
    search_results_event,
    think_event,
)

__all__ = [
    # Core simulation classes
    "FakeEventStream",
    "FakeLongcatUpstream",
    "GatewayHarness",
    "TEST_UPSTREAM_URL",
    "UpstreamResponse",
    # Builders
    "build_chat_request",
    "build_search_results",
    "content_event",
    "cumulative_events",
    "encode_upstream_event",
    "finish_event",
    "search_query_event",
    "search_results_event",
    "think_event",
]

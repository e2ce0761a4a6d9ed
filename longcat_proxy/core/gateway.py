"""Forward chat requests to the LongCat upstream and stream the translation back."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any, AsyncIterator, Awaitable, Callable, Mapping, Optional

import httpx
from fastapi import Response
from fastapi.responses import JSONResponse, StreamingResponse

from .backend import (
    build_timeout,
    build_upstream_headers,
    format_httpx_error,
    safe_headers_for_log,
)
from .exceptions import StreamReadError, UpstreamRejectedError
from .framer import ChatCompletionStreamFramer, collect_completion, generate_completion_id
from .responses import CORS_HEADERS, STREAM_HEADERS
from .sse import iter_upstream_events
from .translator import resolve_model_name, translate_request
from .upstream_transport import get_upstream_transport

if TYPE_CHECKING:
    from ..config_loader import GatewaySettings

logger = logging.getLogger("longcat-proxy")

DisconnectChecker = Callable[[], Awaitable[bool]]


class UpstreamStream:
    """An open upstream response together with the client that owns it.

    ``close`` is idempotent and must run on every exit path.
    """

    def __init__(self, url: str, client: httpx.AsyncClient, response: httpx.Response) -> None:
        self.url = url
        self.client = client
        self.response = response
        self.closed = False

    async def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        logger.debug(f"Closing upstream stream for {self.url}")
        try:
            await self.response.aclose()
        finally:
            await self.client.aclose()

    async def iter_bytes(
        self, disconnect_checker: Optional[DisconnectChecker] = None
    ) -> AsyncIterator[bytes]:
        """Pull response chunks, wrapping transport failures as StreamReadError."""
        stream = self.response.aiter_bytes()
        while True:
            if disconnect_checker and await disconnect_checker():
                logger.info(f"Client disconnected, abandoning upstream read from {self.url}")
                return
            try:
                chunk = await stream.__anext__()
            except StopAsyncIteration:
                return
            except httpx.HTTPError as exc:
                raise StreamReadError(format_httpx_error(exc, self.url)) from exc
            if chunk:
                yield chunk


class LongcatGateway:
    """Translates one OpenAI chat request into one LongCat upstream call."""

    def __init__(self, settings: GatewaySettings) -> None:
        self.settings = settings
        self.headers = build_upstream_headers(settings)

    async def open_stream(self, body: bytes) -> UpstreamStream:
        """POST ``body`` upstream and return the open, successful response.

        Raises:
            UpstreamRejectedError: upstream answered with a non-2xx status.
        """
        url = self.settings.upstream_url
        client = httpx.AsyncClient(
            timeout=build_timeout(self.settings),
            transport=get_upstream_transport(url),
        )
        try:
            request = client.build_request("POST", url, headers=self.headers, content=body)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Upstream request headers: %s", safe_headers_for_log(request.headers))
            response = await client.send(request, stream=True)
        except Exception as exc:
            logger.error(
                f"Failed to send upstream request to {url}: "
                f"{format_httpx_error(exc, url, self.settings.timeout)}"
            )
            await client.aclose()
            raise

        upstream = UpstreamStream(url, client, response)
        if not response.is_success:
            try:
                data = await response.aread()
            finally:
                await upstream.close()
            logger.warning(
                f"Upstream rejected request: {response.status_code} - "
                f"{data[:100].decode('utf-8', errors='replace')}"
            )
            raise UpstreamRejectedError(
                response.status_code,
                f"Upstream Error: {response.reason_phrase}",
                body=data,
            )
        return upstream

    async def forward_chat(
        self,
        payload: Mapping[str, Any],
        is_stream: bool,
        disconnect_checker: Optional[DisconnectChecker] = None,
    ) -> Response:
        model = resolve_model_name(payload)
        upstream_payload = translate_request(payload)
        body = json.dumps(upstream_payload, ensure_ascii=False).encode("utf-8")
        completion_id = generate_completion_id()
        logger.info(f"Model: {model} | Stream: {is_stream} | Id: {completion_id}")

        upstream = await self.open_stream(body)

        if not is_stream:
            try:
                completion = await collect_completion(
                    iter_upstream_events(upstream.iter_bytes()), completion_id, model
                )
            finally:
                await upstream.close()
            return JSONResponse(completion, headers=CORS_HEADERS)

        return StreamingResponse(
            self._stream(upstream, completion_id, model, disconnect_checker),
            media_type="text/event-stream",
            headers=STREAM_HEADERS,
        )

    async def _stream(
        self,
        upstream: UpstreamStream,
        completion_id: str,
        model: str,
        disconnect_checker: Optional[DisconnectChecker],
    ) -> AsyncIterator[bytes]:
        framer = ChatCompletionStreamFramer(completion_id, model)
        events = iter_upstream_events(upstream.iter_bytes(disconnect_checker))
        try:
            async for chunk in framer.adapt_stream(events):
                yield chunk
        except asyncio.CancelledError:
            logger.info(f"Stream {completion_id} cancelled by client")
            raise
        finally:
            await upstream.close()
            logger.info(f"Stream {completion_id} closed ({framer.state.value})")

import logging
from typing import Awaitable, Callable, Mapping, Optional, Sequence

import anyio
from starlette.background import BackgroundTask
from starlette.datastructures import MutableHeaders
from starlette.responses import PlainTextResponse, Response
from starlette.types import Receive, Scope, Send

from practice_api.appstatus import AppStatus
from practice_api.emitter import SessionState, StreamSession
from practice_api.event import Chunk, encode_ndjson, encode_raw_sse, encode_sse

logger = logging.getLogger(__name__)

Write = Callable[[bytes], Awaitable[None]]


def supports_streaming(scope: Scope) -> bool:
    """Only HTTP scopes carry an incremental response body."""
    return scope["type"] == "http"


class TokenStreamResponse(Response):
    """
    Streaming response that writes the output of one :class:`StreamSession`.

    Every frame is handed to the server as its own body message, so nothing is
    held back between ticks. A client disconnect or a server shutdown fires the
    session's cancellation signal; the session then stops without emitting
    anything further.
    """

    stream_name = "token"

    def __init__(
        self,
        tokens: Sequence[str],
        interval: float,
        status_code: int = 200,
        headers: Optional[Mapping[str, str]] = None,
        media_type: Optional[str] = None,
        background: Optional[BackgroundTask] = None,
    ) -> None:
        self.session = StreamSession(tokens, interval)
        self.status_code = status_code
        self.media_type = self.media_type if media_type is None else media_type
        self.background = background

        _headers = MutableHeaders()
        if headers is not None:
            _headers.update(headers)
        _headers.setdefault("Cache-Control", "no-cache")
        _headers["Connection"] = "keep-alive"
        # nginx would otherwise buffer the whole response
        _headers["X-Accel-Buffering"] = "no"
        self.init_headers(_headers)

    def enable_compression(self, force: bool = False) -> None:
        raise NotImplementedError("Compression is not supported for token streams.")

    async def _run_session(self, write: Write) -> SessionState:
        raise NotImplementedError()  # pragma: no cover

    async def _stream_response(self, send: Send) -> None:
        await send(
            {
                "type": "http.response.start",
                "status": self.status_code,
                "headers": self.raw_headers,
            }
        )

        async def write(body: bytes) -> None:
            logger.debug("chunk: %s", body)
            await send({"type": "http.response.body", "body": body, "more_body": True})

        state = await self._run_session(write)
        if state is SessionState.CANCELLED:
            logger.info(
                "Client closed %s connection after %d tokens",
                self.stream_name,
                self.session.index,
            )
        await send({"type": "http.response.body", "body": b"", "more_body": False})

    async def _listen_for_disconnect(self, receive: Receive) -> None:
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                logger.debug("Got event: http.disconnect. Stop streaming.")
                break
        self.session.cancel()

    async def _listen_for_exit_signal(self) -> None:
        await AppStatus.listen_for_exit_signal()
        logger.debug("Server is shutting down. Stop streaming.")
        self.session.cancel()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if not supports_streaming(scope):
            logger.warning(
                "Streaming unsupported for %s scope at %s",
                scope["type"],
                scope.get("path"),
            )
            response = PlainTextResponse("Streaming unsupported", status_code=500)
            await response(scope, receive, send)
            return

        async with anyio.create_task_group() as task_group:
            # https://trio.readthedocs.io/en/latest/reference-core.html#custom-supervisors
            async def cancel_on_finish(coro: Callable[[], Awaitable[None]]) -> None:
                await coro()
                task_group.cancel_scope.cancel()

            task_group.start_soon(cancel_on_finish, lambda: self._stream_response(send))
            task_group.start_soon(self._listen_for_exit_signal)
            task_group.start_soon(self._listen_for_disconnect, receive)

        if self.background is not None:
            await self.background()


class SSEResponse(TokenStreamResponse):
    """``{content, finish}`` chunks as ``data: <json>`` events."""

    media_type = "text/event-stream"
    stream_name = "SSE"

    async def _run_session(self, write: Write) -> SessionState:
        async def sink(chunk: Chunk) -> None:
            await write(encode_sse(chunk))

        return await self.session.run(sink)


class NDJSONResponse(TokenStreamResponse):
    """``{content, finish}`` chunks, one JSON document per line."""

    media_type = "application/x-ndjson"
    stream_name = "NDJSON"

    async def _run_session(self, write: Write) -> SessionState:
        async def sink(chunk: Chunk) -> None:
            await write(encode_ndjson(chunk))

        return await self.session.run(sink)


class LoopingSSEResponse(TokenStreamResponse):
    """Raw words as ``data:`` events, cycling forever until the client leaves."""

    media_type = "text/event-stream"
    stream_name = "loop"

    async def _run_session(self, write: Write) -> SessionState:
        async def sink(word: str) -> None:
            await write(encode_raw_sse(word))

        return await self.session.run_forever(sink)

import contextlib
import logging
from datetime import datetime
from typing import AsyncIterator, Optional

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse
from starlette.routing import Route

from practice_api.cors import CORSPolicyMiddleware
from practice_api.stream import LoopingSSEResponse, NDJSONResponse, SSEResponse
from practice_api.tokens import TokenSource

logger = logging.getLogger(__name__)

WORD_INTERVAL = 0.1
LOOP_INTERVAL = 0.2

METHODS = ["GET", "OPTIONS"]

html_help = """
    Practice API server is running.<br>
    Try accessing:<br>
    - /stream-sse<br>
    - /stream-ndjson<br>
    - /stream-loop<br>
    - /api/data<br>
    - /health
"""


def rfc3339_now() -> str:
    return datetime.now().astimezone().isoformat(timespec="seconds")


def _tokens(request: Request) -> TokenSource:
    return request.app.state.tokens


async def home(request: Request) -> HTMLResponse:
    return HTMLResponse(html_help)


async def stream_sse(request: Request) -> SSEResponse:
    return SSEResponse(_tokens(request).sse, WORD_INTERVAL)


async def stream_ndjson(request: Request) -> NDJSONResponse:
    return NDJSONResponse(_tokens(request).ndjson, WORD_INTERVAL)


async def stream_loop(request: Request) -> LoopingSSEResponse:
    return LoopingSSEResponse(_tokens(request).loop, LOOP_INTERVAL)


async def standard_data(request: Request) -> JSONResponse:
    """Whole-message snapshot, for clients that do not stream."""
    return JSONResponse(
        {
            "id": "a1b2-c3d4-e5f6",
            "type": "static_response",
            "title": "Complete Static Data",
            "message": _tokens(request).message,
            "author": "Practice API (Python)",
            "metadata": {
                "timestamp": rfc3339_now(),
                "source": "server-generated",
            },
            "payload": [
                {"point": 1, "value": "First item"},
                {"point": 2, "value": "Second item"},
                {"point": 3, "value": "Third item"},
            ],
        }
    )


async def health(request: Request) -> JSONResponse:
    return JSONResponse(
        {
            "status": "OK",
            "service": "LLM Practice API (Python)",
            "time": rfc3339_now(),
        }
    )


routes = [
    Route("/", endpoint=home, methods=METHODS),
    Route("/stream-sse", endpoint=stream_sse, methods=METHODS),
    Route("/stream-ndjson", endpoint=stream_ndjson, methods=METHODS),
    Route("/stream-loop", endpoint=stream_loop, methods=METHODS),
    Route("/api/data", endpoint=standard_data, methods=METHODS),
    Route("/health", endpoint=health, methods=METHODS),
]


def create_app(tokens: Optional[TokenSource] = None, debug: bool = False) -> Starlette:
    """Build the application around one immutable :class:`TokenSource`."""
    tokens = TokenSource.initialize() if tokens is None else tokens

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        logger.info(
            "Serving %d SSE, %d NDJSON and %d loop tokens",
            len(tokens.sse),
            len(tokens.ndjson),
            len(tokens.loop),
        )
        yield
        logger.info("Shutting down")

    app = Starlette(
        debug=debug,
        routes=routes,
        middleware=[Middleware(CORSPolicyMiddleware)],
        lifespan=lifespan,
    )
    app.state.tokens = tokens
    return app

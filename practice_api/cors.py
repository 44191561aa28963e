import logging
from typing import Mapping

from starlette.datastructures import MutableHeaders
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class CORSPolicyMiddleware:
    """Permissive cross-origin policy applied to every HTTP response.

    Unlike ``starlette.middleware.cors.CORSMiddleware`` this answers *every*
    ``OPTIONS`` request itself, with or without preflight headers.
    """

    def __init__(self, app: ASGIApp, headers: Mapping[str, str] = CORS_HEADERS) -> None:
        self.app = app
        self.headers = dict(headers)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        if scope["method"] == "OPTIONS":
            logger.debug("preflight: %s", scope["path"])
            response = Response(status_code=200, headers=self.headers)
            await response(scope, receive, send)
            return

        async def send_with_cors(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                for key, value in self.headers.items():
                    headers[key] = value
            await send(message)

        await self.app(scope, receive, send_with_cors)

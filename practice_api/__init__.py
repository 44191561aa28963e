from practice_api.app import create_app
from practice_api.event import Chunk
from practice_api.emitter import SessionState, StreamSession
from practice_api.stream import LoopingSSEResponse, NDJSONResponse, SSEResponse
from practice_api.tokens import TokenSource

__version__ = "1.0.0"

__all__ = [
    "create_app",
    "Chunk",
    "SessionState",
    "StreamSession",
    "SSEResponse",
    "NDJSONResponse",
    "LoopingSSEResponse",
    "TokenSource",
]

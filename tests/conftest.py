import logging

import httpx
import pytest
from asgi_lifespan import LifespanManager
from starlette.testclient import TestClient

from practice_api import TokenSource, create_app
from practice_api.appstatus import AppStatus

_log = logging.getLogger(__name__)
log_fmt = r"%(asctime)-15s %(levelname)s %(name)s %(funcName)s:%(lineno)d %(message)s"
datefmt = "%Y-%m-%d %H:%M:%S"
logging.basicConfig(format=log_fmt, level=logging.DEBUG, datefmt=datefmt)

logging.getLogger("httpx").setLevel(logging.INFO)
logging.getLogger("httpcore").setLevel(logging.INFO)

# Short paragraphs keep the fixed 100ms/200ms cadences cheap to test.
# SSE and NDJSON share their text so the two streams can be compared.
SSE_TEXT = "Tokens arrive one at a time."
NDJSON_TEXT = SSE_TEXT
LOOP_TEXT = "tick tock clock"


@pytest.fixture
def anyio_backend():
    """Exclude trio from tests"""
    return "asyncio"


@pytest.fixture
def tokens():
    return TokenSource.initialize(
        sse_text=SSE_TEXT, ndjson_text=NDJSON_TEXT, loop_text=LOOP_TEXT
    )


@pytest.fixture
def app(tokens):
    return create_app(tokens)


@pytest.fixture
def reset_appstatus_event():
    # avoid: RuntimeError: <asyncio.locks.Event object at 0x1046a0a30 [unset]> is bound to a different event loop
    AppStatus.reset()
    yield
    AppStatus.reset()


@pytest.fixture
async def httpx_client(reset_appstatus_event, app):
    async with LifespanManager(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(
            transport=transport, base_url="http://localhost:3950"
        ) as client:
            _log.info("Yielding Client")
            yield client


@pytest.fixture
def client(reset_appstatus_event, app):
    with TestClient(app=app, base_url="http://localhost:3950") as client:
        yield client

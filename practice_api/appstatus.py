import logging
from typing import Callable, Optional

import anyio

logger = logging.getLogger(__name__)


class AppStatus:
    """Helper to capture a shutdown signal from Uvicorn so we can end open streams.

    The looping stream never finishes on its own; without this, a pending
    ``/stream-loop`` client would keep the server from shutting down.
    """

    should_exit = False
    should_exit_event: Optional[anyio.Event] = None
    original_handler: Optional[Callable] = None

    @staticmethod
    def handle_exit(*args, **kwargs) -> None:
        logger.debug("AppStatus.handle_exit called")
        AppStatus.should_exit = True
        if AppStatus.should_exit_event is not None:
            AppStatus.should_exit_event.set()
        if AppStatus.original_handler is not None:
            AppStatus.original_handler(*args, **kwargs)

    @staticmethod
    def reset() -> None:
        """Reset state (an event is bound to the loop that created it)."""
        AppStatus.should_exit = False
        AppStatus.should_exit_event = None

    @staticmethod
    async def listen_for_exit_signal() -> None:
        # Check if should_exit was set before anybody started waiting
        if AppStatus.should_exit:
            return

        if AppStatus.should_exit_event is None:
            AppStatus.should_exit_event = anyio.Event()

        # Check if should_exit got set while we set up the event
        if AppStatus.should_exit:
            return

        await AppStatus.should_exit_event.wait()


try:
    from uvicorn.main import Server

    AppStatus.original_handler = Server.handle_exit
    Server.handle_exit = AppStatus.handle_exit  # type: ignore
except ImportError:
    logger.debug(
        "Uvicorn not installed. Ending streams on server termination disabled."
    )

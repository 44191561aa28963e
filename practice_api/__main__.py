import logging

import uvicorn

from practice_api import config
from practice_api.app import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    app = create_app()
    logger.info("Server running at http://localhost:%s", config.PORT)
    # A failed bind is logged to stderr by uvicorn, which then exits with status 1.
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL)


if __name__ == "__main__":
    main()

import os

from starlette.config import Config

# Values in the environment win over the optional .env file.
config = Config(".env" if os.path.isfile(".env") else None)

HOST: str = config("HOST", default="0.0.0.0")
PORT: int = config("PORT", cast=int, default=3950)
LOG_LEVEL: str = config("LOG_LEVEL", default="info")

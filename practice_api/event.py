import json
import re
from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Chunk:
    """
    One unit of streamed output: a piece of text, or the terminal finish marker.
    """

    content: str = ""
    finish: bool = False

    def __post_init__(self) -> None:
        if self.finish and self.content:
            raise ValueError("a finish chunk must not carry content")

    @classmethod
    def token(cls, word: str) -> "Chunk":
        return cls(content=f"{word} ")

    @classmethod
    def final(cls) -> "Chunk":
        return cls(content="", finish=True)

    def as_dict(self) -> Dict[str, Any]:
        return {"content": self.content, "finish": self.finish}

    def to_json(self) -> str:
        return json.dumps(self.as_dict(), ensure_ascii=False, separators=(",", ":"))


_LINE_SEP_EXPR = re.compile(r"\r\n|\r|\n")

# Frames on the wire use a bare "\n" so each event reads `data: <payload>\n\n`.
FRAME_SEPARATOR = "\n"


def data_frame(payload: str) -> bytes:
    """One SSE event; multi-line payloads become several ``data:`` lines."""
    lines = "".join(
        f"data: {line}{FRAME_SEPARATOR}" for line in _LINE_SEP_EXPR.split(payload)
    )
    return f"{lines}{FRAME_SEPARATOR}".encode("utf-8")


def encode_sse(chunk: Chunk) -> bytes:
    return data_frame(chunk.to_json())


def encode_ndjson(chunk: Chunk) -> bytes:
    return f"{chunk.to_json()}\n".encode("utf-8")


def encode_raw_sse(word: str) -> bytes:
    return data_frame(word)

from dataclasses import dataclass
from typing import Tuple

SSE_PARAGRAPH = (
    "Large Language Models, often abbreviated as LLMs, are a type of artificial "
    "intelligence model trained on vast amounts of text data. They are designed to "
    "understand, generate, and respond to human language in a coherent and "
    "contextually relevant manner. This streaming demonstration mimics how an LLM "
    "might deliver its response token by token, providing a more interactive user "
    "experience rather than waiting for the entire output to be generated. Each "
    "word you see is a separate chunk of data sent from the server. This technique "
    "is crucial for applications that require real-time feedback, such as chatbots "
    "and live content generation."
)

NDJSON_PARAGRAPH = (
    "This NDJSON demonstration mimics how Ollama or other LLM APIs send responses "
    "as newline-delimited JSON objects. Each line you see is a chunk of data, "
    "separated by a newline, until the final finish signal is sent. Large Language "
    "Models, often abbreviated as LLMs, are a type of artificial intelligence model "
    "trained on vast amounts of text data. They are designed to understand, "
    "generate, and respond to human language in a coherent and contextually "
    "relevant manner. This streaming demonstration mimics how an LLM might deliver "
    "its response token by token, providing a more interactive user experience "
    "rather than waiting for the entire output to be generated."
)

LOOP_PARAGRAPH = (
    "The quick brown fox jumped over the lazy dog. The sun was shining brightly in "
    "the clear blue sky. A gentle breeze rustled the leaves of the trees as the "
    "birds sang their sweet melodies. In the distance, the sound of children's "
    "laughter echoed through the air."
)


def split_words(text: str) -> Tuple[str, ...]:
    """Split on single spaces, dropping the empty fragments of repeated spaces."""
    return tuple(word for word in text.split(" ") if word)


@dataclass(frozen=True)
class TokenSource:
    """
    The three word sequences served by the streaming endpoints.

    Built once when the application is created and shared read-only by every
    request, so concurrent streams never need a lock.
    """

    sse: Tuple[str, ...]
    ndjson: Tuple[str, ...]
    loop: Tuple[str, ...]

    @classmethod
    def initialize(
        cls,
        sse_text: str = SSE_PARAGRAPH,
        ndjson_text: str = NDJSON_PARAGRAPH,
        loop_text: str = LOOP_PARAGRAPH,
    ) -> "TokenSource":
        return cls(
            sse=split_words(sse_text),
            ndjson=split_words(ndjson_text),
            loop=split_words(loop_text),
        )

    @property
    def message(self) -> str:
        """The SSE paragraph rejoined, as served by the snapshot endpoint."""
        return " ".join(self.sse)

import dataclasses

import pytest

from practice_api.tokens import (
    LOOP_PARAGRAPH,
    NDJSON_PARAGRAPH,
    SSE_PARAGRAPH,
    TokenSource,
    split_words,
)


def test_split_words_keeps_punctuation_attached():
    assert split_words("Hello, world. Bye!") == ("Hello,", "world.", "Bye!")


def test_split_words_drops_empty_fragments():
    assert split_words("  two  spaces ") == ("two", "spaces")


def test_initialize_whenDefaults_thenUsesBuiltinParagraphs():
    tokens = TokenSource.initialize()

    assert " ".join(tokens.sse) == SSE_PARAGRAPH
    assert " ".join(tokens.ndjson) == NDJSON_PARAGRAPH
    assert " ".join(tokens.loop) == LOOP_PARAGRAPH
    assert tokens.sse[0] == "Large"
    assert tokens.loop[-1] == "air."
    assert all(tokens.sse) and all(tokens.ndjson) and all(tokens.loop)


def test_sequences_are_immutable():
    tokens = TokenSource.initialize()

    assert isinstance(tokens.sse, tuple)
    with pytest.raises(dataclasses.FrozenInstanceError):
        tokens.sse = ("other",)  # type: ignore


def test_message_rejoins_sse_tokens():
    tokens = TokenSource.initialize(sse_text="a b c")

    assert tokens.message == "a b c"
    assert tuple(tokens.message.split(" ")) == tokens.sse

import logging

import pytest

from geminibot.chunking import (
    CHUNK_LENGTH,
    CONTINUATION_NOTICE,
    DISCORD_MESSAGE_LIMIT,
    add_continuation_notices,
    enforce_limit,
    prepare_follow_ups,
    split_message,
)


def test_split_message_example() -> None:
    assert split_message("a bb ccc dddd", 10) == ["a bb ccc", "dddd"]


def test_split_message_short_text_is_single_chunk() -> None:
    assert split_message("hello world", 100) == ["hello world"]


def test_split_message_empty_text() -> None:
    assert split_message("", 10) == []


@pytest.mark.parametrize(
    ("text", "max_length"),
    [
        ("the quick brown fox jumps over the lazy dog", 12),
        ("line one\nline two with  double spaces", 9),
        ("word " * 499 + "word", 50),
        ("a b c d e f g", 1),
        ("a" * 10 + " ", 10),
        (" " + "x" * 20, 10),
    ],
)
def test_split_message_bounds_and_reconstructs(text: str, max_length: int) -> None:
    chunks = split_message(text, max_length)

    assert " ".join(chunks) == text
    for chunk in chunks:
        assert len(chunk) <= max_length or " " not in chunk


def test_split_message_keeps_oversized_word_whole() -> None:
    long_word = "x" * 25

    chunks = split_message(f"ab {long_word} cd", 10)

    assert chunks == ["ab", long_word, "cd"]


def test_split_message_oversized_first_word_has_no_empty_chunk() -> None:
    assert split_message("abcdefghijkl mn", 5) == ["abcdefghijkl", "mn"]


def test_continuation_notice_added_to_all_but_last() -> None:
    marked = add_continuation_notices(["one", "two", "three"])

    assert marked == [f"one {CONTINUATION_NOTICE}", f"two {CONTINUATION_NOTICE}", "three"]


def test_continuation_notice_skipped_when_it_would_overflow(caplog) -> None:
    full = "y" * (DISCORD_MESSAGE_LIMIT - 5)

    with caplog.at_level(logging.WARNING, logger="geminibot.chunking"):
        marked = add_continuation_notices([full, "tail"])

    assert marked == [full, "tail"]
    assert "Continuation notice does not fit" in caplog.text


def test_continuation_notice_never_exceeds_limit() -> None:
    chunks = ["z" * length for length in range(1960, 2001, 4)] + ["end"]

    marked = add_continuation_notices(chunks)

    assert all(len(chunk) <= DISCORD_MESSAGE_LIMIT for chunk in marked)


def test_enforce_limit_truncates_with_ellipsis(caplog) -> None:
    text = "q" * (DISCORD_MESSAGE_LIMIT + 10)

    with caplog.at_level(logging.ERROR, logger="geminibot.chunking"):
        result = enforce_limit(text)

    assert len(result) == DISCORD_MESSAGE_LIMIT
    assert result.endswith("...")
    assert "truncating" in caplog.text


def test_enforce_limit_leaves_short_text_alone() -> None:
    assert enforce_limit("short") == "short"


def test_prepare_follow_ups_splits_long_answer() -> None:
    answer = " ".join(["lorem"] * 1000)

    messages = prepare_follow_ups(answer)

    assert len(messages) > 1
    assert all(len(message) <= DISCORD_MESSAGE_LIMIT for message in messages)
    assert not messages[-1].endswith(CONTINUATION_NOTICE)
    rebuilt = " ".join(message.removesuffix(f" {CONTINUATION_NOTICE}") for message in messages)
    assert rebuilt == answer
    assert all(len(split) <= CHUNK_LENGTH for split in split_message(answer, CHUNK_LENGTH))


def test_split_message_keeps_trailing_space() -> None:
    assert split_message("a" * 10 + " ", 10) == ["a" * 10, ""]


def test_prepare_follow_ups_drops_blank_chunks() -> None:
    messages = prepare_follow_ups(" " + "x" * 2000 + "  ")

    assert messages == ["x" * 2000]

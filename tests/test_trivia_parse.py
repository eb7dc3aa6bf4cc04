"""Tests for bridge/commands/parse.py."""

from __future__ import annotations

from trivia_bot.bridge.commands.parse import (
    QuestionAnswer,
    free_text,
    parse_invocation,
    parse_question_answer,
    parse_question_lines,
    tokenize,
)


# --- tokenize tests ---


def test_tokenize_splits_whitespace_runs() -> None:
    assert tokenize("/trivia  create\tgeneral \n geo") == [
        "/trivia",
        "create",
        "general",
        "geo",
    ]


def test_tokenize_empty_input() -> None:
    assert tokenize("") == []
    assert tokenize("   ") == []


def test_tokenize_does_not_honor_quotes() -> None:
    assert tokenize('/trivia start "big quiz"') == [
        "/trivia",
        "start",
        '"big',
        'quiz"',
    ]


# --- parse_invocation tests ---


def test_parse_invocation_blank_returns_none() -> None:
    assert parse_invocation("  ") is None


def test_parse_invocation_missing_action_is_empty() -> None:
    parsed = parse_invocation("/trivia")
    assert parsed is not None
    assert parsed.command_word == "/trivia"
    assert parsed.action == ""
    assert parsed.parameters == ()


def test_parse_invocation_splits_parameters() -> None:
    parsed = parse_invocation("/trivia create general geo")
    assert parsed is not None
    assert parsed.action == "create"
    assert parsed.parameters == ("general", "geo")
    assert parsed.raw_line == "/trivia create general geo"


# --- free_text tests ---


def test_free_text_keeps_inner_whitespace() -> None:
    line = "/trivia add_question geo What  is   the capital * Paris"
    assert free_text(line, 3) == "What  is   the capital * Paris"


def test_free_text_too_few_tokens() -> None:
    assert free_text("/trivia add_question geo", 3) == ""


# --- parse_question_answer tests ---


def test_parse_question_answer_ok() -> None:
    result = parse_question_answer(" Capital of France?  *  Paris ")
    assert result.error is None
    assert result.entry == QuestionAnswer(question="Capital of France?", answer="Paris")


def test_parse_question_answer_missing_delimiter_is_named_error() -> None:
    result = parse_question_answer("Capital of France? Paris")
    assert result.entry is None
    assert result.error is not None
    assert "`*`" in result.error


def test_parse_question_answer_empty_question() -> None:
    result = parse_question_answer(" * Paris")
    assert result.entry is None
    assert result.error == "the question is empty"


def test_parse_question_answer_empty_answer() -> None:
    result = parse_question_answer("Capital of France? *  ")
    assert result.entry is None
    assert result.error == "the answer is empty"


def test_parse_question_answer_splits_on_first_delimiter() -> None:
    result = parse_question_answer("2 * 3 equals? * 6")
    assert result.entry == QuestionAnswer(question="2", answer="3 equals? * 6")


def test_parse_question_lines_skips_invalid_lines() -> None:
    value = "Capital of France? * Paris\nnot a question\n\nLargest ocean? * Pacific"
    assert parse_question_lines(value) == [
        QuestionAnswer("Capital of France?", "Paris"),
        QuestionAnswer("Largest ocean?", "Pacific"),
    ]


def test_question_answer_as_line_round_trips() -> None:
    qa = QuestionAnswer("Capital of France?", "Paris")
    assert parse_question_answer(qa.as_line()).entry == qa

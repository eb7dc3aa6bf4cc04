"""Command parsing utilities."""

from __future__ import annotations

from dataclasses import dataclass

from ...types import ParsedInvocation

QUESTION_DELIMITER = "*"


@dataclass(frozen=True, slots=True)
class QuestionAnswer:
    question: str
    answer: str

    def as_line(self) -> str:
        return f"{self.question} {QUESTION_DELIMITER} {self.answer}"


@dataclass(frozen=True, slots=True)
class QuestionParseResult:
    entry: QuestionAnswer | None
    error: str | None


def tokenize(line: str) -> list[str]:
    """Split a command line on runs of whitespace. No quoting."""
    return line.split()


def parse_invocation(line: str) -> ParsedInvocation | None:
    """Parse a command line into command word, action and parameters.

    Returns None for blank input. A missing action is the empty string.
    """
    tokens = tokenize(line)
    if not tokens:
        return None
    action = tokens[1] if len(tokens) > 1 else ""
    return ParsedInvocation(
        raw_line=line,
        command_word=tokens[0],
        action=action,
        parameters=tuple(tokens[2:]),
    )


def free_text(line: str, skip: int) -> str:
    """Return ``line`` after its first ``skip`` tokens, inner whitespace kept.

    Re-joining tokens would collapse runs of whitespace inside the text.
    """
    parts = line.split(None, skip)
    if len(parts) <= skip:
        return ""
    return parts[skip].strip()


def parse_question_answer(text: str) -> QuestionParseResult:
    """Split ``question * answer`` on the first delimiter."""
    question, sep, answer = text.partition(QUESTION_DELIMITER)
    if not sep:
        return QuestionParseResult(
            None,
            f"separate the question and the answer with `{QUESTION_DELIMITER}`",
        )
    question = question.strip()
    answer = answer.strip()
    if not question:
        return QuestionParseResult(None, "the question is empty")
    if not answer:
        return QuestionParseResult(None, "the answer is empty")
    return QuestionParseResult(QuestionAnswer(question=question, answer=answer), None)


def parse_question_lines(value: str) -> list[QuestionAnswer]:
    """Parse a stored quiz blob; lines without a valid pair are skipped."""
    entries: list[QuestionAnswer] = []
    for line in value.splitlines():
        parsed = parse_question_answer(line)
        if parsed.entry is not None:
            entries.append(parsed.entry)
    return entries

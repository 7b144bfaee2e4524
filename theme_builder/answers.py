"""
answers.py

Responsibility: Normalise and validate operator answers, and ask questions
until a valid answer arrives.

Parsers take the raw line read from the operator and either return the
normalised value or raise `InvalidAnswer`. `Prompter.ask` is the only place
that catches it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, TypeVar

from theme_builder.console import Style, console, plain, styled

T = TypeVar("T")

YES = frozenset({"yes", "y"})
NO = frozenset({"no", "n"})

IDENTIFIER_RE = re.compile(r"^[a-z][a-z_]+[a-z]$")
URL_RE = re.compile(
    r"((([A-Za-z]{3,9}:(?://)?)(?:[\-;:&=\+\$,\w]+@)?[A-Za-z0-9\.\-]+"
    r"|(?:www\.|[\-;:&=\+\$,\w]+@)[A-Za-z0-9\.\-]+)"
    r"((?:/[\+~%/\.\w\-_]*)?\??(?:[\-\+=&;%@\.\w_]*)#?(?:[\.\!/\\\w]*))?)"
)

BOOLEAN_RETRY = "Please try again and type either yes, y, no, or n"
DEFAULT_RETRY = "Please try again"
IDENTIFIER_HINT = (
    "(At least three characters, first and last characters letters only, letters and _'s for the rest.)"
)
URL_HINT = "(Must start with http://, https:// or www)"


class InvalidAnswer(ValueError):
    pass


def normalize(raw: str) -> str:
    return raw.strip().lower()


def parse_boolean(raw: str) -> bool:
    answer = normalize(raw)
    if answer in YES:
        return True
    if answer in NO:
        return False
    raise InvalidAnswer(BOOLEAN_RETRY)


def parse_identifier(raw: str) -> str:
    answer = normalize(raw)
    if not IDENTIFIER_RE.match(answer):
        raise InvalidAnswer(DEFAULT_RETRY)
    return answer


def parse_text(raw: str) -> str:
    """Free text with `*/` removed so it cannot close a PHP comment."""
    return raw.rstrip("\r\n").replace("*/", "")


def parse_url(raw: str) -> str:
    answer = parse_text(raw)
    if not URL_RE.search(answer):
        raise InvalidAnswer(DEFAULT_RETRY)
    return answer


_LEADING_INT_RE = re.compile(r"^\s*([+-]?[0-9]+)")


def parse_count(raw: str) -> int:
    """
    Leading integer of `raw`, or 0 when there is none. Never raises.
    """
    match = _LEADING_INT_RE.match(raw)
    return int(match.group(1)) if match else 0


@dataclass(frozen=True)
class Question:
    text: str
    hint: str | None = None
    inline: bool = False


InputSource = Callable[[str], str]


class Prompter:
    """
    Asks questions on the console and reads answers from an input source.

    `read` follows the `input()` signature; it may raise `KeyboardInterrupt`
    or `EOFError`, which propagate to the caller untouched.
    """

    def __init__(self, read: InputSource = input) -> None:
        self._read = read

    def show(self, question: Question) -> None:
        if question.inline:
            console.print(plain(f"\n{question.text} "), end="")
        else:
            console.print(plain(f"\n{question.text}"))
        if question.hint:
            console.print(styled(question.hint, Style.MAGENTA))

    def read(self) -> str:
        return self._read("")

    def ask(self, question: Question, parse: Callable[[str], T]) -> T:
        """
        Show `question` and return the parsed answer, re-asking the same
        question after every invalid answer.
        """
        while True:
            self.show(question)
            try:
                return parse(self.read())
            except InvalidAnswer as e:
                console.print(styled(f"\n{e}", Style.RED))

    def ask_text(self, question: Question) -> str:
        return self.ask(question, parse_text)

    def ask_boolean(self, question: Question) -> bool:
        return self.ask(question, parse_boolean)

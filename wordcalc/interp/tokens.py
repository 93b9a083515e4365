"""Token model and prefix recognizers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional


class TokenKind(Enum):
    """The four lexical units of a question."""

    QUESTION = auto()
    NUMBER = auto()
    OPERAND = auto()
    PUNCTUATION = auto()


# Operand phrases understood by the evaluator
OPERAND_PHRASES = ("plus", "minus", "multiplied by", "divided by")

# Patterns are matched against the start of the remaining input
TOKEN_PATTERNS: dict[TokenKind, str] = {
    TokenKind.QUESTION: r"What is",
    TokenKind.NUMBER: r"[0-9]+",
    TokenKind.OPERAND: "(?:" + "|".join(re.escape(p) for p in OPERAND_PHRASES) + ")",
    TokenKind.PUNCTUATION: r"\?",
}


@dataclass(frozen=True)
class Token:
    """A recognized token and the exact text it was matched from."""

    kind: TokenKind
    value: str

    @property
    def is_significant(self) -> bool:
        """Numbers and operands take part in evaluation; the rest is structure."""
        return self.kind in (TokenKind.NUMBER, TokenKind.OPERAND)

    @classmethod
    def question(cls, value: str = "What is") -> Token:
        return cls(TokenKind.QUESTION, value)

    @classmethod
    def number(cls, value: str) -> Token:
        return cls(TokenKind.NUMBER, value)

    @classmethod
    def operand(cls, value: str) -> Token:
        return cls(TokenKind.OPERAND, value)

    @classmethod
    def punctuation(cls, value: str = "?") -> Token:
        return cls(TokenKind.PUNCTUATION, value)

    def __repr__(self) -> str:
        return f"{self.kind.name.title()}({self.value!r})"


@dataclass(frozen=True)
class Recognizer:
    """Matches one token kind at the start of a string."""

    kind: TokenKind
    pattern: re.Pattern

    def match(self, text: str) -> Optional[str]:
        """Return the matched prefix, or None."""
        found = self.pattern.match(text)
        if found is None or not found.group(0):
            return None
        return found.group(0)

    def build(self, value: str) -> Token:
        return Token(self.kind, value)


def default_recognizers() -> tuple[Recognizer, ...]:
    """Build a recognizer for each token kind."""
    return tuple(
        Recognizer(kind=kind, pattern=re.compile(pattern))
        for kind, pattern in TOKEN_PATTERNS.items()
    )


def recognizer_union(recognizers: Iterable[Recognizer]) -> re.Pattern:
    """Compile a single pattern matching any recognizer's prefix."""
    return re.compile("|".join(f"(?:{r.pattern.pattern})" for r in recognizers))

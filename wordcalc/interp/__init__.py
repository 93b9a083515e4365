"""Natural-language arithmetic interpreter.

    "What is 3 plus 10 minus 5?"
        -> lex   -> [Question, Number, Operand, Number, Operand, Number, Punctuation]
        -> parse -> [Number, Operand, Number, Operand, Number]
        -> evaluate -> 8
"""

from wordcalc.interp.errors import (
    DivisionByZeroError,
    ErrorKind,
    InputTooLongError,
    InterpError,
    InvalidSyntaxError,
    NonMathQuestionError,
    RecognizerConfigError,
    UnsupportedOperationError,
)
from wordcalc.interp.evaluator import evaluate
from wordcalc.interp.interpreter import Interpreter
from wordcalc.interp.lexer import lex
from wordcalc.interp.parser import parse
from wordcalc.interp.tokens import Recognizer, Token, TokenKind, default_recognizers

__all__ = [
    # Pipeline
    "lex",
    "parse",
    "evaluate",
    "Interpreter",
    # Tokens
    "Token",
    "TokenKind",
    "Recognizer",
    "default_recognizers",
    # Errors
    "ErrorKind",
    "InterpError",
    "NonMathQuestionError",
    "UnsupportedOperationError",
    "InvalidSyntaxError",
    "DivisionByZeroError",
    "InputTooLongError",
    "RecognizerConfigError",
]

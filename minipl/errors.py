from dataclasses import dataclass
from typing import Optional


@dataclass
class ErrorVal:
    """Describes a Mini-PL failure: its kind, a message and where it happened."""
    name: str
    message: str
    line: Optional[int] = None
    column: Optional[int] = None

    def __str__(self) -> str:
        if self.line is None:
            return f"{self.name}: {self.message}"
        return f"{self.name}: {self.message} at line {self.line}, column {self.column}"


class MiniPLError(Exception):
    """Exception type used to propagate every Mini-PL error to the caller."""
    kind = 'MiniPLError'

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.err = ErrorVal(self.kind, message, line, column)
        super().__init__(str(self.err))

    @property
    def line(self) -> Optional[int]:
        return self.err.line

    @property
    def column(self) -> Optional[int]:
        return self.err.column


class LexicalError(MiniPLError):
    """Unrecognized character, unterminated string or malformed operator."""
    kind = 'LexicalError'


class ParseError(MiniPLError):
    """Unexpected token at a grammar position."""
    kind = 'SyntaxError'


class RuntimeTypeError(MiniPLError):
    kind = 'RuntimeTypeError'


class UndeclaredVariableError(MiniPLError):
    kind = 'UndeclaredVariableError'


class InputFormatError(MiniPLError):
    kind = 'InputFormatError'


class DivisionByZeroError(MiniPLError):
    kind = 'ArithmeticError'

# Mini-PL language package
# A scanner, recursive-descent parser and tree-walking interpreter for Mini-PL.
from .errors import (
    MiniPLError, LexicalError, ParseError, RuntimeTypeError,
    UndeclaredVariableError, InputFormatError, DivisionByZeroError,
)
from .interpreter import run_program, run_file, Interpreter
from .parser import Parser, parse_program
from .scanner import Scanner

__all__ = [
    'run_program',
    'run_file',
    'parse_program',
    'Interpreter',
    'Parser',
    'Scanner',
    'MiniPLError',
    'LexicalError',
    'ParseError',
    'RuntimeTypeError',
    'UndeclaredVariableError',
    'InputFormatError',
    'DivisionByZeroError',
]

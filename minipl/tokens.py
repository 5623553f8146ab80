"""Lexical vocabulary shared by the scanner, parser and interpreter."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class TokenType(Enum):
    STRING = 'string'
    BOOL = 'bool'
    VAR = 'var'
    INTEGER = 'int'
    INTEGER_CONST = 'INTEGER_CONST'
    PLUS = '+'
    MINUS = '-'
    MUL = '*'
    DIV = '/'
    LPAREN = '('
    RPAREN = ')'
    ID = 'ID'
    ASSIGN = ':='
    SEMI = ';'
    COLON = ':'
    EOF = 'EOF'
    PRINT = 'print'
    READ = 'read'
    STRING_LITERAL = 'STRING_LITERAL'
    FOR = 'for'
    END = 'end'
    IF = 'if'
    ELSE = 'else'
    DO = 'do'
    IN = 'in'
    TO = '..'
    EQUAL = '='
    LESS_THAN = '<'
    AND = '&'
    NOT = '!'


# Matched case-sensitively: `Print` is an identifier, `print` a keyword.
RESERVED_KEYWORDS: Dict[str, TokenType] = {
    'bool': TokenType.BOOL,
    'var': TokenType.VAR,
    'int': TokenType.INTEGER,
    'string': TokenType.STRING,
    'print': TokenType.PRINT,
    'read': TokenType.READ,
    'if': TokenType.IF,
    'else': TokenType.ELSE,
    'do': TokenType.DO,
    'for': TokenType.FOR,
    'end': TokenType.END,
    'in': TokenType.IN,
}

SINGLE_CHAR_TOKENS: Dict[str, TokenType] = {
    '!': TokenType.NOT,
    '&': TokenType.AND,
    '=': TokenType.EQUAL,
    '<': TokenType.LESS_THAN,
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.MUL,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    ';': TokenType.SEMI,
}

TYPE_KEYWORDS = (TokenType.INTEGER, TokenType.STRING, TokenType.BOOL)


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: Any
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        return f"Token({self.type.name}, {self.value!r})"

    def describe(self) -> str:
        if self.type is TokenType.EOF:
            return 'end of input'
        if self.type in (TokenType.ID, TokenType.INTEGER_CONST):
            return f"{self.type.name} {self.value!r}"
        if self.type is TokenType.STRING_LITERAL:
            return f"string literal {self.value!r}"
        return repr(self.type.value)

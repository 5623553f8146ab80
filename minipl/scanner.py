"""Scanner for Mini-PL.

The scanner produces tokens on demand: the parser asks for one token at a
time through `next_token`, so a lexical error late in the source surfaces
only after everything before it has been consumed. Whitespace, `// line`
comments and `/* block */` comments are skipped. Scanning is strict; any
character that cannot start a token raises `LexicalError`.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

from .errors import LexicalError
from .tokens import RESERVED_KEYWORDS, SINGLE_CHAR_TOKENS, Token, TokenType


class Scanner:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self.current_char: Optional[str] = text[0] if text else None

    def advance(self, n: int = 1):
        for _ in range(n):
            if self.current_char == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1
            self.current_char = self.text[self.pos] if self.pos < len(self.text) else None

    def peek(self) -> Optional[str]:
        nxt = self.pos + 1
        return self.text[nxt] if nxt < len(self.text) else None

    def error(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        raise LexicalError(message, line or self.line, column or self.column)

    def next_token(self) -> Token:
        """Return the next token, or an EOF token once the input is exhausted."""
        while self.current_char is not None:
            c = self.current_char
            if c.isspace():
                self.skip_whitespace()
                continue
            if c == '/' and self.peek() in ('/', '*'):
                self.skip_comment()
                continue

            line, column = self.line, self.column
            if '0' <= c <= '9':
                return Token(TokenType.INTEGER_CONST, self.integer(), line, column)
            if c.isalpha() or c == '_':
                return self.identifier()
            if c == '"':
                return self.string_literal()
            if c == '/':
                self.advance()
                return Token(TokenType.DIV, c, line, column)
            if c == ':':
                if self.peek() == '=':
                    self.advance(2)
                    return Token(TokenType.ASSIGN, ':=', line, column)
                self.advance()
                return Token(TokenType.COLON, c, line, column)
            if c == '.':
                if self.peek() == '.':
                    self.advance(2)
                    return Token(TokenType.TO, '..', line, column)
                self.error("expected '..' but found a single '.'")
            if c in SINGLE_CHAR_TOKENS:
                self.advance()
                return Token(SINGLE_CHAR_TOKENS[c], c, line, column)
            self.error(f"unexpected character {c!r}")
        return Token(TokenType.EOF, None, self.line, self.column)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EOF:
                return

    def skip_whitespace(self):
        while self.current_char is not None and self.current_char.isspace():
            self.advance()

    def skip_comment(self):
        # current_char is '/', the next one '/' or '*'
        self.advance()
        if self.current_char == '/':
            while self.current_char is not None and self.current_char != '\n':
                self.advance()
            return
        self.advance()
        # An unclosed block comment runs to the end of the input.
        while self.current_char is not None:
            if self.current_char == '*' and self.peek() == '/':
                self.advance(2)
                return
            self.advance()

    def integer(self) -> int:
        start = self.pos
        while self.current_char is not None and '0' <= self.current_char <= '9':
            self.advance()
        return int(self.text[start:self.pos])

    def string_literal(self) -> Token:
        line, column = self.line, self.column
        self.advance()  # opening quote
        chars: List[str] = []
        while self.current_char is not None:
            c = self.current_char
            if c == '"':
                self.advance()
                return Token(TokenType.STRING_LITERAL, ''.join(chars), line, column)
            if c in ('\n', ';'):
                self.error(f"unexpected {c!r} inside string literal")
            if c == '\\':
                self.advance()
                if self.current_char is None:
                    break
                chars.append(self.current_char)
                self.advance()
                continue
            chars.append(c)
            self.advance()
        self.error('unterminated string literal', line, column)

    def identifier(self) -> Token:
        line, column = self.line, self.column
        start = self.pos
        while self.current_char is not None and (self.current_char.isalnum() or self.current_char == '_'):
            self.advance()
        text = self.text[start:self.pos]
        token_type = RESERVED_KEYWORDS.get(text, TokenType.ID)
        return Token(token_type, text, line, column)


def tokenize(source: str) -> List[Token]:
    """Scan the whole source eagerly; the returned list ends with EOF."""
    return list(Scanner(source))

"""Recursive-descent parser for Mini-PL.

The parser pulls tokens from a `Scanner` one at a time with a single token
of lookahead and never backtracks. Any token that does not fit the grammar
at the current position raises `ParseError` immediately.

Grammar (precedence low to high)::

    program     : statement (';' statement)*
    statement   : assignment | declaration | print | read
                | for_loop | if_statement | empty
    declaration : 'var' ID ':' type [':=' initializer]
    for_loop    : 'for' ID 'in' expr '..' expr 'do' statements 'end' 'for'
    if_stmt     : 'if' bool_expr 'do' statements ['else'] statements 'end' 'if'
    bool_expr   : '!' expr | expr [('<' | '=' | '&') expr]
    expr        : term (('+' | '-') term)*
    term        : factor (('*' | '/') factor)*
    factor      : ('+' | '-') factor | INTEGER | '(' expr ')' | ID
"""

from __future__ import annotations

from typing import Callable, List, Optional

from .ast import (
    Assign, BinOp, BoolExpr, DeclAssign, ForLoop, IfStatement, Node, NoOp, Num,
    PrintStr, PrintVar, Program, Read, Str, UnaryOp, Var, VarDecl,
)
from .errors import ParseError
from .scanner import Scanner
from .tokens import TYPE_KEYWORDS, Token, TokenType
from .types import TypeSpec

# Tokens that may legally follow a declaration without initializer.
DECLARATION_FOLLOW = (TokenType.SEMI, TokenType.EOF, TokenType.END, TokenType.ELSE)


class Parser:
    def __init__(self, scanner: Scanner, trace: Optional[Callable[[str], None]] = None):
        self.scanner = scanner
        self.trace = trace
        self.current_token: Token = scanner.next_token()

    def error(self, expected: Optional[str] = None):
        token = self.current_token
        if expected:
            message = f"expected {expected}, got {token.describe()}"
        else:
            message = f"unexpected {token.describe()}"
        raise ParseError(message, token.line, token.column)

    def match(self, *types: TokenType) -> bool:
        return self.current_token.type in types

    def eat(self, token_type: TokenType) -> Token:
        token = self.current_token
        if token.type is not token_type:
            self.error(repr(token_type.value))
        if self.trace:
            self.trace(f"eat {token} at {token.line}:{token.column}")
        self.current_token = self.scanner.next_token()
        return token

    def parse(self) -> Program:
        """Parse the whole token stream; trailing tokens are a syntax error."""
        node = self.program()
        if not self.match(TokenType.EOF):
            self.error()
        return node

    def program(self) -> Program:
        return Program(self.statement_list())

    def statement_list(self) -> List[Node]:
        results = [self.statement()]
        while self.match(TokenType.SEMI):
            self.eat(TokenType.SEMI)
            results.append(self.statement())
        if self.match(TokenType.ID):
            self.error("';'")
        return results

    def statement(self) -> Node:
        token_type = self.current_token.type
        if token_type is TokenType.ID:
            return self.assignment_statement()
        if token_type is TokenType.VAR:
            return self.declaration_statement()
        if token_type is TokenType.PRINT:
            return self.print_statement()
        if token_type is TokenType.READ:
            return self.read_statement()
        if token_type is TokenType.FOR:
            return self.for_loop()
        if token_type is TokenType.IF:
            return self.if_statement()
        return self.empty()

    def empty(self) -> NoOp:
        return NoOp()

    def variable(self) -> Var:
        token = self.eat(TokenType.ID)
        return Var(token.value, token)

    def print_statement(self) -> Node:
        self.eat(TokenType.PRINT)
        if self.match(TokenType.ID):
            return PrintVar(self.variable())
        if self.match(TokenType.STRING_LITERAL):
            token = self.eat(TokenType.STRING_LITERAL)
            return PrintStr(token.value)
        self.error('variable or string literal')

    def read_statement(self) -> Read:
        self.eat(TokenType.READ)
        return Read(self.variable())

    def assignment_statement(self) -> Assign:
        var = self.variable()
        token = self.eat(TokenType.ASSIGN)
        return Assign(var, self.expr(), token)

    def declaration_statement(self) -> Node:
        self.eat(TokenType.VAR)
        var = self.variable()
        self.eat(TokenType.COLON)
        if not self.match(*TYPE_KEYWORDS):
            self.error('type name')
        type_token = self.eat(self.current_token.type)
        type_spec = TypeSpec(type_token.value)

        if self.match(*DECLARATION_FOLLOW):
            return VarDecl(var, type_spec)
        if not self.match(TokenType.ASSIGN):
            self.error("':=' or ';'")
        self.eat(TokenType.ASSIGN)

        if type_token.type is TokenType.BOOL:
            right = self.bool_expr()
        elif type_token.type is TokenType.STRING and self.match(TokenType.STRING_LITERAL):
            token = self.eat(TokenType.STRING_LITERAL)
            right = Str(token.value, token)
        else:
            right = self.expr()
        return DeclAssign(var, type_spec, right)

    def if_statement(self) -> IfStatement:
        token = self.eat(TokenType.IF)
        condition = self.bool_expr()
        self.eat(TokenType.DO)
        statements = self.statement_list()
        if self.match(TokenType.ELSE):
            self.eat(TokenType.ELSE)
        else_statements = self.statement_list()
        self.eat(TokenType.END)
        self.eat(TokenType.IF)
        return IfStatement(condition, statements, else_statements, token)

    def for_loop(self) -> Node:
        self.eat(TokenType.FOR)
        var = self.variable()
        self.eat(TokenType.IN)
        start = self.expr()
        self.eat(TokenType.TO)
        end = self.expr()
        self.eat(TokenType.DO)
        statements = self.statement_list()
        self.eat(TokenType.END)
        self.eat(TokenType.FOR)
        # A body made only of empty statements drops the whole loop.
        if all(isinstance(stmt, NoOp) for stmt in statements):
            return NoOp()
        return ForLoop(var, start, end, statements)

    def bool_expr(self) -> BoolExpr:
        token = self.current_token
        if token.type is TokenType.NOT:
            self.eat(TokenType.NOT)
            return BoolExpr(NoOp(), TokenType.NOT, self.expr(), token)
        left = self.expr()
        token = self.current_token
        if not self.match(TokenType.LESS_THAN, TokenType.EQUAL, TokenType.AND):
            return BoolExpr(left, None, NoOp(), token)
        self.eat(token.type)
        return BoolExpr(left, token.type, self.expr(), token)

    def expr(self) -> Node:
        node = self.term()
        while self.match(TokenType.PLUS, TokenType.MINUS):
            token = self.eat(self.current_token.type)
            node = BinOp(node, token.type, self.term(), token)
        return node

    def term(self) -> Node:
        node = self.factor()
        while self.match(TokenType.MUL, TokenType.DIV):
            token = self.eat(self.current_token.type)
            node = BinOp(node, token.type, self.factor(), token)
        return node

    def factor(self) -> Node:
        token = self.current_token
        if token.type in (TokenType.PLUS, TokenType.MINUS):
            self.eat(token.type)
            return UnaryOp(token.type, self.factor(), token)
        if token.type is TokenType.INTEGER_CONST:
            self.eat(TokenType.INTEGER_CONST)
            return Num(token.value, token)
        if token.type is TokenType.LPAREN:
            self.eat(TokenType.LPAREN)
            node = self.expr()
            self.eat(TokenType.RPAREN)
            return node
        return self.variable()


def parse_program(source: str) -> Program:
    """Parse Mini-PL source code into an AST Program."""
    return Parser(Scanner(source)).parse()

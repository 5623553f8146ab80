"""Tree-walking interpreter for Mini-PL.

The interpreter drives the parser, which in turn pulls tokens from the
scanner on demand, and then walks the resulting AST directly. All program
state lives in one global `Environment`. Statements run for their effects
on that table and on standard input/output; expressions evaluate left to
right, depth first. The first error of any kind propagates to the caller
as a `MiniPLError` subclass and nothing continues past it.
"""

from __future__ import annotations

import re
import sys
from typing import Any, List, Optional, TextIO

from .ast import (
    Assign, BinOp, BoolExpr, DeclAssign, ForLoop, IfStatement, Node, NoOp, Num,
    PrintStr, PrintVar, Program, Read, Str, UnaryOp, Var, VarDecl,
)
from .environment import Environment
from .errors import DivisionByZeroError, InputFormatError, RuntimeTypeError
from .parser import Parser
from .scanner import Scanner
from .tokens import Token, TokenType
from .types import (
    NONE, is_boolean, is_integer, is_string, same_variant, to_string,
    truncating_div, type_name,
)

SIGNED_INTEGER = re.compile(r'[+-]?[0-9]+')


def _position(token: Optional[Token]):
    if token is None:
        return None, None
    return token.line, token.column


class Interpreter:
    """Core interpreter that executes a Mini-PL AST."""
    def __init__(self, parser: Optional[Parser] = None, debug_level: int = 0,
                 debug_file: str = 'debug.txt', stdin: Optional[TextIO] = None,
                 stdout: Optional[TextIO] = None, read_int_as_number: bool = False):
        self.parser = parser
        self.global_env = Environment()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None
        self._stdin = stdin
        self._stdout = stdout
        self.read_int_as_number = read_int_as_number
        if self.parser is not None and debug_level >= 4:
            self.parser.trace = self.debug

    @property
    def stdin(self) -> TextIO:
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def interpret(self) -> Any:
        """Parse the attached token stream and evaluate the program."""
        if self.parser is None:
            raise ValueError('interpret() needs an interpreter built with a parser')
        try:
            tree = self.parser.parse()
            return self.run(tree)
        finally:
            self.close()

    def run(self, program: Program) -> Any:
        if self.debug_level >= 1:
            self.debug(f"run program with {len(program.children)} statements")
        try:
            self.execute(program)
        finally:
            if self.debug_level >= 1:
                self.debug(f"finished, globals = {self.global_env.as_dict()}")
            self.close()
        return NONE

    def execute_block(self, statements: List[Node]):
        for stmt in statements:
            self.execute(stmt)

    def execute(self, node: Node) -> Any:
        if isinstance(node, Program):
            self.execute_block(node.children)
            return NONE
        if isinstance(node, VarDecl):
            self.global_env.declare(node.var.name, node.type_spec)
            self.trace_binding('declare', node.var.name)
            return NONE
        if isinstance(node, DeclAssign):
            # The declared type records intent only; the value is stored as computed.
            value = self.evaluate(node.expr)
            self.global_env.declare(node.var.name, node.type_spec, value)
            self.trace_binding('declare', node.var.name)
            return NONE
        if isinstance(node, Assign):
            current = self.global_env.get(node.var.name, node.var.token)
            value = self.evaluate(node.expr)
            if not same_variant(current, value):
                line, column = _position(node.token)
                raise RuntimeTypeError(
                    f"cannot assign {type_name(value)} to {type_name(current)} variable {node.var.name}",
                    line, column)
            self.global_env.set(node.var.name, value)
            self.trace_binding('assign', node.var.name)
            return NONE
        if isinstance(node, ForLoop):
            self.execute_for_loop(node)
            return NONE
        if isinstance(node, IfStatement):
            cond = self.evaluate(node.condition)
            if not is_boolean(cond):
                line, column = _position(node.token)
                raise RuntimeTypeError(
                    f"if condition must be a boolean value, got {type_name(cond)}", line, column)
            if self.debug_level >= 3:
                self.debug(f"if condition -> {to_string(cond)}")
            self.execute_block(node.then_body if cond else node.else_body)
            return NONE
        if isinstance(node, PrintStr):
            print(node.value, file=self.stdout)
            return NONE
        if isinstance(node, PrintVar):
            value = self.global_env.get(node.var.name, node.var.token)
            print(to_string(value), file=self.stdout)
            return NONE
        if isinstance(node, Read):
            self.execute_read(node)
            return NONE
        if isinstance(node, NoOp):
            return NONE
        raise NotImplementedError(f"execute: unexpected node type {type(node).__name__}")

    def trace_binding(self, action: str, name: str):
        if self.debug_level >= 2:
            value = self.global_env.lookup(name)
            self.debug(f"{action} {name}: {type_name(value)} = {value!r}")

    def execute_for_loop(self, node: ForLoop):
        var = node.var
        line, column = _position(var.token)
        # An unbound loop variable is accepted; only a non-integer binding is rejected.
        current = self.global_env.lookup(var.name)
        if var.name in self.global_env and not is_integer(current):
            raise RuntimeTypeError(
                f"loop variable {var.name} must be declared as int, not {type_name(current)}",
                line, column)
        start = self.evaluate(node.start)
        end = self.evaluate(node.end)
        for bound in (start, end):
            if not is_integer(bound):
                raise RuntimeTypeError(f"loop range bounds must be int, got {type_name(bound)}", line, column)
        for i in range(start, end):
            self.global_env.set(var.name, i)
            if self.debug_level >= 3:
                self.debug(f"for {var.name} = {i}")
            self.execute_block(node.body)

    def execute_read(self, node: Read):
        var = node.var
        current = self.global_env.get(var.name, var.token)
        text = self.stdin.readline()
        if text.endswith('\n'):
            text = text[:-1]
        line, column = _position(var.token)
        if is_string(current):
            self.global_env.set(var.name, text)
        elif is_integer(current):
            if not SIGNED_INTEGER.fullmatch(text):
                raise InputFormatError(
                    f"cannot read non-numeric value {text!r} into int variable {var.name}", line, column)
            # The validated text itself is kept unless numbers are requested.
            self.global_env.set(var.name, int(text) if self.read_int_as_number else text)
        else:
            raise RuntimeTypeError(f"cannot read into {type_name(current)} variable {var.name}", line, column)
        self.trace_binding('read', var.name)

    def evaluate(self, node: Node) -> Any:
        if isinstance(node, Num):
            return node.value
        if isinstance(node, Str):
            return node.value
        if isinstance(node, Var):
            return self.global_env.get(node.name, node.token)
        if isinstance(node, BinOp):
            return self.evaluate_bin_op(node)
        if isinstance(node, UnaryOp):
            operand = self.evaluate(node.operand)
            if not is_integer(operand):
                line, column = _position(node.token)
                raise RuntimeTypeError(f"unary {node.op.value} needs an int operand, got {type_name(operand)}",
                                       line, column)
            return -operand if node.op is TokenType.MINUS else operand
        if isinstance(node, BoolExpr):
            return self.evaluate_bool_expr(node)
        if isinstance(node, NoOp):
            return NONE
        return self.execute(node)

    def evaluate_bin_op(self, node: BinOp) -> Any:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        line, column = _position(node.token)
        op = node.op
        if is_integer(left) and is_integer(right):
            if op is TokenType.PLUS:
                return left + right
            if op is TokenType.MINUS:
                return left - right
            if op is TokenType.MUL:
                return left * right
            if op is TokenType.DIV:
                if right == 0:
                    raise DivisionByZeroError('integer division by zero', line, column)
                return truncating_div(left, right)
        elif is_string(left) and is_string(right):
            if op is TokenType.PLUS:
                return left + right
            raise RuntimeTypeError(f"operator {op.value} is not supported for string operands", line, column)
        raise RuntimeTypeError(
            f"type mismatch: {type_name(left)} {op.value} {type_name(right)}", line, column)

    def evaluate_bool_expr(self, node: BoolExpr) -> bool:
        line, column = _position(node.token)
        op = node.op

        def expect_bool(value: Any) -> bool:
            if not is_boolean(value):
                raise RuntimeTypeError(f"expected bool, got {type_name(value)}", line, column)
            return value

        if op is TokenType.AND:
            # Both sides are always evaluated.
            left = expect_bool(self.evaluate(node.left))
            right = expect_bool(self.evaluate(node.right))
            return left and right
        if op is None:
            return expect_bool(self.evaluate(node.left))
        if op is TokenType.NOT:
            return not expect_bool(self.evaluate(node.right))

        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        if not (is_integer(left) and is_integer(right)):
            raise RuntimeTypeError(
                f"operator {op.value} needs int operands, got {type_name(left)} and {type_name(right)}",
                line, column)
        if op is TokenType.EQUAL:
            return left == right
        if op is TokenType.LESS_THAN:
            return left < right
        raise NotImplementedError(f"unsupported boolean operator {op}")


def run_program(source: str, debug_level: int = 0, **options) -> Interpreter:
    """Scan, parse and run a Mini-PL program from a source string.

    Returns the interpreter so callers can inspect its globals; the final
    program value is always none.
    """
    interpreter = Interpreter(Parser(Scanner(source)), debug_level=debug_level, **options)
    interpreter.interpret()
    return interpreter


def run_file(file_path: str, debug_level: int = 0, **options) -> Interpreter:
    """Run a Mini-PL file, returning the interpreter instance."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_program(source, debug_level=debug_level, **options)

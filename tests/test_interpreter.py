import io

import pytest

from minipl.errors import (
    DivisionByZeroError, InputFormatError, MiniPLError, ParseError,
    RuntimeTypeError, UndeclaredVariableError,
)
from minipl.interpreter import Interpreter, run_program
from minipl.parser import Parser, parse_program
from minipl.scanner import Scanner
from minipl.types import NONE


def globals_after(source, **options):
    return run_program(source, **options).global_env.as_dict()


def test_variables_and_arithmetic(capsys):
    source = 'var a : int := 2; var b : int := 10 * a + 10; var c : int := a - - b; print b;'
    interp = Interpreter(Parser(Scanner(source)))
    result = interp.interpret()
    assert result == NONE
    assert capsys.readouterr().out == '30\n'
    assert interp.global_env.as_dict() == {'a': 2, 'b': 30, 'c': 32}


@pytest.mark.parametrize('a,b', [(0, 0), (7, 3), (9, 12), (1, 100)])
def test_multiplication_precedence(a, b):
    scope = globals_after(f'var x : int := {a}; var y : int := {b} * 10 + {a};')
    assert scope['y'] == b * 10 + a


def test_double_negation():
    assert globals_after('var a : int := 2; var c : int := a - - a;')['c'] == 4


def test_unary_plus_is_identity():
    assert globals_after('var a : int := + 5; var b : int := - + a')['b'] == -5


@pytest.mark.parametrize('expr,expected', [('7 / 2', 3), ('0 - 7 / 2', -3), ('-7 / 2', -3), ('7 / -2', -3), ('-8 / -2', 4)])
def test_integer_division_truncates(expr, expected):
    assert globals_after(f'var q : int := {expr}')['q'] == expected


def test_division_by_zero():
    with pytest.raises(DivisionByZeroError) as exc_info:
        run_program('var z : int; var q : int := 1 / z')
    assert exc_info.value.err.name == 'ArithmeticError'


def test_string_concatenation():
    scope = globals_after('var s : string := "ab"; var t : string := "cd"; var u : string := s + t + s')
    assert scope['u'] == 'abcdab'


def test_string_plus_int_is_type_error():
    with pytest.raises(RuntimeTypeError):
        run_program('var s : string := "ab"; var n : int := 1; var u : string := s + n')


def test_string_subtraction_is_type_error():
    with pytest.raises(RuntimeTypeError):
        run_program('var s : string := "ab"; var u : string := s - s')


def test_unary_minus_on_string_is_type_error():
    with pytest.raises(RuntimeTypeError):
        run_program('var s : string := "ab"; var u : string := -s')


def test_default_values():
    scope = globals_after('var n : int; var s : string; var b : bool')
    assert scope == {'n': 0, 's': '', 'b': True}


def test_bool_defaults_to_true(capsys):
    run_program('var flag : bool; print flag')
    assert capsys.readouterr().out == 'true\n'


def test_declaration_does_not_check_type():
    assert globals_after('var s : string := 5')['s'] == 5


def test_assignment_requires_matching_type():
    with pytest.raises(RuntimeTypeError):
        run_program('var n : int; var s : string := "x"; n := s')


def test_bool_assignment_from_bool_variable():
    scope = globals_after('var a : bool := 1 < 2; var b : bool := 2 < 1; a := b')
    assert scope['a'] is False


def test_names_are_case_insensitive(capsys):
    scope = globals_after('var Count : int; count := 5; COUNT := Count + 1')
    assert scope == {'count': 6}


def test_redeclaration_overwrites():
    assert globals_after('var x : int := 4; var x : string')['x'] == ''


@pytest.mark.parametrize('source', [
    'print missing',
    'missing := 1',
    'var y : int := missing + 1',
    'read missing',
    'var b : bool := missing',
])
def test_undeclared_variable(source, monkeypatch):
    monkeypatch.setattr('sys.stdin', io.StringIO('1\n'))
    with pytest.raises(UndeclaredVariableError):
        run_program(source)


def test_undeclared_variable_position():
    with pytest.raises(UndeclaredVariableError) as exc_info:
        run_program('var x : int;\nprint y')
    assert (exc_info.value.line, exc_info.value.column) == (2, 7)


def test_for_loop_is_half_open(capsys):
    run_program('var i : int; for i in 0 .. 3 do print i end for')
    assert capsys.readouterr().out.split() == ['0', '1', '2']


def test_for_loop_rebinds_variable_and_runs_full_body():
    scope = globals_after('var i : int; var s : int; var n : int;'
                          'for i in 1 .. 4 do s := s + i; n := n + 1 end for')
    assert scope == {'i': 3, 's': 6, 'n': 3}


def test_for_loop_with_empty_range_keeps_value():
    scope = globals_after('var i : int := 42; var n : int; for i in 5 .. 5 do n := n + 1 end for')
    assert scope == {'i': 42, 'n': 0}


def test_for_loop_nested():
    scope = globals_after('var i : int; var j : int; var n : int;'
                          'for i in 0 .. 3 do for j in 0 .. i do n := n + 1 end for end for')
    # 0 + 1 + 2 inner iterations
    assert scope['n'] == 3


def test_for_loop_accepts_unbound_variable():
    scope = globals_after('var n : int; for k in 0 .. 2 do n := n + 1 end for')
    assert scope == {'n': 2, 'k': 1}


def test_for_loop_rejects_non_integer_variable():
    with pytest.raises(RuntimeTypeError):
        run_program('var s : string; for s in 0 .. 2 do print s end for')


def test_for_loop_rejects_non_integer_bounds():
    with pytest.raises(RuntimeTypeError):
        run_program('var i : int; var s : string; for i in 0 .. s do print i end for')


def test_empty_for_loop_is_noop():
    assert globals_after('for i in 0 .. 5 do end for') == {}


def test_if_executes_only_else_branch(capsys):
    scope = globals_after('var b : bool := 2 < 1; var n : int;'
                          'if b do n := 1; print "then" else n := 2; print "else" end if')
    assert capsys.readouterr().out == 'else\n'
    assert scope['n'] == 2


def test_if_executes_only_then_branch(capsys):
    run_program('var x : int := 3; if x = 3 do print "then" else print "else" end if')
    assert capsys.readouterr().out == 'then\n'


def test_if_condition_must_be_boolean():
    with pytest.raises(RuntimeTypeError):
        run_program('var x : int := 3; if x do print "then" end if')


@pytest.mark.parametrize('source,expected', [
    ('var a : bool := 1 < 2; var b : bool := a & a', True),
    ('var a : bool := 1 < 2; var c : bool := 2 < 1; var b : bool := a & c', False),
    ('var a : bool := 1 < 2; var b : bool := !a', False),
    ('var b : bool := 3 = 3', True),
    ('var b : bool := 3 < 3', False),
    ('var b : bool := 1 + 1 = 2', True),
])
def test_boolean_operators(source, expected):
    assert globals_after(source)['b'] is expected


@pytest.mark.parametrize('source', [
    'var n : int := 1; var b : bool := n & n',
    'var n : int := 1; var b : bool := !n',
    'var s : string := "a"; var b : bool := s = s',
    'var a : bool; var b : bool := a < a',
    'var n : int; var b : bool := n',
])
def test_boolean_type_errors(source):
    with pytest.raises(RuntimeTypeError):
        run_program(source)


def test_and_evaluates_right_side_when_left_is_false():
    with pytest.raises(UndeclaredVariableError):
        run_program('var a : bool := 2 < 1; var b : bool := a & missing')
    with pytest.raises(RuntimeTypeError):
        run_program('var a : bool := 2 < 1; var b : bool := a & 5')


def test_loop_variable_membership_uses_folded_name():
    scope = globals_after('var I : int := 9; var n : int; for i in 0 .. 2 do n := n + 1 end for')
    assert scope == {'i': 1, 'n': 2}


def test_print_string_literal(capsys):
    run_program('print "hello world"')
    assert capsys.readouterr().out == 'hello world\n'


def test_read_into_string(monkeypatch):
    monkeypatch.setattr('sys.stdin', io.StringIO('some text\nnext\n'))
    scope = globals_after('var s : string; read s')
    assert scope['s'] == 'some text'


def test_read_at_end_of_input_gives_empty_string(monkeypatch):
    monkeypatch.setattr('sys.stdin', io.StringIO(''))
    assert globals_after('var s : string := "x"; read s')['s'] == ''


def test_read_into_int_keeps_text(monkeypatch):
    monkeypatch.setattr('sys.stdin', io.StringIO('-12\n'))
    assert globals_after('var n : int; read n')['n'] == '-12'


def test_read_into_int_as_number(monkeypatch):
    monkeypatch.setattr('sys.stdin', io.StringIO('-12\n'))
    assert globals_after('var n : int; read n', read_int_as_number=True)['n'] == -12


@pytest.mark.parametrize('text', ['abc\n', '1.5\n', '\n', ' 4\n'])
def test_read_into_int_rejects_non_numeric(text, monkeypatch):
    monkeypatch.setattr('sys.stdin', io.StringIO(text))
    with pytest.raises(InputFormatError):
        run_program('var n : int; read n')


def test_read_into_bool_is_type_error(monkeypatch):
    monkeypatch.setattr('sys.stdin', io.StringIO('true\n'))
    with pytest.raises(RuntimeTypeError):
        run_program('var b : bool; read b')


def test_reads_consume_lines_in_order():
    stdin = io.StringIO('first\nsecond\n')
    interp = run_program('var a : string; var b : string; read a; read b', stdin=stdin)
    assert interp.global_env.as_dict() == {'a': 'first', 'b': 'second'}


def test_explicit_stdout():
    out = io.StringIO()
    run_program('var n : int := 4; print n; print "done"', stdout=out)
    assert out.getvalue() == '4\ndone\n'


def test_error_stops_execution(capsys):
    with pytest.raises(MiniPLError):
        run_program('print "before"; print missing; print "after"')
    assert capsys.readouterr().out == 'before\n'


def test_parse_error_happens_before_execution(capsys):
    with pytest.raises(ParseError):
        run_program('print "before"; print 5')
    assert capsys.readouterr().out == ''


def test_run_accepts_parsed_program(capsys):
    interp = Interpreter()
    interp.run(parse_program('var x : int := 6 * 7; print x'))
    assert capsys.readouterr().out == '42\n'


def test_interpret_without_parser():
    with pytest.raises(ValueError):
        Interpreter().interpret()


def test_debug_trace_file(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    run_program('var x : int := 1; x := x + 1', debug_level=4, debug_file=str(debug_file))
    trace = debug_file.read_text(encoding='utf-8')
    assert 'declare x: int = 1' in trace
    assert 'assign x: int = 2' in trace
    assert 'eat Token(VAR' in trace


def test_debug_trace_levels_one_and_three(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    run_program('var i : int; var b : bool;'
                'if b do print "yes" end if;'
                'for i in 0 .. 2 do print i end for',
                debug_level=3, debug_file=str(debug_file))
    trace = debug_file.read_text(encoding='utf-8')
    assert 'run program with 4 statements' in trace
    assert 'if condition -> true' in trace
    assert 'for i = 0' in trace
    assert 'for i = 1' in trace
    assert "finished, globals = {'i': 1, 'b': True}" in trace
    assert 'eat Token(' not in trace

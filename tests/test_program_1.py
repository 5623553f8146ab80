from pathlib import Path

from minipl.interpreter import Interpreter
from minipl.parser import Parser
from minipl.scanner import Scanner

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_1_arithmetic(capsys):
    with open(EXAMPLES / 'program_1.mpl', 'r', encoding='utf-8') as f:
        source = f.read()
    interp = Interpreter(Parser(Scanner(source)))
    interp.interpret()
    out = capsys.readouterr().out.strip()
    assert out == '30'
    assert interp.global_env.as_dict() == {'a': 2, 'b': 30, 'c': 32}

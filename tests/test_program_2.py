from pathlib import Path

from minipl.interpreter import run_file

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2_counting_loop(capsys):
    interp = run_file(str(EXAMPLES / 'program_2.mpl'))
    out = capsys.readouterr().out.split()
    assert out == ['0', '1', '2', '3', '6']
    # The loop variable keeps the last value of the half-open range.
    assert interp.global_env.get('i') == 3

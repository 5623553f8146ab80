"""CLI entry point for the Mini-PL interpreter.

Usage:
    python -m minipl [-v|-vv|-vvv|-vvvv] [--read-int-as-number] <program_file>
    python -m minipl --emit-ast <program_file>

Options:
  -v                    Increase debug verbosity (can be repeated)
  --emit-ast            Parse the given file and write an AST JSON file next to it
  --read-int-as-number  Store `read` input for int variables as a number

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. After the program finishes its final value
is printed; errors are reported on stderr and exit with status 1.
"""

import argparse
import json
import sys
from pathlib import Path

from termcolor import colored

from .ast_json import ast_to_obj
from .errors import MiniPLError
from .interpreter import Interpreter
from .parser import Parser
from .scanner import Scanner
from .types import to_string


def format_error(error: MiniPLError, source: str, path: str) -> str:
    """Render an error with the offending source line and a caret under it."""
    location = f"{path}:{error.line}:{error.column}: " if error.line else f"{path}: "
    message = colored(location, attrs=['bold'])
    message += colored("error: ", 'red', attrs=['bold'])
    message += f"{error.err.name}: {error.err.message}"
    lines = source.splitlines()
    if error.line and error.line <= len(lines):
        text = lines[error.line - 1]
        message += f"\n  {text}\n  " + ' ' * (error.column - 1) + colored('^', 'red', attrs=['bold'])
    return message


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog='minipl', description="Mini-PL language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--emit-ast', action='store_true', help='write the parsed AST as JSON instead of running')
    parser.add_argument('--read-int-as-number', action='store_true',
                        help='store values read into int variables as numbers instead of text')
    parser.add_argument('--debug-file', default='debug.txt', help='where -v trace output goes')
    parser.add_argument('program', help='Mini-PL program file to execute')
    args = parser.parse_args(argv)

    program_file = Path(args.program)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    try:
        with open(program_file, 'r', encoding='utf-8') as f:
            source = f.read()
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {program_file}: {e}", file=sys.stderr)
        sys.exit(1)
    if not source:
        print("No input received")
        return

    try:
        if args.emit_ast:
            tree = Parser(Scanner(source)).parse()
            out_path = program_file.with_name(program_file.name + '.ast.json')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(ast_to_obj(tree), out, ensure_ascii=False, indent=2)
            print(str(out_path))
            return
        interpreter = Interpreter(
            Parser(Scanner(source)),
            debug_level=args.v,
            debug_file=args.debug_file,
            read_int_as_number=args.read_int_as_number,
        )
        result = interpreter.interpret()
    except MiniPLError as e:
        print(format_error(e, source, str(program_file)), file=sys.stderr)
        sys.exit(1)
    print(to_string(result))


if __name__ == '__main__':
    main()

"""CLI entry point for the Lox interpreter.

Usage:
    python -m lox [-v|-vv|-vvv|-vvvv] [--grammar] [script]
    python -m lox [-v...] [--grammar] --emit-ast <script>
    python -m lox [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --grammar     Parse with the lark grammar instead of the hand-written parser
  --emit-ast    Parse the given .lox file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Without a script the interpreter starts an interactive shell. Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero.

Exit codes: 64 for usage errors and missing files, 65 for scan and parse
errors, 70 for runtime errors.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .ast_json import program_from_obj, program_to_obj
from .grammar import parse_with_grammar
from .interpreter import Interpreter
from .parser import parse_program
from .reporter import Reporter
from .shell import Shell

EX_USAGE = 64
EX_DATAERR = 65
EX_SOFTWARE = 70


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(EX_USAGE)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def ast_output_path(path: Path) -> Path:
    if path.suffix != '':
        return path.with_suffix(path.suffix + '.ast.json')
    return path.with_name(path.name + '.ast.json')


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog='lox', description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--grammar', action='store_true', help='parse with the lark grammar front end')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='LOX_FILE', help='emit AST JSON for the given .lox file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('script', nargs='?', help='Lox script to execute (if empty, starts the shell)')
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        # argparse exits with 2 on bad usage
        sys.exit(EX_USAGE if exc.code else 0)

    parse = parse_with_grammar if args.grammar else parse_program

    # Emit AST mode
    if args.emit_ast:
        path = Path(args.emit_ast)
        source = read_source(path)
        statements, diagnostics = parse(source)
        if diagnostics:
            reporter = Reporter(str(path), source)
            reporter.report(diagnostics)
            sys.exit(reporter.exit_code())
        out_path = ast_output_path(path)
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(program_to_obj(statements), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    with Interpreter(debug_level=args.v) as interpreter:
        # Execute from AST JSON
        if args.ast:
            path = Path(args.ast)
            try:
                statements = program_from_obj(json.loads(read_source(path)))
            except ValueError as exc:
                print(f"Error: {path} is not a Lox AST: {exc}", file=sys.stderr)
                sys.exit(EX_DATAERR)
            reporter = Reporter(str(path))
            reporter.report(interpreter.run_statements(statements))
            sys.exit(reporter.exit_code())

        # Interactive mode
        if not args.script:
            Shell(interpreter, Reporter()).cmdloop()
            return

        path = Path(args.script)
        source = read_source(path)
        reporter = Reporter(str(path), source)
        statements, diagnostics = parse(source)
        if diagnostics:
            reporter.report(diagnostics)
        else:
            reporter.report(interpreter.run_statements(statements))
        sys.exit(reporter.exit_code())


if __name__ == '__main__':
    main()

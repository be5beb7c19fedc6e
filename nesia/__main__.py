"""CLI entry point for the Nesia interpreter.

Usage:
    python -m nesia [-v|-vv|-vvv|-vvvv] <program_file>
    python -m nesia [-v...] --emit-ast <program_file>
    python -m nesia [-v...] --ast <ast_json_file>
    python -m nesia --tokens <program_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .nesia file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --tokens      Print the token stream of the given .nesia file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.

Exit status is 0 on success, 1 for a missing file, a parse error or a
runtime error, and 2 when the program recursed too deeply.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .ast import Program
from .ast_json import ast_to_obj, ast_from_obj
from .errors import NesiaError, ParseError
from .interpreter import Interpreter
from .lexer import tokenize
from .parser import parse


def read_source(path_arg: str) -> str:
    program_file = Path(path_arg)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def parse_source(source: str) -> Program:
    try:
        return parse(tokenize(source))
    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        sys.exit(1)
    except RecursionError:
        print("Fatal error: maximum recursion depth exceeded", file=sys.stderr)
        sys.exit(2)


def execute(ast_program: Program, debug_level: int) -> None:
    interpreter = Interpreter(debug_level=debug_level)
    try:
        interpreter.run(ast_program)
    except NesiaError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)
    except RecursionError:
        print("Fatal error: maximum recursion depth exceeded", file=sys.stderr)
        sys.exit(2)


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(prog='nesia', description="Nesia language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='NESIA_FILE', help='emit AST JSON for the given .nesia file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    group.add_argument('--tokens', metavar='NESIA_FILE', help='print the token stream of the given .nesia file')
    parser.add_argument('program', nargs='?', help='Nesia program file (.nesia) to execute')
    args = parser.parse_args(argv)

    # Dump tokens mode
    if args.tokens:
        source = read_source(args.tokens)
        try:
            tokens = tokenize(source)
        except ParseError as e:
            print(f"Parse error: {e}", file=sys.stderr)
            sys.exit(1)
        for tok in tokens:
            print(f"{tok.line}:{tok.column}\t{tok.kind}\t{tok.lexeme}")
        return

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        ast_program = parse_source(read_source(args.emit_ast))
        obj = ast_to_obj(ast_program)
        out_path = program_file.with_suffix(program_file.suffix + '.ast.json') if program_file.suffix != '' else program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        with open(ast_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        try:
            ast_program = ast_from_obj(data)
        except (TypeError, ValueError, KeyError) as e:
            print(f"Error: invalid AST file {ast_path}: {e}", file=sys.stderr)
            sys.exit(1)
        execute(ast_program, args.v)
        return

    # Default: execute source file
    if not args.program:
        parser.error('missing program file; or use --emit-ast/--ast/--tokens')
    ast_program = parse_source(read_source(args.program))
    execute(ast_program, args.v)


if __name__ == '__main__':
    main()

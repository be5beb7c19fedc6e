# Nesia language package
# This package provides the parser and tree-walking interpreter for the Nesia language.
from .errors import NesiaError, ParseError, LexError
from .interpreter import run_program, run_file, Interpreter
from .parser import parse, parse_program

__all__ = [
    'run_program',
    'run_file',
    'parse',
    'parse_program',
    'Interpreter',
    'NesiaError',
    'ParseError',
    'LexError',
]

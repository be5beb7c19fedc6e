from pathlib import Path

import pytest

from nesia.errors import NesiaError
from nesia.interpreter import Interpreter
from nesia.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_8_error_stops_the_run(capsys):
    source = (EXAMPLES / 'program_8.nesia').read_text(encoding='utf-8')
    ast = parse_program(source)
    interp = Interpreter()
    with pytest.raises(NesiaError) as excinfo:
        interp.run(ast)
    assert excinfo.value.name == 'DivisionByZero'
    # output printed before the failing statement is kept
    out = capsys.readouterr().out.strip()
    assert out == 'before'

from pathlib import Path
from nesia.interpreter import Interpreter
from nesia.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_3_variables(capsys):
    source = (EXAMPLES / 'program_3.nesia').read_text(encoding='utf-8')
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == '7'
    assert interp.global_env.get('x') == 10.0

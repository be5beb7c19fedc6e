import pytest

from nesia.ast import BinaryOp, ExprStmt, PrintStmt, number
from nesia.errors import NesiaError, ParseError
from nesia.interpreter import Interpreter, run_program
from nesia.types import NIL, format_number


def output(capsys):
    return capsys.readouterr().out.strip().split('\n')


def run_error(source):
    with pytest.raises(NesiaError) as excinfo:
        run_program(source)
    assert not isinstance(excinfo.value, ParseError)
    return excinfo.value


def test_string_concatenation(capsys):
    run_program('print("a" + "b");')
    assert output(capsys) == ['ab']


@pytest.mark.parametrize('source', [
    '"a" + 1;',
    '1 + "a";',
    '"a" - "b";',
    '2 * "b";',
    '(1 < 2) + 1;',
    '"a" < "b";',
])
def test_operand_type_mismatch_is_type_error(source):
    assert run_error(source).name == 'TypeError'


def test_division_by_zero_is_an_error():
    err = run_error('1 / 0;')
    assert err.name == 'DivisionByZero'
    err = run_error('let z = 0; 5 / (z - z);')
    assert err.name == 'DivisionByZero'


def test_zero_divided_by_a_number(capsys):
    run_program('print(0 / 5);')
    assert output(capsys) == ['0']


def test_equality_across_types_is_false_not_an_error(capsys):
    run_program('''
        func nothing() { }
        print(1 == "1");
        print(1 != "1");
        print(nothing() == nothing());
        print(nothing() == 0);
        print((1 < 2) == (3 < 4));
        print(nothing == nothing);
        print("x" == "x");
        print(2 == 2.0);
    ''')
    assert output(capsys) == ['false', 'true', 'true', 'false', 'true', 'false', 'true', 'true']


def test_comparisons(capsys):
    run_program('print(1 < 2); print(2 <= 2); print(3 > 4); print(4 >= 5);')
    assert output(capsys) == ['true', 'true', 'false', 'false']


def test_function_call_prints_and_yields_nil(capsys):
    interp = run_program('''
        func add(a, b) { let s = a + b; print(s); }
        let result = add(2, 3);
    ''')
    assert output(capsys) == ['5']
    assert interp.global_env.get('result') is NIL


def test_function_locals_do_not_leak():
    err = run_error('func f() { let inside = 1; } f(); print(inside);')
    assert err.name == 'NameError'
    assert 'inside' in err.message


def test_arity_error_names_both_counts():
    err = run_error('func add(a, b) { } add(1, 2, 3);')
    assert err.name == 'ArityError'
    assert '2' in err.message and '3' in err.message


def test_undefined_name_is_name_error():
    err = run_error('print(missing + 1);')
    assert err.name == 'NameError'
    assert 'missing' in err.message


def test_calling_a_non_function_is_type_error():
    err = run_error('let x = 1; x();')
    assert err.name == 'TypeError'
    assert 'not callable' in err.message


def test_callee_is_evaluated_before_arguments():
    err = run_error('f(g);')
    assert "'f'" in err.message


def test_operands_are_evaluated_left_to_right(capsys):
    run_program('''
        func a() { print("a"); }
        func b() { print("b"); }
        a() == b();
        b() != a();
    ''')
    assert output(capsys) == ['a', 'b', 'b', 'a']


def test_arguments_are_evaluated_left_to_right(capsys):
    run_program('''
        func say(word) { print(word); }
        func three(x, y, z) { }
        three(say("one"), say("two"), say("three"));
    ''')
    assert output(capsys) == ['one', 'two', 'three']


def test_duplicate_parameter_names_later_wins(capsys):
    run_program('func f(a, a) { print(a); } f(1, 2);')
    assert output(capsys) == ['2']


def test_let_redeclaration_overwrites(capsys):
    interp = run_program('let x = 1; let x = "again"; print(x);')
    assert output(capsys) == ['again']
    assert interp.global_env.values['x'] == 'again'


def test_assignment_to_undeclared_name_is_name_error():
    interp = Interpreter()
    with pytest.raises(NesiaError) as excinfo:
        run_program('y = 1;', interpreter=interp)
    assert excinfo.value.name == 'NameError'
    assert 'y' not in interp.global_env.values


def test_assignment_updates_nearest_binding(capsys):
    # '=' updates the existing binding rather than declaring a new one
    run_program('''
        let x = "global";
        func local() { let x = "local"; x = "local changed"; print(x); }
        func outer() { x = "global changed"; }
        local();
        print(x);
        outer();
        print(x);
    ''')
    assert output(capsys) == ['local changed', 'global', 'global changed']


def test_function_body_sees_declaration_scope_not_caller_scope(capsys):
    run_program('''
        let x = "global";
        func show() { print(x); }
        func caller() { let x = "caller"; show(); }
        caller();
    ''')
    assert output(capsys) == ['global']


def test_closures_capture_each_call_separately(capsys):
    run_program('''
        let first = 0;
        let second = 0;
        func store(fn) {
            first = fn;
        }
        func remember(value) {
            func recall() { print(value); }
            store(recall);
        }
        remember("one");
        second = first;
        remember("two");
        second();
        first();
    ''')
    assert output(capsys) == ['one', 'two']


def test_function_can_call_itself_until_the_stack_runs_out():
    with pytest.raises(RecursionError):
        run_program('func loop() { loop(); } loop();')


def test_print_formats(capsys):
    run_program('''
        func add(a, b) { }
        print(add);
        print(add(1, 2));
        print(0.1 + 0.2);
        print(10 / 4);
        print(-7);
        print(1 == 1);
    ''')
    assert output(capsys) == ['<fn add>', 'nil', '0.30000000000000004', '2.5', '-7', 'true']


def test_format_number_special_values():
    assert format_number(float('inf')) == 'inf'
    assert format_number(float('-inf')) == '-inf'
    assert format_number(float('nan')) == 'NaN'
    assert format_number(1e21) == '1000000000000000000000'


def test_small_numbers_print_without_exponent(capsys):
    run_program('print(1 / 10000000); print(0 - 3 / 20000000000);')
    assert output(capsys) == ['0.0000001', '-0.00000000015']
    assert format_number(2.5) == '2.5'


def test_interpreters_do_not_share_globals():
    run_program('let shared = 1;')
    err = run_error('print(shared);')
    assert err.name == 'NameError'


def test_interpret_runs_statements_against_globals(capsys):
    interp = Interpreter()
    interp.interpret([PrintStmt(BinaryOp('*', number(6), number(7)))])
    assert output(capsys) == ['42']


def test_assignment_needs_an_identifier_target():
    interp = Interpreter()
    with pytest.raises(NesiaError) as excinfo:
        interp.interpret([ExprStmt(BinaryOp('=', number(1), number(2)))])
    assert excinfo.value.name == 'TypeError'


def test_statements_before_an_error_keep_their_effects(capsys):
    interp = Interpreter()
    with pytest.raises(NesiaError):
        run_program('let kept = 1; print(kept); print(nope);', interpreter=interp)
    assert output(capsys) == ['1']
    assert interp.global_env.get('kept') == 1.0


def test_debug_trace_is_written_to_file(tmp_path, capsys):
    trace = tmp_path / 'debug.txt'
    interp = Interpreter(debug_level=4, debug_file=str(trace))
    run_program('let x = 2; func add(a, b) { print(a + b); } add(x, 3);', interpreter=interp)
    assert output(capsys) == ['5']
    lines = trace.read_text(encoding='utf-8').splitlines()
    assert 'execute VarDecl' in lines
    assert 'define x: Number = 2' in lines
    assert 'define function add(a, b)' in lines
    assert 'call add(2, 3) depth=1' in lines
    assert '2 + 3 -> 5' in lines


def test_reused_interpreter_keeps_tracing(tmp_path):
    trace = tmp_path / 'debug.txt'
    interp = Interpreter(debug_level=1, debug_file=str(trace))
    run_program('let x = 1;', interpreter=interp)
    run_program('print(x);', interpreter=interp)
    assert trace.read_text(encoding='utf-8').splitlines() == ['execute VarDecl', 'execute PrintStmt']
    assert interp.debug_fp is None


def test_interpreter_as_context_manager_closes_trace(tmp_path, capsys):
    trace = tmp_path / 'debug.txt'
    with Interpreter(debug_level=1, debug_file=str(trace)) as interp:
        interp.interpret([PrintStmt(number(3))])
        assert interp.debug_fp is not None
    assert interp.debug_fp is None
    assert output(capsys) == ['3']
    assert trace.read_text(encoding='utf-8').splitlines() == ['execute PrintStmt']


def test_debug_level_limits_the_trace(tmp_path):
    trace = tmp_path / 'debug.txt'
    interp = Interpreter(debug_level=1, debug_file=str(trace))
    run_program('let x = 1 + 1;', interpreter=interp)
    assert trace.read_text(encoding='utf-8').splitlines() == ['execute VarDecl']

"""Tree-walking interpreter for the Nesia language.

The interpreter executes a parsed :class:`~nesia.ast.Program` statement by
statement against a chain of :class:`~nesia.environment.Environment`
scopes. The global scope belongs to the interpreter instance and lives as
long as it does; every function call gets a fresh scope whose parent is
the scope the function was declared in, so functions close over their
defining environment.

All failures are raised as :class:`~nesia.errors.NesiaError` and abort the
run at the statement where they occur. Output already printed stays
printed.
"""

from __future__ import annotations

import sys
from typing import Any, List, Optional, Sequence

from .ast import (
    Program, ExprStmt, VarDecl, PrintStmt, FuncDecl,
    Literal, Ident, BinaryOp, Call, Node,
)
from .environment import Environment
from .errors import NesiaError
from .parser import parse_program
from .types import (
    NIL, ErrorVal, FunctionValue,
    is_number, to_string, type_name, values_equal,
)


class Interpreter:
    """Core interpreter that executes Nesia AST."""
    def __init__(self, debug_level: int = 0, debug_file: Optional[str] = 'debug.txt'):
        self.global_env = Environment()
        self.debug_level = debug_level
        self.debug_file = debug_file
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 and debug_file else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_file is None:
                print(msg, file=sys.stderr)
                return
            if self.debug_fp is None:
                # reopened after close(); keep the earlier runs' trace
                self.debug_fp = open(self.debug_file, 'a')
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    # Public API
    def run(self, program: Program) -> None:
        try:
            self.interpret(program.body)
        finally:
            self.close()

    def interpret(self, statements: Sequence[Node]) -> None:
        for stmt in statements:
            if self.debug_level >= 1:
                self.debug(f"execute {type(stmt).__name__}")
            self.execute(stmt, self.global_env)

    def execute_block(self, statements: Sequence[Node], env: Environment) -> None:
        for stmt in statements:
            self.execute(stmt, env)

    def execute(self, node: Node, env: Environment) -> None:
        if isinstance(node, ExprStmt):
            self.evaluate(node.expr, env)
            return
        if isinstance(node, PrintStmt):
            value = self.evaluate(node.expr, env)
            print(to_string(value))
            return
        if isinstance(node, VarDecl):
            value = self.evaluate(node.value, env)
            env.define(node.name, value)
            if self.debug_level >= 2:
                self.debug(f"define {node.name}: {type_name(value)} = {to_string(value)}")
            return
        if isinstance(node, FuncDecl):
            func_value = FunctionValue(node.name, list(node.params), list(node.body), env)
            env.define(node.name, func_value)
            if self.debug_level >= 2:
                self.debug(f"define function {node.name}({', '.join(node.params)})")
            return
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Ident):
            return env.get(node.name)
        if isinstance(node, BinaryOp):
            if node.op == '=':
                return self.evaluate_assign(node, env)
            left = self.evaluate(node.left, env)
            right = self.evaluate(node.right, env)
            result = self.apply_binary_op(node.op, left, right)
            if self.debug_level >= 4:
                self.debug(f"{to_string(left)} {node.op} {to_string(right)} -> {to_string(result)}")
            return result
        if isinstance(node, Call):
            func = self.evaluate(node.func, env)
            args = [self.evaluate(arg, env) for arg in node.args]
            return self.call_function(func, args)
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def evaluate_assign(self, node: BinaryOp, env: Environment) -> Any:
        if not isinstance(node.left, Ident):
            raise NesiaError(ErrorVal('TypeError', 'invalid assignment target'))
        value = self.evaluate(node.right, env)
        # updates the nearest scope that already binds the name
        env.assign(node.left.name, value)
        if self.debug_level >= 2:
            self.debug(f"assign {node.left.name} = {to_string(value)}")
        return value

    def call_function(self, func: Any, args: List[Any]) -> Any:
        if not isinstance(func, FunctionValue):
            raise NesiaError(ErrorVal('TypeError', f'{type_name(func)} {to_string(func)} is not callable'))
        if len(args) != func.arity:
            raise NesiaError(ErrorVal(
                'ArityError',
                f"{func.name} expects {func.arity} arguments but got {len(args)}",
            ))
        call_env = Environment.with_enclosing(func.closure)
        for param, arg in zip(func.params, args):
            call_env.define(param, arg)
        if self.debug_level >= 3:
            rendered = ', '.join(to_string(a) for a in args)
            self.debug(f"call {func.name}({rendered}) depth={call_env.depth()}")
        self.execute_block(func.body, call_env)
        return NIL

    def apply_binary_op(self, op: str, a: Any, b: Any) -> Any:
        if op == '+':
            if is_number(a) and is_number(b):
                return a + b
            if isinstance(a, str) and isinstance(b, str):
                return a + b
            raise NesiaError(ErrorVal('TypeError', f"unsupported + for {type_name(a)} and {type_name(b)}"))
        if op in ('-', '*', '/'):
            if not (is_number(a) and is_number(b)):
                raise NesiaError(ErrorVal('TypeError', f"unsupported {op} for {type_name(a)} and {type_name(b)}"))
            if op == '-':
                return a - b
            if op == '*':
                return a * b
            if b == 0.0:
                raise NesiaError(ErrorVal('DivisionByZero', 'division by zero'))
            return a / b
        if op in ('==', '!='):
            eq = values_equal(a, b)
            return eq if op == '==' else not eq
        if op in ('<', '>', '<=', '>='):
            if not (is_number(a) and is_number(b)):
                raise NesiaError(ErrorVal('TypeError', f"comparison {op} not supported for {type_name(a)} and {type_name(b)}"))
            if op == '<': return a < b
            if op == '>': return a > b
            if op == '<=': return a <= b
            return a >= b
        raise NesiaError(ErrorVal('TypeError', f'unknown operator {op}'))


def run_program(source: str, debug_level: int = 0, interpreter: Optional[Interpreter] = None) -> Interpreter:
    """Convenience function to parse and run a Nesia program from source string."""
    ast_program = parse_program(source)
    if interpreter is None:
        interpreter = Interpreter(debug_level=debug_level)
    interpreter.run(ast_program)
    return interpreter


def run_file(file_path: str, debug_level: int = 0) -> Interpreter:
    """Parse and execute a Nesia file, returning the interpreter instance."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_program(source, debug_level=debug_level)

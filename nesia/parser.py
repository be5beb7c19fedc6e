"""Recursive-descent parser for the Nesia language.

The parser consumes the token list produced by :mod:`nesia.lexer` in a
single left-to-right pass with one token of lookahead and builds the AST
defined in :mod:`nesia.ast`. Operator precedence follows the order of the
productions, lowest first::

    expression := equality
    equality   := comparison (('==' | '!=') comparison)*
    comparison := term (('>' | '>=' | '<' | '<=') term)*
    term       := factor (('+' | '-') factor)*
    factor     := unary (('*' | '/') unary)*
    unary      := '-' unary | primary
    primary    := NUMBER | STRING | IDENT call? | '(' expression ')'

The first grammar violation raises :class:`~nesia.errors.ParseError`; no
partial tree is ever returned.
"""

from __future__ import annotations

from typing import List, Sequence, Union

from .ast import (
    Program, ExprStmt, VarDecl, PrintStmt, FuncDecl,
    Ident, BinaryOp, Call, Node, number, string,
)
from .errors import ParseError
from .lexer import Token, tokenize


class Parser:
    def __init__(self, tokens: Sequence[Token]):
        if not tokens or tokens[-1].kind != 'EOF':
            raise ParseError("token stream must end with EOF", 1, 1)
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Token:
        # past the end we keep answering with the final EOF token
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return self.tokens[-1]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def is_at_end(self) -> bool:
        return self.peek().kind == 'EOF'

    def advance(self) -> Token:
        token = self.peek()
        if not self.is_at_end():
            self.pos += 1
        return token

    def match(self, expected: Union[str, List[str]]) -> bool:
        kind = self.peek().kind
        if isinstance(expected, list):
            return kind in expected
        return kind == expected

    def error(self, message: str) -> ParseError:
        token = self.peek()
        return ParseError(f"{message}, found {token.describe()}", token.line, token.column)

    def consume(self, expected: str, message: str) -> Token:
        if self.match(expected):
            return self.advance()
        raise self.error(message)

    # Statements

    def parse_program(self) -> Program:
        statements: List[Node] = []
        while not self.is_at_end():
            statements.append(self.parse_statement())
        return Program(statements)

    def parse_statement(self) -> Node:
        if self.match('func'):
            return self.parse_func_decl()
        if self.match('let'):
            return self.parse_var_decl()
        if self.match('print'):
            return self.parse_print_stmt()
        return self.parse_expr_stmt()

    def parse_func_decl(self) -> FuncDecl:
        self.consume('func', "expected 'func'")
        name = self.consume('IDENT', "expected function name").literal
        self.consume('(', "expected '(' after function name")
        params: List[str] = []
        if not self.match(')'):
            params.append(self.consume('IDENT', "expected parameter name").literal)
            while self.match(','):
                self.advance()
                params.append(self.consume('IDENT', "expected parameter name").literal)
        self.consume(')', "expected ')' after parameters")
        self.consume('{', "expected '{' before function body")
        body: List[Node] = []
        while not self.match('}'):
            if self.is_at_end():
                raise self.error("expected '}' after function body")
            body.append(self.parse_statement())
        self.consume('}', "expected '}' after function body")
        return FuncDecl(name, params, body)

    def parse_var_decl(self) -> VarDecl:
        self.consume('let', "expected 'let'")
        name = self.consume('IDENT', "expected variable name").literal
        self.consume('=', "expected '=' after variable name")
        value = self.parse_expression()
        self.consume(';', "expected ';' after variable declaration")
        return VarDecl(name, value)

    def parse_print_stmt(self) -> PrintStmt:
        self.consume('print', "expected 'print'")
        self.consume('(', "expected '(' after 'print'")
        value = self.parse_expression()
        self.consume(')', "expected ')' after value")
        self.consume(';', "expected ';' after value")
        return PrintStmt(value)

    def parse_expr_stmt(self) -> ExprStmt:
        # a target that starts with '(' is grouped, e.g. `(x) = 1;`
        grouped = self.match('(')
        expr = self.parse_expression()
        # `name = value;` is the only place '=' may appear outside a `let`
        if self.match('='):
            if grouped or not isinstance(expr, Ident):
                raise self.error("invalid assignment target")
            self.advance()
            value = self.parse_expression()
            expr = BinaryOp('=', expr, value)
        self.consume(';', "expected ';' after expression")
        return ExprStmt(expr)

    # Expressions

    def parse_expression(self) -> Node:
        return self.parse_equality()

    def parse_equality(self) -> Node:
        node = self.parse_comparison()
        while self.match(['==', '!=']):
            op_token = self.advance()
            right = self.parse_comparison()
            node = BinaryOp(op_token.kind, node, right)
        return node

    def parse_comparison(self) -> Node:
        node = self.parse_term()
        while self.match(['>', '>=', '<', '<=']):
            op_token = self.advance()
            right = self.parse_term()
            node = BinaryOp(op_token.kind, node, right)
        return node

    def parse_term(self) -> Node:
        node = self.parse_factor()
        while self.match(['+', '-']):
            op_token = self.advance()
            right = self.parse_factor()
            node = BinaryOp(op_token.kind, node, right)
        return node

    def parse_factor(self) -> Node:
        node = self.parse_unary()
        while self.match(['*', '/']):
            op_token = self.advance()
            right = self.parse_unary()
            node = BinaryOp(op_token.kind, node, right)
        return node

    def parse_unary(self) -> Node:
        if self.match('-'):
            self.advance()
            operand = self.parse_unary()
            # negation is subtraction from zero
            return BinaryOp('-', number(0.0), operand)
        return self.parse_primary()

    def parse_primary(self) -> Node:
        token = self.peek()
        if token.kind == 'NUMBER':
            self.advance()
            return number(token.literal)
        if token.kind == 'STRING':
            self.advance()
            return string(token.literal)
        if token.kind == 'IDENT':
            self.advance()
            node: Node = Ident(token.literal)
            if self.match('('):
                node = self.parse_call(node)
            return node
        if token.kind == '(':
            self.advance()
            expr = self.parse_expression()
            self.consume(')', "expected ')' after expression")
            return expr
        raise self.error("expected expression")

    def parse_call(self, callee: Node) -> Call:
        self.consume('(', "expected '('")
        args: List[Node] = []
        if not self.match(')'):
            args.append(self.parse_expression())
            while self.match(','):
                self.advance()
                args.append(self.parse_expression())
        self.consume(')', "expected ')' after arguments")
        return Call(callee, args)


def parse(tokens: Sequence[Token]) -> Program:
    """Parse a token list into a Program AST."""
    return Parser(tokens).parse_program()


def parse_program(source: str) -> Program:
    """Tokenize and parse Nesia source code into a Program AST."""
    return parse(tokenize(source))

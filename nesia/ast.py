"""Abstract Syntax Tree (AST) definitions for the Nesia language.

The AST classes defined in this module represent the syntactic structure
of parsed Nesia programs. They are produced by the parser and walked by
the interpreter. Nodes are frozen: a tree is never modified after it is
built, so a function body can be executed any number of times.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Any


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class Program(Node):
    body: List[Node]


# Statements

@dataclass(frozen=True)
class ExprStmt(Node):
    expr: Node


@dataclass(frozen=True)
class VarDecl(Node):
    name: str
    value: Node


@dataclass(frozen=True)
class PrintStmt(Node):
    expr: Node


@dataclass(frozen=True)
class FuncDecl(Node):
    name: str
    params: List[str]
    body: List[Node]


# Expressions

@dataclass(frozen=True)
class Literal(Node):
    value: Any
    literal_type: str  # 'Number' or 'String'


@dataclass(frozen=True)
class Ident(Node):
    name: str


@dataclass(frozen=True)
class BinaryOp(Node):
    op: str
    left: Node
    right: Node


@dataclass(frozen=True)
class Call(Node):
    func: Node
    args: List[Node]


def number(value: float) -> Literal:
    return Literal(float(value), 'Number')


def string(value: str) -> Literal:
    return Literal(value, 'String')

"""Tokenizer for the Nesia language.

Source text is split into tokens by a Lark lexer configured from a small
terminal grammar. Lark gives us longest-match operators and keyword
handling for free: a string terminal such as ``"let"`` that is fully
matched by the ``IDENT`` pattern is reported as the keyword, while
``letter`` stays an identifier.

The resulting Lark tokens are converted to :class:`Token` records and the
stream is always terminated with an ``EOF`` token, which is the contract
the parser relies on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Tuple

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import LexError


@dataclass
class Token:
    kind: str
    literal: Any
    line: int
    column: int
    lexeme: str = ''

    def describe(self) -> str:
        if self.kind == 'EOF':
            return 'end of input'
        return repr(self.lexeme)


NESIA_TOKENS = r"""
    start: _token*
    _token: NUMBER | STRING | IDENT
          | FUNC | LET | PRINT | CLASS
          | EQUAL_EQUAL | BANG_EQUAL | GREATER_EQUAL | LESS_EQUAL
          | GREATER | LESS | EQUAL
          | PLUS | MINUS | STAR | SLASH
          | LPAREN | RPAREN | LBRACE | RBRACE | COMMA | SEMICOLON

    FUNC: "func"
    LET: "let"
    PRINT: "print"
    CLASS: "class"

    EQUAL_EQUAL: "=="
    BANG_EQUAL: "!="
    GREATER_EQUAL: ">="
    LESS_EQUAL: "<="
    GREATER: ">"
    LESS: "<"
    EQUAL: "="
    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    LPAREN: "("
    RPAREN: ")"
    LBRACE: "{"
    RBRACE: "}"
    COMMA: ","
    SEMICOLON: ";"

    NUMBER: /[0-9]+(\.[0-9]*)?/
    STRING: /"[^"]*"/ | /'[^']*'/
    IDENT: /[^\W\d]\w*/

    %import common.WS
    %ignore WS
"""


NESIA_LEXER = Lark(
    NESIA_TOKENS,
    parser='lalr',
    lexer='basic',
)


# Keywords and punctuation use their own text as the token kind, so the
# parser can match on '==' or 'let' directly.
def convert_token(tok) -> Token:
    if tok.type == 'NUMBER':
        return Token('NUMBER', float(tok.value), tok.line, tok.column, str(tok))
    if tok.type == 'STRING':
        return Token('STRING', str(tok)[1:-1], tok.line, tok.column, str(tok))
    if tok.type == 'IDENT':
        return Token('IDENT', str(tok), tok.line, tok.column, str(tok))
    return Token(str(tok), None, tok.line, tok.column, str(tok))


def end_position(source: str) -> Tuple[int, int]:
    """Return the (line, column) just past the last character of ``source``."""
    line = source.count('\n') + 1
    column = len(source) - source.rfind('\n')
    return line, column


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens ending with ``EOF``."""
    tokens: List[Token] = []
    try:
        for tok in NESIA_LEXER.lex(source):
            tokens.append(convert_token(tok))
    except UnexpectedCharacters as e:
        raise LexError(f"unexpected character {e.char!r}", e.line, e.column) from None
    line, column = end_position(source)
    tokens.append(Token('EOF', None, line, column))
    return tokens

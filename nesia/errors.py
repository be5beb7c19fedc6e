from nesia.types import ErrorVal


class NesiaError(Exception):
    """Exception type used to propagate Nesia errors."""
    def __init__(self, err: ErrorVal):
        super().__init__(f"{err.name}: {err.message}")
        self.err = err

    @property
    def name(self) -> str:
        return self.err.name

    @property
    def message(self) -> str:
        return self.err.message


class ParseError(NesiaError):
    """Raised for source that does not match the grammar."""
    kind = 'ParseError'

    def __init__(self, message: str, line: int, column: int):
        super().__init__(ErrorVal(self.kind, f"{message} at line {line}, column {column}"))
        self.line = line
        self.column = column


class LexError(ParseError):
    """Raised when the source contains a character no token starts with."""
    kind = 'LexError'

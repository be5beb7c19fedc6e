from typing import Any, Dict, Optional
from nesia.errors import NesiaError
from nesia.types import ErrorVal


class Environment:
    """Represents a scope mapping identifiers to values, linked to its parent scope."""
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    @classmethod
    def with_enclosing(cls, parent: 'Environment') -> 'Environment':
        return cls(parent=parent)

    def define(self, name: str, value: Any):
        # always the innermost scope; an existing binding here is overwritten
        self.values[name] = value

    def get(self, name: str) -> Any:
        env = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.parent
        raise NesiaError(ErrorVal('NameError', f"undefined variable '{name}'"))

    def assign(self, name: str, value: Any):
        env = self
        while env is not None:
            if name in env.values:
                env.values[name] = value
                return
            env = env.parent
        raise NesiaError(ErrorVal('NameError', f"undefined variable '{name}'"))

    def depth(self) -> int:
        """Number of scopes between this one and the global scope."""
        n = 0
        env = self.parent
        while env is not None:
            n += 1
            env = env.parent
        return n

from typing import Dict, Optional

from slang.errors import SlangNameError
from slang.types import Value


class Environment:
    """Represents a scope mapping identifiers to values.

    Scopes form a chain through `parent`. A scope references its parent
    but never its children, so a block's scope is released as soon as the
    block finishes evaluating.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Value] = {}

    def get(self, name: str, line: Optional[int] = None, column: Optional[int] = None) -> Value:
        env = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.parent
        raise SlangNameError(f'undefined variable {name}', line, column)

    def define(self, name: str, value: Value):
        # redeclaring in the same scope overwrites; outer scopes are untouched
        self.values[name] = value

    def __contains__(self, name: str) -> bool:
        env = self
        while env is not None:
            if name in env.values:
                return True
            env = env.parent
        return False

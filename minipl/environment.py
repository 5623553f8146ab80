from typing import Any, Dict, Optional

from minipl.errors import UndeclaredVariableError
from minipl.tokens import Token
from minipl.types import TypeSpec, default_value


class Environment:
    """The single global variable table of a Mini-PL run.

    Names are case-insensitive: every key is stored and looked up in its
    case-folded form, so `Count` and `count` share one slot.
    """
    def __init__(self):
        self.values: Dict[str, Any] = {}

    @staticmethod
    def canonical(name: str) -> str:
        return name.lower()

    def __contains__(self, name: str) -> bool:
        return self.canonical(name) in self.values

    def get(self, name: str, token: Optional[Token] = None) -> Any:
        key = self.canonical(name)
        if key in self.values:
            return self.values[key]
        line, column = (token.line, token.column) if token else (None, None)
        raise UndeclaredVariableError(f'variable {name} used before declaration', line, column)

    def lookup(self, name: str) -> Optional[Any]:
        """Like `get` but returns None for an unbound name."""
        return self.values.get(self.canonical(name))

    def set(self, name: str, value: Any):
        self.values[self.canonical(name)] = value

    def declare(self, name: str, type_spec: TypeSpec, value: Any = None):
        if value is None:
            value = default_value(type_spec)
        self.set(name, value)

    def as_dict(self) -> Dict[str, Any]:
        return dict(self.values)

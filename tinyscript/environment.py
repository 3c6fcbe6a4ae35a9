from typing import Any, Dict, Optional


class Environment:
    """A scope frame mapping names to values (or, in the type checker, to types).

    Frames form a stack through `parent`. Lookups walk outwards, but writes
    always land in the frame they are made on, shadowing any outer binding.
    Discarding a child frame therefore undoes every write made while it was
    current, including writes to names that existed before the block began.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    @property
    def depth(self) -> int:
        return 0 if self.parent is None else self.parent.depth + 1

    def child(self) -> 'Environment':
        return Environment(parent=self)

    def __contains__(self, name: str) -> bool:
        if name in self.values:
            return True
        return self.parent is not None and name in self.parent

    def get(self, name: str, default: Any = None) -> Any:
        if name in self.values:
            return self.values[name]
        if self.parent is not None:
            return self.parent.get(name, default)
        return default

    def set(self, name: str, value: Any):
        self.values[name] = value

    def bindings(self) -> Dict[str, Any]:
        """Return every visible binding, inner frames taking precedence."""
        merged = self.parent.bindings() if self.parent is not None else {}
        merged.update(self.values)
        return merged

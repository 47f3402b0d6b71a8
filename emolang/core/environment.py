"""Lexical scopes. Scopes are plain shared objects: a function value keeps a reference to the scope it was defined in,
so any number of closures can share (and see each other's changes to) one enclosing scope.
"""

from emolang.lang.error import EvaluationError


class Environment:
    """Mapping from identifier names to runtime values, with an optional enclosing scope."""

    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer

    def enclosed(self):
        """Returns a new, empty scope nested in this one."""
        return Environment(outer=self)

    def get(self, name):
        """Looks name up in this scope, then outwards. Raises an EvaluationError if it is bound nowhere."""
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        raise EvaluationError("identifier not found: '{}'", name)

    def set(self, name, value):
        """Binds name to value in this scope, shadowing any binding of an enclosing scope. Returns value."""
        self.store[name] = value
        return value

    def __repr__(self):
        return f"Environment({list(self.store)}, outer={self.outer!r})"

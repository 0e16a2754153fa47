"""
Bamya Environment

Chained variable scopes. Functions hold a reference to the environment they
were defined in, which can create environment <-> function cycles; Python's
garbage collector reclaims those.
"""

from typing import Dict, Optional

from .objects import BamyaObject


class Environment:
    """One scope frame plus an optional enclosing frame"""

    def __init__(self, outer: Optional['Environment'] = None):
        self.store: Dict[str, BamyaObject] = {}
        self.outer = outer

    def get(self, name: str) -> Optional[BamyaObject]:
        """Look name up here, then in enclosing frames"""
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name: str, value: BamyaObject) -> BamyaObject:
        """Bind name in this frame only, shadowing any outer binding"""
        self.store[name] = value
        return value

    def __repr__(self) -> str:
        return f"Environment(names={sorted(self.store)!r}, enclosed={self.outer is not None})"


def new_enclosed_environment(outer: Environment) -> Environment:
    """Fresh empty frame whose parent is `outer`"""
    return Environment(outer)


__all__ = ['Environment', 'new_enclosed_environment']

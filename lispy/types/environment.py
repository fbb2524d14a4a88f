"""Runtime environment for Lispy.

The Environment stores bindings of names to values and supports nested scopes
via an `outer` link. Lookups hand out copies, so a binding can only change
through `define`/`define_global`.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from lispy.errors import LispyTypeError, LispyUnboundSymbol
from lispy.types.value import LispValue, Symbol


def _key(name: Symbol | str) -> str:
    if isinstance(name, Symbol):
        return name.name
    if isinstance(name, str):
        return name
    raise LispyTypeError(f"Cannot define {name} as a symbol")


class Environment:
    """Hierarchical mapping from names to Lispy values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, LispValue] = {}
        # Shared with sibling scopes; never copied.
        self.outer: Environment | None = outer

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def define(self, name: Symbol | str, value: LispValue) -> None:
        """Bind `name` to `value` in this frame, replacing any existing binding.

        Raises LispyTypeError if `name` is neither a Symbol nor a str.
        """
        self.vars[_key(name)] = value

    def define_global(self, name: Symbol | str, value: LispValue) -> None:
        """Bind `name` in the root environment, whichever frame issues the call."""
        self.root().define(name, value)

    def find(self, name: Symbol | str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        key = _key(name)
        env: Optional[Environment] = self
        while env is not None:
            if key in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: Symbol | str) -> LispValue:
        """Return a copy of the value bound to `name`.

        Raises LispyUnboundSymbol if no frame in the chain binds it.
        """
        env = self.find(name)
        if env is None:
            raise LispyUnboundSymbol(f"Unbound Symbol '{_key(name)}'")
        return env.vars[_key(name)].copy()

    def copy(self) -> Environment:
        """New frame with the same parent and a deep copy of the local bindings."""
        env = Environment(self.outer)
        env.vars = {k: v.copy() for k, v in self.vars.items()}
        return env

    def __contains__(self, name: Symbol | str) -> bool:
        return self.find(name) is not None

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        chain = []
        env: Optional[Environment] = self
        while env is not None:
            with StringIO() as env_buf:
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
            env = env.outer
        return f"<Environment chain: {' -> '.join(chain)}>"

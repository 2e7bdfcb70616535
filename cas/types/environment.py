"""Symbol table of the CAS.

The Environment maps Symbols to Definitions. A session owns one root
Environment; user-function application creates a short-lived child scope whose
`outer` link points at the caller. The child is dropped once the call has been
expanded, so shadowed bindings never leak into the caller.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Optional

from cas.errors import CasTypeError, CasUnboundSymbol
from cas.types.definition import Definition, ValueDef, FunctionDef, BuiltinDef
from cas.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to Definitions."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, Definition] = {}
        self.outer: Environment | None = outer

    def define(self, name: Symbol, definition: Definition) -> None:
        """Bind `name` to `definition` in this frame, overwriting any prior binding.

        Raises CasTypeError if `name` is not a Symbol or `definition` is not a Definition.
        """
        if not isinstance(name, Symbol):
            raise CasTypeError(f"cannot define `{name}`, expected a symbol")
        if not isinstance(definition, (ValueDef, FunctionDef, BuiltinDef)):
            raise CasTypeError(f"cannot bind `{name}` to {definition!r}")
        self.vars[name] = definition

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def get(self, name: Symbol) -> Optional[Definition]:
        """Definition bound to `name` anywhere in the chain, or None."""
        env = self.find(name)
        if env is None:
            return None
        return env.vars[name]

    def local(self, name: Symbol) -> Optional[Definition]:
        """Definition bound to `name` in this frame only, or None."""
        return self.vars.get(name)

    def lookup(self, name: Symbol) -> Definition:
        """Look up the definition bound to `name`.

        Raises CasUnboundSymbol if not found.
        """
        definition = self.get(name)
        if definition is None:
            raise CasUnboundSymbol(f"`{name}` is undefined")
        return definition

    def is_callable(self, name: Symbol) -> bool:
        """True if `name` is bound to a user function or a built-in."""
        return isinstance(self.get(name), (FunctionDef, BuiltinDef))

    def update(self, mapping: dict[Symbol, Definition]) -> None:
        """Bulk-define a mapping of Symbol -> Definition in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def child(self) -> Environment:
        """A fresh, empty scope layered over this one."""
        return Environment(outer=self)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, Symbol) and self.find(name) is not None

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self.vars)

    def __len__(self) -> int:
        return len(self.vars)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's definitions into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {_describe(v)}")
            first = False
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
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env = self
            chain = []
            while env is not None:
                with StringIO() as env_buf:
                    env._write_vars(env_buf)
                    chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()


def _describe(definition: Definition) -> str:
    if isinstance(definition, ValueDef):
        return str(definition.expr)
    if isinstance(definition, BuiltinDef):
        return "<built-in>"
    return str(definition)

"""Lexically nested scopes of named, typed symbols."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from chrislang.diagnostics import SourceLocation
from chrislang.types import Type


@dataclass
class Symbol:
    """A named entity with a type and mutability."""

    name: str
    type: Type
    is_mutable: bool
    location: SourceLocation


class Scope:
    """A single level of name bindings with an optional enclosing scope."""

    def __init__(self, parent: Optional[Scope] = None) -> None:
        self.parent = parent
        self._symbols: dict[str, Symbol] = {}

    def define(
        self, name: str, type_: Type, is_mutable: bool, location: SourceLocation
    ) -> bool:
        """Bind ``name`` here; False if this scope already binds it."""
        if name in self._symbols:
            return False
        self._symbols[name] = Symbol(name, type_, is_mutable, location)
        return True

    def lookup(self, name: str) -> Optional[Symbol]:
        """Find ``name`` here or in any enclosing scope."""
        scope: Optional[Scope] = self
        while scope is not None:
            symbol = scope._symbols.get(name)
            if symbol is not None:
                return symbol
            scope = scope.parent
        return None

    def lookup_local(self, name: str) -> Optional[Symbol]:
        """Find ``name`` in this scope only."""
        return self._symbols.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._symbols


class SymbolTable:
    """A stack of scopes rooted at a global scope that is never popped."""

    def __init__(self) -> None:
        self._current = Scope()

    def push_scope(self) -> None:
        self._current = Scope(self._current)

    def pop_scope(self) -> None:
        """Leave the current scope; the global scope stays in place."""
        if self._current.parent is not None:
            self._current = self._current.parent

    @property
    def scope(self) -> Scope:
        """The innermost scope."""
        return self._current

    def define(
        self, name: str, type_: Type, is_mutable: bool, location: SourceLocation
    ) -> bool:
        return self._current.define(name, type_, is_mutable, location)

    def lookup(self, name: str) -> Optional[Symbol]:
        return self._current.lookup(name)

    def lookup_local(self, name: str) -> Optional[Symbol]:
        return self._current.lookup_local(name)
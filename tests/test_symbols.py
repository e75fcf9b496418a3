import pytest

from chrislang.diagnostics import SourceLocation
from chrislang.symbols import Scope, SymbolTable
from chrislang.types import INT, STRING

LOC = SourceLocation("test.chr", 1, 1)


def test_scope_define_and_lookup():
    scope = Scope()
    assert scope.define("x", INT, True, LOC)
    sym = scope.lookup("x")
    assert sym.name == "x"
    assert sym.type is INT
    assert sym.is_mutable is True
    assert sym.location == LOC


def test_scope_redefinition_rejected_and_original_kept():
    scope = Scope()
    assert scope.define("x", INT, False, LOC)
    assert not scope.define("x", STRING, True, LOC)
    assert scope.lookup("x").type is INT


def test_scope_lookup_walks_parents_but_local_does_not():
    outer = Scope()
    outer.define("x", INT, False, LOC)
    inner = Scope(outer)
    assert inner.parent is outer
    assert inner.lookup("x").type is INT
    assert inner.lookup_local("x") is None
    assert inner.lookup("missing") is None


def test_inner_scope_shadows_outer():
    outer = Scope()
    outer.define("x", INT, False, LOC)
    inner = Scope(outer)
    assert inner.define("x", STRING, False, LOC)
    assert inner.lookup("x").type is STRING
    assert outer.lookup("x").type is INT


def test_table_push_and_pop():
    table = SymbolTable()
    table.define("g", INT, False, LOC)
    table.push_scope()
    table.define("local", STRING, True, LOC)
    assert table.lookup("g").type is INT
    assert table.lookup_local("g") is None
    assert table.lookup_local("local").type is STRING
    table.pop_scope()
    assert table.lookup("local") is None
    assert table.lookup("g").type is INT


def test_table_pop_at_global_keeps_global_scope():
    table = SymbolTable()
    table.define("g", INT, False, LOC)
    root = table.scope
    table.pop_scope()
    table.pop_scope()
    assert table.scope is root
    assert table.lookup("g").type is INT


def test_table_scope_changes_with_push():
    table = SymbolTable()
    root = table.scope
    table.push_scope()
    assert table.scope.parent is root
    table.pop_scope()
    assert table.scope is root


def test_table_define_duplicate_in_same_scope():
    table = SymbolTable()
    assert table.define("x", INT, False, LOC)
    assert not table.define("x", INT, False, LOC)
    table.push_scope()
    assert table.define("x", STRING, False, LOC)


@pytest.mark.parametrize("mutable", [True, False])
def test_mutability_preserved(mutable):
    table = SymbolTable()
    table.define("v", INT, mutable, LOC)
    assert table.lookup("v").is_mutable is mutable
"""Syntax tree nodes consumed by the type checker."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional

from chrislang.diagnostics import SourceLocation


class AccessModifier(enum.Enum):
    PUBLIC = enum.auto()
    PRIVATE = enum.auto()
    PROTECTED = enum.auto()


class AsyncKind(enum.Enum):
    NONE = enum.auto()
    IO = enum.auto()
    COMPUTE = enum.auto()


@dataclass(eq=False)
class Node:
    """Base of every tree node; each node knows where it came from."""

    location: SourceLocation = field(default_factory=SourceLocation, kw_only=True)


@dataclass(eq=False)
class TypeExpr(Node):
    """A type as written in source."""


@dataclass(eq=False)
class NamedType(TypeExpr):
    """``Name``, ``Name<Args>`` or ``Name?``."""

    name: str
    type_args: list[TypeExpr] = field(default_factory=list)
    nullable: bool = False


@dataclass(eq=False)
class Expr(Node):
    """Base of expressions."""


@dataclass(eq=False)
class Stmt(Node):
    """Base of statements and declarations."""


@dataclass(eq=False)
class Annotation(Node):
    """``@Name(args)`` attached to a declaration."""

    name: str
    arguments: list[str] = field(default_factory=list)


@dataclass(eq=False)
class Param(Node):
    name: str
    type: Optional[TypeExpr] = None


@dataclass(eq=False)
class Block(Stmt):
    statements: list[Stmt] = field(default_factory=list)


@dataclass(eq=False)
class Program:
    """A whole source file: its top-level declarations in order."""

    declarations: list[Stmt] = field(default_factory=list)


# --- Declarations ---


@dataclass(eq=False)
class FuncDecl(Stmt):
    name: str
    parameters: list[Param] = field(default_factory=list)
    return_type: Optional[TypeExpr] = None
    body: Optional[Block] = None
    is_async: bool = False
    async_kind: AsyncKind = AsyncKind.NONE
    access: AccessModifier = AccessModifier.PRIVATE
    is_operator: bool = False
    annotations: list[Annotation] = field(default_factory=list)


@dataclass(eq=False)
class ExternFuncDecl(Stmt):
    name: str
    parameters: list[Param] = field(default_factory=list)
    return_type: Optional[TypeExpr] = None
    is_variadic: bool = False


@dataclass(eq=False)
class VarDecl(Stmt):
    name: str
    type_annotation: Optional[TypeExpr] = None
    initializer: Optional[Expr] = None
    is_mutable: bool = True


@dataclass(eq=False)
class ImportDecl(Stmt):
    path: str


@dataclass(eq=False)
class FieldDecl(Node):
    name: str
    type_annotation: Optional[TypeExpr] = None
    initializer: Optional[Expr] = None
    is_mutable: bool = True
    access: AccessModifier = AccessModifier.PRIVATE


@dataclass(eq=False)
class ClassDecl(Stmt):
    name: str
    fields: list[FieldDecl] = field(default_factory=list)
    methods: list[FuncDecl] = field(default_factory=list)
    base_class: str = ""
    interfaces: list[str] = field(default_factory=list)
    type_params: list[str] = field(default_factory=list)
    is_shared: bool = False
    is_public: bool = False
    annotations: list[Annotation] = field(default_factory=list)


@dataclass(eq=False)
class InterfaceDecl(Stmt):
    name: str
    methods: list[FuncDecl] = field(default_factory=list)
    annotations: list[Annotation] = field(default_factory=list)


@dataclass(eq=False)
class EnumVariant(Node):
    name: str
    associated_type: Optional[TypeExpr] = None


@dataclass(eq=False)
class EnumDecl(Stmt):
    name: str
    cases: list[str] = field(default_factory=list)
    variants: list[EnumVariant] = field(default_factory=list)
    annotations: list[Annotation] = field(default_factory=list)


# --- Statements ---


@dataclass(eq=False)
class IfStmt(Stmt):
    condition: Expr
    then_block: Block
    else_block: Optional[Stmt] = None


@dataclass(eq=False)
class WhileStmt(Stmt):
    condition: Expr
    body: Block


@dataclass(eq=False)
class ForStmt(Stmt):
    variable: str
    iterable: Expr
    body: Block


@dataclass(eq=False)
class ReturnStmt(Stmt):
    value: Optional[Expr] = None


@dataclass(eq=False)
class ExprStmt(Stmt):
    expression: Expr


@dataclass(eq=False)
class BreakStmt(Stmt):
    pass


@dataclass(eq=False)
class ContinueStmt(Stmt):
    pass


@dataclass(eq=False)
class ThrowStmt(Stmt):
    expression: Expr


@dataclass(eq=False)
class CatchClause(Node):
    var_name: str
    type_name: str
    body: Block


@dataclass(eq=False)
class TryCatchStmt(Stmt):
    try_block: Block
    catch_clauses: list[CatchClause] = field(default_factory=list)
    finally_block: Optional[Block] = None


@dataclass(eq=False)
class UnsafeBlock(Stmt):
    body: Block


# --- Expressions ---


@dataclass(eq=False)
class IntLiteralExpr(Expr):
    value: int


@dataclass(eq=False)
class FloatLiteralExpr(Expr):
    value: float


@dataclass(eq=False)
class StringLiteralExpr(Expr):
    value: str


@dataclass(eq=False)
class CharLiteralExpr(Expr):
    value: str


@dataclass(eq=False)
class BoolLiteralExpr(Expr):
    value: bool


@dataclass(eq=False)
class NilLiteralExpr(Expr):
    pass


@dataclass(eq=False)
class IdentifierExpr(Expr):
    name: str


@dataclass(eq=False)
class BinaryExpr(Expr):
    left: Expr
    op: str
    right: Expr


@dataclass(eq=False)
class UnaryExpr(Expr):
    op: str
    operand: Expr


@dataclass(eq=False)
class CallExpr(Expr):
    callee: Expr
    arguments: list[Expr] = field(default_factory=list)


@dataclass(eq=False)
class MemberExpr(Expr):
    object: Expr
    member: str


@dataclass(eq=False)
class AssignExpr(Expr):
    target: Expr
    value: Expr


@dataclass(eq=False)
class RangeExpr(Expr):
    start: Expr
    end: Expr


@dataclass(eq=False)
class ThisExpr(Expr):
    pass


@dataclass(eq=False)
class ConstructExpr(Expr):
    """``ClassName { field: value, ... }``; field order is kept."""

    class_name: str
    field_inits: list[tuple[str, Expr]] = field(default_factory=list)


@dataclass(eq=False)
class StringInterpolationExpr(Expr):
    """Literal ``parts`` interleaved with ``expressions``; one more part than expressions."""

    parts: list[str] = field(default_factory=list)
    expressions: list[Expr] = field(default_factory=list)


@dataclass(eq=False)
class NilCoalesceExpr(Expr):
    value: Expr
    default_value: Expr


@dataclass(eq=False)
class ForceUnwrapExpr(Expr):
    operand: Expr


@dataclass(eq=False)
class OptionalChainExpr(Expr):
    object: Expr
    member: str


@dataclass(eq=False)
class MatchArm(Node):
    enum_name: str
    case_name: str
    binding_name: str = ""
    body: Optional[Stmt] = None


@dataclass(eq=False)
class MatchExpr(Expr):
    subject: Expr
    arms: list[MatchArm] = field(default_factory=list)


@dataclass(eq=False)
class LambdaParam(Node):
    name: str
    type: Optional[TypeExpr] = None


@dataclass(eq=False)
class LambdaExpr(Expr):
    params: list[LambdaParam] = field(default_factory=list)
    body_expr: Optional[Expr] = None
    body_block: Optional[Block] = None


@dataclass(eq=False)
class ArrayLiteralExpr(Expr):
    elements: list[Expr] = field(default_factory=list)


@dataclass(eq=False)
class IndexExpr(Expr):
    object: Expr
    index: Expr


@dataclass(eq=False)
class IfExpr(Expr):
    condition: Expr
    then_expr: Expr
    else_expr: Expr


@dataclass(eq=False)
class AwaitExpr(Expr):
    operand: Expr
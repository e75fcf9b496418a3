"""Semantic types of the language and the rules that relate them."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Sequence


class TypeKind(enum.Enum):
    """Every kind of type the checker knows about."""

    INT = enum.auto()
    INT8 = enum.auto()
    INT16 = enum.auto()
    INT32 = enum.auto()
    UINT = enum.auto()
    UINT8 = enum.auto()
    UINT16 = enum.auto()
    UINT32 = enum.auto()
    FLOAT = enum.auto()
    FLOAT32 = enum.auto()
    BOOL = enum.auto()
    STRING = enum.auto()
    CHAR = enum.auto()
    VOID = enum.auto()
    NIL = enum.auto()
    NULLABLE = enum.auto()
    FUNCTION = enum.auto()
    CLASS = enum.auto()
    ENUM = enum.auto()
    TYPE_PARAMETER = enum.auto()
    ARRAY = enum.auto()
    FUTURE = enum.auto()
    MAP = enum.auto()
    SET = enum.auto()
    TYPE_INFO = enum.auto()
    UNKNOWN = enum.auto()


_NUMERIC_KINDS = frozenset(
    {
        TypeKind.INT,
        TypeKind.FLOAT,
        TypeKind.INT8,
        TypeKind.INT16,
        TypeKind.INT32,
        TypeKind.UINT,
        TypeKind.UINT8,
        TypeKind.UINT16,
        TypeKind.UINT32,
        TypeKind.FLOAT32,
    }
)

_SIZED_INT_KINDS = frozenset(
    {
        TypeKind.INT8,
        TypeKind.INT16,
        TypeKind.INT32,
        TypeKind.UINT,
        TypeKind.UINT8,
        TypeKind.UINT16,
        TypeKind.UINT32,
    }
)


class Type(ABC):
    """Base of all semantic types; ``str()`` gives the type's display name."""

    kind: TypeKind

    @abstractmethod
    def equals(self, other: Type) -> bool:
        """Structural equality with another type."""

    def is_numeric(self) -> bool:
        return self.kind in _NUMERIC_KINDS

    def is_nullable(self) -> bool:
        return self.kind is TypeKind.NULLABLE


_PRIMITIVE_NAMES = {
    TypeKind.INT: "Int",
    TypeKind.INT8: "Int8",
    TypeKind.INT16: "Int16",
    TypeKind.INT32: "Int32",
    TypeKind.UINT: "UInt",
    TypeKind.UINT8: "UInt8",
    TypeKind.UINT16: "UInt16",
    TypeKind.UINT32: "UInt32",
    TypeKind.FLOAT: "Float",
    TypeKind.FLOAT32: "Float32",
    TypeKind.BOOL: "Bool",
    TypeKind.STRING: "String",
    TypeKind.CHAR: "Char",
    TypeKind.VOID: "Void",
    TypeKind.NIL: "nil",
    TypeKind.UNKNOWN: "<unknown>",
}


class PrimitiveType(Type):
    """A built-in scalar type identified only by its kind."""

    def __init__(self, kind: TypeKind) -> None:
        self.kind = kind

    def __str__(self) -> str:
        return _PRIMITIVE_NAMES.get(self.kind, "<type>")

    def __repr__(self) -> str:
        return f"PrimitiveType({self.kind.name})"

    def equals(self, other: Type) -> bool:
        return other.kind is self.kind


@dataclass(eq=False)
class NullableType(Type):
    """``T?`` — a type that may also hold nil."""

    inner: Type
    kind = TypeKind.NULLABLE

    def __str__(self) -> str:
        return f"{self.inner}?"

    def equals(self, other: Type) -> bool:
        return isinstance(other, NullableType) and self.inner.equals(other.inner)


@dataclass(eq=False)
class FunctionType(Type):
    """A callable type with parameter types and a return type."""

    param_types: list[Type] = field(default_factory=list)
    return_type: Optional[Type] = None
    kind = TypeKind.FUNCTION

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.param_types)
        return f"({params}) -> {self.return_type}"

    def equals(self, other: Type) -> bool:
        if not isinstance(other, FunctionType):
            return False
        if len(self.param_types) != len(other.param_types):
            return False
        if not all(a.equals(b) for a, b in zip(self.param_types, other.param_types)):
            return False
        return self.return_type.equals(other.return_type)


class AccessLevel(enum.Enum):
    PRIVATE = enum.auto()
    PROTECTED = enum.auto()
    PUBLIC = enum.auto()


@dataclass
class ClassField:
    name: str
    type: Type
    is_public: bool = False
    access: AccessLevel = AccessLevel.PRIVATE


@dataclass
class ClassMethod:
    name: str
    type: Type
    is_public: bool = False
    access: AccessLevel = AccessLevel.PRIVATE


@dataclass(eq=False)
class ClassType(Type):
    """A class, possibly generic and possibly derived from a parent class."""

    name: str = ""
    is_shared: bool = False
    parent: Optional[ClassType] = None
    interface_names: list[str] = field(default_factory=list)
    fields: list[ClassField] = field(default_factory=list)
    methods: list[ClassMethod] = field(default_factory=list)
    type_params: list[str] = field(default_factory=list)
    type_args: list[Type] = field(default_factory=list)
    kind = TypeKind.CLASS

    def is_generic_template(self) -> bool:
        return bool(self.type_params) and not self.type_args

    def is_generic_instance(self) -> bool:
        return bool(self.type_args)

    def __str__(self) -> str:
        if not self.type_args:
            return self.name
        return f"{self.name}<{', '.join(str(a) for a in self.type_args)}>"

    def equals(self, other: Type) -> bool:
        if not isinstance(other, ClassType):
            return False
        if self.name != other.name or len(self.type_args) != len(other.type_args):
            return False
        return all(a.equals(b) for a, b in zip(self.type_args, other.type_args))

    def field_type(self, field_name: str) -> Optional[Type]:
        """Type of a field declared here or in an ancestor, else None."""
        for f in self.fields:
            if f.name == field_name:
                return f.type
        return self.parent.field_type(field_name) if self.parent else None

    def method_type(self, method_name: str) -> Optional[Type]:
        """Type of a method declared here or in an ancestor, else None."""
        for m in self.methods:
            if m.name == method_name:
                return m.type
        return self.parent.method_type(method_name) if self.parent else None

    def is_subclass_of(self, class_name: str) -> bool:
        """True if this class is ``class_name`` or derives from it."""
        cls: Optional[ClassType] = self
        while cls is not None:
            if cls.name == class_name:
                return True
            cls = cls.parent
        return False


@dataclass(eq=False)
class ArrayType(Type):
    element_type: Type
    kind = TypeKind.ARRAY

    def __str__(self) -> str:
        return f"[{self.element_type}]"

    def equals(self, other: Type) -> bool:
        return isinstance(other, ArrayType) and self.element_type.equals(other.element_type)


@dataclass(eq=False)
class FutureType(Type):
    inner_type: Type
    kind = TypeKind.FUTURE

    def __str__(self) -> str:
        return f"Future<{self.inner_type}>"

    def equals(self, other: Type) -> bool:
        return isinstance(other, FutureType) and self.inner_type.equals(other.inner_type)


@dataclass(eq=False)
class MapType(Type):
    key_type: Type
    value_type: Type
    kind = TypeKind.MAP

    def __str__(self) -> str:
        return f"Map<{self.key_type}, {self.value_type}>"

    def equals(self, other: Type) -> bool:
        return (
            isinstance(other, MapType)
            and self.key_type.equals(other.key_type)
            and self.value_type.equals(other.value_type)
        )


@dataclass(eq=False)
class SetType(Type):
    element_type: Type
    kind = TypeKind.SET

    def __str__(self) -> str:
        return f"Set<{self.element_type}>"

    def equals(self, other: Type) -> bool:
        return isinstance(other, SetType) and self.element_type.equals(other.element_type)


class TypeInfoType(Type):
    """The result of ``typeof`` reflection."""

    kind = TypeKind.TYPE_INFO

    def __str__(self) -> str:
        return "TypeInfo"

    def __repr__(self) -> str:
        return "TypeInfoType()"

    def equals(self, other: Type) -> bool:
        return other.kind is TypeKind.TYPE_INFO


@dataclass(eq=False)
class TypeParameterType(Type):
    """A generic type parameter such as ``T``."""

    name: str
    kind = TypeKind.TYPE_PARAMETER

    def __str__(self) -> str:
        return self.name

    def equals(self, other: Type) -> bool:
        return isinstance(other, TypeParameterType) and self.name == other.name


@dataclass(eq=False)
class InterfaceType(Type):
    """An interface; it reports the class kind so it takes part in class assignability."""

    name: str = ""
    methods: list[ClassMethod] = field(default_factory=list)
    kind = TypeKind.CLASS

    def __str__(self) -> str:
        return self.name

    def equals(self, other: Type) -> bool:
        return isinstance(other, InterfaceType) and self.name == other.name


@dataclass(eq=False)
class EnumType(Type):
    """An enum with ordered cases, some of which may carry a value."""

    name: str = ""
    cases: list[str] = field(default_factory=list)
    associated_types: dict[str, Optional[Type]] = field(default_factory=dict)
    kind = TypeKind.ENUM

    def __str__(self) -> str:
        return self.name

    def equals(self, other: Type) -> bool:
        return isinstance(other, EnumType) and self.name == other.name

    def case_index(self, case_name: str) -> int:
        """Position of the case, or -1 if the enum has no such case."""
        try:
            return self.cases.index(case_name)
        except ValueError:
            return -1

    def has_associated_value(self, case_name: str) -> bool:
        return self.associated_types.get(case_name) is not None


@dataclass
class GenericInstantiation:
    """A generic class instantiated with concrete type arguments."""

    template_name: str
    mangled_name: str
    type_params: list[str]
    type_args: list[Type]


INT = PrimitiveType(TypeKind.INT)
INT8 = PrimitiveType(TypeKind.INT8)
INT16 = PrimitiveType(TypeKind.INT16)
INT32 = PrimitiveType(TypeKind.INT32)
UINT = PrimitiveType(TypeKind.UINT)
UINT8 = PrimitiveType(TypeKind.UINT8)
UINT16 = PrimitiveType(TypeKind.UINT16)
UINT32 = PrimitiveType(TypeKind.UINT32)
FLOAT = PrimitiveType(TypeKind.FLOAT)
FLOAT32 = PrimitiveType(TypeKind.FLOAT32)
BOOL = PrimitiveType(TypeKind.BOOL)
STRING = PrimitiveType(TypeKind.STRING)
CHAR = PrimitiveType(TypeKind.CHAR)
VOID = PrimitiveType(TypeKind.VOID)
NIL = PrimitiveType(TypeKind.NIL)
UNKNOWN = PrimitiveType(TypeKind.UNKNOWN)

_NAMED_TYPES = {
    "Int": INT,
    "Int8": INT8,
    "Int16": INT16,
    "Int32": INT32,
    "UInt": UINT,
    "UInt8": UINT8,
    "UInt16": UINT16,
    "UInt32": UINT32,
    "Float": FLOAT,
    "Float32": FLOAT32,
    "Bool": BOOL,
    "String": STRING,
    "Char": CHAR,
    "Void": VOID,
}


def make_nullable(inner: Type) -> NullableType:
    return NullableType(inner)


def make_function_type(params: Sequence[Type], ret: Type) -> FunctionType:
    return FunctionType(list(params), ret)


def make_class_type(name: str) -> ClassType:
    return ClassType(name=name)


def make_type_parameter(name: str) -> TypeParameterType:
    return TypeParameterType(name)


def make_array_type(element_type: Type) -> ArrayType:
    return ArrayType(element_type)


def make_future_type(inner_type: Type) -> FutureType:
    return FutureType(inner_type)


def make_map_type(key_type: Type, value_type: Type) -> MapType:
    return MapType(key_type, value_type)


def make_set_type(element_type: Type) -> SetType:
    return SetType(element_type)


def type_info_type() -> TypeInfoType:
    return TypeInfoType()


def substitute_type_params(
    type_: Optional[Type], param_names: Sequence[str], args: Sequence[Type]
) -> Optional[Type]:
    """Replace type parameters by concrete types.

    The original object is returned whenever nothing inside it changed.
    """
    if type_ is None:
        return None

    if isinstance(type_, TypeParameterType):
        for i, name in enumerate(param_names):
            if name == type_.name and i < len(args):
                return args[i]
        return type_

    if isinstance(type_, NullableType):
        inner = substitute_type_params(type_.inner, param_names, args)
        return type_ if inner is type_.inner else make_nullable(inner)

    if isinstance(type_, FunctionType):
        new_params = [substitute_type_params(p, param_names, args) for p in type_.param_types]
        new_ret = substitute_type_params(type_.return_type, param_names, args)
        changed = new_ret is not type_.return_type or any(
            n is not o for n, o in zip(new_params, type_.param_types)
        )
        return make_function_type(new_params, new_ret) if changed else type_

    if isinstance(type_, ClassType) and type_.type_args:
        new_args = [substitute_type_params(a, param_names, args) for a in type_.type_args]
        if any(n is not o for n, o in zip(new_args, type_.type_args)):
            return ClassType(
                name=type_.name,
                parent=type_.parent,
                interface_names=list(type_.interface_names),
                fields=list(type_.fields),
                methods=list(type_.methods),
                type_params=list(type_.type_params),
                type_args=new_args,
            )

    return type_


def resolve_type_name(name: str) -> Optional[Type]:
    """The built-in type called ``name``, or None."""
    return _NAMED_TYPES.get(name)


def _implements(cls: ClassType, interface_name: str) -> bool:
    current: Optional[ClassType] = cls
    while current is not None:
        if interface_name in current.interface_names:
            return True
        current = current.parent
    return False


def is_assignable(target: Optional[Type], value: Optional[Type]) -> bool:
    """Whether a value of type ``value`` may be stored where ``target`` is expected."""
    if target is None or value is None:
        return False

    wildcards = (TypeKind.UNKNOWN, TypeKind.TYPE_PARAMETER)
    if target.kind in wildcards or value.kind in wildcards:
        return True

    if target.equals(value):
        return True

    if isinstance(target, NullableType):
        if value.kind is TypeKind.NIL or target.inner.equals(value):
            return True

    if target.kind is TypeKind.FLOAT and value.kind is TypeKind.INT:
        return True
    if value.kind is TypeKind.INT and target.kind in _SIZED_INT_KINDS:
        return True
    if value.kind is TypeKind.FLOAT and target.kind is TypeKind.FLOAT32:
        return True
    if target.kind is TypeKind.INT and value.kind in _SIZED_INT_KINDS:
        return True

    if isinstance(value, ClassType):
        if isinstance(target, ClassType) and value.is_subclass_of(target.name):
            return True
        if isinstance(target, InterfaceType) and _implements(value, target.name):
            return True

    return False
"""Declaration-level type checking of whole programs."""

from __future__ import annotations

from typing import Sequence

from chrislang.diagnostics import DiagnosticEngine, SourceLocation
from chrislang.expressions import ExpressionChecker
from chrislang.nodes import (
    AccessModifier,
    Annotation,
    AsyncKind,
    ClassDecl,
    EnumDecl,
    ExternFuncDecl,
    FuncDecl,
    ImportDecl,
    InterfaceDecl,
    NamedType,
    Param,
    Program,
    Stmt,
    TypeExpr,
)
from chrislang.types import (
    UNKNOWN,
    VOID,
    AccessLevel,
    ClassField,
    ClassMethod,
    ClassType,
    EnumType,
    GenericInstantiation,
    InterfaceType,
    Type,
    make_array_type,
    make_function_type,
    make_future_type,
    make_map_type,
    make_nullable,
    make_type_parameter,
    resolve_type_name,
    substitute_type_params,
)

_KNOWN_ANNOTATIONS: dict[str, frozenset[str]] = {
    "Deprecated": frozenset({"func", "class", "interface", "enum"}),
    "Serializable": frozenset({"class"}),
    "CLayout": frozenset({"class"}),
    "Test": frozenset({"func"}),
    "Inline": frozenset({"func"}),
    "NoReturn": frozenset({"func"}),
}

_ACCESS_LEVELS = {
    AccessModifier.PUBLIC: AccessLevel.PUBLIC,
    AccessModifier.PROTECTED: AccessLevel.PROTECTED,
    AccessModifier.PRIVATE: AccessLevel.PRIVATE,
}


class TypeChecker(ExpressionChecker):
    """Checks a whole program, reporting problems to the diagnostic engine."""

    def __init__(self, diagnostics: DiagnosticEngine) -> None:
        super().__init__(diagnostics)
        self._generic_class_decls: dict[str, ClassDecl] = {}

    @property
    def generic_instantiations(self) -> list[GenericInstantiation]:
        """Generic classes instantiated while checking, in order of first use."""
        return self.instantiations

    # --- Type annotations and generics ---

    def resolve_type_annotation(self, type_expr: TypeExpr) -> Type:
        """Turn a written type into a semantic type, reporting unknown names."""
        if not isinstance(type_expr, NamedType):
            return UNKNOWN
        named = type_expr

        # Function types arrive as "__func" with [params..., return] arguments.
        if named.name == "__func" and named.type_args:
            *params, ret = named.type_args
            return make_function_type(
                [self.resolve_type_annotation(p) for p in params],
                self.resolve_type_annotation(ret),
            )

        if named.name in self.current_type_params:
            param = make_type_parameter(named.name)
            return make_nullable(param) if named.nullable else param

        if named.name == "Array" and named.type_args:
            return make_array_type(self.resolve_type_annotation(named.type_args[0]))
        if named.name == "Future" and named.type_args:
            return make_future_type(self.resolve_type_annotation(named.type_args[0]))
        if named.name == "Map" and len(named.type_args) >= 2:
            return make_map_type(
                self.resolve_type_annotation(named.type_args[0]),
                self.resolve_type_annotation(named.type_args[1]),
            )

        resolved: Type | None = resolve_type_name(named.name)
        if resolved is None:
            resolved = self.class_types.get(named.name)
        if resolved is None:
            resolved = self.enum_types.get(named.name)
        if resolved is None:
            self._error("E3016", f"Unknown type '{named.name}'", type_expr.location)
            return UNKNOWN

        if named.type_args and isinstance(resolved, ClassType):
            expected = len(resolved.type_params)
            got = len(named.type_args)
            if expected != got:
                self._error(
                    "E3024",
                    f"Generic class '{named.name}' expects {expected} type argument(s), "
                    f"got {got}",
                    type_expr.location,
                )
                return UNKNOWN
            args = [self.resolve_type_annotation(arg) for arg in named.type_args]
            instantiated = self.instantiate_generic_class(named.name, args)
            return make_nullable(instantiated) if named.nullable else instantiated

        return make_nullable(resolved) if named.nullable else resolved

    def mangled_generic_name(self, name: str, type_args: Sequence[Type]) -> str:
        """The registry name of ``name`` instantiated with ``type_args``."""
        return f"{name}<{', '.join(str(arg) for arg in type_args)}>"

    def instantiate_generic_class(
        self, name: str, type_args: Sequence[Type]
    ) -> ClassType | None:
        """Instantiate generic class ``name``, reusing an earlier instance."""
        mangled = self.mangled_generic_name(name, type_args)
        cached = self.class_types.get(mangled)
        if cached is not None:
            return cached

        template = self.class_types.get(name)
        if template is None:
            return None

        args = list(type_args)
        params = template.type_params
        instance = ClassType(
            name=name,
            type_params=list(params),
            type_args=args,
            parent=template.parent,
            interface_names=list(template.interface_names),
            fields=[
                ClassField(
                    f.name, substitute_type_params(f.type, params, args), f.is_public, f.access
                )
                for f in template.fields
            ],
            methods=[
                ClassMethod(
                    m.name, substitute_type_params(m.type, params, args), m.is_public, m.access
                )
                for m in template.methods
            ],
        )

        self.class_types[mangled] = instance
        self.symbols.define(mangled, instance, False, SourceLocation("<generic>", 0, 0))
        self.instantiations.append(
            GenericInstantiation(name, mangled, list(params), args)
        )
        return instance

    # --- Whole program ---

    def check(self, program: Program) -> None:
        """Check every declaration of ``program``."""
        for decl in program.declarations:
            self._register_type_name(decl)
        for decl in program.declarations:
            self._register_signature(decl)
        for decl in program.declarations:
            self._check_stmt(decl)

    def _register_type_name(self, decl: Stmt) -> None:
        if isinstance(decl, InterfaceDecl):
            iface = InterfaceType(name=decl.name)
            self.interface_types[decl.name] = iface
            self.symbols.define(decl.name, iface, False, decl.location)
        elif isinstance(decl, ClassDecl):
            cls = ClassType(name=decl.name, type_params=list(decl.type_params))
            cls.is_shared = decl.is_shared
            self.class_types[decl.name] = cls
            self.symbols.define(decl.name, cls, False, decl.location)
            if decl.type_params:
                self._generic_class_decls[decl.name] = decl
        elif isinstance(decl, EnumDecl):
            enum_type = EnumType(name=decl.name, cases=list(decl.cases))
            for variant in decl.variants:
                if variant.associated_type is not None:
                    enum_type.associated_types[variant.name] = self.resolve_type_annotation(
                        variant.associated_type
                    )
            self.enum_types[decl.name] = enum_type
            self.symbols.define(decl.name, enum_type, False, decl.location)

    def _param_types(self, params: Sequence[Param]) -> list[Type]:
        return [
            self.resolve_type_annotation(p.type) if p.type is not None else UNKNOWN
            for p in params
        ]

    def _return_type(self, return_type: TypeExpr | None) -> Type:
        return self.resolve_type_annotation(return_type) if return_type is not None else VOID

    def _register_signature(self, decl: Stmt) -> None:
        if isinstance(decl, (FuncDecl, ExternFuncDecl)):
            params = self._param_types(decl.parameters)
            ret = self._return_type(decl.return_type)
            if isinstance(decl, FuncDecl) and decl.is_async:
                ret = make_future_type(ret)
            func_type = make_function_type(params, ret)
            if not self.symbols.define(decl.name, func_type, False, decl.location):
                self._error(
                    "E3001", f"Function '{decl.name}' is already defined", decl.location
                )
        elif isinstance(decl, InterfaceDecl):
            iface = self.interface_types[decl.name]
            for method in decl.methods:
                method_type = make_function_type(
                    self._param_types(method.parameters), self._return_type(method.return_type)
                )
                iface.methods.append(
                    ClassMethod(method.name, method_type, True, AccessLevel.PRIVATE)
                )
        elif isinstance(decl, ClassDecl):
            self._register_class_members(decl)

    def _register_class_members(self, decl: ClassDecl) -> None:
        cls = self.class_types[decl.name]
        saved_params = self.current_type_params
        self.current_type_params = list(decl.type_params)

        if decl.base_class:
            parent = self.class_types.get(decl.base_class)
            if parent is not None:
                cls.parent = parent
            else:
                # The first name after ':' may be an interface rather than a base class.
                decl.interfaces.insert(0, decl.base_class)
                decl.base_class = ""
        cls.interface_names = list(decl.interfaces)

        for field_decl in decl.fields:
            field_type = (
                self.resolve_type_annotation(field_decl.type_annotation)
                if field_decl.type_annotation is not None
                else UNKNOWN
            )
            level = _ACCESS_LEVELS[field_decl.access]
            cls.fields.append(
                ClassField(field_decl.name, field_type, level is AccessLevel.PUBLIC, level)
            )

        for method in decl.methods:
            method_type = make_function_type(
                self._param_types(method.parameters), self._return_type(method.return_type)
            )
            level = _ACCESS_LEVELS[method.access]
            cls.methods.append(
                ClassMethod(method.name, method_type, level is AccessLevel.PUBLIC, level)
            )

        self.current_type_params = saved_params

    # --- Declarations ---

    def _check_stmt(self, stmt: Stmt) -> None:
        if isinstance(stmt, FuncDecl):
            self._check_func_decl(stmt)
        elif isinstance(stmt, ImportDecl):
            pass  # imports are accepted as written
        elif isinstance(stmt, InterfaceDecl):
            self._validate_annotations(stmt.annotations, "interface")
        elif isinstance(stmt, EnumDecl):
            self._validate_annotations(stmt.annotations, "enum")
        elif isinstance(stmt, ClassDecl):
            self._check_class_decl(stmt)
        elif isinstance(stmt, ExternFuncDecl):
            pass
        else:
            super()._check_stmt(stmt)

    def _validate_annotations(self, annotations: Sequence[Annotation], decl_kind: str) -> None:
        for ann in annotations:
            kinds = _KNOWN_ANNOTATIONS.get(ann.name)
            if kinds is None:
                self.diagnostics.warning(
                    "W3040", f"Unknown annotation '@{ann.name}'", ann.location
                )
                continue
            if decl_kind not in kinds:
                self._error(
                    "E3040",
                    f"Annotation '@{ann.name}' cannot be applied to {decl_kind} declarations",
                    ann.location,
                )

    def _check_func_decl(self, func: FuncDecl) -> None:
        self._validate_annotations(func.annotations, "func")
        for ann in func.annotations:
            if ann.name == "Deprecated":
                self.deprecated_functions[func.name] = ann.arguments[0] if ann.arguments else ""

        self.symbols.push_scope()
        for param in func.parameters:
            param_type = (
                self.resolve_type_annotation(param.type) if param.type is not None else UNKNOWN
            )
            if not self.symbols.define(param.name, param_type, False, param.location):
                self._error(
                    "E3002", f"Parameter '{param.name}' is already defined", param.location
                )

        saved_return = self.current_return_type
        self.current_return_type = self._return_type(func.return_type)
        saved_async = self.in_async_function
        self.in_async_function = func.is_async

        if func.async_kind is not AsyncKind.NONE and not func.is_async:
            self._error(
                "E3030",
                f"io/compute annotation requires 'async' keyword on function '{func.name}'",
                func.location,
            )

        if func.body is not None:
            for stmt in func.body.statements:
                self._check_stmt(stmt)

        self.in_async_function = saved_async
        self.current_return_type = saved_return
        self.symbols.pop_scope()

    def _check_class_decl(self, decl: ClassDecl) -> None:
        self._validate_annotations(decl.annotations, "class")
        cls = self.class_types.get(decl.name)
        if cls is None:
            return

        saved_class = self.current_class
        self.current_class = cls
        saved_params = self.current_type_params
        self.current_type_params = list(decl.type_params)

        for field_decl in decl.fields:
            if field_decl.initializer is not None:
                self.check_expr(field_decl.initializer)
        for method in decl.methods:
            self._check_func_decl(method)

        self._check_conformance(decl, cls)

        self.current_type_params = saved_params
        self.current_class = saved_class

    def _check_conformance(self, decl: ClassDecl, cls: ClassType) -> None:
        for iface_name in cls.interface_names:
            iface = self.interface_types.get(iface_name)
            if iface is None:
                self._error(
                    "E3020",
                    f"Class '{decl.name}' implements unknown interface '{iface_name}'",
                    decl.location,
                )
                continue
            for required in iface.methods:
                method = next((m for m in cls.methods if m.name == required.name), None)
                if method is None:
                    self._error(
                        "E3022",
                        f"Class '{decl.name}' does not implement required method "
                        f"'{required.name}' from interface '{iface_name}'",
                        decl.location,
                    )
                elif not method.type.equals(required.type):
                    self._error(
                        "E3021",
                        f"Method '{required.name}' in class '{decl.name}' does not match "
                        f"interface '{iface_name}' signature",
                        decl.location,
                    )


__all__ = ["TypeChecker", "SourceLocation"]
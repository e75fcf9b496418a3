"""Type inference for expressions and for the statements found inside bodies."""

from __future__ import annotations

from typing import Optional, Sequence

from chrislang.builtins import builtin_function_type, member_type
from chrislang.diagnostics import DiagnosticEngine, SourceLocation
from chrislang.nodes import (
    ArrayLiteralExpr,
    AssignExpr,
    AwaitExpr,
    BinaryExpr,
    Block,
    BoolLiteralExpr,
    BreakStmt,
    CallExpr,
    CharLiteralExpr,
    ConstructExpr,
    ContinueStmt,
    Expr,
    ExprStmt,
    FloatLiteralExpr,
    ForceUnwrapExpr,
    ForStmt,
    IdentifierExpr,
    IfExpr,
    IfStmt,
    IndexExpr,
    IntLiteralExpr,
    LambdaExpr,
    MatchExpr,
    MemberExpr,
    NamedType,
    NilCoalesceExpr,
    NilLiteralExpr,
    OptionalChainExpr,
    RangeExpr,
    ReturnStmt,
    Stmt,
    StringInterpolationExpr,
    StringLiteralExpr,
    ThisExpr,
    ThrowStmt,
    TryCatchStmt,
    TypeExpr,
    UnaryExpr,
    UnsafeBlock,
    VarDecl,
    WhileStmt,
)
from chrislang.symbols import SymbolTable
from chrislang.types import (
    BOOL,
    CHAR,
    FLOAT,
    FLOAT32,
    INT,
    NIL,
    STRING,
    UNKNOWN,
    VOID,
    AccessLevel,
    ArrayType,
    ClassField,
    ClassMethod,
    ClassType,
    EnumType,
    FunctionType,
    FutureType,
    GenericInstantiation,
    InterfaceType,
    NullableType,
    Type,
    TypeKind,
    make_array_type,
    make_function_type,
    make_future_type,
    make_map_type,
    make_nullable,
    make_type_parameter,
    resolve_type_name,
    substitute_type_params,
    is_assignable,
)

_ARITHMETIC = frozenset({"+", "-", "*", "/", "%"})
_COMPARISON = frozenset({"<", ">", "<=", ">="})
_EQUALITY = frozenset({"==", "!="})
_LOGICAL = frozenset({"&&", "||"})


class ExpressionChecker:
    """Infers expression types and checks the statements of function bodies.

    Declaration-level checking builds on this class; the state it keeps
    (scopes, known classes, enums and the enclosing function context) is
    shared with that work.
    """

    def __init__(self, diagnostics: DiagnosticEngine) -> None:
        self.diagnostics = diagnostics
        self.symbols = SymbolTable()
        self.current_return_type: Optional[Type] = None
        self.current_class: Optional[ClassType] = None
        self.class_types: dict[str, ClassType] = {}
        self.interface_types: dict[str, InterfaceType] = {}
        self.enum_types: dict[str, EnumType] = {}
        self.current_type_params: list[str] = []
        self.instantiations: list[GenericInstantiation] = []
        self.deprecated_functions: dict[str, str] = {}
        self.in_async_function = False
        self.in_unsafe_block = False
        self._expected_lambda_params: Optional[Sequence[Type]] = None
        self.symbols.define(
            "print",
            make_function_type([UNKNOWN], VOID),
            False,
            SourceLocation("<builtin>", 0, 0),
        )

    def _error(self, code: str, message: str, location: SourceLocation) -> None:
        self.diagnostics.error(code, message, location)

    # --- Type annotations ---

    def resolve_type_annotation(self, type_expr: TypeExpr) -> Type:
        """The semantic type named by a written type."""
        if not isinstance(type_expr, NamedType):
            return UNKNOWN
        named = type_expr

        if named.name == "__func" and named.type_args:
            params = [self.resolve_type_annotation(a) for a in named.type_args[:-1]]
            return make_function_type(params, self.resolve_type_annotation(named.type_args[-1]))

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

        resolved: Optional[Type] = resolve_type_name(named.name)
        if resolved is None:
            resolved = self.class_types.get(named.name) or self.enum_types.get(named.name)
            if resolved is None:
                self._error("E3016", f"Unknown type '{named.name}'", named.location)
                return UNKNOWN

        if named.type_args and isinstance(resolved, ClassType):
            if len(resolved.type_params) != len(named.type_args):
                self._error(
                    "E3024",
                    f"Generic class '{named.name}' expects {len(resolved.type_params)} "
                    f"type argument(s), got {len(named.type_args)}",
                    named.location,
                )
                return UNKNOWN
            args = [self.resolve_type_annotation(a) for a in named.type_args]
            instance = self.instantiate_generic_class(named.name, args)
            return make_nullable(instance) if named.nullable else instance

        return make_nullable(resolved) if named.nullable else resolved

    def mangled_generic_name(self, name: str, type_args: Sequence[Type]) -> str:
        """Name under which an instantiation is cached, e.g. ``Box<Int>``."""
        return f"{name}<{', '.join(str(a) for a in type_args)}>"

    def instantiate_generic_class(
        self, name: str, type_args: Sequence[Type]
    ) -> Optional[ClassType]:
        """The class ``name`` with its type parameters replaced by ``type_args``."""
        mangled = self.mangled_generic_name(name, type_args)
        cached = self.class_types.get(mangled)
        if cached is not None:
            return cached
        template = self.class_types.get(name)
        if template is None:
            return None

        params = template.type_params
        instance = ClassType(
            name=name,
            parent=template.parent,
            interface_names=list(template.interface_names),
            type_params=list(params),
            type_args=list(type_args),
            fields=[
                ClassField(f.name, substitute_type_params(f.type, params, type_args), f.is_public, f.access)
                for f in template.fields
            ],
            methods=[
                ClassMethod(m.name, substitute_type_params(m.type, params, type_args), m.is_public, m.access)
                for m in template.methods
            ],
        )
        self.class_types[mangled] = instance
        self.symbols.define(mangled, instance, False, SourceLocation("<generic>", 0, 0))
        self.instantiations.append(
            GenericInstantiation(name, mangled, list(params), list(type_args))
        )
        return instance

    # --- Statements inside bodies ---

    def _check_stmt(self, stmt: Stmt) -> None:
        match stmt:
            case VarDecl():
                self._check_var_decl(stmt)
            case Block():
                self._check_block(stmt)
            case IfStmt():
                self._check_condition(stmt.condition)
                self._check_scoped(stmt.then_block.statements)
                if stmt.else_block is not None:
                    self._check_stmt(stmt.else_block)
            case WhileStmt():
                self._check_condition(stmt.condition)
                self._check_scoped(stmt.body.statements)
            case ForStmt():
                self._check_for(stmt)
            case ReturnStmt():
                self._check_return(stmt)
            case ExprStmt():
                self.check_expr(stmt.expression)
            case BreakStmt() | ContinueStmt():
                pass
            case ThrowStmt():
                self.check_expr(stmt.expression)
            case TryCatchStmt():
                self._check_try_catch(stmt)
            case UnsafeBlock():
                previous = self.in_unsafe_block
                self.in_unsafe_block = True
                self._check_block(stmt.body)
                self.in_unsafe_block = previous

    def _check_block(self, block: Block) -> None:
        self._check_scoped(block.statements)

    def _check_scoped(self, statements: Sequence[Stmt]) -> None:
        self.symbols.push_scope()
        for stmt in statements:
            self._check_stmt(stmt)
        self.symbols.pop_scope()

    def _check_condition(self, condition: Expr) -> None:
        cond_type = self.check_expr(condition)
        if cond_type.kind not in (TypeKind.BOOL, TypeKind.UNKNOWN):
            self._error(
                "E3007",
                f"Condition must be of type 'Bool', got '{cond_type}'",
                condition.location,
            )

    def _check_var_decl(self, decl: VarDecl) -> None:
        declared = (
            self.resolve_type_annotation(decl.type_annotation)
            if decl.type_annotation is not None
            else None
        )
        init = self.check_expr(decl.initializer) if decl.initializer is not None else None

        if declared is not None and init is not None:
            if not is_assignable(declared, init):
                self._error(
                    "E3003",
                    f"Cannot assign value of type '{init}' to variable of type '{declared}'",
                    decl.location,
                )
            var_type = declared
        elif declared is not None:
            var_type = declared
        elif init is not None:
            if init.kind is TypeKind.NIL:
                self._error(
                    "E3004",
                    "Cannot infer type from 'nil'. Add an explicit type annotation.",
                    decl.location,
                )
                var_type = UNKNOWN
            else:
                var_type = init
        else:
            self._error(
                "E3005",
                f"Variable '{decl.name}' must have a type annotation or initializer",
                decl.location,
            )
            var_type = UNKNOWN

        if not self.symbols.define(decl.name, var_type, decl.is_mutable, decl.location):
            self._error(
                "E3006",
                f"Variable '{decl.name}' is already defined in this scope",
                decl.location,
            )

    def _check_for(self, stmt: ForStmt) -> None:
        iterable_type = self.check_expr(stmt.iterable)
        self.symbols.push_scope()
        if isinstance(stmt.iterable, RangeExpr):
            elem_type: Type = INT
        elif isinstance(iterable_type, ArrayType):
            elem_type = iterable_type.element_type
        else:
            elem_type = UNKNOWN
        self.symbols.define(stmt.variable, elem_type, False, stmt.location)
        for s in stmt.body.statements:
            self._check_stmt(s)
        self.symbols.pop_scope()

    def _check_return(self, stmt: ReturnStmt) -> None:
        expected = self.current_return_type
        if stmt.value is None:
            if expected is not None and expected.kind is not TypeKind.VOID:
                self._error(
                    "E3008",
                    f"Non-void function must return a value of type '{expected}'",
                    stmt.location,
                )
            return

        if isinstance(stmt.value, LambdaExpr) and isinstance(expected, FunctionType):
            self._expected_lambda_params = expected.param_types
        value_type = self.check_expr(stmt.value)
        self._expected_lambda_params = None

        if expected is not None and expected.kind is TypeKind.UNKNOWN:
            self.current_return_type = value_type
        elif expected is not None and not is_assignable(expected, value_type):
            self._error(
                "E3008",
                f"Cannot return value of type '{value_type}' from function expecting '{expected}'",
                stmt.location,
            )

    def _check_try_catch(self, stmt: TryCatchStmt) -> None:
        self._check_block(stmt.try_block)
        for clause in stmt.catch_clauses:
            self.symbols.push_scope()
            self.symbols.define(clause.var_name, STRING, False, stmt.location)
            self._check_block(clause.body)
            self.symbols.pop_scope()
        if stmt.finally_block is not None:
            self._check_block(stmt.finally_block)

    # --- Expressions ---

    def check_expr(self, expr: Expr) -> Type:
        """Infer the type of ``expr``, reporting any problems found on the way."""
        match expr:
            case IntLiteralExpr():
                return INT
            case FloatLiteralExpr():
                return FLOAT
            case StringLiteralExpr():
                return STRING
            case CharLiteralExpr():
                return CHAR
            case BoolLiteralExpr():
                return BOOL
            case NilLiteralExpr():
                return NIL
            case IdentifierExpr():
                return self._check_identifier(expr)
            case BinaryExpr():
                return self._check_binary(expr)
            case UnaryExpr():
                return self._check_unary(expr)
            case CallExpr():
                return self._check_call(expr)
            case MemberExpr():
                return self._check_member(expr)
            case AssignExpr():
                return self._check_assign(expr)
            case RangeExpr():
                return self._check_range(expr)
            case ThisExpr():
                if self.current_class is None:
                    self._error("E3019", "'this' can only be used inside a class method", expr.location)
                    return UNKNOWN
                return self.current_class
            case ConstructExpr():
                return self._check_construct(expr)
            case StringInterpolationExpr():
                for part in expr.expressions:
                    self.check_expr(part)
                return STRING
            case NilCoalesceExpr():
                return self._check_nil_coalesce(expr)
            case ForceUnwrapExpr():
                operand = self.check_expr(expr.operand)
                return operand.inner if isinstance(operand, NullableType) else operand
            case OptionalChainExpr():
                return self._check_optional_chain(expr)
            case MatchExpr():
                return self._check_match(expr)
            case LambdaExpr():
                return self._check_lambda(expr)
            case ArrayLiteralExpr():
                return self._check_array_literal(expr)
            case IndexExpr():
                return self._check_index(expr)
            case IfExpr():
                return self._check_if_expr(expr)
            case AwaitExpr():
                return self._check_await(expr)
        return UNKNOWN

    def _check_identifier(self, expr: IdentifierExpr) -> Type:
        builtin = builtin_function_type(expr.name)
        if builtin is not None:
            return builtin
        symbol = self.symbols.lookup(expr.name)
        if symbol is None:
            self._error("E3009", f"Undefined variable '{expr.name}'", expr.location)
            return UNKNOWN
        return symbol.type

    def _check_binary(self, expr: BinaryExpr) -> Type:
        left = self.check_expr(expr.left)
        right = self.check_expr(expr.right)
        if TypeKind.UNKNOWN in (left.kind, right.kind):
            return UNKNOWN

        op = expr.op
        if isinstance(left, ClassType):
            overload = "operator" + op
            for method in left.methods:
                if method.name == overload and isinstance(method.type, FunctionType):
                    return method.type.return_type

        if op in _ARITHMETIC:
            if op == "+" and left.kind is TypeKind.STRING and right.kind is TypeKind.STRING:
                return STRING
            if not (left.is_numeric() and right.is_numeric()):
                self._error(
                    "E3010",
                    f"Operator '{op}' requires numeric operands, got '{left}' and '{right}'",
                    expr.location,
                )
                return UNKNOWN
            kinds = {left.kind, right.kind}
            if TypeKind.FLOAT in kinds:
                return FLOAT
            if TypeKind.FLOAT32 in kinds:
                return FLOAT32
            if TypeKind.INT in kinds or TypeKind.UINT in kinds:
                return INT
            return left if left.equals(right) else INT

        if op in _COMPARISON:
            if not (left.is_numeric() and right.is_numeric()):
                self._error(
                    "E3010",
                    f"Operator '{op}' requires numeric operands, got '{left}' and '{right}'",
                    expr.location,
                )
            return BOOL

        if op in _EQUALITY:
            if not left.equals(right) and not (left.is_numeric() and right.is_numeric()):
                self._error(
                    "E3010",
                    f"Operator '{op}' requires matching types, got '{left}' and '{right}'",
                    expr.location,
                )
            return BOOL

        if op in _LOGICAL:
            if left.kind is not TypeKind.BOOL or right.kind is not TypeKind.BOOL:
                self._error(
                    "E3010",
                    f"Operator '{op}' requires Bool operands, got '{left}' and '{right}'",
                    expr.location,
                )
            return BOOL

        return UNKNOWN

    def _check_unary(self, expr: UnaryExpr) -> Type:
        operand = self.check_expr(expr.operand)
        if operand.kind is TypeKind.UNKNOWN:
            return UNKNOWN
        if expr.op == "-":
            if not operand.is_numeric():
                self._error(
                    "E3011",
                    f"Unary '-' requires a numeric operand, got '{operand}'",
                    expr.location,
                )
                return UNKNOWN
            return operand
        if expr.op == "!":
            if operand.kind is not TypeKind.BOOL:
                self._error(
                    "E3011",
                    f"Unary '!' requires a Bool operand, got '{operand}'",
                    expr.location,
                )
                return UNKNOWN
            return BOOL
        return UNKNOWN

    def _check_call(self, expr: CallExpr) -> Type:
        if isinstance(expr.callee, IdentifierExpr):
            reason = self.deprecated_functions.get(expr.callee.name)
            if reason is not None:
                message = f"Function '{expr.callee.name}' is deprecated"
                if reason:
                    message += f": {reason}"
                self.diagnostics.warning("W3041", message, expr.location)

        callee = self.check_expr(expr.callee)
        if callee.kind is TypeKind.UNKNOWN:
            for arg in expr.arguments:
                self.check_expr(arg)
            return UNKNOWN
        if not isinstance(callee, FunctionType):
            self._error(
                "E3012",
                f"Expression is not callable (type: '{callee}')",
                expr.location,
            )
            for arg in expr.arguments:
                self.check_expr(arg)
            return UNKNOWN

        params = callee.param_types
        if len(expr.arguments) != len(params):
            self._error(
                "E3013",
                f"Expected {len(params)} argument(s), got {len(expr.arguments)}",
                expr.location,
            )

        for position, (arg, expected) in enumerate(zip(expr.arguments, params), start=1):
            if isinstance(arg, LambdaExpr) and isinstance(expected, FunctionType):
                self._expected_lambda_params = expected.param_types
            arg_type = self.check_expr(arg)
            self._expected_lambda_params = None
            if not is_assignable(expected, arg_type):
                self._error(
                    "E3014",
                    f"Argument {position}: expected '{expected}', got '{arg_type}'",
                    arg.location,
                )
        for arg in expr.arguments[len(params):]:
            self.check_expr(arg)

        return callee.return_type

    def _check_access(
        self,
        what: str,
        member: str,
        owner: ClassType,
        access: AccessLevel,
        location: SourceLocation,
    ) -> None:
        current = self.current_class
        if current is not None and current.name == owner.name:
            return
        if current is not None and current.is_subclass_of(owner.name):
            if access is AccessLevel.PRIVATE:
                self._error(
                    "E3023",
                    f"Cannot access private {what} '{member}' of class '{owner.name}'",
                    location,
                )
            return
        if access is not AccessLevel.PUBLIC:
            level = "private" if access is AccessLevel.PRIVATE else "protected"
            self._error(
                "E3023",
                f"Cannot access {level} {what} '{member}' of class '{owner.name}'",
                location,
            )

    def _check_member(self, expr: MemberExpr) -> Type:
        obj = self.check_expr(expr.object)
        if obj.kind is TypeKind.UNKNOWN:
            return UNKNOWN

        builtin = member_type(obj, expr.member)
        if builtin is not None:
            return builtin

        if isinstance(obj, ClassType):
            for f in obj.fields:
                if f.name == expr.member:
                    self._check_access("field", expr.member, obj, f.access, expr.location)
                    return f.type
            for m in obj.methods:
                if m.name == expr.member:
                    self._check_access("method", expr.member, obj, m.access, expr.location)
                    return m.type
            inherited = obj.field_type(expr.member) or obj.method_type(expr.member)
            if inherited is not None:
                return inherited
            self._error(
                "E3018",
                f"Class '{obj.name}' has no member '{expr.member}'",
                expr.location,
            )

        if isinstance(obj, EnumType):
            self._error(
                "E3021",
                f"Enum '{obj.name}' has no case '{expr.member}'",
                expr.location,
            )

        return UNKNOWN

    def _check_assign(self, expr: AssignExpr) -> Type:
        value = self.check_expr(expr.value)
        if isinstance(expr.target, IdentifierExpr):
            name = expr.target.name
            symbol = self.symbols.lookup(name)
            if symbol is None:
                self._error("E3009", f"Undefined variable '{name}'", expr.target.location)
                return UNKNOWN
            if not symbol.is_mutable:
                self._error(
                    "E3015",
                    f"Cannot assign to immutable variable '{name}' (declared with 'let')",
                    expr.location,
                )
            if not is_assignable(symbol.type, value):
                self._error(
                    "E3003",
                    f"Cannot assign value of type '{value}' to variable of type '{symbol.type}'",
                    expr.location,
                )
            return symbol.type
        self.check_expr(expr.target)
        return value

    def _check_range(self, expr: RangeExpr) -> Type:
        for label, bound in (("start", expr.start), ("end", expr.end)):
            bound_type = self.check_expr(bound)
            if bound_type.kind not in (TypeKind.INT, TypeKind.UNKNOWN):
                self._error(
                    "E3017",
                    f"Range {label} must be of type 'Int', got '{bound_type}'",
                    bound.location,
                )
        return INT

    def _check_construct(self, expr: ConstructExpr) -> Type:
        class_type = self.class_types.get(expr.class_name)
        if class_type is None:
            self._error("E3020", f"Unknown class '{expr.class_name}'", expr.location)
            return UNKNOWN

        for field_name, value_expr in expr.field_inits:
            field_type = class_type.field_type(field_name)
            if field_type is None:
                self._error(
                    "E3021",
                    f"Class '{expr.class_name}' has no field '{field_name}'",
                    expr.location,
                )
                self.check_expr(value_expr)
                continue
            value = self.check_expr(value_expr)
            if field_type.kind is TypeKind.TYPE_PARAMETER:
                continue
            if not is_assignable(field_type, value):
                self._error(
                    "E3003",
                    f"Cannot assign value of type '{value}' to field '{field_name}' "
                    f"of type '{field_type}'",
                    expr.location,
                )
        return class_type

    def _check_nil_coalesce(self, expr: NilCoalesceExpr) -> Type:
        value = self.check_expr(expr.value)
        default = self.check_expr(expr.default_value)
        if isinstance(value, NullableType):
            if not is_assignable(value.inner, default):
                self._error(
                    "E3020",
                    f"Nil coalescing default type '{default}' is not compatible with '{value.inner}'",
                    expr.location,
                )
            return value.inner
        return value

    def _check_optional_chain(self, expr: OptionalChainExpr) -> Type:
        obj = self.check_expr(expr.object)
        inner = obj.inner if isinstance(obj, NullableType) else obj
        if isinstance(inner, ClassType):
            found = inner.field_type(expr.member) or inner.method_type(expr.member)
            if found is not None:
                return make_nullable(found)
            self._error(
                "E3018",
                f"No member '{expr.member}' on type '{inner.name}'",
                expr.location,
            )
            return UNKNOWN
        self._error(
            "E3019",
            f"Cannot use optional chaining on non-class type '{inner}'",
            expr.location,
        )
        return UNKNOWN

    def _check_match(self, expr: MatchExpr) -> Type:
        subject = self.check_expr(expr.subject)
        result: Optional[Type] = None

        for arm in expr.arms:
            binding: Optional[Type] = None
            if isinstance(subject, EnumType):
                if subject.case_index(arm.case_name) < 0:
                    self._error(
                        "E3022",
                        f"Enum '{subject.name}' has no case '{arm.case_name}'",
                        expr.location,
                    )
                if arm.binding_name and subject.has_associated_value(arm.case_name):
                    binding = subject.associated_types[arm.case_name]

            if arm.body is None:
                continue
            if binding is not None:
                self.symbols.push_scope()
                self.symbols.define(arm.binding_name, binding, False, expr.location)
            if isinstance(arm.body, ExprStmt):
                arm_type = self.check_expr(arm.body.expression)
                if result is None and arm_type.kind is not TypeKind.VOID:
                    result = arm_type
            else:
                self._check_stmt(arm.body)
            if binding is not None:
                self.symbols.pop_scope()

        if isinstance(subject, EnumType):
            covered = {arm.case_name for arm in expr.arms}
            missing = [case for case in subject.cases if case not in covered]
            if missing:
                self._error(
                    "E3023",
                    f"Non-exhaustive match: missing case(s) {', '.join(missing)} "
                    f"for enum '{subject.name}'",
                    expr.location,
                )

        return result if result is not None else VOID

    def _check_lambda(self, expr: LambdaExpr) -> Type:
        expected = self._expected_lambda_params
        func = FunctionType()
        self.symbols.push_scope()

        for i, param in enumerate(expr.params):
            if param.type is not None:
                param_type = self.resolve_type_annotation(param.type)
            elif expected is not None and i < len(expected):
                param_type = expected[i]
            else:
                param_type = UNKNOWN
            func.param_types.append(param_type)
            self.symbols.define(param.name, param_type, False, expr.location)

        if expr.body_expr is not None:
            func.return_type = self.check_expr(expr.body_expr)
        elif expr.body_block is not None:
            saved = self.current_return_type
            self.current_return_type = UNKNOWN
            self._check_block(expr.body_block)
            inferred = self.current_return_type
            self.current_return_type = saved
            if inferred is None or inferred.kind is TypeKind.UNKNOWN:
                inferred = VOID
            func.return_type = inferred
        else:
            func.return_type = VOID

        self.symbols.pop_scope()
        return func

    def _check_array_literal(self, expr: ArrayLiteralExpr) -> Type:
        if not expr.elements:
            return make_array_type(UNKNOWN)
        first, *rest = expr.elements
        elem_type = self.check_expr(first)
        for element in rest:
            t = self.check_expr(element)
            if not elem_type.equals(t) and elem_type.kind is not TypeKind.UNKNOWN:
                self._error(
                    "E3025",
                    f"Array element type mismatch: expected '{elem_type}', got '{t}'",
                    element.location,
                )
        return make_array_type(elem_type)

    def _check_index(self, expr: IndexExpr) -> Type:
        obj = self.check_expr(expr.object)
        index = self.check_expr(expr.index)
        if obj.kind is TypeKind.UNKNOWN:
            return UNKNOWN

        if isinstance(obj, ArrayType) or obj.kind is TypeKind.STRING:
            if index.kind not in (TypeKind.INT, TypeKind.UNKNOWN):
                what = "Array" if isinstance(obj, ArrayType) else "String"
                self._error(
                    "E3026",
                    f"{what} index must be Int, got '{index}'",
                    expr.index.location,
                )
            return obj.element_type if isinstance(obj, ArrayType) else CHAR

        self._error("E3027", f"Type '{obj}' does not support indexing", expr.location)
        return UNKNOWN

    def _check_if_expr(self, expr: IfExpr) -> Type:
        cond = self.check_expr(expr.condition)
        if cond.kind is not TypeKind.BOOL:
            self._error(
                "E3010",
                f"If expression condition must be Bool, got '{cond}'",
                expr.location,
            )
        then_type = self.check_expr(expr.then_expr)
        self.check_expr(expr.else_expr)
        return then_type

    def _check_await(self, expr: AwaitExpr) -> Type:
        if not self.in_async_function:
            self._error(
                "E3031",
                "'await' can only be used inside an async function",
                expr.location,
            )
        operand = self.check_expr(expr.operand)
        if isinstance(operand, FutureType):
            return operand.inner_type
        return operand
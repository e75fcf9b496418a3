# chrislang

Semantic analysis for the Chris programming language: a type model, nested
lexical scopes and a static type checker. The checker walks a program tree
and reports problems as coded diagnostics (errors such as `E3003`, warnings
such as `W3041`).

## Installation

```
pip install .
```

## Modules

- `chrislang.types`: the type model: `TypeKind`, `PrimitiveType`,
  `NullableType`, `FunctionType`, `ClassType` (with `ClassField`,
  `ClassMethod` and `AccessLevel`), `InterfaceType`, `EnumType`,
  `ArrayType`, `MapType`, `SetType`, `FutureType`, `TypeInfoType`,
  `TypeParameterType` and `GenericInstantiation`. Built-in primitives are
  module constants (`INT`, `FLOAT`, `STRING`, `BOOL`, ...). Constructors
  such as `make_function_type`, `make_nullable` and `make_array_type` build
  compound types; `resolve_type_name` maps a built-in name to its type,
  `is_assignable` decides assignment compatibility and
  `substitute_type_params` replaces generic parameters with concrete types.
- `chrislang.symbols`: `Symbol`, `Scope` and `SymbolTable`. A table starts
  with a global scope; `push_scope` and `pop_scope` nest scopes (the global
  scope is never popped), `define` returns `False` when a name is already
  bound in the current scope, `lookup` searches outward and `lookup_local`
  only the current scope.
- `chrislang.diagnostics`: `SourceLocation`, `Severity`, `Diagnostic` and
  `DiagnosticEngine`. The engine records diagnostics in report order through
  `error` and `warning`; `has_errors()` and `codes()` summarise them, and the
  engine can be iterated and measured with `len()`.
- `chrislang.nodes`: the program tree the checker works on: `Program`,
  declarations (`FuncDecl`, `ExternFuncDecl`, `VarDecl`, `ClassDecl`,
  `InterfaceDecl`, `EnumDecl`, `ImportDecl`), statements (`IfStmt`,
  `WhileStmt`, `ForStmt`, `ReturnStmt`, `TryCatchStmt`, `UnsafeBlock`, ...)
  and expressions (`CallExpr`, `MemberExpr`, `LambdaExpr`, `MatchExpr`,
  `AwaitExpr`, ...). Written types are `NamedType` nodes.
- `chrislang.builtins`: `builtin_function_type(name)` gives the signature of
  a built-in function (`print` aside, e.g. `sqrt`, `readFile`, `jsonParse`,
  `Map`, `typeof`) or `None`; `member_type(obj_type, member)` gives the type
  of a member of an enum or a built-in type (string, array, map, set, numeric
  conversions) or `None`.
- `chrislang.expressions`: `ExpressionChecker`, which infers expression types
  with `check_expr` and checks statements inside bodies.
- `chrislang.checker`: `TypeChecker`, the whole-program checker.

## Usage

```python
from chrislang.diagnostics import DiagnosticEngine
from chrislang.checker import TypeChecker
from chrislang.nodes import Program, VarDecl, IntLiteralExpr, NamedType

program = Program(declarations=[
    VarDecl(
        name="x",
        is_mutable=True,
        type_annotation=NamedType(name="String"),
        initializer=IntLiteralExpr(value=42),
    ),
])

diagnostics = DiagnosticEngine()
TypeChecker(diagnostics).check(program)

print(diagnostics.has_errors())   # True
print(diagnostics.codes())        # ['E3003']
```

`TypeChecker.check` works in three passes: it registers class, interface and
enum names so forward references resolve, then records function signatures
and class and interface members, and finally checks every declaration:
annotations, parameters, return types, `async`/`await` use, member access
levels, interface conformance and exhaustive `match` over enums. Generic
classes are instantiated when a type such as `Box<Int>` is resolved; the
`generic_instantiations` property lists each instantiation in order of first
use.

## What this package does not do

It has no lexer or parser: programs are given to the checker as trees built
from `chrislang.nodes`. It does not generate code, run programs, format
source or resolve imports, and it provides no command-line tool.

## Running the tests

```
pip install ".[test]"
pytest
```
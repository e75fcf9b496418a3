from chrislang.diagnostics import SourceLocation
from chrislang.nodes import (
    AccessModifier,
    AsyncKind,
    BinaryExpr,
    Block,
    ClassDecl,
    FieldDecl,
    FuncDecl,
    IdentifierExpr,
    IntLiteralExpr,
    MatchArm,
    NamedType,
    Program,
    ReturnStmt,
    StringInterpolationExpr,
    VarDecl,
)


def test_func_decl_defaults():
    func = FuncDecl("main", body=Block())
    assert func.parameters == []
    assert func.return_type is None
    assert func.is_async is False
    assert func.async_kind is AsyncKind.NONE
    assert func.access is AccessModifier.PRIVATE
    assert func.body.statements == []


def test_default_access_is_private_for_fields():
    assert FieldDecl("x", NamedType("Int")).access is AccessModifier.PRIVATE


def test_mutable_defaults_not_shared():
    a = ClassDecl("A")
    b = ClassDecl("B")
    a.interfaces.append("Printable")
    assert b.interfaces == []
    assert a.interfaces == ["Printable"]


def test_location_is_keyword_and_defaulted():
    loc = SourceLocation("test.chr", 4, 2)
    lit = IntLiteralExpr(42, location=loc)
    assert lit.value == 42
    assert lit.location == loc
    assert IntLiteralExpr(1).location == SourceLocation()


def test_named_type_nullable_flag():
    t = NamedType("Int", nullable=True)
    assert t.name == "Int"
    assert t.nullable is True
    assert t.type_args == []


def test_program_holds_declarations_in_order():
    decl = VarDecl("x", initializer=IntLiteralExpr(42))
    ret = ReturnStmt()
    program = Program([decl, ret])
    assert program.declarations[0] is decl
    assert program.declarations[1].value is None
    assert decl.is_mutable is True


def test_binary_expr_fields():
    expr = BinaryExpr(IntLiteralExpr(1), "+", IdentifierExpr("n"))
    assert expr.op == "+"
    assert expr.left.value == 1
    assert expr.right.name == "n"


def test_nodes_compare_by_identity():
    a = IdentifierExpr("x")
    b = IdentifierExpr("x")
    assert a != b
    assert len({a, b}) == 2


def test_interpolation_parts():
    interp = StringInterpolationExpr(["hello ", "!"], [IdentifierExpr("name")])
    assert interp.parts == ["hello ", "!"]
    assert len(interp.parts) == len(interp.expressions) + 1


def test_match_arm_binding_default_empty():
    arm = MatchArm("Dir", "Up")
    assert arm.binding_name == ""
    assert arm.body is None
    assert arm.case_name == "Up"
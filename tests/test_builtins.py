import pytest

from chrislang.builtins import builtin_function_type, member_type
from chrislang.types import (
    BOOL,
    CHAR,
    FLOAT,
    FLOAT32,
    INT,
    INT8,
    STRING,
    UINT32,
    UNKNOWN,
    VOID,
    ClassType,
    EnumType,
    TypeKind,
    make_array_type,
    make_function_type,
    make_map_type,
    make_set_type,
    type_info_type,
)


@pytest.mark.parametrize(
    "name, params, ret",
    [
        ("exec", [STRING], INT),
        ("writeFile", [STRING, STRING], BOOL),
        ("abs", [INT], INT),
        ("pow", [FLOAT, FLOAT], FLOAT),
        ("readLine", [], STRING),
        ("udpSendTo", [INT, STRING, INT, STRING], INT),
        ("tcpClose", [INT], VOID),
        ("atomicCompareSwap", [INT, INT, INT], BOOL),
        ("httpPost", [STRING, STRING, STRING], STRING),
        ("jsonGetFloat", [INT, STRING], FLOAT),
        ("assertEqual", [UNKNOWN, UNKNOWN, STRING], VOID),
        ("ConcurrentMap", [], INT),
    ],
)
def test_builtin_signatures(name, params, ret):
    result = builtin_function_type(name)
    assert result.equals(make_function_type(params, ret))


def test_map_and_set_constructors():
    assert builtin_function_type("Map").equals(
        make_function_type([], make_map_type(STRING, INT))
    )
    assert builtin_function_type("Set").equals(make_function_type([], make_set_type(STRING)))


def test_typeof_returns_type_info():
    result = builtin_function_type("typeof")
    assert result.equals(make_function_type([UNKNOWN], type_info_type()))
    assert result.return_type.kind is TypeKind.TYPE_INFO


def test_unknown_builtin_is_none():
    assert builtin_function_type("print") is None
    assert builtin_function_type("notABuiltin") is None


def test_builtin_types_are_fresh_objects():
    first = builtin_function_type("abs")
    second = builtin_function_type("abs")
    assert first is not second
    assert first.equals(second)


def test_enum_simple_and_associated_cases():
    shape = EnumType(name="Shape", cases=["Circle", "Square"], associated_types={"Circle": FLOAT})
    assert member_type(shape, "Square") is shape
    assert member_type(shape, "Circle").equals(make_function_type([FLOAT], shape))
    assert member_type(shape, "Triangle") is None


def test_array_members():
    arr = make_array_type(INT)
    assert member_type(arr, "length") is INT
    assert member_type(arr, "push").equals(make_function_type([INT], VOID))
    assert member_type(arr, "pop").equals(make_function_type([], INT))
    assert member_type(arr, "reverse").equals(make_function_type([], arr))
    assert member_type(arr, "join").equals(make_function_type([STRING], STRING))
    assert member_type(arr, "map").equals(
        make_function_type([make_function_type([INT], INT)], arr)
    )
    assert member_type(arr, "filter").equals(
        make_function_type([make_function_type([INT], BOOL)], arr)
    )
    assert member_type(arr, "forEach").equals(
        make_function_type([make_function_type([INT], VOID)], VOID)
    )
    assert member_type(arr, "size") is None


def test_type_info_members():
    info = type_info_type()
    assert member_type(info, "name") is STRING
    assert member_type(info, "fields").equals(make_array_type(STRING))
    assert member_type(info, "implements").equals(make_array_type(STRING))
    assert member_type(info, "other") is None


def test_int_conversions():
    assert member_type(INT, "toString").equals(make_function_type([], STRING))
    assert member_type(INT, "toChar").equals(make_function_type([], CHAR))
    assert member_type(INT, "toInt") is None


@pytest.mark.parametrize("sized", [INT8, UINT32])
def test_sized_int_conversions(sized):
    assert member_type(sized, "toInt").equals(make_function_type([], INT))
    assert member_type(sized, "toFloat").equals(make_function_type([], FLOAT))
    assert member_type(sized, "toChar") is None


def test_float_and_char_and_bool_conversions():
    assert member_type(FLOAT, "toInt").equals(make_function_type([], INT))
    assert member_type(FLOAT, "toFloat") is None
    assert member_type(FLOAT32, "toFloat").equals(make_function_type([], FLOAT))
    assert member_type(CHAR, "toInt").equals(make_function_type([], INT))
    assert member_type(BOOL, "toString").equals(make_function_type([], STRING))
    assert member_type(BOOL, "toInt") is None


def test_string_members():
    assert member_type(STRING, "length") is INT
    assert member_type(STRING, "substring").equals(make_function_type([INT, INT], STRING))
    assert member_type(STRING, "split").equals(
        make_function_type([STRING], make_array_type(STRING))
    )
    assert member_type(STRING, "contains").equals(make_function_type([STRING], BOOL))
    assert member_type(STRING, "toString") is None


def test_set_members():
    s = make_set_type(INT)
    assert member_type(s, "add").equals(make_function_type([INT], VOID))
    assert member_type(s, "has").equals(make_function_type([INT], BOOL))
    assert member_type(s, "size") is INT
    assert member_type(s, "values").equals(make_function_type([], make_array_type(INT)))
    assert member_type(s, "keys") is None


def test_map_members():
    m = make_map_type(STRING, FLOAT)
    assert member_type(m, "set").equals(make_function_type([STRING, FLOAT], VOID))
    assert member_type(m, "get").equals(make_function_type([STRING], FLOAT))
    assert member_type(m, "delete").equals(make_function_type([STRING], BOOL))
    assert member_type(m, "size") is INT
    assert member_type(m, "keys").equals(make_function_type([], make_array_type(STRING)))
    assert member_type(m, "values") is None


def test_class_members_are_not_builtin():
    assert member_type(ClassType(name="Point"), "length") is None
    assert member_type(VOID, "toString") is None
    assert member_type(UNKNOWN, "length") is None
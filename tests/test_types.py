import pytest

from chrislang.types import (
    BOOL,
    CHAR,
    FLOAT,
    FLOAT32,
    INT,
    INT8,
    INT32,
    NIL,
    STRING,
    UINT16,
    UNKNOWN,
    VOID,
    AccessLevel,
    ClassField,
    ClassMethod,
    ClassType,
    EnumType,
    InterfaceType,
    PrimitiveType,
    TypeKind,
    TypeParameterType,
    is_assignable,
    make_array_type,
    make_class_type,
    make_function_type,
    make_future_type,
    make_map_type,
    make_nullable,
    make_set_type,
    make_type_parameter,
    resolve_type_name,
    substitute_type_params,
    type_info_type,
)


@pytest.mark.parametrize(
    "name",
    ["Int", "Int8", "Int16", "Int32", "UInt", "UInt8", "UInt16", "UInt32",
     "Float", "Float32", "Bool", "String", "Char", "Void"],
)
def test_resolve_type_name_round_trips_through_str(name):
    resolved = resolve_type_name(name)
    assert str(resolved) == name


def test_resolve_unknown_name_gives_none():
    assert resolve_type_name("Widget") is None


def test_primitive_display_names():
    assert str(PrimitiveType(TypeKind.NIL)) == "nil"
    assert str(PrimitiveType(TypeKind.UNKNOWN)) == "<unknown>"
    assert str(make_nullable(NIL)) == "nil?"
    assert str(make_array_type(UNKNOWN)) == "[<unknown>]"


def test_composite_display_names():
    assert str(make_nullable(INT)) == "Int?"
    assert str(make_function_type([INT, STRING], BOOL)) == "(Int, String) -> Bool"
    assert str(make_array_type(STRING)) == "[String]"
    assert str(make_future_type(INT)) == "Future<Int>"
    assert str(make_map_type(STRING, INT)) == "Map<String, Int>"
    assert str(make_set_type(STRING)) == "Set<String>"
    assert str(type_info_type()) == "TypeInfo"


def test_numeric_kinds():
    for t in (INT, INT8, INT32, UINT16, FLOAT, FLOAT32):
        assert t.is_numeric()
    for t in (BOOL, STRING, CHAR, VOID, make_nullable(INT)):
        assert not t.is_numeric()


def test_nullable_flag():
    assert make_nullable(INT).is_nullable()
    assert not INT.is_nullable()


def test_primitive_equality_by_kind():
    assert PrimitiveType(TypeKind.INT).equals(INT)
    assert not INT.equals(FLOAT)


def test_function_type_equality():
    a = make_function_type([INT], STRING)
    assert a.equals(make_function_type([INT], STRING))
    assert not a.equals(make_function_type([INT, INT], STRING))
    assert not a.equals(make_function_type([INT], BOOL))
    assert not a.equals(INT)


def test_container_equality():
    assert make_array_type(INT).equals(make_array_type(INT))
    assert not make_array_type(INT).equals(make_array_type(STRING))
    assert make_map_type(STRING, INT).equals(make_map_type(STRING, INT))
    assert not make_map_type(STRING, INT).equals(make_map_type(INT, INT))
    assert make_set_type(INT).equals(make_set_type(INT))
    assert not make_set_type(INT).equals(make_array_type(INT))
    assert make_future_type(INT).equals(make_future_type(INT))
    assert type_info_type().equals(type_info_type())


def test_class_type_display_and_equality_with_type_args():
    box_int = ClassType(name="Box", type_params=["T"], type_args=[INT])
    assert str(box_int) == "Box<Int>"
    assert box_int.equals(ClassType(name="Box", type_args=[INT]))
    assert not box_int.equals(ClassType(name="Box", type_args=[STRING]))
    assert not box_int.equals(make_class_type("Box"))


def test_generic_template_and_instance():
    template = ClassType(name="Box", type_params=["T"])
    instance = ClassType(name="Box", type_params=["T"], type_args=[INT])
    assert template.is_generic_template()
    assert not template.is_generic_instance()
    assert instance.is_generic_instance()
    assert not instance.is_generic_template()


def _animal_and_dog():
    animal = ClassType(
        name="Animal",
        fields=[ClassField("name", STRING, True, AccessLevel.PUBLIC)],
        methods=[ClassMethod("speak", make_function_type([], STRING))],
        interface_names=["Printable"],
    )
    dog = ClassType(
        name="Dog",
        parent=animal,
        fields=[ClassField("breed", STRING)],
    )
    return animal, dog


def test_member_lookup_walks_parent_chain():
    animal, dog = _animal_and_dog()
    assert dog.field_type("breed") is STRING
    assert dog.field_type("name") is STRING
    assert dog.method_type("speak") is animal.methods[0].type
    assert dog.field_type("wings") is None
    assert animal.method_type("fetch") is None


def test_is_subclass_of():
    animal, dog = _animal_and_dog()
    assert dog.is_subclass_of("Dog")
    assert dog.is_subclass_of("Animal")
    assert not animal.is_subclass_of("Dog")


def test_field_default_access_is_private():
    assert ClassField("x", INT).access is AccessLevel.PRIVATE


def test_enum_cases():
    color = EnumType(name="Color", cases=["Red", "Green", "Blue"],
                     associated_types={"Red": INT, "Green": None})
    assert color.case_index("Red") == 0
    assert color.case_index("Blue") == 2
    assert color.case_index("Purple") == -1
    assert color.has_associated_value("Red")
    assert not color.has_associated_value("Green")
    assert not color.has_associated_value("Blue")
    assert color.equals(EnumType(name="Color"))
    assert not color.equals(EnumType(name="Shade"))


def test_interface_equality_and_kind():
    iface = InterfaceType(name="Printable")
    assert iface.kind is TypeKind.CLASS
    assert iface.equals(InterfaceType(name="Printable"))
    assert not iface.equals(make_class_type("Printable"))


def test_type_parameter():
    t = make_type_parameter("T")
    assert str(t) == "T"
    assert t.equals(TypeParameterType("T"))
    assert not t.equals(make_type_parameter("U"))


def test_substitute_plain_parameter():
    t = make_type_parameter("T")
    assert substitute_type_params(t, ["T"], [INT]) is INT
    assert substitute_type_params(t, ["U"], [INT]) is t


def test_substitute_leaves_unchanged_types_identical():
    func = make_function_type([INT], STRING)
    assert substitute_type_params(func, ["T"], [BOOL]) is func
    nullable = make_nullable(INT)
    assert substitute_type_params(nullable, ["T"], [BOOL]) is nullable
    assert substitute_type_params(None, ["T"], [BOOL]) is None


def test_substitute_inside_function_and_nullable():
    t = make_type_parameter("T")
    func = make_function_type([t, INT], make_nullable(t))
    result = substitute_type_params(func, ["T"], [STRING])
    assert result.equals(make_function_type([STRING, INT], make_nullable(STRING)))
    assert func.param_types[0] is t


def test_substitute_nested_generic_class():
    t = make_type_parameter("T")
    inner = ClassType(name="Box", type_params=["T"], type_args=[t],
                      fields=[ClassField("value", t)])
    result = substitute_type_params(inner, ["T"], [INT])
    assert result is not inner
    assert result.equals(ClassType(name="Box", type_args=[INT]))
    assert result.fields == inner.fields


def test_assignable_wildcards():
    assert is_assignable(UNKNOWN, STRING)
    assert is_assignable(INT, UNKNOWN)
    assert is_assignable(make_type_parameter("T"), BOOL)
    assert not is_assignable(None, INT)


def test_assignable_nullable():
    assert is_assignable(make_nullable(INT), NIL)
    assert is_assignable(make_nullable(INT), INT)
    assert not is_assignable(make_nullable(INT), STRING)
    assert not is_assignable(INT, NIL)


def test_assignable_numeric_promotions():
    assert is_assignable(FLOAT, INT)
    assert is_assignable(INT8, INT)
    assert is_assignable(UINT16, INT)
    assert is_assignable(FLOAT32, FLOAT)
    assert is_assignable(INT, INT32)
    assert not is_assignable(INT, FLOAT)
    assert not is_assignable(INT8, INT32)
    assert not is_assignable(STRING, INT)


def test_assignable_subclass_and_interface():
    animal, dog = _animal_and_dog()
    assert is_assignable(animal, dog)
    assert not is_assignable(dog, animal)
    assert is_assignable(InterfaceType(name="Printable"), dog)
    assert not is_assignable(InterfaceType(name="Comparable"), dog)
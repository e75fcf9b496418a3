"""Types of built-in functions and of the members of built-in types."""

from __future__ import annotations

from typing import Optional, Sequence, Union

from chrislang.types import (
    BOOL,
    CHAR,
    FLOAT,
    FLOAT32,
    INT,
    STRING,
    UNKNOWN,
    VOID,
    ArrayType,
    EnumType,
    MapType,
    SetType,
    Type,
    TypeKind,
    make_array_type,
    make_function_type,
    make_map_type,
    make_set_type,
    type_info_type,
)

_Signature = tuple[Sequence[Type], Type]

_BUILTIN_SIGNATURES: dict[str, _Signature] = {
    # Processes
    "exec": ((STRING,), INT),
    "execOutput": ((STRING,), STRING),
    # File I/O
    "readFile": ((STRING,), STRING),
    "writeFile": ((STRING, STRING), BOOL),
    "appendFile": ((STRING, STRING), BOOL),
    "fileExists": ((STRING,), BOOL),
    # Integer math
    "abs": ((INT,), INT),
    "min": ((INT, INT), INT),
    "max": ((INT, INT), INT),
    "random": ((INT, INT), INT),
    # Floating-point math
    "sqrt": ((FLOAT,), FLOAT),
    "pow": ((FLOAT, FLOAT), FLOAT),
    "floor": ((FLOAT,), FLOAT),
    "ceil": ((FLOAT,), FLOAT),
    "round": ((FLOAT,), FLOAT),
    "log": ((FLOAT,), FLOAT),
    "sin": ((FLOAT,), FLOAT),
    "cos": ((FLOAT,), FLOAT),
    "tan": ((FLOAT,), FLOAT),
    "fabs": ((FLOAT,), FLOAT),
    "fmin": ((FLOAT, FLOAT), FLOAT),
    "fmax": ((FLOAT, FLOAT), FLOAT),
    # Standard input
    "readLine": ((), STRING),
    # TCP
    "tcpConnect": ((STRING, INT), INT),
    "tcpListen": ((INT,), INT),
    "tcpAccept": ((INT,), INT),
    "tcpSend": ((INT, STRING), INT),
    "tcpRecv": ((INT, INT), STRING),
    "tcpClose": ((INT,), VOID),
    # UDP
    "udpCreate": ((), INT),
    "udpBind": ((INT, INT), INT),
    "udpSendTo": ((INT, STRING, INT, STRING), INT),
    "udpRecvFrom": ((INT, INT), STRING),
    "udpClose": ((INT,), VOID),
    # DNS
    "dnsLookup": ((STRING,), STRING),
    # Concurrent map (opaque Int handle)
    "ConcurrentMap": ((), INT),
    "cmapSet": ((INT, STRING, INT), VOID),
    "cmapGet": ((INT, STRING), INT),
    "cmapHas": ((INT, STRING), BOOL),
    "cmapDelete": ((INT, STRING), BOOL),
    "cmapSize": ((INT,), INT),
    "cmapDestroy": ((INT,), VOID),
    # Concurrent queue (opaque Int handle)
    "ConcurrentQueue": ((), INT),
    "cqueueEnqueue": ((INT, INT), VOID),
    "cqueueDequeue": ((INT,), INT),
    "cqueueSize": ((INT,), INT),
    "cqueueIsEmpty": ((INT,), BOOL),
    "cqueueDestroy": ((INT,), VOID),
    # Atomics (opaque Int handle)
    "atomicCreate": ((INT,), INT),
    "atomicLoad": ((INT,), INT),
    "atomicStore": ((INT, INT), VOID),
    "atomicAdd": ((INT, INT), INT),
    "atomicSub": ((INT, INT), INT),
    "atomicCompareSwap": ((INT, INT, INT), BOOL),
    "atomicDestroy": ((INT,), VOID),
    # HTTP client
    "httpGet": ((STRING,), STRING),
    "httpPost": ((STRING, STRING, STRING), STRING),
    # HTTP server
    "httpServerCreate": ((INT,), INT),
    "httpServerAccept": ((INT,), INT),
    "httpRequestMethod": ((INT,), STRING),
    "httpRequestPath": ((INT,), STRING),
    "httpRequestBody": ((INT,), STRING),
    "httpRespond": ((INT, INT, STRING), VOID),
    "httpServerClose": ((INT,), VOID),
    # JSON (opaque Int handle)
    "jsonParse": ((STRING,), INT),
    "jsonGet": ((INT, STRING), STRING),
    "jsonGetInt": ((INT, STRING), INT),
    "jsonGetBool": ((INT, STRING), BOOL),
    "jsonGetFloat": ((INT, STRING), FLOAT),
    "jsonGetArray": ((INT, STRING), INT),
    "jsonGetObject": ((INT, STRING), INT),
    "jsonArrayLength": ((INT,), INT),
    "jsonArrayGet": ((INT, INT), INT),
    "jsonStringify": ((INT,), STRING),
    # Test assertions
    "assert": ((BOOL, STRING), VOID),
    "assertEqual": ((UNKNOWN, UNKNOWN, STRING), VOID),
    "assertTrue": ((BOOL, STRING), VOID),
    "assertFalse": ((BOOL, STRING), VOID),
}


def builtin_function_type(name: str) -> Optional[Type]:
    """The function type of the built-in called ``name``, or None if there is none."""
    if name == "Map":
        return make_function_type([], make_map_type(STRING, INT))
    if name == "Set":
        return make_function_type([], make_set_type(STRING))
    if name == "typeof":
        return make_function_type([UNKNOWN], type_info_type())
    signature = _BUILTIN_SIGNATURES.get(name)
    if signature is None:
        return None
    params, ret = signature
    return make_function_type(params, ret)


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

_SIZED_INT_METHODS: dict[str, _Signature] = {
    "toString": ((), STRING),
    "toInt": ((), INT),
    "toFloat": ((), FLOAT),
}

_PRIMITIVE_METHODS: dict[TypeKind, dict[str, _Signature]] = {
    TypeKind.INT: {
        "toString": ((), STRING),
        "toFloat": ((), FLOAT),
        "toChar": ((), CHAR),
    },
    TypeKind.CHAR: {
        "toString": ((), STRING),
        "toInt": ((), INT),
    },
    TypeKind.FLOAT: {
        "toString": ((), STRING),
        "toInt": ((), INT),
    },
    TypeKind.FLOAT32: {
        "toString": ((), STRING),
        "toInt": ((), INT),
        "toFloat": ((), FLOAT),
    },
    TypeKind.BOOL: {
        "toString": ((), STRING),
    },
    TypeKind.STRING: {
        "toInt": ((), INT),
        "toFloat": ((), FLOAT),
        "contains": ((STRING,), BOOL),
        "startsWith": ((STRING,), BOOL),
        "endsWith": ((STRING,), BOOL),
        "indexOf": ((STRING,), INT),
        "substring": ((INT, INT), STRING),
        "replace": ((STRING, STRING), STRING),
        "trim": ((), STRING),
        "toUpper": ((), STRING),
        "toLower": ((), STRING),
        "split": ((STRING,), make_array_type(STRING)),
        "charAt": ((INT,), STRING),
    },
}
_PRIMITIVE_METHODS.update({kind: _SIZED_INT_METHODS for kind in _SIZED_INT_KINDS})


def _enum_member(enum_type: EnumType, member: str) -> Optional[Type]:
    if enum_type.case_index(member) < 0:
        return None
    if enum_type.has_associated_value(member):
        return make_function_type([enum_type.associated_types[member]], enum_type)
    return enum_type


def _array_member(array_type: ArrayType, member: str) -> Optional[Type]:
    elem = array_type.element_type
    members: dict[str, Union[Type, _Signature]] = {
        "length": INT,
        "push": ((elem,), VOID),
        "pop": ((), elem),
        "reverse": ((), array_type),
        "join": ((STRING,), STRING),
        "map": ((make_function_type([elem], elem),), array_type),
        "filter": ((make_function_type([elem], BOOL),), array_type),
        "forEach": ((make_function_type([elem], VOID),), VOID),
    }
    return _resolve(members.get(member))


def _set_member(set_type: SetType, member: str) -> Optional[Type]:
    elem = set_type.element_type
    members: dict[str, Union[Type, _Signature]] = {
        "add": ((elem,), VOID),
        "has": ((elem,), BOOL),
        "remove": ((elem,), BOOL),
        "size": INT,
        "values": ((), make_array_type(elem)),
        "clear": ((), VOID),
    }
    return _resolve(members.get(member))


def _map_member(map_type: MapType, member: str) -> Optional[Type]:
    key, value = map_type.key_type, map_type.value_type
    members: dict[str, Union[Type, _Signature]] = {
        "set": ((key, value), VOID),
        "get": ((key,), value),
        "has": ((key,), BOOL),
        "delete": ((key,), BOOL),
        "size": INT,
        "keys": ((), make_array_type(key)),
    }
    return _resolve(members.get(member))


def _type_info_member(member: str) -> Optional[Type]:
    if member == "name":
        return STRING
    if member in ("fields", "implements"):
        return make_array_type(STRING)
    return None


def _resolve(entry: Union[Type, _Signature, None]) -> Optional[Type]:
    if entry is None or isinstance(entry, Type):
        return entry
    params, ret = entry
    return make_function_type(params, ret)


def member_type(obj_type: Type, member: str) -> Optional[Type]:
    """Type of ``obj.member`` for enums and built-in types, or None if not built in.

    Class members are not resolved here.
    """
    if isinstance(obj_type, EnumType):
        result = _enum_member(obj_type, member)
        if result is not None:
            return result
    if isinstance(obj_type, ArrayType):
        return _array_member(obj_type, member)
    if obj_type.kind is TypeKind.TYPE_INFO:
        return _type_info_member(member)
    if isinstance(obj_type, SetType):
        return _set_member(obj_type, member)
    if isinstance(obj_type, MapType):
        return _map_member(obj_type, member)
    if obj_type.kind is TypeKind.STRING and member == "length":
        return INT
    methods = _PRIMITIVE_METHODS.get(obj_type.kind)
    if methods is not None:
        return _resolve(methods.get(member))
    return None
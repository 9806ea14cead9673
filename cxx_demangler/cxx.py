"""
Module implementing C++ name and type abstractions.

Every node is immutable and is created by exactly one parse step.
"""

from dataclasses import dataclass
from typing import Optional, Union

from cxx_demangler.strenum import StrEnum

CONST_SUFFIX = " const"
VOLATILE_SUFFIX = " volatile"


class DemangleError(ValueError):
    """
    Raised when a mangled symbol could not be demangled.
    """


class CxxBuiltin(StrEnum):
    VOID = "void"
    BOOL = "bool"
    CHAR = "char"
    SIGNED_CHAR = "signed char"
    UNSIGNED_CHAR = "unsigned char"
    WIDE_CHAR = "wchar_t"
    SHORT = "short"
    UNSIGNED_SHORT = "unsigned short"
    INT = "int"
    UNSIGNED_INT = "unsigned int"
    LONG = "long"
    UNSIGNED_LONG = "unsigned long"
    LONG_LONG = "long long"
    UNSIGNED_LONG_LONG = "unsigned long long"
    INT128 = "__int128"
    UNSIGNED_INT128 = "unsigned __int128"
    FLOAT = "float"
    DOUBLE = "double"
    LONG_DOUBLE = "long double"
    FLOAT128 = "__float128"
    ELLIPSIS = "..."
    NULLPTR = "decltype(nullptr)"
    CHAR8 = "char8_t"
    CHAR16 = "char16_t"
    CHAR32 = "char32_t"

    def is_void(self) -> bool:
        return self == CxxBuiltin.VOID


class CxxRefQualifier(StrEnum):
    POINTER = "*"
    LVALUE_REFERENCE = "&"
    RVALUE_REFERENCE = "&&"

    def is_pointer(self) -> bool:
        return self == CxxRefQualifier.POINTER

    def is_reference(self) -> bool:
        return self in [CxxRefQualifier.LVALUE_REFERENCE, CxxRefQualifier.RVALUE_REFERENCE]


@dataclass(frozen=True)
class CxxName:
    """
    Represents a single name segment, such as a namespace, class or function name.
    """

    name: str
    is_const: bool = False

    def __str__(self) -> str:
        const_str = CONST_SUFFIX if self.is_const else ""
        return f"{self.name}{const_str}"


@dataclass(frozen=True)
class CxxScopedName:
    """
    Represents a name qualified by its enclosing scopes. The first element of
    `names` is the outermost scope, while the last element is the base name.
    """

    names: tuple[CxxName, ...]
    is_const: bool = False

    def __post_init__(self):
        assert self.names, "Scoped names must have at least one name part!"

    def __str__(self) -> str:
        const_str = CONST_SUFFIX if self.is_const else ""
        return "::".join(str(n) for n in self.names) + const_str


@dataclass(frozen=True)
class CxxBuiltinType:
    """
    Represents a fundamental type such as `int` or `void`.
    """

    builtin: CxxBuiltin
    is_const: bool = False
    is_volatile: bool = False

    def __str__(self) -> str:
        return format_type(self)


@dataclass(frozen=True)
class CxxRawType:
    """
    Represents a type referred to by name, such as a class or typedef.
    """

    name: Union[CxxName, CxxScopedName]
    is_const: bool = False
    is_volatile: bool = False

    def __str__(self) -> str:
        return format_type(self)


@dataclass(frozen=True)
class CxxQualifiedType:
    """
    Represents a pointer or reference to another type.

    The CV qualifiers apply to the pointer or reference itself, not to the
    referenced type:
        `PKc` => "char const*"  (pointer to const char)
        `KPc` => "char* const"  (const pointer to char)
    """

    qualifier: CxxRefQualifier
    referent: "CxxType"
    is_const: bool = False
    is_volatile: bool = False

    def __post_init__(self):
        """
        Reject declarators which are ill-formed in C++.
        """
        inner = self.referent
        if isinstance(inner, CxxQualifiedType) and inner.qualifier.is_reference():
            assert not self.qualifier.is_pointer(), "C++ forbids pointer to reference"
            assert not self.qualifier.is_reference(), "C++ forbids reference to reference"

    def is_reference(self) -> bool:
        return self.qualifier.is_reference()

    def __str__(self) -> str:
        return format_type(self)


CxxType = Union[CxxBuiltinType, CxxRawType, CxxQualifiedType]


def format_type(typ: CxxType) -> str:
    """
    Format a type the way c++filt does, working from the innermost type outward.
    """
    if isinstance(typ, CxxBuiltinType):
        result = str(typ.builtin)
    elif isinstance(typ, CxxRawType):
        result = str(typ.name)
    elif isinstance(typ, CxxQualifiedType):
        result = f"{format_type(typ.referent)}{typ.qualifier}"
    else:
        raise AssertionError(f"Unknown type node {typ!r}")

    if typ.is_volatile:
        result += VOLATILE_SUFFIX
    if typ.is_const:
        result += CONST_SUFFIX

    return result


@dataclass(frozen=True)
class CxxFunction:
    """
    Represents the parameter list of a function.
    """

    params: tuple[CxxType, ...]

    def is_void(self) -> bool:
        """
        Determine if this is the explicit `(void)` parameter list.
        """
        if len(self.params) != 1:
            return False
        param = self.params[0]
        return isinstance(param, CxxBuiltinType) and param.builtin.is_void()

    def __str__(self) -> str:
        if self.is_void():
            return f"({CxxBuiltin.VOID})"
        return "(" + ", ".join(str(p) for p in self.params) + ")"


@dataclass(frozen=True)
class CxxSymbol:
    """
    Represents a (possibly) demangled symbol.

    A symbol which is not mangled, or which failed to parse, formats as the
    original `mangled` string. In the latter case `error` describes the failure.
    """

    mangled: str
    name: Optional[Union[CxxName, CxxScopedName]] = None
    function: Optional[CxxFunction] = None
    is_const: bool = False
    vendor_suffix: str = ""
    error: str = ""

    def __post_init__(self):
        if self.error:
            assert self.name is None, "Symbols which failed to parse cannot have a name!"
        if self.function is not None:
            assert self.name is not None, "Functions must have a name!"

    def is_demangled(self) -> bool:
        return self.name is not None

    def is_function(self) -> bool:
        return self.function is not None

    def check(self) -> "CxxSymbol":
        """
        Raise a `DemangleError` if this symbol failed to parse.
        """
        if self.error:
            raise DemangleError(f"Unable to demangle {self.mangled!r}: {self.error}")
        return self

    def __str__(self) -> str:
        """
        Format this symbol as a declaration. Const qualification of a function
        always trails its parameter list: `name(args) const`.
        """
        if self.name is None:
            return self.mangled

        result = str(self.name)
        if self.is_const:
            result += CONST_SUFFIX

        if self.function is None:
            return result

        # Both the symbol and its nested name may be const; print it once.
        is_const = False
        while result.endswith(CONST_SUFFIX):
            result = result[: -len(CONST_SUFFIX)]
            is_const = True

        const_str = CONST_SUFFIX if is_const else ""
        return f"{result}{self.function}{const_str}"

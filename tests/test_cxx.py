"""
Tests for C++ node formatting.
"""

import pytest

from cxx_demangler.cxx import (
    CxxBuiltin,
    CxxBuiltinType,
    CxxFunction,
    CxxName,
    CxxQualifiedType,
    CxxRawType,
    CxxRefQualifier,
    CxxScopedName,
    CxxSymbol,
    DemangleError,
)
from cxx_demangler.token import Token, match_abbreviation, match_builtin, match_prefix


def test_format_names():
    assert str(CxxName("foo")) == "foo"
    assert str(CxxName("foo", is_const=True)) == "foo const"
    assert str(CxxScopedName((CxxName("a"), CxxName("b")))) == "a::b"
    assert str(CxxScopedName((CxxName("a"),), is_const=True)) == "a const"


def test_format_types():
    char = CxxBuiltinType(CxxBuiltin.CHAR)
    const_char = CxxBuiltinType(CxxBuiltin.CHAR, is_const=True)
    assert str(const_char) == "char const"
    assert str(CxxBuiltinType(CxxBuiltin.INT, is_const=True, is_volatile=True)) == (
        "int volatile const"
    )
    assert str(CxxQualifiedType(CxxRefQualifier.POINTER, const_char)) == "char const*"
    assert str(CxxQualifiedType(CxxRefQualifier.POINTER, char, is_const=True)) == "char* const"

    baz = CxxRawType(CxxName("baz"), is_const=True)
    assert str(CxxQualifiedType(CxxRefQualifier.LVALUE_REFERENCE, baz)) == "baz const&"
    assert str(CxxQualifiedType(CxxRefQualifier.RVALUE_REFERENCE, baz)) == "baz const&&"


def test_illegal_declarators():
    ref = CxxQualifiedType(CxxRefQualifier.LVALUE_REFERENCE, CxxBuiltinType(CxxBuiltin.INT))
    with pytest.raises(AssertionError):
        CxxQualifiedType(CxxRefQualifier.POINTER, ref)
    with pytest.raises(AssertionError):
        CxxQualifiedType(CxxRefQualifier.RVALUE_REFERENCE, ref)


def test_format_function():
    void = CxxFunction((CxxBuiltinType(CxxBuiltin.VOID),))
    assert void.is_void()
    assert str(void) == "(void)"

    two = CxxFunction((CxxBuiltinType(CxxBuiltin.INT), CxxRawType(CxxName("baz"))))
    assert not two.is_void()
    assert str(two) == "(int, baz)"


def test_format_symbol():
    name = CxxScopedName((CxxName("a"), CxxName("foo")), is_const=True)
    function = CxxFunction((CxxBuiltinType(CxxBuiltin.INT),))
    assert str(CxxSymbol("_ZNK1a3fooEi", name=name, function=function)) == "a::foo(int) const"
    assert str(CxxSymbol("_ZNK1a3fooE", name=name)) == "a::foo const"
    assert str(CxxSymbol("foo")) == "foo"


def test_symbol_check():
    sym = CxxSymbol("_Z2f", error="Name too short")
    with pytest.raises(DemangleError, match="Name too short"):
        sym.check()

    ok = CxxSymbol("_Z1f", name=CxxName("f"))
    assert ok.check() is ok


def test_tokens():
    assert Token.peek("N1aE").kind == Token.Kind.NESTED
    assert Token.peek("N1aE", 1).is_digit()
    assert Token.peek("N1aE", 3).kind == Token.Kind.END
    assert Token.peek("N1aE", 4).is_end_of_input()
    assert Token.peek("#").kind == Token.Kind.UNKNOWN
    assert Token.peek("P").get_ref_qualifier() == CxxRefQualifier.POINTER
    assert Token.peek("St").opens_scope()


def test_code_tables():
    assert match_builtin("i") == (CxxBuiltin.INT, 1)
    assert match_builtin("Dn") == (CxxBuiltin.NULLPTR, 2)
    assert match_builtin("Dp") is None
    assert match_builtin("_Z1fv", 4) == (CxxBuiltin.VOID, 1)
    assert match_abbreviation("St") == ("std",)
    assert match_abbreviation("S_") is None
    assert match_abbreviation("S") is None
    assert match_prefix("_Z1f") == "_Z"
    assert match_prefix("__Z1f") == "__Z"
    assert match_prefix("f") is None

"""
Module implementing variant types for Itanium mangling codes and prefixes.

These variants are mostly used to improve the readability of the parser.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional

from cxx_demangler.cxx import CxxBuiltin, CxxRefQualifier
from cxx_demangler.io_util import is_ascii_digit, peek, startswith_at
from cxx_demangler.strenum import StrEnum

# Accepted mangling markers. `__Z` is emitted by toolchains which prepend an
# extra underscore to every C symbol (Mach-O).
MANGLING_PREFIXES: tuple[str, ...] = ("_Z", "__Z")


@dataclass(frozen=True)
class Token:
    """
    Variant type for single-character structural codes.
    """

    class Kind(StrEnum):
        # Abnormal codes
        UNKNOWN = "unknown"
        DIGIT = "digit"
        END_OF_INPUT = "end"

        # Scoping
        NESTED = "N"
        END = "E"
        SUBSTITUTION = "S"
        LINKAGE = "L"
        # CV qualifiers
        CONST = "K"
        VOLATILE = "V"
        # Ref qualifiers
        POINTER = "P"
        LVALUE_REFERENCE = "R"
        RVALUE_REFERENCE = "O"
        # Vendor suffix
        VENDOR_SEPARATOR = "."

    _REF_MAP: ClassVar[dict[Kind, CxxRefQualifier]] = {
        Kind.POINTER: CxxRefQualifier.POINTER,
        Kind.LVALUE_REFERENCE: CxxRefQualifier.LVALUE_REFERENCE,
        Kind.RVALUE_REFERENCE: CxxRefQualifier.RVALUE_REFERENCE,
    }

    kind: Kind
    content: str

    def is_ref_quali(self) -> bool:
        """
        Determine if this is a pointer or reference code.
        """
        return self.kind in self._REF_MAP

    def is_digit(self) -> bool:
        return self.kind == Token.Kind.DIGIT

    def is_end_of_input(self) -> bool:
        return self.kind == Token.Kind.END_OF_INPUT

    def opens_scope(self) -> bool:
        """
        Determine if a scoped name starts at this code.
        """
        return self.kind in [Token.Kind.NESTED, Token.Kind.SUBSTITUTION]

    def get_ref_qualifier(self) -> CxxRefQualifier:
        """
        Map this pointer or reference code to its declarator.
        """
        assert self.is_ref_quali(), f"{self.kind.name} is not a pointer or reference code!"
        return self._REF_MAP[self.kind]

    @staticmethod
    def from_char(char: str) -> "Token":
        """
        Create a token from a single character.
        """
        if not char:
            return Token(kind=Token.Kind.END_OF_INPUT, content="")
        if is_ascii_digit(char):
            return Token(kind=Token.Kind.DIGIT, content=char)

        try:
            kind = Token.Kind(char)
        except ValueError:
            kind = Token.Kind.UNKNOWN

        return Token(kind=kind, content=char)

    @staticmethod
    def peek(src: str, offset: int = 0) -> "Token":
        """
        Read the token at `offset` without consuming anything.
        """
        return Token.from_char(peek(src, offset))


# Built-in type codes. Codes are disjoint, so no longest-match is needed.
BUILTIN_CODES: dict[str, CxxBuiltin] = {
    "v": CxxBuiltin.VOID,
    "b": CxxBuiltin.BOOL,
    "c": CxxBuiltin.CHAR,
    "a": CxxBuiltin.SIGNED_CHAR,
    "h": CxxBuiltin.UNSIGNED_CHAR,
    "w": CxxBuiltin.WIDE_CHAR,
    "s": CxxBuiltin.SHORT,
    "t": CxxBuiltin.UNSIGNED_SHORT,
    "i": CxxBuiltin.INT,
    "j": CxxBuiltin.UNSIGNED_INT,
    "l": CxxBuiltin.LONG,
    "m": CxxBuiltin.UNSIGNED_LONG,
    "x": CxxBuiltin.LONG_LONG,
    "y": CxxBuiltin.UNSIGNED_LONG_LONG,
    "n": CxxBuiltin.INT128,
    "o": CxxBuiltin.UNSIGNED_INT128,
    "f": CxxBuiltin.FLOAT,
    "d": CxxBuiltin.DOUBLE,
    "e": CxxBuiltin.LONG_DOUBLE,
    "g": CxxBuiltin.FLOAT128,
    "z": CxxBuiltin.ELLIPSIS,
    "Dn": CxxBuiltin.NULLPTR,
    "Ds": CxxBuiltin.CHAR16,
    "Di": CxxBuiltin.CHAR32,
    "Du": CxxBuiltin.CHAR8,
}

# Standard library abbreviations. Each expands to one or more name segments.
ABBREVIATIONS: dict[str, tuple[str, ...]] = {
    "St": ("std",),
    "Sa": ("std", "allocator"),
    "Sb": ("std", "basic_string"),
    "Ss": ("std", "basic_string<char,std::char_traits<char>,std::allocator<char>>"),
    "Si": ("std::basic_istream<char,std::char_traits<char>>",),
    "So": ("std::basic_ostream<char,std::char_traits<char>>",),
    "Sd": ("std::basic_iostream<char,std::char_traits<char>>",),
}


def match_builtin(src: str, offset: int = 0) -> Optional[tuple[CxxBuiltin, int]]:
    """
    Match a built-in type code at `offset`.
    Returns the built-in type and the length of its code, or `None`.
    """
    for code, builtin in BUILTIN_CODES.items():
        if startswith_at(src, offset, code):
            return (builtin, len(code))
    return None


def match_abbreviation(src: str, offset: int = 0) -> Optional[tuple[str, ...]]:
    """
    Match a two-character standard library abbreviation at `offset`.
    Returns the segments it expands to, or `None`.
    """
    return ABBREVIATIONS.get(peek(src, offset, n=2))


def match_prefix(src: str) -> Optional[str]:
    """
    Return the mangling marker `src` starts with, if any.
    """
    for prefix in MANGLING_PREFIXES:
        if src.startswith(prefix):
            return prefix
    return None

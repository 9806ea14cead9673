"""
Python package which implements a demangler for Itanium C++ ABI symbols.
"""

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
    CxxType,
    DemangleError,
)
from cxx_demangler.demangler import demangle, is_mangled, parse

__all__ = [
    "parse",
    "demangle",
    "is_mangled",
    "DemangleError",
    "CxxBuiltin",
    "CxxBuiltinType",
    "CxxFunction",
    "CxxName",
    "CxxQualifiedType",
    "CxxRawType",
    "CxxRefQualifier",
    "CxxScopedName",
    "CxxSymbol",
    "CxxType",
]

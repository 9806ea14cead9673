"""
Demangler for Itanium C++ ABI symbols.

Only a subset of the grammar is supported: plain and nested names, a fixed set
of standard library abbreviations, built-in types, named types, CV qualifiers,
pointers and references, and vendor suffixes. Templates, substitutions,
arrays, function types and operator names are not supported; symbols which
use them are returned unchanged by `demangle`.

Each `_parse_*` function reads from a given offset and returns a `ParseResult`.
None of them raise for malformed input.
"""

import logging
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

from cxx_demangler.cxx import (
    CxxBuiltinType,
    CxxFunction,
    CxxName,
    CxxQualifiedType,
    CxxRawType,
    CxxScopedName,
    CxxSymbol,
    CxxType,
)
from cxx_demangler.io_util import bytes_left, read_decimal, read_exact
from cxx_demangler.token import Token, match_abbreviation, match_builtin, match_prefix

logger = logging.getLogger(__name__)

# Maximum number of nested pointer/reference declarators in a single type.
MAX_NESTING = 256

# Codes which may follow the last parameter of a function.
TERMINATOR_ALLOWLIST = [Token.Kind.VENDOR_SEPARATOR]

T = TypeVar("T")


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """
    Outcome of a single parse step.

    - `value` set and `consumed > 0`: the step succeeded.
    - `value` unset, `consumed == 0` and no `error`: nothing to parse here.
    - `error` set: the input is malformed. Nothing is consumed.
    """

    value: Optional[T] = None
    consumed: int = 0
    error: str = ""

    @staticmethod
    def ok(value: T, consumed: int) -> "ParseResult[T]":
        return ParseResult(value=value, consumed=consumed)

    @staticmethod
    def fail(error: str) -> "ParseResult":
        return ParseResult(error=error)

    @staticmethod
    def empty() -> "ParseResult":
        return ParseResult()

    def failed(self) -> bool:
        return bool(self.error)


def _parse_unscoped_name(src: str, offset: int) -> ParseResult[CxxName]:
    """
    Parse a name formatted as `[L][n][name]`, where `n` is the length of `name`.
    A leading `L` marks the name as const.
    """
    pos = offset
    is_const = False
    if Token.peek(src, pos).kind == Token.Kind.LINKAGE:
        is_const = True
        pos += 1

    if not Token.peek(src, pos).is_digit():
        return ParseResult.empty()
    length, digits = read_decimal(src, pos)
    pos += digits

    name = read_exact(src, pos, length)
    if length == 0 or name is None:
        return ParseResult.fail(f"Name too short: expected {length} chars at offset {pos}")
    pos += length

    return ParseResult.ok(CxxName(name=name, is_const=is_const), pos - offset)


def _parse_scoped_name(src: str, offset: int) -> ParseResult[CxxScopedName]:
    """
    Parse a name which is either explicitly scoped (`N...E`) or implicitly scoped
    by a standard library abbreviation (`St...`).

    Examples:
    N1a3barE        (a::bar)
    NK1S3fooE       (S::foo const)
    St3bar          (std::bar)
    """
    pos = offset
    explicit = Token.peek(src, pos).kind == Token.Kind.NESTED
    if explicit:
        pos += 1

    # Nested name qualifiers.
    is_const = False
    while True:
        token = Token.peek(src, pos)
        if token.kind not in [Token.Kind.CONST, Token.Kind.LINKAGE]:
            break
        if not explicit:
            return ParseResult.fail("Const not allowed for implicitly scoped names")
        # c++filt does not print `L` as const here.
        if token.kind == Token.Kind.CONST:
            is_const = True
        pos += 1

    names: list[CxxName] = []
    while not Token.peek(src, pos).is_end_of_input():
        abbreviation = match_abbreviation(src, pos)
        if abbreviation is not None:
            names.extend(CxxName(name=n) for n in abbreviation)
            pos += 2
            continue

        # Any name part which can't be read ends the scope.
        part = _parse_unscoped_name(src, pos)
        if part.failed() or part.consumed == 0:
            if not explicit and Token.peek(src, pos).kind == Token.Kind.END:
                # `std::` names are not terminated by `E`.
                return ParseResult.fail("Tried to terminate implicit scoping")
            break

        names.append(part.value)
        pos += part.consumed

    if explicit:
        if Token.peek(src, pos).kind != Token.Kind.END:
            return ParseResult.fail("Scoping not terminated")
        pos += 1

    if not names:
        return ParseResult.fail("Scoped name has no parts")

    return ParseResult.ok(CxxScopedName(names=tuple(names), is_const=is_const), pos - offset)


def _parse_name(src: str, offset: int) -> ParseResult[Union[CxxName, CxxScopedName]]:
    """
    Parse either a scoped or an unscoped name, depending on the code at `offset`.
    """
    if Token.peek(src, offset).opens_scope():
        return _parse_scoped_name(src, offset)
    return _parse_unscoped_name(src, offset)


def _parse_type(src: str, offset: int, depth: int = 0) -> ParseResult[CxxType]:
    """
    Parse a single (possibly qualified) type, formatted as
    `[K][V]<P|R|O><type>` or `[K][V]<builtin|name>`.

    Pointers to references and references to references are rejected, as in C++.
    """
    pos = offset
    is_const = False
    is_volatile = False
    if Token.peek(src, pos).kind == Token.Kind.CONST:
        is_const = True
        pos += 1
    if Token.peek(src, pos).kind == Token.Kind.VOLATILE:
        is_volatile = True
        pos += 1

    token = Token.peek(src, pos)
    if token.is_ref_quali():
        if depth >= MAX_NESTING:
            return ParseResult.fail(f"Type nesting deeper than {MAX_NESTING} levels")
        qualifier = token.get_ref_qualifier()
        pos += 1

        referent = _parse_type(src, pos, depth=depth + 1)
        if referent.failed():
            return referent
        if referent.consumed == 0:
            return ParseResult.fail(f"Failed to find the type `{qualifier}` refers to")

        inner = referent.value
        if isinstance(inner, CxxQualifiedType) and inner.is_reference():
            if qualifier.is_pointer():
                return ParseResult.fail("C++ forbids pointer to reference")
            return ParseResult.fail("C++ forbids reference to reference")
        pos += referent.consumed

        typ = CxxQualifiedType(
            qualifier=qualifier, referent=inner, is_const=is_const, is_volatile=is_volatile
        )
        return ParseResult.ok(typ, pos - offset)

    builtin = match_builtin(src, pos)
    if builtin is not None:
        kind, length = builtin
        pos += length
        typ = CxxBuiltinType(builtin=kind, is_const=is_const, is_volatile=is_volatile)
        return ParseResult.ok(typ, pos - offset)

    raw_name = _parse_name(src, pos)
    if raw_name.failed():
        return raw_name
    if raw_name.consumed == 0:
        if Token.peek(src, pos).kind in TERMINATOR_ALLOWLIST:
            # Not a type, but the caller knows what to do with it.
            return ParseResult.empty()
        return ParseResult.fail(f"Couldn't parse type '{src[offset:]}'")
    pos += raw_name.consumed

    typ = CxxRawType(name=raw_name.value, is_const=is_const, is_volatile=is_volatile)
    return ParseResult.ok(typ, pos - offset)


def _parse_function(src: str, offset: int) -> ParseResult[CxxFunction]:
    """
    Parse the parameter types of a function until no more types can be read.
    """
    if bytes_left(src, offset) == 0:
        return ParseResult.fail("Function has no arguments")

    params: list[CxxType] = []
    pos = offset
    while bytes_left(src, pos) > 0:
        param = _parse_type(src, pos)
        if param.failed():
            return ParseResult.fail(param.error)
        if param.consumed == 0:
            break
        params.append(param.value)
        pos += param.consumed

    return ParseResult(value=CxxFunction(params=tuple(params)), consumed=pos - offset)


def _failed(symbol: str, error: str) -> CxxSymbol:
    logger.debug("Failed to demangle %r: %s", symbol, error)
    return CxxSymbol(mangled=symbol, error=error)


def is_mangled(symbol: str) -> bool:
    """
    Determine if `symbol` looks like an Itanium mangled name.
    This does not check that the rest of the symbol is valid.
    """
    return match_prefix(symbol) is not None


def parse(symbol: str) -> CxxSymbol:
    """
    Parse a mangled symbol.

    The returned symbol formats as the demangled declaration. If `symbol` is not
    mangled, or could not be parsed, it formats as `symbol` itself, and its
    `error` attribute explains the failure.
    """
    prefix = match_prefix(symbol)
    if prefix is None:
        return CxxSymbol(mangled=symbol)
    pos = len(prefix)

    # Const member function or variable.
    is_const = False
    if Token.peek(symbol, pos).kind == Token.Kind.CONST:
        is_const = True
        pos += 1

    name = _parse_name(symbol, pos)
    if name.failed():
        return _failed(symbol, name.error)
    if name.consumed == 0:
        return _failed(symbol, "Failed to read name")
    pos += name.consumed

    function: Optional[CxxFunction] = None
    if bytes_left(symbol, pos) > 0:
        result = _parse_function(symbol, pos)
        if result.failed():
            return _failed(symbol, result.error)
        # Nothing consumed means this is a variable.
        if result.consumed > 0:
            function = result.value
            pos += result.consumed

    # Everything after the separator is opaque.
    vendor_suffix = ""
    if Token.peek(symbol, pos).kind == Token.Kind.VENDOR_SEPARATOR:
        vendor_suffix = symbol[pos + 1 :]
        pos = len(symbol)

    if pos != len(symbol):
        return _failed(symbol, f"Incomplete parse: '{symbol[pos:]}'")

    return CxxSymbol(
        mangled=symbol,
        name=name.value,
        function=function,
        is_const=is_const,
        vendor_suffix=vendor_suffix,
    )


def demangle(symbol: str) -> str:
    """
    Demangle `symbol`, or return it unchanged if it can't be demangled.
    """
    return str(parse(symbol))

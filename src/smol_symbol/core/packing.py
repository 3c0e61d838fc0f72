"""Fixed-width byte packing and msgpack serialization for symbols.

A packed symbol is always 16 bytes, big-endian, so byte order and
symbol order agree (useful for sorted key-value stores).

msgpack values carry symbols as ext type 42:
    [1 byte name length][alphabet name, ascii][16 data bytes]
"""
from __future__ import annotations

from typing import Any, Mapping

import msgpack

from .alphabet import BUILTIN_ALPHABETS, DEFAULT_ALPHABET, SYMBOL_BITS, Alphabet
from .errors import AlphabetMismatchError
from .symbol import Symbol

SYMBOL_BYTES = SYMBOL_BITS // 8
SYMBOL_EXT_CODE = 42


def to_bytes(symbol: Symbol) -> bytes:
    """Pack a symbol into exactly 16 big-endian bytes."""
    return symbol.data.to_bytes(SYMBOL_BYTES, "big")


def from_bytes(data: bytes, alphabet: Alphabet = DEFAULT_ALPHABET) -> Symbol:
    """Unpack 16 big-endian bytes into a symbol of the given alphabet."""
    if len(data) != SYMBOL_BYTES:
        raise ValueError(f"Packed symbol must be {SYMBOL_BYTES} bytes, got {len(data)}")
    return Symbol.from_raw(int.from_bytes(data, "big"), alphabet)


def _ext_default(obj: Any, alphabets: Mapping[str, Alphabet] | None = None) -> msgpack.ExtType:
    if isinstance(obj, Symbol):
        if alphabets is not None and alphabets.get(obj.alphabet.name) != obj.alphabet:
            raise AlphabetMismatchError(
                f"Symbol alphabet {obj.alphabet.name!r} would not unpack to the same alphabet")
        builtin = BUILTIN_ALPHABETS.get(obj.alphabet.name)
        if builtin is not None and builtin != obj.alphabet:
            raise AlphabetMismatchError(
                f"Alphabet {obj.alphabet.name!r} shadows a builtin and cannot be packed")
        name = obj.alphabet.name.encode("ascii")
        if len(name) > 255:
            raise ValueError(f"Alphabet name too long to pack: {obj.alphabet.name!r}")
        return msgpack.ExtType(SYMBOL_EXT_CODE, bytes([len(name)]) + name + to_bytes(obj))
    raise TypeError(f"Cannot serialize {type(obj).__name__!r}")


def _make_ext_hook(alphabets: Mapping[str, Alphabet]):
    def ext_hook(code: int, data: bytes):
        if code != SYMBOL_EXT_CODE:
            return msgpack.ExtType(code, data)
        n = data[0]
        name = data[1:1 + n].decode("ascii")
        alphabet = alphabets.get(name)
        if alphabet is None:
            raise AlphabetMismatchError(f"Packed symbol uses unknown alphabet {name!r}")
        return from_bytes(data[1 + n:], alphabet)
    return ext_hook


def packb(obj: Any, alphabets: Mapping[str, Alphabet] | None = None) -> bytes:
    """msgpack-encode obj, packing any Symbols it contains as ext values.

    With alphabets, every symbol must use a builtin or one of those
    alphabets, so that unpackb(data, alphabets) restores it exactly.
    """
    if alphabets is None:
        return msgpack.packb(obj, default=_ext_default, use_bin_type=True)
    known = _known_alphabets(alphabets)
    return msgpack.packb(obj, default=lambda o: _ext_default(o, known), use_bin_type=True)


def _known_alphabets(alphabets: Mapping[str, Alphabet] | None) -> dict[str, Alphabet]:
    known = dict(BUILTIN_ALPHABETS)
    for name, alphabet in (alphabets or {}).items():
        builtin = BUILTIN_ALPHABETS.get(name)
        if builtin is not None and builtin != alphabet:
            raise AlphabetMismatchError(f"Alphabet {name!r} conflicts with the builtin of that name")
        known[name] = alphabet
    return known


def unpackb(data: bytes, alphabets: Mapping[str, Alphabet] | None = None) -> Any:
    """Inverse of packb(). Symbols resolve against builtins plus `alphabets`."""
    known = _known_alphabets(alphabets)
    return msgpack.unpackb(data, ext_hook=_make_ext_hook(known), raw=False)

"""Alphabets for 128-bit symbols.

An alphabet is a fixed ordered set of N characters. Character i (0-based)
encodes as digit i + 1 in radix N + 1; digit 0 is never assigned to a
character and marks "no more digits" in the bijective numeral system.

    default        a-z _            N=27  RADIX=28  MAX_LEN=25
    alphanumeric   a-z A-Z 0-9      N=62  RADIX=63  MAX_LEN=21
    identifier     a-z A-Z 0-9 _    N=63  RADIX=64  MAX_LEN=21
"""
from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .errors import AlphabetDefinitionError, SymbolParsingError

# Width of the backing integer for every symbol
SYMBOL_BITS = 128
SYMBOL_MAX = (1 << SYMBOL_BITS) - 1


def ceil_log2(value: int) -> int:
    """Smallest k with 2**k >= value, for value >= 1."""
    if value < 1:
        raise ValueError(f"ceil_log2 requires a positive value, got {value}")
    return (value - 1).bit_length()


def max_symbol_len(alphabet_len: int) -> int:
    """Longest symbol guaranteed to fit in 128 bits for an alphabet of this size.

    Each character costs ceil(log2(N + 1)) bits in the worst case, so
    floor(128 / ceil(log2(N + 1))) characters can never overflow.
    """
    if alphabet_len < 1:
        raise ValueError(f"Alphabet must have at least 1 character, got {alphabet_len}")
    return SYMBOL_BITS // ceil_log2(alphabet_len + 1)


@dataclass(frozen=True, slots=True)
class Alphabet:
    """
    Immutable ordered character set that parameterizes the symbol codec.

    Two alphabets are the same tag only if both name and characters match.
    Strict alphabets (the default) reject duplicate characters; a
    non-strict alphabet keeps them and inverts to the first occurrence.
    """
    name: str
    chars: tuple[str, ...]
    strict: bool = field(default=True, compare=False)
    _index: dict[str, int] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        chars = tuple(self.chars)
        object.__setattr__(self, "chars", chars)

        if not isinstance(self.name, str) or not self.name.isidentifier():
            raise AlphabetDefinitionError(
                f"Alphabet name must be an identifier, got {self.name!r}")
        if not chars:
            raise AlphabetDefinitionError(f"Alphabet {self.name!r} has no characters")
        for c in chars:
            if not isinstance(c, str) or len(c) != 1:
                raise AlphabetDefinitionError(
                    f"Alphabet {self.name!r} entries must be single characters, got {c!r}")

        # First occurrence wins for duplicates
        index: dict[str, int] = {}
        for i, c in enumerate(chars, start=1):
            if c in index:
                if self.strict:
                    raise AlphabetDefinitionError(
                        f"Alphabet {self.name!r} repeats character {c!r}")
                continue
            index[c] = i
        object.__setattr__(self, "_index", index)

    @property
    def size(self) -> int:
        """Number of characters N (LEN)."""
        return len(self.chars)

    @property
    def radix(self) -> int:
        """N + 1; digit 0 is reserved (RADIX)."""
        return len(self.chars) + 1

    @property
    def max_len(self) -> int:
        """Longest symbol that fits in 128 bits (MAX_LEN)."""
        return max_symbol_len(len(self.chars))

    @property
    def bits_per_char(self) -> int:
        return ceil_log2(self.radix)

    def invert_char(self, c: str) -> int:
        """Return the 1-based position of c, or raise SymbolParsingError."""
        i = self._index.get(c)
        if i is None:
            raise SymbolParsingError(
                f"Character {c!r} is not in alphabet {self.name!r}")
        return i

    def char_at(self, digit: int) -> str:
        """Return the character for a digit in [1, N]."""
        if not 1 <= digit <= len(self.chars):
            raise ValueError(
                f"Digit must be 1-{len(self.chars)} for alphabet {self.name!r}, got {digit}")
        return self.chars[digit - 1]

    def __contains__(self, c: object) -> bool:
        return c in self._index

    def __len__(self) -> int:
        return len(self.chars)

    def __iter__(self) -> Iterator[str]:
        return iter(self.chars)

    def __str__(self) -> str:
        return "".join(self.chars)


def custom_alphabet(name: str, chars: Iterable[str], strict: bool = True) -> Alphabet:
    """Declare an alphabet from an ordered run of characters.

    >>> custom_alphabet("hex", "0123456789abcdef").max_len
    25

    Builtin names are reserved: symbols are serialized with their alphabet
    name, so a second "default" with other characters would decode wrongly.
    """
    alphabet = Alphabet(name=name, chars=tuple(chars), strict=strict)
    builtin = BUILTIN_ALPHABETS.get(name)
    if builtin is not None and builtin != alphabet:
        raise AlphabetDefinitionError(f"Alphabet name {name!r} is reserved for a builtin")
    return alphabet


DEFAULT_ALPHABET = Alphabet("default", string.ascii_lowercase + "_")
ALPHANUMERIC_ALPHABET = Alphabet(
    "alphanumeric", string.ascii_lowercase + string.ascii_uppercase + string.digits)
IDENTIFIER_ALPHABET = Alphabet(
    "identifier", string.ascii_lowercase + string.ascii_uppercase + string.digits + "_")

BUILTIN_ALPHABETS = {
    a.name: a for a in (DEFAULT_ALPHABET, ALPHANUMERIC_ALPHABET, IDENTIFIER_ALPHABET)
}


def get_alphabet(name: str, extra: dict[str, Alphabet] | None = None) -> Alphabet:
    """Look up an alphabet by name among the builtins and any extra declarations."""
    if extra and name in extra:
        return extra[name]
    try:
        return BUILTIN_ALPHABETS[name]
    except KeyError:
        known = sorted(set(BUILTIN_ALPHABETS) | set(extra or ()))
        raise ValueError(f"Unknown alphabet {name!r}; known: {', '.join(known)}") from None

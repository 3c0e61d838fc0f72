"""Symbol: an immutable 128-bit integer tagged with the alphabet that produced it."""
from __future__ import annotations

from dataclasses import dataclass
from types import NotImplementedType

from .alphabet import DEFAULT_ALPHABET, SYMBOL_MAX, Alphabet
from .codec import decode, encode
from .errors import AlphabetMismatchError


@dataclass(frozen=True, slots=True, repr=False)
class Symbol:
    """
    Human-readable identifier stored as a single integer.

    Equality and hashing cover both the integer and the alphabet, so
    symbols from different alphabets are never equal. Ordering follows
    the integer and refuses to compare across alphabets.

    Create with Symbol.parse("hello") for validated text, or
    Symbol.from_raw(value) for a value already known to be valid.
    """
    data: int
    alphabet: Alphabet = DEFAULT_ALPHABET

    def __post_init__(self) -> None:
        if not isinstance(self.data, int) or isinstance(self.data, bool):
            raise TypeError(f"Symbol data must be an int, got {type(self.data).__name__}")
        if not 0 <= self.data <= SYMBOL_MAX:
            raise ValueError(f"Symbol data must fit in 128 unsigned bits, got {self.data}")
        if not isinstance(self.alphabet, Alphabet):
            raise TypeError(
                f"Symbol alphabet must be an Alphabet, got {type(self.alphabet).__name__}")

    @classmethod
    def from_raw(cls, data: int, alphabet: Alphabet = DEFAULT_ALPHABET) -> Symbol:
        """Wrap a raw value without checking it decodes."""
        return cls(data, alphabet)

    @classmethod
    def parse(cls, text: str, alphabet: Alphabet = DEFAULT_ALPHABET) -> Symbol:
        """Encode text, raising SymbolParsingError if it is not a valid symbol."""
        return cls(encode(text, alphabet), alphabet)

    def to_string(self) -> str:
        return decode(self.data, self.alphabet)

    def __str__(self) -> str:
        return decode(self.data, self.alphabet)

    def __int__(self) -> int:
        return self.data

    def __repr__(self) -> str:
        try:
            text = decode(self.data, self.alphabet)
        except ValueError:
            return f"Symbol(data={self.data}, alphabet={self.alphabet.name!r})"
        return f"Symbol(data={self.data}, symbol={text!r}, alphabet={self.alphabet.name!r})"

    def _other_data(self, other: object) -> int | NotImplementedType:
        if not isinstance(other, Symbol):
            return NotImplemented
        if other.alphabet != self.alphabet:
            raise AlphabetMismatchError(
                f"Cannot compare symbols of alphabet {self.alphabet.name!r} "
                f"and {other.alphabet.name!r}")
        return other.data

    def __lt__(self, other: object) -> bool:
        data = self._other_data(other)
        if data is NotImplemented:
            return NotImplemented
        return self.data < data

    def __le__(self, other: object) -> bool:
        data = self._other_data(other)
        if data is NotImplemented:
            return NotImplemented
        return self.data <= data

    def __gt__(self, other: object) -> bool:
        data = self._other_data(other)
        if data is NotImplemented:
            return NotImplemented
        return self.data > data

    def __ge__(self, other: object) -> bool:
        data = self._other_data(other)
        if data is NotImplemented:
            return NotImplemented
        return self.data >= data


def s(text: str, alphabet: Alphabet = DEFAULT_ALPHABET) -> Symbol:
    """Shorthand for Symbol.parse(text, alphabet)."""
    return Symbol.parse(text, alphabet)
